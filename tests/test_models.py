import json

import pytest

from rivetdb.http.models import (
    ConnectionInfo,
    CreateConnectionRequest,
    CreateConnectionResponse,
    GetConnectionResponse,
    ListConnectionsResponse,
    QueryRequest,
    QueryResponse,
    TableInfo,
    TablesResponse,
)


def test_query_request_from_dict():
    req = QueryRequest.from_dict({"sql": "SELECT 1"})
    assert req.sql == "SELECT 1"


def test_query_request_ignores_extra_fields():
    req = QueryRequest.from_dict({"sql": "SELECT 2", "other": True})
    assert req == QueryRequest(sql="SELECT 2")


def test_query_request_missing_sql():
    with pytest.raises(ValueError, match="sql"):
        QueryRequest.from_dict({})


def test_query_request_wrong_type():
    with pytest.raises(ValueError, match="sql"):
        QueryRequest.from_dict({"sql": 5})


def test_query_request_not_an_object():
    with pytest.raises(ValueError):
        QueryRequest.from_dict(["SELECT 1"])


def test_query_response_to_dict_round_trips_through_json():
    resp = QueryResponse(
        columns=["a", "b"], rows=[[1, "x"], [None, "y"]], row_count=2, execution_time_ms=7
    )
    decoded = json.loads(json.dumps(resp.to_dict()))
    assert decoded["columns"] == resp.columns
    assert decoded["rows"] == resp.rows
    assert decoded["row_count"] == resp.row_count
    assert decoded["execution_time_ms"] == resp.execution_time_ms


def test_tables_response_nests_table_info():
    info = TableInfo(connection="c", schema="public", table="t", synced=False)
    body = TablesResponse(tables=[info]).to_dict()
    assert body["tables"] == [info.to_dict()]
    assert body["tables"][0]["last_sync"] is None
    assert body["tables"][0]["synced"] is False


def test_create_connection_request_from_dict():
    data = {"name": "pg", "source_type": "postgres", "config": {"host": "localhost"}}
    req = CreateConnectionRequest.from_dict(data)
    assert req.name == data["name"]
    assert req.source_type == data["source_type"]
    assert req.config == data["config"]


@pytest.mark.parametrize("missing", ["name", "source_type", "config"])
def test_create_connection_request_missing_fields(missing):
    data = {"name": "pg", "source_type": "postgres", "config": {}}
    del data[missing]
    with pytest.raises(ValueError, match=missing):
        CreateConnectionRequest.from_dict(data)


def test_create_connection_response_fields():
    resp = CreateConnectionResponse(name="pg", source_type="postgres", tables_discovered=3)
    assert resp.to_dict() == {
        "name": resp.name,
        "source_type": resp.source_type,
        "tables_discovered": resp.tables_discovered,
    }


def test_list_connections_response():
    conns = [ConnectionInfo(id=1, name="a", source_type="duckdb"),
             ConnectionInfo(id=2, name="b", source_type="postgres")]
    body = ListConnectionsResponse(connections=conns).to_dict()
    assert [c["name"] for c in body["connections"]] == ["a", "b"]
    assert [c["id"] for c in body["connections"]] == [1, 2]
    assert set(body["connections"][0]) == {"id", "name", "source_type"}


def test_get_connection_response_keys():
    resp = GetConnectionResponse(
        id=4, name="pg", source_type="postgres", table_count=10, synced_table_count=2
    )
    body = resp.to_dict()
    assert set(body) == {"id", "name", "source_type", "table_count", "synced_table_count"}
    assert body["synced_table_count"] <= body["table_count"]