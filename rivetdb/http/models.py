"""Request and response bodies of the HTTP API."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


def _require_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"invalid type for field `{key}`: expected a string")
    return value


@dataclass
class QueryRequest:
    """Body of POST /query."""

    sql: str

    @classmethod
    def from_dict(cls, data: Any) -> "QueryRequest":
        data = _require_mapping(data)
        return cls(sql=_require_str(data, "sql"))


@dataclass
class QueryResponse:
    """Body returned by POST /query."""

    columns: list[str]
    rows: list[list[Any]]
    row_count: int
    execution_time_ms: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": list(self.columns),
            "rows": [list(row) for row in self.rows],
            "row_count": self.row_count,
            "execution_time_ms": self.execution_time_ms,
        }


@dataclass
class TableInfo:
    """Metadata of one table."""

    connection: str
    schema: str
    table: str
    synced: bool
    last_sync: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TablesResponse:
    """Body returned by GET /tables."""

    tables: list[TableInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"tables": [table.to_dict() for table in self.tables]}


@dataclass
class CreateConnectionRequest:
    """Body of POST /connections."""

    name: str
    source_type: str
    config: Any

    @classmethod
    def from_dict(cls, data: Any) -> "CreateConnectionRequest":
        data = _require_mapping(data)
        name = _require_str(data, "name")
        source_type = _require_str(data, "source_type")
        if "config" not in data:
            raise ValueError("missing field `config`")
        return cls(name=name, source_type=source_type, config=data["config"])


@dataclass
class CreateConnectionResponse:
    """Body returned by POST /connections."""

    name: str
    source_type: str
    tables_discovered: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ConnectionInfo:
    """Metadata of one connection."""

    id: int
    name: str
    source_type: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ListConnectionsResponse:
    """Body returned by GET /connections."""

    connections: list[ConnectionInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"connections": [conn.to_dict() for conn in self.connections]}


@dataclass
class GetConnectionResponse:
    """Body returned by GET /connections/{name}."""

    id: int
    name: str
    source_type: str
    table_count: int
    synced_table_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)