from dataclasses import asdict
from pathlib import Path

import pytest

from rivetdb.storage.base import S3Credentials, StorageManager


class _DictStorage(StorageManager):
    def __init__(self):
        self.items = {}

    def cache_url(self, connection_id, schema, table):
        return f"mem://cache/{connection_id}/{schema}/{table}"

    def state_url(self, connection_id, schema, table):
        return f"mem://state/{connection_id}/{schema}/{table}.json"

    def cache_prefix(self, connection_id):
        return f"mem://cache/{connection_id}"

    def state_prefix(self, connection_id):
        return f"mem://state/{connection_id}"

    def read(self, url):
        return self.items[url]

    def write(self, url, data):
        self.items[url] = bytes(data)

    def delete(self, url):
        self.items.pop(url, None)

    def delete_prefix(self, prefix):
        for key in [k for k in self.items if k.startswith(prefix)]:
            del self.items[key]

    def exists(self, url):
        return url in self.items

    def prepare_cache_write(self, connection_id, schema, table):
        return Path(table + ".parquet")

    def finalize_cache_write(self, written_path, connection_id, schema, table):
        return self.cache_url(connection_id, schema, table)


def test_storage_manager_is_abstract():
    with pytest.raises(TypeError):
        StorageManager()


def test_default_credentials_are_none():
    storage = _DictStorage()
    assert StorageManager.get_s3_credentials(storage) is None


def test_credentials_fields():
    creds = S3Credentials(
        aws_access_key_id="placeholder",
        aws_secret_access_key="secret",
        endpoint_url="http://localhost:9000",
    )
    assert asdict(creds) == {
        "aws_access_key_id": "placeholder",
        "aws_secret_access_key": "secret",
        "endpoint_url": "http://localhost:9000",
    }


def test_credentials_equality_and_immutability():
    a = S3Credentials("placeholder", "secret", "http://localhost:9000")
    b = S3Credentials("placeholder", "secret", "http://localhost:9000")
    assert a == b
    with pytest.raises(AttributeError):
        a.endpoint_url = "http://localhost:9001"