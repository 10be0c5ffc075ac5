"""Storage backend on an S3-compatible object store."""

from __future__ import annotations

import tempfile
import threading
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator
from urllib.parse import urlparse

from rivetdb.storage.base import S3Credentials, StorageManager


class ObjectNotFoundError(KeyError):
    """Raised when an object is absent from the store."""


def _normalize(path: str) -> str:
    return "/".join(part for part in path.split("/") if part)


class ObjectStore(ABC):
    """Minimal key/value object store addressed by slash-separated paths."""

    @abstractmethod
    def get(self, path: str) -> bytes:
        """Return the object's bytes, raising :class:`ObjectNotFoundError`."""

    @abstractmethod
    def put(self, path: str, data: bytes) -> None:
        """Store an object, replacing any existing one."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove an object; absent objects are ignored."""

    @abstractmethod
    def head(self, path: str) -> int:
        """Return the object's size, raising :class:`ObjectNotFoundError`."""

    @abstractmethod
    def list(self, prefix: str | None) -> Iterator[str]:
        """Yield paths of objects under ``prefix`` (segment-wise), or all."""


class MemoryObjectStore(ObjectStore):
    """Object store kept in memory."""

    def __init__(self) -> None:
        self._objects: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> bytes:
        key = _normalize(path)
        with self._lock:
            try:
                return self._objects[key]
            except KeyError:
                raise ObjectNotFoundError(key) from None

    def put(self, path: str, data: bytes) -> None:
        with self._lock:
            self._objects[_normalize(path)] = bytes(data)

    def delete(self, path: str) -> None:
        with self._lock:
            self._objects.pop(_normalize(path), None)

    def head(self, path: str) -> int:
        return len(self.get(path))

    def list(self, prefix: str | None = None) -> Iterator[str]:
        with self._lock:
            keys = sorted(self._objects)
        if not prefix:
            yield from keys
            return
        base = _normalize(prefix)
        for key in keys:
            if key == base or key.startswith(base + "/"):
                yield key


def _object_path(url: str) -> str:
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Invalid URL: {url}")
    return _normalize(parsed.path)


class S3Storage(StorageManager):
    """Keeps cached Parquet data and sync state in one bucket."""

    def __init__(self, bucket: str, store: ObjectStore) -> None:
        self.bucket = bucket
        self.store = store
        self._credentials: S3Credentials | None = None

    @classmethod
    def with_credentials(
        cls,
        bucket: str,
        store: ObjectStore,
        endpoint: str,
        access_key: str,
        secret_key: str,
    ) -> "S3Storage":
        """Storage on an S3-compatible endpoint whose credentials are passed on."""
        storage = cls(bucket, store)
        storage._credentials = S3Credentials(
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            endpoint_url=endpoint,
        )
        return storage

    def cache_url(self, connection_id: int, schema: str, table: str) -> str:
        return f"s3://{self.bucket}/cache/{connection_id}/{schema}/{table}"

    def state_url(self, connection_id: int, schema: str, table: str) -> str:
        return f"s3://{self.bucket}/state/{connection_id}/{schema}/{table}.json"

    def cache_prefix(self, connection_id: int) -> str:
        return f"s3://{self.bucket}/cache/{connection_id}"

    def state_prefix(self, connection_id: int) -> str:
        return f"s3://{self.bucket}/state/{connection_id}"

    def read(self, url: str) -> bytes:
        return self.store.get(_object_path(url))

    def write(self, url: str, data: bytes) -> None:
        self.store.put(_object_path(url), data)

    def delete(self, url: str) -> None:
        self.store.delete(_object_path(url))

    def delete_prefix(self, prefix: str) -> None:
        for location in list(self.store.list(_object_path(prefix))):
            self.store.delete(location)

    def exists(self, url: str) -> bool:
        path = _object_path(url)
        try:
            self.store.head(path)
        except ObjectNotFoundError:
            return False
        return True

    def get_s3_credentials(self) -> S3Credentials | None:
        return self._credentials

    def prepare_cache_write(self, connection_id: int, schema: str, table: str) -> Path:
        return Path(tempfile.gettempdir()) / f"{table}-{uuid.uuid4()}.parquet"

    def finalize_cache_write(
        self, written_path: Path, connection_id: int, schema: str, table: str
    ) -> str:
        path = Path(written_path)
        data = path.read_bytes()
        dir_url = self.cache_url(connection_id, schema, table)
        self.write(f"{dir_url}/{table}.parquet", data)
        path.unlink()
        return dir_url