"""Storage backend on the local filesystem."""

from __future__ import annotations

import shutil
from pathlib import Path

from rivetdb.storage.base import StorageManager

_FILE_SCHEME = "file://"


def _local_path(url: str) -> Path:
    if not url.startswith(_FILE_SCHEME):
        raise ValueError(f"Invalid file URL: {url}")
    return Path(url[len(_FILE_SCHEME):])


class FilesystemStorage(StorageManager):
    """Keeps cached Parquet data and sync state under two local directories."""

    def __init__(self, cache_base: str | Path, state_base: str | Path) -> None:
        self.cache_base = Path(cache_base)
        self.state_base = Path(state_base)

    def cache_url(self, connection_id: int, schema: str, table: str) -> str:
        # A directory: Parquet files for the table are written inside it.
        path = self.cache_base / str(connection_id) / schema / table
        return f"{_FILE_SCHEME}{path}"

    def state_url(self, connection_id: int, schema: str, table: str) -> str:
        path = self.state_base / str(connection_id) / schema / f"{table}.json"
        return f"{_FILE_SCHEME}{path}"

    def cache_prefix(self, connection_id: int) -> str:
        return str(self.cache_base / str(connection_id))

    def state_prefix(self, connection_id: int) -> str:
        return str(self.state_base / str(connection_id))

    def read(self, url: str) -> bytes:
        return _local_path(url).read_bytes()

    def write(self, url: str, data: bytes) -> None:
        path = _local_path(url)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def delete(self, url: str) -> None:
        path = _local_path(url)
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()

    def delete_prefix(self, prefix: str) -> None:
        path = Path(prefix)
        if path.exists():
            shutil.rmtree(path)

    def exists(self, url: str) -> bool:
        return _local_path(url).exists()

    def prepare_cache_write(self, connection_id: int, schema: str, table: str) -> Path:
        # The file goes inside the table directory that cache_url points at.
        return self.cache_base / str(connection_id) / schema / table / f"{table}.parquet"

    def finalize_cache_write(
        self, written_path: Path, connection_id: int, schema: str, table: str
    ) -> str:
        return self.cache_url(connection_id, schema, table)