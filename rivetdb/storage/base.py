"""Storage backend interface for cached table data and sync state."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class S3Credentials:
    """Credentials handed to sync jobs that write to S3-compatible storage."""

    aws_access_key_id: str
    aws_secret_access_key: str
    endpoint_url: str


class StorageManager(ABC):
    """Where cached Parquet data and per-table sync state live."""

    @abstractmethod
    def cache_url(self, connection_id: int, schema: str, table: str) -> str:
        """URL of the directory holding a table's cached Parquet files."""

    @abstractmethod
    def state_url(self, connection_id: int, schema: str, table: str) -> str:
        """URL of a table's JSON sync state."""

    @abstractmethod
    def cache_prefix(self, connection_id: int) -> str:
        """Prefix under which all cached data of a connection lives."""

    @abstractmethod
    def state_prefix(self, connection_id: int) -> str:
        """Prefix under which all sync state of a connection lives."""

    @abstractmethod
    def read(self, url: str) -> bytes:
        """Return the contents stored at ``url``."""

    @abstractmethod
    def write(self, url: str, data: bytes) -> None:
        """Store ``data`` at ``url``."""

    @abstractmethod
    def delete(self, url: str) -> None:
        """Remove whatever is stored at ``url``."""

    @abstractmethod
    def delete_prefix(self, prefix: str) -> None:
        """Remove everything stored under ``prefix``."""

    @abstractmethod
    def exists(self, url: str) -> bool:
        """Whether anything is stored at ``url``."""

    def get_s3_credentials(self) -> S3Credentials | None:
        """S3 credentials for sync jobs; ``None`` for non-S3 backends."""
        return None

    @abstractmethod
    def prepare_cache_write(self, connection_id: int, schema: str, table: str) -> Path:
        """Local path to write a table's Parquet data to.

        Local backends return the final destination; remote backends return
        a temporary file.
        """

    @abstractmethod
    def finalize_cache_write(
        self, written_path: Path, connection_id: int, schema: str, table: str
    ) -> str:
        """Finish a cache write started with :meth:`prepare_cache_write`.

        Returns the URL of the table's cache directory.
        """