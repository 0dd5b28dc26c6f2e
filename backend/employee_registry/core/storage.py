"""Synchronous string key-value stores backing the record list."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from employee_registry.core.config import Settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    pass


class StorageAdapter(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


def _check_quota(key: str, value: str, quota_bytes: int) -> None:
    if quota_bytes <= 0:
        return
    size = len(value.encode("utf-8"))
    if size > quota_bytes:
        raise StorageError(f"Storage quota exceeded for '{key}': {size} bytes (max {quota_bytes})")


class MemoryStorage:
    def __init__(self, quota_bytes: int = 0) -> None:
        self.quota_bytes = quota_bytes
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self.quota_bytes)
        self._items[key] = value


class FileStorage:
    """One UTF-8 file per key inside ``directory``.

    Writes land in a temporary file that is renamed over the target, so a
    failed write never leaves a truncated value behind.
    """

    def __init__(self, directory: str | Path, quota_bytes: int = 0) -> None:
        self.directory = Path(directory)
        self.quota_bytes = quota_bytes

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read '{key}' from {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self.quota_bytes)
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write '{key}' to {path}: {e}") from e


def build_storage(settings: Settings) -> StorageAdapter:
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        logger.info("Using in-memory storage (nothing survives a restart)")
        return MemoryStorage(quota_bytes=settings.STORAGE_QUOTA_BYTES)
    if backend == "file":
        logger.info("Using file storage (dir=%s)", settings.STORAGE_DIR)
        return FileStorage(settings.STORAGE_DIR, quota_bytes=settings.STORAGE_QUOTA_BYTES)
    raise StorageError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")
