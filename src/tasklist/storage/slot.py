# src/tasklist/storage/slot.py

from __future__ import annotations

import logging
from pathlib import Path

from ..core.ports import KeyValueStorage
from .file_storage import JsonFileKeyValueStorage, MemoryKeyValueStorage
from .sqlite_storage import SqliteKeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("sqlite", "json", "memory")


class StorageSlot:
    """
    Binds a KeyValueStorage to one fixed key and implements TaskPersistence.

    Backend errors never escape:
    - load() -> None (caller starts empty)
    - save() -> False (caller keeps its in-memory state)
    """

    def __init__(self, storage: KeyValueStorage, key: str) -> None:
        if not key or not key.strip():
            raise ValueError("storage key is required")
        self._storage = storage
        self._key = key.strip()

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> str | None:
        try:
            return self._storage.get_item(self._key)
        except Exception:
            logger.exception("Failed to read storage slot key=%s", self._key)
            return None

    def save(self, raw: str) -> bool:
        try:
            self._storage.set_item(self._key, raw)
            return True
        except Exception:
            logger.exception("Failed to write storage slot key=%s", self._key)
            return False


def default_storage_path(backend: str, data_dir: Path) -> Path:
    if backend == "json":
        return data_dir / "storage.json"
    return data_dir / "storage.sqlite3"


def open_storage(settings) -> KeyValueStorage:
    """Build the key-value backend named by settings.storage_backend."""
    backend = str(getattr(settings, "storage_backend", "sqlite")).strip().lower()
    path = getattr(settings, "storage_path", None)

    if backend == "sqlite":
        return SqliteKeyValueStorage(path or "storage.sqlite3")
    if backend == "json":
        return JsonFileKeyValueStorage(path or "storage.json")
    if backend == "memory":
        logger.warning("Using in-memory storage: tasks will not survive this session.")
        return MemoryKeyValueStorage()

    raise ValueError(
        f"Unknown storage backend: {backend!r} (expected one of {', '.join(STORAGE_BACKENDS)})"
    )
