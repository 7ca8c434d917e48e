# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the storage backend + slot into one TaskStore owned by AppState.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.ports import KeyValueStorage
from ..core.state import AppState
from ..storage.slot import StorageSlot, open_storage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    storage_path = getattr(settings, "storage_path", None)
    if storage_path:
        Path(storage_path).parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, storage: KeyValueStorage | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and storage) injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if storage is None:
        storage = open_storage(settings)

    slot = StorageSlot(storage, getattr(settings, "storage_key", "todos"))
    store = TaskStore(slot)
    loaded = store.initialize()
    logger.debug("Bootstrap done backend=%s key=%s loaded=%d",
                 getattr(settings, "storage_backend", "?"), slot.key, loaded)

    return AppState(settings=settings, store=store)
