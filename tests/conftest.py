# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.state import AppState
from tasklist.storage.file_storage import MemoryKeyValueStorage
from tasklist.storage.slot import StorageSlot
from tasklist.tasks.task_store import TaskStore

from .fakes import FixedClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and storage.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path / "data",
        storage_backend="sqlite",
        storage_path=tmp_path / "data" / "storage.sqlite3",
        storage_key="todos",
    )


@pytest.fixture()
def storage() -> MemoryKeyValueStorage:
    return MemoryKeyValueStorage()


@pytest.fixture()
def store(storage: MemoryKeyValueStorage) -> TaskStore:
    s = TaskStore(StorageSlot(storage, "todos"), clock=FixedClock())
    s.initialize()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, store=store)
