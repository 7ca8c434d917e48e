# tests/test_storage.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.storage.file_storage import JsonFileKeyValueStorage, MemoryKeyValueStorage
from tasklist.storage.slot import StorageSlot, open_storage
from tasklist.storage.sqlite_storage import SqliteKeyValueStorage

from .fakes import FailingStorage


def test_sqlite_set_get_overwrite_remove(tmp_path: Path) -> None:
    kv = SqliteKeyValueStorage(tmp_path / "nested" / "kv.sqlite3")

    assert kv.get_item("todos") is None
    kv.set_item("todos", "[]")
    kv.set_item("todos", '[{"id": 1}]')
    assert kv.get_item("todos") == '[{"id": 1}]'

    # A fresh instance sees the same data.
    assert SqliteKeyValueStorage(kv.db_path).get_item("todos") == '[{"id": 1}]'

    kv.remove_item("todos")
    assert kv.get_item("todos") is None


def test_json_file_storage_keeps_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    kv = JsonFileKeyValueStorage(path)

    assert kv.get_item("todos") is None
    kv.set_item("other", "keep me")
    kv.set_item("todos", "[]")

    assert json.loads(path.read_text("utf-8")) == {"other": "keep me", "todos": "[]"}
    assert not path.with_suffix(".tmp").exists()

    kv.remove_item("todos")
    assert kv.get_item("todos") is None
    assert kv.get_item("other") == "keep me"


def test_json_file_storage_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("[1, 2, 3]", "utf-8")
    with pytest.raises(ValueError):
        JsonFileKeyValueStorage(path).get_item("todos")


def test_memory_storage() -> None:
    kv = MemoryKeyValueStorage({"a": "1"})
    kv.set_item("b", "2")
    kv.remove_item("a")
    kv.remove_item("missing")
    assert kv.items == {"b": "2"}


def test_slot_round_trip() -> None:
    kv = MemoryKeyValueStorage()
    slot = StorageSlot(kv, " todos ")
    assert slot.key == "todos"
    assert slot.load() is None
    assert slot.save("[]") is True
    assert slot.load() == "[]"


def test_slot_swallows_backend_errors() -> None:
    slot = StorageSlot(FailingStorage(fail_get=True, fail_set=True), "todos")
    assert slot.load() is None
    assert slot.save("[]") is False


def test_slot_on_corrupt_json_file_loads_nothing(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{broken", "utf-8")
    assert StorageSlot(JsonFileKeyValueStorage(path), "todos").load() is None


def test_slot_requires_key() -> None:
    with pytest.raises(ValueError):
        StorageSlot(MemoryKeyValueStorage(), "  ")


@pytest.mark.parametrize(
    ("backend", "expected"),
    [
        ("sqlite", SqliteKeyValueStorage),
        ("json", JsonFileKeyValueStorage),
        ("memory", MemoryKeyValueStorage),
        (" SQLite ", SqliteKeyValueStorage),
    ],
)
def test_open_storage_picks_backend(tmp_path: Path, backend: str, expected: type) -> None:
    settings = SimpleNamespace(storage_backend=backend, storage_path=tmp_path / "store.db")
    assert isinstance(open_storage(settings), expected)


def test_open_storage_unknown_backend(tmp_path: Path) -> None:
    settings = SimpleNamespace(storage_backend="redis", storage_path=tmp_path / "x")
    with pytest.raises(ValueError, match="Unknown storage backend"):
        open_storage(settings)


def test_sqlite_stays_writable_after_loading_lone_surrogate(tmp_path: Path) -> None:
    from tasklist.tasks.task_store import TaskStore

    db = tmp_path / "storage.sqlite3"
    SqliteKeyValueStorage(db).set_item(
        "todos",
        '[{"id": 1, "text": "bad \\ud800", "completed": false, "priority": "low", "createdAt": ""}]',
    )

    store = TaskStore(StorageSlot(SqliteKeyValueStorage(db), "todos"))
    store.initialize()
    assert store.add("new task") is not None
    assert store.flush() is True

    reloaded = TaskStore(StorageSlot(SqliteKeyValueStorage(db), "todos"))
    assert reloaded.initialize() == 2
    assert [t.text for t in reloaded.tasks] == ["bad \ud800", "new task"]
