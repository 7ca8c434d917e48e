# tests/test_bootstrap.py

from __future__ import annotations

from types import SimpleNamespace

from tasklist.cli.bootstrap import create_initial_state
from tasklist.connectors.console_connector import console_confirm
from tasklist.storage.file_storage import MemoryKeyValueStorage


def test_state_survives_restart_on_sqlite(settings: SimpleNamespace) -> None:
    first = create_initial_state(settings=settings)
    assert settings.data_dir.is_dir()
    first.store.add("persist me")

    second = create_initial_state(settings=settings)
    assert [t.text for t in second.store.tasks] == ["persist me"]


def test_injected_storage_with_corrupt_slot(settings: SimpleNamespace) -> None:
    storage = MemoryKeyValueStorage({"todos": "not-json"})
    state = create_initial_state(settings=settings, storage=storage)

    assert state.store.tasks == ()
    state.store.add("fresh")
    assert "fresh" in storage.items["todos"]


def test_console_confirm_answers() -> None:
    assert console_confirm("Delete all tasks?", input_fn=lambda _p: "y") is True
    assert console_confirm("Delete all tasks?", input_fn=lambda _p: " YES ") is True
    assert console_confirm("Delete all tasks?", input_fn=lambda _p: "") is False

    def eof(_prompt: str) -> str:
        raise EOFError

    assert console_confirm("Delete all tasks?", input_fn=eof) is False
