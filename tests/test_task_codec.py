# tests/test_task_codec.py

from __future__ import annotations

import json

import pytest

from tasklist.tasks.task_codec import TaskCodecError, decode_tasks, encode_tasks
from tasklist.tasks.task_models import Priority, Task


def test_round_trip_is_lossless() -> None:
    tasks = [
        Task(id=1, text="Buy milk", completed=False, priority=Priority.MEDIUM, created_at="2024-05-01 09:30:00"),
        Task(id=7, text="Écrire à Zoë", completed=True, priority=Priority.HIGH, created_at="01/05/2024, 10:00:00"),
        Task(id=1714555800000, text="legacy id", completed=False, priority=Priority.LOW, created_at=""),
    ]
    assert decode_tasks(encode_tasks(tasks)) == tasks


def test_wire_field_names() -> None:
    raw = encode_tasks(
        [Task(id=3, text="x", completed=True, priority=Priority.LOW, created_at="now")]
    )
    assert json.loads(raw) == [
        {"id": 3, "text": "x", "completed": True, "priority": "low", "createdAt": "now"}
    ]


@pytest.mark.parametrize("raw", ["", "not json", '[{"id": 1,', '{"id": 1}', "42", "null"])
def test_unreadable_payload_raises(raw: str) -> None:
    with pytest.raises(TaskCodecError):
        decode_tasks(raw)


def test_malformed_records_are_skipped() -> None:
    raw = json.dumps(
        [
            {"id": 1, "text": "ok", "completed": False, "priority": "high", "createdAt": "t"},
            {"id": "2", "text": "string id", "completed": False},
            {"id": True, "text": "bool id", "completed": False},
            {"id": 3, "text": "   ", "completed": False},
            {"id": 4, "text": "bad completed", "completed": "yes"},
            "not an object",
            {"id": 1, "text": "duplicate id", "completed": True},
            {"id": 5, "text": "defaults"},
        ]
    )
    tasks = decode_tasks(raw)

    assert [t.id for t in tasks] == [1, 5]
    assert tasks[0].priority is Priority.HIGH
    assert tasks[1].completed is False
    assert tasks[1].priority is Priority.MEDIUM
    assert tasks[1].created_at == ""


def test_unknown_priority_falls_back_to_medium() -> None:
    raw = json.dumps([{"id": 1, "text": "x", "completed": False, "priority": "urgent"}])
    assert decode_tasks(raw)[0].priority is Priority.MEDIUM


def test_empty_array_decodes_to_empty_list() -> None:
    assert decode_tasks("[]") == []


def test_deeply_nested_payload_raises_codec_error() -> None:
    with pytest.raises(TaskCodecError):
        decode_tasks("[" * 200_000)


def test_encoded_output_is_ascii_and_keeps_lone_surrogates() -> None:
    tasks = [Task(id=1, text="bad \ud800 café", completed=False, priority=Priority.LOW, created_at="")]
    raw = encode_tasks(tasks)

    assert raw.isascii()
    raw.encode("utf-8")
    assert decode_tasks(raw) == tasks
