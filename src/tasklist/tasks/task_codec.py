# src/tasklist/tasks/task_codec.py

"""
JSON encoding of the task collection.

Wire format: a JSON array of objects
  {"id": int, "text": str, "completed": bool, "priority": str, "createdAt": str}

Decoding is tolerant at the record level (bad records are skipped and logged),
but a payload that is not a JSON array at all is rejected with TaskCodecError.
Encoded output is ASCII-only: non-ASCII text, lone surrogates included, is
escaped so every backend can store it.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from .task_models import Priority, Task

logger = logging.getLogger(__name__)


class TaskCodecError(ValueError):
    """Raised when a persisted payload cannot be read as a task collection."""


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "priority": task.priority.value,
        "createdAt": task.created_at,
    }


def record_to_task(raw: Any) -> Task | None:
    """Build a Task from one decoded record, or None if the record is unusable."""
    if not isinstance(raw, dict):
        return None

    tid = raw.get("id")
    # bool is an int subclass; reject it explicitly.
    if not isinstance(tid, int) or isinstance(tid, bool):
        return None

    text = raw.get("text")
    if not isinstance(text, str) or not text.strip():
        return None

    completed = raw.get("completed", False)
    if not isinstance(completed, bool):
        return None

    created_at = raw.get("createdAt", "")
    if not isinstance(created_at, str):
        created_at = str(created_at)

    return Task(
        id=tid,
        text=text.strip(),
        completed=completed,
        priority=Priority.from_raw(raw.get("priority")),
        created_at=created_at,
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_record(t) for t in tasks], ensure_ascii=True)


def decode_tasks(raw: str) -> list[Task]:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise TaskCodecError(f"persisted tasks are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise TaskCodecError(f"persisted tasks must be a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    seen: set[int] = set()
    skipped = 0
    for item in data:
        task = record_to_task(item)
        if task is None or task.id in seen:
            skipped += 1
            continue
        seen.add(task.id)
        out.append(task)

    if skipped:
        logger.warning("Skipped %d malformed task record(s) while decoding.", skipped)
    return out
