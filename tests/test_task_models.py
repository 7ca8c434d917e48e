# tests/test_task_models.py

from __future__ import annotations

import pytest

from tasklist.tasks.task_models import FilterMode, NewTaskDraft, Priority


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("low", Priority.LOW), (" HIGH ", Priority.HIGH), ("", Priority.MEDIUM), (None, Priority.MEDIUM), ("x", Priority.MEDIUM)],
)
def test_priority_from_raw(raw, expected) -> None:
    assert Priority.from_raw(raw) is expected


def test_filter_mode_parse_is_strict() -> None:
    assert FilterMode.parse("Active") is FilterMode.ACTIVE
    with pytest.raises(ValueError):
        FilterMode.parse("done")
    assert FilterMode.from_raw("done") is FilterMode.ALL


def test_draft_reset() -> None:
    draft = NewTaskDraft(text="x", priority=Priority.HIGH)
    draft.reset()
    assert draft == NewTaskDraft()
