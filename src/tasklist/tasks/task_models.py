# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_raw(cls, raw: str | None) -> Priority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.MEDIUM


class FilterMode(StrEnum):
    """Which tasks the filtered view keeps."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def from_raw(cls, raw: str | None) -> FilterMode:
        if not raw:
            return cls.ALL
        try:
            return cls.parse(raw)
        except ValueError:
            return cls.ALL

    @classmethod
    def parse(cls, raw: str) -> FilterMode:
        """Strict variant of from_raw: unknown names raise ValueError."""
        return cls(str(raw).strip().lower())


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    text: str
    completed: bool
    priority: Priority
    created_at: str  # human-readable local time, stored as "createdAt"


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    active: int
    completed: int


@dataclass(slots=True)
class NewTaskDraft:
    """Pending input for the next Add (text field + priority selector)."""

    text: str = ""
    priority: Priority = Priority.MEDIUM

    def reset(self) -> None:
        self.text = ""
        self.priority = Priority.MEDIUM


@dataclass(slots=True)
class ViewState:
    """
    Transient UI state owned by the store.

    Never persisted:
    - filter / search narrow the derived view
    - editing_id + edit_buffer describe the single edit in progress
    """

    filter_mode: FilterMode = FilterMode.ALL
    search_query: str = ""
    editing_id: int | None = None
    edit_buffer: str = ""
