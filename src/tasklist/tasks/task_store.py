# src/tasklist/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from enum import StrEnum

from ..core.ports import StoreListener, TaskPersistence
from .task_codec import TaskCodecError, decode_tasks, encode_tasks
from .task_models import FilterMode, NewTaskDraft, Priority, Task, TaskStats, ViewState
from .task_views import compute_stats, filtered_tasks

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class StoreEvent(StrEnum):
    LOADED = "loaded"
    ADDED = "added"
    DELETED = "deleted"
    TOGGLED = "toggled"
    EDIT_STARTED = "edit_started"
    EDIT_BUFFER = "edit_buffer"
    EDIT_SAVED = "edit_saved"
    EDIT_CANCELLED = "edit_cancelled"
    CLEARED_COMPLETED = "cleared_completed"
    CLEARED_ALL = "cleared_all"
    FILTER_CHANGED = "filter_changed"
    SEARCH_CHANGED = "search_changed"
    DRAFT_CHANGED = "draft_changed"


def _local_now() -> datetime:
    return datetime.now().astimezone()


class TaskStore:
    """
    In-memory task collection with write-through persistence.

    Ownership:
    - the ordered task list (insertion order, never reshuffled)
    - transient view state (filter, search, single edit in progress)
    - the new-task draft

    Persistence:
    - initialize() reads the slot once; unreadable data degrades to an empty list
    - every mutation saves the full list before returning, no-op calls included,
      so a later call retries a save that failed earlier
    - blank-text Add / SaveEdit are validation no-ops and do not save
    - save failures are logged; memory stays authoritative for the session

    Listeners registered via subscribe() are notified after every state change.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._persistence = persistence
        self._clock = clock or _local_now
        self._tasks: list[Task] = []
        self._view = ViewState()
        self._next_id = 1
        self._listeners: list[StoreListener] = []
        self.draft = NewTaskDraft()

    # ---- lifecycle ----

    def initialize(self) -> int:
        """Hydrate from persistence. Returns the number of tasks loaded."""
        raw = self._persistence.load()
        tasks: list[Task] = []
        if raw is not None:
            try:
                tasks = decode_tasks(raw)
            except TaskCodecError:
                logger.exception("Persisted tasks are unreadable; starting with an empty list.")
                tasks = []

        self._tasks = tasks
        self._view = ViewState()
        self._next_id = max((t.id for t in tasks), default=0) + 1
        logger.info("TaskStore ready total=%d next_id=%d", len(tasks), self._next_id)
        self._notify(StoreEvent.LOADED)
        return len(tasks)

    def flush(self) -> bool:
        """Write the current collection again (e.g. on shutdown after a failed save)."""
        return self._persist()

    # ---- observers ----

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StoreEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(self, event.value)
            except Exception:
                logger.exception("Store listener failed event=%s", event.value)

    # ---- low-level helpers ----

    def _persist(self) -> bool:
        ok = self._persistence.save(encode_tasks(self._tasks))
        if not ok:
            logger.warning("Write-through failed; %d task(s) kept in memory only.", len(self._tasks))
        return ok

    def _commit(self, tasks: list[Task], event: StoreEvent) -> None:
        self._tasks = tasks
        if self._view.editing_id is not None and self.get(self._view.editing_id) is None:
            # The task under edit is gone; drop the stale edit.
            self._view.editing_id = None
            self._view.edit_buffer = ""
        self._persist()
        self._notify(event)

    def _timestamp(self) -> str:
        return self._clock().strftime(TIMESTAMP_FORMAT)

    # ---- read API ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def filter_mode(self) -> FilterMode:
        return self._view.filter_mode

    @property
    def search_query(self) -> str:
        return self._view.search_query

    @property
    def editing_id(self) -> int | None:
        return self._view.editing_id

    @property
    def edit_buffer(self) -> str:
        return self._view.edit_buffer

    def get(self, task_id: int) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def filtered(self) -> list[Task]:
        return filtered_tasks(self._tasks, self._view.filter_mode, self._view.search_query)

    def stats(self) -> TaskStats:
        return compute_stats(self._tasks)

    # ---- mutations (write-through) ----

    def add(self, text: str | None = None, priority: Priority | str | None = None) -> Task | None:
        """
        Append a new task.

        With no arguments the pending draft is used. Blank text is ignored
        (returns None, draft left in place); on success the draft is reset.
        """
        raw_text = self.draft.text if text is None else text
        trimmed = (raw_text or "").strip()
        if not trimmed:
            logger.debug("Add ignored: empty text")
            return None

        if priority is None:
            prio = self.draft.priority
        elif isinstance(priority, Priority):
            prio = priority
        else:
            prio = Priority.from_raw(priority)

        task = Task(
            id=self._next_id,
            text=trimmed,
            completed=False,
            priority=prio,
            created_at=self._timestamp(),
        )
        self._next_id += 1
        self.draft.reset()
        logger.debug("Task added id=%s priority=%s", task.id, task.priority.value)
        self._commit([*self._tasks, task], StoreEvent.ADDED)
        return task

    def delete(self, task_id: int) -> bool:
        remaining = [t for t in self._tasks if t.id != task_id]
        if len(remaining) == len(self._tasks):
            self._persist()
            return False
        logger.debug("Task deleted id=%s", task_id)
        self._commit(remaining, StoreEvent.DELETED)
        return True

    def toggle(self, task_id: int) -> Task | None:
        updated: Task | None = None
        tasks: list[Task] = []
        for t in self._tasks:
            if t.id == task_id:
                updated = replace(t, completed=not t.completed)
                tasks.append(updated)
            else:
                tasks.append(t)

        if updated is None:
            self._persist()
            return None
        self._commit(tasks, StoreEvent.TOGGLED)
        return updated

    def save_edit(self, task_id: int | None = None) -> Task | None:
        """
        Commit the edit buffer to the task being edited.

        Blank buffer: nothing changes, edit mode stays on.
        Unknown id: no task changes, edit mode is closed.
        """
        if task_id is None:
            task_id = self._view.editing_id
        trimmed = self._view.edit_buffer.strip()
        if task_id is None or not trimmed:
            return None

        updated: Task | None = None
        tasks: list[Task] = []
        for t in self._tasks:
            if t.id == task_id:
                updated = replace(t, text=trimmed)
                tasks.append(updated)
            else:
                tasks.append(t)

        self._view.editing_id = None
        self._view.edit_buffer = ""

        if updated is None:
            logger.debug("Save edit for unknown id=%s; edit closed", task_id)
            self._persist()
            self._notify(StoreEvent.EDIT_CANCELLED)
            return None
        self._commit(tasks, StoreEvent.EDIT_SAVED)
        return updated

    def clear_completed(self) -> int:
        remaining = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(remaining)
        if not removed:
            self._persist()
            return 0
        logger.info("Cleared %d completed task(s).", removed)
        self._commit(remaining, StoreEvent.CLEARED_COMPLETED)
        return removed

    def clear_all(self) -> int:
        """Remove every task. Unconditional: confirmation belongs to the caller."""
        removed = len(self._tasks)
        logger.info("Cleared all tasks (%d).", removed)
        self._commit([], StoreEvent.CLEARED_ALL)
        return removed

    # ---- transient state (no persistence) ----

    def start_edit(self, task_id: int, current_text: str) -> None:
        self._view.editing_id = task_id
        self._view.edit_buffer = current_text
        self._notify(StoreEvent.EDIT_STARTED)

    def set_edit_buffer(self, text: str) -> None:
        self._view.edit_buffer = text
        self._notify(StoreEvent.EDIT_BUFFER)

    def cancel_edit(self) -> None:
        self._view.editing_id = None
        self._view.edit_buffer = ""
        self._notify(StoreEvent.EDIT_CANCELLED)

    def set_filter(self, mode: FilterMode | str) -> None:
        self._view.filter_mode = mode if isinstance(mode, FilterMode) else FilterMode.from_raw(mode)
        self._notify(StoreEvent.FILTER_CHANGED)

    def set_search_query(self, text: str) -> None:
        self._view.search_query = text or ""
        self._notify(StoreEvent.SEARCH_CHANGED)

    def set_draft(self, text: str | None = None, priority: Priority | str | None = None) -> None:
        if text is not None:
            self.draft.text = text
        if priority is not None:
            self.draft.priority = (
                priority if isinstance(priority, Priority) else Priority.from_raw(priority)
            )
        self._notify(StoreEvent.DRAFT_CHANGED)
