# src/tasklist/tasks/task_views.py

"""
Derived views over the task collection.

All functions are pure: they never mutate their input and keep insertion order.
"""

from __future__ import annotations

from collections.abc import Sequence

from .task_models import FilterMode, Task, TaskStats


def apply_filter(tasks: Sequence[Task], mode: FilterMode) -> list[Task]:
    if mode is FilterMode.ACTIVE:
        return [t for t in tasks if not t.completed]
    if mode is FilterMode.COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)


def apply_search(tasks: Sequence[Task], query: str) -> list[Task]:
    if not query:
        return list(tasks)
    needle = query.lower()
    return [t for t in tasks if needle in t.text.lower()]


def filtered_tasks(tasks: Sequence[Task], mode: FilterMode, query: str = "") -> list[Task]:
    """Filter by mode, then narrow by case-insensitive substring search."""
    return apply_search(apply_filter(tasks, mode), query)


def compute_stats(tasks: Sequence[Task]) -> TaskStats:
    completed = sum(1 for t in tasks if t.completed)
    return TaskStats(total=len(tasks), active=len(tasks) - completed, completed=completed)
