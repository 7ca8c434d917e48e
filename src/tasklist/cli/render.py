# src/tasklist/cli/render.py

from __future__ import annotations

from ..tasks.task_models import Task, TaskStats
from ..tasks.task_store import TaskStore

EMPTY_LINES = ("No tasks to display", "Add a task to get started!")


def format_stats(stats: TaskStats) -> str:
    return f"Total: {stats.total} | Active: {stats.active} | Completed: {stats.completed}"


def render_task(task: Task, *, edit_buffer: str | None = None) -> str:
    mark = "[x]" if task.completed else "[ ]"
    if edit_buffer is not None:
        return f"{mark} #{task.id} (editing) {edit_buffer}  -> /save or /cancel"
    return f"{mark} #{task.id} {task.text}  [{task.priority.value.upper()}] {task.created_at}"


def render_tasks(store: TaskStore) -> str:
    """Current filtered view, one task per line, plus a header and the stats line."""
    header = f"Filter: {store.filter_mode.value}"
    if store.search_query:
        header += f" | Search: {store.search_query!r}"

    lines = [header]
    visible = store.filtered()
    if not visible:
        lines.extend(f"  {s}" for s in EMPTY_LINES)
    for t in visible:
        buffer = store.edit_buffer if t.id == store.editing_id else None
        lines.append("  " + render_task(t, edit_buffer=buffer))

    lines.append(format_stats(store.stats()))
    return "\n".join(lines)
