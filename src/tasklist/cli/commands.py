# src/tasklist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import FilterMode, Priority
from .render import format_stats, render_task, render_tasks

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

PRIORITY_NAMES = tuple(p.value for p in Priority)
FILTER_NAMES = tuple(m.value for m in FilterMode)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Plain text adds a task (or replaces the text of the task being edited).")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def handle_plain_text(state: AppState, text: str) -> str:
    """
    Non-command input, like pressing Enter in a text field:
    - in edit mode: becomes the edit buffer and is saved
    - otherwise: becomes the draft text and is submitted with the draft priority
    """
    store = state.store

    if store.editing_id is not None:
        editing_id = store.editing_id
        store.set_edit_buffer(text)
        saved = store.save_edit(editing_id)
        if saved is None:
            return f"Task #{editing_id} no longer exists; edit closed."
        return f"Saved: {render_task(saved)}"

    store.set_draft(text=text)
    task = store.add()
    if task is None:
        return "Nothing to add: task text is empty."
    return f"Added: {render_task(task)}"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add buy milk         -> priority chosen with /priority (medium by default)
    /add high pay rent    -> explicit priority
    """
    priority: Priority | None = None
    if args and args[0].lower() in PRIORITY_NAMES:
        priority = Priority(args[0].lower())
        args = args[1:]

    task = state.store.add(" ".join(args), priority)
    if task is None:
        return "Usage: /add [low|medium|high] <text>"
    return f"Added: {render_task(task)}"


def cmd_priority(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Next task priority: {state.store.draft.priority.value}. Use /priority low|medium|high."
    name = args[0].lower()
    if name not in PRIORITY_NAMES:
        return f"Unknown priority: {args[0]}. Use one of: {', '.join(PRIORITY_NAMES)}."
    state.store.set_draft(priority=Priority(name))
    return f"Next task priority: {name}."


def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    task = state.store.toggle(task_id)
    if task is None:
        return f"No task #{task_id}."
    return render_task(task)


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    if not state.store.delete(task_id):
        return f"No task #{task_id}."
    return f"Deleted #{task_id}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit 3               -> start editing, next plain text line replaces the text
    /edit 3 new text      -> replace immediately
    """
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /edit <id> [new text]"

    store = state.store
    task = store.get(task_id)
    if task is None:
        return f"No task #{task_id}."

    store.start_edit(task.id, task.text)
    new_text = " ".join(args[1:])
    if not new_text.strip():
        return f"Editing #{task.id}: {task.text}\nType the new text (or /cancel)."

    store.set_edit_buffer(new_text)
    saved = store.save_edit(task.id)
    if saved is None:
        return f"Task #{task.id} was not changed."
    return f"Saved: {render_task(saved)}"


def cmd_save(state: AppState, args: list[str]) -> str:
    store = state.store
    editing_id = store.editing_id
    if editing_id is None:
        return "Nothing is being edited. Use /edit <id>."
    saved = store.save_edit(editing_id)
    if saved is not None:
        return f"Saved: {render_task(saved)}"
    if store.editing_id is not None:
        return "Task text cannot be empty. Type the new text or /cancel."
    return f"Task #{editing_id} no longer exists; edit closed."


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if state.store.editing_id is None:
        return "Nothing is being edited."
    state.store.cancel_edit()
    return "Edit cancelled."


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Filter: {state.store.filter_mode.value}. Use /filter {'|'.join(FILTER_NAMES)}."
    try:
        mode = FilterMode.parse(args[0])
    except ValueError:
        return f"Unknown filter: {args[0]}. Use one of: {', '.join(FILTER_NAMES)}."
    state.store.set_filter(mode)
    return render_tasks(state.store)


def cmd_search(state: AppState, args: list[str]) -> str:
    state.store.set_search_query(" ".join(args))
    return render_tasks(state.store)


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_tasks(state.store)


def cmd_stats(state: AppState, args: list[str]) -> str:
    return format_stats(state.store.stats())


def cmd_clear_completed(state: AppState, args: list[str]) -> str:
    removed = state.store.clear_completed()
    return f"Removed {removed} completed task(s)."


def cmd_clear_all(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if not state.store.tasks:
        return "Task list is already empty."
    if emit is not None:
        emit(f"This will permanently delete {len(state.store.tasks)} task(s).")
    if not state.confirm("Delete all tasks?"):
        return "Cancelled."
    removed = state.store.clear_all()
    logger.debug("Clear all confirmed, removed=%d", removed)
    return f"Deleted all {removed} task(s)."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add [low|medium|high] <text>.")
registry.register(
    "priority", cmd_priority, help_text="Priority for the next task (plain text or bare /add)."
)
registry.register("done", cmd_toggle, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("rm", cmd_delete, help_text="Delete a task: /rm <id>.", aliases=["del"])
registry.register("edit", cmd_edit, help_text="Edit task text: /edit <id> [new text].")
registry.register("save", cmd_save, help_text="Save the task being edited.")
registry.register("cancel", cmd_cancel, help_text="Cancel the current edit.")
registry.register("filter", cmd_filter, help_text="Show all | active | completed tasks.")
registry.register("search", cmd_search, help_text="Search task text (empty query clears).")
registry.register("list", cmd_list, help_text="Show the current view.", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Show total / active / completed counts.")
registry.register("clear", cmd_clear_completed, help_text="Remove completed tasks.")
registry.register("clearall", cmd_clear_all, help_text="Delete ALL tasks (asks first).")
