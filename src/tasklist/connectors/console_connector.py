# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import handle_plain_text
from ..cli.commands import registry as command_registry
from ..cli.render import format_stats
from ..core.state import AppState
from ..tasks.task_store import StoreEvent, TaskStore

logger = logging.getLogger(__name__)

# Events after which the stats line is re-printed.
_MUTATION_EVENTS = frozenset(
    {
        StoreEvent.ADDED,
        StoreEvent.DELETED,
        StoreEvent.TOGGLED,
        StoreEvent.EDIT_SAVED,
        StoreEvent.CLEARED_COMPLETED,
        StoreEvent.CLEARED_ALL,
    }
)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def console_confirm(prompt: str, *, input_fn: Callable[[str], str] = input) -> bool:
    """Yes/no prompt. Anything but an explicit yes (or EOF / Ctrl+C) declines."""
    try:
        answer = input_fn(f"{prompt} [y/N]: ")
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer.strip().lower() in {"y", "yes"}


def _stats_listener(store: TaskStore, event: str) -> None:
    if event in _MUTATION_EVENTS:
        _print_ts(format_stats(store.stats()))


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.store.tasks))
    _print_ts("[CONSOLE] Type a task and press Enter to add it. Use /help for commands, /exit to quit.\n")

    state.confirm = console_confirm
    unsubscribe = state.store.subscribe(_stats_listener)

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    try:
        _print_ts(command_registry.handle(state, "/list") or "")

        while True:
            prompt = "edit> " if state.store.editing_id is not None else "task> "
            try:
                user_input = input(prompt).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                response = command_registry.handle(state, user_input, emit=emit)
                if response is None:
                    response = handle_plain_text(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            _print_ts(response)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
