# src/tasklist/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ..tasks.task_store import TaskStore

ConfirmFn = Callable[[str], bool]


def deny_all(_prompt: str) -> bool:
    return False


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    store: TaskStore

    # Presentation-owned capability: ask the user before destructive actions.
    confirm: ConfirmFn = field(default=deny_all)
