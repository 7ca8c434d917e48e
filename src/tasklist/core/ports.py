# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete storage backends.
This keeps persistence swappable (sqlite / json file / memory) and makes testing easier.
"""

from typing import Any, Protocol


class KeyValueStorage(Protocol):
    """Local key-value string store (localStorage-like). Errors propagate to the caller."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class TaskPersistence(Protocol):
    """
    Persistence adapter consumed by TaskStore: one fixed slot.

    - load() returns the raw string, or None if absent/unreadable
    - save() returns False on failure instead of raising
    """

    def load(self) -> str | None: ...
    def save(self, raw: str) -> bool: ...


class StoreListener(Protocol):
    """Called after every store state change. `store` is the TaskStore that changed."""

    def __call__(self, store: Any, event: str) -> None: ...
