# src/taskly/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store depends on Protocols instead of concrete implementations.
This keeps storage backends and UI surfaces swappable and makes testing easier.
"""

from typing import Any, Callable, Protocol


class StorageSlot(Protocol):
    """One durable key/value slot holding the serialized task list."""

    key: str

    def load(self) -> str | None: ...
    def save(self, blob: str) -> None: ...
    def describe(self) -> str: ...


# Called with the new snapshot (tuple of TaskItem) after every change.
StoreListener = Callable[[tuple[Any, ...]], None]

# Transient user-facing notices (e.g. "could not save").
NoticeSink = Callable[[str], None]
