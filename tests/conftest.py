# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskly.cli.bootstrap import create_initial_state
from taskly.core.state import AppState
from taskly.tasks.storage import MemoryStorage
from taskly.tasks.task_store import TaskListStore

from .fakes import CountingStorage, ids


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Taskly",
        log_level="INFO",
        show_landing=True,
        data_dir=tmp_path / "data",
        storage_backend="memory",
        storage_key="taskly.tasks",
        sqlite_path=tmp_path / "data" / "storage.sqlite3",
    )


@pytest.fixture()
def storage() -> CountingStorage:
    return CountingStorage("taskly.tasks")


@pytest.fixture()
def store() -> TaskListStore:
    """Store over an in-memory slot with predictable ids: t1, t2, ..."""
    return TaskListStore(MemoryStorage("taskly.tasks"), id_factory=ids("t1", "t2", "t3", "t4"))


@pytest.fixture()
def state(settings: SimpleNamespace, storage: CountingStorage) -> AppState:
    """
    AppState wired by the real composition root over a counting in-memory slot.
    Not started yet (state.ready is False).
    """
    return create_initial_state(settings=settings, storage=storage)
