# src/taskly/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the storage backend,
- wires store, form and list view into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import StorageSlot
from ..core.state import AppState
from ..tasks.storage import JsonFileStorage, MemoryStorage, SqliteStorage
from ..tasks.task_store import TaskListStore
from ..ui.form import FormController
from ..ui.list_view import ListView

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.storage_backend == "sqlite":
        settings.sqlite_path.parent.mkdir(parents=True, exist_ok=True)


def create_storage(settings) -> StorageSlot:
    backend = str(getattr(settings, "storage_backend", "json")).lower()
    key = settings.storage_key

    if backend == "sqlite":
        return SqliteStorage(settings.sqlite_path, key)
    if backend == "memory":
        return MemoryStorage(key)
    if backend != "json":
        logger.warning("Unknown storage backend %r; using json.", backend)
    return JsonFileStorage(settings.data_dir, key)


def create_initial_state(*, settings=None, storage: StorageSlot | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and storage) injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    The returned state is not hydrated yet; call state.start().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if storage is None:
        storage = create_storage(settings)

    store = TaskListStore(storage)
    state = AppState(
        settings=settings,
        store=store,
        form=FormController(store),
        list_view=ListView(store),
    )
    state.list_view.set_ready_check(lambda: state.ready)
    store.set_notice_sink(state.add_notice)

    logger.info("Storage: %s key=%s", storage.describe(), storage.key)
    return state
