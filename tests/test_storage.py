# tests/test_storage.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskly.tasks.errors import StorageReadFailure, StorageWriteFailure
from taskly.tasks.storage import JsonFileStorage, SqliteStorage
from taskly.tasks.task_store import TaskListStore
from taskly.tasks.validation import validate_task_input


def test_json_storage_missing_then_round_trip(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "data", "taskly.tasks")
    assert storage.load() is None

    storage.save('[{"id": "a"}]')
    assert storage.path == tmp_path / "data" / "taskly.tasks.json"
    assert storage.load() == '[{"id": "a"}]'

    storage.save("[]")
    assert storage.load() == "[]"
    assert not list((tmp_path / "data").glob("*.tmp"))


def test_json_storage_sanitizes_key(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path, "../evil key")
    storage.save("[]")
    assert storage.path.parent == tmp_path
    assert storage.path.name == ".._evil_key.json"


def test_json_storage_write_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", "utf-8")
    storage = JsonFileStorage(blocker, "taskly.tasks")
    with pytest.raises(StorageWriteFailure):
        storage.save("[]")


def test_json_storage_read_failure(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path, "taskly.tasks")
    storage.path.mkdir()
    with pytest.raises(StorageReadFailure):
        storage.load()


def test_sqlite_storage_round_trip_and_key_isolation(tmp_path: Path) -> None:
    db = tmp_path / "storage.sqlite3"
    tasks = SqliteStorage(db, "taskly.tasks")
    other = SqliteStorage(db, "other")

    assert tasks.load() is None
    tasks.save("[1]")
    tasks.save("[2]")
    other.save("[3]")

    assert tasks.load() == "[2]"
    assert other.load() == "[3]"
    assert SqliteStorage(db, "taskly.tasks").load() == "[2]"


@pytest.mark.parametrize("backend", ["json", "sqlite"])
def test_store_survives_restart(tmp_path: Path, backend: str) -> None:
    def make_storage():
        if backend == "json":
            return JsonFileStorage(tmp_path, "taskly.tasks")
        return SqliteStorage(tmp_path / "storage.sqlite3", "taskly.tasks")

    store = TaskListStore(make_storage())
    store.hydrate()
    for raw in (
        {"activity": "Learn Rust", "price": 0, "type": "education"},
        {"activity": "Dinner party", "price": 35, "type": "social", "bookingRequired": True},
        {"activity": "Sort emails", "price": 0, "type": "busywork", "accessibility": 0.0},
    ):
        store.add(validate_task_input(raw).payload)
    store.remove(store.current()[1].id)

    restarted = TaskListStore(make_storage())
    assert restarted.hydrate() == store.current()
