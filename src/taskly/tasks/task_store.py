# src/taskly/tasks/task_store.py

from __future__ import annotations

import json
import logging
import uuid
import warnings
from collections.abc import Callable, Iterable

from ..core.ports import NoticeSink, StorageSlot, StoreListener
from .errors import CorruptDataError, HydrationWarning, StorageReadFailure, StorageWriteFailure
from .task_models import TaskItem, TaskList
from .validation import TaskPayload, validate_task_input

logger = logging.getLogger(__name__)

SAVE_FAILED_NOTICE = "Could not save your list. Changes are kept for this session only."


def serialize_tasks(tasks: Iterable[TaskItem]) -> str:
    """JSON array of task dicts, in list order."""
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def deserialize_tasks(blob: str) -> list[TaskItem]:
    """
    Parse a persisted blob back into TaskItems.

    Every element goes through the same validation as form input.
    Raises CorruptDataError on anything unusable (the whole blob is rejected).
    """
    try:
        data = json.loads(blob)
    except (ValueError, RecursionError, TypeError) as e:
        # JSONDecodeError is a ValueError; so is an int literal over the digit limit.
        raise CorruptDataError(f"not valid JSON: {type(e).__name__}: {e}") from e

    if not isinstance(data, list):
        raise CorruptDataError(f"expected a JSON array, got {type(data).__name__}")

    out: list[TaskItem] = []
    seen: set[str] = set()
    for idx, raw in enumerate(data):
        if not isinstance(raw, dict):
            raise CorruptDataError(f"item #{idx} is not an object")

        task_id = raw.get("id")
        if not isinstance(task_id, str) or not task_id.strip():
            raise CorruptDataError(f"item #{idx} has no id")
        if task_id in seen:
            raise CorruptDataError(f"duplicate id {task_id!r}")

        result = validate_task_input({k: v for k, v in raw.items() if k != "id"})
        if result.payload is None:
            fields = ", ".join(f"{e.field}:{e.reason}" for e in result.errors)
            raise CorruptDataError(f"item #{idx} failed validation ({fields})")

        seen.add(task_id)
        out.append(_make_item(task_id, result.payload))
    return out


def _make_item(task_id: str, payload: TaskPayload) -> TaskItem:
    return TaskItem(
        id=task_id,
        activity=payload.activity,
        price=payload.price,
        type=payload.type,
        booking_required=payload.booking_required,
        accessibility=payload.accessibility,
    )


class TaskListStore:
    """
    In-memory ordered task list with write-through persistence.

    The store is the only code that talks to the storage slot. Every
    mutation rewrites the whole blob. If a write fails the in-memory list
    stays authoritative and a notice is sent instead of raising.
    """

    def __init__(
        self,
        storage: StorageSlot,
        *,
        on_notice: NoticeSink | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._storage = storage
        self._tasks: list[TaskItem] = []
        self._listeners: list[StoreListener] = []
        self._on_notice = on_notice
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self.last_save_ok = True

    @property
    def storage(self) -> StorageSlot:
        return self._storage

    # ---- observers ----

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set_notice_sink(self, sink: NoticeSink | None) -> None:
        self._on_notice = sink

    def _notify(self) -> None:
        snapshot = self.current()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Store listener %r failed.", listener)

    def _notice(self, text: str) -> None:
        if self._on_notice is None:
            return
        try:
            self._on_notice(text)
        except Exception:
            logger.exception("Notice sink failed.")

    # ---- persistence ----

    def _persist(self) -> bool:
        try:
            self._storage.save(serialize_tasks(self._tasks))
        except StorageWriteFailure as e:
            logger.error("Persisting %d tasks failed: %s", len(self._tasks), e)
            self.last_save_ok = False
            self._notice(SAVE_FAILED_NOTICE)
            return False
        self.last_save_ok = True
        return True

    def hydrate(self) -> TaskList:
        """
        Replace the in-memory list with the persisted one.

        Missing data -> empty list. Unreadable or corrupt data -> empty list
        plus a HydrationWarning; never raises for bad content.
        """
        try:
            blob = self._storage.load()
        except StorageReadFailure as e:
            self._discard_persisted(f"storage read failed: {e}")
            return self.current()

        if blob is None:
            logger.info("No persisted tasks under key=%s; starting empty.", self._storage.key)
            self._tasks = []
        else:
            try:
                self._tasks = deserialize_tasks(blob)
            except CorruptDataError as e:
                self._discard_persisted(str(e))
                return self.current()
            logger.info("Hydrated %d tasks from key=%s", len(self._tasks), self._storage.key)

        self._notify()
        return self.current()

    def _discard_persisted(self, reason: str) -> None:
        msg = f"Ignoring persisted tasks under key={self._storage.key}: {reason}"
        logger.warning("%s", msg)
        warnings.warn(HydrationWarning(msg), stacklevel=3)
        self._tasks = []
        self._notify()

    # ---- public API ----

    def current(self) -> TaskList:
        return tuple(self._tasks)

    def get(self, task_id: str) -> TaskItem | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def count(self) -> int:
        return len(self._tasks)

    def _new_id(self) -> str:
        taken = {t.id for t in self._tasks}
        while True:
            candidate = str(self._id_factory())
            if candidate and candidate not in taken:
                return candidate
            logger.debug("Generated id %r already in use; retrying.", candidate)

    def add(self, payload: TaskPayload) -> TaskItem:
        """Append a validated payload under a fresh id, persist, notify."""
        item = _make_item(self._new_id(), payload)
        self._tasks.append(item)
        self._persist()
        logger.debug("Task added id=%s activity=%r", item.id, item.activity)
        self._notify()
        return item

    def remove(self, task_id: str) -> bool:
        """Remove by id. Unknown id is a no-op (no write) and returns False."""
        for idx, t in enumerate(self._tasks):
            if t.id == task_id:
                del self._tasks[idx]
                break
        else:
            return False

        self._persist()
        logger.debug("Task removed id=%s", task_id)
        self._notify()
        return True
