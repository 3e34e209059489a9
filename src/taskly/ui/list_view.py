# src/taskly/ui/list_view.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..tasks.task_models import TaskItem, TaskList
from ..tasks.task_store import TaskListStore

logger = logging.getLogger(__name__)

SHORT_ID_LEN = 8
LOADING_TEXT = "Loading..."
EMPTY_TEXT = "(empty)"

RenderSink = Callable[[list[str]], None]


def format_task(index: int, task: TaskItem) -> str:
    booking = "yes" if task.booking_required else "no"
    return (
        f"{index}. [{task.id[:SHORT_ID_LEN]}] {task.activity}"
        f" | {task.type.value} | price {task.price:.2f}"
        f" | booking {booking} | accessibility {task.accessibility:.2f}"
    )


class ListView:
    """
    Read-only projection of the store.

    Membership always comes from store.current(); the view never keeps its
    own copy of the list. It re-renders on store notifications once ready.
    """

    def __init__(
        self,
        store: TaskListStore,
        *,
        is_ready: Callable[[], bool] = lambda: True,
        on_render: RenderSink | None = None,
    ) -> None:
        self._store = store
        self._is_ready = is_ready
        self._on_render = on_render
        self._unsubscribe = store.subscribe(self._on_store_change)

    def set_render_sink(self, sink: RenderSink | None) -> None:
        self._on_render = sink

    def set_ready_check(self, is_ready: Callable[[], bool]) -> None:
        self._is_ready = is_ready

    def close(self) -> None:
        self._unsubscribe()

    def _on_store_change(self, _snapshot: TaskList) -> None:
        if self._on_render is None or not self._is_ready():
            return
        self._on_render(self.render())

    def render(self) -> list[str]:
        if not self._is_ready():
            return [LOADING_TEXT]
        tasks = self._store.current()
        lines = [f"Todo List ({len(tasks)})"]
        if not tasks:
            lines.append(f"  {EMPTY_TEXT}")
            return lines
        lines.extend(f"  {format_task(i, t)}" for i, t in enumerate(tasks, start=1))
        return lines

    def resolve(self, ref: str) -> TaskItem | None:
        """
        Find a task by row number ("2" or "#2"), full id, or unique id prefix.
        """
        ref = ref.strip()
        if not ref:
            return None

        tasks = self._store.current()
        row = ref[1:] if ref.startswith("#") else ref
        if row.isdigit():
            idx = int(row) - 1
            if 0 <= idx < len(tasks):
                return tasks[idx]
            if ref.startswith("#"):
                return None

        exact = self._store.get(ref)
        if exact is not None:
            return exact

        matches = [t for t in tasks if t.id.startswith(ref)]
        return matches[0] if len(matches) == 1 else None

    def delete(self, ref: str) -> TaskItem | None:
        """Delete via the store. Returns the removed item, or None if nothing matched."""
        task = self.resolve(ref)
        if task is None:
            return None
        if not self._store.remove(task.id):
            return None
        logger.info("Deleted task id=%s", task.id)
        return task
