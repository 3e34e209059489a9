# src/taskly/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_store import TaskListStore
from ..ui.form import FormController
from ..ui.list_view import ListView

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: TaskListStore
    form: FormController
    list_view: ListView

    # Two-phase startup: views show a placeholder until start() has hydrated.
    ready: bool = False
    notices: list[str] = field(default_factory=list)

    def start(self) -> bool:
        """
        Hydrate the store once per session.

        Returns True if this call did the hydration, False if already ready.
        """
        if self.ready:
            return False
        tasks = self.store.hydrate()
        self.ready = True
        logger.info("Session ready with %d tasks.", len(tasks))
        return True

    def add_notice(self, text: str) -> None:
        self.notices.append(text)

    def drain_notices(self) -> list[str]:
        out, self.notices = self.notices, []
        return out
