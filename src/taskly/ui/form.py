# src/taskly/ui/form.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..tasks.task_models import DEFAULT_ACCESSIBILITY, ActivityType, TaskItem
from ..tasks.task_store import TaskListStore
from ..tasks.validation import (
    FIELD_NAMES,
    ValidationError,
    normalize_field_name,
    validate_task_input,
)

logger = logging.getLogger(__name__)

FORM_DEFAULTS: dict[str, Any] = {
    "activity": "",
    "price": 0,
    "type": ActivityType.EDUCATION.value,
    "bookingRequired": False,
    "accessibility": DEFAULT_ACCESSIBILITY,
}

FIELD_LABELS: dict[str, str] = {
    "activity": "Activity",
    "price": "Price",
    "type": "Type",
    "bookingRequired": "Booking required",
    "accessibility": "Accessibility",
}


class FormController:
    """
    Raw field state for the "new activity" form.

    Fields hold whatever the user typed; nothing is validated until submit().
    A successful submit hands the payload to the store and resets the form.
    """

    def __init__(self, store: TaskListStore) -> None:
        self._store = store
        self._values: dict[str, Any] = dict(FORM_DEFAULTS)
        self.errors: dict[str, ValidationError] = {}

    def values(self) -> dict[str, Any]:
        return dict(self._values)

    def set_field(self, name: str, value: Any) -> str:
        """Set one field by external or snake_case name. Returns the external name."""
        field = normalize_field_name(name)
        if field is None:
            raise KeyError(name)
        self._values[field] = value
        # Editing a field clears its stale inline error.
        self.errors.pop(field, None)
        return field

    def fill(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    def reset(self) -> None:
        self._values = dict(FORM_DEFAULTS)
        self.errors = {}

    def submit(self) -> TaskItem | None:
        """Validate and add. Returns the created item, or None (see .errors)."""
        result = validate_task_input(self._values)
        if result.payload is None:
            self.errors = {e.field: e for e in result.errors}
            logger.debug("Form rejected: %s", ", ".join(f"{e.field}:{e.reason}" for e in result.errors))
            return None

        item = self._store.add(result.payload)
        self.reset()
        return item

    def render(self) -> list[str]:
        lines = ["New activity:"]
        for field in FIELD_NAMES:
            value = self._values.get(field)
            lines.append(f"  {FIELD_LABELS[field]} ({field}): {value!r}")
            err = self.errors.get(field)
            if err is not None:
                lines.append(f"    ! {err.message}")
        return lines
