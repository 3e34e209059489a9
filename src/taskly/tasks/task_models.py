# src/taskly/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ActivityType(StrEnum):
    """Closed set of activity categories offered by the form."""

    EDUCATION = "education"
    RECREATIONAL = "recreational"
    SOCIAL = "social"
    DIY = "diy"
    CHARITY = "charity"
    COOKING = "cooking"
    RELAXATION = "relaxation"
    MUSIC = "music"
    BUSYWORK = "busywork"


DEFAULT_ACCESSIBILITY = 0.5


@dataclass(frozen=True, slots=True)
class TaskItem:
    """
    One validated activity entry with identity.

    Instances are immutable: the list supports append and remove only,
    never update in place.
    """

    id: str
    activity: str
    price: float
    type: ActivityType
    booking_required: bool = False
    accessibility: float = DEFAULT_ACCESSIBILITY

    def to_dict(self) -> dict[str, Any]:
        """Persisted shape (external field names)."""
        return {
            "id": self.id,
            "activity": self.activity,
            "price": self.price,
            "type": self.type.value,
            "bookingRequired": self.booking_required,
            "accessibility": self.accessibility,
        }


# A TaskList is an ordered list of TaskItem; snapshots handed out are tuples.
TaskList = tuple[TaskItem, ...]
