# src/taskly/tasks/validation.py

"""
Task item schema + validation.

The schema is a pydantic model; `validate_task_input` turns a raw field
mapping (form values, a persisted dict) into either a normalized payload
or a list of field-level errors. It never touches storage or the list.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .task_models import DEFAULT_ACCESSIBILITY, ActivityType

# External field names, in form order.
FIELD_NAMES: tuple[str, ...] = ("activity", "price", "type", "bookingRequired", "accessibility")

_FIELD_ALIASES: dict[str, str] = {
    "activity": "activity",
    "price": "price",
    "type": "type",
    "bookingrequired": "bookingRequired",
    "booking_required": "bookingRequired",
    "booking": "bookingRequired",
    "accessibility": "accessibility",
}

# field -> (reason, message)
_FIELD_FAILURES: dict[str, tuple[str, str]] = {
    "activity": ("too_short", "Activity must be at least 2 characters."),
    "price": ("negative", "Price must be a positive number."),
    "type": ("invalid_enum", "Please select a valid activity type."),
    "bookingRequired": ("invalid_boolean", "Booking required must be yes or no."),
    "accessibility": ("out_of_range", "Accessibility must be between 0 and 1."),
}

# Same reason, clearer message, when the value was not text at all.
_NOT_TEXT_MESSAGES: dict[str, str] = {"activity": "Activity must be text."}


def normalize_field_name(name: str) -> str | None:
    """Map 'bookingRequired' / 'booking_required' / 'BOOKING' etc. to the external name."""
    key = name.strip()
    if key in _FIELD_ALIASES:
        return _FIELD_ALIASES[key]
    return _FIELD_ALIASES.get(key.lower())


@dataclass(frozen=True, slots=True)
class ValidationError:
    """One field-level problem (field uses the external name)."""

    field: str
    reason: str
    message: str = ""


class TaskPayload(BaseModel):
    """Normalized task item without an id."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    activity: str = Field(min_length=2)
    price: float = Field(ge=0, allow_inf_nan=False)
    type: ActivityType
    booking_required: bool = Field(default=False, alias="bookingRequired")
    accessibility: float = Field(
        default=DEFAULT_ACCESSIBILITY, ge=0, le=1, allow_inf_nan=False
    )

    @field_validator("activity", mode="before")
    @classmethod
    def _strip_activity(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        # Lone surrogates (e.g. from a JSON "\udcff" escape) become "?" instead of failing.
        return v.encode("utf-8", "replace").decode("utf-8").strip()

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, v: Any) -> Any:
        # "" counts as 0, like a cleared numeric input.
        if isinstance(v, bool):
            raise ValueError("price must be a number")
        if isinstance(v, str):
            s = v.strip()
            return 0.0 if s == "" else s
        return v

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("booking_required", mode="before")
    @classmethod
    def _default_booking(cls, v: Any) -> Any:
        if v is None:
            return False
        if isinstance(v, str):
            s = v.strip()
            return False if s == "" else s
        return v

    @field_validator("accessibility", mode="before")
    @classmethod
    def _default_accessibility(cls, v: Any) -> Any:
        if v is None:
            return DEFAULT_ACCESSIBILITY
        if isinstance(v, bool):
            raise ValueError("accessibility must be a number")
        if isinstance(v, str):
            s = v.strip()
            return DEFAULT_ACCESSIBILITY if s == "" else s
        return v

    def to_fields(self) -> dict[str, Any]:
        """Field values under external names (type as plain string)."""
        return {
            "activity": self.activity,
            "price": self.price,
            "type": self.type.value,
            "bookingRequired": self.booking_required,
            "accessibility": self.accessibility,
        }


@dataclass(frozen=True, slots=True)
class ValidationResult:
    payload: TaskPayload | None
    errors: tuple[ValidationError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.payload is not None and not self.errors

    def error_for(self, field: str) -> ValidationError | None:
        for err in self.errors:
            if err.field == field:
                return err
        return None


def _field_error(field: str, error_type: str = "") -> ValidationError:
    reason, message = _FIELD_FAILURES[field]
    if error_type == "string_type":
        message = _NOT_TEXT_MESSAGES.get(field, message)
    return ValidationError(field=field, reason=reason, message=message)


def validate_task_input(raw: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a raw field mapping.

    Returns exactly one error per violated field, in form order.
    Keys may use either the external or the snake_case spelling.
    """
    data: dict[str, Any] = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            continue
        name = normalize_field_name(key)
        if name is not None:
            data[name] = value

    try:
        payload = TaskPayload.model_validate(data)
    except PydanticValidationError as exc:
        failed: dict[str, str] = {}
        for err in exc.errors():
            loc = err.get("loc") or ()
            if not loc:
                continue
            name = normalize_field_name(str(loc[0]))
            if name is not None:
                failed.setdefault(name, str(err.get("type", "")))
        errors = tuple(_field_error(f, failed[f]) for f in FIELD_NAMES if f in failed)
        return ValidationResult(payload=None, errors=errors)

    return ValidationResult(payload=payload)
