# tests/test_validation.py

from __future__ import annotations

import pytest

from taskly.tasks.task_models import ActivityType
from taskly.tasks.validation import normalize_field_name, validate_task_input


def _reasons(result) -> list[tuple[str, str]]:
    return [(e.field, e.reason) for e in result.errors]


def test_valid_input_is_normalized() -> None:
    result = validate_task_input(
        {
            "activity": "Yoga",
            "price": 10,
            "type": "relaxation",
            "bookingRequired": False,
            "accessibility": 0.2,
        }
    )
    assert result.ok
    assert result.errors == ()
    assert result.payload.to_fields() == {
        "activity": "Yoga",
        "price": 10,
        "type": "relaxation",
        "bookingRequired": False,
        "accessibility": 0.2,
    }
    assert result.payload.type is ActivityType.RELAXATION


def test_defaults_for_booking_and_accessibility() -> None:
    result = validate_task_input({"activity": "Bake bread", "price": "3", "type": "cooking"})
    assert result.ok
    assert result.payload.booking_required is False
    assert result.payload.accessibility == 0.5
    assert result.payload.price == 3.0


def test_short_activity_is_rejected_alone() -> None:
    result = validate_task_input({"activity": "A", "price": 5, "type": "music"})
    assert not result.ok
    assert result.payload is None
    assert _reasons(result) == [("activity", "too_short")]
    assert result.error_for("activity").message == "Activity must be at least 2 characters."


def test_activity_is_trimmed_before_length_check() -> None:
    assert validate_task_input({"activity": "  Yo  ", "price": 0, "type": "social"}).payload.activity == "Yo"
    assert _reasons(validate_task_input({"activity": "  A  ", "price": 0, "type": "social"})) == [
        ("activity", "too_short")
    ]


def test_activity_with_lone_surrogate_is_accepted() -> None:
    result = validate_task_input({"activity": "ab\udcff", "price": 0, "type": "social"})
    assert result.ok
    assert result.payload.activity == "ab?"


@pytest.mark.parametrize("activity", [12345, None, ["Yoga"]])
def test_non_text_activity_says_so(activity) -> None:
    result = validate_task_input({"activity": activity, "price": 0, "type": "social"})
    assert _reasons(result) == [("activity", "too_short")]
    assert result.error_for("activity").message == "Activity must be text."


@pytest.mark.parametrize("price", [-1, "-0.01", "abc", "nan", "inf", True])
def test_bad_price(price) -> None:
    result = validate_task_input({"activity": "Chess", "price": price, "type": "recreational"})
    assert _reasons(result) == [("price", "negative")]


@pytest.mark.parametrize(("raw", "expected"), [("", 0.0), (" 12.5 ", 12.5), (0, 0.0)])
def test_price_coercion(raw, expected) -> None:
    result = validate_task_input({"activity": "Chess", "price": raw, "type": "recreational"})
    assert result.ok
    assert result.payload.price == expected


def test_type_must_be_in_enum() -> None:
    result = validate_task_input({"activity": "Run", "price": 0, "type": "sports"})
    assert _reasons(result) == [("type", "invalid_enum")]


def test_type_is_case_insensitive() -> None:
    result = validate_task_input({"activity": "Jam", "price": 0, "type": " Music "})
    assert result.payload.type is ActivityType.MUSIC


@pytest.mark.parametrize("value", [-0.1, 1.01, "2", "high"])
def test_accessibility_out_of_range(value) -> None:
    result = validate_task_input(
        {"activity": "Hike", "price": 0, "type": "recreational", "accessibility": value}
    )
    assert _reasons(result) == [("accessibility", "out_of_range")]


@pytest.mark.parametrize("value", [0, 1, "0.75", None])
def test_accessibility_bounds_inclusive(value) -> None:
    result = validate_task_input(
        {"activity": "Hike", "price": 0, "type": "recreational", "accessibility": value}
    )
    assert result.ok


@pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("no", False), ("TRUE", True), (None, False), ("", False)])
def test_booking_required_text_forms(raw, expected) -> None:
    result = validate_task_input(
        {"activity": "Concert", "price": 40, "type": "music", "booking_required": raw}
    )
    assert result.ok
    assert result.payload.booking_required is expected


def test_booking_required_garbage() -> None:
    result = validate_task_input(
        {"activity": "Concert", "price": 40, "type": "music", "bookingRequired": "maybe"}
    )
    assert _reasons(result) == [("bookingRequired", "invalid_boolean")]


def test_every_violated_field_is_reported_once_in_form_order() -> None:
    result = validate_task_input(
        {"activity": "", "price": -3, "type": "nope", "accessibility": 7}
    )
    assert _reasons(result) == [
        ("activity", "too_short"),
        ("price", "negative"),
        ("type", "invalid_enum"),
        ("accessibility", "out_of_range"),
    ]


def test_missing_required_fields() -> None:
    result = validate_task_input({})
    assert [e.field for e in result.errors] == ["activity", "price", "type"]


def test_unknown_keys_are_ignored() -> None:
    result = validate_task_input(
        {"activity": "Read", "price": 0, "type": "education", "participants": 3}
    )
    assert result.ok


def test_normalize_field_name() -> None:
    assert normalize_field_name("booking_required") == "bookingRequired"
    assert normalize_field_name("BookingRequired") == "bookingRequired"
    assert normalize_field_name(" price ") == "price"
    assert normalize_field_name("colour") is None
