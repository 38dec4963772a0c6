"""Tests for API payload builders."""

import inspect
from datetime import UTC, date, datetime

from residence_meals.api import serializers
from residence_meals.api.serializers import serialize_lock, serialize_schedule
from residence_meals.domain.kitchen import DailyLock, ScheduleConfig
from residence_meals.domain.meals import MealType


def test_serialize_lock_handles_missing_audit_fields() -> None:
    open_lock = DailyLock(
        day=date(2025, 3, 10), meal_type=MealType.LUNCH, is_locked=False
    )
    closed = DailyLock(
        day=date(2025, 3, 10),
        meal_type=MealType.DINNER,
        is_locked=True,
        locked_at=datetime(2025, 3, 10, 20, 0, tzinfo=UTC),
    )

    assert serialize_lock(open_lock) == {
        "date": "2025-03-10",
        "meal_type": "lunch",
        "is_locked": False,
        "locked_at": None,
        "locked_by": None,
    }
    assert serialize_lock(closed)["locked_at"] == "2025-03-10T20:00:00+00:00"


def test_serialize_schedule_orders_overrides() -> None:
    config = ScheduleConfig(
        weekdays="20:00",
        overrides={date(2025, 12, 31): "12:00", date(2025, 12, 24): "13:00"},
    )

    payload = serialize_schedule(config)

    assert list(payload["overrides"]) == ["2025-12-24", "2025-12-31"]


def test_every_serializer_is_documented() -> None:
    builders = [
        function
        for name, function in inspect.getmembers(serializers, inspect.isfunction)
        if name.startswith("serialize_")
    ]

    assert builders
    assert all(inspect.getdoc(function) for function in builders)
