"""Tests for resident endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from residence_meals.api.app import create_app
from residence_meals.domain.kitchen import ScheduleConfig
from residence_meals.domain.meals import ExplicitOrder, MealOption, MealType
from tests.conftest import TODAY


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_plan_endpoint_defaults_to_a_week(container) -> None:
    client = TestClient(create_app(container))
    resident_id = uuid4()

    response = client.get(f"/residents/{resident_id}/plan")

    assert response.status_code == 200
    data = response.json()
    assert data["resident_id"] == str(resident_id)
    assert data["seconds_until_cutoff"] == 8 * 3600
    assert [day["date"] for day in data["days"]][:2] == ["2025-03-10", "2025-03-11"]
    assert len(data["days"]) == 7
    lunch = data["days"][1]["meals"]["lunch"]
    assert lunch["option"] == "skip"
    assert lunch["source"] == "none"
    assert lunch["options"]["tupper"]["allowed"] is True


def test_plan_endpoint_rejects_long_ranges(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        f"/residents/{uuid4()}/plan",
        params={"start": "2025-03-10", "end": "2025-05-10"},
    )

    assert response.status_code == 422


def test_commit_order_saved(container, order_repository) -> None:
    client = TestClient(create_app(container))
    resident_id = uuid4()

    response = client.post(
        f"/residents/{resident_id}/orders",
        json={
            "date": "2025-03-11",
            "meal_type": "lunch",
            "option": "bag",
            "prep_time": "13:30",
        },
    )

    assert response.status_code == 200
    assert response.json()["status"] == "saved"
    stored = order_repository.orders[
        (resident_id, TODAY.replace(day=11), MealType.LUNCH)
    ]
    assert stored.prep_time == "13:30"


def test_commit_order_closed_and_confirmation(
    container, catalog_repository, order_repository
) -> None:
    client = TestClient(create_app(container))
    resident_id = uuid4()
    catalog_repository.config = ScheduleConfig(weekdays="10:00")
    order_repository.upsert_order(
        ExplicitOrder(
            resident_id=resident_id,
            day=TODAY,
            meal_type=MealType.LUNCH,
            option=MealOption.TUPPER,
        )
    )

    closed = client.post(
        f"/residents/{resident_id}/orders",
        json={"date": "2025-03-10", "meal_type": "dinner", "option": "late"},
    )
    pending = client.post(
        f"/residents/{resident_id}/orders",
        json={"date": "2025-03-10", "meal_type": "lunch", "option": "skip"},
    )
    confirmed = client.post(
        f"/residents/{resident_id}/orders",
        json={
            "date": "2025-03-10",
            "meal_type": "lunch",
            "option": "skip",
            "confirmed": True,
        },
    )

    assert closed.status_code == 409
    assert closed.json()["decision"]["reason"] == "day_locked"
    assert pending.status_code == 428
    assert pending.json()["decision"]["requires_confirmation"] is True
    assert confirmed.status_code == 200
    assert confirmed.json()["decision"]["reason"] == "prep_downgrade"


def test_commit_order_rejects_unoffered_option(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/residents/{uuid4()}/orders",
        json={"date": "2025-03-11", "meal_type": "dinner", "option": "early"},
    )

    assert response.status_code == 422


def test_templates_endpoints(container) -> None:
    client = TestClient(create_app(container))
    resident_id = uuid4()

    created = client.put(
        f"/residents/{resident_id}/templates",
        json={"day_of_week": 3, "meal_type": "lunch", "option": "tupper"},
    )
    listed = client.get(f"/residents/{resident_id}/templates")
    invalid = client.put(
        f"/residents/{resident_id}/templates",
        json={"day_of_week": 9, "meal_type": "lunch", "option": "tupper"},
    )

    assert created.status_code == 200
    assert listed.json()["templates"] == [
        {
            "day_of_week": 3,
            "meal_type": "lunch",
            "option": "tupper",
            "is_prep_container": False,
        }
    ]
    assert invalid.status_code == 422


def test_absence_endpoints(container) -> None:
    client = TestClient(create_app(container))
    resident_id = uuid4()

    created = client.post(
        f"/residents/{resident_id}/absences",
        json={"start_date": "2025-03-12", "end_date": "2025-03-14", "notes": "Trip"},
    )
    overlapping = client.post(
        f"/residents/{resident_id}/absences",
        json={"start_date": "2025-03-14", "end_date": "2025-03-16"},
    )
    absence_id = created.json()["id"]
    not_owned = client.delete(f"/residents/{uuid4()}/absences/{absence_id}")
    deleted = client.delete(f"/residents/{resident_id}/absences/{absence_id}")
    listed = client.get(f"/residents/{resident_id}/absences")

    assert created.status_code == 201
    assert created.json()["notes"] == "Trip"
    assert overlapping.status_code == 422
    assert not_owned.status_code == 404
    assert deleted.status_code == 204
    assert listed.json() == {"absences": []}
