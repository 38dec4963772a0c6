"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from residence_meals.api.schemas import (  # noqa: TC001
    GuestRequest,
    HolidayRequest,
    LockRequest,
    ScheduleRequest,
)
from residence_meals.api.serializers import (
    serialize_guest,
    serialize_holiday,
    serialize_lock,
    serialize_schedule,
)
from residence_meals.domain.meals import MealType  # noqa: TC001

if TYPE_CHECKING:
    from residence_meals.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _unprocessable(exc: ValueError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
    )


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/locks/{day}", dependencies=[Depends(require_admin)])
async def lock_status(day: date, request: Request) -> dict[str, object]:
    """Return per-meal lock state, persisting any cutoff that has passed."""
    container: AppContainer = request.app.state.container
    locks = container.lock_admin_service.lock_status(day)
    remaining = (
        container.cutoff_policy.time_until_cutoff()
        if day == container.clock.today()
        else None
    )
    return {
        "date": day.isoformat(),
        "seconds_until_cutoff": int(remaining.total_seconds()) if remaining else None,
        "locks": {meal_type.value: locked for meal_type, locked in locks.items()},
    }


@router.put("/locks/{day}", dependencies=[Depends(require_admin)])
async def set_day_lock(
    day: date, payload: LockRequest, request: Request
) -> dict[str, object]:
    """Close or reopen every meal of a date."""
    container: AppContainer = request.app.state.container
    try:
        locks = container.lock_admin_service.set_day_lock(
            day, payload.locked, payload.actor
        )
    except ValueError as exc:
        raise _unprocessable(exc) from exc
    return {"locks": [serialize_lock(lock) for lock in locks]}


@router.put("/locks/{day}/{meal_type}", dependencies=[Depends(require_admin)])
async def set_meal_lock(
    day: date, meal_type: MealType, payload: LockRequest, request: Request
) -> dict[str, object]:
    """Close or reopen a single meal service."""
    container: AppContainer = request.app.state.container
    try:
        lock = container.lock_admin_service.set_lock(
            day, meal_type, payload.locked, payload.actor
        )
    except ValueError as exc:
        raise _unprocessable(exc) from exc
    return serialize_lock(lock)


@router.get("/schedule", dependencies=[Depends(require_admin)])
async def get_schedule(request: Request) -> dict[str, object]:
    """Return the cutoff schedule."""
    container: AppContainer = request.app.state.container
    return serialize_schedule(container.catalog_service.get_schedule())


@router.put("/schedule", dependencies=[Depends(require_admin)])
async def update_schedule(
    payload: ScheduleRequest, request: Request
) -> dict[str, object]:
    """Replace the cutoff schedule."""
    container: AppContainer = request.app.state.container
    try:
        config = container.catalog_service.update_schedule(
            weekdays=payload.weekdays,
            saturday=payload.saturday,
            sunday_or_holiday=payload.sunday_or_holiday,
            overrides=payload.overrides,
        )
    except ValueError as exc:
        raise _unprocessable(exc) from exc
    return serialize_schedule(config)


@router.get("/holidays", dependencies=[Depends(require_admin)])
async def list_holidays(request: Request) -> dict[str, object]:
    """Return all holidays."""
    container: AppContainer = request.app.state.container
    holidays = container.catalog_service.list_holidays()
    return {"holidays": [serialize_holiday(holiday) for holiday in holidays]}


@router.post(
    "/holidays",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def add_holiday(payload: HolidayRequest, request: Request) -> dict[str, object]:
    """Add a holiday."""
    container: AppContainer = request.app.state.container
    try:
        holiday = container.catalog_service.add_holiday(payload.date, payload.name)
    except ValueError as exc:
        raise _unprocessable(exc) from exc
    return serialize_holiday(holiday)


@router.delete(
    "/holidays/{holiday_id}",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_holiday(holiday_id: UUID, request: Request) -> None:
    """Remove a holiday."""
    container: AppContainer = request.app.state.container
    container.catalog_service.delete_holiday(holiday_id)


@router.get("/guests", dependencies=[Depends(require_admin)])
async def list_guests(
    request: Request, day: date = Query(alias="date")
) -> dict[str, object]:
    """Return guest entries for a date."""
    container: AppContainer = request.app.state.container
    guests = container.plan_service.list_guests(day)
    return {"guests": [serialize_guest(guest) for guest in guests]}


@router.post(
    "/guests",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def add_guest(payload: GuestRequest, request: Request) -> dict[str, object]:
    """Add extra headcount for a date and meal."""
    container: AppContainer = request.app.state.container
    try:
        guest = container.plan_service.add_guest(
            day=payload.date,
            meal_type=payload.meal_type,
            count=payload.count,
            option=payload.option,
            notes=payload.notes,
            created_by=payload.created_by,
        )
    except ValueError as exc:
        raise _unprocessable(exc) from exc
    return serialize_guest(guest)


@router.delete(
    "/guests/{guest_id}",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_guest(guest_id: UUID, request: Request) -> None:
    """Remove a guest entry."""
    container: AppContainer = request.app.state.container
    container.plan_service.delete_guest(guest_id)
