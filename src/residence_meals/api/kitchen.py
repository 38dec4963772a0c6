"""Kitchen listing endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from residence_meals.api.serializers import (
    serialize_grouping,
    serialize_kitchen_summary,
    serialize_prep,
)
from residence_meals.config import staff_tokens
from residence_meals.domain.meals import MealType  # noqa: TC001

if TYPE_CHECKING:
    from residence_meals.containers import AppContainer

router = APIRouter(prefix="/kitchen", tags=["kitchen"])


def _get_staff_tokens(request: Request) -> set[str]:
    container: AppContainer = request.app.state.container
    return staff_tokens(container.settings)


async def require_staff(
    x_staff_token: str | None = Header(default=None),
    tokens: set[str] = Depends(_get_staff_tokens),
) -> None:
    """Ensure requests carry a kitchen or admin token."""
    if not x_staff_token or x_staff_token not in tokens:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/{day}", dependencies=[Depends(require_staff)])
async def kitchen_summary(day: date, request: Request) -> dict[str, object]:
    """Return every meal service for a date plus tomorrow's prep."""
    container: AppContainer = request.app.state.container
    summary = container.kitchen_aggregator.service_summary(day)
    return serialize_kitchen_summary(summary)


@router.get("/{day}/service/{meal_type}", dependencies=[Depends(require_staff)])
async def service_grouping(
    day: date, meal_type: MealType, request: Request
) -> dict[str, object]:
    """Return the bucketed headcount for one meal service."""
    container: AppContainer = request.app.state.container
    grouping = container.kitchen_aggregator.group_for_service(day, meal_type)
    return serialize_grouping(grouping)


@router.get("/{day}/prep", dependencies=[Depends(require_staff)])
async def prep_list(day: date, request: Request) -> dict[str, object]:
    """Return what must be prepared today for tomorrow."""
    container: AppContainer = request.app.state.container
    return serialize_prep(container.kitchen_aggregator.prep_for_tomorrow(day))
