"""Resident-facing meal ordering endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, Response, status

from residence_meals.api.schemas import (  # noqa: TC001
    AbsenceRequest,
    OrderRequest,
    TemplateRequest,
)
from residence_meals.api.serializers import (
    serialize_absence,
    serialize_decision,
    serialize_slot,
    serialize_template,
)
from residence_meals.services.ordering import CommitStatus

if TYPE_CHECKING:
    from residence_meals.containers import AppContainer

router = APIRouter(prefix="/residents", tags=["residents"])

_COMMIT_STATUS_CODES = {
    CommitStatus.SAVED: status.HTTP_200_OK,
    CommitStatus.CLOSED: status.HTTP_409_CONFLICT,
    CommitStatus.CONFIRMATION_REQUIRED: status.HTTP_428_PRECONDITION_REQUIRED,
}


@router.get("/{resident_id}/plan")
async def get_plan(
    resident_id: UUID,
    request: Request,
    start: date | None = None,
    end: date | None = None,
) -> dict[str, object]:
    """Return the resident's effective plan and open options per meal."""
    container: AppContainer = request.app.state.container
    range_start = start or container.clock.today()
    range_end = end or range_start + timedelta(days=6)
    try:
        plan = container.ordering_service.plan_for_range(
            resident_id, range_start, range_end
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    remaining = container.cutoff_policy.time_until_cutoff()
    return {
        "resident_id": str(resident_id),
        "seconds_until_cutoff": int(remaining.total_seconds()) if remaining else None,
        "days": [
            {
                "date": day.isoformat(),
                "meals": {
                    meal_type.value: serialize_slot(slot)
                    for meal_type, slot in meals.items()
                },
            }
            for day, meals in plan.items()
        ],
    }


@router.post("/{resident_id}/orders")
async def commit_order(
    resident_id: UUID, payload: OrderRequest, request: Request, response: Response
) -> dict[str, object]:
    """Store a meal choice if the ordering window allows it."""
    container: AppContainer = request.app.state.container
    try:
        result = container.ordering_service.commit(
            resident_id=resident_id,
            day=payload.date,
            meal_type=payload.meal_type,
            option=payload.option,
            prep_time=payload.prep_time,
            confirmed=payload.confirmed,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    response.status_code = _COMMIT_STATUS_CODES[result.status]
    return {
        "status": result.status.value,
        "decision": serialize_decision(result.decision),
    }


@router.get("/{resident_id}/templates")
async def list_templates(resident_id: UUID, request: Request) -> dict[str, object]:
    """Return the resident's weekly templates."""
    container: AppContainer = request.app.state.container
    templates = container.plan_service.list_templates(resident_id)
    return {"templates": [serialize_template(template) for template in templates]}


@router.put("/{resident_id}/templates")
async def upsert_template(
    resident_id: UUID, payload: TemplateRequest, request: Request
) -> dict[str, object]:
    """Set the resident's default for a weekday and meal."""
    container: AppContainer = request.app.state.container
    try:
        template = container.plan_service.upsert_template(
            resident_id, payload.day_of_week, payload.meal_type, payload.option
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return serialize_template(template)


@router.get("/{resident_id}/absences")
async def list_absences(resident_id: UUID, request: Request) -> dict[str, object]:
    """Return the resident's absences."""
    container: AppContainer = request.app.state.container
    absences = container.plan_service.list_absences(resident_id)
    return {"absences": [serialize_absence(absence) for absence in absences]}


@router.post("/{resident_id}/absences", status_code=status.HTTP_201_CREATED)
async def create_absence(
    resident_id: UUID, payload: AbsenceRequest, request: Request
) -> dict[str, object]:
    """Record an absence for the resident."""
    container: AppContainer = request.app.state.container
    try:
        absence = container.plan_service.create_absence(
            resident_id, payload.start_date, payload.end_date, payload.notes
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return serialize_absence(absence)


@router.delete(
    "/{resident_id}/absences/{absence_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_absence(resident_id: UUID, absence_id: UUID, request: Request) -> None:
    """Delete one of the resident's absences."""
    container: AppContainer = request.app.state.container
    owned = {absence.id for absence in container.plan_service.list_absences(resident_id)}
    if absence_id not in owned:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    container.plan_service.delete_absence(absence_id)
