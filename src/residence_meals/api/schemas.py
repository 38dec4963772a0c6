"""Request bodies for the HTTP API."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field

from residence_meals.domain.meals import MealOption, MealType


class OrderRequest(BaseModel):
    """A resident's choice for one date and meal."""

    date: dt.date
    meal_type: MealType
    option: MealOption
    prep_time: str | None = None
    confirmed: bool = False


class TemplateRequest(BaseModel):
    """A resident's weekly default for a weekday and meal."""

    day_of_week: int = Field(ge=1, le=7)
    meal_type: MealType
    option: MealOption


class AbsenceRequest(BaseModel):
    """An absence range."""

    start_date: dt.date
    end_date: dt.date
    notes: str | None = None


class GuestRequest(BaseModel):
    """Extra headcount for a date and meal."""

    date: dt.date
    meal_type: MealType
    count: int = Field(ge=1)
    option: MealOption = MealOption.STANDARD
    notes: str | None = None
    created_by: UUID | None = None


class ScheduleRequest(BaseModel):
    """Cutoff schedule; empty strings mean no deadline."""

    weekdays: str = ""
    saturday: str = ""
    sunday_or_holiday: str = ""
    overrides: dict[dt.date, str] = Field(default_factory=dict)


class HolidayRequest(BaseModel):
    """A named holiday."""

    date: dt.date
    name: str


class LockRequest(BaseModel):
    """Close or reopen a meal service."""

    locked: bool
    actor: UUID | None = None
