"""Domain models for meal planning."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class MealType(StrEnum):
    """Meal services offered each day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class MealOption(StrEnum):
    """Choices a resident or guest can make for a meal."""

    STANDARD = "standard"
    SKIP = "skip"
    EARLY = "early"
    LATE = "late"
    TUPPER = "tupper"
    BAG = "bag"


class OrderStatus(StrEnum):
    """Status stored alongside an explicit order."""

    CONFIRMED = "confirmed"
    TEMPLATE = "template"


class PlanSource(StrEnum):
    """Where a resolved plan came from."""

    EXPLICIT = "explicit"
    ABSENCE = "absence"
    TEMPLATE = "template"
    NONE = "none"


CONTAINER_OPTIONS = frozenset({MealOption.TUPPER, MealOption.BAG})

OFFERED_OPTIONS: dict[MealType, tuple[MealOption, ...]] = {
    MealType.BREAKFAST: (MealOption.STANDARD, MealOption.EARLY, MealOption.SKIP),
    MealType.LUNCH: (
        MealOption.STANDARD,
        MealOption.EARLY,
        MealOption.LATE,
        MealOption.TUPPER,
        MealOption.BAG,
        MealOption.SKIP,
    ),
    MealType.DINNER: (MealOption.STANDARD, MealOption.LATE, MealOption.SKIP),
}


def is_prep_option(option: MealOption, meal_type: MealType) -> bool:
    """Return True when the option must be committed the day before service.

    Tupper and bag always need preparation; an early breakfast does too,
    while an early lunch is cooked on the day.
    """
    if option in CONTAINER_OPTIONS:
        return True
    return option == MealOption.EARLY and meal_type == MealType.BREAKFAST


def template_day_of_week(day: date) -> int:
    """Return the Monday-first 1-7 weekday used by weekly templates."""
    return day.isoweekday()


@dataclass(frozen=True)
class Resident:
    """A resident who can order meals."""

    id: UUID
    name: str


@dataclass(frozen=True)
class ExplicitOrder:
    """A resident's concrete choice for one date and meal."""

    resident_id: UUID
    day: date
    meal_type: MealType
    option: MealOption
    is_prep_container: bool = False
    prep_time: str | None = None
    status: OrderStatus = OrderStatus.CONFIRMED


@dataclass(frozen=True)
class WeeklyTemplate:
    """A resident's recurring default for a weekday and meal."""

    resident_id: UUID
    day_of_week: int
    meal_type: MealType
    option: MealOption
    is_prep_container: bool = False


@dataclass(frozen=True)
class Absence:
    """An inclusive date range during which a resident is away."""

    id: UUID
    resident_id: UUID
    start_date: date
    end_date: date
    notes: str | None = None

    def covers(self, day: date) -> bool:
        """Return True when the day falls inside the absence."""
        return self.start_date <= day <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        """Return True when the absence shares at least one day with a range."""
        return self.start_date <= end and self.end_date >= start


@dataclass(frozen=True)
class GuestEntry:
    """Extra headcount for a date and meal, not tied to a resident."""

    id: UUID
    day: date
    meal_type: MealType
    count: int
    option: MealOption = MealOption.STANDARD
    is_prep_container: bool = False
    notes: str | None = None
    created_by: UUID | None = None


@dataclass(frozen=True)
class ResolvedPlan:
    """Effective choice for a resident, date and meal, tagged with its source."""

    resident_id: UUID
    day: date
    meal_type: MealType
    source: PlanSource
    option: MealOption | None = None
    is_prep_container: bool = False
    prep_time: str | None = None

    def effective_option(self, default_option: MealOption) -> MealOption:
        """Return the option to display and count, applying the default for none."""
        if self.option is None:
            return default_option
        return self.option
