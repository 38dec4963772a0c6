"""Meal plan data access interfaces and plan management."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from residence_meals.domain.kitchen import DailyLock
from residence_meals.domain.meals import (
    OFFERED_OPTIONS,
    Absence,
    ExplicitOrder,
    GuestEntry,
    MealOption,
    MealType,
    Resident,
    WeeklyTemplate,
)

_logger = logging.getLogger(__name__)

MIN_DAY_OF_WEEK = 1
MAX_DAY_OF_WEEK = 7


class ResidentRepository(Protocol):
    """Persistence interface for the resident directory."""

    def list_residents(self) -> list[Resident]:
        """Return residents who take part in meal planning."""


class OrderRepository(Protocol):
    """Persistence interface for explicit orders and weekly templates."""

    def list_orders_in_range(
        self, resident_id: UUID, start: date, end: date
    ) -> list[ExplicitOrder]:
        """Return a resident's explicit orders within an inclusive range."""

    def list_orders_for_date(self, day: date) -> list[ExplicitOrder]:
        """Return every resident's explicit orders for a date."""

    def upsert_order(self, order: ExplicitOrder) -> None:
        """Create or replace the order for its identity key."""

    def list_templates(self, resident_id: UUID) -> list[WeeklyTemplate]:
        """Return a resident's weekly templates."""

    def list_templates_for_weekday(self, day_of_week: int) -> list[WeeklyTemplate]:
        """Return every resident's templates for a weekday."""

    def upsert_template(self, template: WeeklyTemplate) -> None:
        """Create or replace the template for its identity key."""


class AbsenceRepository(Protocol):
    """Persistence interface for absences."""

    def list_absences(self, resident_id: UUID, start: date, end: date) -> list[Absence]:
        """Return a resident's absences overlapping an inclusive range."""

    def list_absences_in_range(self, start: date, end: date) -> list[Absence]:
        """Return every absence overlapping an inclusive range."""

    def list_resident_absences(self, resident_id: UUID) -> list[Absence]:
        """Return all absences for a resident, newest first."""

    def create_absence(
        self, resident_id: UUID, start: date, end: date, notes: str | None
    ) -> Absence:
        """Create an absence and return it."""

    def delete_absence(self, absence_id: UUID) -> None:
        """Delete an absence."""


class KitchenRepository(Protocol):
    """Persistence interface for guests and daily locks."""

    def list_guests(self, day: date) -> list[GuestEntry]:
        """Return guest entries for a date in insertion order."""

    def create_guest(  # noqa: PLR0913
        self,
        day: date,
        meal_type: MealType,
        count: int,
        option: MealOption,
        is_prep_container: bool,
        notes: str | None,
        created_by: UUID | None,
    ) -> GuestEntry:
        """Create a guest entry and return it."""

    def delete_guest(self, guest_id: UUID) -> None:
        """Delete a guest entry."""

    def get_daily_locks(self, day: date) -> dict[MealType, DailyLock]:
        """Return stored lock rows for a date keyed by meal type."""

    def upsert_daily_lock(self, lock: DailyLock) -> None:
        """Create or replace the lock row for its date and meal."""


def ensure_offered(meal_type: MealType, option: MealOption) -> None:
    """Raise ValueError when an option is not offered for a meal."""
    if option not in OFFERED_OPTIONS[meal_type]:
        raise ValueError(f"Option {option.value} is not offered for {meal_type.value}")


@dataclass
class PlanService:
    """Manage weekly templates, absences and guests."""

    order_repository: OrderRepository
    absence_repository: AbsenceRepository
    kitchen_repository: KitchenRepository

    def list_templates(self, resident_id: UUID) -> list[WeeklyTemplate]:
        """Return a resident's weekly templates."""
        return self.order_repository.list_templates(resident_id)

    def upsert_template(
        self,
        resident_id: UUID,
        day_of_week: int,
        meal_type: MealType,
        option: MealOption,
    ) -> WeeklyTemplate:
        """Set a resident's default for a weekday and meal."""
        if not MIN_DAY_OF_WEEK <= day_of_week <= MAX_DAY_OF_WEEK:
            raise ValueError("day_of_week must be between 1 (Monday) and 7 (Sunday)")
        ensure_offered(meal_type, option)
        template = WeeklyTemplate(
            resident_id=resident_id,
            day_of_week=day_of_week,
            meal_type=meal_type,
            option=option,
            is_prep_container=option == MealOption.BAG,
        )
        self.order_repository.upsert_template(template)
        return template

    def list_absences(self, resident_id: UUID) -> list[Absence]:
        """Return a resident's absences."""
        return self.absence_repository.list_resident_absences(resident_id)

    def create_absence(
        self, resident_id: UUID, start: date, end: date, notes: str | None = None
    ) -> Absence:
        """Record an absence, rejecting invalid or overlapping ranges."""
        if end < start:
            raise ValueError("Absence end date must not be before its start date")
        overlapping = self.absence_repository.list_absences(resident_id, start, end)
        if overlapping:
            raise ValueError("Absence overlaps an existing absence")
        absence = self.absence_repository.create_absence(
            resident_id, start, end, notes
        )
        _logger.info(
            "Absence created: resident=%s start=%s end=%s",
            resident_id,
            start.isoformat(),
            end.isoformat(),
        )
        return absence

    def delete_absence(self, absence_id: UUID) -> None:
        """Remove an absence."""
        self.absence_repository.delete_absence(absence_id)

    def list_guests(self, day: date) -> list[GuestEntry]:
        """Return guest entries for a date."""
        return self.kitchen_repository.list_guests(day)

    def add_guest(  # noqa: PLR0913
        self,
        day: date,
        meal_type: MealType,
        count: int,
        option: MealOption = MealOption.STANDARD,
        notes: str | None = None,
        created_by: UUID | None = None,
    ) -> GuestEntry:
        """Add extra headcount for a date and meal."""
        if count < 1:
            raise ValueError("Guest count must be at least 1")
        ensure_offered(meal_type, option)
        return self.kitchen_repository.create_guest(
            day=day,
            meal_type=meal_type,
            count=count,
            option=option,
            is_prep_container=option == MealOption.BAG,
            notes=notes,
            created_by=created_by,
        )

    def delete_guest(self, guest_id: UUID) -> None:
        """Remove a guest entry."""
        self.kitchen_repository.delete_guest(guest_id)
