"""Effective meal plan resolution.

A resident's plan for a date and meal comes from the first source that has
an answer, in this order:

1. an explicit order for the exact date and meal,
2. an absence covering the date (forces ``skip``),
3. the weekly template for the weekday and meal.

When none applies the plan is tagged ``none``; deciding how to display or
count that case is left to the caller through ``ResolvedPlan.effective_option``.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from residence_meals.domain.meals import (
    Absence,
    ExplicitOrder,
    MealOption,
    MealType,
    PlanSource,
    ResolvedPlan,
    Resident,
    WeeklyTemplate,
    template_day_of_week,
)
from residence_meals.services.plans import (
    AbsenceRepository,
    OrderRepository,
    ResidentRepository,
)

Lookup = Callable[[UUID, date, MealType], ResolvedPlan | None]


@dataclass(frozen=True)
class PlanSnapshot:
    """Orders, absences and templates loaded for one resolution pass."""

    orders: list[ExplicitOrder]
    absences: list[Absence]
    templates: list[WeeklyTemplate]

    def lookups(self) -> tuple[Lookup, ...]:
        """Return the lookups in precedence order."""
        return (self._explicit, self._absence, self._template)

    def resolve(self, resident_id: UUID, day: date, meal_type: MealType) -> ResolvedPlan:
        """Return the first lookup's answer, or a ``none`` plan."""
        for lookup in self.lookups():
            plan = lookup(resident_id, day, meal_type)
            if plan is not None:
                return plan
        return ResolvedPlan(
            resident_id=resident_id,
            day=day,
            meal_type=meal_type,
            source=PlanSource.NONE,
        )

    def _explicit(
        self, resident_id: UUID, day: date, meal_type: MealType
    ) -> ResolvedPlan | None:
        for order in self.orders:
            if (
                order.resident_id == resident_id
                and order.day == day
                and order.meal_type == meal_type
            ):
                return ResolvedPlan(
                    resident_id=resident_id,
                    day=day,
                    meal_type=meal_type,
                    source=PlanSource.EXPLICIT,
                    option=order.option,
                    is_prep_container=order.is_prep_container,
                    prep_time=order.prep_time,
                )
        return None

    def _absence(
        self, resident_id: UUID, day: date, meal_type: MealType
    ) -> ResolvedPlan | None:
        for absence in self.absences:
            if absence.resident_id == resident_id and absence.covers(day):
                return ResolvedPlan(
                    resident_id=resident_id,
                    day=day,
                    meal_type=meal_type,
                    source=PlanSource.ABSENCE,
                    option=MealOption.SKIP,
                )
        return None

    def _template(
        self, resident_id: UUID, day: date, meal_type: MealType
    ) -> ResolvedPlan | None:
        day_of_week = template_day_of_week(day)
        for template in self.templates:
            if (
                template.resident_id == resident_id
                and template.day_of_week == day_of_week
                and template.meal_type == meal_type
            ):
                return ResolvedPlan(
                    resident_id=resident_id,
                    day=day,
                    meal_type=meal_type,
                    source=PlanSource.TEMPLATE,
                    option=template.option,
                    is_prep_container=template.is_prep_container,
                )
        return None


@dataclass(frozen=True)
class ResidentDayPlan:
    """All three meals of one resident for a date."""

    resident: Resident
    plans: dict[MealType, ResolvedPlan]


@dataclass
class OrderResolver:
    """Compute effective plans from the current repository state."""

    order_repository: OrderRepository
    absence_repository: AbsenceRepository
    resident_repository: ResidentRepository

    def resolve(self, resident_id: UUID, day: date, meal_type: MealType) -> ResolvedPlan:
        """Return the effective plan for one resident, date and meal."""
        snapshot = PlanSnapshot(
            orders=self.order_repository.list_orders_in_range(resident_id, day, day),
            absences=self.absence_repository.list_absences(resident_id, day, day),
            templates=self.order_repository.list_templates(resident_id),
        )
        return snapshot.resolve(resident_id, day, meal_type)

    def resolve_range(
        self, resident_id: UUID, start: date, end: date
    ) -> dict[date, dict[MealType, ResolvedPlan]]:
        """Return a resident's plans for every date and meal in a range."""
        if end < start:
            raise ValueError("Range end must not be before its start")
        snapshot = PlanSnapshot(
            orders=self.order_repository.list_orders_in_range(resident_id, start, end),
            absences=self.absence_repository.list_absences(resident_id, start, end),
            templates=self.order_repository.list_templates(resident_id),
        )
        return {
            day: {
                meal_type: snapshot.resolve(resident_id, day, meal_type)
                for meal_type in MealType
            }
            for day in _days(start, end)
        }

    def resolve_day(self, day: date) -> list[ResidentDayPlan]:
        """Return every resident's plans for a date, in directory order."""
        residents = self.resident_repository.list_residents()
        snapshot = PlanSnapshot(
            orders=self.order_repository.list_orders_for_date(day),
            absences=self.absence_repository.list_absences_in_range(day, day),
            templates=self.order_repository.list_templates_for_weekday(
                template_day_of_week(day)
            ),
        )
        return [
            ResidentDayPlan(
                resident=resident,
                plans={
                    meal_type: snapshot.resolve(resident.id, day, meal_type)
                    for meal_type in MealType
                },
            )
            for resident in residents
        ]


def _days(start: date, end: date) -> Iterable[date]:
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)
