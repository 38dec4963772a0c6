"""Kitchen headcounts for service and next-day preparation."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from residence_meals.domain.kitchen import KitchenEntry, PrepSummary, ServiceGrouping
from residence_meals.domain.meals import (
    GuestEntry,
    MealOption,
    MealType,
    ResolvedPlan,
    Resident,
)
from residence_meals.services.plans import KitchenRepository
from residence_meals.services.resolver import OrderResolver

_logger = logging.getLogger(__name__)

NO_BUCKET = "no"


def bucket_for(entry: KitchenEntry) -> str:
    """Return the service bucket for an entry.

    Skips land in ``no``, and so do items prepared the day before (tupper,
    bag or container, early breakfast): they are not cooked at service time.
    """
    if entry.option == MealOption.SKIP:
        return NO_BUCKET
    if entry.option in {MealOption.TUPPER, MealOption.BAG} or entry.is_prep_container:
        return NO_BUCKET
    if entry.option == MealOption.EARLY and entry.meal_type == MealType.BREAKFAST:
        return NO_BUCKET
    return entry.option.value


@dataclass
class KitchenSummary:
    """Service groupings for a date plus the next day's prep list."""

    day: date
    services: dict[MealType, ServiceGrouping]
    prep: PrepSummary


@dataclass
class KitchenAggregator:
    """Build kitchen-facing groupings from resolved plans and guests."""

    resolver: OrderResolver
    kitchen_repository: KitchenRepository
    default_option: MealOption = MealOption.SKIP

    def group_for_service(self, day: date, meal_type: MealType) -> ServiceGrouping:
        """Group residents and guests for one meal service."""
        return self._group(day, meal_type, self._entries(day))

    def prep_for_tomorrow(self, day: date) -> PrepSummary:
        """Partition the next day's entries into prep lists."""
        tomorrow = day + timedelta(days=1)
        return self._prep(tomorrow, self._entries(tomorrow))

    def service_summary(self, day: date) -> KitchenSummary:
        """Return every meal grouping for a date and tomorrow's prep."""
        entries = self._entries(day)
        tomorrow = day + timedelta(days=1)
        return KitchenSummary(
            day=day,
            services={
                meal_type: self._group(day, meal_type, entries)
                for meal_type in MealType
            },
            prep=self._prep(tomorrow, self._entries(tomorrow)),
        )

    def _entries(self, day: date) -> list[KitchenEntry]:
        entries = [
            self._resident_entry(day_plan.resident, day_plan.plans[meal_type])
            for day_plan in self.resolver.resolve_day(day)
            for meal_type in MealType
        ]
        entries.extend(
            _guest_entry(guest) for guest in self.kitchen_repository.list_guests(day)
        )
        return entries

    def _resident_entry(self, resident: Resident, plan: ResolvedPlan) -> KitchenEntry:
        return KitchenEntry(
            meal_type=plan.meal_type,
            option=plan.effective_option(self.default_option),
            is_prep_container=plan.is_prep_container,
            count=1,
            name=resident.name,
            resident_id=resident.id,
            source=plan.source.value,
            prep_time=plan.prep_time,
        )

    def _group(
        self, day: date, meal_type: MealType, entries: list[KitchenEntry]
    ) -> ServiceGrouping:
        grouping = ServiceGrouping(day=day, meal_type=meal_type)
        for entry in entries:
            if entry.meal_type == meal_type:
                grouping.add(bucket_for(entry), entry)
        return grouping

    def _prep(self, day: date, entries: list[KitchenEntry]) -> PrepSummary:
        summary = PrepSummary(day=day)
        for entry in entries:
            if entry.meal_type == MealType.BREAKFAST and entry.option == MealOption.EARLY:
                summary.early_breakfast.append(entry)
            if entry.option == MealOption.TUPPER and not entry.is_prep_container:
                summary.tupper.append(entry)
            if entry.option == MealOption.BAG or entry.is_prep_container:
                summary.bag.append(entry)
        for conflict in summary.conflicts():
            _logger.warning(
                "Prep entry in several lists: day=%s meal=%s name=%s option=%s "
                "container=%s",
                day.isoformat(),
                conflict.meal_type.value,
                conflict.name,
                conflict.option.value,
                conflict.is_prep_container,
            )
        return summary


def _guest_entry(guest: GuestEntry) -> KitchenEntry:
    return KitchenEntry(
        meal_type=guest.meal_type,
        option=guest.option,
        is_prep_container=guest.is_prep_container,
        count=guest.count,
        name="Guests",
        guest_id=guest.id,
        notes=guest.notes,
    )
