"""JSON payload builders for API responses."""

from residence_meals.domain.kitchen import (
    DailyLock,
    Holiday,
    KitchenEntry,
    PrepSummary,
    ScheduleConfig,
    ServiceGrouping,
)
from residence_meals.domain.meals import Absence, GuestEntry, WeeklyTemplate
from residence_meals.services.gate import ChangeDecision
from residence_meals.services.kitchen import KitchenSummary
from residence_meals.services.ordering import MealSlot


def serialize_decision(decision: ChangeDecision) -> dict[str, object]:
    """Return the gate verdict for one option."""
    return {
        "allowed": decision.allowed,
        "reason": decision.reason.value,
        "requires_confirmation": decision.requires_confirmation,
    }


def serialize_slot(slot: MealSlot) -> dict[str, object]:
    """Return one meal slot with its option decisions."""
    return {
        "option": slot.effective_option.value,
        "source": slot.plan.source.value,
        "is_prep_container": slot.plan.is_prep_container,
        "prep_time": slot.plan.prep_time,
        "options": {
            option.value: serialize_decision(decision)
            for option, decision in slot.options.items()
        },
    }


def serialize_template(template: WeeklyTemplate) -> dict[str, object]:
    """Return a weekly template row."""
    return {
        "day_of_week": template.day_of_week,
        "meal_type": template.meal_type.value,
        "option": template.option.value,
        "is_prep_container": template.is_prep_container,
    }


def serialize_absence(absence: Absence) -> dict[str, object]:
    """Return an absence period."""
    return {
        "id": str(absence.id),
        "start_date": absence.start_date.isoformat(),
        "end_date": absence.end_date.isoformat(),
        "notes": absence.notes,
    }


def serialize_guest(guest: GuestEntry) -> dict[str, object]:
    """Return a guest entry."""
    return {
        "id": str(guest.id),
        "date": guest.day.isoformat(),
        "meal_type": guest.meal_type.value,
        "count": guest.count,
        "option": guest.option.value,
        "is_prep_container": guest.is_prep_container,
        "notes": guest.notes,
        "created_by": str(guest.created_by) if guest.created_by else None,
    }


def serialize_entry(entry: KitchenEntry) -> dict[str, object]:
    """Return one kitchen list line."""
    return {
        "name": entry.name,
        "resident_id": str(entry.resident_id) if entry.resident_id else None,
        "guest_id": str(entry.guest_id) if entry.guest_id else None,
        "meal_type": entry.meal_type.value,
        "option": entry.option.value,
        "is_prep_container": entry.is_prep_container,
        "count": entry.count,
        "source": entry.source,
        "notes": entry.notes,
        "prep_time": entry.prep_time,
    }


def serialize_grouping(grouping: ServiceGrouping) -> dict[str, object]:
    """Return a meal service grouped into buckets with totals."""
    return {
        "date": grouping.day.isoformat(),
        "meal_type": grouping.meal_type.value,
        "totals": grouping.totals(),
        "buckets": {
            bucket: [serialize_entry(entry) for entry in entries]
            for bucket, entries in grouping.buckets.items()
        },
    }


def serialize_prep(summary: PrepSummary) -> dict[str, object]:
    """Return the prep list for a date."""
    return {
        "date": summary.day.isoformat(),
        "totals": summary.totals(),
        "early_breakfast": [serialize_entry(entry) for entry in summary.early_breakfast],
        "tupper": [serialize_entry(entry) for entry in summary.tupper],
        "bag": [serialize_entry(entry) for entry in summary.bag],
        "conflicts": [serialize_entry(entry) for entry in summary.conflicts()],
    }


def serialize_kitchen_summary(summary: KitchenSummary) -> dict[str, object]:
    """Return every service of a date plus the prep list."""
    return {
        "date": summary.day.isoformat(),
        "services": {
            meal_type.value: serialize_grouping(grouping)
            for meal_type, grouping in summary.services.items()
        },
        "prep": serialize_prep(summary.prep),
    }


def serialize_lock(lock: DailyLock) -> dict[str, object]:
    """Return a daily lock row."""
    return {
        "date": lock.day.isoformat(),
        "meal_type": lock.meal_type.value,
        "is_locked": lock.is_locked,
        "locked_at": lock.locked_at.isoformat() if lock.locked_at else None,
        "locked_by": str(lock.locked_by) if lock.locked_by else None,
    }


def serialize_schedule(config: ScheduleConfig) -> dict[str, object]:
    """Return the cutoff schedule with ISO override dates."""
    return {
        "weekdays": config.weekdays,
        "saturday": config.saturday,
        "sunday_or_holiday": config.sunday_or_holiday,
        "overrides": {
            day.isoformat(): value for day, value in sorted(config.overrides.items())
        },
    }


def serialize_holiday(holiday: Holiday) -> dict[str, object]:
    """Return a holiday."""
    return {"id": str(holiday.id), "date": holiday.day.isoformat(), "name": holiday.name}
