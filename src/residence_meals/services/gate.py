"""Decide whether a resident may change a meal choice right now."""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum

from residence_meals.domain.meals import (
    CONTAINER_OPTIONS,
    OFFERED_OPTIONS,
    MealOption,
    MealType,
    is_prep_option,
)
from residence_meals.services.clock import Clock
from residence_meals.services.cutoff import CutoffPolicy
from residence_meals.services.plans import KitchenRepository


class ChangeReason(StrEnum):
    """Why a change was allowed or refused."""

    OPEN = "open"
    PAST = "past"
    DAY_LOCKED = "day_locked"
    PREVIOUS_DAY_LOCKED = "previous_day_locked"
    PREP_DOWNGRADE = "prep_downgrade"


@dataclass(frozen=True)
class ChangeDecision:
    """Outcome of evaluating one candidate transition."""

    allowed: bool
    reason: ChangeReason
    requires_confirmation: bool = False


def is_prep_downgrade(current: MealOption | None, intended: MealOption) -> bool:
    """Return True when moving from a tupper or bag to a non-container option."""
    return current in CONTAINER_OPTIONS and intended not in CONTAINER_OPTIONS


@dataclass
class ChangeGate:
    """Combine cutoffs, administrative locks and prep rules per transition."""

    kitchen_repository: KitchenRepository
    cutoff_policy: CutoffPolicy
    clock: Clock

    def can_change(
        self,
        day: date,
        meal_type: MealType,
        intended: MealOption,
        current: MealOption | None,
    ) -> bool:
        """Return True when the transition is currently permitted."""
        return self.evaluate(day, meal_type, intended, current).allowed

    def evaluate(
        self,
        day: date,
        meal_type: MealType,
        intended: MealOption,
        current: MealOption | None,
    ) -> ChangeDecision:
        """Evaluate a transition against the lock state read right now."""
        if day < self.clock.today():
            return ChangeDecision(allowed=False, reason=ChangeReason.PAST)

        # Breakfast and prep items are committed the evening before.
        needs_previous_day = meal_type == MealType.BREAKFAST or is_prep_option(
            intended, meal_type
        )
        refusal = self._lock_reason(day, meal_type, needs_previous_day)

        if is_prep_downgrade(current, intended):
            return ChangeDecision(
                allowed=True,
                reason=ChangeReason.PREP_DOWNGRADE,
                requires_confirmation=refusal is not None,
            )
        if refusal is not None:
            return ChangeDecision(allowed=False, reason=refusal)
        return ChangeDecision(allowed=True, reason=ChangeReason.OPEN)

    def evaluate_options(
        self, day: date, meal_type: MealType, current: MealOption | None
    ) -> dict[MealOption, ChangeDecision]:
        """Evaluate every option offered for the meal."""
        return {
            option: self.evaluate(day, meal_type, option, current)
            for option in OFFERED_OPTIONS[meal_type]
        }

    def _lock_reason(
        self, day: date, meal_type: MealType, needs_previous_day: bool
    ) -> ChangeReason | None:
        if needs_previous_day:
            previous = day - timedelta(days=1)
            locks = self.kitchen_repository.get_daily_locks(previous)
            if any(lock.is_locked for lock in locks.values()):
                return ChangeReason.PREVIOUS_DAY_LOCKED
            if self.cutoff_policy.is_time_locked(previous):
                return ChangeReason.PREVIOUS_DAY_LOCKED
            return None

        lock = self.kitchen_repository.get_daily_locks(day).get(meal_type)
        if lock is not None and lock.is_locked:
            return ChangeReason.DAY_LOCKED
        if self.cutoff_policy.is_time_locked(day):
            return ChangeReason.DAY_LOCKED
        return None
