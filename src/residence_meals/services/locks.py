"""Administrative meal locks."""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from residence_meals.domain.kitchen import DailyLock
from residence_meals.domain.meals import MealType
from residence_meals.services.clock import Clock
from residence_meals.services.cutoff import CutoffPolicy
from residence_meals.services.plans import KitchenRepository

_logger = logging.getLogger(__name__)


@dataclass
class LockMaterializer:
    """Persist time-based locks the first time they are observed.

    Once today's deadline has passed, writing the lock keeps the day closed
    even if the schedule is edited afterwards.
    """

    kitchen_repository: KitchenRepository
    cutoff_policy: CutoffPolicy
    clock: Clock

    def ensure_materialized(self, day: date, meal_type: MealType) -> bool:
        """Return the lock state for a meal, persisting a passed cutoff."""
        stored = self.kitchen_repository.get_daily_locks(day).get(meal_type)
        if stored is not None and stored.is_locked:
            return True
        if day != self.clock.today() or not self.cutoff_policy.is_time_locked(day):
            return False
        try:
            self.kitchen_repository.upsert_daily_lock(
                DailyLock(
                    day=day,
                    meal_type=meal_type,
                    is_locked=True,
                    locked_at=self.clock.now(),
                )
            )
        except Exception:
            _logger.exception(
                "Failed to persist cutoff lock: day=%s meal=%s",
                day.isoformat(),
                meal_type.value,
            )
        else:
            _logger.info(
                "Cutoff lock persisted: day=%s meal=%s",
                day.isoformat(),
                meal_type.value,
            )
        return True

    def ensure_day_materialized(self, day: date) -> dict[MealType, bool]:
        """Run materialization for every meal of a date."""
        return {
            meal_type: self.ensure_materialized(day, meal_type)
            for meal_type in MealType
        }


@dataclass
class LockAdminService:
    """Open and close meal services by hand."""

    kitchen_repository: KitchenRepository
    materializer: LockMaterializer
    clock: Clock

    def lock_status(self, day: date) -> dict[MealType, bool]:
        """Return the per-meal lock state for a date."""
        return self.materializer.ensure_day_materialized(day)

    def set_lock(
        self,
        day: date,
        meal_type: MealType,
        locked: bool,
        actor: UUID | None = None,
    ) -> DailyLock:
        """Close or reopen one meal service."""
        if locked and day > self.clock.today():
            raise ValueError("Future days cannot be closed")
        lock = DailyLock(
            day=day,
            meal_type=meal_type,
            is_locked=locked,
            locked_at=self.clock.now() if locked else None,
            locked_by=actor,
        )
        self.kitchen_repository.upsert_daily_lock(lock)
        _logger.info(
            "Lock %s: day=%s meal=%s actor=%s",
            "closed" if locked else "reopened",
            day.isoformat(),
            meal_type.value,
            actor,
        )
        return lock

    def set_day_lock(
        self, day: date, locked: bool, actor: UUID | None = None
    ) -> list[DailyLock]:
        """Close or reopen every meal service of a date."""
        if locked and day > self.clock.today():
            raise ValueError("Future days cannot be closed")
        return [self.set_lock(day, meal_type, locked, actor) for meal_type in MealType]
