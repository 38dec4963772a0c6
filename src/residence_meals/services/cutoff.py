"""Time-based ordering cutoffs."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, time, timedelta

from residence_meals.domain.kitchen import ScheduleConfig
from residence_meals.services.catalog import CatalogRepository, parse_cutoff
from residence_meals.services.clock import Clock

_logger = logging.getLogger(__name__)

SATURDAY = 5
SUNDAY = 6


@dataclass(frozen=True)
class ScheduleTier:
    """A day class with the schedule field that supplies its cutoff."""

    name: str
    applies: Callable[[date, ScheduleConfig, frozenset[date]], bool]
    cutoff: Callable[[date, ScheduleConfig], str]


def _has_override(day: date, config: ScheduleConfig, _holidays: frozenset[date]) -> bool:
    return day in config.overrides


def _is_sunday_or_holiday(
    day: date, _config: ScheduleConfig, holidays: frozenset[date]
) -> bool:
    return day.weekday() == SUNDAY or day in holidays


def _is_saturday(day: date, _config: ScheduleConfig, _holidays: frozenset[date]) -> bool:
    return day.weekday() == SATURDAY


def _always(_day: date, _config: ScheduleConfig, _holidays: frozenset[date]) -> bool:
    return True


# First match wins.
SCHEDULE_TIERS: tuple[ScheduleTier, ...] = (
    ScheduleTier("override", _has_override, lambda day, c: c.overrides[day]),
    ScheduleTier(
        "sunday_or_holiday", _is_sunday_or_holiday, lambda _, c: c.sunday_or_holiday
    ),
    ScheduleTier("saturday", _is_saturday, lambda _, c: c.saturday),
    ScheduleTier("weekdays", _always, lambda _, c: c.weekdays),
)


def select_tier(
    day: date,
    config: ScheduleConfig,
    holidays: frozenset[date],
    tiers: tuple[ScheduleTier, ...] = SCHEDULE_TIERS,
) -> ScheduleTier:
    """Return the first tier whose predicate matches the day."""
    for tier in tiers:
        if tier.applies(day, config, holidays):
            return tier
    raise LookupError(f"No schedule tier matches {day.isoformat()}")


@dataclass
class CutoffPolicy:
    """Decide whether a date is closed by its ordering deadline."""

    catalog_repository: CatalogRepository
    clock: Clock

    def cutoff_for(self, day: date) -> time | None:
        """Return the cutoff time that applies to a date, if any."""
        config = self.catalog_repository.get_schedule_config()
        holidays = frozenset(
            holiday.day for holiday in self.catalog_repository.list_holidays()
        )
        tier = select_tier(day, config, holidays)
        raw = tier.cutoff(day, config)
        try:
            return parse_cutoff(raw)
        except ValueError:
            _logger.warning(
                "Ignoring malformed cutoff: day=%s tier=%s value=%r",
                day.isoformat(),
                tier.name,
                raw,
            )
            return None

    def is_time_locked(self, day: date) -> bool:
        """Return True when the date is past its deadline."""
        today = self.clock.today()
        if day < today:
            return True
        if day > today:
            return False
        cutoff = self.cutoff_for(day)
        if cutoff is None:
            return False
        return self.clock.now().time() >= cutoff

    def time_until_cutoff(self) -> timedelta | None:
        """Return the time left before today's deadline, if it is still ahead."""
        now = self.clock.now()
        cutoff = self.cutoff_for(now.date())
        if cutoff is None:
            return None
        deadline = now.replace(
            hour=cutoff.hour, minute=cutoff.minute, second=0, microsecond=0
        )
        if deadline <= now:
            return None
        return deadline - now
