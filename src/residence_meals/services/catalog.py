"""Kitchen schedule configuration and holidays."""

import logging
from dataclasses import dataclass
from datetime import date, time
from typing import Protocol
from uuid import UUID

from residence_meals.domain.kitchen import Holiday, ScheduleConfig

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for schedule configuration and holidays."""

    def get_schedule_config(self) -> ScheduleConfig:
        """Return the schedule configuration, empty when none is stored."""

    def save_schedule_config(self, config: ScheduleConfig) -> ScheduleConfig:
        """Persist the schedule configuration and return it."""

    def list_holidays(self) -> list[Holiday]:
        """Return all holidays ordered by date."""

    def create_holiday(self, day: date, name: str) -> Holiday:
        """Create a holiday and return it."""

    def delete_holiday(self, holiday_id: UUID) -> None:
        """Delete a holiday."""


def parse_cutoff(raw: str | None) -> time | None:
    """Parse an ``HH:MM`` cutoff; empty values mean no deadline."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    hours, separator, minutes = cleaned.partition(":")
    if not separator or not hours.isdigit() or not minutes.isdigit():
        raise ValueError(f"Invalid cutoff time: {raw!r}")
    return time(hour=int(hours), minute=int(minutes))


@dataclass
class CatalogService:
    """Read and edit the kitchen schedule and holiday list."""

    repository: CatalogRepository

    def get_schedule(self) -> ScheduleConfig:
        """Return the current schedule configuration."""
        return self.repository.get_schedule_config()

    def update_schedule(
        self,
        weekdays: str,
        saturday: str,
        sunday_or_holiday: str,
        overrides: dict[date, str],
    ) -> ScheduleConfig:
        """Validate and persist a new schedule configuration."""
        for value in (weekdays, saturday, sunday_or_holiday, *overrides.values()):
            parse_cutoff(value)
        for day, value in overrides.items():
            if not value.strip():
                raise ValueError(f"Override for {day.isoformat()} needs a cutoff time")
        config = ScheduleConfig(
            weekdays=weekdays.strip(),
            saturday=saturday.strip(),
            sunday_or_holiday=sunday_or_holiday.strip(),
            overrides={day: value.strip() for day, value in overrides.items()},
        )
        saved = self.repository.save_schedule_config(config)
        _logger.info(
            "Schedule updated: weekdays=%s saturday=%s sunday_or_holiday=%s "
            "overrides=%s",
            config.weekdays,
            config.saturday,
            config.sunday_or_holiday,
            len(config.overrides),
        )
        return saved

    def list_holidays(self) -> list[Holiday]:
        """Return all holidays."""
        return self.repository.list_holidays()

    def holiday_dates(self) -> frozenset[date]:
        """Return the set of holiday dates."""
        return frozenset(holiday.day for holiday in self.repository.list_holidays())

    def add_holiday(self, day: date, name: str) -> Holiday:
        """Add a named holiday."""
        cleaned = name.strip()
        if not cleaned:
            raise ValueError("Holiday name is required")
        if day in self.holiday_dates():
            raise ValueError(f"A holiday already exists on {day.isoformat()}")
        return self.repository.create_holiday(day, cleaned)

    def delete_holiday(self, holiday_id: UUID) -> None:
        """Remove a holiday."""
        self.repository.delete_holiday(holiday_id)
