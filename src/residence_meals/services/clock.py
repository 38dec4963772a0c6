"""Wall-clock access in the residence timezone."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime:
        """Return the current timezone-aware local time."""

    def today(self) -> date:
        """Return the current local calendar date."""


@dataclass
class ZoneClock(Clock):
    """Clock that reads the system time in a named timezone."""

    timezone_name: str

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name))

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return self.now().date()
