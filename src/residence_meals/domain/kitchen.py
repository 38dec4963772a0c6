"""Kitchen configuration, lock and headcount models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from residence_meals.domain.meals import MealOption, MealType


@dataclass(frozen=True)
class ScheduleConfig:
    """Cutoff times per day class plus single-day overrides.

    Each cutoff is an ``HH:MM`` string; an empty value means no deadline.
    """

    weekdays: str = ""
    saturday: str = ""
    sunday_or_holiday: str = ""
    overrides: dict[date, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Holiday:
    """A date treated like a Sunday for cutoff purposes."""

    id: UUID
    day: date
    name: str


@dataclass(frozen=True)
class DailyLock:
    """Administrative lock for a date and meal."""

    day: date
    meal_type: MealType
    is_locked: bool
    locked_at: datetime | None = None
    locked_by: UUID | None = None


@dataclass(frozen=True)
class KitchenEntry:
    """A resident or guest line in a kitchen listing."""

    meal_type: MealType
    option: MealOption
    is_prep_container: bool
    count: int
    name: str
    resident_id: UUID | None = None
    guest_id: UUID | None = None
    source: str = "guest"
    notes: str | None = None
    prep_time: str | None = None

    @property
    def is_guest(self) -> bool:
        """Return True for guest entries."""
        return self.guest_id is not None


@dataclass
class ServiceGrouping:
    """Entries for one meal service grouped by bucket key."""

    day: date
    meal_type: MealType
    buckets: dict[str, list[KitchenEntry]] = field(default_factory=dict)

    def add(self, bucket: str, entry: KitchenEntry) -> None:
        """Append an entry to a bucket, keeping insertion order."""
        self.buckets.setdefault(bucket, []).append(entry)

    def totals(self) -> dict[str, int]:
        """Return the headcount per bucket."""
        return {
            bucket: sum(entry.count for entry in entries)
            for bucket, entries in self.buckets.items()
        }


@dataclass
class PrepSummary:
    """Items the kitchen must prepare today for the next day's service."""

    day: date
    early_breakfast: list[KitchenEntry] = field(default_factory=list)
    tupper: list[KitchenEntry] = field(default_factory=list)
    bag: list[KitchenEntry] = field(default_factory=list)

    def totals(self) -> dict[str, int]:
        """Return the headcount per partition."""
        return {
            "early_breakfast": sum(entry.count for entry in self.early_breakfast),
            "tupper": sum(entry.count for entry in self.tupper),
            "bag": sum(entry.count for entry in self.bag),
        }

    def conflicts(self) -> list[KitchenEntry]:
        """Return entries that landed in more than one partition."""
        seen: dict[int, int] = {}
        ordered: list[KitchenEntry] = []
        for entries in (self.early_breakfast, self.tupper, self.bag):
            for entry in entries:
                key = id(entry)
                if key not in seen:
                    seen[key] = 0
                    ordered.append(entry)
                seen[key] += 1
        return [entry for entry in ordered if seen[id(entry)] > 1]
