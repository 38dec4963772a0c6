"""Supabase repository for meal guests and daily locks."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from residence_meals.domain.kitchen import DailyLock
from residence_meals.domain.meals import GuestEntry, MealOption, MealType
from residence_meals.services.plans import KitchenRepository

_GUEST_COLUMNS = "id, date, meal_type, count, option, is_bag, notes, created_by"


@dataclass
class SupabaseKitchenRepository(KitchenRepository):
    """Supabase implementation for guests and locks."""

    client: Client

    def list_guests(self, day: date) -> list[GuestEntry]:
        """Return guest rows for a date in creation order."""
        response = (
            self.client.table("meal_guests")
            .select(_GUEST_COLUMNS)
            .eq("date", day.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_guest(row) for row in response.data or []]

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
        """Insert a guest row."""
        response = (
            self.client.table("meal_guests")
            .insert(
                {
                    "date": day.isoformat(),
                    "meal_type": meal_type.value,
                    "count": count,
                    "option": option.value,
                    "is_bag": is_prep_container,
                    "notes": notes,
                    "created_by": str(created_by) if created_by else None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create guest entry")
        return _parse_guest(response.data[0])

    def delete_guest(self, guest_id: UUID) -> None:
        """Delete a guest row."""
        self.client.table("meal_guests").delete().eq("id", str(guest_id)).execute()

    def get_daily_locks(self, day: date) -> dict[MealType, DailyLock]:
        """Return lock rows for a date keyed by meal type."""
        response = (
            self.client.table("daily_meal_status")
            .select("date, meal_type, is_locked, locked_at, locked_by")
            .eq("date", day.isoformat())
            .execute()
        )
        locks = {}
        for row in response.data or []:
            lock = _parse_lock(row)
            locks[lock.meal_type] = lock
        return locks

    def upsert_daily_lock(self, lock: DailyLock) -> None:
        """Upsert a lock row keyed on date and meal."""
        self.client.table("daily_meal_status").upsert(
            {
                "date": lock.day.isoformat(),
                "meal_type": lock.meal_type.value,
                "is_locked": lock.is_locked,
                "locked_at": lock.locked_at.isoformat() if lock.locked_at else None,
                "locked_by": str(lock.locked_by) if lock.locked_by else None,
            },
            on_conflict="date,meal_type",
        ).execute()


def _parse_guest(row: dict[str, object]) -> GuestEntry:
    created_by = row.get("created_by")
    notes = row.get("notes")
    return GuestEntry(
        id=UUID(str(row["id"])),
        day=date.fromisoformat(str(row["date"])),
        meal_type=MealType(row["meal_type"]),
        count=int(row.get("count") or 0),
        option=MealOption(row.get("option") or MealOption.STANDARD),
        is_prep_container=bool(row.get("is_bag") or False),
        notes=str(notes) if notes else None,
        created_by=UUID(str(created_by)) if created_by else None,
    )


def _parse_lock(row: dict[str, object]) -> DailyLock:
    locked_at_raw = row.get("locked_at")
    locked_by = row.get("locked_by")
    return DailyLock(
        day=date.fromisoformat(str(row["date"])),
        meal_type=MealType(row["meal_type"]),
        is_locked=bool(row.get("is_locked") or False),
        locked_at=(
            datetime.fromisoformat(locked_at_raw)
            if isinstance(locked_at_raw, str) and locked_at_raw
            else None
        ),
        locked_by=UUID(str(locked_by)) if locked_by else None,
    )
