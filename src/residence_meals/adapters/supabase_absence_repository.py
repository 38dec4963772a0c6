"""Supabase repository for resident absences."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from residence_meals.domain.meals import Absence
from residence_meals.services.plans import AbsenceRepository

_COLUMNS = "id, user_id, start_date, end_date, notes"


@dataclass
class SupabaseAbsenceRepository(AbsenceRepository):
    """Supabase implementation for absences."""

    client: Client

    def list_absences(self, resident_id: UUID, start: date, end: date) -> list[Absence]:
        """Return a resident's absences overlapping the range."""
        response = (
            self.client.table("user_absences")
            .select(_COLUMNS)
            .eq("user_id", str(resident_id))
            .lte("start_date", end.isoformat())
            .gte("end_date", start.isoformat())
            .execute()
        )
        return [_parse_absence(row) for row in response.data or []]

    def list_absences_in_range(self, start: date, end: date) -> list[Absence]:
        """Return all absences overlapping the range."""
        response = (
            self.client.table("user_absences")
            .select(_COLUMNS)
            .lte("start_date", end.isoformat())
            .gte("end_date", start.isoformat())
            .execute()
        )
        return [_parse_absence(row) for row in response.data or []]

    def list_resident_absences(self, resident_id: UUID) -> list[Absence]:
        """Return a resident's absences, latest start first."""
        response = (
            self.client.table("user_absences")
            .select(_COLUMNS)
            .eq("user_id", str(resident_id))
            .order("start_date", desc=True)
            .execute()
        )
        return [_parse_absence(row) for row in response.data or []]

    def create_absence(
        self, resident_id: UUID, start: date, end: date, notes: str | None
    ) -> Absence:
        """Insert an absence row."""
        response = (
            self.client.table("user_absences")
            .insert(
                {
                    "user_id": str(resident_id),
                    "start_date": start.isoformat(),
                    "end_date": end.isoformat(),
                    "notes": notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create absence")
        return _parse_absence(response.data[0])

    def delete_absence(self, absence_id: UUID) -> None:
        """Delete an absence row."""
        self.client.table("user_absences").delete().eq("id", str(absence_id)).execute()


def _parse_absence(row: dict[str, object]) -> Absence:
    notes = row.get("notes")
    return Absence(
        id=UUID(str(row["id"])),
        resident_id=UUID(str(row["user_id"])),
        start_date=date.fromisoformat(str(row["start_date"])),
        end_date=date.fromisoformat(str(row["end_date"])),
        notes=str(notes) if notes else None,
    )
