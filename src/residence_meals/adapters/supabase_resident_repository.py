"""Supabase repository for the resident directory."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from residence_meals.domain.meals import Resident
from residence_meals.services.plans import ResidentRepository

ACTIVE_STATUSES = ["APPROVED", "PENDING"]


@dataclass
class SupabaseResidentRepository(ResidentRepository):
    """Supabase implementation backed by the profiles table."""

    client: Client

    def list_residents(self) -> list[Resident]:
        """Return approved or pending profiles that are not kitchen staff."""
        response = (
            self.client.table("profiles")
            .select("id, full_name, email")
            .in_("status", ACTIVE_STATUSES)
            .or_("role.neq.KITCHEN,role.is.null")
            .order("full_name", desc=False)
            .execute()
        )
        return [_parse_resident(row) for row in response.data or []]


def _parse_resident(row: dict[str, object]) -> Resident:
    full_name = row.get("full_name")
    email = str(row.get("email") or "")
    name = str(full_name) if full_name else email.split("@", 1)[0]
    return Resident(id=UUID(str(row["id"])), name=name)
