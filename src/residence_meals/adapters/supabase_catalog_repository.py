"""Supabase repository for kitchen configuration and holidays."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from residence_meals.domain.kitchen import Holiday, ScheduleConfig
from residence_meals.services.catalog import CatalogRepository

_CONFIG_COLUMNS = (
    "id, schedule_weekdays, schedule_saturday, schedule_sunday_holiday, overrides"
)


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase implementation for schedule configuration and holidays."""

    client: Client

    def get_schedule_config(self) -> ScheduleConfig:
        """Return the singleton config row, or an empty schedule."""
        row = self._config_row()
        if row is None:
            return ScheduleConfig()
        return _parse_config(row)

    def save_schedule_config(self, config: ScheduleConfig) -> ScheduleConfig:
        """Update the config row, creating it when missing."""
        payload = {
            "schedule_weekdays": config.weekdays,
            "schedule_saturday": config.saturday,
            "schedule_sunday_holiday": config.sunday_or_holiday,
            "overrides": {
                day.isoformat(): value for day, value in config.overrides.items()
            },
        }
        row = self._config_row()
        if row is None:
            response = self.client.table("kitchen_config").insert(payload).execute()
        else:
            response = (
                self.client.table("kitchen_config")
                .update(payload)
                .eq("id", str(row["id"]))
                .execute()
            )
        if not response.data:
            raise RuntimeError("Failed to save kitchen config")
        return _parse_config(response.data[0])

    def list_holidays(self) -> list[Holiday]:
        """Return holidays ordered by date."""
        response = (
            self.client.table("holidays")
            .select("id, name, date")
            .order("date", desc=False)
            .execute()
        )
        return [_parse_holiday(row) for row in response.data or []]

    def create_holiday(self, day: date, name: str) -> Holiday:
        """Insert a holiday row."""
        response = (
            self.client.table("holidays")
            .insert({"name": name, "date": day.isoformat()})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create holiday")
        return _parse_holiday(response.data[0])

    def delete_holiday(self, holiday_id: UUID) -> None:
        """Delete a holiday row."""
        self.client.table("holidays").delete().eq("id", str(holiday_id)).execute()

    def _config_row(self) -> dict[str, object] | None:
        response = (
            self.client.table("kitchen_config")
            .select(_CONFIG_COLUMNS)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]


def _parse_config(row: dict[str, object]) -> ScheduleConfig:
    raw_overrides = row.get("overrides") or {}
    overrides = {
        date.fromisoformat(str(key)): str(value or "")
        for key, value in dict(raw_overrides).items()
    }
    return ScheduleConfig(
        weekdays=str(row.get("schedule_weekdays") or ""),
        saturday=str(row.get("schedule_saturday") or ""),
        sunday_or_holiday=str(row.get("schedule_sunday_holiday") or ""),
        overrides=overrides,
    )


def _parse_holiday(row: dict[str, object]) -> Holiday:
    return Holiday(
        id=UUID(str(row["id"])),
        day=date.fromisoformat(str(row["date"])),
        name=str(row.get("name", "")),
    )
