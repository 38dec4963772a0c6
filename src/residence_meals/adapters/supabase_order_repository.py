"""Supabase repository for meal orders and weekly templates."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from residence_meals.domain.meals import (
    ExplicitOrder,
    MealOption,
    MealType,
    OrderStatus,
    WeeklyTemplate,
)
from residence_meals.services.plans import OrderRepository

_ORDER_COLUMNS = "user_id, date, meal_type, option, is_bag, bag_time, status"
_TEMPLATE_COLUMNS = "user_id, day_of_week, meal_type, option, is_bag"


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation for orders and templates."""

    client: Client

    def list_orders_in_range(
        self, resident_id: UUID, start: date, end: date
    ) -> list[ExplicitOrder]:
        """Return a resident's orders between two dates inclusive."""
        response = (
            self.client.table("meal_orders")
            .select(_ORDER_COLUMNS)
            .eq("user_id", str(resident_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .execute()
        )
        return [_parse_order(row) for row in response.data or []]

    def list_orders_for_date(self, day: date) -> list[ExplicitOrder]:
        """Return all orders for a date."""
        response = (
            self.client.table("meal_orders")
            .select(_ORDER_COLUMNS)
            .eq("date", day.isoformat())
            .execute()
        )
        return [_parse_order(row) for row in response.data or []]

    def upsert_order(self, order: ExplicitOrder) -> None:
        """Upsert an order keyed on resident, date and meal."""
        self.client.table("meal_orders").upsert(
            {
                "user_id": str(order.resident_id),
                "date": order.day.isoformat(),
                "meal_type": order.meal_type.value,
                "option": order.option.value,
                "is_bag": order.is_prep_container,
                "bag_time": order.prep_time,
                "status": order.status.value,
            },
            on_conflict="user_id,date,meal_type",
        ).execute()

    def list_templates(self, resident_id: UUID) -> list[WeeklyTemplate]:
        """Return a resident's templates."""
        response = (
            self.client.table("meal_templates")
            .select(_TEMPLATE_COLUMNS)
            .eq("user_id", str(resident_id))
            .execute()
        )
        return [_parse_template(row) for row in response.data or []]

    def list_templates_for_weekday(self, day_of_week: int) -> list[WeeklyTemplate]:
        """Return all templates for a weekday."""
        response = (
            self.client.table("meal_templates")
            .select(_TEMPLATE_COLUMNS)
            .eq("day_of_week", day_of_week)
            .execute()
        )
        return [_parse_template(row) for row in response.data or []]

    def upsert_template(self, template: WeeklyTemplate) -> None:
        """Upsert a template keyed on resident, weekday and meal."""
        self.client.table("meal_templates").upsert(
            {
                "user_id": str(template.resident_id),
                "day_of_week": template.day_of_week,
                "meal_type": template.meal_type.value,
                "option": template.option.value,
                "is_bag": template.is_prep_container,
            },
            on_conflict="user_id,day_of_week,meal_type",
        ).execute()


def _parse_order(row: dict[str, object]) -> ExplicitOrder:
    bag_time = row.get("bag_time")
    return ExplicitOrder(
        resident_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])),
        meal_type=MealType(row["meal_type"]),
        option=MealOption(row["option"]),
        is_prep_container=bool(row.get("is_bag") or False),
        prep_time=str(bag_time) if bag_time else None,
        status=_parse_status(row.get("status")),
    )


def _parse_status(raw: object) -> OrderStatus:
    # Rows created before statuses existed default to "pending" in the table.
    if raw == OrderStatus.TEMPLATE.value:
        return OrderStatus.TEMPLATE
    return OrderStatus.CONFIRMED


def _parse_template(row: dict[str, object]) -> WeeklyTemplate:
    return WeeklyTemplate(
        resident_id=UUID(str(row["user_id"])),
        day_of_week=int(row["day_of_week"]),
        meal_type=MealType(row["meal_type"]),
        option=MealOption(row["option"]),
        is_prep_container=bool(row.get("is_bag") or False),
    )
