"""Resident-facing meal ordering."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID

from residence_meals.domain.meals import (
    ExplicitOrder,
    MealOption,
    MealType,
    OrderStatus,
    ResolvedPlan,
)
from residence_meals.services.catalog import parse_cutoff
from residence_meals.services.gate import ChangeDecision, ChangeGate
from residence_meals.services.plans import OrderRepository, ensure_offered
from residence_meals.services.resolver import OrderResolver

_logger = logging.getLogger(__name__)

MAX_RANGE_DAYS = 31


class CommitStatus(StrEnum):
    """Outcome of a commit attempt."""

    SAVED = "saved"
    CLOSED = "closed"
    CONFIRMATION_REQUIRED = "confirmation_required"


@dataclass(frozen=True)
class CommitResult:
    """Result of trying to store a resident's choice."""

    status: CommitStatus
    decision: ChangeDecision
    order: ExplicitOrder | None = None


@dataclass(frozen=True)
class MealSlot:
    """A resident's plan for one meal with the options they may pick now."""

    plan: ResolvedPlan
    effective_option: MealOption
    options: dict[MealOption, ChangeDecision]


@dataclass
class OrderingService:
    """Resolve, gate and store resident meal choices."""

    resolver: OrderResolver
    gate: ChangeGate
    order_repository: OrderRepository
    default_option: MealOption = MealOption.SKIP

    def plan_for_range(
        self, resident_id: UUID, start: date, end: date
    ) -> dict[date, dict[MealType, MealSlot]]:
        """Return plans and per-option decisions for a date range."""
        if (end - start).days >= MAX_RANGE_DAYS:
            raise ValueError(f"Range must not exceed {MAX_RANGE_DAYS} days")
        resolved = self.resolver.resolve_range(resident_id, start, end)
        result: dict[date, dict[MealType, MealSlot]] = {}
        for day, plans in resolved.items():
            result[day] = {}
            for meal_type, plan in plans.items():
                current = plan.effective_option(self.default_option)
                result[day][meal_type] = MealSlot(
                    plan=plan,
                    effective_option=current,
                    options=self.gate.evaluate_options(day, meal_type, current),
                )
        return result

    def commit(  # noqa: PLR0913
        self,
        resident_id: UUID,
        day: date,
        meal_type: MealType,
        option: MealOption,
        prep_time: str | None = None,
        confirmed: bool = False,
    ) -> CommitResult:
        """Store a resident's choice when the gate allows it."""
        ensure_offered(meal_type, option)
        if prep_time is not None:
            if option != MealOption.BAG:
                raise ValueError("A pickup time can only be set for a bag")
            parse_cutoff(prep_time)

        current = self.resolver.resolve(resident_id, day, meal_type)
        decision = self.gate.evaluate(
            day, meal_type, option, current.effective_option(self.default_option)
        )
        if not decision.allowed:
            return CommitResult(status=CommitStatus.CLOSED, decision=decision)
        if decision.requires_confirmation and not confirmed:
            return CommitResult(
                status=CommitStatus.CONFIRMATION_REQUIRED, decision=decision
            )

        order = ExplicitOrder(
            resident_id=resident_id,
            day=day,
            meal_type=meal_type,
            option=option,
            is_prep_container=option == MealOption.BAG,
            prep_time=prep_time,
            status=OrderStatus.CONFIRMED,
        )
        self.order_repository.upsert_order(order)
        _logger.info(
            "Order saved: resident=%s day=%s meal=%s option=%s reason=%s",
            resident_id,
            day.isoformat(),
            meal_type.value,
            option.value,
            decision.reason.value,
        )
        return CommitResult(status=CommitStatus.SAVED, decision=decision, order=order)
