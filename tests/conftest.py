"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from residence_meals.config import Settings
from residence_meals.containers import AppContainer, assemble_container
from residence_meals.domain.kitchen import DailyLock, Holiday, ScheduleConfig
from residence_meals.domain.meals import (
    Absence,
    ExplicitOrder,
    GuestEntry,
    MealOption,
    MealType,
    Resident,
    WeeklyTemplate,
)
from residence_meals.services.catalog import CatalogRepository
from residence_meals.services.clock import Clock
from residence_meals.services.plans import (
    AbsenceRepository,
    KitchenRepository,
    OrderRepository,
    ResidentRepository,
)

# Monday.
TODAY = date(2025, 3, 10)
NOON = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


@dataclass
class FixedClock(Clock):
    """Clock frozen at a given instant."""

    current: datetime = NOON

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory schedule and holiday repository for tests."""

    config: ScheduleConfig = field(
        default_factory=lambda: ScheduleConfig(
            weekdays="20:00", saturday="14:00", sunday_or_holiday="11:00"
        )
    )
    holidays: dict[UUID, Holiday] = field(default_factory=dict)

    def get_schedule_config(self) -> ScheduleConfig:
        return self.config

    def save_schedule_config(self, config: ScheduleConfig) -> ScheduleConfig:
        self.config = config
        return config

    def list_holidays(self) -> list[Holiday]:
        return sorted(self.holidays.values(), key=lambda holiday: holiday.day)

    def create_holiday(self, day: date, name: str) -> Holiday:
        holiday = Holiday(id=uuid4(), day=day, name=name)
        self.holidays[holiday.id] = holiday
        return holiday

    def delete_holiday(self, holiday_id: UUID) -> None:
        self.holidays.pop(holiday_id, None)


@dataclass
class InMemoryOrderRepository(OrderRepository):
    """In-memory order and template repository for tests."""

    orders: dict[tuple[UUID, date, MealType], ExplicitOrder] = field(
        default_factory=dict
    )
    templates: dict[tuple[UUID, int, MealType], WeeklyTemplate] = field(
        default_factory=dict
    )

    def list_orders_in_range(
        self, resident_id: UUID, start: date, end: date
    ) -> list[ExplicitOrder]:
        return [
            order
            for order in self.orders.values()
            if order.resident_id == resident_id and start <= order.day <= end
        ]

    def list_orders_for_date(self, day: date) -> list[ExplicitOrder]:
        return [order for order in self.orders.values() if order.day == day]

    def upsert_order(self, order: ExplicitOrder) -> None:
        self.orders[(order.resident_id, order.day, order.meal_type)] = order

    def list_templates(self, resident_id: UUID) -> list[WeeklyTemplate]:
        return [
            template
            for template in self.templates.values()
            if template.resident_id == resident_id
        ]

    def list_templates_for_weekday(self, day_of_week: int) -> list[WeeklyTemplate]:
        return [
            template
            for template in self.templates.values()
            if template.day_of_week == day_of_week
        ]

    def upsert_template(self, template: WeeklyTemplate) -> None:
        key = (template.resident_id, template.day_of_week, template.meal_type)
        self.templates[key] = template


@dataclass
class InMemoryAbsenceRepository(AbsenceRepository):
    """In-memory absence repository for tests."""

    absences: dict[UUID, Absence] = field(default_factory=dict)

    def list_absences(self, resident_id: UUID, start: date, end: date) -> list[Absence]:
        return [
            absence
            for absence in self.absences.values()
            if absence.resident_id == resident_id and absence.overlaps(start, end)
        ]

    def list_absences_in_range(self, start: date, end: date) -> list[Absence]:
        return [
            absence
            for absence in self.absences.values()
            if absence.overlaps(start, end)
        ]

    def list_resident_absences(self, resident_id: UUID) -> list[Absence]:
        return sorted(
            (
                absence
                for absence in self.absences.values()
                if absence.resident_id == resident_id
            ),
            key=lambda absence: absence.start_date,
            reverse=True,
        )

    def create_absence(
        self, resident_id: UUID, start: date, end: date, notes: str | None
    ) -> Absence:
        absence = Absence(
            id=uuid4(),
            resident_id=resident_id,
            start_date=start,
            end_date=end,
            notes=notes,
        )
        self.absences[absence.id] = absence
        return absence

    def delete_absence(self, absence_id: UUID) -> None:
        self.absences.pop(absence_id, None)


@dataclass
class InMemoryKitchenRepository(KitchenRepository):
    """In-memory guest and lock repository for tests."""

    guests: list[GuestEntry] = field(default_factory=list)
    locks: dict[tuple[date, MealType], DailyLock] = field(default_factory=dict)
    lock_writes: list[DailyLock] = field(default_factory=list)

    def list_guests(self, day: date) -> list[GuestEntry]:
        return [guest for guest in self.guests if guest.day == day]

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
        guest = GuestEntry(
            id=uuid4(),
            day=day,
            meal_type=meal_type,
            count=count,
            option=option,
            is_prep_container=is_prep_container,
            notes=notes,
            created_by=created_by,
        )
        self.guests.append(guest)
        return guest

    def delete_guest(self, guest_id: UUID) -> None:
        self.guests = [guest for guest in self.guests if guest.id != guest_id]

    def get_daily_locks(self, day: date) -> dict[MealType, DailyLock]:
        return {
            meal_type: lock
            for (lock_day, meal_type), lock in self.locks.items()
            if lock_day == day
        }

    def upsert_daily_lock(self, lock: DailyLock) -> None:
        self.locks[(lock.day, lock.meal_type)] = lock
        self.lock_writes.append(lock)


@dataclass
class FailingKitchenRepository(InMemoryKitchenRepository):
    """Kitchen repository whose lock writes always fail."""

    def upsert_daily_lock(self, lock: DailyLock) -> None:
        raise RuntimeError("database unavailable")


@dataclass
class FlakyKitchenRepository(InMemoryKitchenRepository):
    """Kitchen repository whose first lock writes fail."""

    failures_left: int = 1

    def upsert_daily_lock(self, lock: DailyLock) -> None:
        if self.failures_left > 0:
            self.failures_left -= 1
            raise RuntimeError("database unavailable")
        super().upsert_daily_lock(lock)


@dataclass
class InMemoryResidentRepository(ResidentRepository):
    """In-memory resident directory for tests."""

    residents: list[Resident] = field(default_factory=list)

    def list_residents(self) -> list[Resident]:
        return list(self.residents)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
        kitchen_token="kitchen-token",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def absence_repository() -> InMemoryAbsenceRepository:
    return InMemoryAbsenceRepository()


@pytest.fixture
def kitchen_repository() -> InMemoryKitchenRepository:
    return InMemoryKitchenRepository()


@pytest.fixture
def resident_repository() -> InMemoryResidentRepository:
    return InMemoryResidentRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FixedClock,
    catalog_repository: InMemoryCatalogRepository,
    order_repository: InMemoryOrderRepository,
    absence_repository: InMemoryAbsenceRepository,
    kitchen_repository: InMemoryKitchenRepository,
    resident_repository: InMemoryResidentRepository,
) -> AppContainer:
    return assemble_container(
        settings=settings,
        clock=clock,
        catalog_repository=catalog_repository,
        order_repository=order_repository,
        absence_repository=absence_repository,
        kitchen_repository=kitchen_repository,
        resident_repository=resident_repository,
    )
