"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from residence_meals.adapters.supabase_absence_repository import (
    SupabaseAbsenceRepository,
)
from residence_meals.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from residence_meals.adapters.supabase_kitchen_repository import (
    SupabaseKitchenRepository,
)
from residence_meals.adapters.supabase_order_repository import SupabaseOrderRepository
from residence_meals.adapters.supabase_resident_repository import (
    SupabaseResidentRepository,
)
from residence_meals.config import Settings
from residence_meals.services.catalog import CatalogRepository, CatalogService
from residence_meals.services.clock import Clock, ZoneClock
from residence_meals.services.cutoff import CutoffPolicy
from residence_meals.services.gate import ChangeGate
from residence_meals.services.kitchen import KitchenAggregator
from residence_meals.services.locks import LockAdminService, LockMaterializer
from residence_meals.services.ordering import OrderingService
from residence_meals.services.plans import (
    AbsenceRepository,
    KitchenRepository,
    OrderRepository,
    PlanService,
    ResidentRepository,
)
from residence_meals.services.resolver import OrderResolver


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    catalog_service: CatalogService
    plan_service: PlanService
    resolver: OrderResolver
    cutoff_policy: CutoffPolicy
    change_gate: ChangeGate
    ordering_service: OrderingService
    kitchen_aggregator: KitchenAggregator
    lock_admin_service: LockAdminService


def assemble_container(  # noqa: PLR0913
    settings: Settings,
    clock: Clock,
    catalog_repository: CatalogRepository,
    order_repository: OrderRepository,
    absence_repository: AbsenceRepository,
    kitchen_repository: KitchenRepository,
    resident_repository: ResidentRepository,
) -> AppContainer:
    """Wire services on top of the given repositories."""
    resolver = OrderResolver(
        order_repository=order_repository,
        absence_repository=absence_repository,
        resident_repository=resident_repository,
    )
    cutoff_policy = CutoffPolicy(catalog_repository=catalog_repository, clock=clock)
    change_gate = ChangeGate(
        kitchen_repository=kitchen_repository,
        cutoff_policy=cutoff_policy,
        clock=clock,
    )
    materializer = LockMaterializer(
        kitchen_repository=kitchen_repository,
        cutoff_policy=cutoff_policy,
        clock=clock,
    )
    return AppContainer(
        settings=settings,
        clock=clock,
        catalog_service=CatalogService(catalog_repository),
        plan_service=PlanService(
            order_repository=order_repository,
            absence_repository=absence_repository,
            kitchen_repository=kitchen_repository,
        ),
        resolver=resolver,
        cutoff_policy=cutoff_policy,
        change_gate=change_gate,
        ordering_service=OrderingService(
            resolver=resolver,
            gate=change_gate,
            order_repository=order_repository,
            default_option=settings.default_option,
        ),
        kitchen_aggregator=KitchenAggregator(
            resolver=resolver,
            kitchen_repository=kitchen_repository,
            default_option=settings.default_option,
        ),
        lock_admin_service=LockAdminService(
            kitchen_repository=kitchen_repository,
            materializer=materializer,
            clock=clock,
        ),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return assemble_container(
        settings=resolved_settings,
        clock=ZoneClock(resolved_settings.residence_timezone),
        catalog_repository=SupabaseCatalogRepository(supabase_client),
        order_repository=SupabaseOrderRepository(supabase_client),
        absence_repository=SupabaseAbsenceRepository(supabase_client),
        kitchen_repository=SupabaseKitchenRepository(supabase_client),
        resident_repository=SupabaseResidentRepository(supabase_client),
    )
