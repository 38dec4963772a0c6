"""Tests for container wiring."""

from residence_meals import containers
from residence_meals.adapters.supabase_order_repository import SupabaseOrderRepository
from residence_meals.services.clock import ZoneClock


def test_build_container_creates_services(settings, monkeypatch) -> None:
    client = object()
    calls: list[tuple[str, str]] = []

    def fake_create_client(url: str, key: str) -> object:
        calls.append((url, key))
        return client

    monkeypatch.setattr(containers, "create_client", fake_create_client)

    container = containers.build_container(settings)

    assert calls == [("https://example.supabase.co", "service-key")]
    assert isinstance(container.clock, ZoneClock)
    assert container.clock.timezone_name == "Europe/Madrid"
    order_repository = container.ordering_service.order_repository
    assert isinstance(order_repository, SupabaseOrderRepository)
    assert order_repository.client is client
    assert container.kitchen_aggregator.default_option == settings.default_option
