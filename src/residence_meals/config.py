"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from residence_meals.domain.meals import MealOption

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    kitchen_token: str | None = None
    residence_timezone: str = "Europe/Madrid"
    default_option: MealOption = MealOption.SKIP
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def staff_tokens(settings: Settings) -> set[str]:
    """Return the tokens accepted on kitchen endpoints."""
    tokens = {settings.admin_token}
    if settings.kitchen_token and settings.kitchen_token.strip():
        tokens.add(settings.kitchen_token.strip())
    return tokens
