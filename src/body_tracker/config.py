"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from body_tracker.domain.units import UnitSystem

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    entries_table: str = "body_entries"
    default_unit_system: UnitSystem = UnitSystem.IMPERIAL
    history_limit: int = 365
    history_poll_interval_seconds: float = 2.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
