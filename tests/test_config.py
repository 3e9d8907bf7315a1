"""Tests for settings loading."""

from body_tracker.config import Settings
from body_tracker.domain.units import UnitSystem


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "env-key")
    monkeypatch.setenv("DEFAULT_UNIT_SYSTEM", "metric")
    monkeypatch.setenv("HISTORY_LIMIT", "30")

    settings = Settings(_env_file=None)

    assert settings.supabase_url == "https://env.supabase.co"
    assert settings.default_unit_system is UnitSystem.METRIC
    assert settings.history_limit == 30
    assert settings.entries_table == "body_entries"
