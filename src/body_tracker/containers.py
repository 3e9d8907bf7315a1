"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from body_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from body_tracker.config import Settings
from body_tracker.services.entries import EntryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(
        client=supabase_client,
        table_name=resolved_settings.entries_table,
    )
    entry_service = EntryService(
        repository=entry_repository,
        poll_interval_seconds=resolved_settings.history_poll_interval_seconds,
        history_limit=resolved_settings.history_limit,
    )

    return AppContainer(
        settings=resolved_settings,
        entry_service=entry_service,
    )
