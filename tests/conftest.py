"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from body_tracker.config import Settings
from body_tracker.containers import AppContainer
from body_tracker.domain.measurements import Entry, EntryDraft, MeasurementInput
from body_tracker.domain.units import UnitSystem
from body_tracker.services.calculator import calculate
from body_tracker.services.entries import EntryRepository, EntryService

_FAKE_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    entries: list[Entry] = field(default_factory=list)
    list_calls: int = 0

    def create_entry(self, draft: EntryDraft) -> Entry:
        entry = Entry(
            id=uuid4(),
            user_id=draft.user_id,
            entry_date=draft.entry_date,
            notes=draft.notes,
            unit_system=draft.unit_system,
            measurements=draft.measurements,
            result=draft.result,
            created_at=datetime.now(tz=UTC),
        )
        self.entries.append(entry)
        return entry

    def list_entries(self, user_id: str, limit: int) -> list[Entry]:
        self.list_calls += 1
        owned = [entry for entry in self.entries if entry.user_id == user_id]
        owned.sort(key=lambda entry: entry.created_at, reverse=True)
        owned.sort(key=lambda entry: entry.entry_date, reverse=True)
        return owned[:limit]


def make_entry(  # noqa: PLR0913
    entry_date: str,
    weight: float = 150.0,
    unit_system: UnitSystem = UnitSystem.IMPERIAL,
    hip: float | None = 38.0,
    notes: str = "",
    user_id: str = "user-1",
) -> Entry:
    """Build an entry with a real calculation result."""
    if unit_system is UnitSystem.METRIC:
        measurements = MeasurementInput(
            weight=weight,
            height=172.7,
            age=30,
            neck=38.1,
            waist=76.2,
            hip=hip,
            femininity_percentage=50,
        )
    else:
        measurements = MeasurementInput(
            weight=weight,
            height=68.0,
            age=30,
            neck=15.0,
            waist=30.0,
            hip=hip,
            femininity_percentage=50,
        )
    return Entry(
        id=uuid4(),
        user_id=user_id,
        entry_date=entry_date,
        notes=notes,
        unit_system=unit_system,
        measurements=measurements,
        result=calculate(measurements, unit_system),
        created_at=datetime.now(tz=UTC),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=_FAKE_SERVICE_KEY,
        history_poll_interval_seconds=0.01,
    )


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def entry_service(
    settings: Settings, entry_repository: InMemoryEntryRepository
) -> EntryService:
    return EntryService(
        repository=entry_repository,
        poll_interval_seconds=settings.history_poll_interval_seconds,
        history_limit=settings.history_limit,
    )


@pytest.fixture
def container(settings: Settings, entry_service: EntryService) -> AppContainer:
    return AppContainer(settings=settings, entry_service=entry_service)
