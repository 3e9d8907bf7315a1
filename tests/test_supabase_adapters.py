"""Tests for the Supabase entry repository."""

from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from body_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from body_tracker.domain.errors import EntryPersistenceError
from body_tracker.domain.measurements import EntryDraft, MeasurementInput
from body_tracker.domain.units import UnitSystem
from body_tracker.services.calculator import calculate


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    orders: list[tuple[str, bool]] = field(default_factory=list)
    last_limit: int | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.orders.append((column, desc))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "user_id": "user-1",
        "entry_date": "2024-03-01",
        "notes": "after run",
        "unit_system": "metric",
        "weight": 70.5,
        "height": 175,
        "age": 35,
        "neck": 38,
        "waist": 80,
        "hip": None,
        "femininity_percentage": 20,
        "bmi": 23.0,
        "body_fat_percentage": 15.5,
        "lean_mass": 59.6,
        "fat_mass": 10.9,
        "created_at": "2024-03-01T08:30:00+00:00",
    }
    row.update(overrides)
    return row


def test_create_entry_inserts_payload_and_parses_row() -> None:
    client = FakeSupabaseClient()
    table = client.table("body_entries")
    measurements = MeasurementInput(
        weight=70.5, height=175, age=35, neck=38, waist=80, femininity_percentage=20
    )
    result = calculate(measurements, UnitSystem.METRIC)
    table.queue("insert", [_row()])

    repository = SupabaseEntryRepository(client)
    entry = repository.create_entry(
        EntryDraft(
            user_id="user-1",
            entry_date="2024-03-01",
            notes="after run",
            unit_system=UnitSystem.METRIC,
            measurements=measurements,
            result=result,
        )
    )

    payload = table.last_payload
    assert isinstance(payload, dict)
    assert payload["user_id"] == "user-1"
    assert payload["unit_system"] == "metric"
    assert payload["hip"] is None
    assert payload["body_fat_percentage"] == result.body_fat_percentage
    assert entry.unit_system is UnitSystem.METRIC
    assert entry.measurements.hip is None
    assert entry.measurements.age == 35
    assert entry.result.fat_mass == 10.9
    assert entry.created_at is not None


def test_create_entry_raises_without_returned_row() -> None:
    client = FakeSupabaseClient()
    measurements = MeasurementInput(weight=150, height=68, age=30, neck=15, waist=30)

    repository = SupabaseEntryRepository(client)
    with pytest.raises(EntryPersistenceError):
        repository.create_entry(
            EntryDraft(
                user_id="user-1",
                entry_date="2024-03-01",
                notes="",
                unit_system=UnitSystem.IMPERIAL,
                measurements=measurements,
                result=calculate(measurements, UnitSystem.IMPERIAL),
            )
        )


def test_list_entries_filters_orders_and_limits() -> None:
    client = FakeSupabaseClient()
    table = client.table("measurements")
    table.queue(
        "select",
        [
            _row(entry_date="2024-03-01", hip=95.0),
            _row(entry_date="2024-02-01", created_at=None, bmi=None),
        ],
    )

    repository = SupabaseEntryRepository(client, table_name="measurements")
    entries = repository.list_entries("user-1", limit=10)

    assert ("user_id", "user-1") in table.last_filters
    assert table.orders == [("entry_date", True), ("created_at", True)]
    assert table.last_limit == 10
    assert [entry.entry_date for entry in entries] == ["2024-03-01", "2024-02-01"]
    assert entries[0].measurements.hip == 95.0
    assert entries[1].created_at is None
    assert entries[1].result.bmi is None


@pytest.mark.parametrize(
    "overrides", [{"weight": None}, {"waist": None}, {"height": "tall"}]
)
def test_list_entries_rejects_malformed_rows(overrides: dict[str, object]) -> None:
    client = FakeSupabaseClient()
    client.table("body_entries").queue("select", [_row(**overrides)])

    repository = SupabaseEntryRepository(client)
    with pytest.raises(EntryPersistenceError):
        repository.list_entries("user-1", limit=10)
