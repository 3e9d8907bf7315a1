"""Supabase repository for measurement entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from body_tracker.domain.errors import EntryPersistenceError
from body_tracker.domain.measurements import (
    CalculationResult,
    Entry,
    EntryDraft,
    MeasurementInput,
)
from body_tracker.domain.units import UnitSystem
from body_tracker.services.entries import EntryRepository

_COLUMNS = (
    "id, user_id, entry_date, notes, unit_system, weight, height, age, neck, "
    "waist, hip, femininity_percentage, bmi, body_fat_percentage, lean_mass, "
    "fat_mass, created_at"
)


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for entry persistence."""

    client: Client
    table_name: str = "body_entries"

    def create_entry(self, draft: EntryDraft) -> Entry:
        """Insert an entry row and return the stored entry."""
        measurements = draft.measurements
        result = draft.result
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "user_id": draft.user_id,
                    "entry_date": draft.entry_date,
                    "notes": draft.notes,
                    "unit_system": draft.unit_system.value,
                    "weight": measurements.weight,
                    "height": measurements.height,
                    "age": measurements.age,
                    "neck": measurements.neck,
                    "waist": measurements.waist,
                    "hip": measurements.hip,
                    "femininity_percentage": measurements.femininity_percentage,
                    "bmi": result.bmi,
                    "body_fat_percentage": result.body_fat_percentage,
                    "lean_mass": result.lean_mass,
                    "fat_mass": result.fat_mass,
                }
            )
            .execute()
        )
        if not response.data:
            raise EntryPersistenceError("Failed to create entry in Supabase")
        return _parse_row(response.data[0])

    def list_entries(self, user_id: str, limit: int) -> list[Entry]:
        """Return a user's entries ordered by date, newest first."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .order("entry_date", desc=True)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> Entry:
    unit_system = UnitSystem.parse(row.get("unit_system") or UnitSystem.IMPERIAL)
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    return Entry(
        id=UUID(str(row["id"])),
        user_id=str(row["user_id"]),
        entry_date=str(row.get("entry_date", "")),
        notes=str(row.get("notes") or ""),
        unit_system=unit_system,
        measurements=MeasurementInput(
            weight=_required_float(row, "weight"),
            height=_required_float(row, "height"),
            age=int(_required_float(row, "age")),
            neck=_required_float(row, "neck"),
            waist=_required_float(row, "waist"),
            hip=_optional_float(row.get("hip")),
            femininity_percentage=int(row.get("femininity_percentage") or 0),
        ),
        result=CalculationResult(
            unit_system=unit_system,
            bmi=_optional_float(row.get("bmi")),
            body_fat_percentage=_optional_float(row.get("body_fat_percentage")),
            lean_mass=_optional_float(row.get("lean_mass")),
            fat_mass=_optional_float(row.get("fat_mass")),
        ),
        created_at=created_at,
    )


def _required_float(row: dict[str, object], column: str) -> float:
    value = row.get(column)
    if value is None:
        raise EntryPersistenceError(
            f"Entry row {row.get('id')} has no value for {column}"
        )
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise EntryPersistenceError(
            f"Entry row {row.get('id')} has a non-numeric {column}: {value!r}"
        ) from exc


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
