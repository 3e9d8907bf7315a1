"""Domain models for body measurements and computed metrics."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from body_tracker.domain.units import UnitSystem


@dataclass(frozen=True)
class MeasurementInput:
    """Raw measurements as entered, in a single unit system."""

    weight: float
    height: float
    age: int
    neck: float
    waist: float
    hip: float | None = None
    femininity_percentage: int = 0


@dataclass(frozen=True)
class CalculationResult:
    """Metrics computed from a measurement input.

    Lean and fat mass are expressed in ``unit_system``.
    """

    unit_system: UnitSystem
    bmi: float | None
    body_fat_percentage: float | None
    lean_mass: float | None
    fat_mass: float | None


@dataclass(frozen=True)
class EntryDraft:
    """Entry payload handed to the store before it assigns an id."""

    user_id: str
    entry_date: str
    notes: str
    unit_system: UnitSystem
    measurements: MeasurementInput
    result: CalculationResult


@dataclass(frozen=True)
class Entry:
    """Persisted measurement entry."""

    id: UUID
    user_id: str
    entry_date: str
    notes: str
    unit_system: UnitSystem
    measurements: MeasurementInput
    result: CalculationResult
    created_at: datetime | None = None
