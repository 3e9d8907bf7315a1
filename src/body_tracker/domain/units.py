"""Unit systems and conversions between metric and imperial values."""

from enum import StrEnum

from body_tracker.domain.errors import MeasurementValidationError

LBS_PER_KG = 2.20462
INCHES_PER_CM = 0.393701


class UnitSystem(StrEnum):
    """Unit system a set of measurements is expressed in."""

    IMPERIAL = "imperial"
    METRIC = "metric"

    @classmethod
    def parse(cls, raw: "str | UnitSystem | None") -> "UnitSystem":
        """Parse a unit system tag, rejecting unknown values."""
        if isinstance(raw, UnitSystem):
            return raw
        if raw is None:
            raise MeasurementValidationError("Unit system is required.")
        try:
            return cls(str(raw).strip().lower())
        except ValueError as exc:
            raise MeasurementValidationError(
                f"Unknown unit system: {raw!r}. Use 'imperial' or 'metric'."
            ) from exc

    @property
    def mass_unit(self) -> str:
        return "lb" if self is UnitSystem.IMPERIAL else "kg"

    @property
    def length_unit(self) -> str:
        return "in" if self is UnitSystem.IMPERIAL else "cm"


def kg_to_lbs(kg: float) -> float:
    """Convert kilograms to pounds."""
    return kg * LBS_PER_KG


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms."""
    return lbs / LBS_PER_KG


def cm_to_inches(cm: float) -> float:
    """Convert centimeters to inches."""
    return cm * INCHES_PER_CM


def inches_to_cm(inches: float) -> float:
    """Convert inches to centimeters."""
    return inches / INCHES_PER_CM


def to_imperial_mass(value: float, unit_system: UnitSystem) -> float:
    """Return a mass in pounds."""
    if unit_system is UnitSystem.METRIC:
        return kg_to_lbs(value)
    return value


def to_imperial_length(value: float, unit_system: UnitSystem) -> float:
    """Return a length in inches."""
    if unit_system is UnitSystem.METRIC:
        return cm_to_inches(value)
    return value


def from_imperial_mass(value: float, unit_system: UnitSystem) -> float:
    """Return a mass in pounds expressed in the given unit system."""
    if unit_system is UnitSystem.METRIC:
        return lbs_to_kg(value)
    return value


def from_imperial_length(value: float, unit_system: UnitSystem) -> float:
    """Return a length in inches expressed in the given unit system."""
    if unit_system is UnitSystem.METRIC:
        return inches_to_cm(value)
    return value


def convert_mass(
    value: float | None, source: UnitSystem, target: UnitSystem
) -> float | None:
    """Re-express a mass from one unit system in another."""
    if value is None or source is target:
        return value
    return from_imperial_mass(to_imperial_mass(value, source), target)


def convert_length(
    value: float | None, source: UnitSystem, target: UnitSystem
) -> float | None:
    """Re-express a length from one unit system in another."""
    if value is None or source is target:
        return value
    return from_imperial_length(to_imperial_length(value, source), target)
