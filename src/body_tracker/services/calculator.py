"""Body composition calculation engine.

All formulas work in imperial units (pounds, inches). Metric input is
converted before any formula runs and derived masses are converted back to
the caller's unit system. The module holds no state and performs no I/O.
"""

import math
from collections.abc import Mapping

from body_tracker.domain.errors import BodyFatDomainError, MeasurementValidationError
from body_tracker.domain.measurements import CalculationResult, MeasurementInput
from body_tracker.domain.units import (
    UnitSystem,
    from_imperial_mass,
    to_imperial_length,
    to_imperial_mass,
)

BMI_IMPERIAL_FACTOR = 703
MAX_FEMININITY_PERCENTAGE = 100

_REQUIRED_FIELDS = ("weight", "height", "neck", "waist")


def calculate_bmi(weight_lb: object, height_in: object) -> float | None:
    """Return BMI from pounds and inches, or None when it can't be computed."""
    weight = _positive_or_none(weight_lb)
    height = _positive_or_none(height_in)
    if weight is None or height is None:
        return None
    return (weight / height**2) * BMI_IMPERIAL_FACTOR


def round_up_half(value: float) -> float:
    """Round up to the nearest 0.5."""
    return math.ceil(value * 2) / 2


def round_down_half(value: float) -> float:
    """Round down to the nearest 0.5."""
    return math.floor(value * 2) / 2


def round_nearest_half(value: float) -> float:
    """Round to the nearest 0.5, halves going up."""
    return math.floor(value * 2 + 0.5) / 2


def male_body_fat(waist_in: float, neck_in: float, height_in: float) -> float:
    """U.S. Navy male formula on already rounded inputs."""
    return (
        86.010 * _log10("waist minus neck", waist_in - neck_in)
        - 70.041 * _log10("height", height_in)
        + 36.76
    )


def female_body_fat(
    waist_in: float, hip_in: float, neck_in: float, height_in: float
) -> float:
    """U.S. Navy female formula on already rounded inputs."""
    return (
        163.205 * _log10("waist plus hip minus neck", waist_in + hip_in - neck_in)
        - 97.684 * _log10("height", height_in)
        - 78.387
    )


def estimate_body_fat(  # noqa: PLR0913
    weight_lb: float | None,
    height_in: float | None,
    neck_in: float | None,
    waist_in: float | None,
    hip_in: float | None = None,
    femininity_percentage: int = 0,
) -> float | None:
    """Estimate body fat %, blending male and female formulas.

    Without a hip measurement the male result is returned whatever the
    femininity percentage is. Returns None when a required value is missing;
    a percentage outside 0 to 100 or with a fraction is rejected.
    """
    _check_femininity(femininity_percentage)
    values = [_positive_or_none(v) for v in (weight_lb, height_in, neck_in, waist_in)]
    if any(value is None for value in values):
        return None
    _, height, neck, waist = values

    neck = round_up_half(neck)
    waist = round_down_half(waist)
    height = round_nearest_half(height)

    male = male_body_fat(waist, neck, height)
    hip = _positive_or_none(hip_in)
    if hip is None:
        return male

    female = female_body_fat(waist, round_down_half(hip), neck, height)
    fraction = femininity_percentage / 100
    return male * (1 - fraction) + female * fraction


def derive_masses(
    weight_lb: float, body_fat_percentage: float | None, unit_system: UnitSystem
) -> tuple[float | None, float | None]:
    """Return (lean mass, fat mass) in the given unit system."""
    if body_fat_percentage is None:
        return None, None
    fat_mass = weight_lb * body_fat_percentage / 100
    lean_mass = weight_lb - fat_mass
    return (
        from_imperial_mass(lean_mass, unit_system),
        from_imperial_mass(fat_mass, unit_system),
    )


def calculate(
    measurements: MeasurementInput, unit_system: UnitSystem | str
) -> CalculationResult:
    """Compute BMI, body fat and lean/fat mass for a measurement input."""
    system = UnitSystem.parse(unit_system)
    weight = to_imperial_mass(measurements.weight, system)
    height = to_imperial_length(measurements.height, system)
    neck = to_imperial_length(measurements.neck, system)
    waist = to_imperial_length(measurements.waist, system)
    hip = (
        to_imperial_length(measurements.hip, system)
        if measurements.hip is not None
        else None
    )

    body_fat = estimate_body_fat(
        weight_lb=weight,
        height_in=height,
        neck_in=neck,
        waist_in=waist,
        hip_in=hip,
        femininity_percentage=measurements.femininity_percentage,
    )
    lean_mass, fat_mass = derive_masses(weight, body_fat, system)
    return CalculationResult(
        unit_system=system,
        bmi=calculate_bmi(weight, height),
        body_fat_percentage=body_fat,
        lean_mass=lean_mass,
        fat_mass=fat_mass,
    )


def parse_measurement_input(raw: Mapping[str, object]) -> MeasurementInput:
    """Validate raw form values and build a measurement input.

    Values may be numbers or numeric strings. Empty strings count as missing.
    """
    parsed = {name: _require_positive(raw, name) for name in _REQUIRED_FIELDS}
    age = _require_positive(raw, "age")
    if not age.is_integer():
        raise MeasurementValidationError("Age must be a whole number.")

    hip = None
    if not _is_blank(raw.get("hip")):
        hip = _require_positive(raw, "hip")

    return MeasurementInput(
        weight=parsed["weight"],
        height=parsed["height"],
        age=int(age),
        neck=parsed["neck"],
        waist=parsed["waist"],
        hip=hip,
        femininity_percentage=_parse_femininity(raw.get("femininity_percentage")),
    )


def _parse_femininity(raw: object) -> int:
    if _is_blank(raw):
        return 0
    return int(_check_femininity(raw))


def _check_femininity(raw: object) -> float:
    value = _to_float(raw)
    if value is None or not value.is_integer():
        raise MeasurementValidationError(
            "Femininity percentage must be a whole number between 0 and 100."
        )
    if not 0 <= value <= MAX_FEMININITY_PERCENTAGE:
        raise MeasurementValidationError(
            "Femininity percentage must be between 0 and 100."
        )
    return value


def _require_positive(raw: Mapping[str, object], name: str) -> float:
    label = name.replace("_", " ").capitalize()
    value = raw.get(name)
    if _is_blank(value):
        raise MeasurementValidationError(f"{label} is required.")
    number = _to_float(value)
    if number is None:
        raise MeasurementValidationError(f"{label} must be a number, got {value!r}.")
    if number <= 0:
        raise MeasurementValidationError(f"{label} must be greater than zero.")
    return number


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_float(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _positive_or_none(value: object) -> float | None:
    number = _to_float(value)
    if number is None or number <= 0:
        return None
    return number


def _log10(label: str, value: float) -> float:
    if value <= 0:
        raise BodyFatDomainError(
            f"Cannot estimate body fat: {label} must be positive after rounding, "
            f"got {value:g} in."
        )
    return math.log10(value)
