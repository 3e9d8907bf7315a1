"""Trend series for charting entry history."""

from body_tracker.domain.measurements import Entry
from body_tracker.domain.trends import TrendPoint, TrendSummary
from body_tracker.domain.units import UnitSystem, convert_mass


def build_trend(
    entries: list[Entry], display_unit_system: UnitSystem | str
) -> list[TrendPoint]:
    """Return chart points oldest first, masses in the display unit system."""
    target = UnitSystem.parse(display_unit_system)
    ordered = sorted(entries, key=lambda entry: entry.entry_date)
    points = []
    for entry in ordered:
        result = entry.result
        points.append(
            TrendPoint(
                entry_date=entry.entry_date,
                weight=convert_mass(
                    entry.measurements.weight, entry.unit_system, target
                ),
                bmi=result.bmi,
                body_fat_percentage=result.body_fat_percentage,
                lean_mass=convert_mass(result.lean_mass, result.unit_system, target),
                fat_mass=convert_mass(result.fat_mass, result.unit_system, target),
            )
        )
    return points


def summarize_trend(points: list[TrendPoint]) -> TrendSummary:
    """Return the change between the first and last points."""
    if len(points) < 2:  # noqa: PLR2004
        return TrendSummary(
            points=len(points),
            weight_change=None,
            body_fat_change=None,
            lean_mass_change=None,
        )
    first, last = points[0], points[-1]
    return TrendSummary(
        points=len(points),
        weight_change=last.weight - first.weight,
        body_fat_change=_delta(first.body_fat_percentage, last.body_fat_percentage),
        lean_mass_change=_delta(first.lean_mass, last.lean_mass),
    )


def _delta(first: float | None, last: float | None) -> float | None:
    if first is None or last is None:
        return None
    return last - first
