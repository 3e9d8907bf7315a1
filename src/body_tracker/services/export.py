"""CSV export of measurement entries."""

import csv
import io

from body_tracker.domain.measurements import Entry
from body_tracker.domain.units import UnitSystem, convert_length, convert_mass

CSV_HEADER = [
    "date",
    "weight",
    "height",
    "age",
    "neck",
    "waist",
    "hip",
    "femininityPercentage",
    "BMI",
    "bodyFat%",
    "leanMass",
    "fatMass",
    "notes",
    "unitSystem",
]


def export_entries_csv(
    entries: list[Entry], display_unit_system: UnitSystem | str
) -> str:
    """Return entries as CSV text, values expressed in the display unit system."""
    target = UnitSystem.parse(display_unit_system)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for entry in entries:
        writer.writerow(_entry_row(entry, target))
    return buffer.getvalue()


def _entry_row(entry: Entry, target: UnitSystem) -> list[str]:
    source = entry.unit_system
    measurements = entry.measurements
    result = entry.result

    def length(value: float | None) -> str:
        return _format(convert_length(value, source, target))

    def mass(value: float | None, unit_system: UnitSystem = source) -> str:
        return _format(convert_mass(value, unit_system, target))

    return [
        entry.entry_date,
        mass(measurements.weight),
        length(measurements.height),
        str(measurements.age),
        length(measurements.neck),
        length(measurements.waist),
        length(measurements.hip),
        str(measurements.femininity_percentage),
        _format(result.bmi),
        _format(result.body_fat_percentage),
        mass(result.lean_mass, result.unit_system),
        mass(result.fat_mass, result.unit_system),
        entry.notes,
        target.value,
    ]


def _format(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:.2f}"
