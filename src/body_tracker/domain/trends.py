"""Domain models for trend chart data."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TrendPoint:
    """Single point of the body composition trend chart."""

    entry_date: str
    weight: float
    bmi: float | None
    body_fat_percentage: float | None
    lean_mass: float | None
    fat_mass: float | None


@dataclass(frozen=True)
class TrendSummary:
    """Change between the oldest and newest trend points."""

    points: int
    weight_change: float | None
    body_fat_change: float | None
    lean_mass_change: float | None
