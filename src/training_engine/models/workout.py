"""Logged workout record — immutable historical input to the engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from training_engine.models.enums import WorkoutType


@dataclass(frozen=True)
class WorkoutRecord:
    """One logged run as supplied by a history provider.

    All measurement fields are optional; records missing the data needed
    for a stress score simply contribute nothing to training load.
    """

    date: date
    workout_type: WorkoutType = WorkoutType.EASY
    distance_miles: float | None = None
    duration_minutes: float | None = None
    avg_pace_seconds_per_mile: float | None = None

    def days_before(self, as_of: date) -> int:
        """Whole days between this workout and ``as_of`` (negative if later)."""
        return (as_of - self.date).days
