"""Frozen inputs shared by every dosage rule for one prescription request."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from training_engine.models.athlete_profile import ResolvedProfile
from training_engine.models.enums import RaceCategory, TrainingPhase, WorkoutType
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.models.workout import WorkoutRecord


@dataclass(frozen=True)
class DosageContext:
    """Immutable snapshot of everything a DosageRule may read.

    ``recent_workouts`` holds the most recent records, newest first.
    """

    profile: ResolvedProfile
    snapshot: TrainingLoadSnapshot
    as_of: date
    mileage_multiplier: float
    hard_efforts_this_week: int
    recent_mileage: float
    recent_workouts: tuple[WorkoutRecord, ...] = field(default_factory=tuple)
    this_week: tuple[WorkoutRecord, ...] = field(default_factory=tuple)
    phase: TrainingPhase | None = None
    target_race: RaceCategory | None = None
    target_distance_label: str | None = None

    @property
    def tsb(self) -> int:
        return self.snapshot.tsb

    def last_of_type(self, workout_type: WorkoutType) -> WorkoutRecord | None:
        """Most recent logged workout of a type, if any."""
        for workout in self.recent_workouts:
            if workout.workout_type == workout_type:
                return workout
        return None

    def days_since(self, workout: WorkoutRecord) -> int:
        return workout.days_before(self.as_of)
