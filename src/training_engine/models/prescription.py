"""Workout prescription — the output of the prescription engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from training_engine.models.enums import FailureKind, PrescriptionType, WorkoutType
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.models.weather import PaceAdjustment


@dataclass(frozen=True)
class Dosage:
    """What a single dosage rule decides for its workout type.

    ``main_pace_seconds`` is the pace the heat adjustment is applied to;
    ``fired_rules`` names every fatigue/progression branch that triggered.
    """

    rule_id: str
    label: str
    structure: str
    target_paces: str
    target_pace_range: tuple[int, int]
    total_distance_miles: float
    total_distance: str
    warmup: str
    cooldown: str
    rationale: str
    adjustments: str
    main_pace_seconds: int
    heat_workout_type: WorkoutType = WorkoutType.EASY
    fired_rules: tuple[str, ...] = field(default_factory=tuple)
    details: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class TrainingStress:
    """Recent volume and intensity summary attached to a prescription."""

    recent_mileage: float
    target_mileage: float
    volume_status: str
    hard_efforts: int
    recent_avg_pace_seconds: int
    vdot: float


@dataclass(frozen=True)
class WorkoutPrescription:
    """Dosed workout returned by ``prescribe()``.

    ``success`` is always True; callers can branch on it the same way they
    would on a Failure.
    """

    prescription_type: PrescriptionType
    workout_type: str
    structure: str
    target_paces: str
    target_pace_range: tuple[int, int]
    total_distance_miles: float
    total_distance: str
    warmup: str
    cooldown: str
    rationale: str
    adjustments: str
    snapshot: TrainingLoadSnapshot
    training_stress: TrainingStress
    tsb_status: str
    coach_notes: str
    fired_rules: tuple[str, ...] = field(default_factory=tuple)
    details: dict[str, float] = field(default_factory=dict)
    pace_adjustment: PaceAdjustment | None = None
    success: bool = True


@dataclass(frozen=True)
class Failure:
    """Typed failure value returned, never raised, by engine entry points."""

    kind: FailureKind
    error: str
    suggestion: str | None = None
    success: bool = False
