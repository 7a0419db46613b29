"""Data models for the training engine."""

from training_engine.models.athlete_profile import AthleteProfile, ResolvedProfile
from training_engine.models.enums import (
    Aggressiveness,
    ConditionCategory,
    FailureKind,
    PrescriptionType,
    PrimaryFactor,
    RaceCategory,
    TrainingPhase,
    WorkoutType,
)
from training_engine.models.pace_zones import PaceZones
from training_engine.models.prescription import Dosage, Failure, TrainingStress, WorkoutPrescription
from training_engine.models.race import Race, RacePlan
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.models.weather import (
    ConditionsSeverity,
    PaceAdjustment,
    SeverityFactors,
    WeatherObservation,
)
from training_engine.models.workout import WorkoutRecord

__all__ = [
    "Aggressiveness",
    "AthleteProfile",
    "ConditionCategory",
    "ConditionsSeverity",
    "Dosage",
    "Failure",
    "FailureKind",
    "PaceAdjustment",
    "PaceZones",
    "PrescriptionType",
    "PrimaryFactor",
    "Race",
    "RaceCategory",
    "RacePlan",
    "ResolvedProfile",
    "SeverityFactors",
    "TrainingLoadSnapshot",
    "TrainingPhase",
    "TrainingStress",
    "WeatherObservation",
    "WorkoutPrescription",
    "WorkoutRecord",
    "WorkoutType",
]
