"""Abstract base class for all workout dosage rules."""

from __future__ import annotations

from abc import ABC, abstractmethod

from training_engine.math.numeric import round_half_up
from training_engine.math.pace import format_pace_per_mile
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import PRESCRIPTION_RECORD_TYPE, PrescriptionType, WorkoutType
from training_engine.models.prescription import Dosage


class DosageRule(ABC):
    """Base class for the per-workout-type dosage rules.

    Each rule decides how much and how hard one kind of workout should be.
    Rules are discovered automatically by the DosageRegistry and selected
    by the PrescriptionEngine from the requested workout type.

    Subclasses must define:
        rule_id: unique identifier (e.g. "tempo_dosage")
        version: semantic version string
        prescription_type: the PrescriptionType this rule doses
        dose(): the rule's decision logic
    """

    rule_id: str
    version: str
    prescription_type: PrescriptionType

    @abstractmethod
    def dose(self, context: DosageContext) -> Dosage:
        """Decide the workout dosage for this context."""
        ...

    @property
    def record_type(self) -> WorkoutType:
        """Logged workout type this rule prescribes."""
        return PRESCRIPTION_RECORD_TYPE[self.prescription_type]

    # Shared helpers -------------------------------------------------------

    @staticmethod
    def scaled_miles(miles: float, context: DosageContext) -> int:
        """Whole miles scaled by the athlete's mileage multiplier."""
        return round_half_up(miles * context.mileage_multiplier)

    @staticmethod
    def pace(seconds: float) -> str:
        return format_pace_per_mile(seconds)

    @staticmethod
    def miles_at_pace(minutes: float, pace_seconds: float) -> float:
        """Distance covered in ``minutes`` at a pace in seconds per mile."""
        return minutes * 60 / pace_seconds
