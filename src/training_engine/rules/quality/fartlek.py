"""QUALITY rule: fartlek (unstructured surges) dosage."""

from __future__ import annotations

from training_engine.math.numeric import round_half_up, round_to
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import (
    DEFAULT_VDOT,
    FARTLEK_BASE_MINUTES,
    FARTLEK_MINUTES_PER_SURGE,
    FARTLEK_MINUTES_PER_VDOT,
    Aggressiveness,
    PrescriptionType,
)
from training_engine.models.prescription import Dosage
from training_engine.rules.base import DosageRule

# Surges lift the average speed roughly 10% above easy pace
_AVERAGE_SPEED_OVER_EASY = 1.1


class FartlekRule(DosageRule):
    """Doses a fartlek by total minutes, with a surge every ~8 minutes."""

    rule_id = "fartlek_dosage"
    version = "1.0.0"
    prescription_type = PrescriptionType.FARTLEK

    def dose(self, context: DosageContext) -> Dosage:
        profile = context.profile
        minutes = round_half_up(
            (FARTLEK_BASE_MINUTES + (profile.vdot - DEFAULT_VDOT) * FARTLEK_MINUTES_PER_VDOT)
            * context.mileage_multiplier
        )
        surges = round_half_up(minutes / FARTLEK_MINUTES_PER_SURGE)

        easy = profile.easy_pace_seconds
        total = self.miles_at_pace(minutes, easy) * _AVERAGE_SPEED_OVER_EASY
        race_label = context.target_distance_label or "general fitness"

        if profile.aggressiveness == Aggressiveness.AGGRESSIVE:
            adjustments = "Push the surges harder - aim for 5K effort on most"
        else:
            adjustments = "Keep surges controlled - should feel invigorating, not exhausting"

        return Dosage(
            rule_id=self.rule_id,
            label="Fartlek",
            structure=(
                f"{minutes} minutes total: {surges} surges of 1-3 minutes at "
                "tempo-to-5K effort with 1-2 min easy between"
            ),
            target_paces=(
                f"Surges: {self.pace(profile.tempo_pace_seconds)} to "
                f"{self.pace(profile.interval_pace_seconds)}, Recovery: {self.pace(easy)}"
            ),
            target_pace_range=(profile.interval_pace_seconds, easy),
            total_distance_miles=round_to(total, 1),
            total_distance=f"{round_half_up(total)} miles (will vary based on effort)",
            warmup="First 10 minutes of the run serves as warmup",
            cooldown="Last 10 minutes easy",
            rationale=(
                f"Unstructured speed work for {race_label}. Great for breaking monotony."
            ),
            adjustments=adjustments,
            main_pace_seconds=profile.tempo_pace_seconds,
            heat_workout_type=self.record_type,
            details={"minutes": minutes, "surges": surges},
        )
