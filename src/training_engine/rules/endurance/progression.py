"""ENDURANCE rule: progression run dosage.

A progression run starts easy and finishes at tempo; the tempo finish is
30% of the run, never more than 3 miles.
"""

from __future__ import annotations

from training_engine.math.numeric import round_half_up
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import (
    PROGRESSION_FINISH_FRACTION,
    PROGRESSION_MAX_BASE_MILES,
    PROGRESSION_MAX_FINISH_MILES,
    PROGRESSION_WEEKLY_FRACTION,
    PrescriptionType,
    WorkoutType,
)
from training_engine.models.prescription import Dosage
from training_engine.rules.base import DosageRule

_START_SLOWDOWN_S = 30


class ProgressionRule(DosageRule):
    """Doses a progression run in miles with a tempo finish."""

    rule_id = "progression_dosage"
    version = "1.0.0"
    prescription_type = PrescriptionType.PROGRESSION

    def dose(self, context: DosageContext) -> Dosage:
        profile = context.profile
        total = round_half_up(
            min(profile.weekly_mileage * PROGRESSION_WEEKLY_FRACTION, PROGRESSION_MAX_BASE_MILES)
            * context.mileage_multiplier
        )
        finish = min(round_half_up(total * PROGRESSION_FINISH_FRACTION), PROGRESSION_MAX_FINISH_MILES)

        easy = profile.easy_pace_seconds
        tempo = profile.tempo_pace_seconds
        had_quality = any(
            w.workout_type in (WorkoutType.TEMPO, WorkoutType.THRESHOLD)
            for w in context.this_week
        )
        fired = ("quality_week_control",) if had_quality else ()
        if had_quality:
            adjustments = "You've had quality work this week - keep the progression controlled"
        else:
            adjustments = "No hard efforts this week - you can push the final miles harder"

        return Dosage(
            rule_id=self.rule_id,
            label="Progression Run",
            structure=(
                f"{total} miles: First {total - finish} miles easy, gradually increasing pace, "
                f"final {finish} miles at tempo"
            ),
            target_paces=(
                f"Start: {self.pace(easy + _START_SLOWDOWN_S)}, Middle: {self.pace(easy)}, "
                f"Finish: {self.pace(tempo)}"
            ),
            target_pace_range=(tempo, easy + _START_SLOWDOWN_S),
            total_distance_miles=float(total),
            total_distance=f"{total} miles",
            warmup="The gradual start serves as your warmup",
            cooldown="Short 5-min walk after finishing fast",
            rationale=(
                f"Simulates {context.target_distance_label or 'race'} fatigue. "
                "Teaches pacing discipline and mental toughness."
            ),
            adjustments=adjustments,
            main_pace_seconds=easy,
            heat_workout_type=self.record_type,
            fired_rules=fired,
            details={"total_miles": total, "finish_miles": finish},
        )
