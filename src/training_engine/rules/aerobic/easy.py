"""AEROBIC rule: easy run dosage, also the fallback for unknown workout types.

Two or more hard sessions in the past week shorten the easy run to a
recovery run.
"""

from __future__ import annotations

from training_engine.math.numeric import round_half_up
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import (
    EASY_BASE_MILES,
    EASY_RANGE_MILES,
    EASY_RECOVERY_MILES,
    HARD_EFFORT_LIMIT,
    PrescriptionType,
)
from training_engine.models.prescription import Dosage
from training_engine.rules.base import DosageRule

_EASY_PACE_SPREAD_S = 30


class EasyRule(DosageRule):
    """Doses an easy run as a mileage range."""

    rule_id = "easy_dosage"
    version = "1.0.0"
    prescription_type = PrescriptionType.EASY

    def dose(self, context: DosageContext) -> Dosage:
        profile = context.profile
        hard = context.hard_efforts_this_week
        recovery = hard >= HARD_EFFORT_LIMIT
        miles = self.scaled_miles(EASY_RECOVERY_MILES if recovery else EASY_BASE_MILES, context)
        upper = miles + EASY_RANGE_MILES

        if recovery:
            rationale = f"Recovery run - you've had {hard} hard efforts this week"
        else:
            rationale = "Aerobic maintenance run. Building easy volume for endurance base."

        if context.recent_mileage > profile.weekly_mileage:
            adjustments = "Recent volume is high - keep this run on the shorter side"
        else:
            adjustments = "Can add 4-6 strides at the end for neuromuscular maintenance"

        easy = profile.easy_pace_seconds
        return Dosage(
            rule_id=self.rule_id,
            label="Easy Run",
            structure=f"{miles}-{upper} miles at conversational pace",
            target_paces=f"Easy pace: {self.pace(easy)} (RPE 3-5, can hold conversation)",
            target_pace_range=(easy, easy + _EASY_PACE_SPREAD_S),
            total_distance_miles=float(round_half_up((miles + upper) / 2)),
            total_distance=f"{miles}-{upper} miles",
            warmup="Start with 5 min very easy to warm up",
            cooldown="Gradual cooldown in final 0.5 mile",
            rationale=rationale,
            adjustments=adjustments,
            main_pace_seconds=easy,
            heat_workout_type=self.record_type,
            fired_rules=("recovery_run",) if recovery else (),
            details={"min_miles": miles, "max_miles": upper},
        )
