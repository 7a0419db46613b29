"""QUALITY rule: VO2max interval dosage.

Rep distance and count come from tables keyed by target race (5K
athletes run shorter, more numerous reps) and VDOT. Deep fatigue removes
two reps and steps the rep distance down; moderate fatigue or a week that
already holds two hard sessions removes one rep. Never fewer than 3 reps.

Reference:
    Billat (2001). Interval training for performance. Sports Med 31(1):13-31.
"""

from __future__ import annotations

from training_engine.math.numeric import band_lookup, round_half_up, round_to
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import (
    HARD_EFFORT_LIMIT,
    TSB_MODERATELY_FATIGUED,
    TSB_VERY_FATIGUED,
    TSB_WELL_RESTED,
    VO2MAX_5K_DISTANCE_BY_VDOT,
    VO2MAX_5K_REPS_BY_VDOT,
    VO2MAX_DISTANCE_BY_VDOT,
    VO2MAX_DISTANCE_STEP_DOWN,
    VO2MAX_INTERVAL_MILES,
    VO2MAX_MIN_REPS,
    VO2MAX_RECOVERY_DISTANCE_FRACTION,
    VO2MAX_RECOVERY_JOG_M,
    VO2MAX_REPS_BY_VDOT,
    PrescriptionType,
    RaceCategory,
)
from training_engine.models.prescription import Dosage
from training_engine.rules.base import DosageRule

_WARMUP_MILES = 2
_RECOVERY_JOG_SLOWDOWN_S = 30


class VO2maxRule(DosageRule):
    """Doses VO2max intervals as reps × metres with a recovery jog."""

    rule_id = "vo2max_dosage"
    version = "1.0.0"
    prescription_type = PrescriptionType.VO2MAX

    def dose(self, context: DosageContext) -> Dosage:
        profile = context.profile
        tsb = context.tsb
        fired: list[str] = []

        if context.target_race == RaceCategory.FIVE_K:
            distance_m = band_lookup(profile.vdot, VO2MAX_5K_DISTANCE_BY_VDOT)
            reps = band_lookup(profile.vdot, VO2MAX_5K_REPS_BY_VDOT)
        else:
            distance_m = band_lookup(profile.vdot, VO2MAX_DISTANCE_BY_VDOT)
            reps = band_lookup(profile.vdot, VO2MAX_REPS_BY_VDOT)

        if tsb < TSB_VERY_FATIGUED:
            reps -= 2
            distance_m = VO2MAX_DISTANCE_STEP_DOWN.get(distance_m, distance_m)
            fired.append("deep_fatigue_step_down")
        elif tsb < TSB_MODERATELY_FATIGUED:
            reps -= 1
            fired.append("fatigue_rep_reduction")
        elif context.hard_efforts_this_week >= HARD_EFFORT_LIMIT:
            reps -= 1
            fired.append("hard_week_rep_reduction")
        reps = max(VO2MAX_MIN_REPS, reps)

        interval_pace = profile.interval_pace_seconds
        easy_pace = profile.easy_pace_seconds
        rep_miles = VO2MAX_INTERVAL_MILES[distance_m]
        work_miles = reps * rep_miles
        recovery_miles = work_miles * VO2MAX_RECOVERY_DISTANCE_FRACTION
        cooldown_miles = round_half_up(1.5 * context.mileage_multiplier)
        total = work_miles + recovery_miles + _WARMUP_MILES + cooldown_miles
        race_label = context.target_distance_label or "general fitness"

        return Dosage(
            rule_id=self.rule_id,
            label="VO2max Intervals",
            structure=(
                f"{reps} x {distance_m}m at 5K pace with "
                f"{VO2MAX_RECOVERY_JOG_M[distance_m]}m recovery jog"
            ),
            target_paces=(
                f"Interval pace: {self.pace(interval_pace)} (RPE 8-9, hard but controlled), "
                f"Recovery: {self.pace(easy_pace + _RECOVERY_JOG_SLOWDOWN_S)}"
            ),
            target_pace_range=(interval_pace, interval_pace),
            total_distance_miles=round_to(total, 1),
            total_distance=f"{round_half_up(total)} miles total",
            warmup=f"{_WARMUP_MILES} miles easy with 4-6 strides",
            cooldown=f"{cooldown_miles} miles easy",
            rationale=(
                f"{reps} reps at VO2max pace totaling {work_miles:.1f} miles. Adjusted for "
                f"CTL: {context.snapshot.ctl}, TSB: {tsb}. Structure optimized for {race_label}."
            ),
            adjustments=self._adjustments(context),
            main_pace_seconds=interval_pace,
            heat_workout_type=self.record_type,
            fired_rules=tuple(fired),
            details={"reps": reps, "distance_m": distance_m},
        )

    @staticmethod
    def _adjustments(context: DosageContext) -> str:
        tsb = context.tsb
        if tsb < TSB_MODERATELY_FATIGUED:
            return (
                f"High fatigue detected (TSB: {tsb}) - volume reduced. "
                "Focus on quality execution of each rep."
            )
        if context.hard_efforts_this_week >= HARD_EFFORT_LIMIT:
            return (
                f"You've had {context.hard_efforts_this_week} hard efforts this week - "
                "volume adjusted accordingly."
            )
        if context.recent_mileage < context.profile.weekly_mileage * 0.8:
            return "Recent mileage is lower than usual - adjusted volume to match current fitness"
        if tsb > TSB_WELL_RESTED:
            return "Well rested - push hard but maintain form. Last rep should still be achievable."
        return "Maintain consistent pace across all reps. Last rep should feel hard but doable."
