"""QUALITY rule: cruise-interval threshold dosage.

Rep count and rep length follow VDOT bands; recovery jog length follows
plan aggressiveness. Fatigue cuts a rep and lengthens recovery; moderate
fatigue on top of a hard week lengthens recovery only.

Reference:
    Daniels (2014). Daniels' Running Formula: cruise intervals at T pace
    with short recoveries, 5-10 min reps.
"""

from __future__ import annotations

from training_engine.math.numeric import band_lookup, round_half_up, round_to
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import (
    HARD_EFFORT_LIMIT,
    THRESHOLD_EXTRA_RECOVERY_MINUTES,
    THRESHOLD_MIN_REPS,
    THRESHOLD_RECOVERY_MINUTES,
    THRESHOLD_REP_MINUTES_BY_VDOT,
    THRESHOLD_REPS_BY_VDOT,
    TSB_FATIGUED,
    TSB_FRESH,
    TSB_MODERATELY_FATIGUED,
    PrescriptionType,
)
from training_engine.models.prescription import Dosage
from training_engine.rules.base import DosageRule


class ThresholdRule(DosageRule):
    """Doses threshold intervals: reps × minutes with a recovery jog."""

    rule_id = "threshold_dosage"
    version = "1.0.0"
    prescription_type = PrescriptionType.THRESHOLD

    def dose(self, context: DosageContext) -> Dosage:
        profile = context.profile
        mult = context.mileage_multiplier
        tsb = context.tsb
        fired: list[str] = []

        reps = band_lookup(profile.vdot, THRESHOLD_REPS_BY_VDOT)
        rep_minutes = band_lookup(profile.vdot, THRESHOLD_REP_MINUTES_BY_VDOT)
        recovery = THRESHOLD_RECOVERY_MINUTES[profile.aggressiveness]

        if tsb < TSB_FATIGUED:
            reps = max(THRESHOLD_MIN_REPS, reps - 1)
            recovery += THRESHOLD_EXTRA_RECOVERY_MINUTES
            fired.append("fatigue_rep_reduction")
        elif tsb <= TSB_MODERATELY_FATIGUED and context.hard_efforts_this_week >= HARD_EFFORT_LIMIT:
            recovery += THRESHOLD_EXTRA_RECOVERY_MINUTES
            fired.append("hard_week_extra_recovery")

        threshold_pace = profile.threshold_pace_seconds
        easy_pace = profile.easy_pace_seconds
        warmup_miles = round_half_up(2 * mult)
        cooldown_miles = round_half_up(1.5 * mult)
        work_miles = self.miles_at_pace(reps * rep_minutes, threshold_pace)
        recovery_miles = self.miles_at_pace((reps - 1) * recovery, easy_pace)
        total = work_miles + recovery_miles + warmup_miles + cooldown_miles

        return Dosage(
            rule_id=self.rule_id,
            label="Threshold Intervals",
            structure=(
                f"{reps} x {rep_minutes} minutes at threshold pace with "
                f"{recovery:g} min recovery jog"
            ),
            target_paces=(
                f"Threshold pace: {self.pace(threshold_pace)} (RPE 7-8), "
                f"Recovery: {self.pace(easy_pace)}"
            ),
            target_pace_range=(threshold_pace, threshold_pace),
            total_distance_miles=round_to(total, 1),
            total_distance=f"{round_half_up(total)} miles total including warmup/cooldown",
            warmup=f"{warmup_miles} miles easy with 4 strides",
            cooldown=f"{cooldown_miles} miles easy",
            rationale=(
                f"Accumulates {reps * rep_minutes} minutes at threshold. Based on VDOT "
                f"{profile.vdot:g}, CTL: {context.snapshot.ctl}, TSB: {tsb}."
            ),
            adjustments=self._adjustments(context),
            main_pace_seconds=threshold_pace,
            heat_workout_type=self.record_type,
            fired_rules=tuple(fired),
            details={
                "reps": reps,
                "rep_minutes": rep_minutes,
                "recovery_minutes": recovery,
            },
        )

    def _adjustments(self, context: DosageContext) -> str:
        tsb = context.tsb
        if tsb < TSB_MODERATELY_FATIGUED:
            return (
                f"Fatigue level elevated (TSB: {tsb}) - extended recovery between intervals. "
                "Focus on quality over quantity."
            )
        last = context.last_of_type(self.record_type)
        if last is None:
            return "First threshold workout in recent training - focus on hitting pace targets"
        follow = (
            "Good recovery - consider reducing recovery time if feeling strong."
            if tsb > TSB_FRESH
            else "Maintain prescribed recovery periods."
        )
        return f"Last threshold workout: {last.date.isoformat()}. {follow}"
