"""ENDURANCE rule: long run dosage with recovery-aware progression.

The base long run is the athlete's current long-run max, or 35% of weekly
mileage. The most recent comparable long run (at least 80% of base)
decides the step:

    < 5 days ago   → recovery long run at 70% of base
    5–13 days ago  → progress 10%, capped at 35% of the peak weekly target
    otherwise      → back to base

In build and peak phases a race-specific segment is added: marathon pace
through the middle 40% for marathoners, half-marathon pace over the final
25% for half marathoners.

Reference:
    Pfitzinger & Douglas (2009). Advanced Marathoning: long runs at
    20-25% of weekly volume, progressed in ~10% steps.
"""

from __future__ import annotations

from training_engine.math.numeric import round_half_up
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import (
    LONG_RUN_COMPARABLE_FRACTION,
    LONG_RUN_HALF_PACE_FRACTION,
    LONG_RUN_MARATHON_PACE_FRACTION,
    LONG_RUN_PEAK_CAP_FRACTION,
    LONG_RUN_PROGRESSION_DAYS,
    LONG_RUN_PROGRESSION_FACTOR,
    LONG_RUN_RECOVERY_DAYS,
    LONG_RUN_RECOVERY_FACTOR,
    LONG_RUN_WEEKLY_FRACTION,
    PrescriptionType,
    RaceCategory,
    TrainingPhase,
)
from training_engine.models.prescription import Dosage
from training_engine.models.workout import WorkoutRecord
from training_engine.rules.base import DosageRule

_QUALITY_PHASES = (TrainingPhase.BUILD, TrainingPhase.PEAK)


class LongRunRule(DosageRule):
    """Doses the long run in miles."""

    rule_id = "long_run_dosage"
    version = "1.0.0"
    prescription_type = PrescriptionType.LONG_RUN

    def dose(self, context: DosageContext) -> Dosage:
        profile = context.profile
        fired: list[str] = []

        base = profile.current_long_run_max or round_half_up(
            profile.weekly_mileage * LONG_RUN_WEEKLY_FRACTION
        )
        distance: float = base

        last_long = self._last_comparable(context, base)
        if last_long is not None:
            days = context.days_since(last_long)
            if days < LONG_RUN_RECOVERY_DAYS:
                distance = round_half_up(base * LONG_RUN_RECOVERY_FACTOR)
                fired.append("long_run_recovery")
            elif days < LONG_RUN_PROGRESSION_DAYS:
                distance = min(
                    round_half_up((last_long.distance_miles or base) * LONG_RUN_PROGRESSION_FACTOR),
                    profile.peak_weekly_mileage_target * LONG_RUN_PEAK_CAP_FRACTION,
                )
                fired.append("long_run_progression")
            else:
                fired.append("long_run_reset")

        easy = profile.easy_pace_seconds
        quality_phase = context.phase in _QUALITY_PHASES
        fast_pace = easy
        if quality_phase and context.target_race == RaceCategory.MARATHON:
            segment = round_half_up(distance * LONG_RUN_MARATHON_PACE_FRACTION)
            structure = f"{distance:g} miles with {segment} miles at marathon pace in the middle"
            fast_pace = profile.marathon_pace_seconds
            fired.append("marathon_pace_segment")
        elif quality_phase and context.target_race == RaceCategory.HALF_MARATHON:
            segment = round_half_up(distance * LONG_RUN_HALF_PACE_FRACTION)
            structure = f"{distance:g} miles with final {segment} miles at half marathon pace"
            fast_pace = profile.half_marathon_pace_seconds
            fired.append("half_marathon_pace_segment")
        elif quality_phase:
            segment = 0
            structure = f"{distance:g} miles easy with optional progression in final 2-3 miles"
        else:
            segment = 0
            structure = f"{distance:g} miles at comfortable, conversational pace"

        target_paces = f"Easy: {self.pace(easy)}"
        if quality_phase:
            target_paces += (
                f", Marathon pace: {self.pace(profile.marathon_pace_seconds)}"
                f", Half Marathon pace: {self.pace(profile.half_marathon_pace_seconds)}"
            )

        share = round_half_up(distance / profile.weekly_mileage * 100)
        purpose = (
            f"Building endurance for {context.target_distance_label}."
            if context.target_distance_label
            else "Building aerobic base."
        )

        longest = profile.current_long_run_max
        if longest and distance > longest:
            adjustments = (
                f"This is {distance - longest:g} miles longer than your recent max. "
                "Take it easy and focus on completion."
            )
        else:
            adjustments = "Focus on maintaining steady effort rather than pace, especially on hills."

        return Dosage(
            rule_id=self.rule_id,
            label="Long Run",
            structure=structure,
            target_paces=target_paces,
            target_pace_range=(fast_pace, easy),
            total_distance_miles=float(distance),
            total_distance=f"{distance:g} miles",
            warmup="First 2 miles very easy to warm up",
            cooldown=(
                "Last mile easy to cool down" if quality_phase else "Gradual slowdown in final mile"
            ),
            rationale=f"{share}% of weekly mileage. {purpose}",
            adjustments=adjustments,
            main_pace_seconds=easy,
            heat_workout_type=self.record_type,
            fired_rules=tuple(fired),
            details={"base_miles": base, "distance_miles": distance, "segment_miles": segment},
        )

    def _last_comparable(self, context: DosageContext, base: float) -> WorkoutRecord | None:
        for workout in context.recent_workouts:
            if (
                workout.workout_type == self.record_type
                and workout.distance_miles
                and workout.distance_miles >= base * LONG_RUN_COMPARABLE_FRACTION
            ):
                return workout
        return None
