"""QUALITY rule: continuous tempo run dosage.

Base duration scales with VDOT band and the mileage multiplier. A recent
tempo run overrides the base with a 5–15% progression off its estimated
tempo portion. Stress balance then trims volume when fatigued or extends
the upper bound when fresh.

Reference:
    Daniels (2014). Daniels' Running Formula: T-pace sessions of 20 min
    continuous, progressing in small steps.
"""

from __future__ import annotations

from training_engine.math.numeric import band_lookup, round_half_up, round_to
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import (
    TEMPO_BASE_MINUTES_BY_VDOT,
    TEMPO_FATIGUE_MAX_FACTOR,
    TEMPO_FATIGUE_MIN_FACTOR,
    TEMPO_PORTION_OF_LAST,
    TEMPO_PROGRESSION_MAX,
    TEMPO_PROGRESSION_MIN,
    TEMPO_RANGE_SPAN_MINUTES,
    TEMPO_RESTED_MAX_FACTOR,
    TSB_FATIGUED,
    TSB_FRESH,
    TSB_MODERATELY_FATIGUED,
    TSB_WELL_RESTED,
    PrescriptionType,
    TrainingPhase,
)
from training_engine.models.prescription import Dosage
from training_engine.rules.base import DosageRule


class TempoRule(DosageRule):
    """Doses a continuous tempo run in minutes."""

    rule_id = "tempo_dosage"
    version = "1.0.0"
    prescription_type = PrescriptionType.TEMPO

    def dose(self, context: DosageContext) -> Dosage:
        profile = context.profile
        mult = context.mileage_multiplier
        fired: list[str] = []

        base_minutes = band_lookup(profile.vdot, TEMPO_BASE_MINUTES_BY_VDOT)
        tempo_min = round_half_up(base_minutes * mult)
        tempo_max = round_half_up((base_minutes + TEMPO_RANGE_SPAN_MINUTES) * mult)

        last_tempo = context.last_of_type(self.record_type)
        if last_tempo is not None and last_tempo.duration_minutes:
            last_portion = round_half_up(last_tempo.duration_minutes * TEMPO_PORTION_OF_LAST)
            tempo_min = round_half_up(last_portion * TEMPO_PROGRESSION_MIN)
            tempo_max = round_half_up(last_portion * TEMPO_PROGRESSION_MAX)
            fired.append("recent_tempo_progression")

        if context.tsb < TSB_FATIGUED:
            tempo_min = round_half_up(tempo_min * TEMPO_FATIGUE_MIN_FACTOR)
            tempo_max = round_half_up(tempo_max * TEMPO_FATIGUE_MAX_FACTOR)
            fired.append("fatigue_volume_reduction")
        elif context.tsb > TSB_WELL_RESTED:
            tempo_max = round_half_up(tempo_max * TEMPO_RESTED_MAX_FACTOR)
            fired.append("rested_extension")

        tempo_pace = profile.tempo_pace_seconds
        easy_miles = round_half_up(1.5 * mult)
        total = self.miles_at_pace((tempo_min + tempo_max) / 2, tempo_pace) + 2 * easy_miles

        return Dosage(
            rule_id=self.rule_id,
            label="Tempo Run",
            structure=f"{tempo_min}-{tempo_max} minutes continuous at tempo pace",
            target_paces=f"Tempo pace: {self.pace(tempo_pace)} (comfortably hard, RPE 6-7)",
            target_pace_range=(tempo_pace, tempo_pace),
            total_distance_miles=round_to(total, 1),
            total_distance=f"{round_half_up(total)} miles total including warmup/cooldown",
            warmup=f"{easy_miles} miles easy with 4 strides",
            cooldown=f"{easy_miles} miles easy",
            rationale=(
                f"Develops lactate threshold. Based on your VDOT of {profile.vdot:g} and "
                f"recent training load (CTL: {context.snapshot.ctl}, TSB: {context.tsb})."
            ),
            adjustments=self._adjustments(context),
            main_pace_seconds=tempo_pace,
            heat_workout_type=self.record_type,
            fired_rules=tuple(fired),
            details={
                "base_minutes": base_minutes,
                "tempo_min": tempo_min,
                "tempo_max": tempo_max,
            },
        )

    @staticmethod
    def _adjustments(context: DosageContext) -> str:
        if context.tsb < TSB_MODERATELY_FATIGUED:
            return "High training load detected - keep effort controlled and stop if form deteriorates"
        if context.tsb > TSB_FRESH:
            return "Good recovery status - you can push the pace if feeling strong"
        if context.phase == TrainingPhase.PEAK:
            return "In peak phase - can push duration to upper range"
        if context.phase == TrainingPhase.BASE:
            return "In base phase - stay at lower end of range"
        return "Build duration gradually through the phase"
