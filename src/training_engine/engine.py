"""PrescriptionEngine — doses a requested workout from profile, history and load."""

from __future__ import annotations

import dataclasses
import logging
import math
from datetime import date
from functools import lru_cache
from typing import Iterable

from training_engine.math.numeric import clamp, round_half_up
from training_engine.math.pace import format_pace_per_mile
from training_engine.math.pace_adjustment import adjust
from training_engine.math.training_load import compute_snapshot
from training_engine.math.weather import severity
from training_engine.models.athlete_profile import AthleteProfile, ResolvedProfile, resolve_profile
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import (
    AGGRESSIVENESS_FACTOR,
    COACH_HIGH_VOLUME_FRACTION,
    COACH_LOW_VOLUME_FRACTION,
    DEFAULT_VDOT,
    HARD_EFFORT_TYPES,
    HARD_EFFORT_WINDOW_DAYS,
    MILEAGE_MULTIPLIER_MAX,
    MILEAGE_MULTIPLIER_MIN,
    MILEAGE_MULTIPLIER_REFERENCE_MPW,
    RECENT_WORKOUT_LIMIT,
    TSB_MODERATELY_FATIGUED,
    TSB_FRESH,
    TSB_PEAK,
    TSB_VERY_FATIGUED,
    TSB_WELL_RESTED,
    VOLUME_ABOVE_TARGET_FRACTION,
    VOLUME_BELOW_TARGET_FRACTION,
    Aggressiveness,
    FailureKind,
    PrescriptionType,
    RaceCategory,
    TrainingPhase,
)
from training_engine.models.prescription import Dosage, Failure, TrainingStress, WorkoutPrescription
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.models.weather import PaceAdjustment, WeatherObservation
from training_engine.models.workout import WorkoutRecord
from training_engine.registry import DosageRegistry

logger = logging.getLogger(__name__)

MISSING_PROFILE_ERROR = "No active profile. Please complete onboarding first."
NO_DOSAGE_RULE_ERROR = "No dosage rules registered"


def mileage_multiplier(
    weekly_mileage: float,
    vdot: float = DEFAULT_VDOT,
    aggressiveness: Aggressiveness = Aggressiveness.MODERATE,
) -> float:
    """Volume scale relative to a 40 mpw, VDOT 45, moderate runner.

    multiplier = clamp((mpw / 40) × sqrt(vdot / 45) × aggressiveness, 0.5, 2.0)
    """
    raw = (
        (weekly_mileage / MILEAGE_MULTIPLIER_REFERENCE_MPW)
        * math.sqrt(vdot / DEFAULT_VDOT)
        * AGGRESSIVENESS_FACTOR[aggressiveness]
    )
    return clamp(raw, MILEAGE_MULTIPLIER_MIN, MILEAGE_MULTIPLIER_MAX)


def recent_workouts(
    history: Iterable[WorkoutRecord], as_of: date, limit: int = RECENT_WORKOUT_LIMIT
) -> tuple[WorkoutRecord, ...]:
    """The ``limit`` most recent workouts on or before ``as_of``, newest first."""
    past = [w for w in history if w.days_before(as_of) >= 0]
    past.sort(key=lambda w: w.date, reverse=True)
    return tuple(past[:limit])


def count_hard_efforts(workouts: Iterable[WorkoutRecord]) -> int:
    return sum(1 for w in workouts if w.workout_type in HARD_EFFORT_TYPES)


def tsb_status(tsb: int) -> str:
    """One-line stress-balance band used in the training stress summary."""
    if tsb < TSB_VERY_FATIGUED:
        return f"Very fatigued (TSB: {tsb}) - consider reducing intensity or volume"
    if tsb < TSB_MODERATELY_FATIGUED:
        return f"Moderately fatigued (TSB: {tsb}) - be cautious with hard efforts"
    if tsb > TSB_WELL_RESTED:
        return f"Well rested (TSB: {tsb}) - good time for a quality workout"
    return f"Balanced training load (TSB: {tsb})"


def coach_notes(snapshot: TrainingLoadSnapshot, recent_mileage: float, target_mileage: float) -> str:
    """Overall guidance from stress balance, then from recent volume."""
    tsb = snapshot.tsb
    if tsb < TSB_VERY_FATIGUED:
        return (
            f"Very high fatigue level (TSB: {tsb}). Strongly consider an easy run or rest day "
            "instead. If you proceed, reduce intensity and stop if form deteriorates."
        )
    if tsb < TSB_MODERATELY_FATIGUED:
        return (
            f"Elevated fatigue (TSB: {tsb}). Workout adjusted for current training load. "
            "Focus on quality over quantity and don't force the pace."
        )
    if tsb > TSB_PEAK:
        return (
            f"Very well rested (TSB: {tsb}). Great opportunity for a breakthrough workout! "
            "Push yourself while maintaining good form."
        )
    if tsb > TSB_FRESH:
        return (
            f"Good recovery status (TSB: {tsb}). You should feel strong today - aim for the "
            "upper end of prescribed ranges."
        )
    if recent_mileage > target_mileage * COACH_HIGH_VOLUME_FRACTION:
        return (
            f"Training load is high but balanced (TSB: {tsb}). Listen to your body and "
            "adjust effort as needed."
        )
    if recent_mileage < target_mileage * COACH_LOW_VOLUME_FRACTION:
        return (
            "Training volume is low - build back gradually. Current fitness "
            f"(CTL: {snapshot.ctl}) reflects recent lighter training."
        )
    return (
        f"Training metrics are balanced (CTL: {snapshot.ctl}, TSB: {tsb}). Execute workout "
        "as prescribed, adjusting for conditions."
    )


def training_stress(
    profile: ResolvedProfile,
    this_week: tuple[WorkoutRecord, ...],
    recent_mileage: float,
    hard_efforts: int,
) -> TrainingStress:
    """Summarise last-7-day volume against the athlete's weekly target."""
    target = profile.weekly_mileage
    if recent_mileage < target * VOLUME_BELOW_TARGET_FRACTION:
        status = "Below target"
    elif recent_mileage > target * VOLUME_ABOVE_TARGET_FRACTION:
        status = "Above target"
    else:
        status = "On target"

    easy = profile.easy_pace_seconds
    if this_week:
        avg_pace = sum(w.avg_pace_seconds_per_mile or easy for w in this_week) / len(this_week)
    else:
        avg_pace = easy

    return TrainingStress(
        recent_mileage=recent_mileage,
        target_mileage=target,
        volume_status=status,
        hard_efforts=hard_efforts,
        recent_avg_pace_seconds=round_half_up(avg_pace),
        vdot=profile.vdot,
    )


class PrescriptionEngine:
    """Selects the dosage rule for a workout type and assembles the prescription.

    Usage:
        engine = PrescriptionEngine()
        result = engine.prescribe("tempo", profile, history, as_of=date.today())
        if result.success:
            print(result.structure)
    """

    def __init__(self, registry: DosageRegistry | None = None) -> None:
        self.registry = registry or DosageRegistry()

        # Auto-discover rules if using default registry
        if registry is None:
            self.registry.discover_rules()

    def build_context(
        self,
        profile: ResolvedProfile,
        history: Iterable[WorkoutRecord],
        as_of: date,
        snapshot: TrainingLoadSnapshot | None = None,
        phase: TrainingPhase | str | None = None,
        target_distance: str | None = None,
    ) -> DosageContext:
        """Freeze everything the dosage rules read into a DosageContext."""
        history = list(history)
        if snapshot is None:
            snapshot = compute_snapshot(history, as_of, easy_pace_seconds=profile.easy_pace_seconds)

        recent = recent_workouts(history, as_of)
        this_week = tuple(w for w in recent if w.days_before(as_of) <= HARD_EFFORT_WINDOW_DAYS)
        return DosageContext(
            profile=profile,
            snapshot=snapshot,
            as_of=as_of,
            mileage_multiplier=mileage_multiplier(
                profile.weekly_mileage, profile.vdot, profile.aggressiveness
            ),
            hard_efforts_this_week=count_hard_efforts(this_week),
            recent_mileage=float(sum(w.distance_miles or 0.0 for w in this_week)),
            recent_workouts=recent,
            this_week=this_week,
            phase=TrainingPhase.parse(phase),
            target_race=RaceCategory.from_label(target_distance),
            target_distance_label=target_distance,
        )

    def prescribe(
        self,
        workout_type: PrescriptionType | str,
        profile: AthleteProfile | None,
        history: Iterable[WorkoutRecord] = (),
        snapshot: TrainingLoadSnapshot | None = None,
        phase: TrainingPhase | str | None = None,
        target_distance: str | None = None,
        weekly_mileage_override: float | None = None,
        as_of: date | None = None,
        weather: WeatherObservation | None = None,
    ) -> WorkoutPrescription | Failure:
        """Dose one workout.

        Args:
            workout_type: Requested kind; unknown kinds get the easy-run dosage.
            profile: The athlete's settings, or None when no profile exists.
            history: Logged workouts, any order.
            snapshot: Precomputed training load; computed from ``history``
                as of ``as_of`` when omitted.
            phase: Optional training phase ("base", "build", "peak", "taper").
            target_distance: Optional target race label ("5K", "marathon"...).
            weekly_mileage_override: Weekly mileage that takes precedence
                over the profile value.
            as_of: Day being prescribed for; defaults to today.
            weather: Current conditions; when given, the main target pace
                is adjusted for heat.

        Returns:
            A WorkoutPrescription, or a Failure when no profile exists or no
            dosage rule can serve the request.
        """
        if profile is None:
            return Failure(kind=FailureKind.MISSING_PROFILE, error=MISSING_PROFILE_ERROR)

        as_of = as_of or date.today()
        requested = PrescriptionType.parse(workout_type)
        resolved = resolve_profile(profile, weekly_mileage_override)
        context = self.build_context(resolved, history, as_of, snapshot, phase, target_distance)

        rule = self.registry.for_type(requested) or self.registry.for_type(PrescriptionType.EASY)
        if rule is None:
            logger.warning("No dosage rule for %s and no easy fallback registered", requested.value)
            return Failure(kind=FailureKind.NO_DOSAGE_RULE, error=NO_DOSAGE_RULE_ERROR)
        dosage = rule.dose(context)

        pace_adjustment = None
        if weather is not None:
            pace_adjustment = adjust(
                dosage.main_pace_seconds,
                severity(weather),
                dosage.heat_workout_type,
                resolved.heat_acclimatization_score,
            )
            dosage = _with_heat_adjustment(dosage, pace_adjustment)

        logger.debug(
            "Prescribed %s (mult=%.3f, tsb=%d, hard=%d, fired=%s)",
            rule.rule_id, context.mileage_multiplier, context.tsb,
            context.hard_efforts_this_week, ",".join(dosage.fired_rules) or "-",
        )

        return WorkoutPrescription(
            prescription_type=rule.prescription_type,
            workout_type=dosage.label,
            structure=dosage.structure,
            target_paces=dosage.target_paces,
            target_pace_range=dosage.target_pace_range,
            total_distance_miles=dosage.total_distance_miles,
            total_distance=dosage.total_distance,
            warmup=dosage.warmup,
            cooldown=dosage.cooldown,
            rationale=dosage.rationale,
            adjustments=dosage.adjustments,
            snapshot=context.snapshot,
            training_stress=training_stress(
                resolved, context.this_week, context.recent_mileage, context.hard_efforts_this_week
            ),
            tsb_status=tsb_status(context.tsb),
            coach_notes=coach_notes(context.snapshot, context.recent_mileage, resolved.weekly_mileage),
            fired_rules=dosage.fired_rules,
            details=dict(dosage.details),
            pace_adjustment=pace_adjustment,
        )


def _with_heat_adjustment(dosage: Dosage, pace_adjustment: PaceAdjustment) -> Dosage:
    """Fold a positive heat slowdown into the dosage's pace range and adjustments text."""
    seconds = pace_adjustment.adjustment_seconds
    if seconds <= 0:
        return dosage
    fast, slow = dosage.target_pace_range
    note = (
        f" Heat: {pace_adjustment.recommendation} Target "
        f"{format_pace_per_mile(pace_adjustment.adjusted_pace_seconds)} (+{seconds}s/mi)."
    )
    return dataclasses.replace(
        dosage,
        target_pace_range=(fast + seconds, slow + seconds),
        adjustments=dosage.adjustments + note,
        main_pace_seconds=pace_adjustment.adjusted_pace_seconds,
        fired_rules=dosage.fired_rules + ("heat_pace_adjustment",),
    )


@lru_cache(maxsize=1)
def default_engine() -> PrescriptionEngine:
    return PrescriptionEngine()


def prescribe(
    workout_type: PrescriptionType | str,
    profile: AthleteProfile | None,
    history: Iterable[WorkoutRecord] = (),
    snapshot: TrainingLoadSnapshot | None = None,
    **kwargs,
) -> WorkoutPrescription | Failure:
    """Module-level shortcut for ``PrescriptionEngine().prescribe``."""
    return default_engine().prescribe(workout_type, profile, history, snapshot, **kwargs)
