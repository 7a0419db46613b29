"""Heat pace adjustment: severity + workout type + acclimatization → s/mi slowdown.

Only heat (heat + humidity factors) slows the target pace. Cold and wind
produce warnings but never a numeric adjustment: cool air is close to
optimal for distance running once warmed up.

References:
    Ely et al. (2007). Impact of weather on marathon-running performance.
        Med Sci Sports Exerc 39(3):487-493.
    Périard et al. (2015). Adaptations and mechanisms of human heat
        acclimation. Scand J Med Sci Sports 25(S1):20-38.
"""

from __future__ import annotations

from training_engine.math.numeric import piecewise_linear, round_half_up
from training_engine.math.pace import format_pace
from training_engine.models.enums import (
    ACCLIMATIZATION_SCALING,
    DEFAULT_ACCLIMATIZATION_SCORE,
    DEFAULT_HEAT_MULTIPLIER,
    HEAT_ADJUSTMENT_BANDS,
    WARN_DANGEROUS_WIND_CHILL,
    WARN_EXTREME_HEAT_INDEX,
    WARN_FROSTBITE_WIND_CHILL,
    WARN_PEAK_HEAT_SEVERITY,
    WARN_UNSAFE_HEAT_SEVERITY,
    WORKOUT_TYPE_HEAT_MULTIPLIER,
    PrimaryFactor,
    WorkoutType,
)
from training_engine.models.weather import ConditionsSeverity, PaceAdjustment


def base_adjustment(heat_severity: float) -> float:
    """Unscaled slowdown (s/mi) for a heat severity; zero up to 10."""
    return piecewise_linear(heat_severity, HEAT_ADJUSTMENT_BANDS, inclusive=True)


def acclimatization_multiplier(score: float) -> float:
    """Scale factor for a positive adjustment: well acclimatized runners slow less."""
    for compare, bound, multiplier in ACCLIMATIZATION_SCALING:
        if compare(score, bound):
            return multiplier
    return 1.0


def adjust(
    target_pace_seconds: int,
    conditions: ConditionsSeverity | None,
    workout_type: WorkoutType | str = WorkoutType.EASY,
    acclimatization_score: float = DEFAULT_ACCLIMATIZATION_SCORE,
) -> PaceAdjustment:
    """Adjust a target pace for the heat.

    Args:
        target_pace_seconds: Planned pace in seconds per mile.
        conditions: Output of ``severity()``, or None when weather is
            unavailable (no adjustment, no warnings).
        workout_type: Logged workout type; easy efforts absorb the full
            slowdown, intervals and races half of it.
        acclimatization_score: Heat acclimatization 0–100.

    Returns:
        PaceAdjustment with the signed slowdown, text and warnings.
    """
    workout_type = WorkoutType.parse(workout_type)
    if conditions is None:
        return _unchanged(target_pace_seconds, "Weather unavailable - no adjustment applied")

    factors = conditions.factors
    heat_severity = factors.heat_severity

    adjustment = base_adjustment(heat_severity)
    adjustment *= WORKOUT_TYPE_HEAT_MULTIPLIER.get(workout_type, DEFAULT_HEAT_MULTIPLIER)
    if adjustment > 0:
        adjustment *= acclimatization_multiplier(acclimatization_score)

    adjustment_seconds = round_half_up(adjustment)
    adjusted = target_pace_seconds + adjustment_seconds

    return PaceAdjustment(
        original_pace_seconds=target_pace_seconds,
        adjusted_pace_seconds=adjusted,
        adjustment_seconds=adjustment_seconds,
        original_pace=format_pace(target_pace_seconds),
        adjusted_pace=format_pace(adjusted),
        reason=_reason(conditions, adjustment_seconds),
        recommendation=_recommendation(conditions, adjustment_seconds, workout_type),
        warnings=tuple(_warnings(conditions)),
    )


def _unchanged(target_pace_seconds: int, reason: str) -> PaceAdjustment:
    return PaceAdjustment(
        original_pace_seconds=target_pace_seconds,
        adjusted_pace_seconds=target_pace_seconds,
        adjustment_seconds=0,
        original_pace=format_pace(target_pace_seconds),
        adjusted_pace=format_pace(target_pace_seconds),
        reason=reason,
        recommendation="Conditions are favorable. Run as planned.",
    )


def _reason(conditions: ConditionsSeverity, adjustment_seconds: int) -> str:
    primary = conditions.primary_factor
    if adjustment_seconds == 0:
        if primary == PrimaryFactor.COLD:
            return "Cool temps are ideal for running - no slowdown needed"
        if primary == PrimaryFactor.WIND:
            return "Wind adds effort but not systematic slowdown"
        return "Good conditions - no adjustment needed"
    if conditions.heat_index is not None:
        humid = " + humidity" if conditions.factors.humidity > 10 else ""
        return f"Heat index {conditions.heat_index:g}°F{humid}"
    return "Elevated temperature affects pace"


def _recommendation(
    conditions: ConditionsSeverity, adjustment_seconds: int, workout_type: WorkoutType
) -> str:
    wc = conditions.wind_chill
    if conditions.primary_factor == PrimaryFactor.COLD:
        if wc is not None and wc <= 10:
            return "Dress warmly, cover extremities. Pace should be unaffected once warmed up."
        if wc is not None and wc <= 25:
            return "Layer up. Cool temps are great for performance once warmed up."
        return "Ideal conditions for running. Dress appropriately and enjoy!"
    if adjustment_seconds == 0:
        return "Conditions are favorable. Run as planned."
    if adjustment_seconds <= 10:
        return "Slightly warm - run by effort, not pace. Target your usual RPE."
    if adjustment_seconds <= 25:
        rpe = "3-4" if workout_type == WorkoutType.EASY else "5-6"
        return f"Run by effort (RPE {rpe}). Accept slower paces."
    if adjustment_seconds <= 40:
        return "Hot conditions - consider reducing intensity. Focus on effort, not pace."
    return "Very hot - consider an easier workout, shorter route, or indoor alternative."


def _warnings(conditions: ConditionsSeverity) -> list[str]:
    heat_severity = conditions.factors.heat_severity
    wc = conditions.wind_chill
    warnings = []
    if heat_severity >= WARN_PEAK_HEAT_SEVERITY:
        warnings.append("Consider early morning to avoid peak heat")
    if heat_severity >= WARN_UNSAFE_HEAT_SEVERITY:
        warnings.append("Conditions are borderline unsafe for hard efforts")
    if conditions.heat_index is not None and conditions.heat_index >= WARN_EXTREME_HEAT_INDEX:
        warnings.append("Extreme heat - hydrate aggressively, consider shorter route")
    if wc is not None and wc <= WARN_FROSTBITE_WIND_CHILL:
        warnings.append("Risk of frostbite on exposed skin - cover extremities")
    if wc is not None and wc <= WARN_DANGEROUS_WIND_CHILL:
        warnings.append("Dangerous cold - consider treadmill or shorter outdoor exposure")
    return warnings
