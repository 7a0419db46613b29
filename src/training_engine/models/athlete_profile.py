"""Athlete profile and its resolved, default-filled counterpart."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from training_engine.models.enums import (
    DEFAULT_ACCLIMATIZATION_SCORE,
    DEFAULT_EASY_PACE_S,
    DEFAULT_INTERVAL_PACE_S,
    DEFAULT_PEAK_WEEKLY_MILEAGE,
    DEFAULT_TEMPO_PACE_S,
    DEFAULT_THRESHOLD_PACE_S,
    DEFAULT_VDOT,
    DEFAULT_WEEKLY_MILEAGE,
    MARATHON_PACE_OFFSET_FROM_TEMPO_S,
    VDOT_MAX,
    VDOT_MIN,
    Aggressiveness,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AthleteProfile:
    """Athlete settings as stored by the profile provider.

    Every field is optional. Paces are seconds per mile.
    """

    vdot: float | None = None
    easy_pace_seconds: int | None = None
    tempo_pace_seconds: int | None = None
    threshold_pace_seconds: int | None = None
    interval_pace_seconds: int | None = None
    marathon_pace_seconds: int | None = None
    half_marathon_pace_seconds: int | None = None
    current_weekly_mileage: float | None = None
    peak_weekly_mileage_target: float | None = None
    current_long_run_max: float | None = None
    plan_aggressiveness: Aggressiveness | None = None
    heat_acclimatization_score: int | None = None

    @property
    def has_valid_vdot(self) -> bool:
        return self.vdot is not None and VDOT_MIN <= self.vdot <= VDOT_MAX


@dataclass(frozen=True)
class ResolvedProfile:
    """AthleteProfile with every default applied exactly once.

    Consumers read from this object only; no call site re-applies defaults.
    """

    vdot: float
    vdot_is_default: bool
    weekly_mileage: float
    aggressiveness: Aggressiveness
    easy_pace_seconds: int
    tempo_pace_seconds: int
    threshold_pace_seconds: int
    interval_pace_seconds: int
    marathon_pace_seconds: int
    half_marathon_pace_seconds: int
    peak_weekly_mileage_target: float
    current_long_run_max: float | None
    heat_acclimatization_score: int


def resolve_profile(
    profile: AthleteProfile,
    weekly_mileage_override: float | None = None,
) -> ResolvedProfile:
    """Apply the documented defaults to a profile.

    An out-of-range VDOT is ignored (logged at WARNING) and the default
    VDOT is used instead. Pace fields fall back to the fixed default pace
    constants, never to VDOT-derived zones.

    Args:
        profile: The athlete's stored settings.
        weekly_mileage_override: Optional caller-supplied weekly mileage that
            takes precedence over the profile value.

    Returns:
        A ResolvedProfile with no missing fields.
    """
    vdot_is_default = not profile.has_valid_vdot
    if profile.vdot is not None and vdot_is_default:
        logger.warning(
            "VDOT %.1f outside [%.0f, %.0f]; using default %.0f",
            profile.vdot, VDOT_MIN, VDOT_MAX, DEFAULT_VDOT,
        )
    vdot = DEFAULT_VDOT if vdot_is_default else float(profile.vdot)  # type: ignore[arg-type]

    weekly_mileage = (
        weekly_mileage_override
        or profile.current_weekly_mileage
        or DEFAULT_WEEKLY_MILEAGE
    )

    tempo = profile.tempo_pace_seconds or DEFAULT_TEMPO_PACE_S
    threshold = profile.threshold_pace_seconds or DEFAULT_THRESHOLD_PACE_S
    acclimatization = profile.heat_acclimatization_score
    if acclimatization is None:
        acclimatization = DEFAULT_ACCLIMATIZATION_SCORE

    return ResolvedProfile(
        vdot=vdot,
        vdot_is_default=vdot_is_default,
        weekly_mileage=float(weekly_mileage),
        aggressiveness=profile.plan_aggressiveness or Aggressiveness.MODERATE,
        easy_pace_seconds=profile.easy_pace_seconds or DEFAULT_EASY_PACE_S,
        tempo_pace_seconds=tempo,
        threshold_pace_seconds=threshold,
        interval_pace_seconds=profile.interval_pace_seconds or DEFAULT_INTERVAL_PACE_S,
        marathon_pace_seconds=(
            profile.marathon_pace_seconds or tempo + MARATHON_PACE_OFFSET_FROM_TEMPO_S
        ),
        half_marathon_pace_seconds=profile.half_marathon_pace_seconds or threshold,
        peak_weekly_mileage_target=(
            profile.peak_weekly_mileage_target or DEFAULT_PEAK_WEEKLY_MILEAGE
        ),
        current_long_run_max=profile.current_long_run_max,
        heat_acclimatization_score=int(acclimatization),
    )
