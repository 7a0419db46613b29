"""RaceDayPlanner — race pacing, readiness and logistics from the other engines.

Composition only: goal pace comes from the target time or the VDOT zone for
the race category, race-week weather goes through the pace adjustment
engine, and readiness is a training-load snapshot banded by stress balance.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterable

from training_engine.engine import MISSING_PROFILE_ERROR
from training_engine.math.numeric import round_half_up
from training_engine.math.pace import format_pace_per_mile
from training_engine.math.pace_adjustment import adjust
from training_engine.math.training_load import compute_snapshot, weekly_mileage
from training_engine.math.vdot import equivalent_performances, pace_zones
from training_engine.math.weather import severity
from training_engine.models.athlete_profile import AthleteProfile, resolve_profile
from training_engine.models.enums import (
    DEFAULT_LOAD_WINDOW_DAYS,
    MARATHON_GEL_INTERVAL_MILES,
    RACE_AGGRESSIVE_TSB,
    RACE_CATEGORY_MIN_METERS,
    RACE_CATEGORY_ZONE,
    RACE_CONSERVATIVE_TSB,
    RACE_DEFAULT_PACES,
    RACE_MILEAGE_LOOKBACK_DAYS,
    RACE_PACE_EFFORT_LIMIT,
    RACE_PACE_EFFORT_MIN_MILES,
    RACE_PACE_EFFORT_TOLERANCE_S,
    RACE_READINESS_BANDS,
    RACE_READINESS_DEFAULT,
    RACE_SPLIT_TABLES,
    RACE_WEATHER_WINDOW_DAYS,
    TAPER_VOLUME_FRACTION,
    FailureKind,
    RaceCategory,
    WorkoutType,
)
from training_engine.models.pace_zones import PaceZones
from training_engine.models.prescription import Failure
from training_engine.models.race import (
    Race,
    RacePaceEffort,
    RacePlan,
    RaceReadiness,
    RaceWeather,
    SplitTarget,
)
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.models.weather import WeatherObservation
from training_engine.models.workout import WorkoutRecord

logger = logging.getLogger(__name__)

NO_RACE_ERROR = "No race found"
NO_RACE_SUGGESTION = "Add a race first"
WARM_RACE_TEMP_F = 65


def race_category(race: Race) -> RaceCategory:
    """Category from the race label, falling back to its distance."""
    category = RaceCategory.from_label(race.distance_label) or RaceCategory.from_label(race.name)
    if category is not None:
        return category
    for min_meters, candidate in RACE_CATEGORY_MIN_METERS:
        if race.distance_meters >= min_meters:
            return candidate
    return RaceCategory.FIVE_K


def race_paces(profile: AthleteProfile, zones: PaceZones | None) -> dict[str, int]:
    """Per-zone race paces: profile value, else VDOT zone, else fixed default."""
    profile_paces = {
        "easy": profile.easy_pace_seconds,
        "marathon": profile.marathon_pace_seconds,
        "half_marathon": profile.half_marathon_pace_seconds,
        "tempo": profile.tempo_pace_seconds,
        "threshold": profile.threshold_pace_seconds,
        "interval": profile.interval_pace_seconds,
    }
    paces = {}
    for zone, default in RACE_DEFAULT_PACES.items():
        zone_pace = getattr(zones, zone) if zones is not None else None
        paces[zone] = profile_paces[zone] or zone_pace or default
    return paces


def readiness_band(tsb: float) -> tuple[str, str]:
    """(band, assessment) for a stress balance."""
    for compare, bound, band, assessment in RACE_READINESS_BANDS:
        if compare(tsb, bound):
            return band, assessment
    return RACE_READINESS_DEFAULT


def readiness_recommendation(tsb: float) -> str:
    if tsb < RACE_CONSERVATIVE_TSB:
        return "Consider conservative pacing. Start 5-10 sec/mi slower than goal."
    if tsb > RACE_AGGRESSIVE_TSB:
        return "Fitness peaked. Can be aggressive with pacing if conditions allow."
    return "Execute planned pacing strategy. Trust your training."


def split_targets(category: RaceCategory, goal_pace_seconds: int) -> tuple[SplitTarget, ...]:
    """Segment paces for a category as offsets from the goal pace."""
    splits = []
    for segment, offset, notes, or_faster in RACE_SPLIT_TABLES[category]:
        pace = goal_pace_seconds + offset
        text = format_pace_per_mile(pace)
        splits.append(SplitTarget(
            segment=segment,
            pace_seconds=pace,
            pace=f"{text} or faster" if or_faster else text,
            notes=notes,
            or_faster=or_faster,
        ))
    return tuple(splits)


def race_pace_efforts(
    workouts: Iterable[WorkoutRecord], race_pace_seconds: int, as_of: date
) -> tuple[RacePaceEffort, ...]:
    """Most recent runs of 3+ miles within 15 s/mi of race pace."""
    candidates = sorted(
        (w for w in workouts if 0 <= w.days_before(as_of) <= DEFAULT_LOAD_WINDOW_DAYS),
        key=lambda w: w.date,
        reverse=True,
    )
    efforts = []
    for w in candidates:
        pace = w.avg_pace_seconds_per_mile
        if not pace or not w.distance_miles or w.distance_miles < RACE_PACE_EFFORT_MIN_MILES:
            continue
        if abs(pace - race_pace_seconds) >= RACE_PACE_EFFORT_TOLERANCE_S:
            continue
        efforts.append(RacePaceEffort(
            date=w.date,
            distance_miles=w.distance_miles,
            pace_seconds=round_half_up(pace),
            on_target=pace <= race_pace_seconds,
        ))
        if len(efforts) == RACE_PACE_EFFORT_LIMIT:
            break
    return tuple(efforts)


def warmup_routine(distance_miles: float) -> tuple[str, ...]:
    if distance_miles > 13:
        return (
            "5 min easy walk",
            "5 min easy jog",
            "Dynamic stretches",
            "Use the first mile as extended warmup",
        )
    if distance_miles > 6:
        return (
            "10 min easy jog",
            "Dynamic stretches",
            "4x100m strides @ race pace",
            "5 min before start",
        )
    return (
        "15 min easy jog",
        "Dynamic stretches",
        "6x100m strides building to race pace",
        "10 min before start",
    )


def fueling_plan(
    category: RaceCategory,
    distance_miles: float,
    avg_weekly_mileage: float,
    weather: WeatherObservation | None,
) -> tuple[str, ...]:
    if category == RaceCategory.MARATHON:
        gels = math.floor(distance_miles / MARATHON_GEL_INTERVAL_MILES)
        warm = weather is not None and weather.temperature_f > WARM_RACE_TEMP_F
        return (
            "Pre-race: 200-300 cal 2-3 hours before",
            f"During: {gels} gels (every 5 miles starting at mile 5)",
            f"Hydration: {'Every aid station' if warm else 'Every other aid station'}",
            "Practice your exact fueling plan during long runs",
        )
    if category == RaceCategory.HALF_MARATHON:
        return ("1 gel at mile 7" if avg_weekly_mileage > 40 else "Optional gel at mile 7-8",)
    return ("Light breakfast 2+ hours before; no fuel needed during the race",)


def plan_race(
    race: Race | None,
    profile: AthleteProfile | None,
    history: Iterable[WorkoutRecord] = (),
    weather: WeatherObservation | None = None,
    as_of: date | None = None,
) -> RacePlan | Failure:
    """Build a race-day plan.

    Args:
        race: The race to plan, or None when the athlete has none.
        profile: The athlete's settings, or None when no profile exists.
        history: Logged workouts, any order.
        weather: Current conditions; used only within 7 days of the race.
        as_of: Planning day; defaults to today.

    Returns:
        A RacePlan, or a Failure for a missing profile or race.
    """
    if profile is None:
        return Failure(kind=FailureKind.MISSING_PROFILE, error=MISSING_PROFILE_ERROR)
    if race is None:
        return Failure(
            kind=FailureKind.MISSING_RACE, error=NO_RACE_ERROR, suggestion=NO_RACE_SUGGESTION
        )

    as_of = as_of or date.today()
    history = list(history)
    resolved = resolve_profile(profile)
    zones = pace_zones(profile.vdot) if profile.has_valid_vdot else None  # type: ignore[arg-type]
    paces = race_paces(profile, zones)

    category = race_category(race)
    miles = race.distance_miles
    if race.target_time_seconds and miles > 0:
        race_pace = round_half_up(race.target_time_seconds / miles)
        pace_source = "target_time"
    else:
        race_pace = paces[RACE_CATEGORY_ZONE[category]]
        pace_source = "vdot" if zones is not None else "profile"

    days_until = (race.date - as_of).days
    race_weather = None
    goal_pace = race_pace
    if weather is not None and 0 <= days_until <= RACE_WEATHER_WINDOW_DAYS:
        conditions = severity(weather)
        adjustment = adjust(
            race_pace, conditions, WorkoutType.RACE, resolved.heat_acclimatization_score
        )
        race_weather = RaceWeather(observation=weather, severity=conditions, pace_adjustment=adjustment)
        goal_pace = adjustment.adjusted_pace_seconds

    snapshot: TrainingLoadSnapshot = compute_snapshot(
        history, as_of, DEFAULT_LOAD_WINDOW_DAYS, resolved.easy_pace_seconds
    )
    band, assessment = readiness_band(snapshot.tsb)
    readiness = RaceReadiness(
        snapshot=snapshot,
        band=band,
        assessment=assessment,
        recommendation=readiness_recommendation(snapshot.tsb),
        race_pace_efforts=race_pace_efforts(history, race_pace, as_of),
    )

    avg_weekly = weekly_mileage(history, as_of, RACE_MILEAGE_LOOKBACK_DAYS) / 4
    low, high = TAPER_VOLUME_FRACTION
    logger.debug(
        "Race plan %s: %s at %ds/mi (%s), %d days out, tsb=%d",
        race.name, category.value, race_pace, pace_source, days_until, snapshot.tsb,
    )

    return RacePlan(
        race=race,
        category=category,
        days_until=days_until,
        race_pace_seconds=race_pace,
        pace_source=pace_source,
        goal_pace_seconds=goal_pace,
        projected_time_seconds=race.target_time_seconds or round_half_up(race_pace * miles),
        splits=split_targets(category, goal_pace),
        readiness=readiness,
        recent_weekly_mileage=avg_weekly,
        taper_mileage=(round_half_up(avg_weekly * low), round_half_up(avg_weekly * high)),
        warmup_routine=warmup_routine(miles),
        fueling=fueling_plan(category, miles, avg_weekly, weather),
        vdot=profile.vdot if zones is not None else None,
        equivalent_performances=(
            equivalent_performances(profile.vdot) if zones is not None else {}  # type: ignore[arg-type]
        ),
        weather=race_weather,
    )
