"""Pure functions mapping Garmin activity summaries to WorkoutRecords.

No I/O — takes raw dicts from ``GarminClient.pull_activities`` and returns
engine records. Distances arrive in meters, durations in seconds and speed
in meters per second.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable, Optional

from training_engine.math.numeric import round_to
from training_engine.models.enums import METERS_PER_MILE, WorkoutType
from training_engine.models.workout import WorkoutRecord

logger = logging.getLogger(__name__)

# Garmin activityType.typeKey values that count as running.
_RUN_TYPE_KEYS = frozenset({
    "running",
    "track_running",
    "treadmill_running",
    "trail_running",
    "street_running",
    "indoor_running",
    "virtual_run",
})

# Garmin trainingEffectLabel → record type.
_TRAINING_EFFECT_TYPES = {
    "RECOVERY": WorkoutType.RECOVERY,
    "AEROBIC_BASE": WorkoutType.EASY,
    "TEMPO": WorkoutType.TEMPO,
    "LACTATE_THRESHOLD": WorkoutType.THRESHOLD,
    "VO2MAX": WorkoutType.INTERVAL,
    "ANAEROBIC_CAPACITY": WorkoutType.INTERVAL,
    "SPEED": WorkoutType.INTERVAL,
}

# Aerobic runs at least this long are logged as long runs.
LONG_RUN_MIN_MILES = 10.0


def map_activities(activities: Iterable[dict[str, Any]]) -> list[WorkoutRecord]:
    """Map raw activities, skipping any without a usable start date."""
    records = []
    for activity in activities or ():
        record = map_activity(activity)
        if record is None:
            logger.debug("Skipping activity %s without start time", activity.get("activityId"))
            continue
        records.append(record)
    return records


def map_activity(activity: dict[str, Any]) -> Optional[WorkoutRecord]:
    """Map one Garmin activity summary, or None when it has no start date."""
    started = _parse_start(activity.get("startTimeLocal") or activity.get("startTimeGMT"))
    if started is None:
        return None

    meters = _positive(activity.get("distance"))
    seconds = _positive(activity.get("duration") or activity.get("movingDuration"))
    miles = round_to(meters / METERS_PER_MILE, 2) if meters else None

    return WorkoutRecord(
        date=started,
        workout_type=_workout_type(activity, miles),
        distance_miles=miles,
        duration_minutes=round_to(seconds / 60, 1) if seconds else None,
        avg_pace_seconds_per_mile=_pace(activity, meters, seconds),
    )


# ---------------------------------------------------------------------------
# Internal extractors — each handles missing fields gracefully
# ---------------------------------------------------------------------------


def _workout_type(activity: dict[str, Any], miles: Optional[float]) -> WorkoutType:
    type_key = ((activity.get("activityType") or {}).get("typeKey") or "").lower()
    if type_key not in _RUN_TYPE_KEYS:
        return WorkoutType.CROSS_TRAIN

    event_key = ((activity.get("eventType") or {}).get("typeKey") or "").lower()
    if event_key == "race":
        return WorkoutType.RACE

    label = (activity.get("trainingEffectLabel") or "").upper()
    workout_type = _TRAINING_EFFECT_TYPES.get(label, WorkoutType.EASY)
    if workout_type == WorkoutType.EASY and miles and miles >= LONG_RUN_MIN_MILES:
        return WorkoutType.LONG
    return workout_type


def _pace(
    activity: dict[str, Any], meters: Optional[float], seconds: Optional[float]
) -> Optional[float]:
    """Seconds per mile from average speed, else distance and duration."""
    speed = _positive(activity.get("averageSpeed"))
    if speed:
        return round_to(METERS_PER_MILE / speed, 1)
    if meters and seconds:
        return round_to(seconds / (meters / METERS_PER_MILE), 1)
    return None


def _parse_start(value: Any) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace(" ", "T")).date()
    except ValueError:
        return None


def _positive(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None
