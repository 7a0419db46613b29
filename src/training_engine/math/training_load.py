"""Training load: per-workout TSS and the CTL/ATL/TSB performance model.

CTL and ATL are exponentially weighted averages of TSS with 42- and 7-day
time constants. Decay is applied once per logged workout rather than once
per calendar day, so rest days do not erode either load.

References:
    - Coggan & Allen (2010). Training and Racing with a Power Meter:
      Performance Manager (CTL/ATL/TSB).
    - Banister (1991): impulse-response fitness/fatigue model.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable

import numpy as np
import pandas as pd

from training_engine.math.numeric import clamp, round_half_up, round_to
from training_engine.models.enums import (
    ATL_TIME_CONSTANT_DAYS,
    CTL_TIME_CONSTANT_DAYS,
    DEFAULT_EASY_PACE_S,
    DEFAULT_LOAD_WINDOW_DAYS,
    FITNESS_STATUS_BANDS,
    FITNESS_STATUS_FLOOR,
    INTENSITY_FACTOR_MAX,
    INTENSITY_FACTOR_MIN,
    OPTIMAL_LOAD_HIGH_FRACTION,
    OPTIMAL_LOAD_LOW_FRACTION,
)
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.models.workout import WorkoutRecord

logger = logging.getLogger(__name__)


def calculate_tss(workout: WorkoutRecord, easy_pace_seconds: float = DEFAULT_EASY_PACE_S) -> int:
    """Training Stress Score for a single run.

    TSS = round(duration_hours × IF² × 100), IF = clamp(easy_pace / avg_pace, 0.5, 1.2)

    Duration comes from ``duration_minutes`` when present, otherwise from
    distance × pace. A record without pace, or without both duration and
    distance, scores 0.

    Args:
        workout: The logged workout.
        easy_pace_seconds: The athlete's easy pace (s/mi), the IF=1.0 anchor.

    Returns:
        Whole-number TSS (>= 0).
    """
    pace = workout.avg_pace_seconds_per_mile
    if not pace or pace <= 0:
        return 0

    duration_minutes = workout.duration_minutes
    if not duration_minutes:
        if not workout.distance_miles:
            return 0
        duration_minutes = workout.distance_miles * pace / 60

    intensity_factor = clamp(easy_pace_seconds / pace, INTENSITY_FACTOR_MIN, INTENSITY_FACTOR_MAX)
    return round_half_up((duration_minutes / 60) * intensity_factor ** 2 * 100)


def compute_snapshot(
    workouts: Iterable[WorkoutRecord],
    as_of: date,
    window_days: int = DEFAULT_LOAD_WINDOW_DAYS,
    easy_pace_seconds: float = DEFAULT_EASY_PACE_S,
) -> TrainingLoadSnapshot:
    """Fold a workout history into CTL/ATL/TSB as of a date.

    Workouts dated after ``as_of`` or more than ``window_days`` before it
    are ignored. The remainder is folded oldest-first; each workout decays
    and feeds CTL when it is within 42 days and ATL when within 7 days.

    Args:
        workouts: Any iterable of workout records, in any order.
        as_of: The day the snapshot describes.
        window_days: Lookback window in days.
        easy_pace_seconds: Easy pace used as the intensity anchor for TSS.

    Returns:
        A TrainingLoadSnapshot; all zeros when nothing falls in the window.
    """
    in_window = [
        w for w in workouts if 0 <= w.days_before(as_of) <= window_days
    ]
    if not in_window:
        return TrainingLoadSnapshot.empty(as_of)

    # sorted() is stable, so same-day workouts keep their input order
    in_window = sorted(in_window, key=lambda w: w.date)

    ctl_decay = 1 / CTL_TIME_CONSTANT_DAYS
    atl_decay = 1 / ATL_TIME_CONSTANT_DAYS
    ctl = 0.0
    atl = 0.0
    for workout in in_window:
        tss = calculate_tss(workout, easy_pace_seconds)
        days_ago = workout.days_before(as_of)
        if days_ago <= CTL_TIME_CONSTANT_DAYS:
            ctl = ctl * (1 - ctl_decay) + tss * ctl_decay
        if days_ago <= ATL_TIME_CONSTANT_DAYS:
            atl = atl * (1 - atl_decay) + tss * atl_decay

    snapshot = TrainingLoadSnapshot.from_loads(ctl, atl, as_of=as_of, workout_count=len(in_window))
    logger.debug(
        "Load as of %s: %d workouts, ctl=%d atl=%d tsb=%d",
        as_of, len(in_window), snapshot.ctl, snapshot.atl, snapshot.tsb,
    )
    return snapshot


def fitness_trend(
    workouts: Iterable[WorkoutRecord],
    start: date,
    end: date,
    window_days: int = DEFAULT_LOAD_WINDOW_DAYS,
    easy_pace_seconds: float = DEFAULT_EASY_PACE_S,
) -> pd.DataFrame:
    """Daily CTL/ATL/TSB series between two dates (inclusive).

    Each row is an independent :func:`compute_snapshot` as of that day.

    Returns:
        DataFrame with columns ``date``, ``ctl``, ``atl``, ``tsb``; empty
        when ``end`` precedes ``start``.
    """
    history = list(workouts)
    rows = []
    for day in pd.date_range(start, end, freq="D"):
        snap = compute_snapshot(history, day.date(), window_days, easy_pace_seconds)
        rows.append({"date": day.date(), "ctl": snap.ctl, "atl": snap.atl, "tsb": snap.tsb})
    return pd.DataFrame(rows, columns=["date", "ctl", "atl", "tsb"])


def ramp_rate(trend: pd.DataFrame, weeks: int = 4) -> float | None:
    """CTL change in points per week over the trailing ``weeks``.

    Args:
        trend: Output of :func:`fitness_trend`, oldest row first.
        weeks: Length of the trailing window.

    Returns:
        Points per week rounded to one decimal, or None with less than a
        week of data.
    """
    if len(trend) < 7:
        return None
    end_idx = len(trend) - 1
    start_idx = max(0, end_idx - weeks * 7)
    if end_idx - start_idx < 7:
        return None

    ctl = trend["ctl"].to_numpy(dtype=np.float64)
    actual_weeks = (end_idx - start_idx) / 7
    return round_to(float(ctl[end_idx] - ctl[start_idx]) / actual_weeks, 1)


def classify_ramp_rate(rate: float | None) -> str:
    """Classify a CTL ramp rate into an injury-risk category.

    Returns:
        One of: "insufficient_data", "decreasing", "conservative",
        "moderate", "aggressive", "high_risk"
    """
    if rate is None:
        return "insufficient_data"
    if rate < 0:
        return "decreasing"
    if rate < 5:
        return "conservative"
    if rate < 8:
        return "moderate"
    if rate < 10:
        return "aggressive"
    return "high_risk"


def fitness_status(tsb: float) -> str:
    """Label a stress balance, from "Well Rested" down to "Overreached"."""
    for lower, label in FITNESS_STATUS_BANDS:
        if tsb > lower:
            return label
    return FITNESS_STATUS_FLOOR


def optimal_load_range(ctl: float) -> tuple[int, int]:
    """Weekly TSS range (80–120% of seven days at the current CTL)."""
    weekly = ctl * 7
    return (
        round_half_up(weekly * OPTIMAL_LOAD_LOW_FRACTION),
        round_half_up(weekly * OPTIMAL_LOAD_HIGH_FRACTION),
    )


def weekly_mileage(
    workouts: Iterable[WorkoutRecord], as_of: date, days: int = 7
) -> float:
    """Total distance logged in the ``days`` days up to ``as_of``."""
    cutoff = as_of - timedelta(days=days)
    return float(sum(
        w.distance_miles or 0.0
        for w in workouts
        if cutoff <= w.date <= as_of
    ))
