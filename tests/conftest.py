"""Shared test fixtures: athletes, workout histories, weather and dosage contexts."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Iterable

import pytest

from training_engine.engine import mileage_multiplier
from training_engine.models.athlete_profile import AthleteProfile, resolve_profile
from training_engine.models.dosage_context import DosageContext
from training_engine.models.enums import (
    HARD_EFFORT_WINDOW_DAYS,
    Aggressiveness,
    ConditionCategory,
    RaceCategory,
    TrainingPhase,
    WorkoutType,
)
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.models.weather import WeatherObservation
from training_engine.models.workout import WorkoutRecord

AS_OF = date(2025, 6, 2)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def moderate_athlete() -> AthleteProfile:
    """VDOT 45, 40 mi/week, moderate: mileage multiplier exactly 1.0, default paces."""
    return AthleteProfile(
        vdot=45.0,
        current_weekly_mileage=40.0,
        plan_aggressiveness=Aggressiveness.MODERATE,
    )


@pytest.fixture
def aggressive_athlete() -> AthleteProfile:
    """VDOT 50, 50 mi/week, aggressive: mileage multiplier ~1.449."""
    return AthleteProfile(
        vdot=50.0,
        current_weekly_mileage=50.0,
        plan_aggressiveness=Aggressiveness.AGGRESSIVE,
    )


@pytest.fixture
def empty_profile() -> AthleteProfile:
    """Onboarded athlete who has not filled in anything."""
    return AthleteProfile()


@pytest.fixture
def workout_factory() -> Callable[..., WorkoutRecord]:
    """Factory fixture for WorkoutRecords dated relative to AS_OF.

    Usage:
        w = workout_factory(days_ago=3, workout_type=WorkoutType.TEMPO, minutes=40, pace=450)
    """

    def factory(
        days_ago: int = 0,
        workout_type: WorkoutType = WorkoutType.EASY,
        miles: float | None = None,
        minutes: float | None = None,
        pace: float | None = None,
    ) -> WorkoutRecord:
        return WorkoutRecord(
            date=AS_OF - timedelta(days=days_ago),
            workout_type=workout_type,
            distance_miles=miles,
            duration_minutes=minutes,
            avg_pace_seconds_per_mile=pace,
        )

    return factory


@pytest.fixture
def context_factory() -> Callable[..., DosageContext]:
    """Factory fixture for DosageContexts with a fixed stress balance.

    Usage:
        ctx = context_factory(profile, tsb=-18, hard_efforts=2, phase="build")
    """

    def factory(
        profile: AthleteProfile | None = None,
        tsb: int = 0,
        ctl: int = 40,
        hard_efforts: int = 0,
        recent: Iterable[WorkoutRecord] = (),
        recent_mileage: float | None = None,
        phase: str | None = None,
        target_distance: str | None = None,
    ) -> DosageContext:
        resolved = resolve_profile(profile or AthleteProfile())
        recent_workouts = tuple(sorted(recent, key=lambda w: w.date, reverse=True))
        return DosageContext(
            profile=resolved,
            snapshot=TrainingLoadSnapshot(ctl=ctl, atl=ctl - tsb, tsb=tsb, as_of=AS_OF),
            as_of=AS_OF,
            mileage_multiplier=mileage_multiplier(
                resolved.weekly_mileage, resolved.vdot, resolved.aggressiveness
            ),
            hard_efforts_this_week=hard_efforts,
            recent_mileage=(
                resolved.weekly_mileage if recent_mileage is None else recent_mileage
            ),
            recent_workouts=recent_workouts,
            this_week=tuple(
                w for w in recent_workouts if w.days_before(AS_OF) <= HARD_EFFORT_WINDOW_DAYS
            ),
            phase=TrainingPhase.parse(phase),
            target_race=RaceCategory.from_label(target_distance),
            target_distance_label=target_distance,
        )

    return factory


@pytest.fixture
def hot_weather() -> WeatherObservation:
    """90°F, 60% RH, 5 mph: heat index 100°F."""
    return WeatherObservation(temperature_f=90.0, humidity_pct=60.0, wind_mph=5.0)


@pytest.fixture
def cool_windy_weather() -> WeatherObservation:
    """45°F, 20 mph wind: wind chill 37°F, no heat stress."""
    return WeatherObservation(temperature_f=45.0, humidity_pct=50.0, wind_mph=20.0)


@pytest.fixture
def cold_weather() -> WeatherObservation:
    """25°F, 15 mph wind: wind chill 13°F."""
    return WeatherObservation(
        temperature_f=25.0,
        humidity_pct=60.0,
        wind_mph=15.0,
        condition=ConditionCategory.CLOUDY,
    )
