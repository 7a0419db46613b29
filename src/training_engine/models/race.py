"""Race entry and the race-day plan built for it."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from training_engine.models.enums import METERS_PER_MILE, RaceCategory
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.models.weather import ConditionsSeverity, PaceAdjustment, WeatherObservation


@dataclass(frozen=True)
class Race:
    """An upcoming race as stored by the athlete."""

    name: str
    date: date
    distance_meters: float
    distance_label: str = ""
    target_time_seconds: int | None = None

    @property
    def distance_miles(self) -> float:
        return self.distance_meters / METERS_PER_MILE


@dataclass(frozen=True)
class SplitTarget:
    """Pace target for one segment of the race."""

    segment: str
    pace_seconds: int
    pace: str
    notes: str
    or_faster: bool = False


@dataclass(frozen=True)
class RacePaceEffort:
    """A recent training run close to goal race pace."""

    date: date
    distance_miles: float
    pace_seconds: int
    on_target: bool


@dataclass(frozen=True)
class RaceReadiness:
    """Stress-balance based readiness going into the race."""

    snapshot: TrainingLoadSnapshot
    band: str
    assessment: str
    recommendation: str
    race_pace_efforts: tuple[RacePaceEffort, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RaceWeather:
    """Race-day conditions and their effect on goal pace."""

    observation: WeatherObservation
    severity: ConditionsSeverity
    pace_adjustment: PaceAdjustment


@dataclass(frozen=True)
class RacePlan:
    """Pacing, readiness and logistics plan for one race."""

    race: Race
    category: RaceCategory
    days_until: int
    race_pace_seconds: int
    pace_source: str
    goal_pace_seconds: int
    projected_time_seconds: int
    splits: tuple[SplitTarget, ...]
    readiness: RaceReadiness
    recent_weekly_mileage: float
    taper_mileage: tuple[int, int]
    warmup_routine: tuple[str, ...]
    fueling: tuple[str, ...]
    vdot: float | None = None
    equivalent_performances: dict[str, int] = field(default_factory=dict)
    weather: RaceWeather | None = None
    success: bool = True
