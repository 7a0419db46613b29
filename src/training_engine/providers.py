"""Collaborator interfaces the daily job wires around the pure core.

The core never performs I/O itself; history, profile and weather come from
objects satisfying these protocols.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from training_engine.models.athlete_profile import AthleteProfile
from training_engine.models.weather import WeatherObservation
from training_engine.models.workout import WorkoutRecord


class HistoryProvider(Protocol):
    def fetch_workouts(self, start: date, end: date) -> Sequence[WorkoutRecord]:
        """Workouts logged between *start* and *end*, inclusive."""
        ...


class ProfileProvider(Protocol):
    def load_profile(self) -> AthleteProfile | None:
        """The active athlete profile, or None before onboarding."""
        ...


class WeatherProvider(Protocol):
    def current(self, latitude: float, longitude: float) -> WeatherObservation | None:
        """Current conditions, or None when weather is unavailable."""
        ...
