"""Fixtures with realistic Garmin activity summaries for testing."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def garmin_easy_run() -> dict:
    """Realistic get_activities_by_date entry for a 10 km aerobic run."""
    return {
        "activityId": 14567890123,
        "activityName": "Morning Run",
        "startTimeLocal": "2025-06-01 06:30:00",
        "startTimeGMT": "2025-06-01 10:30:00",
        "activityType": {"typeId": 1, "typeKey": "running", "parentTypeId": 17},
        "eventType": {"typeId": 9, "typeKey": "uncategorized"},
        "distance": 10000.0,
        "duration": 3600.0,
        "movingDuration": 3540.0,
        "averageSpeed": 3.0,
        "averageHR": 142.0,
        "maxHR": 158.0,
        "trainingEffectLabel": "AEROBIC_BASE",
        "aerobicTrainingEffect": 2.8,
    }


@pytest.fixture
def garmin_activity_factory(garmin_easy_run):
    """Factory fixture overriding fields of the easy run.

    Usage:
        act = garmin_activity_factory(trainingEffectLabel="TEMPO", distance=8000.0)
    """

    def factory(**overrides) -> dict:
        activity = dict(garmin_easy_run)
        activity.update(overrides)
        return activity

    return factory


@pytest.fixture
def mock_garmin():
    """A mock Garmin session."""
    mock = MagicMock()
    mock.garth = MagicMock()
    return mock
