"""Fixtures with Open-Meteo responses and a controllable clock."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def open_meteo_payload() -> dict:
    """Realistic /v1/forecast response with a ``current`` block (imperial units)."""
    return {
        "latitude": 30.27,
        "longitude": -97.74,
        "generationtime_ms": 0.05,
        "utc_offset_seconds": 0,
        "timezone": "GMT",
        "current_units": {
            "time": "iso8601",
            "temperature_2m": "°F",
            "relative_humidity_2m": "%",
            "apparent_temperature": "°F",
            "wind_speed_10m": "mp/h",
            "weather_code": "wmo code",
        },
        "current": {
            "time": "2025-06-02T11:00",
            "interval": 900,
            "temperature_2m": 88.5,
            "relative_humidity_2m": 62,
            "apparent_temperature": 97.1,
            "wind_speed_10m": 6.4,
            "weather_code": 2,
        },
    }


@pytest.fixture
def mock_session(open_meteo_payload):
    """A requests.Session stand-in returning the payload above."""
    session = MagicMock()
    response = MagicMock()
    response.json.return_value = open_meteo_payload
    response.raise_for_status.return_value = None
    session.get.return_value = response
    return session


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
