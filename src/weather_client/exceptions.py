"""Custom exception hierarchy for the weather client."""

from __future__ import annotations


class WeatherClientError(Exception):
    """Base exception for all weather_client errors."""


class WeatherAPIError(WeatherClientError):
    """The weather service failed or returned an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
