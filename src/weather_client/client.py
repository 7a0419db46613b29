"""Open-Meteo current-conditions client.

All weather network I/O lives here. Results are cached per location for a
fixed TTL; any failure is logged and reported as ``None`` so callers fall
back to an unadjusted prescription.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from training_engine.models.weather import WeatherObservation
from weather_client.cache import InMemoryWeatherCache, WeatherCache
from weather_client.conditions import condition_from_code
from weather_client.exceptions import WeatherAPIError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_CACHE_TTL_S = 1800
_TIMEOUT_S = 10
_CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "wind_speed_10m",
    "weather_code",
)


def cache_key(latitude: float, longitude: float) -> str:
    """Coordinates rounded to two decimals (~1 km)."""
    return f"{latitude:.2f},{longitude:.2f}"


class OpenMeteoClient:
    """Weather provider returning current conditions in imperial units."""

    def __init__(
        self,
        cache: WeatherCache[WeatherObservation] | None = None,
        cache_ttl_s: float = DEFAULT_CACHE_TTL_S,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
    ) -> None:
        self._cache = cache if cache is not None else InMemoryWeatherCache()
        self._cache_ttl_s = cache_ttl_s
        self._base_url = base_url
        self._session = session or requests.Session()

    def current(self, latitude: float, longitude: float) -> Optional[WeatherObservation]:
        """Current conditions at a location, or None when unavailable."""
        key = cache_key(latitude, longitude)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Weather cache hit for %s", key)
            return cached

        try:
            observation = self.fetch_current(latitude, longitude)
        except WeatherAPIError as exc:
            logger.warning("Weather unavailable for %s: %s", key, exc)
            return None

        self._cache.put(key, observation, self._cache_ttl_s)
        logger.info(
            "Fetched weather for %s: %.0f°F, %.0f%% RH, %.0f mph, %s",
            key,
            observation.temperature_f,
            observation.humidity_pct,
            observation.wind_mph,
            observation.condition_text,
        )
        return observation

    def fetch_current(self, latitude: float, longitude: float) -> WeatherObservation:
        """Uncached request; raises ``WeatherAPIError`` on any failure."""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(_CURRENT_FIELDS),
            "temperature_unit": "fahrenheit",
            "wind_speed_unit": "mph",
        }
        try:
            response = self._session.get(self._base_url, params=params, timeout=_TIMEOUT_S)
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise WeatherAPIError(f"Open-Meteo returned HTTP {status}", status_code=status) from exc
        except (requests.RequestException, ValueError) as exc:
            raise WeatherAPIError(f"Open-Meteo request failed: {exc}") from exc

        return parse_current(payload)


def parse_current(payload: dict[str, Any]) -> WeatherObservation:
    """Build an observation from an Open-Meteo ``current`` block."""
    current = payload.get("current") if isinstance(payload, dict) else None
    if not isinstance(current, dict):
        raise WeatherAPIError("Open-Meteo response has no current conditions")

    try:
        temperature = float(current["temperature_2m"])
        humidity = float(current["relative_humidity_2m"])
        wind = float(current.get("wind_speed_10m") or 0.0)
    except (KeyError, TypeError, ValueError) as exc:
        raise WeatherAPIError(f"Malformed Open-Meteo current conditions: {exc}") from exc

    feels_like = current.get("apparent_temperature")
    category, text = condition_from_code(current.get("weather_code"))
    return WeatherObservation(
        temperature_f=temperature,
        humidity_pct=humidity,
        wind_mph=wind,
        condition=category,
        condition_text=text,
        feels_like_f=float(feels_like) if feels_like is not None else None,
    )
