"""Open-Meteo weather client — all weather network I/O lives here."""

from weather_client.cache import InMemoryWeatherCache, WeatherCache
from weather_client.client import OpenMeteoClient, cache_key
from weather_client.exceptions import WeatherAPIError, WeatherClientError

__all__ = [
    "InMemoryWeatherCache",
    "OpenMeteoClient",
    "WeatherAPIError",
    "WeatherCache",
    "WeatherClientError",
    "cache_key",
]
