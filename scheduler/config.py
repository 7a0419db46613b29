"""Environment-variable-based configuration for the daily prescription job."""

from __future__ import annotations

import os
from pathlib import Path

GARMIN_EMAIL: str = os.environ.get("GARMIN_EMAIL", "")
GARMIN_PASSWORD: str = os.environ.get("GARMIN_PASSWORD", "")
TOKEN_DIR: Path = Path(os.environ.get("GARMIN_TOKEN_DIR", "~/.garminconnect")).expanduser()
DAILY_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "5"))
DAILY_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))
ATHLETE_PROFILE_PATH: Path = Path(os.environ.get("ATHLETE_PROFILE", "profiles/athlete.json"))
ATHLETE_LATITUDE: float | None = (
    float(os.environ["ATHLETE_LATITUDE"]) if os.environ.get("ATHLETE_LATITUDE") else None
)
ATHLETE_LONGITUDE: float | None = (
    float(os.environ["ATHLETE_LONGITUDE"]) if os.environ.get("ATHLETE_LONGITUDE") else None
)
WEATHER_CACHE_TTL_S: int = int(os.environ.get("WEATHER_CACHE_TTL_S", "1800"))
OPEN_METEO_URL: str = os.environ.get("OPEN_METEO_URL", "https://api.open-meteo.com/v1/forecast")
PRESCRIPTION_OUTPUT: Path = Path(os.environ.get("PRESCRIPTION_OUTPUT", "output/prescription.json"))
DAILY_WORKOUT_TYPE: str = os.environ.get("DAILY_WORKOUT_TYPE", "easy")
