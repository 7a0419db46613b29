"""Daily job — pulls history and weather, writes today's prescription.

Usage:
    python -m scheduler.daily --once      # single run (for cron)
    python -m scheduler.daily --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Optional

from garmin_client import GarminClient, GarminClientError, GarminHistoryProvider
from training_engine import plan_race, prescribe
from training_engine.math.pace import parse_pace
from training_engine.models.athlete_profile import AthleteProfile
from training_engine.models.enums import DEFAULT_LOAD_WINDOW_DAYS, Aggressiveness
from training_engine.models.race import Race
from training_engine.providers import HistoryProvider, ProfileProvider, WeatherProvider
from training_engine.serialization import to_record
from weather_client import OpenMeteoClient

from scheduler.config import (
    ATHLETE_LATITUDE,
    ATHLETE_LONGITUDE,
    ATHLETE_PROFILE_PATH,
    DAILY_HOUR,
    DAILY_MINUTE,
    DAILY_WORKOUT_TYPE,
    GARMIN_EMAIL,
    GARMIN_PASSWORD,
    OPEN_METEO_URL,
    PRESCRIPTION_OUTPUT,
    TOKEN_DIR,
    WEATHER_CACHE_TTL_S,
)

logger = logging.getLogger(__name__)

_PACE_FIELDS = (
    "easy_pace_seconds",
    "tempo_pace_seconds",
    "threshold_pace_seconds",
    "interval_pace_seconds",
    "marathon_pace_seconds",
    "half_marathon_pace_seconds",
)
_NUMBER_FIELDS = (
    "vdot",
    "current_weekly_mileage",
    "peak_weekly_mileage_target",
    "current_long_run_max",
    "heat_acclimatization_score",
)


class JsonProfileProvider:
    """Reads the athlete profile (and optional next race) from a JSON file.

    Pace fields accept seconds or ``"m:ss"`` strings. A missing file means
    the athlete has not onboarded yet.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    def _read(self) -> Optional[dict[str, Any]]:
        try:
            with open(self._path) as f:
                return json.load(f)
        except FileNotFoundError:
            logger.warning("Profile not found at %s", self._path)
            return None

    def load_profile(self) -> Optional[AthleteProfile]:
        data = self._read()
        if data is None:
            return None

        fields: dict[str, Any] = {}
        for name in _NUMBER_FIELDS:
            if data.get(name) is not None:
                fields[name] = data[name]
        for name in _PACE_FIELDS:
            value = data.get(name)
            if isinstance(value, str):
                value = parse_pace(value)
            if value is not None:
                fields[name] = int(value)
        if data.get("plan_aggressiveness"):
            fields["plan_aggressiveness"] = Aggressiveness(data["plan_aggressiveness"].lower())
        if "heat_acclimatization_score" in fields:
            fields["heat_acclimatization_score"] = int(fields["heat_acclimatization_score"])
        return AthleteProfile(**fields)

    def load_race(self) -> Optional[Race]:
        data = self._read() or {}
        race = data.get("race")
        if not race:
            return None
        return Race(
            name=race.get("name", ""),
            date=date.fromisoformat(race["date"]),
            distance_meters=float(race["distance_meters"]),
            distance_label=race.get("distance_label", ""),
            target_time_seconds=race.get("target_time_seconds"),
        )


def run_daily(
    history_provider: HistoryProvider,
    profile_provider: ProfileProvider,
    weather_provider: Optional[WeatherProvider],
    today: date,
    workout_type: str = DAILY_WORKOUT_TYPE,
    location: Optional[tuple[float, float]] = None,
) -> dict[str, Any]:
    """Fetch inputs concurrently, run the engine, return a JSON-safe record."""
    start = today - timedelta(days=DEFAULT_LOAD_WINDOW_DAYS)

    with ThreadPoolExecutor(max_workers=2) as pool:
        history_future = pool.submit(history_provider.fetch_workouts, start, today)
        weather_future = (
            pool.submit(weather_provider.current, *location)
            if weather_provider is not None and location is not None
            else None
        )
        profile = profile_provider.load_profile()
        try:
            history = list(history_future.result())
        except GarminClientError as exc:
            logger.warning("History unavailable, prescribing without it: %s", exc)
            history = []
        weather = weather_future.result() if weather_future is not None else None

    prescription = prescribe(workout_type, profile, history, as_of=today, weather=weather)
    output: dict[str, Any] = {
        "date": today.isoformat(),
        "prescription": to_record(prescription),
    }

    load_race = getattr(profile_provider, "load_race", None)
    race = load_race() if load_race is not None else None
    if race is not None and race.date >= today:
        output["race_plan"] = to_record(plan_race(race, profile, history, weather, as_of=today))
    return output


def daily_job() -> None:
    """Execute one daily cycle and write the prescription JSON."""
    logger.info("Starting daily job")

    try:
        client = GarminClient(email=GARMIN_EMAIL, password=GARMIN_PASSWORD, token_dir=TOKEN_DIR)
    except GarminClientError as exc:
        logger.error("Failed to connect to Garmin: %s", exc)
        return

    location = None
    if ATHLETE_LATITUDE is not None and ATHLETE_LONGITUDE is not None:
        location = (ATHLETE_LATITUDE, ATHLETE_LONGITUDE)

    output = run_daily(
        GarminHistoryProvider(client),
        JsonProfileProvider(ATHLETE_PROFILE_PATH),
        OpenMeteoClient(cache_ttl_s=WEATHER_CACHE_TTL_S, base_url=OPEN_METEO_URL),
        date.today(),
        location=location,
    )

    PRESCRIPTION_OUTPUT.parent.mkdir(parents=True, exist_ok=True)
    with open(PRESCRIPTION_OUTPUT, "w") as f:
        json.dump(output, f, indent=2)
    logger.info("Daily job complete, wrote %s", PRESCRIPTION_OUTPUT)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = argparse.ArgumentParser(description="Daily training prescription job")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    args = parser.parse_args()

    if args.once:
        daily_job()
        return

    from apscheduler.schedulers.blocking import BlockingScheduler

    scheduler = BlockingScheduler()
    scheduler.add_job(daily_job, "cron", hour=DAILY_HOUR, minute=DAILY_MINUTE, id="daily_job")
    logger.info("Scheduler started, daily job at %02d:%02d", DAILY_HOUR, DAILY_MINUTE)
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
