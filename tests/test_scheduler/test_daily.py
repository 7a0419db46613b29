"""Tests for the daily prescription job — mocked providers, no network."""

from __future__ import annotations

import json
import logging
from datetime import date, timedelta
from unittest.mock import MagicMock, patch

import pytest

from garmin_client.exceptions import GarminAPIError, GarminAuthError
from scheduler import daily
from scheduler.daily import JsonProfileProvider, run_daily
from training_engine.models.enums import Aggressiveness
from training_engine.models.race import Race

TODAY = date(2025, 6, 2)


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "athlete.json"
    path.write_text(json.dumps({
        "vdot": 48.5,
        "current_weekly_mileage": 42,
        "plan_aggressiveness": "Aggressive",
        "easy_pace_seconds": "8:45",
        "tempo_pace_seconds": 440,
        "threshold_pace_seconds": None,
        "heat_acclimatization_score": 70.0,
        "race": {
            "name": "Austin Half",
            "date": "2025-06-20",
            "distance_meters": 21097.5,
            "distance_label": "Half Marathon",
            "target_time_seconds": 5700,
        },
    }))
    return path


@pytest.fixture
def providers(moderate_athlete, workout_factory):
    history = MagicMock()
    history.fetch_workouts.return_value = [workout_factory(days_ago=1, miles=6, minutes=54, pace=540)]
    profile = MagicMock()
    profile.load_profile.return_value = moderate_athlete
    profile.load_race.return_value = None
    weather = MagicMock()
    return history, profile, weather


class TestJsonProfileProvider:
    def test_loads_profile(self, profile_file):
        profile = JsonProfileProvider(profile_file).load_profile()
        assert profile.vdot == 48.5
        assert profile.current_weekly_mileage == 42
        assert profile.plan_aggressiveness == Aggressiveness.AGGRESSIVE
        assert profile.easy_pace_seconds == 525
        assert profile.tempo_pace_seconds == 440
        assert profile.threshold_pace_seconds is None
        assert profile.heat_acclimatization_score == 70

    def test_unparseable_pace_ignored(self, tmp_path):
        path = tmp_path / "athlete.json"
        path.write_text(json.dumps({"easy_pace_seconds": "slow"}))
        assert JsonProfileProvider(path).load_profile().easy_pace_seconds is None

    def test_missing_file(self, tmp_path, caplog):
        provider = JsonProfileProvider(tmp_path / "nope.json")
        with caplog.at_level(logging.WARNING, logger="scheduler"):
            assert provider.load_profile() is None
        assert "Profile not found" in caplog.text
        assert provider.load_race() is None

    def test_loads_race(self, profile_file):
        race = JsonProfileProvider(profile_file).load_race()
        assert race == Race(
            name="Austin Half",
            date=date(2025, 6, 20),
            distance_meters=21097.5,
            distance_label="Half Marathon",
            target_time_seconds=5700,
        )

    def test_no_race_block(self, tmp_path):
        path = tmp_path / "athlete.json"
        path.write_text(json.dumps({"vdot": 45}))
        assert JsonProfileProvider(path).load_race() is None


class TestRunDaily:
    def test_prescription_record(self, providers):
        history, profile, weather = providers
        output = run_daily(history, profile, weather, TODAY, workout_type="easy")

        history.fetch_workouts.assert_called_once_with(TODAY - timedelta(days=42), TODAY)
        weather.current.assert_not_called()
        assert output["date"] == "2025-06-02"
        record = output["prescription"]
        assert record["success"] is True
        assert record["prescription_type"] == "easy"
        assert record["structure"] == "6-8 miles at conversational pace"
        assert record["pace_adjustment"] is None
        assert "race_plan" not in output

    def test_weather_fetched_for_location(self, providers, hot_weather):
        history, profile, weather = providers
        weather.current.return_value = hot_weather
        output = run_daily(history, profile, weather, TODAY, location=(30.27, -97.74))

        weather.current.assert_called_once_with(30.27, -97.74)
        assert output["prescription"]["pace_adjustment"]["adjustment_seconds"] == 52

    def test_history_failure_continues(self, providers, caplog):
        history, profile, weather = providers
        history.fetch_workouts.side_effect = GarminAPIError("boom", status_code=500)
        with caplog.at_level(logging.WARNING, logger="scheduler"):
            output = run_daily(history, profile, weather, TODAY)
        assert "History unavailable" in caplog.text
        assert output["prescription"]["snapshot"]["ctl"] == 0

    def test_missing_profile_is_failure_record(self, providers):
        history, profile, weather = providers
        profile.load_profile.return_value = None
        output = run_daily(history, profile, weather, TODAY)
        assert output["prescription"] == {
            "kind": "missing_profile",
            "error": "No active profile. Please complete onboarding first.",
            "suggestion": None,
            "success": False,
        }

    def test_upcoming_race_planned(self, providers):
        history, profile, weather = providers
        profile.load_race.return_value = Race(
            name="Austin Half", date=TODAY + timedelta(days=18), distance_meters=21097.5
        )
        output = run_daily(history, profile, weather, TODAY)
        plan = output["race_plan"]
        assert plan["category"] == "half_marathon"
        assert plan["days_until"] == 18
        assert plan["race"]["date"] == "2025-06-20"

    def test_past_race_skipped(self, providers):
        history, profile, weather = providers
        profile.load_race.return_value = Race(
            name="Old Race", date=TODAY - timedelta(days=1), distance_meters=5000
        )
        assert "race_plan" not in run_daily(history, profile, weather, TODAY)

    def test_output_is_json_serializable(self, providers, hot_weather):
        history, profile, weather = providers
        weather.current.return_value = hot_weather
        profile.load_race.return_value = Race(
            name="Local 5K", date=TODAY + timedelta(days=3), distance_meters=5000
        )
        output = run_daily(history, profile, weather, TODAY, location=(30.27, -97.74))
        assert json.loads(json.dumps(output)) == output


class TestDailyJob:
    @patch("scheduler.daily.GarminClient", side_effect=GarminAuthError("bad creds"))
    def test_auth_failure_logged(self, _mock_client, tmp_path, caplog):
        out = tmp_path / "prescription.json"
        with patch("scheduler.daily.PRESCRIPTION_OUTPUT", out), \
                caplog.at_level(logging.ERROR, logger="scheduler"):
            daily.daily_job()
        assert "Failed to connect to Garmin" in caplog.text
        assert not out.exists()

    @patch("scheduler.daily.run_daily", return_value={"date": "2025-06-02", "prescription": {}})
    @patch("scheduler.daily.GarminClient")
    def test_writes_output(self, _mock_client, mock_run, tmp_path):
        out = tmp_path / "output" / "prescription.json"
        with patch("scheduler.daily.PRESCRIPTION_OUTPUT", out):
            daily.daily_job()
        assert json.loads(out.read_text()) == {"date": "2025-06-02", "prescription": {}}
        mock_run.assert_called_once()


class TestMain:
    @patch("scheduler.daily.daily_job")
    def test_once(self, mock_job):
        with patch("sys.argv", ["training-engine-daily", "--once"]):
            daily.main()
        mock_job.assert_called_once_with()

    @patch("apscheduler.schedulers.blocking.BlockingScheduler")
    def test_daemon_schedules_cron_job(self, MockScheduler):
        with patch("sys.argv", ["training-engine-daily", "--daemon"]):
            daily.main()
        MockScheduler.return_value.add_job.assert_called_once_with(
            daily.daily_job,
            "cron",
            hour=daily.DAILY_HOUR,
            minute=daily.DAILY_MINUTE,
            id="daily_job",
        )
        MockScheduler.return_value.start.assert_called_once_with()

    def test_requires_mode(self):
        with patch("sys.argv", ["training-engine-daily"]), pytest.raises(SystemExit):
            daily.main()
