"""Tests for garmin_client.activity_mapper — pure dict to WorkoutRecord mapping."""

from __future__ import annotations

from datetime import date

import pytest

from garmin_client.activity_mapper import map_activities, map_activity
from training_engine.models.enums import WorkoutType


class TestMapActivity:
    def test_units_converted(self, garmin_easy_run) -> None:
        record = map_activity(garmin_easy_run)
        assert record.date == date(2025, 6, 1)
        assert record.distance_miles == 6.21
        assert record.duration_minutes == 60.0
        assert record.avg_pace_seconds_per_mile == 536.4
        assert record.workout_type == WorkoutType.EASY

    def test_pace_from_distance_and_duration(self, garmin_activity_factory) -> None:
        record = map_activity(
            garmin_activity_factory(averageSpeed=None, distance=5000.0, duration=1500.0)
        )
        assert record.avg_pace_seconds_per_mile == 482.8

    def test_gmt_start_fallback(self, garmin_activity_factory) -> None:
        record = map_activity(
            garmin_activity_factory(startTimeLocal=None, startTimeGMT="2025-05-30 23:10:00")
        )
        assert record.date == date(2025, 5, 30)

    def test_missing_measurements(self, garmin_activity_factory) -> None:
        record = map_activity(
            garmin_activity_factory(distance=0.0, duration=None, movingDuration=None, averageSpeed=None)
        )
        assert record.distance_miles is None
        assert record.duration_minutes is None
        assert record.avg_pace_seconds_per_mile is None

    def test_no_start_time(self, garmin_activity_factory) -> None:
        assert map_activity(garmin_activity_factory(startTimeLocal=None, startTimeGMT=None)) is None

    def test_unparseable_start_time(self, garmin_activity_factory) -> None:
        assert map_activity(
            garmin_activity_factory(startTimeLocal="yesterday", startTimeGMT=None)
        ) is None


class TestWorkoutType:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("RECOVERY", WorkoutType.RECOVERY),
            ("TEMPO", WorkoutType.TEMPO),
            ("LACTATE_THRESHOLD", WorkoutType.THRESHOLD),
            ("VO2MAX", WorkoutType.INTERVAL),
            ("ANAEROBIC_CAPACITY", WorkoutType.INTERVAL),
            ("SPEED", WorkoutType.INTERVAL),
            (None, WorkoutType.EASY),
            ("SOMETHING_NEW", WorkoutType.EASY),
        ],
    )
    def test_training_effect_label(self, garmin_activity_factory, label, expected) -> None:
        record = map_activity(garmin_activity_factory(trainingEffectLabel=label))
        assert record.workout_type == expected

    def test_long_aerobic_run(self, garmin_activity_factory) -> None:
        record = map_activity(garmin_activity_factory(distance=17000.0, duration=6000.0))
        assert record.workout_type == WorkoutType.LONG

    def test_long_tempo_stays_tempo(self, garmin_activity_factory) -> None:
        record = map_activity(
            garmin_activity_factory(distance=17000.0, trainingEffectLabel="TEMPO")
        )
        assert record.workout_type == WorkoutType.TEMPO

    def test_race_event(self, garmin_activity_factory) -> None:
        record = map_activity(garmin_activity_factory(eventType={"typeKey": "race"}))
        assert record.workout_type == WorkoutType.RACE

    @pytest.mark.parametrize("type_key", ["cycling", "lap_swimming", "strength_training"])
    def test_non_running_is_cross_training(self, garmin_activity_factory, type_key) -> None:
        record = map_activity(garmin_activity_factory(activityType={"typeKey": type_key}))
        assert record.workout_type == WorkoutType.CROSS_TRAIN

    def test_treadmill_counts_as_running(self, garmin_activity_factory) -> None:
        record = map_activity(garmin_activity_factory(activityType={"typeKey": "treadmill_running"}))
        assert record.workout_type == WorkoutType.EASY


class TestMapActivities:
    def test_skips_unusable(self, garmin_easy_run, garmin_activity_factory) -> None:
        broken = garmin_activity_factory(startTimeLocal=None, startTimeGMT=None)
        records = map_activities([garmin_easy_run, broken])
        assert len(records) == 1

    def test_none_input(self) -> None:
        assert map_activities(None) == []
