"""Tests for the heat pace adjustment engine."""

from __future__ import annotations

import pytest

from training_engine.math.pace_adjustment import acclimatization_multiplier, adjust, base_adjustment
from training_engine.math.weather import severity
from training_engine.models.enums import WorkoutType
from training_engine.models.weather import WeatherObservation


class TestBaseAdjustment:
    @pytest.mark.parametrize(
        "heat, expected",
        [(0, 0), (10, 0), (25, 6), (45, 20), (65, 40), (70, 44), (80, 52)],
    )
    def test_piecewise_table(self, heat, expected) -> None:
        assert base_adjustment(heat) == pytest.approx(expected)

    @pytest.mark.parametrize("boundary", [10, 25, 45, 65])
    def test_continuous_at_band_edges(self, boundary) -> None:
        assert base_adjustment(boundary + 1e-9) == pytest.approx(base_adjustment(boundary), abs=1e-6)


class TestAcclimatizationMultiplier:
    @pytest.mark.parametrize(
        "score, expected",
        [(100, 0.7), (80, 0.7), (79, 0.85), (60, 0.85), (50, 1.0), (41, 1.0), (40, 1.1), (20, 1.2), (0, 1.2)],
    )
    def test_bands(self, score, expected) -> None:
        assert acclimatization_multiplier(score) == expected


class TestAdjust:
    def test_hot_easy_run(self, hot_weather) -> None:
        result = adjust(540, severity(hot_weather), WorkoutType.EASY, 50)
        assert result.adjustment_seconds == 52
        assert result.adjusted_pace_seconds == 592
        assert result.original_pace == "9:00"
        assert result.adjusted_pace == "9:52"
        assert result.reason == "Heat index 100°F"
        assert result.recommendation.startswith("Very hot")
        assert result.warnings == (
            "Consider early morning to avoid peak heat",
            "Conditions are borderline unsafe for hard efforts",
            "Extreme heat - hydrate aggressively, consider shorter route",
        )

    @pytest.mark.parametrize(
        "workout_type, expected",
        [
            (WorkoutType.EASY, 52),
            (WorkoutType.LONG, 52),
            (WorkoutType.TEMPO, 36),
            (WorkoutType.INTERVAL, 26),
            (WorkoutType.RACE, 26),
            (WorkoutType.CROSS_TRAIN, 0),
        ],
    )
    def test_workout_type_multiplier(self, hot_weather, workout_type, expected) -> None:
        assert adjust(540, severity(hot_weather), workout_type).adjustment_seconds == expected

    def test_unknown_workout_type_string(self, hot_weather) -> None:
        # "other" multiplier 0.8 → 41.6
        assert adjust(540, severity(hot_weather), "yoga").adjustment_seconds == 42

    def test_non_increasing_in_acclimatization(self, hot_weather) -> None:
        conditions = severity(hot_weather)
        seconds = [adjust(540, conditions, WorkoutType.EASY, s).adjustment_seconds for s in (10, 30, 50, 70, 90)]
        assert seconds == [62, 57, 52, 44, 36]
        assert seconds == sorted(seconds, reverse=True)

    def test_wind_and_cold_never_adjust(self, cool_windy_weather, cold_weather) -> None:
        assert adjust(540, severity(cool_windy_weather)).adjustment_seconds == 0
        assert adjust(540, severity(cold_weather)).adjustment_seconds == 0

    @pytest.mark.parametrize("t", [20, 40, 55, 62, 68])
    def test_low_heat_severity_means_no_adjustment(self, t) -> None:
        conditions = severity(WeatherObservation(temperature_f=t, humidity_pct=50, wind_mph=5))
        assert conditions.factors.heat_severity <= 10
        assert adjust(480, conditions, WorkoutType.INTERVAL, 0).adjustment_seconds == 0

    def test_cool_windy_text(self, cool_windy_weather) -> None:
        result = adjust(540, severity(cool_windy_weather))
        assert result.reason == "Good conditions - no adjustment needed"
        assert result.recommendation == "Conditions are favorable. Run as planned."
        assert result.warnings == ()

    def test_cold_text(self, cold_weather) -> None:
        result = adjust(540, severity(cold_weather))
        assert result.reason == "Cool temps are ideal for running - no slowdown needed"
        assert result.recommendation == "Layer up. Cool temps are great for performance once warmed up."

    def test_frostbite_warnings(self) -> None:
        conditions = severity(WeatherObservation(temperature_f=0, humidity_pct=50, wind_mph=20))
        result = adjust(540, conditions)
        assert result.adjustment_seconds == 0
        assert "Risk of frostbite on exposed skin - cover extremities" in result.warnings
        assert "Dangerous cold - consider treadmill or shorter outdoor exposure" in result.warnings

    def test_weather_unavailable(self) -> None:
        result = adjust(450, None, WorkoutType.TEMPO)
        assert result.adjustment_seconds == 0
        assert result.adjusted_pace_seconds == 450
        assert result.reason == "Weather unavailable - no adjustment applied"
        assert result.warnings == ()
