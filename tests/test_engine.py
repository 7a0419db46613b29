"""Tests for PrescriptionEngine — full prescription assembly."""

from __future__ import annotations

import logging

import pytest

from training_engine.engine import (
    PrescriptionEngine,
    coach_notes,
    mileage_multiplier,
    prescribe,
    tsb_status,
)
from training_engine.models.athlete_profile import AthleteProfile
from training_engine.models.enums import Aggressiveness, FailureKind, PrescriptionType, WorkoutType
from training_engine.models.prescription import Failure, WorkoutPrescription
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.registry import DosageRegistry
from training_engine.rules.aerobic.easy import EasyRule


@pytest.fixture
def engine() -> PrescriptionEngine:
    return PrescriptionEngine()


class TestMileageMultiplier:
    def test_reference_runner(self) -> None:
        assert mileage_multiplier(40, 45, Aggressiveness.MODERATE) == pytest.approx(1.0)

    def test_aggressive_runner(self) -> None:
        assert mileage_multiplier(50, 50, Aggressiveness.AGGRESSIVE) == pytest.approx(1.449, abs=1e-3)

    @pytest.mark.parametrize("mpw, expected", [(10, 0.5), (200, 2.0)])
    def test_clamped(self, mpw, expected) -> None:
        assert mileage_multiplier(mpw) == expected


class TestPrescribeBasics:
    def test_missing_profile_fails(self, engine, as_of) -> None:
        result = engine.prescribe("tempo", None, as_of=as_of)
        assert isinstance(result, Failure)
        assert result.success is False
        assert result.kind == FailureKind.MISSING_PROFILE
        assert result.error == "No active profile. Please complete onboarding first."

    def test_unknown_type_falls_back_to_easy(self, engine, moderate_athlete, as_of) -> None:
        result = engine.prescribe("yoga", moderate_athlete, as_of=as_of)
        assert isinstance(result, WorkoutPrescription)
        assert result.prescription_type == PrescriptionType.EASY
        assert result.workout_type == "Easy Run"

    def test_tempo_with_empty_history(self, engine, moderate_athlete, as_of) -> None:
        result = engine.prescribe("tempo", moderate_athlete, as_of=as_of)
        assert result.success is True
        assert result.structure == "20-30 minutes continuous at tempo pace"
        assert result.snapshot.ctl == 0
        assert result.tsb_status == "Balanced training load (TSB: 0)"
        assert result.coach_notes == (
            "Training volume is low - build back gradually. Current fitness (CTL: 0) "
            "reflects recent lighter training."
        )

    def test_training_stress_summary(self, engine, moderate_athlete, as_of) -> None:
        stress = engine.prescribe("tempo", moderate_athlete, as_of=as_of).training_stress
        assert stress.volume_status == "Below target"
        assert stress.recent_mileage == 0
        assert stress.target_mileage == 40
        assert stress.recent_avg_pace_seconds == 540
        assert stress.vdot == 45.0

    def test_recent_average_pace(self, engine, moderate_athlete, workout_factory, as_of) -> None:
        history = [
            workout_factory(days_ago=1, miles=6, minutes=48, pace=480),
            workout_factory(days_ago=2, miles=5),
        ]
        stress = engine.prescribe("easy", moderate_athlete, history, as_of=as_of).training_stress
        assert stress.recent_avg_pace_seconds == 510
        assert stress.recent_mileage == 11

    def test_module_level_prescribe(self, moderate_athlete, as_of) -> None:
        result = prescribe(PrescriptionType.LONG_RUN, moderate_athlete, as_of=as_of)
        assert result.workout_type == "Long Run"


class TestPrescribeLoad:
    def test_hard_efforts_trigger_recovery_run(
        self, engine, moderate_athlete, workout_factory, as_of
    ) -> None:
        history = [
            workout_factory(days_ago=2, workout_type=WorkoutType.TEMPO, miles=7, minutes=50, pace=430),
            workout_factory(days_ago=4, workout_type=WorkoutType.INTERVAL, miles=6, minutes=45, pace=450),
        ]
        result = engine.prescribe("easy", moderate_athlete, history, as_of=as_of)
        assert result.training_stress.hard_efforts == 2
        assert "recovery_run" in result.fired_rules

    def test_future_workouts_ignored(self, engine, moderate_athlete, workout_factory, as_of) -> None:
        history = [workout_factory(days_ago=-1, workout_type=WorkoutType.TEMPO, minutes=60, pace=450)]
        result = engine.prescribe("easy", moderate_athlete, history, as_of=as_of)
        assert result.training_stress.hard_efforts == 0
        assert result.snapshot.ctl == 0

    def test_supplied_snapshot_is_used(self, engine, moderate_athlete, as_of) -> None:
        snapshot = TrainingLoadSnapshot(ctl=50, atl=70, tsb=-20, as_of=as_of)
        result = engine.prescribe("tempo", moderate_athlete, snapshot=snapshot, as_of=as_of)
        assert result.snapshot is snapshot
        assert result.tsb_status.startswith("Moderately fatigued (TSB: -20)")
        assert "fatigue_volume_reduction" in result.fired_rules

    def test_mileage_override(self, engine, moderate_athlete, as_of) -> None:
        result = engine.prescribe(
            "easy", moderate_athlete, weekly_mileage_override=80, as_of=as_of
        )
        assert result.structure == "12-14 miles at conversational pace"

    def test_target_distance_and_phase(self, engine, moderate_athlete, as_of) -> None:
        result = engine.prescribe(
            "long_run", moderate_athlete, phase="build", target_distance="Marathon", as_of=as_of
        )
        assert "marathon pace in the middle" in result.structure


class TestPrescribeWeather:
    def test_hot_weather_slows_easy_run(
        self, engine, moderate_athlete, hot_weather, as_of
    ) -> None:
        result = engine.prescribe("easy", moderate_athlete, weather=hot_weather, as_of=as_of)
        assert result.pace_adjustment.adjustment_seconds == 52
        assert result.target_pace_range == (592, 622)
        assert "heat_pace_adjustment" in result.fired_rules
        assert "Target 9:52/mi (+52s/mi)." in result.adjustments

    def test_cool_weather_leaves_paces(
        self, engine, moderate_athlete, cool_windy_weather, as_of
    ) -> None:
        result = engine.prescribe("easy", moderate_athlete, weather=cool_windy_weather, as_of=as_of)
        assert result.pace_adjustment.adjustment_seconds == 0
        assert result.target_pace_range == (540, 570)
        assert "heat_pace_adjustment" not in result.fired_rules

    def test_no_weather_no_adjustment(self, engine, moderate_athlete, as_of) -> None:
        result = engine.prescribe("easy", moderate_athlete, as_of=as_of)
        assert result.pace_adjustment is None


class TestProfileResolution:
    def test_out_of_range_vdot_logs_warning(self, engine, as_of, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="training_engine"):
            result = engine.prescribe("tempo", AthleteProfile(vdot=99.0), as_of=as_of)
        assert "VDOT 99.0 outside" in caplog.text
        assert result.training_stress.vdot == 45.0

    def test_empty_profile_uses_defaults(self, engine, empty_profile, as_of) -> None:
        result = engine.prescribe("easy", empty_profile, as_of=as_of)
        assert result.training_stress.target_mileage == 25.0


class TestStatusText:
    @pytest.mark.parametrize(
        "tsb, prefix",
        [
            (-21, "Very fatigued"),
            (-20, "Moderately fatigued"),
            (-10, "Balanced"),
            (10, "Balanced"),
            (11, "Well rested"),
        ],
    )
    def test_tsb_status_bands(self, tsb, prefix) -> None:
        assert tsb_status(tsb).startswith(prefix)

    @pytest.mark.parametrize(
        "tsb, recent, prefix",
        [
            (-25, 40, "Very high fatigue level"),
            (-12, 40, "Elevated fatigue"),
            (16, 40, "Very well rested"),
            (6, 40, "Good recovery status"),
            (0, 45, "Training load is high but balanced"),
            (0, 20, "Training volume is low"),
            (0, 40, "Training metrics are balanced"),
        ],
    )
    def test_coach_notes(self, tsb, recent, prefix) -> None:
        snapshot = TrainingLoadSnapshot(ctl=40, atl=40 - tsb, tsb=tsb)
        assert coach_notes(snapshot, recent, 40).startswith(prefix)


class TestCustomRegistry:
    def test_falls_back_to_easy_rule(self, moderate_athlete, as_of) -> None:
        registry = DosageRegistry()
        registry.register(EasyRule())
        result = PrescriptionEngine(registry).prescribe("tempo", moderate_athlete, as_of=as_of)
        assert result.prescription_type == PrescriptionType.EASY

    def test_empty_registry_returns_failure(self, moderate_athlete, as_of) -> None:
        result = PrescriptionEngine(DosageRegistry()).prescribe("easy", moderate_athlete, as_of=as_of)
        assert isinstance(result, Failure)
        assert result.kind == FailureKind.NO_DOSAGE_RULE
        assert result.error == "No dosage rules registered"
        assert result.success is False
