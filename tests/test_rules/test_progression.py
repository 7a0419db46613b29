"""Tests for the progression run dosage rule."""

from __future__ import annotations

from training_engine.models.athlete_profile import AthleteProfile
from training_engine.models.enums import WorkoutType
from training_engine.rules.endurance.progression import ProgressionRule


class TestProgression:
    def test_structure(self, moderate_athlete, context_factory) -> None:
        dosage = ProgressionRule().dose(context_factory(moderate_athlete))
        assert dosage.structure == (
            "10 miles: First 7 miles easy, gradually increasing pace, final 3 miles at tempo"
        )
        assert dosage.target_pace_range == (450, 570)
        assert dosage.fired_rules == ()

    def test_small_volume(self, context_factory) -> None:
        dosage = ProgressionRule().dose(context_factory(AthleteProfile(current_weekly_mileage=20.0)))
        # 5 miles base at multiplier 0.5 rounds to 3; finish is 30% of that
        assert dosage.details == {"total_miles": 3, "finish_miles": 1}

    def test_quality_this_week_keeps_it_controlled(
        self, moderate_athlete, context_factory, workout_factory
    ) -> None:
        tempo = workout_factory(days_ago=2, workout_type=WorkoutType.TEMPO, minutes=40)
        dosage = ProgressionRule().dose(context_factory(moderate_athlete, recent=[tempo]))
        assert dosage.fired_rules == ("quality_week_control",)
        assert dosage.adjustments.startswith("You've had quality work this week")

    def test_quality_outside_week_ignored(
        self, moderate_athlete, context_factory, workout_factory
    ) -> None:
        tempo = workout_factory(days_ago=9, workout_type=WorkoutType.TEMPO, minutes=40)
        dosage = ProgressionRule().dose(context_factory(moderate_athlete, recent=[tempo]))
        assert dosage.fired_rules == ()
