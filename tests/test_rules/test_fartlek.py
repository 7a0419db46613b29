"""Tests for the fartlek dosage rule."""

from __future__ import annotations

from training_engine.rules.quality.fartlek import FartlekRule


class TestFartlek:
    def test_structure(self, moderate_athlete, context_factory) -> None:
        dosage = FartlekRule().dose(context_factory(moderate_athlete))
        assert dosage.structure.startswith("45 minutes total: 6 surges of 1-3 minutes")
        assert dosage.total_distance_miles == 5.5

    def test_scales_with_vdot_and_volume(self, aggressive_athlete, context_factory) -> None:
        dosage = FartlekRule().dose(context_factory(aggressive_athlete))
        assert dosage.details["minutes"] > 45

    def test_aggressive_adjustment(self, aggressive_athlete, context_factory) -> None:
        dosage = FartlekRule().dose(context_factory(aggressive_athlete))
        assert dosage.adjustments == "Push the surges harder - aim for 5K effort on most"

    def test_moderate_adjustment(self, moderate_athlete, context_factory) -> None:
        dosage = FartlekRule().dose(context_factory(moderate_athlete))
        assert dosage.adjustments.startswith("Keep surges controlled")
