"""Adaptive training-load and prescription engine.

Pure computation: training load (CTL/ATL/TSB), weather severity, heat pace
adjustment, per-type workout dosage and race-day planning. All I/O lives in
the provider packages.
"""

from training_engine.engine import PrescriptionEngine, prescribe
from training_engine.math.pace_adjustment import adjust
from training_engine.math.training_load import compute_snapshot
from training_engine.math.weather import severity
from training_engine.race_planner import plan_race

__all__ = [
    "PrescriptionEngine",
    "adjust",
    "compute_snapshot",
    "plan_race",
    "prescribe",
    "severity",
]
