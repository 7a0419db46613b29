"""VDOT-derived training pace zones."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaceZones:
    """Training paces in seconds per mile, slowest first."""

    vdot: float
    recovery: int
    easy: int
    general_aerobic: int
    marathon: int
    half_marathon: int
    tempo: int
    threshold: int
    vo2max: int
    interval: int
    repetition: int
