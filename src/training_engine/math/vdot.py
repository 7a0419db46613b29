"""VDOT from race results and the pace zones it implies.

Approximations of Daniels' tables: oxygen cost of running as a quadratic
in velocity, and the fraction of VO2max sustainable for a given duration.

References:
    Daniels & Gilbert (1979). Oxygen Power: Performance Tables for
        Distance Runners.
    Daniels (2014). Daniels' Running Formula, 3rd ed.
"""

from __future__ import annotations

import math

from training_engine.math.numeric import clamp, round_half_up, round_to
from training_engine.models.enums import METERS_PER_MILE, VDOT_MAX, VDOT_MIN
from training_engine.models.pace_zones import PaceZones

# Fraction of VO2max for each training zone
ZONE_FRACTIONS: dict[str, float] = {
    "recovery": 0.55,
    "easy": 0.65,
    "general_aerobic": 0.70,
    "marathon": 0.78,
    "half_marathon": 0.83,
    "tempo": 0.85,
    "threshold": 0.88,
    "vo2max": 0.95,
    "interval": 0.97,
    "repetition": 1.05,
}

# Miles per equivalent race, paired with the zone that paces it
EQUIVALENT_RACES: tuple[tuple[str, str, float], ...] = (
    ("5K", "vo2max", 3.10686),
    ("10K", "threshold", 6.21371),
    ("Half Marathon", "half_marathon", 13.1094),
    ("Marathon", "marathon", 26.2188),
)


def oxygen_cost(velocity_m_per_min: float) -> float:
    """VO2 (ml/kg/min) needed to run at a velocity in metres per minute."""
    v = velocity_m_per_min
    return -4.60 + 0.182258 * v + 0.000104 * v * v


def fraction_of_vo2max(time_minutes: float) -> float:
    """Fraction of VO2max sustainable for an all-out effort of this duration."""
    return (
        0.8
        + 0.1894393 * math.exp(-0.012778 * time_minutes)
        + 0.2989558 * math.exp(-0.1932605 * time_minutes)
    )


def calculate_vdot(distance_meters: float, time_seconds: float) -> float:
    """VDOT for a race result, clamped to [15, 85] and rounded to 0.1.

    Args:
        distance_meters: Race distance.
        time_seconds: Finish time.
    """
    time_minutes = time_seconds / 60
    velocity = distance_meters / time_minutes
    vdot = oxygen_cost(velocity) / fraction_of_vo2max(time_minutes)
    return round_to(clamp(vdot, VDOT_MIN, VDOT_MAX), 1)


def velocity_from_vdot(vdot: float, fraction: float) -> float:
    """Velocity (m/min) whose oxygen cost equals ``vdot * fraction``."""
    a = 0.000104
    b = 0.182258
    c = -4.60 - vdot * fraction
    return (-b + math.sqrt(b * b - 4 * a * c)) / (2 * a)


def velocity_to_pace(velocity_m_per_min: float) -> int:
    """Seconds per mile at a velocity in metres per minute."""
    return round_half_up(METERS_PER_MILE / velocity_m_per_min * 60)


def pace_zones(vdot: float) -> PaceZones:
    """All training paces for a VDOT."""
    paces = {
        zone: velocity_to_pace(velocity_from_vdot(vdot, fraction))
        for zone, fraction in ZONE_FRACTIONS.items()
    }
    return PaceZones(vdot=vdot, **paces)


def estimate_vdot_from_easy_pace(easy_pace_seconds: float) -> float:
    """Back out a VDOT assuming easy pace is run at 65% of VO2max."""
    velocity = METERS_PER_MILE / (easy_pace_seconds / 60)
    return round_to(oxygen_cost(velocity) / ZONE_FRACTIONS["easy"], 1)


def equivalent_performances(vdot: float) -> dict[str, int]:
    """Projected finish times (seconds) for standard races at this VDOT."""
    zones = pace_zones(vdot)
    return {
        label: round_half_up(getattr(zones, zone) * miles)
        for label, zone, miles in EQUIVALENT_RACES
    }
