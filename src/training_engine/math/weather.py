"""Conditions severity: weather → physiological stress score.

Heat index and wind chill are the standard NWS "feels-like" formulas.
Heat, humidity, cold, wind and precipitation each contribute a factor;
their rounded sum, capped at 100, is the severity score.

References:
    Rothfusz (1990). The Heat Index "Equation". NWS Technical Attachment SR 90-23.
    NWS (2001). Wind Chill Temperature Index.
"""

from __future__ import annotations

import math

from training_engine.math.numeric import band_lookup, clamp, piecewise_linear, round_half_up
from training_engine.models.enums import (
    ACCLIMATIZATION_BASE_SCORE,
    ACCLIMATIZATION_DELIBERATE_TRAINING,
    ACCLIMATIZATION_HEAT_LIMITED,
    ACCLIMATIZATION_WARM_RUNS,
    COLD_AMBIENT_PER_DEGREE,
    COLD_AMBIENT_THRESHOLD_F,
    COLD_FEELS_LIKE_PER_DEGREE,
    COLD_FEELS_LIKE_THRESHOLD_F,
    COLD_STRESS_MAX_TEMP_F,
    HEAT_FACTOR_BANDS,
    HEAT_HUMIDITY_SPLIT_FACTOR,
    HEAT_INDEX_MIN_TEMP_F,
    HEAT_INDEX_ROTHFUSZ_MIN_TEMP_F,
    HUMIDITY_PENALTY_MIN_PCT,
    HUMIDITY_PENALTY_MIN_TEMP_F,
    HUMIDITY_PENALTY_PER_PCT,
    IDEAL_MAX_HEAT_FACTOR,
    IDEAL_MAX_PRECIP_FACTOR,
    IDEAL_MAX_SEVERITY,
    IDEAL_MAX_WIND_FACTOR,
    IDEAL_TEMP_RANGE_F,
    PRECIPITATION_FACTORS,
    SEVERITY_LABEL_BANDS,
    WIND_CHILL_MAX_TEMP_F,
    WIND_CHILL_MIN_WIND_MPH,
    WIND_COOLING_PER_MPH,
    WIND_HEAT_TEMP_F,
    WIND_PENALTY_HEAT_MIN_MPH,
    WIND_PENALTY_MIN_MPH,
    WIND_PENALTY_PER_MPH,
    PrimaryFactor,
)
from training_engine.models.weather import ConditionsSeverity, SeverityFactors, WeatherObservation


def heat_index(temperature_f: float, humidity_pct: float) -> float:
    """Apparent temperature in heat (°F).

    Below 80°F a simple humidity offset is used and the result is left
    unrounded. From 80°F the Rothfusz regression applies, with the NWS
    low-humidity and high-humidity corrections, rounded to a whole degree.
    """
    t = temperature_f
    r = humidity_pct
    if t < HEAT_INDEX_ROTHFUSZ_MIN_TEMP_F:
        return t + (r - 50) / 10

    hi = (
        -42.379
        + 2.04901523 * t
        + 10.14333127 * r
        - 0.22475541 * t * r
        - 0.00683783 * t * t
        - 0.05481717 * r * r
        + 0.00122874 * t * t * r
        + 0.00085282 * t * r * r
        - 0.00000199 * t * t * r * r
    )
    if r < 13 and 80 <= t <= 112:
        hi -= ((13 - r) / 4) * math.sqrt((17 - abs(t - 95)) / 17)
    elif r > 85 and 80 <= t <= 87:
        hi += ((r - 85) / 10) * ((87 - t) / 5)
    return float(round_half_up(hi))


def wind_chill(temperature_f: float, wind_mph: float) -> float | None:
    """NWS wind chill (°F, whole degrees); None outside T<=50°F and W>=3 mph."""
    if temperature_f > WIND_CHILL_MAX_TEMP_F or wind_mph < WIND_CHILL_MIN_WIND_MPH:
        return None
    w = wind_mph ** 0.16
    return float(round_half_up(35.74 + 0.6215 * temperature_f - 35.75 * w + 0.4275 * temperature_f * w))


def heat_factor(hi: float) -> float:
    """Heat contribution from a heat index, piecewise linear from 65°F."""
    return piecewise_linear(hi, HEAT_FACTOR_BANDS)


def severity(weather: WeatherObservation) -> ConditionsSeverity:
    """Score how hard the weather makes running.

    Args:
        weather: Current conditions.

    Returns:
        ConditionsSeverity with a 0–100 score, the factor breakdown, the
        dominant factor and a short description.
    """
    t = weather.temperature_f
    humidity = weather.humidity_pct
    wind = weather.wind_mph

    hi: float | None = None
    wc: float | None = None
    heat = humidity_factor = cold = wind_factor = 0.0

    if t >= HEAT_INDEX_MIN_TEMP_F:
        hi = heat_index(t, humidity)
        heat = heat_factor(hi)
        if humidity > HUMIDITY_PENALTY_MIN_PCT and t > HUMIDITY_PENALTY_MIN_TEMP_F:
            humidity_factor = (humidity - HUMIDITY_PENALTY_MIN_PCT) * HUMIDITY_PENALTY_PER_PCT

    if t < COLD_STRESS_MAX_TEMP_F:
        wc = wind_chill(t, wind)
        feels_like = wc if wc is not None else t
        if t < COLD_AMBIENT_THRESHOLD_F:
            cold = (COLD_AMBIENT_THRESHOLD_F - t) * COLD_AMBIENT_PER_DEGREE
        if feels_like < COLD_FEELS_LIKE_THRESHOLD_F:
            cold += (COLD_FEELS_LIKE_THRESHOLD_F - feels_like) * COLD_FEELS_LIKE_PER_DEGREE

    if wind > WIND_PENALTY_MIN_MPH:
        if t > WIND_HEAT_TEMP_F:
            # Moving air cools in the heat; only strong wind is a penalty
            wind_factor = max(0.0, (wind - WIND_PENALTY_HEAT_MIN_MPH) * WIND_PENALTY_PER_MPH)
            heat = max(0.0, heat - wind * WIND_COOLING_PER_MPH)
        else:
            wind_factor = (wind - WIND_PENALTY_MIN_MPH) * WIND_PENALTY_PER_MPH

    factors = SeverityFactors(
        heat=heat,
        humidity=humidity_factor,
        wind=wind_factor,
        cold=cold,
        precipitation=PRECIPITATION_FACTORS.get(weather.condition, 0.0),
    )
    score = int(clamp(round_half_up(factors.total), 0, 100))
    primary, description = _classify(weather, factors, score, hi, wc)

    return ConditionsSeverity(
        severity_score=score,
        primary_factor=primary,
        factors=factors,
        description=description,
        heat_index=hi,
        wind_chill=wc,
    )


def _classify(
    weather: WeatherObservation,
    factors: SeverityFactors,
    score: int,
    hi: float | None,
    wc: float | None,
) -> tuple[PrimaryFactor, str]:
    """Pick the dominant factor and describe it."""
    t = weather.temperature_f
    low, high = IDEAL_TEMP_RANGE_F
    max_factor = max(factors.heat, factors.cold, factors.wind, factors.precipitation)

    if (
        low <= t <= high
        and factors.heat < IDEAL_MAX_HEAT_FACTOR
        and factors.wind < IDEAL_MAX_WIND_FACTOR
        and factors.precipitation < IDEAL_MAX_PRECIP_FACTOR
    ):
        return PrimaryFactor.IDEAL, "Ideal running conditions - great day for a PR!"
    if score < IDEAL_MAX_SEVERITY and factors.heat < IDEAL_MAX_HEAT_FACTOR:
        return PrimaryFactor.IDEAL, "Great conditions for running"
    if factors.heat >= max_factor and factors.humidity > HEAT_HUMIDITY_SPLIT_FACTOR:
        return (
            PrimaryFactor.HEAT_HUMIDITY,
            f"Warm and humid (HI: {_degrees(hi)}°F) - effort will feel harder",
        )
    if factors.heat >= max_factor:
        return PrimaryFactor.HEAT, f"Hot conditions (HI: {_degrees(hi)}°F) - pace accordingly"
    if factors.cold >= max_factor:
        if wc is not None and wc <= 10:
            text = f"Very cold (feels like {_degrees(wc)}°F) - dress warmly, watch extremities"
        elif wc is not None and wc <= 25:
            text = f"Cold (feels like {_degrees(wc)}°F) - layer up, great for performance once warm"
        elif t < COLD_AMBIENT_THRESHOLD_F:
            text = "Cool conditions - dress in layers, good running weather"
        else:
            text = "Cool conditions - comfortable for running"
        return PrimaryFactor.COLD, text
    if factors.wind >= max_factor:
        return (
            PrimaryFactor.WIND,
            f"Windy ({_degrees(weather.wind_mph)} mph) - expect more resistance on exposed sections",
        )
    return PrimaryFactor.RAIN, "Wet conditions - watch your footing"


def _degrees(value: float | None) -> str:
    if value is None:
        return "?"
    return f"{value:g}"


def severity_label(score: float) -> str:
    """Human label for a severity score: Ideal, Mild, Moderate, Challenging or Extreme."""
    return band_lookup(score, SEVERITY_LABEL_BANDS)


def acclimatization_score(
    warm_runs_last_two_weeks: str,
    heat_limited: str,
    deliberate_heat_training: bool = False,
) -> int:
    """Score heat acclimatization (0–100) from a three-question survey.

    Args:
        warm_runs_last_two_weeks: One of "0", "1-2", "3-5", "6+".
        heat_limited: How often heat limits the athlete: "rarely",
            "sometimes", "often" or "always".
        deliberate_heat_training: Whether the athlete trains in heat on purpose.

    Returns:
        Integer score clamped to [0, 100]; unknown answers count as neutral.
    """
    score = ACCLIMATIZATION_BASE_SCORE
    score += ACCLIMATIZATION_WARM_RUNS.get(warm_runs_last_two_weeks, 0)
    score += ACCLIMATIZATION_HEAT_LIMITED.get(heat_limited, 0)
    if deliberate_heat_training:
        score += ACCLIMATIZATION_DELIBERATE_TRAINING
    return int(clamp(score, 0, 100))
