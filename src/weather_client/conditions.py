"""WMO weather interpretation codes → condition categories.

Open-Meteo reports sky state as a WMO 4677 code; the severity engine only
needs the coarse category and a display string.
"""

from __future__ import annotations

from training_engine.models.enums import ConditionCategory

# code → (category, description)
WMO_CODES: dict[int, tuple[ConditionCategory, str]] = {
    0: (ConditionCategory.CLEAR, "Clear sky"),
    1: (ConditionCategory.CLEAR, "Mainly clear"),
    2: (ConditionCategory.CLOUDY, "Partly cloudy"),
    3: (ConditionCategory.CLOUDY, "Overcast"),
    45: (ConditionCategory.FOG, "Fog"),
    48: (ConditionCategory.FOG, "Depositing rime fog"),
    51: (ConditionCategory.DRIZZLE, "Light drizzle"),
    53: (ConditionCategory.DRIZZLE, "Moderate drizzle"),
    55: (ConditionCategory.DRIZZLE, "Dense drizzle"),
    56: (ConditionCategory.DRIZZLE, "Light freezing drizzle"),
    57: (ConditionCategory.DRIZZLE, "Dense freezing drizzle"),
    61: (ConditionCategory.RAIN, "Slight rain"),
    63: (ConditionCategory.RAIN, "Moderate rain"),
    65: (ConditionCategory.RAIN, "Heavy rain"),
    66: (ConditionCategory.RAIN, "Light freezing rain"),
    67: (ConditionCategory.RAIN, "Heavy freezing rain"),
    71: (ConditionCategory.SNOW, "Slight snow fall"),
    73: (ConditionCategory.SNOW, "Moderate snow fall"),
    75: (ConditionCategory.SNOW, "Heavy snow fall"),
    77: (ConditionCategory.SNOW, "Snow grains"),
    80: (ConditionCategory.RAIN, "Slight rain showers"),
    81: (ConditionCategory.RAIN, "Moderate rain showers"),
    82: (ConditionCategory.RAIN, "Violent rain showers"),
    85: (ConditionCategory.SNOW, "Slight snow showers"),
    86: (ConditionCategory.SNOW, "Heavy snow showers"),
    95: (ConditionCategory.THUNDERSTORM, "Thunderstorm"),
    96: (ConditionCategory.THUNDERSTORM, "Thunderstorm with slight hail"),
    99: (ConditionCategory.THUNDERSTORM, "Thunderstorm with heavy hail"),
}


def condition_from_code(code: int | None) -> tuple[ConditionCategory, str]:
    """Category and description for a WMO code; unknown codes read as clear."""
    if code is None:
        return ConditionCategory.CLEAR, "Unknown"
    return WMO_CODES.get(int(code), (ConditionCategory.CLEAR, "Unknown"))
