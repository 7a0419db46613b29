"""Weather observation and the derived severity / pace-adjustment results."""

from __future__ import annotations

from dataclasses import dataclass, field

from training_engine.models.enums import ConditionCategory, PrimaryFactor


@dataclass(frozen=True)
class WeatherObservation:
    """Current conditions in imperial units."""

    temperature_f: float
    humidity_pct: float
    wind_mph: float
    condition: ConditionCategory = ConditionCategory.CLEAR
    condition_text: str = ""
    feels_like_f: float | None = None


@dataclass(frozen=True)
class SeverityFactors:
    """Per-source contributions to the severity score (unrounded)."""

    heat: float = 0.0
    humidity: float = 0.0
    wind: float = 0.0
    cold: float = 0.0
    precipitation: float = 0.0

    @property
    def heat_severity(self) -> float:
        """Heat plus humidity, the only part that slows prescribed pace."""
        return self.heat + self.humidity

    @property
    def total(self) -> float:
        return self.heat + self.humidity + self.wind + self.cold + self.precipitation


@dataclass(frozen=True)
class ConditionsSeverity:
    """Physiological severity of a weather observation.

    ``heat_index`` is None below 55°F; ``wind_chill`` is None unless the
    temperature is at most 50°F with wind of at least 3 mph.
    """

    severity_score: int
    primary_factor: PrimaryFactor
    factors: SeverityFactors
    description: str
    heat_index: float | None = None
    wind_chill: float | None = None


@dataclass(frozen=True)
class PaceAdjustment:
    """Heat-driven slowdown of a target pace, plus qualitative warnings."""

    original_pace_seconds: int
    adjusted_pace_seconds: int
    adjustment_seconds: int
    original_pace: str
    adjusted_pace: str
    reason: str
    recommendation: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
