"""Enumerations and numeric constants for the training engine.

Thresholds are grouped by the engine that consumes them. Ordered band
tables are tuples of ``(upper_bound_exclusive, value)`` pairs scanned in
order; a final ``None`` bound is the catch-all.
"""

from __future__ import annotations

import operator
from enum import Enum
from typing import Callable


class WorkoutType(str, Enum):
    """Type of a logged workout record."""

    EASY = "easy"
    RECOVERY = "recovery"
    STEADY = "steady"
    TEMPO = "tempo"
    THRESHOLD = "threshold"
    INTERVAL = "interval"
    LONG = "long"
    RACE = "race"
    CROSS_TRAIN = "cross_train"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | WorkoutType | None) -> WorkoutType:
        """Coerce a raw string to a WorkoutType, falling back to OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER


class PrescriptionType(str, Enum):
    """Workout kinds the prescription engine can dose."""

    EASY = "easy"
    TEMPO = "tempo"
    THRESHOLD = "threshold"
    VO2MAX = "vo2max"
    LONG_RUN = "long_run"
    FARTLEK = "fartlek"
    PROGRESSION = "progression"

    @classmethod
    def parse(cls, value: str | PrescriptionType | None) -> PrescriptionType:
        """Coerce a raw request string; unknown kinds get the easy-run dosage."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.EASY


class ConditionCategory(str, Enum):
    """Coarse sky/precipitation category of a weather observation."""

    CLEAR = "clear"
    CLOUDY = "cloudy"
    FOG = "fog"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    SNOW = "snow"
    THUNDERSTORM = "thunderstorm"


class PrimaryFactor(str, Enum):
    """Dominant contributor to a conditions severity score."""

    IDEAL = "ideal"
    HEAT_HUMIDITY = "heat_humidity"
    HEAT = "heat"
    COLD = "cold"
    WIND = "wind"
    RAIN = "rain"


class Aggressiveness(str, Enum):
    """How hard the athlete wants plans to push."""

    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class TrainingPhase(str, Enum):
    """Macrocycle phase a prescription is requested for."""

    BASE = "base"
    BUILD = "build"
    PEAK = "peak"
    TAPER = "taper"

    @classmethod
    def parse(cls, value: str | TrainingPhase | None) -> TrainingPhase | None:
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


class RaceCategory(str, Enum):
    """Distance category that selects race pace and split tables."""

    MARATHON = "marathon"
    HALF_MARATHON = "half_marathon"
    TEN_K = "10k"
    FIVE_K = "5k"

    @classmethod
    def from_label(cls, label: str | None) -> RaceCategory | None:
        """Category named by a free-text label ("Boston Marathon", "5K", "half_marathon")."""
        if not label:
            return None
        text = label.lower()
        if "half" in text:
            return cls.HALF_MARATHON
        if "marathon" in text:
            return cls.MARATHON
        if "10k" in text:
            return cls.TEN_K
        if "5k" in text:
            return cls.FIVE_K
        return None


class FailureKind(str, Enum):
    """Typed reasons an engine entry point can return a Failure."""

    MISSING_PROFILE = "missing_profile"
    MISSING_RACE = "missing_race"
    NO_DOSAGE_RULE = "no_dosage_rule"


# ---------------------------------------------------------------------------
# Unit conversions
# ---------------------------------------------------------------------------
METERS_PER_MILE = 1609.34

# ---------------------------------------------------------------------------
# Profile defaults, resolved once by resolve_profile()
# ---------------------------------------------------------------------------
VDOT_MIN = 15.0
VDOT_MAX = 85.0
DEFAULT_VDOT = 45.0
DEFAULT_WEEKLY_MILEAGE = 25.0
DEFAULT_PEAK_WEEKLY_MILEAGE = 50.0
DEFAULT_ACCLIMATIZATION_SCORE = 50
DEFAULT_EASY_PACE_S = 540  # 9:00/mi
DEFAULT_TEMPO_PACE_S = 450  # 7:30/mi
DEFAULT_THRESHOLD_PACE_S = 420  # 7:00/mi
DEFAULT_INTERVAL_PACE_S = 390  # 6:30/mi
MARATHON_PACE_OFFSET_FROM_TEMPO_S = 15

# ---------------------------------------------------------------------------
# Training load (CTL/ATL/TSB) — Coggan performance manager constants
# ---------------------------------------------------------------------------
CTL_TIME_CONSTANT_DAYS = 42
ATL_TIME_CONSTANT_DAYS = 7
DEFAULT_LOAD_WINDOW_DAYS = 42
INTENSITY_FACTOR_MIN = 0.5
INTENSITY_FACTOR_MAX = 1.2

# Fitness status by TSB, checked top-down (strictly greater than bound)
FITNESS_STATUS_BANDS: tuple[tuple[float, str], ...] = (
    (20.0, "Well Rested"),
    (5.0, "Race Ready"),
    (-10.0, "Training"),
    (-25.0, "Fatigued"),
)
FITNESS_STATUS_FLOOR = "Overreached"

OPTIMAL_LOAD_LOW_FRACTION = 0.8
OPTIMAL_LOAD_HIGH_FRACTION = 1.2

# ---------------------------------------------------------------------------
# Conditions severity
# ---------------------------------------------------------------------------
HEAT_INDEX_MIN_TEMP_F = 55.0
HEAT_INDEX_ROTHFUSZ_MIN_TEMP_F = 80.0
WIND_CHILL_MAX_TEMP_F = 50.0
WIND_CHILL_MIN_WIND_MPH = 3.0
COLD_STRESS_MAX_TEMP_F = 55.0

# Heat factor by heat index: (upper_exclusive, base, slope, anchor)
HEAT_FACTOR_BANDS: tuple[tuple[float | None, float, float, float], ...] = (
    (65.0, 0.0, 0.0, 65.0),
    (75.0, 5.0, 1.0, 65.0),
    (85.0, 15.0, 2.5, 75.0),
    (95.0, 40.0, 3.0, 85.0),
    (None, 70.0, 2.0, 95.0),
)

HUMIDITY_PENALTY_MIN_PCT = 70.0
HUMIDITY_PENALTY_MIN_TEMP_F = 75.0
HUMIDITY_PENALTY_PER_PCT = 0.5

COLD_AMBIENT_THRESHOLD_F = 40.0
COLD_AMBIENT_PER_DEGREE = 0.5
COLD_FEELS_LIKE_THRESHOLD_F = 20.0
COLD_FEELS_LIKE_PER_DEGREE = 0.8

WIND_PENALTY_MIN_MPH = 10.0
WIND_PENALTY_HEAT_MIN_MPH = 15.0
WIND_PENALTY_PER_MPH = 0.8
WIND_COOLING_PER_MPH = 0.3
WIND_HEAT_TEMP_F = 75.0

PRECIPITATION_FACTORS: dict[ConditionCategory, float] = {
    ConditionCategory.DRIZZLE: 5.0,
    ConditionCategory.RAIN: 5.0,
    ConditionCategory.THUNDERSTORM: 15.0,
    ConditionCategory.SNOW: 10.0,
}

IDEAL_TEMP_RANGE_F = (40.0, 60.0)
IDEAL_MAX_HEAT_FACTOR = 10.0
IDEAL_MAX_WIND_FACTOR = 10.0
IDEAL_MAX_PRECIP_FACTOR = 5.0
IDEAL_MAX_SEVERITY = 15
HEAT_HUMIDITY_SPLIT_FACTOR = 10.0

# Heat acclimatization questionnaire
ACCLIMATIZATION_BASE_SCORE = 50
ACCLIMATIZATION_WARM_RUNS: dict[str, int] = {"0": -20, "1-2": -5, "3-5": 10, "6+": 25}
ACCLIMATIZATION_HEAT_LIMITED: dict[str, int] = {
    "rarely": 15,
    "sometimes": 0,
    "often": -10,
    "always": -20,
}
ACCLIMATIZATION_DELIBERATE_TRAINING = 15

SEVERITY_LABEL_BANDS: tuple[tuple[float | None, str], ...] = (
    (20.0, "Ideal"),
    (40.0, "Mild"),
    (60.0, "Moderate"),
    (80.0, "Challenging"),
    (None, "Extreme"),
)

# ---------------------------------------------------------------------------
# Pace adjustment (heat only)
# ---------------------------------------------------------------------------
WORKOUT_TYPE_HEAT_MULTIPLIER: dict[WorkoutType, float] = {
    WorkoutType.EASY: 1.0,
    WorkoutType.RECOVERY: 1.0,
    WorkoutType.LONG: 1.0,
    WorkoutType.STEADY: 0.85,
    WorkoutType.TEMPO: 0.7,
    WorkoutType.THRESHOLD: 0.7,
    WorkoutType.INTERVAL: 0.5,
    WorkoutType.RACE: 0.5,
    WorkoutType.CROSS_TRAIN: 0.0,
    WorkoutType.OTHER: 0.8,
}
DEFAULT_HEAT_MULTIPLIER = 0.8

# Base slowdown (s/mi) by heat severity: (upper_inclusive, base, slope, anchor)
HEAT_ADJUSTMENT_BANDS: tuple[tuple[float | None, float, float, float], ...] = (
    (10.0, 0.0, 0.0, 10.0),
    (25.0, 0.0, 0.4, 10.0),
    (45.0, 6.0, 0.7, 25.0),
    (65.0, 20.0, 1.0, 45.0),
    (None, 40.0, 0.8, 65.0),
)

# Acclimatization scaling of a positive adjustment, checked in order
ACCLIMATIZATION_SCALING: tuple[tuple[Callable[[float, float], bool], float, float], ...] = (
    (operator.ge, 80.0, 0.7),
    (operator.ge, 60.0, 0.85),
    (operator.le, 20.0, 1.2),
    (operator.le, 40.0, 1.1),
)

WARN_PEAK_HEAT_SEVERITY = 50.0
WARN_UNSAFE_HEAT_SEVERITY = 70.0
WARN_EXTREME_HEAT_INDEX = 100.0
WARN_FROSTBITE_WIND_CHILL = 10.0
WARN_DANGEROUS_WIND_CHILL = 0.0

# ---------------------------------------------------------------------------
# Prescription dosage
# ---------------------------------------------------------------------------
MILEAGE_MULTIPLIER_REFERENCE_MPW = 40.0
MILEAGE_MULTIPLIER_MIN = 0.5
MILEAGE_MULTIPLIER_MAX = 2.0
AGGRESSIVENESS_FACTOR: dict[Aggressiveness, float] = {
    Aggressiveness.CONSERVATIVE: 0.9,
    Aggressiveness.MODERATE: 1.0,
    Aggressiveness.AGGRESSIVE: 1.1,
}

HARD_EFFORT_WINDOW_DAYS = 7
# Record-level types counted as hard efforts; INTERVAL is the logged form of VO2max work
HARD_EFFORT_TYPES = frozenset({
    WorkoutType.TEMPO,
    WorkoutType.THRESHOLD,
    WorkoutType.INTERVAL,
    WorkoutType.RACE,
})
HARD_EFFORT_LIMIT = 2
RECENT_WORKOUT_LIMIT = 20

# Logged type that matches each prescription, for "last similar workout"
# lookups and the heat multiplier applied to its main pace
PRESCRIPTION_RECORD_TYPE: dict[PrescriptionType, WorkoutType] = {
    PrescriptionType.EASY: WorkoutType.EASY,
    PrescriptionType.TEMPO: WorkoutType.TEMPO,
    PrescriptionType.THRESHOLD: WorkoutType.THRESHOLD,
    PrescriptionType.VO2MAX: WorkoutType.INTERVAL,
    PrescriptionType.LONG_RUN: WorkoutType.LONG,
    PrescriptionType.FARTLEK: WorkoutType.STEADY,
    PrescriptionType.PROGRESSION: WorkoutType.STEADY,
}

# Weekly volume status bands relative to the target mileage
VOLUME_BELOW_TARGET_FRACTION = 0.8
VOLUME_ABOVE_TARGET_FRACTION = 1.2
COACH_HIGH_VOLUME_FRACTION = 1.1
COACH_LOW_VOLUME_FRACTION = 0.7

# TSB breakpoints shared by several dosage rules
TSB_VERY_FATIGUED = -20
TSB_FATIGUED = -15
TSB_MODERATELY_FATIGUED = -10
TSB_FRESH = 5
TSB_WELL_RESTED = 10
TSB_PEAK = 15

# Tempo
TEMPO_BASE_MINUTES_BY_VDOT: tuple[tuple[float | None, int], ...] = (
    (40.0, 15),
    (50.0, 20),
    (60.0, 25),
    (None, 30),
)
TEMPO_RANGE_SPAN_MINUTES = 10
TEMPO_PORTION_OF_LAST = 0.8
TEMPO_PROGRESSION_MIN = 1.05
TEMPO_PROGRESSION_MAX = 1.15
TEMPO_FATIGUE_MIN_FACTOR = 0.8
TEMPO_FATIGUE_MAX_FACTOR = 0.85
TEMPO_RESTED_MAX_FACTOR = 1.1

# Threshold
THRESHOLD_REPS_BY_VDOT: tuple[tuple[float | None, int], ...] = (
    (40.0, 3),
    (50.0, 4),
    (60.0, 5),
    (None, 6),
)
THRESHOLD_REP_MINUTES_BY_VDOT: tuple[tuple[float | None, int], ...] = (
    (45.0, 6),
    (55.0, 8),
    (None, 10),
)
THRESHOLD_RECOVERY_MINUTES: dict[Aggressiveness, float] = {
    Aggressiveness.AGGRESSIVE: 2.0,
    Aggressiveness.MODERATE: 2.5,
    Aggressiveness.CONSERVATIVE: 3.0,
}
THRESHOLD_MIN_REPS = 3
THRESHOLD_EXTRA_RECOVERY_MINUTES = 0.5

# VO2max: interval distance and reps keyed by target race
VO2MAX_5K_DISTANCE_BY_VDOT: tuple[tuple[float | None, int], ...] = (
    (45.0, 800),
    (None, 1000),
)
VO2MAX_5K_REPS_BY_VDOT: tuple[tuple[float | None, int], ...] = (
    (40.0, 4),
    (50.0, 5),
    (None, 6),
)
VO2MAX_DISTANCE_BY_VDOT: tuple[tuple[float | None, int], ...] = (
    (45.0, 1000),
    (55.0, 1200),
    (None, 1600),
)
VO2MAX_REPS_BY_VDOT: tuple[tuple[float | None, int], ...] = (
    (45.0, 4),
    (None, 5),
)
# One step down the interval ladder when very fatigued
VO2MAX_DISTANCE_STEP_DOWN: dict[int, int] = {1600: 1200, 1200: 1000}
VO2MAX_RECOVERY_JOG_M: dict[int, int] = {800: 400, 1000: 600, 1200: 800, 1600: 800}
VO2MAX_INTERVAL_MILES: dict[int, float] = {800: 0.5, 1000: 0.62, 1200: 0.75, 1600: 1.0}
VO2MAX_MIN_REPS = 3
VO2MAX_RECOVERY_DISTANCE_FRACTION = 0.8

# Long run
LONG_RUN_WEEKLY_FRACTION = 0.35
LONG_RUN_COMPARABLE_FRACTION = 0.8
LONG_RUN_RECOVERY_DAYS = 5
LONG_RUN_PROGRESSION_DAYS = 14
LONG_RUN_RECOVERY_FACTOR = 0.7
LONG_RUN_PROGRESSION_FACTOR = 1.1
LONG_RUN_PEAK_CAP_FRACTION = 0.35
LONG_RUN_MARATHON_PACE_FRACTION = 0.4
LONG_RUN_HALF_PACE_FRACTION = 0.25

# Fartlek
FARTLEK_BASE_MINUTES = 45.0
FARTLEK_MINUTES_PER_VDOT = 0.5
FARTLEK_MINUTES_PER_SURGE = 8.0

# Progression
PROGRESSION_WEEKLY_FRACTION = 0.25
PROGRESSION_MAX_BASE_MILES = 10.0
PROGRESSION_FINISH_FRACTION = 0.3
PROGRESSION_MAX_FINISH_MILES = 3

# Easy / default
EASY_BASE_MILES = 6
EASY_RECOVERY_MILES = 4
EASY_RANGE_MILES = 2

# ---------------------------------------------------------------------------
# Race-day planning
# ---------------------------------------------------------------------------
# Race paces used when neither the profile nor a valid VDOT supplies one
RACE_DEFAULT_PACES: dict[str, int] = {
    "easy": 600,
    "marathon": 480,
    "half_marathon": 450,
    "tempo": 420,
    "threshold": 400,
    "interval": 360,
}
# Zone that paces each race category
RACE_CATEGORY_ZONE: dict[RaceCategory, str] = {
    RaceCategory.MARATHON: "marathon",
    RaceCategory.HALF_MARATHON: "half_marathon",
    RaceCategory.TEN_K: "threshold",
    RaceCategory.FIVE_K: "interval",
}

RACE_WEATHER_WINDOW_DAYS = 7
RACE_PACE_EFFORT_TOLERANCE_S = 15
RACE_PACE_EFFORT_MIN_MILES = 3.0
RACE_PACE_EFFORT_LIMIT = 3
RACE_MILEAGE_LOOKBACK_DAYS = 28

# Readiness by TSB, checked in order: (comparison, bound, band, assessment)
RACE_READINESS_BANDS: tuple[tuple[Callable[[float, float], bool], float, str, str], ...] = (
    (operator.lt, -20.0, "very_fatigued",
     "CAUTION: Very fatigued. Consider postponing race or adjusting goals significantly."),
    (operator.lt, -10.0, "moderately_fatigued",
     "Moderately fatigued. Adjust race goals by 2-3% slower."),
    (operator.lt, -5.0, "slightly_fatigued",
     "Slightly fatigued but raceable. Expect to work harder for goal pace."),
    (operator.gt, 15.0, "peak",
     "PEAK: Very well rested! Ideal conditions for a PR attempt."),
    (operator.gt, 5.0, "well_tapered",
     "Well tapered. Good position for strong performance."),
)
RACE_READINESS_DEFAULT = ("balanced", "Balanced. Adequate recovery for race effort.")
RACE_CONSERVATIVE_TSB = -10
RACE_AGGRESSIVE_TSB = 10

# Split tables: (segment, pace offset s/mi from goal, notes, "or faster")
RACE_SPLIT_TABLES: dict[RaceCategory, tuple[tuple[str, int, str, bool], ...]] = {
    RaceCategory.MARATHON: (
        ("Miles 1-3", 15, "Controlled start, let the crowd thin", False),
        ("Miles 4-6", 10, "Still warming up, should feel too easy", False),
        ("Miles 7-13", 0, "Goal pace, find your rhythm", False),
        ("Miles 14-20", 0, "Maintain focus, real race begins here", False),
        ("Miles 21-23", 0, "Dig deep, rely on mental training", False),
        ("Miles 24-26.2", 0, "Everything you have left", True),
    ),
    RaceCategory.HALF_MARATHON: (
        ("Mile 1", 10, "Controlled start", False),
        ("Miles 2-3", 5, "Settle into rhythm", False),
        ("Miles 4-10", 0, "Goal pace, stay steady", False),
        ("Miles 11-12", 0, "Maintain when it gets hard", False),
        ("Mile 13-13.1", -5, "Empty the tank", True),
    ),
    RaceCategory.TEN_K: (
        ("Mile 1", 5, "Controlled, find position", False),
        ("Miles 2-3", 0, "Lock into goal pace", False),
        ("Miles 4-5", 0, "Stay strong when it hurts", False),
        ("Mile 6-6.2", -5, "Final kick", True),
    ),
    RaceCategory.FIVE_K: (
        ("First 800m", 5, "Controlled start", False),
        ("Mile 1-2", 0, "Goal pace, it will hurt", False),
        ("Mile 2.5-3.1", 0, "Everything left", True),
    ),
}

# Distance fallbacks (meters) when a race label does not name its category
RACE_CATEGORY_MIN_METERS: tuple[tuple[float, RaceCategory], ...] = (
    (40000.0, RaceCategory.MARATHON),
    (20000.0, RaceCategory.HALF_MARATHON),
    (9000.0, RaceCategory.TEN_K),
)

MARATHON_GEL_INTERVAL_MILES = 5
TAPER_VOLUME_FRACTION = (0.7, 0.8)
