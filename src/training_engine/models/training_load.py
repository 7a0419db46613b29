"""Point-in-time fitness/fatigue snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from training_engine.math.numeric import round_half_up


@dataclass(frozen=True)
class TrainingLoadSnapshot:
    """Chronic load, acute load and stress balance as of a date.

    Values are whole numbers and ``tsb == ctl - atl`` always holds; build
    snapshots from raw loads with :meth:`from_loads`.
    """

    ctl: int
    atl: int
    tsb: int
    as_of: date | None = None
    workout_count: int = 0

    @classmethod
    def from_loads(
        cls,
        ctl: float,
        atl: float,
        as_of: date | None = None,
        workout_count: int = 0,
    ) -> TrainingLoadSnapshot:
        rounded_ctl = round_half_up(ctl)
        rounded_atl = round_half_up(atl)
        return cls(
            ctl=rounded_ctl,
            atl=rounded_atl,
            tsb=rounded_ctl - rounded_atl,
            as_of=as_of,
            workout_count=workout_count,
        )

    @classmethod
    def empty(cls, as_of: date | None = None) -> TrainingLoadSnapshot:
        return cls(ctl=0, atl=0, tsb=0, as_of=as_of)
