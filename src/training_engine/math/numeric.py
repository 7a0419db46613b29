"""Small numeric helpers shared by every engine."""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +infinity.

    Python's round() uses banker's rounding; every displayed number in the
    engine (TSS, loads, paces, minutes) rounds .5 upwards instead.
    """
    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int) -> float:
    """Half-up rounding to a fixed number of decimal places."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def band_lookup(value: float, bands: Sequence[tuple[float | None, T]]) -> T:
    """Return the value of the first band whose exclusive upper bound exceeds ``value``.

    A ``None`` bound matches everything and should close the table.

    Example:
        >>> band_lookup(47, ((40.0, 15), (50.0, 20), (None, 30)))
        20
    """
    for upper, result in bands:
        if upper is None or value < upper:
            return result
    return bands[-1][1]


def piecewise_linear(
    value: float,
    bands: Sequence[tuple[float | None, float, float, float]],
    inclusive: bool = False,
) -> float:
    """Evaluate ``base + (value - anchor) * slope`` for the band containing ``value``.

    Args:
        value: Input to the piecewise function.
        bands: Ordered ``(upper_bound, base, slope, anchor)`` rows; a ``None``
            bound closes the table.
        inclusive: Treat upper bounds as inclusive (``<=``) instead of ``<``.
    """
    for upper, base, slope, anchor in bands:
        if upper is None or value < upper or (inclusive and value == upper):
            return base + (value - anchor) * slope
    _, base, slope, anchor = bands[-1]
    return base + (value - anchor) * slope
