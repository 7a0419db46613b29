"""Pace and time formatting (seconds ⇄ "m:ss" / "h:mm:ss")."""

from __future__ import annotations

import re

from training_engine.math.numeric import round_half_up

_PACE_RE = re.compile(r"^(\d+):(\d{2})$")


def format_pace(seconds: float) -> str:
    """Format seconds per mile as ``m:ss`` (rounded to the whole second)."""
    total = round_half_up(seconds)
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


def format_pace_per_mile(seconds: float) -> str:
    return f"{format_pace(seconds)}/mi"


def parse_pace(text: str) -> int | None:
    """Parse ``m:ss`` into seconds, or None when malformed or seconds >= 60."""
    match = _PACE_RE.match(text.strip())
    if not match:
        return None
    minutes, secs = int(match.group(1)), int(match.group(2))
    if secs >= 60:
        return None
    return minutes * 60 + secs


def format_time(seconds: float) -> str:
    """Format a duration as ``h:mm:ss``, or ``m:ss`` under an hour."""
    total = round_half_up(seconds)
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
