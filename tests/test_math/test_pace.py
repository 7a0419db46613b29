"""Tests for pace/time formatting and parsing."""

from __future__ import annotations

import pytest

from training_engine.math.pace import format_pace, format_pace_per_mile, format_time, parse_pace


class TestFormatPace:
    def test_whole_minutes(self) -> None:
        assert format_pace(540) == "9:00"

    def test_pads_seconds(self) -> None:
        assert format_pace(425) == "7:05"

    def test_rounds_half_up(self) -> None:
        assert format_pace(419.5) == "7:00"
        assert format_pace(419.4) == "6:59"

    def test_per_mile_suffix(self) -> None:
        assert format_pace_per_mile(450) == "7:30/mi"


class TestParsePace:
    def test_parses(self) -> None:
        assert parse_pace("7:30") == 450

    def test_allows_surrounding_whitespace(self) -> None:
        assert parse_pace(" 10:05 ") == 605

    @pytest.mark.parametrize("text", ["7:60", "7:5", "abc", "7", "", "-7:30", "7:30:00"])
    def test_rejects_malformed(self, text) -> None:
        assert parse_pace(text) is None

    @pytest.mark.parametrize("seconds", [0, 59, 60, 301, 450, 599, 3599])
    def test_round_trip(self, seconds) -> None:
        assert parse_pace(format_pace(seconds)) == seconds


class TestFormatTime:
    def test_under_an_hour(self) -> None:
        assert format_time(1200) == "20:00"

    def test_over_an_hour(self) -> None:
        assert format_time(3725) == "1:02:05"
