"""Tests for plain-dict serialization of engine results."""

from __future__ import annotations

import json
from datetime import date

from training_engine.math.weather import severity
from training_engine.models.enums import FailureKind, PrimaryFactor, RaceCategory
from training_engine.models.prescription import Failure
from training_engine.models.training_load import TrainingLoadSnapshot
from training_engine.serialization import to_json_string, to_record


class TestToRecord:
    def test_snapshot(self) -> None:
        snapshot = TrainingLoadSnapshot(ctl=40, atl=45, tsb=-5, as_of=date(2025, 6, 2))
        assert to_record(snapshot) == {
            "ctl": 40,
            "atl": 45,
            "tsb": -5,
            "as_of": "2025-06-02",
            "workout_count": 0,
        }

    def test_enums_become_values(self) -> None:
        failure = Failure(kind=FailureKind.MISSING_RACE, error="No race found")
        assert to_record(failure)["kind"] == "missing_race"

    def test_nested_dataclasses(self, hot_weather) -> None:
        record = to_record(severity(hot_weather))
        assert record["primary_factor"] == PrimaryFactor.HEAT.value
        assert isinstance(record["factors"], dict)

    def test_tuples_become_lists(self) -> None:
        assert to_record((1, (2, 3))) == [1, [2, 3]]

    def test_enum_and_date_keys(self) -> None:
        value = {RaceCategory.FIVE_K: 1, date(2025, 6, 2): 2, "plain": 3}
        assert to_record(value) == {"5k": 1, "2025-06-02": 2, "plain": 3}

    def test_primitives_pass_through(self) -> None:
        assert to_record(None) is None
        assert to_record(7.5) == 7.5
        assert to_record("easy") == "easy"


class TestToJsonString:
    def test_round_trips_through_json(self) -> None:
        snapshot = TrainingLoadSnapshot(ctl=40, atl=45, tsb=-5)
        assert json.loads(to_json_string(snapshot))["tsb"] == -5

    def test_indent(self) -> None:
        text = to_json_string({"a": 1}, indent=4)
        assert text == '{\n    "a": 1\n}'
