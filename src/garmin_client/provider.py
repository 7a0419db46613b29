"""Workout-history provider backed by Garmin Connect activities."""

from __future__ import annotations

import logging
from datetime import date

from garmin_client.activity_mapper import map_activities
from garmin_client.client import GarminClient
from training_engine.models.workout import WorkoutRecord

logger = logging.getLogger(__name__)


class GarminHistoryProvider:
    """Serves ``fetch_workouts`` from a ``GarminClient``.

    Every activity type is requested so cross-training shows up in the
    history; non-running activities map to ``cross_train`` records.
    """

    def __init__(self, client: GarminClient) -> None:
        self._client = client

    def fetch_workouts(self, start: date, end: date) -> list[WorkoutRecord]:
        raw = self._client.pull_activities(start, end)
        records = sorted(map_activities(raw), key=lambda w: w.date)
        logger.info("Mapped %d of %d Garmin activities to workouts", len(records), len(raw))
        return records
