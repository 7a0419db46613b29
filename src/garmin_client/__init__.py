"""Garmin Connect API client — all Garmin network I/O lives here."""

from garmin_client.activity_mapper import map_activities, map_activity
from garmin_client.client import GarminClient
from garmin_client.exceptions import (
    GarminAPIError,
    GarminAuthError,
    GarminClientError,
    GarminMFARequired,
    GarminRateLimitError,
)
from garmin_client.provider import GarminHistoryProvider

__all__ = [
    "GarminAPIError",
    "GarminAuthError",
    "GarminClient",
    "GarminClientError",
    "GarminHistoryProvider",
    "GarminMFARequired",
    "GarminRateLimitError",
    "map_activities",
    "map_activity",
]
