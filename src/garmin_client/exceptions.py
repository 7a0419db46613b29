"""Errors raised while pulling workout history from Garmin Connect.

Everything derives from ``GarminClientError`` so the daily job can fall
back to an empty history with a single ``except``.
"""

from __future__ import annotations

from pathlib import Path


class GarminClientError(Exception):
    """Base exception for all garmin_client errors."""


class GarminAuthError(GarminClientError):
    """Login or token resume failed."""


class GarminMFARequired(GarminAuthError):
    """Login needs an MFA code and no prompt callback was supplied.

    ``token_dir`` is where tokens will be saved once a one-off interactive
    login succeeds.
    """

    def __init__(self, message: str, token_dir: Path | None = None) -> None:
        super().__init__(message)
        self.token_dir = token_dir


class GarminAPIError(GarminClientError):
    """An activity request returned an error response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GarminRateLimitError(GarminAPIError):
    """Still rate limited (HTTP 429) after every retry."""

    def __init__(self, message: str = "Rate limited by Garmin Connect", retries: int = 0) -> None:
        super().__init__(message, status_code=429)
        self.retries = retries
