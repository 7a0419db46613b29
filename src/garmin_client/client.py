"""High-level Garmin Connect client facade.

All methods wrap raw garminconnect calls with error handling and retry logic.
"""

from __future__ import annotations

import logging
import time
from datetime import date
from pathlib import Path
from typing import Any, Callable, Optional

from garminconnect import Garmin

from garmin_client.auth import DEFAULT_TOKEN_DIR, create_session
from garmin_client.exceptions import GarminAPIError, GarminRateLimitError

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_BASE_BACKOFF_S = 2


class GarminClient:
    """Facade for the Garmin Connect activity endpoints."""

    def __init__(
        self,
        email: str | None = None,
        password: str | None = None,
        token_dir: Path | str = DEFAULT_TOKEN_DIR,
        prompt_mfa: Optional[Callable[[], str]] = None,
    ) -> None:
        self._garmin = create_session(
            email=email or "",
            password=password or "",
            token_dir=token_dir,
            prompt_mfa=prompt_mfa,
        )

    @classmethod
    def from_garmin(cls, garmin: Garmin) -> "GarminClient":
        """Construct from an already-authenticated Garmin object."""
        obj = cls.__new__(cls)
        obj._garmin = garmin
        return obj

    def pull_activities(
        self, start: date, end: date, activity_type: str | None = None
    ) -> list[dict[str, Any]]:
        """Raw activity summaries started between *start* and *end*, inclusive.

        *activity_type* narrows the query to one Garmin type key (e.g.
        ``"running"``); None returns every activity.
        """
        args: list[Any] = [start.isoformat(), end.isoformat()]
        if activity_type:
            args.append(activity_type)
        activities = self._safe_call(self._garmin.get_activities_by_date, *args) or []
        logger.info(
            "Pulled %d activities for %s..%s", len(activities), start.isoformat(), end.isoformat()
        )
        return list(activities)

    def _safe_call(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        """Call *fn* with retry + exponential backoff on 429."""
        last_exc: Exception | None = None
        for attempt in range(_MAX_RETRIES):
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                last_exc = exc
                status = getattr(exc, "status", None) or getattr(exc, "status_code", None)
                if status != 429:
                    raise GarminAPIError(str(exc), status_code=status) from exc
                wait = _BASE_BACKOFF_S * (2 ** attempt)
                logger.warning(
                    "Rate limited (attempt %d/%d), retrying in %ds",
                    attempt + 1,
                    _MAX_RETRIES,
                    wait,
                )
                time.sleep(wait)

        raise GarminRateLimitError(
            f"Rate limited after {_MAX_RETRIES} retries: {last_exc}", retries=_MAX_RETRIES
        )
