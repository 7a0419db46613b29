"""TTL cache interface for weather lookups, plus an in-process implementation."""

from __future__ import annotations

import threading
import time
from typing import Callable, Generic, Optional, Protocol, TypeVar

V = TypeVar("V")


class WeatherCache(Protocol[V]):
    def get(self, key: str) -> Optional[V]:
        """Cached value for *key*, or None when absent or expired."""
        ...

    def put(self, key: str, value: V, ttl: float) -> None:
        """Store *value* for *ttl* seconds."""
        ...


class InMemoryWeatherCache(Generic[V]):
    """Thread-safe dict cache with per-entry expiry.

    *clock* returns seconds and defaults to ``time.monotonic``.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, V]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[V]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: V, ttl: float) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + ttl, value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
