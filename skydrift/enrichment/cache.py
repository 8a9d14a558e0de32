"""
Temperature Cache
Coordinate-keyed lookup with expiry, injected into the enrichment client.
"""

import time
from typing import Callable, Dict, Optional, Tuple

from .constants import CACHE_TTL_SECONDS

CacheKey = Tuple[float, float]


class TemperatureCache:
    """
    In-memory temperature cache keyed by exact ``(lat, lon)``.

    Entries older than ``ttl_seconds`` are evicted when read. The clock is
    injectable so expiry can be tested without sleeping.

    Example:
        >>> cache = TemperatureCache(ttl_seconds=600)
        >>> cache.set(51.5, -0.12, 14.2)
        >>> cache.get(51.5, -0.12)
        14.2
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[CacheKey, Tuple[float, float]] = {}

    def get(self, lat: float, lon: float) -> Optional[float]:
        """Cached temperature, or None if absent or expired."""
        key = (lat, lon)
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None

        return value

    def set(self, lat: float, lon: float, value: float) -> None:
        self._entries[(lat, lon)] = (self._clock(), value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return self.get(*key) is not None
