"""Time-bounded in-process cache with stale fallback."""

import logging
from datetime import datetime
from typing import Callable, Generic, Optional, TypeVar

from coinfolio.core.clock import Clock, age_seconds, now_utc

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TimedCache(Generic[T]):
    """
    Single-value cache with a freshness window.

    The value and its timestamp are stored as one tuple and replaced
    together, so a reader always sees a consistent pair even if another
    caller refreshes concurrently (last writer wins).
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Clock = now_utc,
        name: str = "cache",
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._name = name
        self._entry: Optional[tuple[T, datetime]] = None

    @property
    def cached_at(self) -> Optional[datetime]:
        """Timestamp of the cached value, or None when empty."""
        entry = self._entry
        return entry[1] if entry else None

    def get(self) -> tuple[Optional[T], bool]:
        """
        Return ``(value, is_stale)``.

        An empty cache returns ``(None, True)``.
        """
        entry = self._entry
        if entry is None:
            return None, True
        value, cached_at = entry
        return value, age_seconds(cached_at, self._clock()) >= self._ttl

    def put(self, value: T) -> None:
        """Replace the cached value and reset its timestamp."""
        self._entry = (value, self._clock())

    def invalidate(self) -> None:
        """Drop the cached value."""
        self._entry = None

    def get_or_refresh(
        self,
        refresh: Callable[[], T],
        fallback_errors: tuple[type[Exception], ...] = (Exception,),
    ) -> tuple[T, bool]:
        """
        Return a fresh value, refreshing it if needed.

        If ``refresh`` raises one of ``fallback_errors`` and a previous value
        exists, that value is returned flagged as stale. With nothing cached
        the error propagates.
        """
        entry = self._entry
        if entry is not None:
            value, cached_at = entry
            if age_seconds(cached_at, self._clock()) < self._ttl:
                return value, False

        try:
            fresh = refresh()
        except fallback_errors as e:
            fallback = self._entry or entry
            if fallback is None:
                raise
            logger.warning("Refresh of %s failed, serving stale value: %s", self._name, e)
            return fallback[0], True

        self.put(fresh)
        return fresh, False
