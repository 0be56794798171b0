"""Shared cache-then-fetch flow for the current-weather and forecast paths.

Order of operations for ``fetch``:

1. Reject a missing location (logged, returns None).
2. Serve a fresh cache entry without touching the network.
3. Otherwise request, optionally under retry_with_backoff, and cache the
   result as a new entry.
4. On a terminal WeatherApiError serve the previous entry, however old,
   or return an Err carrying the classified kind.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, TypeVar

from tripweather.ingest.location import Location, coerce_location, describe_location
from tripweather.ingest.openweather_client import OpenWeatherClient, WeatherApiError
from tripweather.ingest.retry import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    retry_with_backoff,
)
from tripweather.ingest.staleness import entry_age_minutes, is_entry_fresh
from tripweather.models.common import LocationKey, Namespace, utc_now
from tripweather.models.result import Err, Ok
from tripweather.models.weather import CacheEntry
from tripweather.storage.cache_store import CacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_MINUTES = 30


class CachedFetcher(Generic[T]):
    namespace: Namespace
    label: str

    def __init__(
        self,
        client: OpenWeatherClient,
        cache: CacheStore,
        ttl_minutes: int = DEFAULT_TTL_MINUTES,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.client = client
        self.cache = cache
        self.ttl_minutes = ttl_minutes
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.clock = clock

    def cache_key(self, location: Location) -> LocationKey:
        raise NotImplementedError

    async def request(self, location: Location) -> tuple[T, dict | None]:
        """Perform one upstream call. Returns (value, raw payload to keep)."""
        raise NotImplementedError

    def encode(self, value: T) -> Any:
        return value

    def decode(self, data: Any) -> T:
        return data

    async def fetch(self, location: Any, use_retry: bool = True) -> Ok[T] | Err | None:
        loc = coerce_location(location)
        if loc is None:
            logger.error("Location not provided for %s data", self.label)
            return None

        key = self.cache_key(loc)
        cached = self._cached_value(key)
        now = self.clock()
        if cached is not None and is_entry_fresh(cached[0], self.ttl_minutes, now):
            logger.info(
                "Using cached %s data for %s (%.1f min old)",
                self.label, describe_location(loc), entry_age_minutes(cached[0], now),
            )
            return Ok(cached[1], from_cache=True)

        async def attempt() -> T:
            logger.info("Fetching %s for %s", self.label, describe_location(loc))
            value, raw = await self.request(loc)
            self.cache.put(
                self.namespace,
                key,
                CacheEntry(timestamp=self.clock(), data=self.encode(value), raw_data=raw),
            )
            return value

        try:
            if use_retry:
                value = await retry_with_backoff(
                    attempt, self.max_attempts, self.base_delay
                )
            else:
                value = await attempt()
        except WeatherApiError as e:
            logger.error(
                "Error fetching %s for %s: %s", self.label, describe_location(loc), e
            )
            if cached is not None:
                logger.warning(
                    "Returning expired cached %s data for %s as fallback",
                    self.label, describe_location(loc),
                )
                return Ok(cached[1], stale=True, from_cache=True)
            return Err(e.kind, e.message)

        return Ok(value)

    def _cached_value(self, key: LocationKey) -> tuple[CacheEntry, T] | None:
        entry = self.cache.get(self.namespace, key)
        if entry is None:
            return None
        try:
            return entry, self.decode(entry.data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable %s cache entry %r: %s", self.label, key, e)
            return None
