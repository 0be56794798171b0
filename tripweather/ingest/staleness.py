"""Freshness checks for cache entries."""

from datetime import UTC, datetime, timedelta

from tripweather.models.weather import CacheEntry


def is_entry_fresh(
    entry: CacheEntry, ttl_minutes: int, now: datetime | None = None
) -> bool:
    """An entry is fresh while its age is strictly below the TTL."""
    if now is None:
        now = datetime.now(UTC)
    return now - entry.timestamp < timedelta(minutes=ttl_minutes)


def entry_age_minutes(entry: CacheEntry, now: datetime | None = None) -> float:
    if now is None:
        now = datetime.now(UTC)
    return (now - entry.timestamp).total_seconds() / 60
