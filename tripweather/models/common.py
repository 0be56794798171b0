"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import TypeAlias

LocationKey: TypeAlias = str


class Namespace(StrEnum):
    CURRENT = "current"
    FORECAST = "forecast"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def parse_timestamp(value: str | int | float | None) -> datetime | None:
    """Parse an ISO timestamp or epoch milliseconds into an aware UTC datetime."""
    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        dt = datetime.fromisoformat(value)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt
    except (ValueError, TypeError, OverflowError, OSError):
        return None
