"""Fetch outcomes: classified error kinds and the Ok/Err result union."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeAlias, TypeVar

from tripweather.models.weather import NearbyCity

T = TypeVar("T")


class ErrorKind(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    RATE_LIMITED = "RATE_LIMITED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    MALFORMED_UPSTREAM_PAYLOAD = "MALFORMED_UPSTREAM_PAYLOAD"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    stale: bool = False
    from_cache: bool = False

    @property
    def error(self) -> None:
        return None


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def error(self) -> str:
        return self.message


Result: TypeAlias = Ok[Any] | Err


@dataclass(frozen=True)
class CombinedWeather:
    current: Result | None
    forecast: Result | None
    error: str | None = None
    alternatives: list[NearbyCity] = field(default_factory=list)
