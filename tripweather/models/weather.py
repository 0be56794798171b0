"""Weather data models: locations, cache entries and daily summaries."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True)
class DailyForecastSummary:
    date: str  # YYYY-MM-DD
    weekday: str  # "Mon"
    high: int
    low: int
    precipitation: int  # percent
    icon: str
    description: str
    wind: int  # km/h

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "day": self.weekday,
            "high": self.high,
            "low": self.low,
            "precipitation": self.precipitation,
            "icon": self.icon,
            "description": self.description,
            "wind": self.wind,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyForecastSummary":
        return cls(
            date=data["date"],
            weekday=data["day"],
            high=int(data["high"]),
            low=int(data["low"]),
            precipitation=int(data["precipitation"]),
            icon=data["icon"],
            description=data["description"],
            wind=int(data["wind"]),
        )


@dataclass(frozen=True)
class NearbyCity:
    name: str
    country: str
    state: str | None
    lat: float
    lon: float


@dataclass(frozen=True)
class CacheEntry:
    timestamp: datetime
    data: Any
    raw_data: dict | None = None
