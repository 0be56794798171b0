"""Weather service: the public entry point composing fetchers and cache."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from tripweather.config.defaults import MIN_API_KEY_LENGTH, OPENWEATHER_ICON_BASE_URL
from tripweather.config.schema import StorageBackend, WeatherConfig
from tripweather.ingest.alternates import find_nearby_cities
from tripweather.ingest.current_fetcher import CurrentWeatherFetcher
from tripweather.ingest.forecast_fetcher import ForecastFetcher
from tripweather.ingest.location import coerce_location
from tripweather.ingest.openweather_client import OpenWeatherClient
from tripweather.models.common import utc_now
from tripweather.models.result import CombinedWeather, Err, ErrorKind, Ok
from tripweather.models.weather import DailyForecastSummary, NearbyCity
from tripweather.storage.cache_store import CacheStore
from tripweather.storage.session_storage import (
    MemorySessionStorage,
    SessionStorage,
    SqliteSessionStorage,
)

logger = logging.getLogger(__name__)


def get_weather_icon_url(icon_code: str, base_url: str = OPENWEATHER_ICON_BASE_URL) -> str:
    return f"{base_url}/{icon_code}@2x.png"


def is_api_key_valid(api_key: str | None) -> bool:
    """Presence and length sanity check; says nothing about whether the key works."""
    return bool(api_key) and len(api_key) > MIN_API_KEY_LENGTH


def open_session_storage(config: WeatherConfig) -> SessionStorage:
    if config.cache.storage == StorageBackend.SQLITE:
        return SqliteSessionStorage.open(config.cache.db_path)
    return MemorySessionStorage()


class WeatherService:
    """Current weather, forecasts and alternates for a single session.

    One CacheStore and one OpenWeatherClient are shared by both fetchers.
    Use as an async context manager, or call ``aclose`` when done.
    """

    def __init__(
        self,
        config: WeatherConfig,
        cache: CacheStore,
        client: OpenWeatherClient | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self.cache = cache
        self.client = client or OpenWeatherClient(
            api_key=config.api.api_key,
            base_url=config.api.base_url,
            timeout=config.api.timeout_seconds,
            user_agent=config.api.user_agent,
        )
        fetcher_args = dict(
            ttl_minutes=config.cache.ttl_minutes,
            max_attempts=config.retry.max_attempts,
            base_delay=config.retry.base_delay_ms / 1000,
            clock=clock,
        )
        self.current = CurrentWeatherFetcher(self.client, cache, **fetcher_args)
        self.forecast = ForecastFetcher(
            self.client, cache, max_days=config.forecast.max_days, **fetcher_args
        )

    @classmethod
    def from_config(cls, config: WeatherConfig) -> "WeatherService":
        """Bootstrap a service with the session storage the config selects."""
        return cls(config, CacheStore(open_session_storage(config)))

    async def __aenter__(self) -> "WeatherService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()
        if isinstance(self.cache.storage, SqliteSessionStorage):
            self.cache.storage.close()

    async def get_current_weather(
        self, location: Any, use_retry: bool = True
    ) -> Ok[dict] | Err | None:
        return await self.current.fetch(location, use_retry)

    async def get_weather_forecast(
        self, location: Any, use_retry: bool = True
    ) -> Ok[list[DailyForecastSummary]] | Err | None:
        return await self.forecast.fetch(location, use_retry)

    async def find_nearby_cities(self, name: str) -> list[NearbyCity] | None:
        return await find_nearby_cities(
            self.client, name, self.config.forecast.geocode_limit
        )

    async def get_weather_data(self, location: Any) -> CombinedWeather:
        """Fetch current conditions and forecast concurrently.

        If both fail and the current-weather failure is NOT_FOUND, geocoding
        candidates are offered as alternatives. When both fail otherwise only
        the current-weather message is reported. A single failure is passed
        through in its own field with ``error`` left as None.
        """
        current, forecast = await asyncio.gather(
            self.get_current_weather(location),
            self.get_weather_forecast(location),
        )

        if isinstance(current, Err) and isinstance(forecast, Err):
            loc = coerce_location(location)
            if current.kind == ErrorKind.NOT_FOUND and isinstance(loc, str):
                alternatives = await self.find_nearby_cities(loc)
                if alternatives:
                    return CombinedWeather(
                        current=None,
                        forecast=None,
                        error=f'Location "{loc}" not found. Did you mean one of these?',
                        alternatives=alternatives,
                    )
            return CombinedWeather(current=None, forecast=None, error=current.message)

        return CombinedWeather(current=current, forecast=forecast)

    def get_weather_icon_url(self, icon_code: str) -> str:
        return get_weather_icon_url(icon_code, self.config.api.icon_base_url)

    def is_api_key_valid(self) -> bool:
        return is_api_key_valid(self.config.api.api_key)
