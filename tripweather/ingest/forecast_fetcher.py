"""Forecast fetcher: retrieves, aggregates and caches daily forecasts."""

from tripweather.ingest.aggregator import MAX_DAYS, aggregate_daily
from tripweather.ingest.cached_fetcher import CachedFetcher
from tripweather.ingest.location import (
    Location,
    describe_location,
    forecast_cache_key,
    query_params,
)
from tripweather.models.common import LocationKey, Namespace
from tripweather.models.weather import DailyForecastSummary


class ForecastFetcher(CachedFetcher[list[DailyForecastSummary]]):
    namespace = Namespace.FORECAST
    label = "forecast"

    def __init__(self, *args, max_days: int = MAX_DAYS, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_days = max_days

    def cache_key(self, location: Location) -> LocationKey:
        return forecast_cache_key(location)

    async def request(self, location: Location) -> tuple[list[DailyForecastSummary], dict]:
        raw = await self.client.get_forecast(
            query_params(location), describe_location(location)
        )
        return aggregate_daily(raw, self.max_days), raw

    def encode(self, value: list[DailyForecastSummary]) -> list[dict]:
        return [day.to_dict() for day in value]

    def decode(self, data: list[dict]) -> list[DailyForecastSummary]:
        return [DailyForecastSummary.from_dict(d) for d in data]
