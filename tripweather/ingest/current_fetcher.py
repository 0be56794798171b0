"""Current-conditions fetcher backed by the "current" cache namespace."""

from pydantic import ValidationError

from tripweather.ingest.cached_fetcher import CachedFetcher
from tripweather.ingest.location import (
    Location,
    current_cache_key,
    describe_location,
    query_params,
)
from tripweather.ingest.openweather_client import WeatherApiError
from tripweather.models.common import LocationKey, Namespace
from tripweather.models.payloads import CurrentWeatherPayload
from tripweather.models.result import ErrorKind


class CurrentWeatherFetcher(CachedFetcher[dict]):
    namespace = Namespace.CURRENT
    label = "current weather"

    def cache_key(self, location: Location) -> LocationKey:
        return current_cache_key(location)

    async def request(self, location: Location) -> tuple[dict, None]:
        body = await self.client.get_current(
            query_params(location), describe_location(location)
        )
        try:
            CurrentWeatherPayload.model_validate(body)
        except ValidationError as e:
            raise WeatherApiError(
                ErrorKind.MALFORMED_UPSTREAM_PAYLOAD,
                f"Unexpected current weather payload: {e.error_count()} invalid field(s)",
            ) from e
        return body, None
