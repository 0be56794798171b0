"""Alternate-location lookup used when a place name cannot be resolved."""

import logging

from pydantic import ValidationError

from tripweather.ingest.openweather_client import OpenWeatherClient, WeatherApiError
from tripweather.models.payloads import GeocodeCandidate
from tripweather.models.weather import NearbyCity

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 3


async def find_nearby_cities(
    client: OpenWeatherClient, name: str, limit: int = DEFAULT_LIMIT
) -> list[NearbyCity] | None:
    """Geocode ``name`` and return up to ``limit`` candidates.

    Returns None on any failure or when nothing matches; never raises.
    """
    try:
        data = await client.geocode(name, limit)
    except WeatherApiError as e:
        logger.error("Error finding nearby cities for %s: %s", name, e)
        return None

    if not isinstance(data, list):
        logger.error("Unexpected geocoding payload for %s: %r", name, data)
        return None

    cities = []
    for raw in data[:limit]:
        try:
            candidate = GeocodeCandidate.model_validate(raw)
        except ValidationError as e:
            logger.warning("Skipping malformed geocoding candidate: %s", e)
            continue
        cities.append(
            NearbyCity(
                name=candidate.name,
                country=candidate.country,
                state=candidate.state,
                lat=candidate.lat,
                lon=candidate.lon,
            )
        )
    return cities or None
