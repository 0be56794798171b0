"""Location coercion, cache-key normalization and request parameters.

Normalization is textual only: a place name and the coordinates of that
place produce different keys. The current-weather and forecast paths also
key coordinates differently (structural repr vs. "lat,lon").
"""

from collections.abc import Mapping
from typing import Any, TypeAlias

from tripweather.models.common import LocationKey
from tripweather.models.weather import Coordinates

Location: TypeAlias = str | Coordinates


def coerce_location(location: Any) -> Location | None:
    """Return a usable location, or None when it is missing or blank.

    Mappings with ``lat`` and ``lon`` become Coordinates.
    """
    if location is None:
        return None
    if isinstance(location, Coordinates):
        return location
    if isinstance(location, str):
        return location if location.strip() else None
    if isinstance(location, Mapping):
        lat, lon = location.get("lat"), location.get("lon")
        if lat is None or lon is None:
            return None
        try:
            return Coordinates(lat=float(lat), lon=float(lon))
        except (TypeError, ValueError):
            return None
    return None


def current_cache_key(location: Location) -> LocationKey:
    try:
        return location.lower().strip()  # type: ignore[union-attr]
    except AttributeError:
        return str(location)


def forecast_cache_key(location: Location) -> LocationKey:
    if isinstance(location, str):
        return location.lower().strip()
    return f"{location.lat},{location.lon}"


def query_params(location: Location) -> dict[str, Any]:
    """Coordinate query when lat/lon are present, else a name query."""
    if isinstance(location, Coordinates):
        return {"lat": location.lat, "lon": location.lon}
    return {"q": location.lower().strip()}


def describe_location(location: Location) -> str:
    if isinstance(location, Coordinates):
        return f"{location.lat},{location.lon}"
    return location


def parse_location_arg(text: str) -> Location:
    """Parse CLI input: "48.85,2.35" becomes Coordinates, anything else a name."""
    parts = text.split(",")
    if len(parts) == 2:
        try:
            return Coordinates(lat=float(parts[0]), lon=float(parts[1]))
        except ValueError:
            pass
    return text
