"""OpenWeatherMap API client with HTTP status classification."""

import logging
from typing import Any

import httpx

from tripweather.config.defaults import (
    DEFAULT_USER_AGENT,
    OPENWEATHER_BASE_URL,
)
from tripweather.models.result import ErrorKind

logger = logging.getLogger(__name__)

CURRENT_PATH = "/data/2.5/weather"
FORECAST_PATH = "/data/2.5/forecast"
GEOCODE_PATH = "/geo/1.0/direct"


class WeatherApiError(Exception):
    """Raised when a weather request fails; kind says how."""

    def __init__(self, kind: ErrorKind, message: str, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code


class OpenWeatherClient:
    """Async wrapper around the OpenWeatherMap REST API.

    The underlying httpx.AsyncClient may be injected and shared; a client
    created here is owned and closed by ``aclose``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        http: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            timeout=timeout, headers={"User-Agent": user_agent}
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def get_current(self, params: dict[str, Any], location_label: str) -> dict:
        """Fetch current conditions in metric units."""
        return await self._get(
            CURRENT_PATH, {**params, "units": "metric"}, location_label, "Weather"
        )

    async def get_forecast(self, params: dict[str, Any], location_label: str) -> dict:
        """Fetch the 5-day / 3-hour forecast in metric units."""
        return await self._get(
            FORECAST_PATH, {**params, "units": "metric"}, location_label, "Forecast"
        )

    async def geocode(self, name: str, limit: int = 3) -> list:
        """Resolve a place name to up to ``limit`` candidate locations."""
        return await self._get(GEOCODE_PATH, {"q": name, "limit": limit}, name, "Geocoding")

    async def _get(
        self, path: str, params: dict[str, Any], location_label: str, api_name: str
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = await self.http.get(url, params={**params, "appid": self.api_key})
        except httpx.RequestError as e:
            logger.error("%s API request failed for %s: %s", api_name, location_label, e)
            raise WeatherApiError(
                ErrorKind.UPSTREAM_ERROR, f"Weather API error: request failed: {e}"
            ) from e

        if not resp.is_success:
            message = _error_message(resp)
            logger.error("%s API error (%d): %s", api_name, resp.status_code, message)
            raise _classify(resp.status_code, message, location_label)

        try:
            return resp.json()
        except ValueError as e:
            logger.error("%s API returned invalid JSON for %s", api_name, location_label)
            raise WeatherApiError(
                ErrorKind.MALFORMED_UPSTREAM_PAYLOAD,
                f"Weather API returned invalid JSON: {e}",
                resp.status_code,
            ) from e


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason_phrase


def _classify(status_code: int, message: str, location_label: str) -> WeatherApiError:
    if status_code == 404:
        return WeatherApiError(
            ErrorKind.NOT_FOUND, f'Location "{location_label}" not found', status_code
        )
    if status_code == 401:
        return WeatherApiError(ErrorKind.UNAUTHORIZED, "Invalid API key", status_code)
    if status_code == 429:
        return WeatherApiError(
            ErrorKind.RATE_LIMITED, "API rate limit exceeded", status_code
        )
    return WeatherApiError(
        ErrorKind.UPSTREAM_ERROR, f"Weather API error: {message}", status_code
    )
