"""Tests for result formatters."""

import json

from tripweather.models.result import CombinedWeather, Err, ErrorKind, Ok
from tripweather.models.weather import DailyForecastSummary, NearbyCity
from tripweather.reporting.formatters import (
    combined_to_dict,
    format_forecast_text,
    format_json,
    result_to_dict,
)

DAY = DailyForecastSummary(
    date="2026-10-18", weekday="Sun", high=15, low=10, precipitation=50,
    icon="01d", description="clear sky", wind=11,
)


class TestResultToDict:
    def test_none(self):
        assert result_to_dict(None) is None

    def test_error_shape(self):
        err = Err(ErrorKind.NOT_FOUND, 'Location "X" not found')
        assert result_to_dict(err) == {"error": 'Location "X" not found', "kind": "NOT_FOUND"}

    def test_forecast_summaries(self):
        data = result_to_dict(Ok([DAY], stale=True, from_cache=True))
        assert data["stale"] is True
        assert data["data"][0]["day"] == "Sun"
        assert data["data"][0]["precipitation"] == 50


class TestCombinedToDict:
    def test_alternatives_included_when_present(self):
        combined = CombinedWeather(
            current=None,
            forecast=None,
            error="not found",
            alternatives=[NearbyCity("Springfield", "US", "Illinois", 39.8, -89.6)],
        )
        data = json.loads(format_json(combined_to_dict(combined)))
        assert data["alternatives"][0]["name"] == "Springfield"

    def test_no_alternatives_key_on_success(self):
        data = combined_to_dict(CombinedWeather(current=Ok({}), forecast=Ok([])))
        assert "alternatives" not in data
        assert data["error"] is None


class TestForecastText:
    def test_lines(self):
        text = format_forecast_text([DAY])
        assert text.startswith("Sun 2026-10-18  15/10C")
        assert "11 km/h" in text

    def test_empty(self):
        assert format_forecast_text([]) == "No forecast data available."
