"""Output formatters for fetch results."""

import json
from dataclasses import asdict
from typing import Any

from tripweather.models.result import CombinedWeather, Err, Ok
from tripweather.models.weather import DailyForecastSummary


def result_to_dict(result: Ok | Err | None) -> dict | None:
    """Plain-dict view of a result; errors keep the ``{"error": ...}`` shape."""
    if result is None:
        return None
    if isinstance(result, Err):
        return {"error": result.message, "kind": result.kind.value}
    return {
        "data": _jsonable(result.value),
        "stale": result.stale,
        "from_cache": result.from_cache,
    }


def combined_to_dict(combined: CombinedWeather) -> dict:
    data: dict[str, Any] = {
        "current": result_to_dict(combined.current),
        "forecast": result_to_dict(combined.forecast),
        "error": combined.error,
    }
    if combined.alternatives:
        data["alternatives"] = [asdict(c) for c in combined.alternatives]
    return data


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2)


def format_forecast_text(days: list[DailyForecastSummary]) -> str:
    """One line per day, e.g. ``Mon 2026-10-19  15/10C  50%  11 km/h  light rain``."""
    if not days:
        return "No forecast data available."
    return "\n".join(
        f"{d.weekday} {d.date}  {d.high}/{d.low}C  {d.precipitation:>3}%  "
        f"{d.wind:>3} km/h  {d.description}"
        for d in days
    )


def _jsonable(value: Any) -> Any:
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, DailyForecastSummary):
        return value.to_dict()
    return value
