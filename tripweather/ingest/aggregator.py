"""Forecast aggregation: 3-hour samples bucketed into daily summaries."""

import logging
import math
from collections import Counter
from datetime import UTC, datetime

from pydantic import ValidationError

from tripweather.models.payloads import ForecastSample
from tripweather.models.weather import DailyForecastSummary

logger = logging.getLogger(__name__)

MAX_DAYS = 5
MS_TO_KMH = 3.6


def aggregate_daily(payload: dict | None, max_days: int = MAX_DAYS) -> list[DailyForecastSummary]:
    """Summarize a forecast payload into one record per UTC calendar day.

    Days are emitted in the order they first appear in ``payload["list"]``,
    not sorted, and truncated to the first ``max_days``.
    """
    samples = payload.get("list") if isinstance(payload, dict) else None
    if not isinstance(samples, list):
        logger.error("Invalid forecast data structure: %r", payload)
        return []

    days: dict[str, list[ForecastSample]] = {}
    for raw in samples:
        try:
            sample = ForecastSample.model_validate(raw)
        except ValidationError as e:
            logger.warning("Skipping malformed forecast sample: %s", e)
            continue
        try:
            day = datetime.fromtimestamp(sample.dt, tz=UTC).date().isoformat()
        except (OverflowError, OSError, ValueError) as e:
            logger.warning("Skipping forecast sample with bad dt %r: %s", sample.dt, e)
            continue
        days.setdefault(day, []).append(sample)

    return [_summarize(day, bucket) for day, bucket in days.items()][:max_days]


def _summarize(day: str, samples: list[ForecastSample]) -> DailyForecastSummary:
    temps = [s.main.temp for s in samples]
    pops = [s.pop or 0.0 for s in samples]
    winds = [s.wind.speed for s in samples]

    return DailyForecastSummary(
        date=day,
        weekday=datetime.fromisoformat(day).strftime("%a"),
        high=math.ceil(max(temps)),
        low=round_half_up(min(temps)),
        precipitation=round_half_up(max(pops) * 100),
        icon=_most_common(s.weather[0].icon for s in samples),
        description=_most_common(s.weather[0].description for s in samples),
        wind=round_half_up(sum(winds) / len(winds) * MS_TO_KMH),
    )


def _most_common(values) -> str:
    # Counter keeps insertion order, so ties go to the first value seen
    return Counter(values).most_common(1)[0][0]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
