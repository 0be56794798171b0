"""Tests for retry_with_backoff with patched sleeps."""

import asyncio
from unittest.mock import AsyncMock, call, patch

import pytest

from tripweather.ingest.openweather_client import WeatherApiError
from tripweather.ingest.retry import retry_with_backoff
from tripweather.models.result import ErrorKind


class Flaky:
    """Fails a fixed number of times, then returns a value."""

    def __init__(self, failures: int, error: Exception | None = None):
        self.failures = failures
        self.error = error or RuntimeError("boom")
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return f"ok on attempt {self.calls}"


class TestRetryWithBackoff:
    def test_first_attempt_success_does_not_sleep(self):
        op = Flaky(failures=0)
        with patch("tripweather.ingest.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            result = asyncio.run(retry_with_backoff(op))
        assert result == "ok on attempt 1"
        sleep.assert_not_awaited()

    def test_backoff_doubles_between_attempts(self):
        op = Flaky(failures=2)
        with patch("tripweather.ingest.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            result = asyncio.run(retry_with_backoff(op, max_attempts=3, base_delay=1.0))
        assert result == "ok on attempt 3"
        assert op.calls == 3
        assert sleep.await_args_list == [call(1.0), call(2.0)]

    def test_exhausted_reraises_last_error_with_kind(self):
        error = WeatherApiError(ErrorKind.RATE_LIMITED, "API rate limit exceeded", 429)
        op = Flaky(failures=5, error=error)
        with patch("tripweather.ingest.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            with pytest.raises(WeatherApiError) as exc_info:
                asyncio.run(retry_with_backoff(op, max_attempts=3, base_delay=0.5))
        assert exc_info.value.kind == ErrorKind.RATE_LIMITED
        assert exc_info.value.status_code == 429
        assert op.calls == 3
        # no sleep after the final attempt
        assert sleep.await_args_list == [call(0.5), call(1.0)]

    def test_single_attempt(self):
        op = Flaky(failures=1)
        with patch("tripweather.ingest.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            with pytest.raises(RuntimeError, match="boom"):
                asyncio.run(retry_with_backoff(op, max_attempts=1))
        sleep.assert_not_awaited()

    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError):
            asyncio.run(retry_with_backoff(Flaky(failures=0), max_attempts=0))

    def test_real_sleep_is_awaited(self):
        op = Flaky(failures=1)
        result = asyncio.run(retry_with_backoff(op, max_attempts=2, base_delay=0.001))
        assert result == "ok on attempt 2"
