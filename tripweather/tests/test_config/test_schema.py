"""Tests for config schema defaults and validation."""

import pytest
from pydantic import ValidationError

from tripweather.config.schema import (
    ApiConfig,
    CacheConfig,
    ForecastConfig,
    RetryConfig,
    StorageBackend,
    WeatherConfig,
)


class TestDefaults:
    def test_cache_defaults(self):
        c = CacheConfig()
        assert c.ttl_minutes == 30
        assert c.storage == StorageBackend.SQLITE

    def test_retry_defaults(self):
        r = RetryConfig()
        assert r.max_attempts == 3
        assert r.base_delay_ms == 1000

    def test_forecast_defaults(self):
        f = ForecastConfig()
        assert f.max_days == 5
        assert f.geocode_limit == 3

    def test_api_defaults(self):
        a = ApiConfig()
        assert a.api_key == ""
        assert a.base_url == "https://api.openweathermap.org"
        assert a.timeout_seconds == 10.0


class TestValidation:
    def test_extra_forbidden(self):
        with pytest.raises(ValidationError):
            WeatherConfig(cache={"ttl": 5})

    def test_ttl_positive(self):
        with pytest.raises(ValidationError):
            CacheConfig(ttl_minutes=0)

    def test_max_days_capped(self):
        with pytest.raises(ValidationError):
            ForecastConfig(max_days=7)

    def test_storage_from_string(self):
        assert CacheConfig(storage="memory").storage == StorageBackend.MEMORY

    def test_unknown_storage(self):
        with pytest.raises(ValidationError):
            CacheConfig(storage="redis")
