"""Shared test fixtures."""

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import yaml

from tripweather.config.schema import WeatherConfig
from tripweather.storage.cache_store import CacheStore
from tripweather.storage.session_storage import MemorySessionStorage

TEST_BASE_URL = "https://test-owm.example.com"
TEST_API_KEY = "test-key-0123456789"


class FakeClock:
    """Manually advanced clock for cache freshness tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 10, 18, 9, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now += timedelta(minutes=minutes)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> MemorySessionStorage:
    return MemorySessionStorage()


@pytest.fixture
def cache(storage: MemorySessionStorage) -> CacheStore:
    return CacheStore(storage)


@pytest.fixture
def config() -> WeatherConfig:
    """Config pointed at the test host with fast, memory-only settings."""
    return WeatherConfig(
        api={"api_key": TEST_API_KEY, "base_url": TEST_BASE_URL},
        cache={"storage": "memory"},
        retry={"max_attempts": 3, "base_delay_ms": 10},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"api_key": TEST_API_KEY, "base_url": TEST_BASE_URL},
        "cache": {"ttl_minutes": 15, "db_path": str(tmp_path / "session.db")},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


def load_fixture(name: str):
    with open(Path(__file__).parent / "fixtures" / name) as f:
        return json.load(f)


@pytest.fixture
def current_paris() -> dict:
    return load_fixture("owm_current_paris.json")


@pytest.fixture
def forecast_paris() -> dict:
    return load_fixture("owm_forecast_paris.json")


@pytest.fixture
def geocode_candidates() -> list:
    return load_fixture("owm_geocode_springfield.json")
