"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

from tripweather.config.defaults import (
    DEFAULT_USER_AGENT,
    OPENWEATHER_BASE_URL,
    OPENWEATHER_ICON_BASE_URL,
)


class StorageBackend(StrEnum):
    SQLITE = "sqlite"
    MEMORY = "memory"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = OPENWEATHER_BASE_URL
    icon_base_url: str = OPENWEATHER_ICON_BASE_URL
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    user_agent: str = DEFAULT_USER_AGENT


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    ttl_minutes: int = Field(default=30, ge=1)
    storage: StorageBackend = StorageBackend.SQLITE
    db_path: str = "data/session.db"


class RetryConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_attempts: int = Field(default=3, ge=1)
    base_delay_ms: int = Field(default=1000, ge=0)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_days: int = Field(default=5, ge=1, le=5)
    geocode_limit: int = Field(default=3, ge=1, le=5)


class WeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    cache: CacheConfig = CacheConfig()
    retry: RetryConfig = RetryConfig()
    forecast: ForecastConfig = ForecastConfig()
