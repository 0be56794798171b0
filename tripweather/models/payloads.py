"""Pydantic schemas for OpenWeatherMap response bodies.

Only the fields this package reads are declared; everything else the API
returns is kept (``extra="allow"``) so cached bodies round-trip unchanged.
NaN and Infinity are rejected in every float field.
"""

from pydantic import BaseModel, Field


class _Payload(BaseModel):
    model_config = {"extra": "allow", "allow_inf_nan": False}


class MainBlock(_Payload):
    temp: float


class ConditionBlock(_Payload):
    icon: str
    description: str


class WindBlock(_Payload):
    speed: float


class CurrentWeatherPayload(_Payload):
    main: MainBlock
    weather: list[ConditionBlock] = Field(min_length=1)
    wind: WindBlock


class ForecastSample(_Payload):
    dt: int
    main: MainBlock
    pop: float | None = None
    weather: list[ConditionBlock] = Field(min_length=1)
    wind: WindBlock


class GeocodeCandidate(_Payload):
    name: str
    country: str = ""
    state: str | None = None
    lat: float
    lon: float
