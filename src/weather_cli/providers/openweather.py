"""OpenWeather current-weather service.

API docs: https://openweathermap.org/current

The ``/data/2.5/weather`` endpoint only serves current conditions, so a
query with a date fails with ``UnsupportedDateError`` before any request.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from weather_cli.providers.base import RawResponse, WeatherService
from weather_cli.providers.registry import ProviderId
from weather_cli.schemas import DistanceUnit, Observation, SpeedUnit, TemperatureUnit

if TYPE_CHECKING:
    from weather_cli.schemas import WeatherQuery
    from weather_cli.store import ProviderConfig


class _Main(BaseModel):
    temp: float
    humidity: float | None = None
    pressure: float | None = None


class _Condition(BaseModel):
    description: str = ""


class _Wind(BaseModel):
    speed: float | None = None


class _Coord(BaseModel):
    lat: float
    lon: float


class _Sys(BaseModel):
    country: str | None = None


class OpenWeatherPayload(BaseModel):
    """Fields we read from a current-weather response."""

    name: str
    main: _Main
    weather: list[_Condition] = Field(default_factory=list)
    wind: _Wind | None = None
    visibility: float | None = None
    coord: _Coord | None = None
    sys: _Sys | None = None
    dt: int | None = None


class OpenWeatherService(WeatherService):
    provider = ProviderId.OPEN_WEATHER

    def build_request(
        self, query: WeatherQuery, config: ProviderConfig
    ) -> tuple[str, dict[str, str]]:
        params = self.base_params(query, config)
        params["units"] = "metric"
        return config.url.rstrip("/"), params

    @classmethod
    def parse(cls, raw: RawResponse) -> Observation:
        data = cls.validate(OpenWeatherPayload, raw.payload)

        return Observation(
            provider=cls.provider,
            location=data.name,
            region=data.sys.country if data.sys else None,
            latitude=data.coord.lat if data.coord else None,
            longitude=data.coord.lon if data.coord else None,
            temperature=data.main.temp,
            temperature_unit=TemperatureUnit.CELSIUS,  # units=metric
            description=data.weather[0].description if data.weather else "",
            humidity=data.main.humidity,
            pressure_hpa=data.main.pressure,
            wind_speed=data.wind.speed if data.wind else None,
            wind_unit=SpeedUnit.METERS_PER_SECOND,
            visibility=data.visibility,
            visibility_unit=DistanceUnit.METERS,
            observed_at=datetime.fromtimestamp(data.dt, tz=UTC) if data.dt is not None else None,
        )
