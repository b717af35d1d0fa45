"""WeatherAPI.com service (current and history).

API docs: https://www.weatherapi.com/docs/

Without a date we call ``/current.json``; with a date we call
``/history.json?unixdt=...`` and keep the hourly entry nearest to the
requested time. Error bodies look like
``{"error": {"code": 1006, "message": "No matching location found."}}``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from weather_cli.errors import NotFoundError, ParseError
from weather_cli.providers.base import RawResponse, WeatherService
from weather_cli.providers.registry import ProviderId
from weather_cli.schemas import DistanceUnit, Observation, SpeedUnit, TemperatureUnit

if TYPE_CHECKING:
    import requests

    from weather_cli.schemas import WeatherQuery
    from weather_cli.store import ProviderConfig

#: WeatherAPI returns HTTP 400 with this code for an unknown location
LOCATION_NOT_FOUND_CODE = 1006


class _Location(BaseModel):
    name: str
    region: str = ""
    country: str = ""
    lat: float | None = None
    lon: float | None = None


class _Condition(BaseModel):
    text: str = ""


class _Reading(BaseModel):
    temp_c: float
    condition: _Condition = _Condition()
    wind_kph: float | None = None
    pressure_mb: float | None = None
    humidity: float | None = None
    vis_km: float | None = None


class _Current(_Reading):
    last_updated_epoch: int | None = None


class _Hour(_Reading):
    time_epoch: int | None = None


class _ForecastDay(BaseModel):
    hour: list[_Hour]


class _Forecast(BaseModel):
    forecastday: list[_ForecastDay]


class CurrentPayload(BaseModel):
    location: _Location
    current: _Current


class HistoryPayload(BaseModel):
    location: _Location
    forecast: _Forecast


class WeatherApiService(WeatherService):
    provider = ProviderId.WEATHER_API

    def build_request(
        self, query: WeatherQuery, config: ProviderConfig
    ) -> tuple[str, dict[str, str]]:
        base = config.url.rstrip("/")
        params = self.base_params(query, config)
        if query.date is None:
            return f"{base}/current.json", params
        params["unixdt"] = str(int(query.date.timestamp()))
        return f"{base}/history.json", params

    def raise_for_status(self, resp: requests.Response, query: WeatherQuery) -> None:
        if resp.status_code == 400 and _error_code(resp) == LOCATION_NOT_FOUND_CODE:
            raise NotFoundError(self.name(), query.address, resp.status_code)
        super().raise_for_status(resp, query)

    def error_detail(self, resp: requests.Response) -> str:
        error = _error_body(resp)
        if isinstance(error.get("message"), str):
            return error["message"]
        return resp.reason or ""

    @classmethod
    def parse(cls, raw: RawResponse) -> Observation:
        if raw.query.date is None:
            data = cls.validate(CurrentPayload, raw.payload)
            return cls._observation(data.location, data.current, data.current.last_updated_epoch)

        history = cls.validate(HistoryPayload, raw.payload)
        hours = [hour for day in history.forecast.forecastday for hour in day.hour]
        if not hours:
            raise ParseError(cls.name(), "forecast.forecastday.hour", "is empty")
        target = int(raw.query.date.timestamp())
        nearest = min(hours, key=lambda h: abs((h.time_epoch or 0) - target))
        return cls._observation(history.location, nearest, nearest.time_epoch, historical=True)

    @classmethod
    def _observation(
        cls,
        location: _Location,
        reading: _Reading,
        epoch: int | None,
        *,
        historical: bool = False,
    ) -> Observation:
        region = ", ".join(part for part in (location.region, location.country) if part)
        return Observation(
            provider=cls.provider,
            location=location.name,
            region=region or None,
            latitude=location.lat,
            longitude=location.lon,
            temperature=reading.temp_c,
            temperature_unit=TemperatureUnit.CELSIUS,
            description=reading.condition.text,
            humidity=reading.humidity,
            pressure_hpa=reading.pressure_mb,
            wind_speed=reading.wind_kph,
            wind_unit=SpeedUnit.KILOMETERS_PER_HOUR,
            visibility=reading.vis_km,
            visibility_unit=DistanceUnit.KILOMETERS,
            observed_at=datetime.fromtimestamp(epoch, tz=UTC) if epoch is not None else None,
            historical=historical,
        )


def _error_body(resp: requests.Response) -> dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return {}
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"]
    return {}


def _error_code(resp: requests.Response) -> int | None:
    code = _error_body(resp).get("code")
    return code if isinstance(code, int) else None
