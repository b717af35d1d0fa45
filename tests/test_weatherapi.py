"""Tests for the WeatherAPI.com service."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest
import responses
from responses import matchers

from weather_cli.errors import AuthError, NotFoundError, ParseError, ProviderServerError
from weather_cli.providers.base import RawResponse
from weather_cli.providers.registry import ProviderId, describe
from weather_cli.providers.weatherapi import WeatherApiService
from weather_cli.schemas import DistanceUnit, SpeedUnit, WeatherQuery
from weather_cli.store import ProviderConfig

WEATHERAPI_URL = describe(ProviderId.WEATHER_API).default_url
CONFIG = ProviderConfig(url=WEATHERAPI_URL, api_key="wa-key")

HISTORY_DATE = datetime(2023, 10, 11, tzinfo=UTC)


def _raw(payload: dict[str, Any], date: datetime | None = None) -> RawResponse:
    return RawResponse(
        provider=ProviderId.WEATHER_API,
        query=WeatherQuery(address="London", date=date),
        payload=payload,
    )


class TestBuildRequest:
    """Endpoint selection and parameters."""

    def test_current(self) -> None:
        url, params = WeatherApiService().build_request(WeatherQuery(address="London"), CONFIG)
        assert url == f"{WEATHERAPI_URL}/current.json"
        assert params == {"q": "London", "key": "wa-key"}

    def test_history(self) -> None:
        query = WeatherQuery(address="London", date=HISTORY_DATE)
        url, params = WeatherApiService().build_request(query, CONFIG)
        assert url == f"{WEATHERAPI_URL}/history.json"
        assert params["unixdt"] == "1696982400"

    def test_trailing_slash_stripped(self) -> None:
        config = ProviderConfig(url="https://example.com/v1/", api_key="k")
        url, _ = WeatherApiService().build_request(WeatherQuery(address="Paris"), config)
        assert url == "https://example.com/v1/current.json"


class TestFetch:
    """HTTP round trip against a mocked endpoint."""

    @responses.activate
    def test_current(self, weatherapi_current_payload: dict[str, Any]) -> None:
        responses.add(
            responses.GET,
            f"{WEATHERAPI_URL}/current.json",
            json=weatherapi_current_payload,
            match=[matchers.query_param_matcher({"q": "London", "key": "wa-key"})],
        )
        raw = WeatherApiService().fetch(WeatherQuery(address="London"), CONFIG)
        assert raw.payload["location"]["name"] == "London"

    @responses.activate
    def test_history(self, weatherapi_history_payload: dict[str, Any]) -> None:
        responses.add(
            responses.GET,
            f"{WEATHERAPI_URL}/history.json",
            json=weatherapi_history_payload,
            match=[
                matchers.query_param_matcher(
                    {"q": "London", "key": "wa-key", "unixdt": "1696982400"}
                )
            ],
        )
        query = WeatherQuery(address="London", date=HISTORY_DATE)
        raw = WeatherApiService().fetch(query, CONFIG)
        assert "forecast" in raw.payload

    @pytest.mark.parametrize(
        ("status", "code", "message"),
        [(401, 2006, "API key is invalid."), (403, 2008, "API key has been disabled.")],
    )
    @responses.activate
    def test_auth_error(self, status: int, code: int, message: str) -> None:
        responses.add(
            responses.GET,
            f"{WEATHERAPI_URL}/current.json",
            json={"error": {"code": code, "message": message}},
            status=status,
        )
        with pytest.raises(AuthError) as exc_info:
            WeatherApiService().fetch(WeatherQuery(address="London"), CONFIG)
        assert message in str(exc_info.value)

    @responses.activate
    def test_unknown_location_is_not_found(self) -> None:
        responses.add(
            responses.GET,
            f"{WEATHERAPI_URL}/current.json",
            json={"error": {"code": 1006, "message": "No matching location found."}},
            status=400,
        )
        with pytest.raises(NotFoundError):
            WeatherApiService().fetch(WeatherQuery(address="Atlantis"), CONFIG)

    @responses.activate
    def test_404_is_not_found(self) -> None:
        responses.add(responses.GET, f"{WEATHERAPI_URL}/current.json", status=404)
        with pytest.raises(NotFoundError):
            WeatherApiService().fetch(WeatherQuery(address="Atlantis"), CONFIG)

    @responses.activate
    def test_other_400(self) -> None:
        responses.add(
            responses.GET,
            f"{WEATHERAPI_URL}/current.json",
            json={"error": {"code": 1003, "message": "Parameter q is missing."}},
            status=400,
        )
        with pytest.raises(ProviderServerError) as exc_info:
            WeatherApiService().fetch(WeatherQuery(address="London"), CONFIG)
        assert "Parameter q is missing." in str(exc_info.value)


class TestParse:
    """Payload -> Observation."""

    def test_current(self, weatherapi_current_payload: dict[str, Any]) -> None:
        obs = WeatherApiService.parse(_raw(weatherapi_current_payload))
        assert obs.location == "London"
        assert obs.region == "City of London, Greater London, United Kingdom"
        assert obs.temperature == 15.0
        assert obs.description == "Partly cloudy"
        assert obs.wind_speed == 18.0
        assert obs.wind_unit is SpeedUnit.KILOMETERS_PER_HOUR
        assert obs.visibility_unit is DistanceUnit.KILOMETERS
        assert obs.observed_at == datetime(2023, 10, 11, 12, 0, tzinfo=UTC)
        assert obs.historical is False

    def test_history_picks_nearest_hour(self, weatherapi_history_payload: dict[str, Any]) -> None:
        date = datetime(2023, 10, 11, 1, 10, tzinfo=UTC)
        obs = WeatherApiService.parse(_raw(weatherapi_history_payload, date=date))
        assert obs.temperature == 12.5
        assert obs.observed_at == datetime(2023, 10, 11, 1, 0, tzinfo=UTC)
        assert obs.historical is True

    def test_history_midnight(self, weatherapi_history_payload: dict[str, Any]) -> None:
        obs = WeatherApiService.parse(_raw(weatherapi_history_payload, date=HISTORY_DATE))
        assert obs.temperature == 11.0

    def test_history_without_hours(self, weatherapi_history_payload: dict[str, Any]) -> None:
        weatherapi_history_payload["forecast"]["forecastday"][0]["hour"] = []
        with pytest.raises(ParseError) as exc_info:
            WeatherApiService.parse(_raw(weatherapi_history_payload, date=HISTORY_DATE))
        assert "hour" in exc_info.value.field

    def test_current_payload_for_history_query(
        self, weatherapi_current_payload: dict[str, Any]
    ) -> None:
        with pytest.raises(ParseError) as exc_info:
            WeatherApiService.parse(_raw(weatherapi_current_payload, date=HISTORY_DATE))
        assert exc_info.value.field == "forecast"

    def test_missing_temperature(self, weatherapi_current_payload: dict[str, Any]) -> None:
        del weatherapi_current_payload["current"]["temp_c"]
        with pytest.raises(ParseError) as exc_info:
            WeatherApiService.parse(_raw(weatherapi_current_payload))
        assert exc_info.value.field == "current.temp_c"

    def test_missing_location(self, weatherapi_current_payload: dict[str, Any]) -> None:
        del weatherapi_current_payload["location"]
        with pytest.raises(ParseError) as exc_info:
            WeatherApiService.parse(_raw(weatherapi_current_payload))
        assert exc_info.value.field == "location"
