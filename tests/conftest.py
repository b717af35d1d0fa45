"""Shared fixtures: provider payloads and an isolated config store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from weather_cli.config import get_settings
from weather_cli.providers.registry import ProviderId
from weather_cli.store import ConfigStore

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point the config directory at a temp dir and reset cached settings."""
    monkeypatch.setenv("WEATHER_CLI_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("WEATHER_CLI_DEBUG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    return ConfigStore(tmp_path / "config")


@pytest.fixture
def configured_store(store: ConfigStore) -> ConfigStore:
    """Both implemented providers configured, OpenWeather selected."""
    store.configure(ProviderId.OPEN_WEATHER, "ow-key")
    store.configure(ProviderId.WEATHER_API, "wa-key")
    store.select(ProviderId.OPEN_WEATHER)
    return store


@pytest.fixture
def openweather_payload() -> dict[str, Any]:
    """Trimmed /data/2.5/weather response for London (units=metric)."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds"}],
        "main": {"temp": 14.2, "feels_like": 13.6, "pressure": 1012, "humidity": 72},
        "visibility": 10000,
        "wind": {"speed": 4.63, "deg": 240},
        "dt": 1697025600,
        "sys": {"country": "GB"},
        "name": "London",
        "cod": 200,
    }


def _weatherapi_reading(temp_c: float, epoch_key: str, epoch: int) -> dict[str, Any]:
    return {
        epoch_key: epoch,
        "temp_c": temp_c,
        "temp_f": temp_c * 9 / 5 + 32,
        "condition": {"text": "Partly cloudy", "code": 1003},
        "wind_kph": 18.0,
        "pressure_mb": 1015.0,
        "humidity": 67,
        "vis_km": 10.0,
    }


@pytest.fixture
def weatherapi_location() -> dict[str, Any]:
    return {
        "name": "London",
        "region": "City of London, Greater London",
        "country": "United Kingdom",
        "lat": 51.52,
        "lon": -0.11,
    }


@pytest.fixture
def weatherapi_current_payload(weatherapi_location: dict[str, Any]) -> dict[str, Any]:
    """Trimmed /v1/current.json response."""
    return {
        "location": weatherapi_location,
        "current": _weatherapi_reading(15.0, "last_updated_epoch", 1697025600),
    }


@pytest.fixture
def weatherapi_history_payload(weatherapi_location: dict[str, Any]) -> dict[str, Any]:
    """Trimmed /v1/history.json response for 2023-10-11 (three hourly entries)."""
    midnight = 1696982400  # 2023-10-11T00:00:00Z
    hours = [
        _weatherapi_reading(11.0, "time_epoch", midnight),
        _weatherapi_reading(12.5, "time_epoch", midnight + 3600),
        _weatherapi_reading(13.0, "time_epoch", midnight + 7200),
    ]
    return {
        "location": weatherapi_location,
        "forecast": {"forecastday": [{"date": "2023-10-11", "hour": hours}]},
    }
