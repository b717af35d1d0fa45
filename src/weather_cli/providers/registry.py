"""Provider descriptor registry.

Static table of every provider the tool knows about. The command line uses
kebab-case names (``open-weather``) while the config file uses PascalCase
(``OpenWeather``); this module is the only place that translates between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from weather_cli.errors import UnknownProviderError


class ProviderId(StrEnum):
    """Supported weather APIs. Values are the config-file identifiers."""

    OPEN_WEATHER = "OpenWeather"
    WEATHER_API = "WeatherApi"
    ACCU_WEATHER = "AccuWeather"
    AERIS_WEATHER = "AerisWeather"


@dataclass(frozen=True)
class ProviderInfo:
    """Identifying metadata for one provider."""

    id: ProviderId
    display_name: str
    cli_name: str
    default_url: str
    implemented: bool = False
    supports_history: bool = False
    api_version: str | None = None
    location_param: str = "q"
    key_param: str = "key"

    @property
    def config_name(self) -> str:
        return self.id.value

    @property
    def query_params(self) -> tuple[str, ...]:
        """Query parameters every request to this provider must carry."""
        return (self.location_param, self.key_param)


REGISTRY: dict[ProviderId, ProviderInfo] = {
    ProviderId.OPEN_WEATHER: ProviderInfo(
        id=ProviderId.OPEN_WEATHER,
        display_name="Open Weather",
        cli_name="open-weather",
        default_url="https://api.openweathermap.org/data/2.5/weather",
        implemented=True,
        supports_history=False,
        api_version="v2.5",
        key_param="appid",
    ),
    ProviderId.WEATHER_API: ProviderInfo(
        id=ProviderId.WEATHER_API,
        display_name="Weather API",
        cli_name="weather-api",
        default_url="https://api.weatherapi.com/v1",
        implemented=True,
        supports_history=True,
        api_version="v1",
    ),
    ProviderId.ACCU_WEATHER: ProviderInfo(
        id=ProviderId.ACCU_WEATHER,
        display_name="AccuWeather",
        cli_name="accu-weather",
        default_url="http://dataservice.accuweather.com/currentconditions/v1",
        key_param="apikey",
    ),
    ProviderId.AERIS_WEATHER: ProviderInfo(
        id=ProviderId.AERIS_WEATHER,
        display_name="Aeris Weather",
        cli_name="aeris-weather",
        default_url="https://api.aerisapi.com/conditions",
        key_param="client_secret",
    ),
}

_BY_CLI_NAME = {info.cli_name: pid for pid, info in REGISTRY.items()}
_BY_CONFIG_NAME = {info.config_name: pid for pid, info in REGISTRY.items()}


def describe(provider: ProviderId) -> ProviderInfo:
    """Return the descriptor for ``provider``."""
    return REGISTRY[provider]


def all_providers() -> list[ProviderInfo]:
    """All registered providers, in declaration order."""
    return [REGISTRY[pid] for pid in ProviderId]


def from_cli_name(name: str) -> ProviderId:
    """Resolve a kebab-case name (case-insensitive) such as ``open-weather``."""
    try:
        return _BY_CLI_NAME[name.strip().lower()]
    except KeyError:
        raise UnknownProviderError(name) from None


def from_config_name(name: str) -> ProviderId:
    """Resolve a PascalCase config key such as ``OpenWeather``."""
    try:
        return _BY_CONFIG_NAME[name]
    except KeyError:
        raise UnknownProviderError(name) from None


def parse_provider_name(name: str) -> ProviderId:
    """Resolve a user-supplied name written in either convention."""
    if name in _BY_CONFIG_NAME:
        return _BY_CONFIG_NAME[name]
    return from_cli_name(name)
