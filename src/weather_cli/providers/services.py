"""Service lookup for implemented providers."""

from __future__ import annotations

from weather_cli.errors import ProviderNotImplementedError
from weather_cli.providers.base import WeatherService
from weather_cli.providers.openweather import OpenWeatherService
from weather_cli.providers.registry import ProviderId, describe
from weather_cli.providers.weatherapi import WeatherApiService

SERVICES: dict[ProviderId, type[WeatherService]] = {
    ProviderId.OPEN_WEATHER: OpenWeatherService,
    ProviderId.WEATHER_API: WeatherApiService,
}


def get_service(provider: ProviderId) -> type[WeatherService]:
    """Return the service class for ``provider``.

    Raises:
        ProviderNotImplementedError: The provider is registered but has no service.
    """
    try:
        return SERVICES[provider]
    except KeyError:
        raise ProviderNotImplementedError(describe(provider).cli_name) from None
