"""Normalization: provider response -> canonical ``WeatherReport``.

Every report uses the same units regardless of provider: Celsius, m/s, hPa,
metres and percent. Condition text passes through unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from weather_cli.errors import ParseError
from weather_cli.providers.registry import describe
from weather_cli.providers.services import get_service
from weather_cli.schemas import DistanceUnit, SpeedUnit, TemperatureUnit, WeatherReport

if TYPE_CHECKING:
    from weather_cli.providers.base import RawResponse
    from weather_cli.providers.registry import ProviderId
    from weather_cli.schemas import Observation

# =============================================================================
# Unit conversions
# =============================================================================


def k_to_c(kelvin: float) -> float:
    """Convert Kelvin to Celsius."""
    return kelvin - 273.15


def f_to_c(fahrenheit: float) -> float:
    """Convert Fahrenheit to Celsius."""
    return (fahrenheit - 32) * 5 / 9


def kmh_to_ms(kmh: float) -> float:
    """Convert km/h to m/s."""
    return kmh / 3.6


def mph_to_ms(mph: float) -> float:
    """Convert miles per hour to m/s."""
    return mph * 0.44704


def to_celsius(value: float, unit: TemperatureUnit) -> float:
    if unit is TemperatureUnit.KELVIN:
        return k_to_c(value)
    if unit is TemperatureUnit.FAHRENHEIT:
        return f_to_c(value)
    return value


def to_meters_per_second(value: float, unit: SpeedUnit) -> float:
    if unit is SpeedUnit.KILOMETERS_PER_HOUR:
        return kmh_to_ms(value)
    if unit is SpeedUnit.MILES_PER_HOUR:
        return mph_to_ms(value)
    return value


def to_meters(value: float, unit: DistanceUnit) -> float:
    if unit is DistanceUnit.KILOMETERS:
        return value * 1000
    if unit is DistanceUnit.MILES:
        return value * 1609.344
    return value


# =============================================================================
# Normalization
# =============================================================================


def normalize(provider: ProviderId, raw: RawResponse) -> WeatherReport:
    """
    Parse ``raw`` with the provider's parser and build the canonical report.

    Raises:
        ParseError: The payload is missing required fields.
        ProviderNotImplementedError: ``provider`` has no parser.
    """
    if raw.provider is not provider:
        msg = f"Response from {raw.provider} cannot be normalized as {provider}"
        raise ValueError(msg)
    observation = get_service(provider).parse(raw)
    return to_report(observation)


def to_report(obs: Observation) -> WeatherReport:
    """Convert an ``Observation`` to canonical units."""
    name = describe(obs.provider).cli_name

    # Required: a report without these is never shown
    if obs.location is None or not obs.location.strip():
        raise ParseError(name, "location")
    if obs.temperature is None:
        raise ParseError(name, "temperature")

    wind = obs.wind_speed
    visibility = obs.visibility
    return WeatherReport(
        provider=name,
        location=obs.location.strip(),
        region=obs.region or None,
        latitude=obs.latitude,
        longitude=obs.longitude,
        temperature_c=to_celsius(obs.temperature, obs.temperature_unit),
        description=obs.description,
        humidity_pct=obs.humidity,
        pressure_hpa=obs.pressure_hpa,
        wind_speed_ms=to_meters_per_second(wind, obs.wind_unit) if wind is not None else None,
        visibility_m=to_meters(visibility, obs.visibility_unit) if visibility is not None else None,
        observed_at=obs.observed_at,
        historical=obs.historical,
    )
