"""
Domain models for weather-cli.

Pydantic models for queries, provider observations and the canonical report.
Provider parsers produce an ``Observation`` tagged with the provider's own
units; the normalization layer turns it into a ``WeatherReport``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from dateutil import parser as dtparse
from pydantic import BaseModel, Field

from weather_cli.errors import InvalidDateError, WeatherError
from weather_cli.providers.registry import ProviderId

# =============================================================================
# Query
# =============================================================================


class WeatherQuery(BaseModel):
    """A single lookup: where, and optionally when."""

    model_config = {"str_strip_whitespace": True, "frozen": True}

    address: str = Field(..., min_length=1, description="Free-form location string")
    date: datetime | None = Field(default=None, description="Requested time (UTC); None = now")

    @classmethod
    def from_cli(cls, address: str, date: str | None = None) -> WeatherQuery:
        """Build a query from raw command-line strings."""
        if not address or not address.strip():
            raise WeatherError("Address must not be empty")
        return cls(address=address, date=parse_date(date) if date else None)


def parse_date(value: str) -> datetime:
    """
    Parse a user-supplied date leniently.

    Accepts ``2023-10-11``, ``10/11/2023``, ``2023-10-11 14:00`` and similar.
    Naive values are taken as UTC.
    """
    try:
        parsed = dtparse.parse(value)
    except (ValueError, OverflowError):
        raise InvalidDateError(value) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


# =============================================================================
# Units
# =============================================================================


class TemperatureUnit(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"
    KELVIN = "K"


class SpeedUnit(StrEnum):
    METERS_PER_SECOND = "m/s"
    KILOMETERS_PER_HOUR = "km/h"
    MILES_PER_HOUR = "mph"


class DistanceUnit(StrEnum):
    METERS = "m"
    KILOMETERS = "km"
    MILES = "mi"


# =============================================================================
# Provider observation (pre-normalization)
# =============================================================================


class Observation(BaseModel):
    """One provider's reading, in that provider's units."""

    provider: ProviderId
    location: str | None = None
    region: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    temperature: float | None = None
    temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS
    description: str = ""
    humidity: float | None = None
    pressure_hpa: float | None = None
    wind_speed: float | None = None
    wind_unit: SpeedUnit = SpeedUnit.METERS_PER_SECOND
    visibility: float | None = None
    visibility_unit: DistanceUnit = DistanceUnit.METERS
    observed_at: datetime | None = None
    historical: bool = False


# =============================================================================
# Canonical report
# =============================================================================


class WeatherReport(BaseModel):
    """Normalized weather for one query. Celsius, m/s, hPa, metres."""

    model_config = {"frozen": True}

    provider: str = Field(..., description="Provider CLI name (e.g. open-weather)")
    location: str = Field(..., min_length=1)
    region: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    temperature_c: float
    description: str = ""
    humidity_pct: float | None = None
    pressure_hpa: float | None = None
    wind_speed_ms: float | None = None
    visibility_m: float | None = None
    observed_at: datetime | None = None
    historical: bool = False

    @property
    def coordinates(self) -> str | None:
        """``lat, lon`` label, or None when the provider gave no coordinates."""
        if self.latitude is None or self.longitude is None:
            return None
        return f"{self.latitude:.4f}, {self.longitude:.4f}"
