"""
Error taxonomy for weather-cli.

Every failure a user can hit derives from ``WeatherError`` and renders as a
one-line message. The CLI catches ``WeatherError`` once at the top; nothing
below it swallows these.
"""

from __future__ import annotations

PROVIDER_LIST_HINT = (
    "use the command 'weather provider-list' to get a list of all available providers"
)


class WeatherError(Exception):
    """Base class for all user-facing errors."""

    def __init__(self, message: str, *, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider

    @property
    def message(self) -> str:
        return str(self.args[0])


# =============================================================================
# Provider resolution / configuration
# =============================================================================


class UnknownProviderError(WeatherError):
    """A provider name did not match any registered provider."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Weather provider '{name}' not found; {PROVIDER_LIST_HINT}")
        self.name = name


class NoProviderSelectedError(WeatherError):
    """Neither ``-p`` nor a selected provider is available."""

    def __init__(self) -> None:
        super().__init__(
            "No weather provider selected; run 'weather select-provider <provider>' "
            "or pass '-p <provider>'"
        )


class ProviderNotConfiguredError(WeatherError):
    """The resolved provider has no stored url/api key."""

    def __init__(self, provider: str, config_path: str | None = None) -> None:
        where = f" in '{config_path}'" if config_path else ""
        super().__init__(
            f"Provider '{provider}' is not configured{where}; "
            f"run 'weather configure {provider} <api_key>'",
            provider=provider,
        )
        self.config_path = config_path


class ProviderNotImplementedError(WeatherError):
    """The provider is registered but has no service yet."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            f"Weather provider '{provider}' is not implemented; {PROVIDER_LIST_HINT}",
            provider=provider,
        )


class ConfigFileError(WeatherError):
    """The config document is unreadable or violates its schema."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid config file '{path}': {reason}")
        self.path = path
        self.reason = reason


class SettingsError(WeatherError):
    """An environment setting could not be parsed."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Invalid setting {name}: {reason}")
        self.name = name
        self.reason = reason


# =============================================================================
# Query
# =============================================================================


class InvalidDateError(WeatherError):
    """A user-supplied date string could not be parsed."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Invalid date '{value}'; use a recognized format "
            "(e.g. 'YYYY-MM-DD', 'MM/DD/YYYY' or 'YYYY-MM-DD hh:mm')"
        )
        self.value = value


class UnsupportedDateError(WeatherError):
    """A historical date was requested from a provider that only serves current data."""

    def __init__(self, provider: str, date: str) -> None:
        super().__init__(
            f"Provider '{provider}' does not support historical data (requested date {date}); "
            "omit '-d' or choose a provider with history support",
            provider=provider,
        )
        self.date = date


# =============================================================================
# Remote API
# =============================================================================


class AuthError(WeatherError):
    """The API rejected the credentials (401/403)."""

    def __init__(self, provider: str, status: int, detail: str = "") -> None:
        suffix = f": {detail}" if detail else ""
        super().__init__(
            f"Provider '{provider}' rejected the API key (HTTP {status}){suffix}",
            provider=provider,
        )
        self.status = status


class NotFoundError(WeatherError):
    """The API could not resolve the address."""

    def __init__(self, provider: str, address: str, status: int) -> None:
        super().__init__(
            f"Provider '{provider}' found no location matching '{address}' (HTTP {status})",
            provider=provider,
        )
        self.address = address
        self.status = status


class ProviderServerError(WeatherError):
    """Any other non-success HTTP status."""

    def __init__(self, provider: str, status: int, detail: str = "") -> None:
        suffix = f": {detail}" if detail else ""
        super().__init__(
            f"Provider '{provider}' responded with HTTP {status}{suffix}",
            provider=provider,
        )
        self.status = status


class TransportError(WeatherError):
    """Network-level failure: DNS, refused connection, timeout."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(
            f"Failed to reach provider '{provider}': {reason}",
            provider=provider,
        )
        self.reason = reason


class ParseError(WeatherError):
    """The response body does not match the provider's expected shape."""

    def __init__(self, provider: str, field: str, reason: str = "missing or invalid") -> None:
        super().__init__(
            f"Unexpected response from provider '{provider}': field '{field}' {reason}",
            provider=provider,
        )
        self.field = field
