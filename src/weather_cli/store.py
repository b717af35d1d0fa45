"""Provider configuration store.

Persists provider credentials and the selected provider in a TOML document::

    selected_provider = "OpenWeather"

    [OpenWeather]
    url = "https://api.openweathermap.org/data/2.5/weather"
    api_key = "..."

Tables are keyed by PascalCase provider name (see ``providers.registry``).
The document is read fresh on every call and written back whole; nothing is
held open between calls, so a ``get`` never has the file open while it waits
on the network.
"""

from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from weather_cli.errors import ConfigFileError, UnknownProviderError, WeatherError
from weather_cli.providers.registry import ProviderId, describe, from_config_name

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

SELECTED_KEY = "selected_provider"


class ProviderConfig(BaseModel):
    """Credentials for one provider."""

    model_config = {"str_strip_whitespace": True, "frozen": True}

    url: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)


class ConfigStore:
    """Reads and writes the provider config document."""

    FILENAME = "config.toml"

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.path = base_dir / self.FILENAME

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def load(self) -> dict[str, Any]:
        """Read and validate the whole document. A missing file reads as empty.

        Raises:
            ConfigFileError: Unreadable file, malformed TOML, unknown provider
                keys or bad entries.
        """
        if not self.path.exists():
            return {}
        try:
            with self.path.open("rb") as f:
                doc = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigFileError(str(self.path), str(exc)) from None
        except UnicodeDecodeError:
            raise ConfigFileError(str(self.path), "not valid UTF-8") from None
        except OSError as exc:
            raise ConfigFileError(str(self.path), exc.strerror or str(exc)) from None
        self._check(doc)
        return doc

    def read(self, provider: ProviderId) -> ProviderConfig | None:
        """Stored credentials for ``provider``, or None if it was never configured."""
        entry = self.load().get(provider.value)
        if entry is None:
            return None
        return ProviderConfig.model_validate(entry)

    def read_selected(self) -> ProviderId | None:
        """The selected provider, or None when unset."""
        name = self.load().get(SELECTED_KEY)
        return from_config_name(name) if name else None

    def configured(self) -> list[ProviderId]:
        """Providers that have an entry in the document, in registry order."""
        doc = self.load()
        return [pid for pid in ProviderId if pid.value in doc]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def configure(
        self, provider: ProviderId, api_key: str, url: str | None = None
    ) -> ProviderConfig:
        """Create or replace the entry for ``provider``.

        Args:
            provider: Provider to configure.
            api_key: API key issued by the provider.
            url: Base URL; defaults to the registry's URL for the provider.

        Returns:
            The stored config.
        """
        try:
            config = ProviderConfig(url=url or describe(provider).default_url, api_key=api_key)
        except ValidationError as exc:
            field = exc.errors()[0]["loc"][0]
            msg = f"Cannot configure '{describe(provider).cli_name}': {field} must not be empty"
            raise WeatherError(msg, provider=describe(provider).cli_name) from None
        doc = self.load()
        doc[provider.value] = config.model_dump()
        self._write(doc)
        logger.debug("Configured %s in %s", provider.value, self.path)
        return config

    def select(self, provider: ProviderId) -> None:
        """Make ``provider`` the default for queries without ``-p``."""
        doc = self.load()
        if provider.value not in doc:
            logger.warning(
                "Selected provider '%s' has no stored credentials yet",
                describe(provider).cli_name,
            )
        doc[SELECTED_KEY] = provider.value
        self._write(doc)

    def _write(self, doc: dict[str, Any]) -> Path:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("wb") as f:
                tomli_w.dump(doc, f)
        except OSError as exc:
            raise ConfigFileError(str(self.path), exc.strerror or str(exc)) from None
        return self.path

    def _check(self, doc: dict[str, Any]) -> None:
        for key, value in doc.items():
            if key == SELECTED_KEY:
                if not isinstance(value, str):
                    raise ConfigFileError(str(self.path), f"'{SELECTED_KEY}' must be a string")
                if value:
                    self._provider_for(value)
                continue

            self._provider_for(key)
            if not isinstance(value, dict):
                raise ConfigFileError(str(self.path), f"'{key}' must be a table")
            try:
                ProviderConfig.model_validate(value)
            except ValidationError as exc:
                field = ".".join(str(part) for part in exc.errors()[0]["loc"])
                raise ConfigFileError(
                    str(self.path), f"'{key}.{field}' is missing or empty"
                ) from None

    def _provider_for(self, name: str) -> ProviderId:
        try:
            return from_config_name(name)
        except UnknownProviderError:
            raise ConfigFileError(str(self.path), f"unknown provider '{name}'") from None
