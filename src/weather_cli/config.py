"""
Application settings.

Values come from environment variables prefixed with ``WEATHER_CLI_``
(e.g. ``WEATHER_CLI_CONFIG_DIR``, ``WEATHER_CLI_HTTP_TIMEOUT``) or a local
``.env`` file. Provider credentials are not settings; they live in the
config store (see ``store.py``).
"""

from __future__ import annotations

import logging
import os
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_cli.errors import SettingsError

ENV_PREFIX = "WEATHER_CLI_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "weather-cli"


class Settings(BaseSettings):
    """Runtime settings for the CLI."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        extra="ignore",
    )

    config_dir: Path = Field(default_factory=_default_config_dir)
    http_timeout: float = Field(default=30.0, gt=0, description="Seconds per request")
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process.

    Raises:
        SettingsError: An environment value does not validate.
    """
    try:
        return Settings()
    except ValidationError as exc:
        first = exc.errors()[0]
        name = ENV_PREFIX + ".".join(str(part) for part in first["loc"]).upper()
        raise SettingsError(name, first["msg"]) from None


def configure_logging(debug: bool = False) -> None:
    """Send log records to stderr; DEBUG when ``debug`` is set, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    # urllib3 logs every connection at DEBUG, including the query string
    logging.getLogger("urllib3").setLevel(logging.WARNING)
