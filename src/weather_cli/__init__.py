"""weather-cli - fetch current and historical weather from third-party providers.

Architecture::

    providers/     Registry of providers + one service per implemented API
    normalize.py   Provider observation -> canonical WeatherReport (C, m/s, hPa, m)
    dispatcher.py  Resolve provider + credentials, fetch, normalize
    store.py       TOML config store (credentials, selected provider)
    renderers/     Pure data -> terminal text (table, JSON, provider list)
    services/      Shared utilities (HTTP session without retries)
    cli.py         argparse front end

Data flow: cli -> dispatcher -> store (credentials) -> provider service (HTTP)
-> normalize -> renderers

Extension point: adding a provider, see providers/__init__.py
"""

__version__ = "0.1.0"

from weather_cli.config import Settings
from weather_cli.schemas import WeatherQuery, WeatherReport

__all__ = ["Settings", "WeatherQuery", "WeatherReport", "__version__"]
