"""Query dispatch: pick the provider, load its credentials, fetch, normalize.

``Resolved -> Fetched -> Normalized -> Returned``; any step may raise a
``WeatherError`` which is propagated unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from weather_cli.errors import (
    NoProviderSelectedError,
    ProviderNotConfiguredError,
    ProviderNotImplementedError,
)
from weather_cli.normalize import normalize
from weather_cli.providers.registry import ProviderId, describe
from weather_cli.providers.services import get_service

if TYPE_CHECKING:
    import requests

    from weather_cli.schemas import WeatherQuery, WeatherReport
    from weather_cli.store import ConfigStore

logger = logging.getLogger(__name__)


def resolve_provider(
    store: ConfigStore, provider_override: ProviderId | None = None
) -> ProviderId:
    """Explicit override first, then the selected provider."""
    provider = provider_override or store.read_selected()
    if provider is None:
        raise NoProviderSelectedError()
    return provider


def get_weather(
    query: WeatherQuery,
    provider_override: ProviderId | None = None,
    *,
    store: ConfigStore,
    http: requests.Session | None = None,
) -> WeatherReport:
    """
    Fetch and normalize weather for ``query``.

    Args:
        query: Address and optional date.
        provider_override: Provider to use instead of the selected one.
        store: Config store holding credentials and the selection.
        http: Session to send the request with (defaults to the shared one).

    Raises:
        NoProviderSelectedError: No override and nothing selected.
        ProviderNotImplementedError: Provider is registered but has no service.
        ProviderNotConfiguredError: No stored url/api key for the provider.
        WeatherError: Anything the service or normalization raises.
    """
    provider = resolve_provider(store, provider_override)
    info = describe(provider)
    if not info.implemented:
        raise ProviderNotImplementedError(info.cli_name)

    config = store.read(provider)
    if config is None:
        raise ProviderNotConfiguredError(info.cli_name, str(store.path))

    logger.info("Fetching weather for %r from %s", query.address, info.display_name)
    raw = get_service(provider)(http=http).fetch(query, config)
    return normalize(provider, raw)
