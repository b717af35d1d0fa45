"""Weather providers.

Each implemented provider is one module with a consistent structure:

    providers/
    ├── registry.py      # ProviderId enum + static descriptors (names, URLs)
    ├── base.py          # WeatherService: request, status mapping, validation
    ├── services.py      # ProviderId -> service class lookup
    └── {name}.py        # Pydantic payload models + WeatherService subclass

Adding a provider
-----------------
1. Add a ``ProviderId`` member and its ``ProviderInfo`` in ``registry.py``
   (``implemented=True``; ``supports_history`` if it serves past dates).

2. Create ``providers/{name}.py``: payload models for the fields you read
   and a ``WeatherService`` subclass implementing ``build_request`` and
   ``parse`` (return an ``Observation`` tagged with the provider's units).

3. Register the class in ``services.SERVICES``.

4. Add tests in ``tests/test_{name}.py`` using ``responses`` fixtures.

Only the registry is re-exported here; import services from ``services``.
"""

from weather_cli.providers.registry import (
    REGISTRY,
    ProviderId,
    ProviderInfo,
    all_providers,
    describe,
    from_cli_name,
    from_config_name,
    parse_provider_name,
)

__all__ = [
    "REGISTRY",
    "ProviderId",
    "ProviderInfo",
    "all_providers",
    "describe",
    "from_cli_name",
    "from_config_name",
    "parse_provider_name",
]
