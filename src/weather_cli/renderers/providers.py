"""Provider status listing for ``weather provider-list``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from weather_cli.providers.registry import all_providers
from weather_cli.renderers import render_template

if TYPE_CHECKING:
    from collections.abc import Iterable

    from weather_cli.providers.registry import ProviderId


def provider_status(
    selected: ProviderId | None, configured: Iterable[ProviderId]
) -> list[dict[str, Any]]:
    """One display row per registered provider."""
    configured_ids = set(configured)
    rows = []
    for info in all_providers():
        if not info.implemented:
            status = "not implemented"
        elif info.id in configured_ids:
            status = "configured"
        else:
            status = "not configured"
        rows.append(
            {
                "cli_name": info.cli_name,
                "display_name": info.display_name,
                "status": status,
                "selected": info.id is selected,
                "implemented": info.implemented,
                "supports_history": info.supports_history,
                "api_version": info.api_version,
                "default_url": info.default_url,
            }
        )
    return rows


def build_provider_list(selected: ProviderId | None, configured: Iterable[ProviderId]) -> str:
    """Render the provider status list."""
    return render_template("provider_list.txt.j2", providers=provider_status(selected, configured))
