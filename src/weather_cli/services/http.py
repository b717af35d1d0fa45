"""
Shared HTTP client for provider requests.

Provides a pre-configured ``requests.Session`` with a default timeout and a
project User-Agent. Retries are switched off: every ``weather get`` issues
exactly one request and surfaces failures immediately.

Usage::

    from weather_cli.services.http import session

    resp = session.get("https://api.example.com/v1/data", params={...})
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from weather_cli import __version__

#: No connect/read/status retries.
NO_RETRY = Retry(total=0, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = f"weather-cli/{__version__}"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retry-free adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``NO_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Inject a default timeout so a stalled provider surfaces as a transport
    # error instead of hanging forever.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()
