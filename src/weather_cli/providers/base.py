"""Base class shared by every provider service.

A service turns a ``WeatherQuery`` plus stored credentials into exactly one
HTTP GET, classifies the HTTP outcome into the error taxonomy, and parses the
provider's JSON into an ``Observation``. Subclasses supply the request shape
and the parser; everything else lives here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from weather_cli.errors import (
    AuthError,
    NotFoundError,
    ParseError,
    ProviderServerError,
    TransportError,
    UnsupportedDateError,
)
from weather_cli.providers.registry import ProviderId, ProviderInfo, describe
from weather_cli.services.http import session as default_session

if TYPE_CHECKING:
    from weather_cli.schemas import Observation, WeatherQuery
    from weather_cli.store import ProviderConfig

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class RawResponse:
    """Decoded JSON body of a successful provider call."""

    provider: ProviderId
    query: WeatherQuery
    payload: dict[str, Any]
    status: int = 200


class WeatherService(ABC):
    """One provider's request builder and response parser."""

    provider: ClassVar[ProviderId]

    def __init__(self, http: requests.Session | None = None) -> None:
        self.http = http or default_session

    @classmethod
    def info(cls) -> ProviderInfo:
        return describe(cls.provider)

    @classmethod
    def name(cls) -> str:
        return cls.info().cli_name

    # ------------------------------------------------------------------
    # Request
    # ------------------------------------------------------------------

    @abstractmethod
    def build_request(
        self, query: WeatherQuery, config: ProviderConfig
    ) -> tuple[str, dict[str, str]]:
        """Return ``(url, params)`` for the GET request."""

    def base_params(self, query: WeatherQuery, config: ProviderConfig) -> dict[str, str]:
        """Location and API key under the provider's own parameter names."""
        info = self.info()
        return {info.location_param: query.address, info.key_param: config.api_key}

    def fetch(self, query: WeatherQuery, config: ProviderConfig) -> RawResponse:
        """
        Perform the provider call and return its decoded body.

        Raises:
            UnsupportedDateError: A date was given and the provider has no history.
            TransportError: DNS, connection or timeout failure.
            AuthError / NotFoundError / ProviderServerError: Non-success status.
            ParseError: The body is not a JSON object.
        """
        self.check_date(query)
        url, params = self.build_request(query, config)
        logger.debug("GET %s params=%s", url, _redact(params, self.info().key_param))

        try:
            resp = self.http.get(url, params=params)
        except requests.RequestException as exc:
            raise TransportError(self.name(), _describe_transport_error(exc)) from None

        logger.debug("%s responded with HTTP %s", self.name(), resp.status_code)
        self.raise_for_status(resp, query)
        return RawResponse(
            provider=self.provider,
            query=query,
            payload=self.decode(resp),
            status=resp.status_code,
        )

    def check_date(self, query: WeatherQuery) -> None:
        """Reject a historical query up front when the provider cannot serve it."""
        if query.date is not None and not self.info().supports_history:
            raise UnsupportedDateError(self.name(), query.date.date().isoformat())

    def raise_for_status(self, resp: requests.Response, query: WeatherQuery) -> None:
        """Map a non-success status to the error taxonomy."""
        if resp.ok:
            return
        status = resp.status_code
        detail = self.error_detail(resp)
        if status in (401, 403):
            raise AuthError(self.name(), status, detail)
        if status == 404:
            raise NotFoundError(self.name(), query.address, status)
        raise ProviderServerError(self.name(), status, detail)

    def error_detail(self, resp: requests.Response) -> str:
        """Best-effort human message from an error body."""
        try:
            body = resp.json()
        except ValueError:
            return resp.reason or ""
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return body["message"]
        return resp.reason or ""

    def decode(self, resp: requests.Response) -> dict[str, Any]:
        try:
            body = resp.json()
        except ValueError:
            raise ParseError(self.name(), "<body>", "is not valid JSON") from None
        if not isinstance(body, dict):
            raise ParseError(self.name(), "<body>", "is not a JSON object")
        return body

    # ------------------------------------------------------------------
    # Response
    # ------------------------------------------------------------------

    @classmethod
    @abstractmethod
    def parse(cls, raw: RawResponse) -> Observation:
        """Turn a decoded body into an ``Observation`` in provider units."""

    @classmethod
    def validate(cls, model: type[M], payload: dict[str, Any]) -> M:
        """Validate ``payload`` against ``model``, reporting the first bad field."""
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "<body>"
            reason = "is missing" if first["type"] == "missing" else f"is invalid ({first['msg']})"
            raise ParseError(cls.name(), field, reason) from None


def _redact(params: dict[str, str], key_param: str) -> dict[str, str]:
    return {k: ("***" if k == key_param else v) for k, v in params.items()}


def _describe_transport_error(exc: requests.RequestException) -> str:
    if isinstance(exc, requests.Timeout):
        return "request timed out"
    if isinstance(exc, requests.ConnectionError):
        return "connection failed (check the URL and your network)"
    return type(exc).__name__
