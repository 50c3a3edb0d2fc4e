"""
sparql_client.endpoint
======================

Endpoint configuration: which URLs to talk to, which form/query
parameter carries the operation text, default headers, proxy and the
preferred HTTP method.

The configuration is validated and completed once, when the client is
built, and is immutable afterwards:

* ``update_url`` defaults to ``url``;
* ``update_parameter`` defaults to ``query_parameter``;
* ``headers`` are merged over a default ``Accept`` header listing the
  SPARQL JSON / XML result types and every RDF serialization the graph
  parser advertises, and stored read-only;
* ``http_proxy`` defaults to the ``<scheme>_proxy`` environment variable
  for the scheme of ``url``.
"""

import os
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional
from urllib.parse import urlsplit

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from requests.structures import CaseInsensitiveDict
from requests.utils import prepend_scheme_if_needed

from .errors import ConfigurationError
from .results.graph import rdf_content_types
from .settings import (
    DEFAULT_METHOD,
    DEFAULT_POOL_CONNECTIONS,
    DEFAULT_POOL_MAXSIZE,
    DEFAULT_QUERY_PARAMETER,
    ENV_PROXY_SUFFIX,
    ENV_SPARQL_ENDPOINT_URL,
    ENV_SPARQL_UPDATE_ENDPOINT_URL,
    RESULT_JSON,
    RESULT_XML,
)

Method = Literal["GET", "POST"]


class OperationKind(StrEnum):
    """Selects the endpoint URL and parameter name used for a request."""

    QUERY = "query"
    UPDATE = "update"


def default_accept() -> str:
    """Comma-joined ``Accept`` value: SPARQL results first, then RDF."""
    types = [RESULT_JSON, RESULT_XML]
    types.extend(t for t in rdf_content_types() if t not in types)
    return ", ".join(types)


def proxy_from_env(scheme: str) -> Optional[str]:
    """
    Return ``<scheme>_proxy`` (or its upper-case form) if set.

    A scheme-less value such as ``proxy.local:3128`` is read as an
    ``http://`` proxy, as requests does.
    """
    name = f"{scheme}{ENV_PROXY_SUFFIX}"
    value = os.environ.get(name) or os.environ.get(name.upper())
    if not value:
        return None
    return prepend_scheme_if_needed(value, "http")


def _check_absolute_url(value: str, schemes: tuple = ("http", "https")) -> str:
    parts = urlsplit(value)
    if parts.scheme not in schemes or not parts.hostname:
        raise ValueError(f"not an absolute {'/'.join(schemes)} URL: {value!r}")
    # Accessing ``port`` validates it.
    parts.port
    return value


class EndpointConfig(BaseModel):
    """
    Immutable settings for one SPARQL endpoint (query + update).

    Build it with :meth:`build` (or :meth:`from_env`) to get a
    :class:`~sparql_client.errors.ConfigurationError` instead of a raw
    pydantic ``ValidationError`` on bad input.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str
    update_url: Optional[str] = None
    query_parameter: str = Field(default=DEFAULT_QUERY_PARAMETER, min_length=1)
    update_parameter: Optional[str] = None
    headers: Mapping[str, str] = Field(default_factory=dict)
    http_proxy: Optional[str] = None
    method: Method = DEFAULT_METHOD
    timeout: Optional[float] = Field(default=None, gt=0)
    pool_connections: int = Field(default=DEFAULT_POOL_CONNECTIONS, ge=1)
    pool_maxsize: int = Field(default=DEFAULT_POOL_MAXSIZE, ge=1)

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        url = data.get("url")
        if not data.get("update_url"):
            data["update_url"] = url
        if not data.get("update_parameter"):
            data["update_parameter"] = (
                data.get("query_parameter") or DEFAULT_QUERY_PARAMETER
            )
        headers: CaseInsensitiveDict = CaseInsensitiveDict({"Accept": default_accept()})
        headers.update(data.get("headers") or {})
        data["headers"] = dict(headers)
        if not data.get("http_proxy") and isinstance(url, str):
            data["http_proxy"] = proxy_from_env(urlsplit(url).scheme)
        return data

    @field_validator("method", mode="before")
    @classmethod
    def _normalise_method(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("headers")
    @classmethod
    def _freeze_headers(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_validator("url", "update_url")
    @classmethod
    def _validate_endpoint_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _check_absolute_url(value)

    @field_validator("http_proxy")
    @classmethod
    def _validate_proxy_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _check_absolute_url(
            value, schemes=("http", "https", "socks5", "socks5h")
        )

    # ──────────────────────────────────────────────────────────────────
    # Construction helpers
    # ──────────────────────────────────────────────────────────────────

    @classmethod
    def build(cls, **options: Any) -> "EndpointConfig":
        """Validate ``options``; raise ConfigurationError on failure."""
        try:
            return cls(**options)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid endpoint configuration: {exc}") from exc

    @classmethod
    def from_env(cls, **options: Any) -> "EndpointConfig":
        """
        Build from ``SPARQL_ENDPOINT_URL`` and, if set,
        ``SPARQL_UPDATE_ENDPOINT_URL``. Explicit ``options`` win.
        """
        url = os.getenv(ENV_SPARQL_ENDPOINT_URL)
        if not url:
            raise ConfigurationError(f"{ENV_SPARQL_ENDPOINT_URL} is not set")
        options.setdefault("update_url", os.getenv(ENV_SPARQL_UPDATE_ENDPOINT_URL))
        return cls.build(url=url, **options)

    # ──────────────────────────────────────────────────────────────────
    # Per-operation lookups
    # ──────────────────────────────────────────────────────────────────

    def endpoint_for(self, kind: OperationKind) -> str:
        if kind == OperationKind.UPDATE:
            return self.update_url or self.url
        return self.url

    def parameter_for(self, kind: OperationKind) -> str:
        if kind == OperationKind.UPDATE:
            return self.update_parameter or self.query_parameter
        return self.query_parameter

    def proxies(self) -> Dict[str, str]:
        """Proxy mapping in the shape ``requests`` expects."""
        if not self.http_proxy:
            return {}
        return {"http": self.http_proxy, "https": self.http_proxy}
