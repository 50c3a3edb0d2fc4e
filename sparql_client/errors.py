"""
sparql_client.errors
====================

Exception taxonomy. Every failure of a call surfaces as one of these;
none of them is retried by the client except the transport-level
connection reset handled inside :mod:`sparql_client.dispatch`.
"""

from typing import Optional


class SparqlClientError(Exception):
    """Base class for all errors raised by :mod:`sparql_client`."""


class ConfigurationError(SparqlClientError, ValueError):
    """Raised at construction time for an invalid endpoint configuration."""


class ClientError(SparqlClientError):
    """
    Raised for a 4xx response (and any status outside 2xx/5xx).

    The response body is kept as ``body`` and used as the message.
    """

    def __init__(self, body: str, status_code: Optional[int] = None):
        super().__init__(body)
        self.body = body
        self.status_code = status_code


class MalformedQuery(ClientError):
    """Raised for HTTP 400: the endpoint rejected the query text."""


class ServerError(SparqlClientError):
    """Raised for a 5xx response."""

    def __init__(self, body: str, status_code: Optional[int] = None):
        super().__init__(body)
        self.body = body
        self.status_code = status_code


class TransportError(SparqlClientError):
    """Raised when no HTTP response could be obtained."""

    def __init__(self, message: str, attempts: int = 1):
        super().__init__(message)
        self.attempts = attempts


class DecodeError(SparqlClientError):
    """Raised when a response body does not parse as its declared format."""

    def __init__(self, message: str, content_type: Optional[str] = None):
        super().__init__(message)
        self.content_type = content_type


class UnsupportedFormat(DecodeError):
    """Raised when no decoder or graph parser handles the content type."""
