"""
Public API for the sparql_client package.

A client for the SPARQL 1.1 Protocol: it sends query and update text to
a remote endpoint over HTTP and decodes the response into
:class:`QueryResult` objects built from rdflib terms.

Most users will interact with:

* :class:`SparqlClient` – ``query`` / ``update`` / ``response``.
* :class:`EndpointConfig` – validated endpoint settings.
* The result classes :class:`BooleanResult`, :class:`BindingsResult`,
  :class:`GraphResult` and :class:`QuerySolution`.
* The error taxonomy rooted at :class:`SparqlClientError`.

The decoders (:func:`parse_json_bindings`, :func:`parse_xml_bindings`)
are usable on their own, e.g. for result files on disk.
"""

from .settings import (
    RESULT_BOOL,
    RESULT_JSON,
    RESULT_XML,
    DEFAULT_METHOD,
    MAX_ATTEMPTS,
)
from .errors import (
    SparqlClientError,
    ConfigurationError,
    ClientError,
    MalformedQuery,
    ServerError,
    TransportError,
    DecodeError,
    UnsupportedFormat,
)
from .endpoint import EndpointConfig, Method, OperationKind
from .nodes import BlankNodeRegistry
from .status import ResponseOutcome, classify_status, raise_for_outcome
from .results import (
    QuerySolution,
    QueryResult,
    BooleanResult,
    BindingsResult,
    GraphResult,
    decode_result,
    parse_json_bindings,
    parse_xml_bindings,
)
from .dispatch import RequestDispatcher, is_connection_reset
from .client import SparqlClient
from .version import __version__ as __version__

__all__ = [
    # settings
    "RESULT_BOOL",
    "RESULT_JSON",
    "RESULT_XML",
    "DEFAULT_METHOD",
    "MAX_ATTEMPTS",
    # errors
    "SparqlClientError",
    "ConfigurationError",
    "ClientError",
    "MalformedQuery",
    "ServerError",
    "TransportError",
    "DecodeError",
    "UnsupportedFormat",
    # endpoint
    "EndpointConfig",
    "Method",
    "OperationKind",
    # nodes
    "BlankNodeRegistry",
    # status
    "ResponseOutcome",
    "classify_status",
    "raise_for_outcome",
    # results
    "QuerySolution",
    "QueryResult",
    "BooleanResult",
    "BindingsResult",
    "GraphResult",
    "decode_result",
    "parse_json_bindings",
    "parse_xml_bindings",
    # dispatch
    "RequestDispatcher",
    "is_connection_reset",
    # client
    "SparqlClient",
    # version
    "__version__",
]
