"""
sparql_client.client
====================

:class:`SparqlClient` ties the pieces together::

    caller → RequestDispatcher → HTTP → raise_for_outcome → decode_result

Use:

* :meth:`SparqlClient.query` for SELECT / ASK / CONSTRUCT / DESCRIBE.
* :meth:`SparqlClient.update` for INSERT / DELETE / CLEAR / etc.
* :meth:`SparqlClient.response` when you want the raw (classified)
  :class:`requests.Response` instead of a decoded result.

Example::

    with SparqlClient("https://dbpedia.org/sparql", method="GET") as client:
        result = client.query("SELECT ?s WHERE { ?s ?p ?o } LIMIT 3")
        for row in result:
            print(row["s"])
"""

from typing import Any, Mapping, Optional

import requests
from loguru import logger

from .dispatch import RequestDispatcher
from .endpoint import EndpointConfig, OperationKind
from .nodes import BlankNodeRegistry
from .results.decoder import decode_result, is_decodable
from .results.model import QueryResult
from .status import raise_for_outcome


class SparqlClient:
    """
    Client for one SPARQL endpoint (plus its update endpoint).

    Parameters
    ----------
    url:
        Query endpoint URL; shorthand for ``config=EndpointConfig(url=...)``.
    config:
        A prebuilt :class:`EndpointConfig`. Mutually exclusive with
        ``url`` / ``options``.
    session:
        Optional :class:`requests.Session` to send requests through
        (e.g. one with custom TLS settings). By default the client
        creates its own keep-alive session.
    options:
        Any other :class:`EndpointConfig` field (``update_url``,
        ``query_parameter``, ``update_parameter``, ``headers``,
        ``http_proxy``, ``method``, ``timeout``, ...).

    Blank nodes
    -----------
    The client keeps one :class:`BlankNodeRegistry` (:attr:`nodes`) for
    its whole lifetime, so a blank-node label decodes to the same node
    in every response from this client. Call :meth:`clear_nodes` between
    unrelated queries, or pass ``nodes=BlankNodeRegistry()`` to scope
    identity to a single call.

    A client is not thread-safe.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        config: Optional[EndpointConfig] = None,
        session: Optional[requests.Session] = None,
        **options: Any,
    ):
        if config is None:
            config = EndpointConfig.build(url=url, **options)
        elif url is not None or options:
            raise TypeError("pass either 'config' or 'url'/options, not both")
        self.config = config
        self._dispatcher = RequestDispatcher(config, session=session)
        self._nodes = BlankNodeRegistry()

    @classmethod
    def from_env(cls, **options: Any) -> "SparqlClient":
        """Client for ``SPARQL_ENDPOINT_URL`` (see :meth:`EndpointConfig.from_env`)."""
        return cls(config=EndpointConfig.from_env(**options))

    @property
    def url(self) -> str:
        return self.config.url

    @property
    def nodes(self) -> BlankNodeRegistry:
        """Blank-node registry shared by every response of this client."""
        return self._nodes

    def clear_nodes(self) -> None:
        """Forget all blank-node labels seen so far."""
        self._nodes.clear()

    # ──────────────────────────────────────────────────────────────────
    # Operations
    # ──────────────────────────────────────────────────────────────────

    def query(
        self,
        query: str,
        *,
        content_type: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        method: Optional[str] = None,
        nodes: Optional[BlankNodeRegistry] = None,
    ) -> QueryResult:
        """
        Execute a query and decode the result.

        ``content_type`` replaces the ``Accept`` header and is also used
        as the declared type when decoding the body.
        """
        response = self.response(
            query,
            kind=OperationKind.QUERY,
            content_type=content_type,
            headers=headers,
            method=method,
        )
        return self.parse_response(response, content_type=content_type, nodes=nodes)

    def update(
        self,
        update: str,
        *,
        content_type: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        method: Optional[str] = None,
        nodes: Optional[BlankNodeRegistry] = None,
    ) -> Optional[QueryResult]:
        """
        Execute an update against the update endpoint.

        Returns the decoded body when the endpoint answers with a format
        the client can decode, ``None`` otherwise (empty body, HTML
        acknowledgement, ...).
        """
        response = self.response(
            update,
            kind=OperationKind.UPDATE,
            content_type=content_type,
            headers=headers,
            method=method,
        )
        declared = content_type or response.headers.get("Content-Type")
        if not response.content or not is_decodable(declared):
            logger.debug(
                f"update answered {response.status_code} with no decodable body"
            )
            return None
        return self.parse_response(response, content_type=content_type, nodes=nodes)

    def response(
        self,
        query: str,
        *,
        kind: OperationKind = OperationKind.QUERY,
        content_type: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        method: Optional[str] = None,
    ) -> requests.Response:
        """
        Send ``query`` and return the successful HTTP response.

        Raises
        ------
        MalformedQuery, ClientError, ServerError
            For 400, other non-2xx/5xx, and 5xx responses respectively.
        TransportError
            If no response could be obtained.
        """
        response = self._dispatcher.execute(
            query,
            kind=kind,
            headers=headers,
            content_type=content_type,
            method=method,
        )
        return raise_for_outcome(response)

    def parse_response(
        self,
        response: requests.Response,
        *,
        content_type: Optional[str] = None,
        nodes: Optional[BlankNodeRegistry] = None,
    ) -> QueryResult:
        """Decode a successful response (see :func:`decode_result`)."""
        declared = content_type or response.headers.get("Content-Type")
        return decode_result(
            response.content,
            declared,
            self._nodes if nodes is None else nodes,
            base=response.url or self.config.url,
        )

    # ──────────────────────────────────────────────────────────────────
    # Lifecycle
    # ──────────────────────────────────────────────────────────────────

    def close(self) -> None:
        """Close pooled connections."""
        self._dispatcher.close()

    def __enter__(self) -> "SparqlClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} url={self.config.url!r}>"
