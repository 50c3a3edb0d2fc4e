"""
sparql_client.results.json_bindings
===================================

Decoder for the SPARQL Query Results JSON Format
(``application/sparql-results+json``).

* ``{"boolean": ...}`` → :class:`BooleanResult`, true iff the value is
  the JSON literal ``true``.
* ``{"results": {"bindings": [...]}}`` → :class:`BindingsResult`, one
  :class:`QuerySolution` per array element, in array order.

Value descriptors are converted by their ``type``:

==================  =========================================================
``bnode``           registry lookup / creation by ``value`` (the label)
``uri``             :class:`rdflib.URIRef`
``literal``         :class:`rdflib.Literal`, with ``xml:lang`` if present
                    (or ``datatype`` when untagged, as in SPARQL 1.1)
``typed-literal``   :class:`rdflib.Literal` with ``datatype``
anything else       no binding for that variable
==================  =========================================================
"""

import json
from typing import Any, Dict, Mapping, Optional, Union

from loguru import logger
from rdflib import Literal, URIRef

from ..errors import DecodeError
from ..nodes import BlankNodeRegistry
from ..settings import RESULT_JSON
from .model import (
    BindingsResult,
    BooleanResult,
    Node,
    QueryResult,
    QuerySolution,
)

XML_LANG_KEY = "xml:lang"


def parse_json_value(
    descriptor: Mapping[str, Any], nodes: BlankNodeRegistry
) -> Optional[Node]:
    """
    Convert one JSON value descriptor to an RDF term.

    Returns ``None`` for an unrecognised ``type``; the caller omits the
    binding in that case.
    """
    kind = descriptor.get("type")
    if kind not in ("bnode", "uri", "literal", "typed-literal"):
        logger.debug(f"skipping value of unknown type: {kind!r}")
        return None
    try:
        value = descriptor["value"]
    except KeyError as exc:
        raise DecodeError(
            f"{kind} value descriptor without 'value': {descriptor!r}", RESULT_JSON
        ) from exc

    if kind == "bnode":
        return nodes.get_or_create(value)
    if kind == "uri":
        return URIRef(value)
    if kind == "literal":
        lang = descriptor.get(XML_LANG_KEY)
        if lang:
            return Literal(value, lang=lang)
        datatype = descriptor.get("datatype")
        return Literal(value, datatype=URIRef(datatype) if datatype else None)
    datatype = descriptor.get("datatype")
    return Literal(value, datatype=URIRef(datatype) if datatype else None)


def _parse_row(row: Any, nodes: BlankNodeRegistry) -> QuerySolution:
    if not isinstance(row, dict):
        raise DecodeError(f"binding row is not an object: {row!r}", RESULT_JSON)
    bindings: Dict[str, Node] = {}
    for name, descriptor in row.items():
        if not isinstance(descriptor, dict):
            raise DecodeError(
                f"value of ?{name} is not an object: {descriptor!r}", RESULT_JSON
            )
        term = parse_json_value(descriptor, nodes)
        if term is not None:
            bindings[name] = term
    return QuerySolution(bindings)


def parse_json_bindings(
    payload: Union[str, bytes, Mapping[str, Any]],
    nodes: Optional[BlankNodeRegistry] = None,
) -> QueryResult:
    """
    Decode a SPARQL JSON results document.

    ``payload`` may be the raw body (``str`` / ``bytes``) or an already
    parsed JSON object. Blank nodes are resolved through ``nodes``; a
    fresh registry is used when it is omitted.

    Raises
    ------
    DecodeError
        If the body is not JSON, or has neither ``boolean`` nor
        ``results.bindings``.
    """
    if nodes is None:
        nodes = BlankNodeRegistry()

    if isinstance(payload, (str, bytes, bytearray)):
        try:
            doc = json.loads(payload)
        except ValueError as exc:
            raise DecodeError(f"invalid JSON results: {exc}", RESULT_JSON) from exc
    else:
        doc = payload

    if not isinstance(doc, Mapping):
        raise DecodeError("JSON results document is not an object", RESULT_JSON)

    if "boolean" in doc:
        return BooleanResult(doc["boolean"] is True)

    results = doc.get("results")
    bindings = results.get("bindings") if isinstance(results, Mapping) else None
    if not isinstance(bindings, list):
        raise DecodeError(
            "JSON results document has neither 'boolean' nor 'results.bindings'",
            RESULT_JSON,
        )

    solutions = [_parse_row(row, nodes) for row in bindings]
    logger.debug(f"decoded {len(solutions)} JSON solutions")
    return BindingsResult(solutions)
