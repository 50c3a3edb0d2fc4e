"""
sparql_client.results.decoder
=============================

Dispatch of a response body to the decoder for its declared content
type (parameters such as ``charset`` are ignored):

* ``text/boolean`` – Sesame-style plain-text ASK answer; true iff the
  body is exactly ``true``.
* ``application/sparql-results+json`` – :mod:`.json_bindings`.
* ``application/sparql-results+xml`` – :mod:`.xml_bindings`.
* anything else – handed to rdflib's graph parsers (:mod:`.graph`).
"""

from typing import Optional, Union

from loguru import logger

from ..nodes import BlankNodeRegistry
from ..settings import RESULT_BOOL, RESULT_JSON, RESULT_XML
from .graph import normalise_content_type, parse_graph, supports_content_type
from .json_bindings import parse_json_bindings
from .model import BooleanResult, GraphResult, QueryResult
from .xml_bindings import parse_xml_bindings

RESULT_TYPES = (RESULT_BOOL, RESULT_JSON, RESULT_XML)


def parse_boolean(body: Union[str, bytes]) -> BooleanResult:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return BooleanResult(body == "true")


def is_decodable(content_type: Optional[str]) -> bool:
    """True if :func:`decode_result` has a decoder for ``content_type``."""
    media_type = normalise_content_type(content_type)
    return media_type in RESULT_TYPES or supports_content_type(media_type)


def decode_result(
    body: Union[str, bytes],
    content_type: Optional[str],
    nodes: BlankNodeRegistry,
    base: Optional[str] = None,
) -> QueryResult:
    """
    Decode ``body`` according to ``content_type``.

    ``nodes`` is consulted (and extended) for every blank node label;
    entries created before a decoding failure are kept. ``base`` is the
    base IRI for relative IRIs in graph serializations.
    """
    media_type = normalise_content_type(content_type)
    logger.debug(f"decoding response as {media_type or '<no content type>'}")

    if media_type == RESULT_BOOL:
        return parse_boolean(body)
    if media_type == RESULT_JSON:
        return parse_json_bindings(body, nodes)
    if media_type == RESULT_XML:
        return parse_xml_bindings(body, nodes)
    return GraphResult(parse_graph(body, content_type, base=base))
