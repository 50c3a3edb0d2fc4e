"""
sparql_client.results
=====================

Result model and the decoders that build it from response bodies.
"""

from .model import (
    Node,
    QuerySolution,
    QueryResult,
    BooleanResult,
    BindingsResult,
    GraphResult,
)
from .json_bindings import parse_json_bindings, parse_json_value
from .xml_bindings import parse_xml_bindings, parse_xml_value
from .graph import (
    normalise_content_type,
    parse_graph,
    rdf_content_types,
    supports_content_type,
)
from .decoder import decode_result, is_decodable, parse_boolean

__all__ = [
    # model
    "Node",
    "QuerySolution",
    "QueryResult",
    "BooleanResult",
    "BindingsResult",
    "GraphResult",
    # json
    "parse_json_bindings",
    "parse_json_value",
    # xml
    "parse_xml_bindings",
    "parse_xml_value",
    # graph
    "normalise_content_type",
    "parse_graph",
    "rdf_content_types",
    "supports_content_type",
    # decoder
    "decode_result",
    "is_decodable",
    "parse_boolean",
]
