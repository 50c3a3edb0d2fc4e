"""
sparql_client.results.xml_bindings
==================================

Decoder for the SPARQL Query Results XML Format
(``application/sparql-results+xml``).

Elements are matched by local name, so documents with or without the
``http://www.w3.org/2005/sparql-results#`` namespace are accepted.
Bodies are decoded as UTF-8 regardless of the XML declaration.
"""

from typing import Dict, Iterator, Optional, Union

from loguru import logger
from lxml import etree
from rdflib import Literal, URIRef

from ..errors import DecodeError
from ..nodes import BlankNodeRegistry
from ..settings import RESULT_XML
from .model import (
    BindingsResult,
    BooleanResult,
    Node,
    QueryResult,
    QuerySolution,
)

XML_LANG_ATTR = "{http://www.w3.org/XML/1998/namespace}lang"


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _child_elements(element: etree._Element) -> Iterator[etree._Element]:
    # Skip comments and processing instructions; text is not a child in lxml.
    for child in element:
        if isinstance(child.tag, str):
            yield child


def _find_child(element: etree._Element, name: str) -> Optional[etree._Element]:
    for child in _child_elements(element):
        if _local_name(child) == name:
            return child
    return None


def _parse_document(xml: Union[str, bytes]) -> etree._Element:
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    parser = etree.XMLParser(
        encoding="utf-8", resolve_entities=False, no_network=True
    )
    try:
        return etree.fromstring(xml, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise DecodeError(f"invalid XML results: {exc}", RESULT_XML) from exc


def parse_xml_value(
    element: etree._Element, nodes: BlankNodeRegistry
) -> Optional[Node]:
    """
    Convert the term element inside a ``<binding>`` to an RDF term.

    Returns ``None`` for an unrecognised tag; the caller omits the
    binding in that case.
    """
    tag = _local_name(element)
    text = element.text or ""
    if tag == "bnode":
        return nodes.get_or_create(text)
    if tag == "uri":
        return URIRef(text)
    if tag == "literal":
        lang = element.get(XML_LANG_ATTR)
        if lang:
            return Literal(text, lang=lang)
        datatype = element.get("datatype")
        return Literal(text, datatype=URIRef(datatype) if datatype else None)
    logger.debug(f"skipping binding element of unknown kind: <{tag}>")
    return None


def _parse_result(result: etree._Element, nodes: BlankNodeRegistry) -> QuerySolution:
    bindings: Dict[str, Node] = {}
    for binding in _child_elements(result):
        if _local_name(binding) != "binding":
            logger.debug(f"skipping <{_local_name(binding)}> inside <result>")
            continue
        name = binding.get("name")
        if name is None:
            raise DecodeError("<binding> element without a 'name'", RESULT_XML)
        value = next(_child_elements(binding), None)
        if value is None:
            continue
        term = parse_xml_value(value, nodes)
        if term is not None:
            bindings[name] = term
    return QuerySolution(bindings)


def parse_xml_bindings(
    xml: Union[str, bytes, etree._Element],
    nodes: Optional[BlankNodeRegistry] = None,
) -> QueryResult:
    """
    Decode a SPARQL XML results document.

    ``xml`` may be the raw body or an already parsed root element. Blank
    nodes are resolved through ``nodes``; a fresh registry is used when
    it is omitted.

    Raises
    ------
    DecodeError
        If the body is not well-formed XML, or the root has neither a
        ``<boolean>`` nor a ``<results>`` child.
    """
    if nodes is None:
        nodes = BlankNodeRegistry()

    root = xml if isinstance(xml, etree._Element) else _parse_document(xml)

    boolean = _find_child(root, "boolean")
    if boolean is not None:
        return BooleanResult(boolean.text == "true")

    results = _find_child(root, "results")
    if results is None:
        raise DecodeError(
            "XML results document has neither <boolean> nor <results>", RESULT_XML
        )

    solutions = [
        _parse_result(result, nodes)
        for result in _child_elements(results)
        if _local_name(result) == "result"
    ]
    logger.debug(f"decoded {len(solutions)} XML solutions")
    return BindingsResult(solutions)
