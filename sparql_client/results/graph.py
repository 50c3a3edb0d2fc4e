"""
sparql_client.results.graph
===========================

Adapter over rdflib's parser plugin registry, used for CONSTRUCT and
DESCRIBE responses (any body that is not a SPARQL result table).
"""

from functools import lru_cache
from typing import List, Optional, Tuple, Union

from loguru import logger
from rdflib import Dataset, Graph
from rdflib import plugin
from rdflib.parser import Parser
from rdflib.plugin import PluginException

from ..errors import DecodeError, UnsupportedFormat

# Serializations that carry named graphs; a plain Graph would drop them.
QUAD_MEDIA_TYPES = frozenset(
    {
        "application/n-quads",
        "application/trig",
        "application/trix",
        "application/ld+json",
    }
)


def normalise_content_type(content_type: Optional[str]) -> str:
    """``"Text/Turtle; charset=utf-8"`` → ``"text/turtle"``."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


@lru_cache(maxsize=1)
def _registered_media_types() -> Tuple[str, ...]:
    seen: List[str] = []
    for p in plugin.plugins(kind=Parser):
        if "/" in p.name and p.name not in seen:
            seen.append(p.name)
    return tuple(seen)


def rdf_content_types() -> List[str]:
    """Media types of every RDF serialization rdflib can parse."""
    return list(_registered_media_types())


def supports_content_type(content_type: Optional[str]) -> bool:
    return normalise_content_type(content_type) in _registered_media_types()


def parse_graph(
    body: Union[str, bytes],
    content_type: Optional[str],
    base: Optional[str] = None,
) -> Graph:
    """
    Parse an RDF serialization into a new :class:`rdflib.Graph`, or a
    :class:`rdflib.Dataset` for the quad formats in :data:`QUAD_MEDIA_TYPES`.

    Raises
    ------
    UnsupportedFormat
        If no rdflib parser is registered for ``content_type``.
    DecodeError
        If the registered parser rejects the body.
    """
    media_type = normalise_content_type(content_type)
    try:
        plugin.get(media_type, Parser)
    except PluginException as exc:
        raise UnsupportedFormat(
            f"no RDF parser for content type {content_type!r}", content_type
        ) from exc

    logger.debug(f"parsing {media_type} graph")
    graph = Dataset() if media_type in QUAD_MEDIA_TYPES else Graph()
    try:
        graph.parse(data=body, format=media_type, publicID=base)
    except Exception as exc:
        raise DecodeError(
            f"could not parse {media_type} body: {exc}", content_type
        ) from exc
    return graph
