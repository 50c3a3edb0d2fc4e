"""
sparql_client.nodes
===================

Blank-node identity map.

A SPARQL endpoint identifies blank nodes in a result only by label.
:class:`BlankNodeRegistry` maps each label to a single
:class:`rdflib.BNode` object so that every occurrence of the same label
decodes to the *identical* node, within one response and across
responses decoded against the same registry.

Scope
-----
Each :class:`sparql_client.client.SparqlClient` owns one registry for
its whole lifetime and never clears it on its own: blank-node identity
persists across queries issued through the same client. Labels are only
guaranteed unique within one result set by the SPARQL protocol, so
callers decoding unrelated results should either call :meth:`clear`
(``SparqlClient.clear_nodes``) or pass a fresh registry for the call.

The registry is not thread-safe; share a client between threads only
under external locking.
"""

from typing import Dict, Iterator, Optional

from loguru import logger
from rdflib import BNode


class BlankNodeRegistry:
    """Label → :class:`rdflib.BNode` identity map."""

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes: Dict[str, BNode] = {}

    def get_or_create(self, label: str) -> BNode:
        """
        Return the node registered for ``label``, creating it on first use.

        Repeated calls with the same label return the same object.
        """
        node = self._nodes.get(label)
        if node is None:
            node = BNode(label)
            self._nodes[label] = node
            logger.debug(f"registered blank node: _:{label}")
        return node

    def get(self, label: str) -> Optional[BNode]:
        return self._nodes.get(label)

    def clear(self) -> None:
        """Forget every label; later lookups mint new nodes."""
        self._nodes.clear()

    def __contains__(self, label: object) -> bool:
        return label in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"<BlankNodeRegistry size={len(self._nodes)}>"
