"""
sparql_client.results.model
===========================

In-memory result representation shared by every decoder.

A response decodes to exactly one :class:`QueryResult` subclass:

* :class:`BooleanResult` – ASK answers.
* :class:`BindingsResult` – SELECT solution sequences.
* :class:`GraphResult` – CONSTRUCT / DESCRIBE graphs.

Terms inside a :class:`QuerySolution` are rdflib nodes
(:class:`~rdflib.URIRef`, :class:`~rdflib.Literal`,
:class:`~rdflib.BNode`).
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Union, overload

from rdflib import BNode, Dataset, Graph, Literal, URIRef

Node = Union[URIRef, Literal, BNode]


class QuerySolution(Mapping[str, Node]):
    """One row of a SELECT result: variable name → RDF term."""

    __slots__ = ("_bindings",)

    def __init__(self, bindings: Optional[Mapping[str, Node]] = None):
        self._bindings: Dict[str, Node] = dict(bindings or {})

    def __getitem__(self, name: str) -> Node:
        return self._bindings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QuerySolution):
            return self._bindings == other._bindings
        if isinstance(other, Mapping):
            return self._bindings == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._bindings.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v.n3()}" for k, v in self._bindings.items())
        return f"QuerySolution({inner})"


def union_of(dataset: Dataset) -> Graph:
    """Every statement of every graph in ``dataset``, without graph names."""
    union = Graph()
    for s, p, o, _ in dataset.quads((None, None, None, None)):
        union.add((s, p, o))
    return union


class QueryResult:
    """Base class of the three result variants."""

    __slots__ = ()


class BooleanResult(QueryResult):
    __slots__ = ("value",)

    def __init__(self, value: bool):
        self.value = bool(value)

    def __bool__(self) -> bool:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BooleanResult):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"BooleanResult({self.value})"


class BindingsResult(QueryResult):
    """Ordered sequence of :class:`QuerySolution` in response order."""

    __slots__ = ("solutions",)

    def __init__(self, solutions: List[QuerySolution]):
        self.solutions = list(solutions)

    @property
    def variables(self) -> List[str]:
        """Variable names bound anywhere in the result, first-seen order."""
        seen: Dict[str, None] = {}
        for solution in self.solutions:
            for name in solution:
                seen.setdefault(name, None)
        return list(seen)

    @overload
    def __getitem__(self, index: int) -> QuerySolution: ...

    @overload
    def __getitem__(self, index: slice) -> List[QuerySolution]: ...

    def __getitem__(self, index: Any) -> Any:
        return self.solutions[index]

    def __iter__(self) -> Iterator[QuerySolution]:
        return iter(self.solutions)

    def __len__(self) -> int:
        return len(self.solutions)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BindingsResult):
            return self.solutions == other.solutions
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BindingsResult({len(self.solutions)} solutions)"


class GraphResult(QueryResult):
    """
    Wraps the :class:`rdflib.Graph` parsed from a CONSTRUCT/DESCRIBE body.

    Quad formats (N-Quads, TriG, ...) parse into a :class:`rdflib.Dataset`,
    kept as :attr:`dataset`; :attr:`graph` is then the union of the
    statements of all its graphs.
    """

    __slots__ = ("graph", "dataset")

    def __init__(self, graph: Graph):
        self.dataset: Optional[Dataset] = None
        if isinstance(graph, Dataset):
            self.dataset = graph
            graph = union_of(graph)
        self.graph = graph

    def __iter__(self):
        return iter(self.graph)

    def __len__(self) -> int:
        return len(self.graph)

    def __repr__(self) -> str:
        return f"GraphResult({len(self.graph)} triples)"
