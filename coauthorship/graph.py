"""Co-authorship graph construction.

Folds a sequence of records, in input order, into one node per unique
author and one weighted edge per unordered pair of co-authors.

Node attributes (affiliation, group, country) come from the first record
in which the author appears and are never overwritten. Every co-occurrence
of a pair increments the edge weight and appends the record's publisher.

Usage::

    from coauthorship.graph import build_graph
    from coauthorship.records import parse_record

    graph = build_graph(parse_record(row) for row in rows)
    shown = graph.filtered()        # isolated authors removed
    shown.edge("B", "A").weight     # pair order does not matter
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from coauthorship.records import Record, affiliation_map, UNKNOWN_AFFILIATION

logger = logging.getLogger(__name__)

EdgeKey = tuple[str, str]


def edge_key(a: str, b: str) -> EdgeKey:
    """Canonical key for the unordered pair ``{a, b}``."""
    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class Node:
    """A unique author.

    Args:
        name: Author name; the node's identity.
        affiliation: Affiliation resolved from the first record.
        group: Input index of the record where the author first appeared.
        country: Country of that record, or None.
    """

    name: str
    affiliation: str = UNKNOWN_AFFILIATION
    group: int = 0
    country: str | None = None

    @property
    def css_class(self) -> str:
        """Class tag shared by every author first seen in the same record."""
        return f"gr_{self.group}"


@dataclass(frozen=True)
class Edge:
    """An aggregated co-authorship between two authors.

    ``source``/``target`` keep the orientation of the first co-occurrence;
    lookups ignore it.
    """

    source: str
    target: str
    publishers: tuple[str, ...] = ()

    @property
    def weight(self) -> int:
        return len(self.publishers)

    @property
    def key(self) -> EdgeKey:
        return edge_key(self.source, self.target)


@dataclass(frozen=True)
class CoauthorGraph:
    """Immutable result of graph construction."""

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    _node_index: dict[str, int] = field(init=False, repr=False, compare=False)
    _edge_index: dict[EdgeKey, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_node_index", {n.name: i for i, n in enumerate(self.nodes)})
        object.__setattr__(self, "_edge_index", {e.key: i for i, e in enumerate(self.edges)})

    def __contains__(self, name: str) -> bool:
        return name in self._node_index

    def node(self, name: str) -> Node:
        """Return the node called *name*. Raises KeyError if absent."""
        return self.nodes[self._node_index[name]]

    def edge(self, a: str, b: str) -> Edge | None:
        """Return the edge between *a* and *b* in either orientation."""
        idx = self._edge_index.get(edge_key(a, b))
        return self.edges[idx] if idx is not None else None

    def index_of(self, name: str) -> int:
        return self._node_index[name]

    def connected_names(self) -> set[str]:
        """Names touching at least one edge."""
        names: set[str] = set()
        for e in self.edges:
            names.add(e.source)
            names.add(e.target)
        return names

    def filtered(self) -> CoauthorGraph:
        """Subgraph without isolated authors.

        Edges are kept as-is: each one carries at least one publisher by
        construction.
        """
        connected = self.connected_names()
        nodes = tuple(n for n in self.nodes if n.name in connected)
        if len(nodes) < len(self.nodes):
            logger.debug("Dropped %d isolated authors", len(self.nodes) - len(nodes))
        return CoauthorGraph(nodes=nodes, edges=self.edges)


def build_graph(records: Iterable[Record]) -> CoauthorGraph:
    """Fold records into a ``CoauthorGraph``.

    Args:
        records: Parsed records in input order. A record's position is
            used as the ``group`` of authors first seen in it.

    Returns:
        The full graph, isolated authors included. Use ``filtered()``
        for the rendered subgraph.
    """
    nodes: list[Node] = []
    node_index: dict[str, int] = {}
    edge_order: list[EdgeKey] = []
    endpoints: dict[EdgeKey, tuple[str, str]] = {}
    publishers: dict[EdgeKey, list[str]] = {}

    n_records = 0
    for group, record in enumerate(records):
        n_records += 1
        affiliations = affiliation_map(record)

        for author in record.authors:
            if author in node_index:
                continue
            node_index[author] = len(nodes)
            nodes.append(Node(
                name=author,
                affiliation=affiliations.get(author) or UNKNOWN_AFFILIATION,
                group=group,
                country=record.country,
            ))

        authors = record.authors
        for i in range(len(authors)):
            for j in range(i + 1, len(authors)):
                key = edge_key(authors[i], authors[j])
                if key in publishers:
                    publishers[key].append(record.publisher)
                else:
                    edge_order.append(key)
                    endpoints[key] = (authors[i], authors[j])
                    publishers[key] = [record.publisher]

    edges = tuple(
        Edge(source=endpoints[k][0], target=endpoints[k][1], publishers=tuple(publishers[k]))
        for k in edge_order
    )
    logger.debug(
        "Built graph from %d records: %d authors, %d co-author pairs",
        n_records, len(nodes), len(edges),
    )
    return CoauthorGraph(nodes=tuple(nodes), edges=edges)
