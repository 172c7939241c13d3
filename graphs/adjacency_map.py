"""
Directed graphs with labelled edges, stored as adjacency maps.

A graph maps each source node to a map from target nodes to edge labels,
so there is at most one edge per ordered pair of nodes. Inserting a second
edge between the same nodes combines the labels instead.

Sources may have an empty image: such isolated nodes are tracked
explicitly, e.g. definitions that make no recursive calls.

Graphs are immutable; every modification returns a new graph. Nodes must be
hashable and totally ordered, listings (edges, neighbours) are sorted.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from functools import reduce
from typing import Generic

from localtypes import E, Edge, N


@dataclass(frozen=True)
class Graph(Generic[N, E]):
    """Adjacency map: graph[source][target] = label."""

    graph: Mapping[N, Mapping[N, E]] = field(default_factory=dict)

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def empty(cls) -> Graph[N, E]:
        return cls({})

    @classmethod
    def singleton(cls, source: N, target: N, label: E) -> Graph[N, E]:
        return cls({source: {target: label}})

    @classmethod
    def from_nodes(cls, nodes: Iterable[N]) -> Graph[N, E]:
        """Graph of isolated nodes."""
        return cls({node: {} for node in nodes})

    @classmethod
    def from_list(cls, edges: Iterable[Edge[N, E]]) -> Graph[N, E]:
        """Builds a graph from edges. A later edge replaces an earlier one."""
        return cls.from_list_with(lambda new, old: new, edges)

    @classmethod
    def from_list_with(
        cls, combine: Callable[[E, E], E], edges: Iterable[Edge[N, E]]
    ) -> Graph[N, E]:
        """Builds a graph from edges, combining the labels of repeated edges."""
        adjacency: dict[N, dict[N, E]] = {}
        for source, target, label in edges:
            image = adjacency.setdefault(source, {})
            image[target] = combine(label, image[target]) if target in image else label
        return cls(adjacency)

    # =========================================================================
    # Queries
    # =========================================================================

    def source_nodes(self) -> frozenset[N]:
        return frozenset(self.graph)

    def target_nodes(self) -> frozenset[N]:
        return frozenset(target for image in self.graph.values() for target in image)

    def nodes(self) -> frozenset[N]:
        """All nodes, sources and targets."""
        return self.source_nodes() | self.target_nodes()

    def lookup(self, source: N, target: N) -> E | None:
        return self.graph.get(source, {}).get(target)

    def neighbours(self, source: N) -> list[tuple[N, E]]:
        """Outgoing (target, label) pairs of `source`, sorted by target."""
        return sorted(self.graph.get(source, {}).items(), key=lambda pair: pair[0])

    def edges(self) -> list[Edge[N, E]]:
        """All edges, sorted by (source, target)."""
        return self.edges_from(self.graph)

    def edges_from(self, sources: Iterable[N]) -> list[Edge[N, E]]:
        return [
            Edge(source, target, label)
            for source in sorted(set(sources))
            for target, label in self.neighbours(source)
        ]

    def edges_to(self, targets: Iterable[N]) -> list[Edge[N, E]]:
        wanted = set(targets)
        return [edge for edge in self.edges() if edge.target in wanted]

    def discrete(self, is_null: Callable[[E], bool]) -> bool:
        """True iff every edge label is null."""
        return all(is_null(label) for image in self.graph.values() for label in image.values())

    def __len__(self) -> int:
        """Number of edges."""
        return sum(len(image) for image in self.graph.values())

    # =========================================================================
    # Modification
    # =========================================================================

    def insert_edge(self, source: N, target: N, label: E) -> Graph[N, E]:
        """Inserts an edge, replacing an existing label."""
        return self.insert_edge_with(lambda new, old: new, source, target, label)

    def insert_edge_with(
        self, combine: Callable[[E, E], E], source: N, target: N, label: E
    ) -> Graph[N, E]:
        """
        Inserts an edge. An existing label `old` becomes `combine(label, old)`,
        the new label being the first argument.
        """
        image = dict(self.graph.get(source, {}))
        image[target] = combine(label, image[target]) if target in image else label
        return Graph({**self.graph, source: image})

    def union(self, other: Graph[N, E]) -> Graph[N, E]:
        """Left-biased union: labels of `self` win on common edges."""
        return self.union_with(lambda mine, theirs: mine, other)

    def union_with(
        self, combine: Callable[[E, E], E], other: Graph[N, E]
    ) -> Graph[N, E]:
        """Union of nodes and edges; common edges get `combine(mine, theirs)`."""
        adjacency = {source: dict(image) for source, image in self.graph.items()}
        for source, their_image in other.graph.items():
            image = adjacency.setdefault(source, {})
            for target, label in their_image.items():
                image[target] = combine(image[target], label) if target in image else label
        return Graph(adjacency)

    @staticmethod
    def unions_with(
        combine: Callable[[E, E], E], graphs: Iterable[Graph[N, E]]
    ) -> Graph[N, E]:
        return reduce(lambda g1, g2: g1.union_with(combine, g2), graphs, Graph.empty())

    def remove_node(self, node: N) -> Graph[N, E]:
        """Removes a node together with its incoming and outgoing edges."""
        return Graph(
            {
                source: {target: label for target, label in image.items() if target != node}
                for source, image in self.graph.items()
                if source != node
            }
        )

    def remove_edge(self, source: N, target: N) -> Graph[N, E]:
        if target not in self.graph.get(source, {}):
            return self
        image = {t: label for t, label in self.graph[source].items() if t != target}
        return Graph({**self.graph, source: image})

    def filter_edges(self, predicate: Callable[[Edge[N, E]], bool]) -> Graph[N, E]:
        """Keeps the edges satisfying `predicate`, and every source node."""
        return Graph(
            {
                source: {
                    target: label
                    for target, label in image.items()
                    if predicate(Edge(source, target, label))
                }
                for source, image in self.graph.items()
            }
        )

    def clean(self, is_null: Callable[[E], bool] | None = None) -> Graph[N, E]:
        """
        Removes edges with a null label (when `is_null` is given), then the
        sources left with an empty image. Only the top level is pruned: nodes
        that are only targets are not affected.
        """
        return Graph(
            {
                source: cleaned
                for source, image in self.graph.items()
                if (
                    cleaned := {
                        target: label
                        for target, label in image.items()
                        if is_null is None or not is_null(label)
                    }
                )
            }
        )

    def compose_with(
        self,
        sequence: Callable[[E, E], E],
        combine: Callable[[E, E], E],
        other: Graph[N, E],
    ) -> Graph[N, E]:
        """
        Composition: an edge s -> u for every s -e1-> t in `self` and
        t -e2-> u in `other`, labelled `sequence(e1, e2)`. Labels of
        parallel paths are merged with `combine`.
        """
        adjacency: dict[N, dict[N, E]] = {}
        for source, image in self.graph.items():
            for middle, first in image.items():
                for target, second in other.graph.get(middle, {}).items():
                    label = sequence(first, second)
                    composed = adjacency.setdefault(source, {})
                    composed[target] = (
                        combine(composed[target], label) if target in composed else label
                    )
        return Graph(adjacency)
