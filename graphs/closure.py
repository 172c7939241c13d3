"""
Transitive closure of labelled graphs over a semiring.

The closure has an edge s -> t whenever t is reachable from s by a
non-empty path. Its label is the `combine` over all such paths of the
`sequence` of the labels along the path.

None of these algorithms is guaranteed to terminate for an arbitrary
semiring: on a cycle, `combine` has to stabilize. Every fixpoint is
therefore capped by `max_iterations` (see constants.MAX_FIXPOINT_ITERATIONS).

Functions:
    sccs(graph)                      - SCCs, sinks first
    scc_dag(graph)                   - Condensation of the graph into a DAG
    transitive_closure(sr, graph)    - SCC by SCC closure
    transitive_closure_naive(sr, g)  - Whole graph fixpoint, reference version
    complete_until_with(...)         - The fixpoint behind the naive closure
    complete(sr, graph)              - Closure by squaring, compared modulo clean
"""

import logging
import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic

from algebra import Semiring
from constants import MAX_FIXPOINT_ITERATIONS
from graphs.adjacency_map import Graph
from localtypes import E, N
from utils.dag_functionals import topological_sort
from utils.graph import nodes_to_strongly_connected_components
from utils.iteration import iterate_until

logger = logging.getLogger(__name__)


# =============================================================================
# Strongly connected components
# =============================================================================


@dataclass(frozen=True)
class SCCDag(Generic[N]):
    """
    Condensation of a graph: its strongly connected components and the
    edges between them, which always form a DAG.
    """

    dag: dict[frozenset[N], set[frozenset[N]]]  # component -> successors
    component_of: dict[N, frozenset[N]]
    order: tuple[frozenset[N], ...]  # Topological, sources first


def scc_dag(graph: Graph[N, E]) -> SCCDag[N]:
    """
    Builds the condensation of a graph.

    Components ready at the same time are ordered by their smallest node.
    """
    components = nodes_to_strongly_connected_components(
        sorted(graph.nodes()), lambda node: graph.graph.get(node, {})
    )
    component_of = {node: component for component in components for node in component}

    dag: dict[frozenset[N], set[frozenset[N]]] = {component: set() for component in components}
    for source, target, _ in graph.edges():
        if component_of[source] != component_of[target]:
            dag[component_of[source]].add(component_of[target])

    return SCCDag(dag, component_of, topological_sort(dag, key=min))


def sccs(graph: Graph[N, E]) -> list[frozenset[N]]:
    """Strongly connected components in reverse topological order (sinks first)."""
    return list(reversed(scc_dag(graph).order))


def is_cyclic(component: frozenset[N], graph: Graph[N, E]) -> bool:
    """A component is cyclic unless it is a single node without a self-loop."""
    if len(component) > 1:
        return True
    (node,) = component
    return node in graph.graph.get(node, {})


# =============================================================================
# Transitive closure
# =============================================================================


def _merge(combine: Callable[[E, E], E], image: dict[N, E], target: N, label: E) -> None:
    image[target] = combine(image[target], label) if target in image else label


def _close_component(
    semiring: Semiring[E],
    graph: Graph[N, E],
    component: frozenset[N],
    max_iterations: int | None,
) -> Graph[N, E]:
    """Closes the subgraph of a component by iterated squaring."""
    internal = Graph(
        {
            node: {
                target: label
                for target, label in graph.graph.get(node, {}).items()
                if target in component
            }
            for node in component
        }
    )

    def grow(g: Graph[N, E]) -> Graph[N, E]:
        return g.union_with(semiring.combine, g.compose_with(semiring.sequence, semiring.combine, g))

    return iterate_until(operator.eq, grow, internal, max_iterations)


def transitive_closure(
    semiring: Semiring[E],
    graph: Graph[N, E],
    max_iterations: int | None = MAX_FIXPOINT_ITERATIONS,
) -> Graph[N, E]:
    """
    Computes the transitive closure one strongly connected component at a time.

    Components are processed sinks first, so whenever a component is reached,
    everything downstream of it is already closed:
    1. the edges leaving the component are followed through the closed
       downstream images;
    2. a cyclic component is closed internally by a fixpoint iteration;
    3. each node combines its direct exits with the exits of every node it
       reaches inside its component.

    The source nodes of the result are the source nodes of `graph`.

    Raises:
        FixpointNotReached: If a component does not stabilize in time.
    """
    combine, sequence = semiring.combine, semiring.sequence
    condensation = scc_dag(graph)
    closed: dict[N, dict[N, E]] = {}
    cyclic_count = 0

    for component in reversed(condensation.order):
        exits: dict[N, dict[N, E]] = {}
        for node in component:
            image: dict[N, E] = {}
            for target, label in graph.graph.get(node, {}).items():
                if target in component:
                    continue
                _merge(combine, image, target, label)
                for further, further_label in closed.get(target, {}).items():
                    _merge(combine, image, further, sequence(label, further_label))
            exits[node] = image

        if not is_cyclic(component, graph):
            closed.update(exits)
            continue

        cyclic_count += 1
        internal = _close_component(semiring, graph, component, max_iterations)
        for node in component:
            image = dict(internal.graph[node])
            for middle, label in internal.graph[node].items():
                for target, exit_label in exits[middle].items():
                    _merge(combine, image, target, sequence(label, exit_label))
            for target, label in exits[node].items():
                _merge(combine, image, target, label)
            closed[node] = image

    logger.debug(
        f"Closed {len(condensation.order)} component(s), {cyclic_count} cyclic, "
        f"over {len(condensation.component_of)} node(s)"
    )
    return Graph({source: closed[source] for source in graph.graph})


def complete_until_with(
    done: Callable[[Graph[N, E], Graph[N, E]], bool],
    sequence: Callable[[E, E], E],
    combine: Callable[[E, E], E],
    graph: Graph[N, E],
    max_iterations: int | None = MAX_FIXPOINT_ITERATIONS,
) -> Graph[N, E]:
    """
    Naive closure operating on the entire graph at once.

    Each round unions the graph with (s -> t) followed by the image of t,
    for every edge s -> t, until `done(new, old)` holds.
    """

    def grow(g: Graph[N, E]) -> Graph[N, E]:
        adjacency = {source: dict(image) for source, image in g.graph.items()}
        for source, target, label in g.edges():
            for further, further_label in g.graph.get(target, {}).items():
                _merge(combine, adjacency[source], further, sequence(label, further_label))
        return Graph(adjacency)

    return iterate_until(done, grow, graph, max_iterations)


def transitive_closure_naive(
    semiring: Semiring[E],
    graph: Graph[N, E],
    max_iterations: int | None = MAX_FIXPOINT_ITERATIONS,
) -> Graph[N, E]:
    """
    Transitive closure by whole graph fixpoint iteration.

    Slower than `transitive_closure` and kept as its reference: both agree on
    every finite graph over a semiring whose `combine` stabilizes.
    """
    return complete_until_with(
        operator.eq, semiring.sequence, semiring.combine, graph, max_iterations
    )


def complete(
    semiring: Semiring[E],
    graph: Graph[N, E],
    is_null: Callable[[E], bool] | None = None,
    max_iterations: int | None = MAX_FIXPOINT_ITERATIONS,
) -> Graph[N, E]:
    """
    Closure by repeatedly adding the square of the graph, until two
    consecutive graphs agree modulo `clean`.

    Args:
        is_null: Labels counting as absent, the semiring zero by default.
    """
    if not graph.graph:
        return graph
    null = is_null or semiring.is_zero

    def grow(g: Graph[N, E]) -> Graph[N, E]:
        return g.union_with(semiring.combine, g.compose_with(semiring.sequence, semiring.combine, g))

    return iterate_until(
        lambda new, old: new.clean(null) == old.clean(null), grow, graph, max_iterations
    )
