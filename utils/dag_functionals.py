"""
DAG (Directed Acyclic Graph) utilities.

Functions:
    topological_sort(graph, key) - Kahn's algorithm for topological ordering
"""

import heapq
from collections.abc import Callable, Mapping, Set
from typing import Any, TypeVar

T = TypeVar("T")


def topological_sort(
    parent_to_children: Mapping[T, Set[T]],
    key: Callable[[T], Any] = lambda node: node,
) -> tuple[T, ...]:
    """
    Returns nodes in topological order using Kahn's algorithm.

    Among the nodes ready at the same time, the one with the smallest `key`
    comes first, so the order is deterministic.

    Args:
        parent_to_children: Graph as adjacency list (node -> set of dependents)
        key: Sort key of the nodes, must be unique per node.

    Returns:
        Nodes ordered so parents come before children.

    Raises:
        ValueError: If the graph contains a cycle.
    """
    all_nodes: set[T] = set(parent_to_children.keys())
    for children in parent_to_children.values():
        all_nodes.update(children)

    in_degree: dict[T, int] = {node: 0 for node in all_nodes}
    for parent, children in parent_to_children.items():
        for child in children:
            in_degree[child] += 1

    ready = [(key(node), node) for node in all_nodes if in_degree[node] == 0]
    heapq.heapify(ready)
    sorted_list: list[T] = []

    while ready:
        _, node = heapq.heappop(ready)
        sorted_list.append(node)

        for child in parent_to_children.get(node, ()):
            in_degree[child] -= 1
            if in_degree[child] == 0:
                heapq.heappush(ready, (key(child), child))

    if len(sorted_list) != len(all_nodes):
        raise ValueError("Graph contains a cycle")

    return tuple(sorted_list)
