"""
Functions related to graphs
"""

from collections.abc import Callable, Iterable
from typing import Iterator, TypeVar

T = TypeVar("T")


def nodes_to_strongly_connected_components(
    nodes: Iterable[T], node_to_successors: Callable[[T], Iterable[T]]
) -> frozenset[frozenset[T]]:
    """
    Extract the strongly connected components of a directed graph.

    Iterative version of Tarjan's algorithm, O(V + E). Successors that are
    not listed in `nodes` are explored as well.

    Args:
        nodes: Nodes of the graph.
        node_to_successors: Function returning the nodes a given node points to.

    Returns:
        frozenset[frozenset[T]]: set of strongly connected components
    """
    index_of: dict[T, int] = {}
    lowlink: dict[T, int] = {}
    stack: list[T] = []
    on_stack: set[T] = set()
    components: set[frozenset[T]] = set()

    def visit(node: T) -> tuple[T, Iterator[T]]:
        index_of[node] = lowlink[node] = len(index_of)
        stack.append(node)
        on_stack.add(node)
        return node, iter(node_to_successors(node))

    for root in nodes:
        # Avoid visiting an already seen component
        if root in index_of:
            continue

        # Depth-first traversal with an explicit stack of pending successors
        work = [visit(root)]
        while work:
            node, successors = work[-1]
            descended = False
            for successor in successors:
                if successor not in index_of:
                    work.append(visit(successor))
                    descended = True
                    break
                if successor in on_stack:
                    lowlink[node] = min(lowlink[node], index_of[successor])
            if descended:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])

            # `node` is the root of a component: pop it off the stack
            if lowlink[node] == index_of[node]:
                component = set()
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.add(member)
                    if member == node:
                        break
                components.add(frozenset(component))

    return frozenset(components)
