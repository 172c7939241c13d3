"""
Directed graphs with labelled edges and their closure.

**Adjacency maps** (adjacency_map.py)
    Immutable graphs with at most one label per ordered pair of nodes.
    - Graph: construction, queries, union, composition, clean

**Closure** (closure.py)
    Transitive closure over a semiring.
    - sccs, scc_dag: strongly connected components and their DAG
    - transitive_closure: component by component
    - transitive_closure_naive, complete_until_with: whole graph fixpoint
    - complete: closure by squaring, modulo clean
"""

from .adjacency_map import Graph
from .closure import (
    SCCDag,
    complete,
    complete_until_with,
    is_cyclic,
    scc_dag,
    sccs,
    transitive_closure,
    transitive_closure_naive,
)

__all__ = [
    # Adjacency maps
    "Graph",
    # Closure
    "SCCDag",
    "scc_dag",
    "sccs",
    "is_cyclic",
    "transitive_closure",
    "transitive_closure_naive",
    "complete_until_with",
    "complete",
]
