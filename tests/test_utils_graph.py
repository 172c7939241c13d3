"""Tests for utils/graph.py"""

import numpy as np
from hypothesis import given, strategies as st
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import connected_components

from tests.strategies import graphs
from utils.graph import nodes_to_strongly_connected_components


def scipy_components(adjacency: dict[int, set[int]]) -> frozenset[frozenset[int]]:
    nodes = sorted(set(adjacency) | {t for targets in adjacency.values() for t in targets})
    if not nodes:
        return frozenset()
    position = {node: i for i, node in enumerate(nodes)}
    dense = np.zeros((len(nodes), len(nodes)), dtype=np.int8)
    for source, targets in adjacency.items():
        for target in targets:
            dense[position[source], position[target]] = 1
    _, labels = connected_components(csr_matrix(dense), directed=True, connection="strong")
    groups: dict[int, set[int]] = {}
    for node, label in zip(nodes, labels):
        groups.setdefault(int(label), set()).add(node)
    return frozenset(frozenset(group) for group in groups.values())


class TestStronglyConnectedComponents:
    def test_two_cycles_and_a_bridge(self):
        adjacency = {1: {2}, 2: {1, 3}, 3: {4}, 4: {3}, 5: set()}
        components = nodes_to_strongly_connected_components(adjacency, adjacency.__getitem__)
        assert components == {frozenset({1, 2}), frozenset({3, 4}), frozenset({5})}

    def test_self_loop_is_a_singleton(self):
        adjacency = {1: {1}}
        components = nodes_to_strongly_connected_components(adjacency, adjacency.__getitem__)
        assert components == {frozenset({1})}

    def test_unlisted_successors_are_explored(self):
        adjacency = {1: {2}, 2: {1, 3}}
        components = nodes_to_strongly_connected_components(
            [1], lambda node: adjacency.get(node, set())
        )
        assert components == {frozenset({1, 2}), frozenset({3})}

    def test_empty(self):
        assert nodes_to_strongly_connected_components([], lambda node: []) == frozenset()

    def test_long_chain_does_not_recurse(self):
        n = 5000
        adjacency = {i: {i + 1} for i in range(n)}
        adjacency[n] = {0}
        components = nodes_to_strongly_connected_components(adjacency, adjacency.__getitem__)
        assert components == {frozenset(range(n + 1))}

    @given(st.data())
    def test_agrees_with_scipy(self, data):
        g = data.draw(graphs(max_nodes=12))
        adjacency = {node: set(image) for node, image in g.graph.items()}
        order = data.draw(st.permutations(sorted(adjacency)))
        components = nodes_to_strongly_connected_components(order, adjacency.__getitem__)
        assert components == scipy_components(adjacency)
