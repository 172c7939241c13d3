"""
Hypothesis strategies for matrices and graphs.

Generated values already satisfy the invariants of their types: matrices
are in canonical sparse form, graphs have at most one edge per ordered pair
of nodes.
"""

from hypothesis import strategies as st

from graphs import Graph
from localtypes import Edge, Size
from termination.sparse_matrix import Matrix, from_lists

# =============================================================================
# Matrices
# =============================================================================

# Half of the values are zero, negative ones let sums cancel out
small_integers = st.sampled_from((0, 0, 0, 0, 1, 2, 3, -1))


@st.composite
def sizes(draw, max_dim: int = 5) -> Size:
    return Size(
        draw(st.integers(min_value=0, max_value=max_dim)),
        draw(st.integers(min_value=0, max_value=max_dim)),
    )


@st.composite
def matrices_using_row_gen(draw, size: Size, row_gen, zero=0) -> Matrix:
    """Matrix of the given size, `row_gen(cols)` drawing each row."""
    return from_lists(size, [draw(row_gen(size.cols)) for _ in range(size.rows)], zero)


def matrices_of_size(size: Size, elements=small_integers, zero=0) -> st.SearchStrategy[Matrix]:
    return matrices_using_row_gen(
        size, lambda cols: st.lists(elements, min_size=cols, max_size=cols), zero
    )


def matrices(elements=small_integers, zero=0) -> st.SearchStrategy[Matrix]:
    return sizes().flatmap(lambda size: matrices_of_size(size, elements, zero))


@st.composite
def same_size_matrices(draw, count: int) -> tuple[Matrix, ...]:
    size = draw(sizes())
    return tuple(draw(matrices_of_size(size)) for _ in range(count))


# =============================================================================
# Graphs
# =============================================================================

nodes = st.integers(min_value=1, max_value=18)


@st.composite
def graphs(draw, labels=st.booleans(), max_nodes: int = 6) -> Graph:
    """
    Graph over up to `max_nodes` positive integers. Every node is a source,
    with or without edges.
    """
    node_list = draw(st.lists(nodes, max_size=max_nodes, unique=True))
    edges = draw(
        st.lists(
            st.builds(
                Edge,
                st.sampled_from(node_list),
                st.sampled_from(node_list),
                labels,
            ),
            max_size=2 * len(node_list),
        )
        if node_list
        else st.just([])
    )
    return Graph.from_list(edges).union(Graph.from_nodes(node_list))
