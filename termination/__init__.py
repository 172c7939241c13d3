"""
Termination checking with call matrices.

**Sparse matrices** (sparse_matrix.py)
    Matrices over an arbitrary semiring, stored as sorted association lists.
    - from_lists, from_index_list, to_lists: construction and conversion
    - add, intersect_with, mul, transpose, diagonal: algebra
    - add_row, add_column: growth

**Orders** (order.py)
    Relations between arguments of recursive calls.
    - Order: UNKNOWN, LE, LT
    - ORDER_SEMIRING

**Size-change termination** (size_change.py)
    - Call, call_graph: call graphs labelled by sets of call matrices
    - check_termination: closure and idempotent self-call check
"""

from .order import ORDER_SEMIRING, Order
from .size_change import (
    CALL_SET_SEMIRING,
    Call,
    TerminationResult,
    call_graph,
    check_termination,
)
from .sparse_matrix import (
    Matrix,
    add,
    add_column,
    add_row,
    diagonal,
    from_index_list,
    from_lists,
    intersect_with,
    is_singleton,
    matrix_invariant,
    mul,
    to_lists,
    transpose,
)

__all__ = [
    # Sparse matrices
    "Matrix",
    "from_lists",
    "from_index_list",
    "to_lists",
    "is_singleton",
    "matrix_invariant",
    "transpose",
    "diagonal",
    "add",
    "intersect_with",
    "mul",
    "add_row",
    "add_column",
    # Orders
    "Order",
    "ORDER_SEMIRING",
    # Size-change termination
    "Call",
    "CALL_SET_SEMIRING",
    "TerminationResult",
    "call_graph",
    "check_termination",
]
