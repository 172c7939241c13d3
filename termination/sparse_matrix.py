"""
Sparse matrices over an arbitrary semiring.

The matrices are assumed to be very sparse, so they are stored as sorted
association lists mapping indices to values.

Most operations are linear in the number of non-zero elements. The
exceptions are:
- transposition, which has to sort the association list again:
  O(n log n) where n is the number of non-zero elements;
- multiplication, whose cost depends on the number of non-empty row/column
  pairs (see `mul`).

Canonical form (checked by `matrix_invariant`):
1. entries are strictly sorted by (row, col), so there are no duplicates;
2. every index lies within [1, rows] x [1, cols];
3. no entry stores the zero element.

Functions that need the zero element of the value type take it as the
`zero` keyword. The default `0` also covers booleans (False == 0).
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from itertools import groupby, pairwise
from operator import itemgetter
from typing import Any, Generic, TypeVar

import numpy as np

from algebra import Semiring
from localtypes import E, Entries, MIx, Size, SparseRows, SparseVector, T

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
I = TypeVar("I")  # noqa: E741


# =============================================================================
# Data Structure
# =============================================================================


@dataclass(frozen=True)
class Matrix(Generic[E]):
    """
    Immutable sparse matrix.

    Build matrices with `from_lists` or `from_index_list`, which establish the
    canonical form. The constructor itself trusts its arguments.
    """

    size: Size
    entries: Entries[E] = ()

    @property
    def rows(self) -> int:
        return self.size.rows

    @property
    def cols(self) -> int:
        return self.size.cols

    @property
    def nnz(self) -> int:
        """Number of stored (non-zero) entries."""
        return len(self.entries)


# =============================================================================
# Invariants
# =============================================================================


def size_invariant(size: Size) -> bool:
    """Dimensions are non-negative."""
    return size.rows >= 0 and size.cols >= 0


def index_invariant(index: MIx) -> bool:
    """Indices are positive."""
    return index.row >= 1 and index.col >= 1


def strictly_sorted(entries: Sequence[tuple[I, Any]]) -> bool:
    """Whether an association list is a sorted partial function."""
    return all(i < j for (i, _), (j, _) in pairwise(entries))


def matrix_invariant(m: Matrix[E], zero: E = 0) -> bool:
    def in_bounds(index: MIx) -> bool:
        return 1 <= index.row <= m.rows and 1 <= index.col <= m.cols

    return (
        size_invariant(m.size)
        and all(in_bounds(index) for index, _ in m.entries)
        and all(value != zero for _, value in m.entries)
        and strictly_sorted(m.entries)
    )


# =============================================================================
# Sizes
# =============================================================================


def square(m: Matrix[E]) -> bool:
    return m.rows == m.cols


def is_empty(m: Matrix[E]) -> bool:
    """True iff the matrix has no rows or no columns."""
    return m.rows <= 0 or m.cols <= 0


def sup_size(m1: Matrix[A], m2: Matrix[B]) -> Size:
    """Size of the union of two matrices."""
    return Size(max(m1.rows, m2.rows), max(m1.cols, m2.cols))


def inf_size(m1: Matrix[A], m2: Matrix[B]) -> Size:
    """Size of the intersection of two matrices."""
    return Size(min(m1.rows, m2.rows), min(m1.cols, m2.cols))


# =============================================================================
# Construction and conversion
# =============================================================================


def from_index_list(
    size: Size, entries: Iterable[tuple[MIx, E]], zero: E = 0
) -> Matrix[E]:
    """
    Constructs a matrix from (index, value) pairs.

    Zero values are dropped and the rest is sorted by index.

    Raises:
        ValueError: If the size is negative, an index is out of bounds or
            an index occurs twice.
    """
    size = Size(*size)
    if not size_invariant(size):
        raise ValueError(f"Matrix dimensions must be non-negative, got {size}")

    # Zero values are checked too, before being dropped
    indexed = sorted(
        ((MIx(*index), value) for index, value in entries), key=itemgetter(0)
    )

    for index, _ in indexed:
        if not (1 <= index.row <= size.rows and 1 <= index.col <= size.cols):
            raise ValueError(f"Index {index} out of bounds for matrix of size {size}")
    for (i, _), (j, _) in pairwise(indexed):
        if i == j:
            raise ValueError(f"Duplicate matrix index {i}")

    return Matrix(size, tuple(entry for entry in indexed if entry[1] != zero))


def from_lists(size: Size, rows: Sequence[Sequence[E]], zero: E = 0) -> Matrix[E]:
    """
    Constructs a matrix from a dense list of rows.

    Raises:
        ValueError: If there are not `size.rows` rows of `size.cols` values.
    """
    size = Size(*size)
    if len(rows) != size.rows:
        raise ValueError(f"Expected {size.rows} rows, got {len(rows)}")
    for i, row in enumerate(rows, start=1):
        if len(row) != size.cols:
            raise ValueError(f"Row {i} has {len(row)} values, expected {size.cols}")

    return from_index_list(
        size,
        (
            (MIx(i, j), value)
            for i, row in enumerate(rows, start=1)
            for j, value in enumerate(row, start=1)
        ),
        zero,
    )


def to_sparse_rows(m: Matrix[E]) -> SparseRows[E]:
    """
    Groups the entries by row: [(i, [(j, value), ...]), ...].

    Only non-empty rows are generated. O(n) in the number of entries.
    """
    return [
        (i, [(index.col, value) for index, value in group])
        for i, group in groupby(m.entries, key=lambda entry: entry[0].row)
    ]


def blow_up_sparse_vec(zero: T, n: int, vec: SparseVector[T]) -> list[T]:
    """
    Turns a sparse vector of dimension n into a dense one, filling the
    missing positions with `zero`. O(n).
    """
    dense: list[T] = []
    position = 1
    for j, value in vec:
        if j < position or j > n:
            raise AssertionError(
                f"Impossible sparse vector: position {j} after {position - 1} of {n}"
            )
        dense.extend([zero] * (j - position))
        dense.append(value)
        position = j + 1
    dense.extend([zero] * (n + 1 - position))
    return dense


def to_lists(m: Matrix[E], zero: E = 0) -> list[list[E]]:
    """Converts a matrix to a dense list of rows. O(rows * cols)."""
    dense_rows = [
        (i, blow_up_sparse_vec(zero, m.cols, row)) for i, row in to_sparse_rows(m)
    ]
    empty_row: list[E] = [zero] * m.cols
    # Padding rows are the same object, copy them apart
    return [list(row) for row in blow_up_sparse_vec(empty_row, m.rows, dense_rows)]


def from_array(array: Any, zero: E = 0) -> Matrix[E]:
    """
    Constructs a matrix from a 2D numpy array (or anything `np.asarray`
    accepts). Values are converted back to Python scalars.
    """
    arr = np.asarray(array)
    if arr.ndim != 2:
        raise ValueError(f"Expected 2D array, got {arr.ndim}D")

    rows, cols = np.nonzero(arr != zero)
    values = arr[rows, cols].tolist()
    return from_index_list(
        Size(int(arr.shape[0]), int(arr.shape[1])),
        (
            (MIx(row + 1, col + 1), value)
            for row, col, value in zip(rows.tolist(), cols.tolist(), values)
        ),
        zero,
    )


def to_array(m: Matrix[E], zero: E = 0, dtype: Any = None) -> np.ndarray:
    """Converts a matrix to a dense numpy array of shape (rows, cols)."""
    return np.array(to_lists(m, zero), dtype=dtype).reshape(m.rows, m.cols)


# =============================================================================
# Querying
# =============================================================================


def is_singleton(m: Matrix[E], zero: E = 0) -> E | None:
    """Returns the value of a 1x1 matrix, None for any other size. O(1)."""
    if m.size != Size(1, 1):
        return None
    match m.entries:
        case ():
            return zero
        case ((_, value),):
            return value
        case _:
            raise AssertionError(f"1x1 matrix with {len(m.entries)} entries")


def diagonal(m: Matrix[E], zero: E = 0) -> list[E]:
    """
    Extracts the diagonal of a matrix.

    For non-square matrices, the length of the diagonal is the minimum of
    the dimensions. O(n) in the number of entries.
    """
    return blow_up_sparse_vec(
        zero,
        min(m.rows, m.cols),
        [(index.row, value) for index, value in m.entries if index.row == index.col],
    )


def transpose(m: Matrix[E]) -> Matrix[E]:
    """Matrix transposition. O(n log n) in the number of entries."""
    return Matrix(
        Size(m.cols, m.rows),
        tuple(
            sorted(
                ((MIx(index.col, index.row), value) for index, value in m.entries),
                key=itemgetter(0),
            )
        ),
    )


# =============================================================================
# Combining
# =============================================================================


def union_assoc_with(
    f: Callable[[A], C | None],
    g: Callable[[B], C | None],
    h: Callable[[A, B], C | None],
    left: Sequence[tuple[I, A]],
    right: Sequence[tuple[I, B]],
) -> list[tuple[I, C]]:
    """
    Merges two sorted association lists. O(n1 + n2).

    Keys only in `left` are mapped by `f`, keys only in `right` by `g` and
    common keys by `h`. A result of None drops the key.
    """
    merged: list[tuple[I, C]] = []

    def emit(key: I, value: C | None) -> None:
        if value is not None:
            merged.append((key, value))

    p = q = 0
    while p < len(left) and q < len(right):
        (i, a), (j, b) = left[p], right[q]
        if i < j:
            emit(i, f(a))
            p += 1
        elif i > j:
            emit(j, g(b))
            q += 1
        else:
            emit(i, h(a, b))
            p += 1
            q += 1

    for i, a in left[p:]:
        emit(i, f(a))
    for j, b in right[q:]:
        emit(j, g(b))
    return merged


def inter_assoc_with(
    f: Callable[[A, A], A],
    left: Sequence[tuple[I, A]],
    right: Sequence[tuple[I, A]],
) -> list[tuple[I, A]]:
    """
    Intersection of two sorted association lists. O(n1 + n2).

        { (i, f(a, b)) | (i, a) in left and (i, b) in right }

    Results are not filtered, so zeros appear if `f` returns them.
    """
    common: list[tuple[I, A]] = []
    p = q = 0
    while p < len(left) and q < len(right):
        (i, a), (j, b) = left[p], right[q]
        if i < j:
            p += 1
        elif i > j:
            q += 1
        else:
            common.append((i, f(a, b)))
            p += 1
            q += 1
    return common


def zip_matrices(
    f: Callable[[A], C],
    g: Callable[[B], C],
    h: Callable[[A, B], C],
    is_zero: Callable[[C], bool],
    m1: Matrix[A],
    m2: Matrix[B],
) -> Matrix[C]:
    """
    General pointwise combination of two matrices. O(n1 + n2).

    Entries only in `m1` go through `f`, entries only in `m2` through `g`,
    entries in both through `h`. Results counting as zero are dropped.
    Returns a matrix of size `sup_size(m1, m2)`.
    """

    def nonzero(value: C) -> C | None:
        return None if is_zero(value) else value

    entries = union_assoc_with(
        lambda a: nonzero(f(a)),
        lambda b: nonzero(g(b)),
        lambda a, b: nonzero(h(a, b)),
        m1.entries,
        m2.entries,
    )
    return Matrix(sup_size(m1, m2), tuple(entries))


def add(
    combine: Callable[[E, E], E], m1: Matrix[E], m2: Matrix[E], zero: E = 0
) -> Matrix[E]:
    """
    Adds two matrices pointwise with `combine`. O(n1 + n2).

    Returns a matrix of size `sup_size(m1, m2)`; sums equal to zero are dropped.
    """
    return zip_matrices(
        lambda a: a, lambda b: b, combine, lambda value: value == zero, m1, m2
    )


def intersect_with(
    combine: Callable[[E, E], E], m1: Matrix[E], m2: Matrix[E]
) -> Matrix[E]:
    """
    Pointwise conjunction of two matrices: only indices present in both are
    kept, their values combined with `combine`. O(n1 + n2).

    Returns a matrix of size `inf_size(m1, m2)`. Results are not checked
    against zero: `combine` must not produce zero from non-zero values.
    """
    return Matrix(inf_size(m1, m2), tuple(inter_assoc_with(combine, m1.entries, m2.entries)))


def mul(semiring: Semiring[E], m1: Matrix[E], m2: Matrix[E]) -> Matrix[E]:
    """
    Multiplies two matrices using the operations of `semiring`.

    O(n1 + n2 log n2 + sum over i <= r1, j <= c2 of d(i, j)) where r1 is the
    number of non-empty rows of m1, c2 the number of non-empty columns of m2
    and d(i, j) the larger of the lengths of sparse row i and sparse column j.

    Given m1 : r1 x c1 and m2 : r2 x c2, the result is r1 x c2. c1 and r2 do
    not need to agree, the matrices are implicitly padded with zeros, which
    costs nothing in the sparse representation.
    """
    columns = to_sparse_rows(transpose(m2))

    entries: list[tuple[MIx, E]] = []
    for i, row in to_sparse_rows(m1):
        for j, column in columns:
            value = semiring.sum(
                v for _, v in inter_assoc_with(semiring.sequence, row, column)
            )
            if not semiring.is_zero(value):
                entries.append((MIx(i, j), value))

    logger.debug(f"Product of {m1.size} and {m2.size}: {len(entries)} entries")
    return Matrix(Size(m1.rows, m2.cols), tuple(entries))


# =============================================================================
# Modifying
# =============================================================================


def add_column(x: E, m: Matrix[E], zero: E = 0) -> Matrix[E]:
    """
    Appends a column after the existing ones, every value set to `x`.

    Raises:
        ValueError: If `x` is not the zero element.
    """
    if x != zero:
        raise ValueError(f"A new column can only be filled with {zero!r}, got {x!r}")
    return Matrix(Size(m.rows, m.cols + 1), m.entries)


def add_row(x: E, m: Matrix[E], zero: E = 0) -> Matrix[E]:
    """
    Appends a row after the existing ones, every value set to `x`.

    Raises:
        ValueError: If `x` is not the zero element.
    """
    if x != zero:
        raise ValueError(f"A new row can only be filled with {zero!r}, got {x!r}")
    return Matrix(Size(m.rows + 1, m.cols), m.entries)
