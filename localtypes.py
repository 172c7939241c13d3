"""
Type definitions shared by the matrix and graph engines.

This module contains the small value types used throughout the library,
organized by their primary use cases.
"""

from __future__ import annotations

from typing import Generic, NamedTuple, TypeAlias, TypeVar

# Basic type variables for generic operations
T = TypeVar("T")
E = TypeVar("E")  # Matrix entries and edge labels
N = TypeVar("N")  # Graph nodes, totally ordered


# Matrix dimensions
class Size(NamedTuple):
    rows: int  # >= 0
    cols: int  # >= 0


# Matrix coordinates, 1-based. Tuple ordering is the lexicographic
# (row, col) order the sparse representation is sorted by.
class MIx(NamedTuple):
    row: int  # 1 <= row <= rows
    col: int  # 1 <= col <= cols


class Edge(NamedTuple, Generic[N, E]):
    source: N
    target: N
    label: E


# Sparse representations
SparseVector: TypeAlias = list[tuple[int, E]]  # (position, value), sorted
SparseRows: TypeAlias = list[tuple[int, SparseVector[E]]]  # Non-empty rows only
Entries: TypeAlias = tuple[tuple[MIx, E], ...]  # (index, value), sorted
