"""
Algebraic structures shared by the matrix and graph engines.

**Semiring** (semiring.py)
    Two operations over a value type with their identities.
    - combine: aggregation of alternatives (addition), identity `zero`
    - sequence: composition along a path (multiplication), identity `one`
    - INTEGER_SEMIRING, BOOL_SEMIRING: standard instances
"""

from .semiring import (
    BOOL_SEMIRING,
    INTEGER_SEMIRING,
    Semiring,
)

__all__ = [
    "Semiring",
    "INTEGER_SEMIRING",
    "BOOL_SEMIRING",
]
