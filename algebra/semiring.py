"""
Semirings over an arbitrary value type.

A semiring packs two binary operations:
- combine (commutative, associative, identity `zero`): merges alternatives,
  e.g. the contributions of two different paths in a graph;
- sequence (associative, identity `one`): chains values, e.g. the labels
  along a single path.

Neither engine verifies the algebraic laws. They only use `zero` to keep
sparse structures canonical: a matrix never stores a value equal to `zero`.
"""

import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import reduce
from typing import Generic

from localtypes import E


@dataclass(frozen=True)
class Semiring(Generic[E]):
    """Operations and identities of a semiring over E."""

    combine: Callable[[E, E], E]
    sequence: Callable[[E, E], E]
    zero: E
    one: E | None = None  # None when the identity has no finite representation

    def is_zero(self, value: E) -> bool:
        return value == self.zero

    def sum(self, values: Iterable[E]) -> E:
        """Folds `combine` over the values, starting from `zero`."""
        return reduce(self.combine, values, self.zero)

    def product(self, values: Iterable[E]) -> E:
        """
        Folds `sequence` over the values, starting from `one`.
        Without a `one`, the values must not be empty.
        """
        if self.one is None:
            return reduce(self.sequence, values)
        return reduce(self.sequence, values, self.one)


INTEGER_SEMIRING: Semiring[int] = Semiring(
    combine=operator.add,
    sequence=operator.mul,
    zero=0,
    one=1,
)

BOOL_SEMIRING: Semiring[bool] = Semiring(
    combine=operator.or_,
    sequence=operator.and_,
    zero=False,
    one=True,
)
