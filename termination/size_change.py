"""
Size-change termination checking over call graphs.

Nodes are definitions, edges are calls. A call carries a matrix relating
the arguments of the caller (rows) to the arguments of the callee
(columns): entry (i, j) is the Order of callee argument j with respect to
caller argument i.

Since a definition may reach another one along several paths, edges are
labelled with sets of call matrices. Composing two sets multiplies every
pair of matrices over the order semiring. There are finitely many matrices
of a given shape, so the transitive closure always stabilizes.

A set of definitions terminates when every idempotent call matrix (m * m == m)
of a closed self-loop has a strictly decreasing entry on its diagonal: an
infinite call sequence would otherwise exist without any argument
decreasing infinitely often.
"""

import logging
import operator
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeAlias

from algebra import Semiring
from constants import MAX_FIXPOINT_ITERATIONS
from graphs import Graph, transitive_closure
from localtypes import Edge, N, Size
from termination.order import ORDER_SEMIRING, Order
from termination.sparse_matrix import Matrix, diagonal, from_lists, mul

logger = logging.getLogger(__name__)

CallMatrix: TypeAlias = Matrix[Order]
CallSet: TypeAlias = frozenset[CallMatrix]


def compose_call_sets(first: CallSet, second: CallSet) -> CallSet:
    """All compositions of a call from `first` followed by one from `second`."""
    return frozenset(mul(ORDER_SEMIRING, a, b) for a in first for b in second)


# The identity would need an identity matrix of every size
CALL_SET_SEMIRING: Semiring[CallSet] = Semiring(
    combine=operator.or_,
    sequence=compose_call_sets,
    zero=frozenset(),
)


@dataclass(frozen=True)
class Call(Generic[N]):
    """A call from definition `source` to definition `target`."""

    source: N
    target: N
    matrix: CallMatrix

    @classmethod
    def from_lists(
        cls, source: N, target: N, size: Size, rows: Sequence[Sequence[Order]]
    ) -> "Call[N]":
        """Builds the call from a dense (caller arity x callee arity) matrix."""
        return cls(source, target, from_lists(size, rows, zero=Order.UNKNOWN))


@dataclass(frozen=True)
class TerminationResult(Generic[N]):
    """Closed call graph and, per definition, its offending self-calls."""

    closure: Graph[N, CallSet]
    offending: dict[N, tuple[CallMatrix, ...]]

    @property
    def terminates(self) -> bool:
        return not self.offending


def call_graph(calls: Iterable[Call[N]], definitions: Iterable[N] = ()) -> Graph[N, CallSet]:
    """
    Graph of call sets. Every definition is a node, even without calls;
    repeated calls between the same definitions are gathered in one set.
    """
    edges = (Edge(call.source, call.target, frozenset({call.matrix})) for call in calls)
    return Graph.from_nodes(definitions).union_with(
        operator.or_, Graph.from_list_with(operator.or_, edges)
    )


def is_idempotent(m: CallMatrix) -> bool:
    return mul(ORDER_SEMIRING, m, m) == m


def is_decreasing(m: CallMatrix) -> bool:
    """Some argument strictly decreases from the caller to itself."""
    return Order.LT in diagonal(m, zero=Order.UNKNOWN)


def check_termination(
    calls: Iterable[Call[N]],
    definitions: Iterable[N] = (),
    max_iterations: int | None = MAX_FIXPOINT_ITERATIONS,
) -> TerminationResult[N]:
    """
    Closes the call graph and collects the idempotent self-calls that do
    not decrease any argument.
    """
    closure = transitive_closure(CALL_SET_SEMIRING, call_graph(calls, definitions), max_iterations)

    offending: dict[N, tuple[CallMatrix, ...]] = {}
    for definition in sorted(closure.source_nodes()):
        loops = closure.lookup(definition, definition) or frozenset()
        bad = [m for m in loops if is_idempotent(m) and not is_decreasing(m)]
        if bad:
            offending[definition] = tuple(sorted(bad, key=lambda m: (m.size, m.entries)))
            logger.debug(f"{definition}: {len(bad)} non-decreasing idempotent self-call(s)")

    return TerminationResult(closure, offending)
