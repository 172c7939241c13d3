"""
Size relations between arguments of recursive calls.

An entry of a call matrix records how an argument of the callee relates to
an argument of the caller:

    UNKNOWN  - no information (the zero of the semiring)
    LE       - not larger (the one of the semiring)
    LT       - strictly smaller

Relations are ordered by how much they tell: UNKNOWN < LE < LT.
"""

from enum import IntEnum

from algebra import Semiring


class Order(IntEnum):
    """Relation of a callee argument to a caller argument."""

    UNKNOWN = 0
    LE = 1
    LT = 2

    def __str__(self) -> str:
        return {Order.UNKNOWN: "?", Order.LE: "=<", Order.LT: "<"}[self]


def combine_orders(a: Order, b: Order) -> Order:
    """Most informative of two alternative relations."""
    return Order(max(a, b))


def sequence_orders(a: Order, b: Order) -> Order:
    """
    Composes the relations along two consecutive calls.

    Any UNKNOWN step loses the information, any strict step makes the
    composition strict.
    """
    if Order.UNKNOWN in (a, b):
        return Order.UNKNOWN
    return Order(max(a, b))


ORDER_SEMIRING: Semiring[Order] = Semiring(
    combine=combine_orders,
    sequence=sequence_orders,
    zero=Order.UNKNOWN,
    one=Order.LE,
)
