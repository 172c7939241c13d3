"""Tests for algebra/semiring.py and termination/order.py"""

from itertools import product

import pytest

from algebra import BOOL_SEMIRING, INTEGER_SEMIRING, Semiring
from termination.order import ORDER_SEMIRING, Order, combine_orders, sequence_orders


class TestSemiring:
    def test_sum_and_product(self):
        assert INTEGER_SEMIRING.sum([1, 2, 3]) == 6
        assert INTEGER_SEMIRING.sum([]) == 0
        assert INTEGER_SEMIRING.product([2, 3, 4]) == 24
        assert INTEGER_SEMIRING.product([]) == 1

    def test_bool(self):
        assert BOOL_SEMIRING.sum([False, True]) is True
        assert BOOL_SEMIRING.product([True, False]) is False
        assert BOOL_SEMIRING.is_zero(False)
        assert not BOOL_SEMIRING.is_zero(True)

    def test_product_without_one(self):
        concat = Semiring(combine=min, sequence=lambda a, b: a + b, zero="~")
        assert concat.product(["a", "b", "c"]) == "abc"
        with pytest.raises(TypeError):
            concat.product([])

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            INTEGER_SEMIRING.zero = 1  # type: ignore[misc]


class TestOrderSemiring:
    def test_str(self):
        assert [str(o) for o in Order] == ["?", "=<", "<"]

    def test_combine_keeps_the_most_informative(self):
        assert combine_orders(Order.UNKNOWN, Order.LE) is Order.LE
        assert combine_orders(Order.LT, Order.LE) is Order.LT

    def test_sequence(self):
        assert sequence_orders(Order.LE, Order.LE) is Order.LE
        assert sequence_orders(Order.LE, Order.LT) is Order.LT
        assert sequence_orders(Order.LT, Order.UNKNOWN) is Order.UNKNOWN

    @pytest.mark.parametrize("a, b, c", list(product(Order, repeat=3)))
    def test_laws(self, a, b, c):
        plus, times = ORDER_SEMIRING.combine, ORDER_SEMIRING.sequence
        assert plus(plus(a, b), c) == plus(a, plus(b, c))
        assert plus(a, b) == plus(b, a)
        assert times(times(a, b), c) == times(a, times(b, c))
        assert times(a, plus(b, c)) == plus(times(a, b), times(a, c))
        assert times(plus(a, b), c) == plus(times(a, c), times(b, c))

    @pytest.mark.parametrize("a", list(Order))
    def test_identities(self, a):
        assert ORDER_SEMIRING.combine(ORDER_SEMIRING.zero, a) == a
        assert ORDER_SEMIRING.sequence(ORDER_SEMIRING.one, a) == a
        assert ORDER_SEMIRING.sequence(a, ORDER_SEMIRING.one) == a
        assert ORDER_SEMIRING.sequence(ORDER_SEMIRING.zero, a) == ORDER_SEMIRING.zero
