"""Tests for termination/size_change.py"""

from localtypes import Size
from termination import Call, Order, call_graph, check_termination, from_lists
from termination.size_change import compose_call_sets, is_decreasing, is_idempotent

U, LE, LT = Order.UNKNOWN, Order.LE, Order.LT


def call_matrix(rows):
    return from_lists(Size(len(rows), len(rows[0])), rows, zero=U)


def call(source, target, rows) -> Call:
    return Call.from_lists(source, target, Size(len(rows), len(rows[0])), rows)


class TestCallMatrices:
    def test_from_lists_drops_unknown(self):
        c = call("f", "g", [[LT, U], [U, LE]])
        assert len(c.matrix.entries) == 2
        assert c.matrix == call_matrix([[LT, U], [U, LE]])

    def test_is_idempotent(self):
        assert is_idempotent(call_matrix([[LT, U], [U, U]]))
        assert is_idempotent(call_matrix([[LE, U], [U, LT]]))
        assert not is_idempotent(call_matrix([[U, LE], [LE, U]]))

    def test_is_decreasing(self):
        assert is_decreasing(call_matrix([[LE, U], [U, LT]]))
        assert not is_decreasing(call_matrix([[LE, LT], [LT, LE]]))

    def test_compose_call_sets(self):
        swap = call_matrix([[U, LE], [LE, U]])
        identity = call_matrix([[LE, U], [U, LE]])
        assert compose_call_sets(frozenset({swap}), frozenset({swap, identity})) == {
            identity,
            swap,
        }
        assert compose_call_sets(frozenset(), frozenset({swap})) == frozenset()


class TestCallGraph:
    def test_repeated_calls_are_gathered(self):
        first = call("f", "f", [[LT]])
        second = call("f", "f", [[LE]])
        g = call_graph([first, second])
        assert g.lookup("f", "f") == {first.matrix, second.matrix}

    def test_definitions_without_calls(self):
        g = call_graph([call("f", "g", [[LE]])], definitions=["f", "g", "main"])
        assert g.source_nodes() == {"f", "g", "main"}
        assert g.neighbours("main") == []


class TestCheckTermination:
    def test_structural_recursion(self):
        result = check_termination([call("f", "f", [[LT]])])
        assert result.terminates
        assert result.offending == {}

    def test_self_call_without_decrease(self):
        result = check_termination([call("f", "f", [[LE]])])
        assert not result.terminates
        assert result.offending == {"f": (call_matrix([[LE]]),)}

    def test_ackermann(self):
        calls = [
            call("ack", "ack", [[LT, U], [U, U]]),
            call("ack", "ack", [[LE, U], [U, LT]]),
        ]
        result = check_termination(calls)
        assert result.terminates
        assert result.closure.lookup("ack", "ack") == {
            call_matrix([[LT, U], [U, U]]),
            call_matrix([[LE, U], [U, LT]]),
        }

    def test_swapping_arguments(self):
        result = check_termination([call("f", "f", [[U, LE], [LE, U]])])
        assert not result.terminates
        assert result.offending == {"f": (call_matrix([[LE, U], [U, LE]]),)}

    def test_swapping_with_decrease(self):
        # f(x, y) = f(y, x - 1)
        result = check_termination([call("f", "f", [[U, LT], [LE, U]])])
        assert result.terminates

    def test_mutual_recursion(self):
        calls = [call("even", "odd", [[LT]]), call("odd", "even", [[LT]])]
        result = check_termination(calls)
        assert result.terminates
        assert result.closure.lookup("even", "even") == {call_matrix([[LT]])}
        assert result.closure.lookup("even", "odd") == {call_matrix([[LT]])}

    def test_mutual_recursion_without_decrease(self):
        calls = [call("f", "g", [[LE]]), call("g", "f", [[LE]]), call("main", "f", [[U]])]
        result = check_termination(calls)
        assert set(result.offending) == {"f", "g"}

    def test_no_calls(self):
        result = check_termination([], definitions=["main"])
        assert result.terminates
        assert result.closure.source_nodes() == {"main"}
