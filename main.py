"""
Check a few classic recursion schemes for termination.

Each example is a list of calls between definitions. Every call carries the
matrix relating the caller's arguments (rows) to the callee's (columns).
"""

import logging
from collections.abc import Sequence

from constants import DEBUG, LOG_FORMAT, LOG_LEVEL, MAX_FIXPOINT_ITERATIONS
from localtypes import Size
from termination import Call, Order, check_termination, to_lists
from termination.size_change import CallMatrix

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

U, LE, LT = Order.UNKNOWN, Order.LE, Order.LT


def call(source: str, target: str, rows: Sequence[Sequence[Order]]) -> Call[str]:
    return Call.from_lists(source, target, Size(len(rows), len(rows[0])), rows)


EXAMPLES: dict[str, list[Call[str]]] = {
    # ack(m, n) = ack(m - 1, ...) | ack(m, n - 1)
    "ackermann": [
        call("ack", "ack", [[LT, U], [U, U]]),
        call("ack", "ack", [[LE, U], [U, LT]]),
    ],
    # even(n) = odd(n - 1), odd(n) = even(n - 1)
    "even-odd": [
        call("even", "odd", [[LT]]),
        call("odd", "even", [[LT]]),
    ],
    # f(x, y) = f(y, x)
    "swap": [call("f", "f", [[U, LE], [LE, U]])],
    # f(x, y) = f(y, x - 1)
    "swap-decrease": [call("f", "f", [[U, LT], [LE, U]])],
    # f(x) = g(x), g(x) = f(x)
    "loop": [
        call("f", "g", [[LE]]),
        call("g", "f", [[LE]]),
    ],
}


def format_matrix(m: CallMatrix) -> str:
    return " / ".join(
        " ".join(f"{str(o):>2}" for o in row) for row in to_lists(m, zero=Order.UNKNOWN)
    )


def check_example(name: str, max_iterations: int | None = MAX_FIXPOINT_ITERATIONS) -> bool:
    result = check_termination(EXAMPLES[name], max_iterations=max_iterations)
    logger.info(
        f"{name}: {len(result.closure)} closed call set(s) over "
        f"{len(result.closure.source_nodes())} definition(s)"
    )

    if result.terminates:
        logger.info(f"{name}: terminates")
    for definition, matrices in result.offending.items():
        for m in matrices:
            logger.info(f"{name}: {definition} may loop on [{format_matrix(m)}]")
    return result.terminates


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Size-change termination examples")
    parser.add_argument(
        "examples",
        nargs="*",
        help=f"Examples to check among {', '.join(EXAMPLES)}, all by default",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=MAX_FIXPOINT_ITERATIONS,
        help="Cap on fixpoint rounds",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    unknown = [example for example in args.examples if example not in EXAMPLES]
    if unknown:
        parser.error(f"Unknown example(s): {', '.join(unknown)}")

    if args.debug or DEBUG:
        logging.getLogger().setLevel(logging.DEBUG)

    for example in args.examples or EXAMPLES:
        check_example(example, args.max_iterations)
