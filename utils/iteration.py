"""
Fixpoint iteration.

Functions:
    iterate_until(done, step, start) - Repeat a step until two consecutive
                                       values satisfy a stopping relation
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from constants import MAX_FIXPOINT_ITERATIONS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FixpointNotReached(RuntimeError):
    """An iteration did not stabilize within its budget of rounds."""


def iterate_until(
    done: Callable[[T, T], bool],
    step: Callable[[T], T],
    start: T,
    max_iterations: int | None = MAX_FIXPOINT_ITERATIONS,
) -> T:
    """
    Applies `step` until `done(new, old)` holds and returns `new`.

    Args:
        done: Stopping relation, called with the newest value first.
        step: Function iterated from `start`.
        start: Initial value.
        max_iterations: Maximum number of `step` applications, None for
            no limit.

    Raises:
        FixpointNotReached: If `max_iterations` rounds were not enough.
    """
    current = start
    rounds = 0
    while max_iterations is None or rounds < max_iterations:
        following = step(current)
        rounds += 1
        if done(following, current):
            logger.debug(f"Fixpoint reached after {rounds} round(s)")
            return following
        current = following

    raise FixpointNotReached(f"No fixpoint after {max_iterations} iterations")
