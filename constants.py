"""
Global constants used throughout the project
"""

import logging

# Upper bound on the rounds of any fixpoint iteration (closure, completion).
# Convergence is the caller's obligation: a semiring whose `combine` keeps
# growing on a cycle would otherwise loop forever. None disables the cap.
MAX_FIXPOINT_ITERATIONS = 10_000

LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"

DEBUG = False
