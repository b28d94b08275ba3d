"""
Integer linear programming on top of the branch-and-bound core.

The node type, ``ILPNode``, lives in ``openbb.ilp.node``.
"""

from openbb.ilp.bruteforce import (
    BruteForceILPMinimizer,
    BruteForceSolution,
    IntegerDomain,
)
from openbb.ilp.constraints import (
    Bound,
    BoxConstraints,
    ConstraintKind,
    LinearConstraints,
    is_satisfied,
)
from openbb.ilp.problem import DEFAULT_EPSILON, ILPProblem
from openbb.ilp.relaxation import LPResult, LPStatus, solve_relaxation

__all__ = [
    "ConstraintKind",
    "LinearConstraints",
    "Bound",
    "BoxConstraints",
    "is_satisfied",
    "ILPProblem",
    "DEFAULT_EPSILON",
    "LPResult",
    "LPStatus",
    "solve_relaxation",
    "IntegerDomain",
    "BruteForceILPMinimizer",
    "BruteForceSolution",
]
