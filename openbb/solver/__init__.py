"""
ILP branch-and-bound solver.

This module provides the ILPBranchAndBound facade that coordinates:
- The generic engine (openbb.core)
- LP relaxations (HiGHS)
- Branching strategies (Python extensible)
"""

from openbb.solver.ilp_branch_and_bound import (
    ILPBranchAndBound,
    ILPSolution,
)

__all__ = [
    "ILPBranchAndBound",
    "ILPSolution",
]
