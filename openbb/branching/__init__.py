"""
Branching strategies for ILP branch-and-bound.

Available Strategies:
--------------------
- FirstFractionalBranching: Lowest-index fractional variable (default)
- MostFractionalBranching: Fractional part closest to 0.5

Extension Points:
----------------
Users can implement custom branching by subclassing BranchingStrategy
and implementing the select_branching_candidates() method.
"""

from openbb.branching.base import (
    BranchingCandidate,
    BranchingDecision,
    BranchingStrategy,
)
from openbb.branching.variable import (
    FirstFractionalBranching,
    MostFractionalBranching,
)

__all__ = [
    "BranchingStrategy",
    "BranchingCandidate",
    "BranchingDecision",
    "FirstFractionalBranching",
    "MostFractionalBranching",
]
