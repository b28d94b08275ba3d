"""
OpenBB: Open-Source Branch-and-Bound Framework

A small, extensible branch-and-bound engine with pluggable node ordering,
and its application to (mixed) integer linear programming using LP
relaxations solved with HiGHS.
"""

__version__ = "0.1.0"

# Core engine
from openbb.core import (
    ActiveList,
    BBConfig,
    BBNode,
    BBStatus,
    BestFirstList,
    BranchAndBound,
    BreadthFirstList,
    DepthFirstList,
    TreeStats,
    create_active_list,
)

# ILP model (must load before branching)
from openbb.ilp import (
    Bound,
    BoxConstraints,
    BruteForceILPMinimizer,
    BruteForceSolution,
    ConstraintKind,
    ILPProblem,
    IntegerDomain,
    LinearConstraints,
    LPResult,
    LPStatus,
    is_satisfied,
    solve_relaxation,
)

# Branching
from openbb.branching import (
    BranchingCandidate,
    BranchingDecision,
    BranchingStrategy,
    FirstFractionalBranching,
    MostFractionalBranching,
)

from openbb.ilp.node import ILPNode

# Solver
from openbb.solver import ILPBranchAndBound, ILPSolution

__all__ = [
    # Version
    "__version__",
    # Core
    "BBNode",
    "ActiveList",
    "DepthFirstList",
    "BestFirstList",
    "BreadthFirstList",
    "create_active_list",
    "BranchAndBound",
    "BBConfig",
    "BBStatus",
    "TreeStats",
    # ILP
    "ConstraintKind",
    "LinearConstraints",
    "Bound",
    "BoxConstraints",
    "is_satisfied",
    "ILPProblem",
    "LPResult",
    "LPStatus",
    "solve_relaxation",
    "ILPNode",
    "IntegerDomain",
    "BruteForceILPMinimizer",
    "BruteForceSolution",
    # Branching
    "BranchingStrategy",
    "BranchingCandidate",
    "BranchingDecision",
    "FirstFractionalBranching",
    "MostFractionalBranching",
    # Solver
    "ILPBranchAndBound",
    "ILPSolution",
]
