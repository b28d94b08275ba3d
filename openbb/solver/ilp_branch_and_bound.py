"""
Branch-and-bound solver for integer linear programs.

This module provides the ILPBranchAndBound facade that wires an ILP
problem into the generic engine:
- Root node (LP relaxation solved with HiGHS)
- Active list (depth-first unless another ordering is supplied)
- Branching strategy (first fractional variable unless overridden)
"""

import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from openbb.branching.base import BranchingStrategy
from openbb.core.selection import ActiveList, DepthFirstList
from openbb.core.tree import BBConfig, BBStatus, BranchAndBound, TreeStats
from openbb.ilp.node import ILPNode
from openbb.ilp.problem import ILPProblem
from openbb.ilp.relaxation import RelaxationSolver


@dataclass
class ILPSolution:
    """Solution from ILP branch-and-bound."""
    status: BBStatus
    incumbent: Optional[ILPNode] = None

    # Statistics
    nodes_explored: int = 0
    total_time: float = 0.0
    stats: TreeStats = field(default_factory=TreeStats)

    def minimum(self) -> float:
        """Objective of the incumbent; +inf if no solution was found."""
        if self.incumbent is None:
            return float("inf")
        return self.incumbent.value()

    def minimizer(self) -> Optional[np.ndarray]:
        """Solution of the incumbent; None if no solution was found."""
        if self.incumbent is None:
            return None
        return self.incumbent.solution()

    def is_optimal(self) -> bool:
        """Check if the solution is proven optimal."""
        return self.status == BBStatus.OPTIMAL

    def is_feasible(self) -> bool:
        """Check if a feasible solution was found."""
        return self.incumbent is not None


class ILPBranchAndBound:
    """
    Integer linear programming by branch-and-bound.

    Example:
        from openbb import ILPBranchAndBound, ILPProblem, LinearConstraints

        problem = ILPProblem(
            c=[-1, -1],
            less=LinearConstraints.less_than([[7, 1], [-1, 1]], [15, 1]),
            integers=[1, 2],
        )

        solution = ILPBranchAndBound().solve(problem)
        print(f"Minimum: {solution.minimum()}, x = {solution.minimizer()}")
    """

    def __init__(
        self,
        active_list_factory: Optional[Callable[[], ActiveList]] = None,
        branching: Optional[BranchingStrategy] = None,
        solver: Optional[RelaxationSolver] = None,
        config: Optional[BBConfig] = None,
    ):
        """
        Initialize the solver.

        Args:
            active_list_factory: Creates a new active list for each solve
                (default: depth-first stack)
            branching: Branching strategy (default: first fractional variable)
            solver: LP relaxation solver (default: HiGHS)
            config: Engine configuration
        """
        self.active_list_factory = active_list_factory or DepthFirstList
        self.branching = branching
        self.solver = solver
        self.config = config or BBConfig()

        self._engine: Optional[BranchAndBound] = None

    def solve(self, problem: ILPProblem) -> ILPSolution:
        """
        Solve the problem; the search runs to completion before returning.

        Args:
            problem: The ILP problem

        Returns:
            ILPSolution with status, incumbent and statistics
        """
        start = time.time()

        root = ILPNode(
            problem,
            solver=self.solver,
            branching=self.branching,
            ids=itertools.count(1),
        )

        self._engine = BranchAndBound(self.active_list_factory(), root, self.config)
        incumbent = self._engine.search()

        return ILPSolution(
            status=self._engine.status,
            incumbent=incumbent,
            nodes_explored=self._engine.nodes_explored,
            total_time=time.time() - start,
            stats=self._engine.stats,
        )

    @property
    def engine(self) -> Optional[BranchAndBound]:
        """Engine of the most recent solve."""
        return self._engine
