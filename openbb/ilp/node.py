"""
Branch-and-bound node for integer linear programs.

Constructing a node solves the LP relaxation of its problem right away;
the relaxation's optimum is the node's bound. Children add one bound on
a fractional integer variable each and are solved as they are created.
"""

import itertools
from typing import Iterator, List, Optional

import numpy as np

from openbb.branching.base import BranchingStrategy
from openbb.branching.variable import FirstFractionalBranching
from openbb.core.node import BBNode
from openbb.ilp.problem import ILPProblem
from openbb.ilp.relaxation import LPResult, RelaxationSolver, solve_relaxation


class ILPNode(BBNode):
    """A subproblem of an ILP branch-and-bound search."""

    def __init__(
        self,
        problem: ILPProblem,
        solver: Optional[RelaxationSolver] = None,
        branching: Optional[BranchingStrategy] = None,
        ids: Optional[Iterator[int]] = None,
    ):
        """
        Create a node and solve its LP relaxation.

        Args:
            problem: The subproblem
            solver: LP relaxation solver (default: HiGHS)
            branching: Branching strategy (default: first fractional variable)
            ids: Source of node ids shared by every node of one search;
                a fresh counter starting at 1 if not given
        """
        self.problem = problem
        self._solver = solver or solve_relaxation
        self._branching = branching or FirstFractionalBranching()
        self._ids = ids if ids is not None else itertools.count(1)
        self.id = next(self._ids)

        self._relaxation: LPResult = self._solver(problem)

    @property
    def relaxation(self) -> LPResult:
        """Result of the LP relaxation."""
        return self._relaxation

    def solution(self) -> Optional[np.ndarray]:
        if not self._relaxation.is_optimal:
            return None
        return self._relaxation.x.copy()

    def value(self) -> float:
        if not self._relaxation.is_optimal:
            return float("inf")
        return self._relaxation.objective

    def is_candidate(self) -> bool:
        if not self._relaxation.is_optimal:
            return False
        return len(self.problem.non_integral_indices(self._relaxation.x)) == 0

    def branching(self) -> List["ILPNode"]:
        """
        Split on a fractional integer variable.

        Returns:
            The floor child ``x[i] <= floor(x_i*)`` followed by the ceil
            child ``x[i] >= ceil(x_i*)``

        Raises:
            ValueError: if the node is infeasible or already a candidate
        """
        if not self._relaxation.is_optimal:
            raise ValueError(f"Node {self.id} is infeasible and cannot be branched")

        candidate = self._branching.select_best_candidate(self.problem, self._relaxation.x)
        if candidate is None:
            raise ValueError(f"Node {self.id} has no fractional integer variable")

        return [
            ILPNode(
                self.problem.branch(decision),
                solver=self._solver,
                branching=self._branching,
                ids=self._ids,
            )
            for decision in candidate.decisions
        ]

    def __repr__(self) -> str:
        if self._relaxation.is_optimal:
            return f"<ILPNode {self.id} value={self.value():.6g} x={self._relaxation.x.tolist()}>"
        return f"<ILPNode {self.id} {self._relaxation.status.name}>"

    def __str__(self) -> str:
        lines = [f"node {self.id}:", "problem:", str(self.problem), "solution:"]
        if self._relaxation.is_optimal:
            lines.append(f"{self._relaxation.x.tolist()} -> {self.value():.6g}")
        else:
            lines.append(self._relaxation.status.name)
        return "\n".join(lines)
