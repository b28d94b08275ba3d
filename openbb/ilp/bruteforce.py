"""
Brute-force minimization of small integer linear programs.

Every combination of values of the integer variables is enumerated;
for each one the integer variables are fixed and the remaining LP over
the continuous variables is solved. Only practical for tiny domains,
mostly as a reference to check branch-and-bound results against.
"""

import itertools
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from openbb.ilp.problem import ILPProblem
from openbb.ilp.relaxation import RelaxationSolver, solve_relaxation


@dataclass(frozen=True)
class IntegerDomain:
    """The values an integer variable may take (index counts from 1)."""
    index: int
    values: tuple[int, ...]

    @staticmethod
    def range(index: int, lower: int, upper: int, step: int = 1) -> "IntegerDomain":
        """Domain ``lower, lower + step, ..., upper`` (inclusive)."""
        return IntegerDomain(index, tuple(range(lower, upper + 1, step)))


@dataclass
class BruteForceSolution:
    """Best point found by enumeration."""
    objective: float = float("inf")
    x: Optional[np.ndarray] = None
    combinations: int = 0

    def minimum(self) -> float:
        """Best objective value; +inf if no combination was feasible."""
        return self.objective

    def minimizer(self) -> Optional[np.ndarray]:
        """Best point, or None if no combination was feasible."""
        return None if self.x is None else self.x.copy()

    def is_feasible(self) -> bool:
        return self.x is not None


class BruteForceILPMinimizer:
    """Minimize an ILP by enumerating the domains of its integer variables."""

    def __init__(self, solver: Optional[RelaxationSolver] = None):
        """
        Args:
            solver: LP solver for the continuous part (default: HiGHS)
        """
        self.solver = solver or solve_relaxation

    def solve(
        self,
        problem: ILPProblem,
        domains: Sequence[IntegerDomain],
    ) -> BruteForceSolution:
        """
        Enumerate every combination of integer values.

        Args:
            problem: The problem to minimize
            domains: One domain per integer variable of ``problem``

        Returns:
            The best feasible point found
        """
        by_index = {d.index: d for d in domains}
        missing = [j for j in problem.integers if j not in by_index]
        if missing:
            raise ValueError(f"No domain given for integer variables {missing}")

        indices = list(problem.integers)
        lower = problem.lower_bounds()
        upper = problem.upper_bounds()
        solution = BruteForceSolution()

        for values in itertools.product(*(by_index[j].values for j in indices)):
            solution.combinations += 1
            # fixing replaces the variable's bound, so check it first
            if any(not lower[j - 1] <= v <= upper[j - 1] for j, v in zip(indices, values)):
                continue
            fixed = problem.fix(dict(zip(indices, values)))
            result = self.solver(fixed)
            if result.is_optimal and result.objective < solution.objective:
                solution.objective = result.objective
                solution.x = np.array(result.x, dtype=float)

        return solution
