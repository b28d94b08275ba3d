"""
LP relaxation of an ILP problem, solved with HiGHS.

Integrality is ignored. The outcome is returned as an ``LPResult`` whose
status tells whether a bounded minimizer was found; solver failures are
reported through the status rather than raised.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Sequence

import numpy as np

from openbb.ilp.constraints import ConstraintKind
from openbb.ilp.problem import ILPProblem


class LPStatus(Enum):
    """Outcome of an LP solve."""
    OPTIMAL = auto()
    INFEASIBLE = auto()
    UNBOUNDED = auto()
    ERROR = auto()


@dataclass(frozen=True)
class LPResult:
    """Result of an LP solve: a bounded minimizer, or the reason there is none."""
    status: LPStatus
    objective: float = float("inf")
    x: Optional[np.ndarray] = None

    @staticmethod
    def optimal(objective: float, x: Sequence[float]) -> "LPResult":
        """A bounded minimizer."""
        arr = np.array(x, dtype=float)
        arr.flags.writeable = False
        return LPResult(status=LPStatus.OPTIMAL, objective=float(objective), x=arr)

    @staticmethod
    def failed(status: LPStatus) -> "LPResult":
        """No minimizer; the objective is +inf."""
        return LPResult(status=status)

    @property
    def is_optimal(self) -> bool:
        """Whether a bounded minimizer was found."""
        return self.status == LPStatus.OPTIMAL


RelaxationSolver = Callable[[ILPProblem], LPResult]


def solve_relaxation(problem: ILPProblem) -> LPResult:
    """
    Solve the LP relaxation of ``problem``.

    Args:
        problem: The ILP problem; its integer indices are ignored

    Returns:
        LPResult with status OPTIMAL and the minimizer, or a failure status
    """
    try:
        import highspy
    except ImportError:
        raise ImportError("HiGHS is required. Install with: pip install highspy")

    inf = highspy.kHighsInf

    highs = highspy.Highs()
    highs.setOptionValue('output_flag', False)
    highs.setOptionValue('log_to_console', False)
    highs.changeObjectiveSense(highspy.ObjSense.kMinimize)

    # One column per variable, with its box bounds
    lower = problem.lower_bounds()
    upper = problem.upper_bounds()
    for j in range(problem.dimension):
        highs.addCol(
            float(problem.c[j]),
            float(lower[j]) if np.isfinite(lower[j]) else -inf,
            float(upper[j]) if np.isfinite(upper[j]) else inf,
            0, [], [],
        )

    # One row per linear constraint: lower <= a . x <= upper
    for constraints in (problem.greater, problem.less, problem.equal):
        if constraints is None:
            continue
        for i in range(constraints.size):
            a = constraints.A[i]
            b = float(constraints.b[i])
            indices = [int(j) for j in np.flatnonzero(a)]
            values = [float(a[j]) for j in indices]

            if constraints.kind == ConstraintKind.GREATER_THAN:
                row_lower, row_upper = b, inf
            elif constraints.kind == ConstraintKind.LESS_THAN:
                row_lower, row_upper = -inf, b
            else:
                row_lower, row_upper = b, b

            highs.addRow(row_lower, row_upper, len(indices), indices, values)

    highs.run()
    status = highs.getModelStatus()

    if status == highspy.HighsModelStatus.kOptimal:
        info = highs.getInfo()
        sol = highs.getSolution()
        return LPResult.optimal(
            info.objective_function_value,
            list(sol.col_value)[: problem.dimension],
        )
    if status == highspy.HighsModelStatus.kInfeasible:
        return LPResult.failed(LPStatus.INFEASIBLE)
    if status in (
        highspy.HighsModelStatus.kUnbounded,
        highspy.HighsModelStatus.kUnboundedOrInfeasible,
    ):
        return LPResult.failed(LPStatus.UNBOUNDED)
    return LPResult.failed(LPStatus.ERROR)
