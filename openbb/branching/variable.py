"""
Variable branching strategies.

Branching on a fractional integer variable x[i] = v creates two children:
x[i] <= floor(v) and x[i] >= ceil(v).
"""

from typing import List, Sequence

from openbb.branching.base import (
    BranchingCandidate,
    BranchingDecision,
    BranchingStrategy,
)


def _candidate(index: int, value: float, score: float) -> BranchingCandidate:
    return BranchingCandidate(
        score=score,
        decisions=[BranchingDecision.floor(index, value), BranchingDecision.ceil(index, value)],
        metadata={"variable_index": index, "value": value},
    )


class FirstFractionalBranching(BranchingStrategy):
    """
    Branch on the first fractional integer variable.

    Of the fractional integer variables, the one with the smallest index
    is chosen. This fixes the shape of the tree deterministically.
    """

    def __init__(self):
        super().__init__("FirstFractionalBranching")

    def select_branching_candidates(
        self,
        problem,  # ILPProblem
        solution: Sequence[float],
    ) -> List[BranchingCandidate]:
        indices = problem.non_integral_indices(solution)
        candidates = [
            _candidate(i, float(solution[i - 1]), score=-float(k))
            for k, i in enumerate(indices)
        ]
        return candidates


class MostFractionalBranching(BranchingStrategy):
    """
    Branch on the variable whose fractional part is closest to 0.5.

    Scores are highest at fractionality 0.5 (most balanced split). Ties
    go to the smallest index.
    """

    def __init__(self, max_candidates: int = 10):
        """
        Initialize most-fractional branching.

        Args:
            max_candidates: Maximum candidates to return
        """
        super().__init__("MostFractionalBranching")
        self.max_candidates = max_candidates

    def select_branching_candidates(
        self,
        problem,  # ILPProblem
        solution: Sequence[float],
    ) -> List[BranchingCandidate]:
        candidates = []

        for i in problem.non_integral_indices(solution):
            val = float(solution[i - 1])
            frac = val - int(val // 1)
            score = 1.0 - abs(frac - 0.5) * 2
            candidate = _candidate(i, val, score)
            candidate.metadata["fractionality"] = frac
            candidates.append(candidate)

        # sort is stable, so equal scores keep index order
        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates[: self.max_candidates]
