"""
Abstract base classes for branching strategies.

This module defines the interface that all branching strategies must implement.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

import numpy as np

from openbb.ilp.constraints import LinearConstraints

if TYPE_CHECKING:
    from openbb.ilp.problem import ILPProblem


@dataclass(frozen=True)
class BranchingDecision:
    """
    A single variable bound added to a child problem.

    Attributes:
        index: Variable position, counting from 1
        bound: Bound value
        upper: True for ``x[index] <= bound``, False for ``x[index] >= bound``
    """
    index: int
    bound: float
    upper: bool

    @staticmethod
    def floor(index: int, value: float) -> "BranchingDecision":
        """Create the ``x[index] <= floor(value)`` decision."""
        return BranchingDecision(index=index, bound=float(math.floor(value)), upper=True)

    @staticmethod
    def ceil(index: int, value: float) -> "BranchingDecision":
        """Create the ``x[index] >= ceil(value)`` decision."""
        return BranchingDecision(index=index, bound=float(math.ceil(value)), upper=False)

    def to_constraints(self, dimension: int) -> LinearConstraints:
        """The decision as a one-row linear constraint."""
        row = np.zeros(dimension)
        row[self.index - 1] = 1.0
        if self.upper:
            return LinearConstraints.less_than(row, [self.bound])
        return LinearConstraints.greater_than(row, [self.bound])

    def __str__(self) -> str:
        op = "<=" if self.upper else ">="
        return f"x[{self.index}] {op} {self.bound:g}"


@dataclass
class BranchingCandidate:
    """
    A candidate for branching.

    Represents a potential branching choice with associated score
    and the decisions that would result from branching.

    Attributes:
        score: Priority score (higher = more likely to be selected)
        decisions: List of branching decisions (one per child)
        metadata: Additional strategy-specific information
    """
    score: float
    decisions: List[BranchingDecision]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __lt__(self, other: "BranchingCandidate") -> bool:
        """Higher score = higher priority."""
        return self.score < other.score


class BranchingStrategy(ABC):
    """
    Abstract base class for branching strategies.

    A branching strategy decides how to split an ILP node into children.
    It analyzes the relaxed solution and selects branching decisions that:
    1. Exclude the current fractional solution
    2. Cover every integer point of the parent region

    Subclasses must implement:
    - select_branching_candidates(): Find branching opportunities
    """

    def __init__(self, name: str = ""):
        """
        Initialize the branching strategy.

        Args:
            name: Human-readable name for logging
        """
        self.name = name or self.__class__.__name__

    @abstractmethod
    def select_branching_candidates(
        self,
        problem: "ILPProblem",
        solution: Sequence[float],
    ) -> List[BranchingCandidate]:
        """
        Find branching candidates for a relaxed solution.

        Args:
            problem: The subproblem whose relaxation produced ``solution``
            solution: The relaxed solution

        Returns:
            List of branching candidates, sorted by score (descending)
        """
        pass

    def select_best_candidate(
        self,
        problem: "ILPProblem",
        solution: Sequence[float],
    ) -> Optional[BranchingCandidate]:
        """
        Select the best branching candidate.

        Ties go to the candidate listed first.

        Returns:
            The best candidate, or None if no valid candidates exist
        """
        candidates = self.select_branching_candidates(problem, solution)
        if not candidates:
            return None
        return max(candidates, key=lambda c: c.score)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
