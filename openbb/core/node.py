"""
Abstract branch-and-bound node.

A node stands for one subproblem of the search. The tree is implicit:
nodes never keep references to their parent or children, and
``branching()`` regenerates the children each time it is called.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence


class BBNode(ABC):
    """A subproblem in a branch-and-bound search (minimization)."""

    @abstractmethod
    def solution(self) -> Optional[Sequence[float]]:
        """
        Best known solution of the relaxed subproblem.

        Returns:
            An immutable snapshot of the solution, or None when the
            relaxation is infeasible
        """
        pass

    @abstractmethod
    def value(self) -> float:
        """
        Optimal value of the relaxation.

        This is a lower bound on every feasible point reachable from the
        node; +inf when the relaxation is infeasible.
        """
        pass

    @abstractmethod
    def is_candidate(self) -> bool:
        """Whether ``solution()`` satisfies every constraint of the original problem."""
        pass

    @abstractmethod
    def branching(self) -> Sequence["BBNode"]:
        """
        Split the node into children.

        The children's feasible regions must together cover every feasible
        point of the original problem still reachable from this node.
        """
        pass

    @property
    def is_infeasible(self) -> bool:
        """Whether the relaxation has no solution."""
        return self.value() == float("inf")
