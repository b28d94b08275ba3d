"""
Mixed/pure integer linear programming problems.

    minimize    c . x
    subject to  A_gt x >= b_gt
                A_lt x <= b_lt
                A_eq x  = b_eq
                lower <= x <= upper    (default: x >= 0)
                x[j] integer for j in integers (1-indexed)
"""

from typing import Iterable, Mapping, Optional, Sequence, TYPE_CHECKING

import numpy as np

from openbb.ilp.constraints import (
    Bound,
    BoxConstraints,
    ConstraintKind,
    LinearConstraints,
    is_satisfied,
)

if TYPE_CHECKING:
    from openbb.branching.base import BranchingDecision

DEFAULT_EPSILON = 1e-8


class ILPProblem:
    """An immutable (mixed) integer linear program."""

    def __init__(
        self,
        c: Sequence[float],
        greater: Optional[LinearConstraints] = None,
        less: Optional[LinearConstraints] = None,
        equal: Optional[LinearConstraints] = None,
        bounds: Optional[BoxConstraints] = None,
        integers: Iterable[int] = (),
        epsilon: float = DEFAULT_EPSILON,
    ):
        """
        Create an ILP problem.

        Args:
            c: Cost vector
            greater: Constraints ``A x >= b``
            less: Constraints ``A x <= b``
            equal: Constraints ``A x = b``
            bounds: Box constraints; unbounded variables default to ``x >= 0``
            integers: Positions of the integer variables, counting from 1;
                kept sorted and without duplicates
            epsilon: Tolerance when deciding whether a value is an integer
        """
        self._c = np.array(c, dtype=float).ravel()
        self._c.flags.writeable = False
        n = self._c.shape[0]

        for constraints, kind in (
            (greater, ConstraintKind.GREATER_THAN),
            (less, ConstraintKind.LESS_THAN),
            (equal, ConstraintKind.EQUALITY),
        ):
            if constraints is None:
                continue
            if constraints.kind != kind:
                raise ValueError(
                    f"Expected {kind.name} constraints, got {constraints.kind.name}"
                )
            if constraints.dimension != n:
                raise ValueError(
                    f"Constraints have dimension {constraints.dimension}, "
                    f"the cost vector has {n}"
                )

        if bounds is not None and bounds.dimension != n:
            raise ValueError(
                f"Box constraints have dimension {bounds.dimension}, the cost vector has {n}"
            )

        integers = tuple(sorted(set(int(j) for j in integers)))
        for j in integers:
            if not 1 <= j <= n:
                raise ValueError(f"Integer index {j} out of range 1..{n}")

        if epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {epsilon}")

        self._greater = greater
        self._less = less
        self._equal = equal
        self._bounds = bounds
        self._integers = integers
        self._epsilon = float(epsilon)

    @property
    def c(self) -> np.ndarray:
        """Cost vector."""
        return self._c

    @property
    def greater(self) -> Optional[LinearConstraints]:
        """Greater-than-or-equal-to constraints."""
        return self._greater

    @property
    def less(self) -> Optional[LinearConstraints]:
        """Less-than-or-equal-to constraints."""
        return self._less

    @property
    def equal(self) -> Optional[LinearConstraints]:
        """Equality constraints."""
        return self._equal

    @property
    def bounds(self) -> Optional[BoxConstraints]:
        """Box constraints."""
        return self._bounds

    @property
    def integers(self) -> tuple[int, ...]:
        """Positions of the integer variables, counting from 1, in increasing order."""
        return self._integers

    @property
    def epsilon(self) -> float:
        """Integrality tolerance."""
        return self._epsilon

    @property
    def dimension(self) -> int:
        """Number of variables."""
        return self._c.shape[0]

    def lower_bounds(self) -> np.ndarray:
        """Lower bound of every variable."""
        if self._bounds is None:
            return np.zeros(self.dimension)
        return self._bounds.lower_bounds()

    def upper_bounds(self) -> np.ndarray:
        """Upper bound of every variable."""
        if self._bounds is None:
            return np.full(self.dimension, np.inf)
        return self._bounds.upper_bounds()

    def evaluate(self, x: Sequence[float]) -> float:
        """Objective value ``c . x``."""
        return float(self._c @ np.asarray(x, dtype=float))

    def non_integral_indices(self, x: Sequence[float]) -> list[int]:
        """
        Integer positions whose value in ``x`` is not an integer.

        A value counts as an integer when it is within ``epsilon`` of the
        nearest integer.

        Returns:
            Positions counting from 1, in increasing order
        """
        x = np.asarray(x, dtype=float)
        return [
            j for j in self._integers
            if abs(x[j - 1] - np.rint(x[j - 1])) > self._epsilon
        ]

    def first_non_integral_index(self, x: Sequence[float]) -> int:
        """The first non-integral integer position, or 0 if there is none."""
        indices = self.non_integral_indices(x)
        return indices[0] if indices else 0

    def is_feasible(self, x: Sequence[float], epsilon: Optional[float] = None) -> bool:
        """Whether ``x`` satisfies every constraint, integrality included."""
        eps = self._epsilon if epsilon is None else epsilon
        x = np.asarray(x, dtype=float)
        if x.shape != (self.dimension,):
            return False

        box = self._bounds if self._bounds is not None else BoxConstraints(self.dimension)
        return (
            all(
                is_satisfied(constraints, x, eps)
                for constraints in (self._greater, self._less, self._equal, box)
            )
            and not self.non_integral_indices(x)
        )

    def replace(self, **changes) -> "ILPProblem":
        """A copy of this problem with some of its parts replaced."""
        parts = dict(
            c=self._c,
            greater=self._greater,
            less=self._less,
            equal=self._equal,
            bounds=self._bounds,
            integers=self._integers,
            epsilon=self._epsilon,
        )
        parts.update(changes)
        return ILPProblem(**parts)

    def branch(self, decision: "BranchingDecision") -> "ILPProblem":
        """Child problem with the decision's bound added as an inequality."""
        row = decision.to_constraints(self.dimension)
        if row.kind == ConstraintKind.LESS_THAN:
            return self.replace(less=LinearConstraints.concat(self._less, row))
        return self.replace(greater=LinearConstraints.concat(self._greater, row))

    def fix(self, values: Mapping[int, float]) -> "ILPProblem":
        """Child problem where ``x[j] = values[j]`` through box bounds (1-indexed)."""
        fixed = [Bound(j, float(v), float(v)) for j, v in values.items()]
        box = self._bounds if self._bounds is not None else BoxConstraints(self.dimension)
        return self.replace(bounds=box.with_bounds(fixed))

    def __repr__(self) -> str:
        lines = [f"minimize {self._c.tolist()}"]
        for constraints in (self._greater, self._less, self._equal, self._bounds):
            if constraints is not None:
                lines.append(repr(constraints))
        lines.append(f"integers {list(self._integers)} (epsilon={self._epsilon:g})")
        return "\n".join(lines)
