"""
Linear and box constraints.

Constraint sets are immutable: matrices and vectors are copied into
read-only numpy arrays on construction. The kind of a linear constraint
set is an explicit ``ConstraintKind`` tag.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence, Union

import numpy as np


class ConstraintKind(Enum):
    """Kinds of constraints in a linear program."""
    EQUALITY = auto()
    GREATER_THAN = auto()
    LESS_THAN = auto()
    BOX = auto()


_SYMBOLS = {
    ConstraintKind.EQUALITY: "=",
    ConstraintKind.GREATER_THAN: ">=",
    ConstraintKind.LESS_THAN: "<=",
}


def _frozen(values, ndim: int) -> np.ndarray:
    """Read-only float copy of ``values`` with the given number of dimensions."""
    arr = np.array(values, dtype=float)
    if ndim == 2 and arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != ndim:
        raise ValueError(f"Expected a {ndim}-d array, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


class LinearConstraints:
    """
    A set of linear constraints ``A x (op) b``.

    Use the ``equality``, ``greater_than`` and ``less_than`` constructors
    rather than passing the kind directly.
    """

    def __init__(self, kind: ConstraintKind, A, b):
        if kind == ConstraintKind.BOX:
            raise ValueError("Box constraints are represented by BoxConstraints")

        self.kind = kind
        self.A = _frozen(A, 2)
        self.b = _frozen(b, 1)

        if self.A.shape[0] != self.b.shape[0]:
            raise ValueError(
                f"A has {self.A.shape[0]} rows but b has {self.b.shape[0]} entries"
            )

    @classmethod
    def equality(cls, A, b) -> "LinearConstraints":
        """Constraints ``A x = b``."""
        return cls(ConstraintKind.EQUALITY, A, b)

    @classmethod
    def greater_than(cls, A, b) -> "LinearConstraints":
        """Constraints ``A x >= b``."""
        return cls(ConstraintKind.GREATER_THAN, A, b)

    @classmethod
    def less_than(cls, A, b) -> "LinearConstraints":
        """Constraints ``A x <= b``."""
        return cls(ConstraintKind.LESS_THAN, A, b)

    @property
    def dimension(self) -> int:
        """Number of variables."""
        return self.A.shape[1]

    @property
    def size(self) -> int:
        """Number of constraints."""
        return self.A.shape[0]

    def evaluate(self, x: Sequence[float]) -> np.ndarray:
        """Residuals ``A x - b``."""
        return self.A @ np.asarray(x, dtype=float) - self.b

    def is_satisfied(self, x: Sequence[float], epsilon: float = 1e-8) -> bool:
        """Check every constraint at ``x`` within ``epsilon``."""
        return is_satisfied(self, x, epsilon)

    def active_rows(self, x: Sequence[float], epsilon: float = 1e-8) -> list[int]:
        """0-based indices of the rows that hold with equality at ``x``."""
        r = self.evaluate(x)
        return [i for i in range(self.size) if abs(r[i]) < epsilon]

    def to_greater_than(self) -> "LinearConstraints":
        """Express ``A x <= b`` as ``-A x >= -b``."""
        if self.kind == ConstraintKind.GREATER_THAN:
            return self
        if self.kind == ConstraintKind.LESS_THAN:
            return LinearConstraints.greater_than(-self.A, -self.b)
        raise ValueError("Only inequalities can be converted")

    def to_less_than(self) -> "LinearConstraints":
        """Express ``A x >= b`` as ``-A x <= -b``."""
        if self.kind == ConstraintKind.LESS_THAN:
            return self
        if self.kind == ConstraintKind.GREATER_THAN:
            return LinearConstraints.less_than(-self.A, -self.b)
        raise ValueError("Only inequalities can be converted")

    @staticmethod
    def concat(*groups: Optional["LinearConstraints"]) -> Optional["LinearConstraints"]:
        """
        Stack constraint sets of the same kind.

        None entries are skipped; returns None if every entry is None.
        """
        present = [g for g in groups if g is not None]
        if not present:
            return None

        kind = present[0].kind
        for g in present[1:]:
            if g.kind != kind:
                raise ValueError("Constraint groups must all have the same kind")
            if g.dimension != present[0].dimension:
                raise ValueError("Constraint groups must all have the same dimension")

        return LinearConstraints(
            kind,
            np.vstack([g.A for g in present]),
            np.concatenate([g.b for g in present]),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, LinearConstraints):
            return NotImplemented
        return (
            self.kind == other.kind
            and np.array_equal(self.A, other.A)
            and np.array_equal(self.b, other.b)
        )

    def __repr__(self) -> str:
        rows = []
        for i in range(self.size):
            terms = " + ".join(
                f"{a:g}*x{j + 1}" for j, a in enumerate(self.A[i]) if a != 0
            ) or "0"
            rows.append(f"{terms} {_SYMBOLS[self.kind]} {self.b[i]:g}")
        return f"<LinearConstraints {self.kind.name} [{'; '.join(rows)}]>"


@dataclass(frozen=True)
class Bound:
    """Bound ``lower <= x[index] <= upper`` on one variable (1-indexed)."""
    index: int
    lower: float = float("-inf")
    upper: float = float("inf")

    def __post_init__(self):
        if self.lower > self.upper:
            raise ValueError(
                f"Empty bound for x[{self.index}]: [{self.lower}, {self.upper}]"
            )


class BoxConstraints:
    """
    Per-variable bounds.

    A variable without an explicit bound keeps the default domain
    ``[0, +inf)``; a bound replaces that default entirely, so
    ``Bound(i, -inf, inf)`` declares ``x[i]`` free.
    """

    kind = ConstraintKind.BOX

    def __init__(self, dimension: int, bounds: Sequence[Bound] = ()):
        self.dimension = dimension
        merged: dict[int, Bound] = {}
        for bound in bounds:
            if not 1 <= bound.index <= dimension:
                raise ValueError(
                    f"Bound index {bound.index} out of range 1..{dimension}"
                )
            merged[bound.index] = bound
        self.bounds: tuple[Bound, ...] = tuple(merged[i] for i in sorted(merged))

    def bound(self, index: int) -> Optional[Bound]:
        """Explicit bound of ``x[index]``, if any."""
        for b in self.bounds:
            if b.index == index:
                return b
        return None

    def lower_bounds(self) -> np.ndarray:
        """Lower bound of every variable (default 0)."""
        lower = np.zeros(self.dimension)
        for b in self.bounds:
            lower[b.index - 1] = b.lower
        return lower

    def upper_bounds(self) -> np.ndarray:
        """Upper bound of every variable (default +inf)."""
        upper = np.full(self.dimension, np.inf)
        for b in self.bounds:
            upper[b.index - 1] = b.upper
        return upper

    def is_free(self, index: int) -> bool:
        """Whether ``x[index]`` may take negative values."""
        b = self.bound(index)
        return b is not None and b.lower < 0

    def is_satisfied(self, x: Sequence[float], epsilon: float = 1e-8) -> bool:
        return is_satisfied(self, x, epsilon)

    def with_bounds(self, bounds: Sequence[Bound]) -> "BoxConstraints":
        """New box constraints where ``bounds`` replace existing ones by index."""
        return BoxConstraints(self.dimension, list(self.bounds) + list(bounds))

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoxConstraints):
            return NotImplemented
        return self.dimension == other.dimension and self.bounds == other.bounds

    def __repr__(self) -> str:
        parts = ", ".join(f"x{b.index} in [{b.lower:g}, {b.upper:g}]" for b in self.bounds)
        return f"<BoxConstraints [{parts}]>"


Constraints = Union[LinearConstraints, BoxConstraints]


def is_satisfied(
    constraints: Optional[Constraints],
    x: Sequence[float],
    epsilon: float = 1e-8,
) -> bool:
    """Check any kind of constraint set at ``x``; None is always satisfied."""
    if constraints is None:
        return True

    x = np.asarray(x, dtype=float)
    kind = constraints.kind
    if kind == ConstraintKind.BOX:
        return bool(
            np.all(x >= constraints.lower_bounds() - epsilon)
            and np.all(x <= constraints.upper_bounds() + epsilon)
        )

    r = constraints.evaluate(x)
    if kind == ConstraintKind.EQUALITY:
        return bool(np.all(np.abs(r) <= epsilon))
    elif kind == ConstraintKind.GREATER_THAN:
        return bool(np.all(r >= -epsilon))
    elif kind == ConstraintKind.LESS_THAN:
        return bool(np.all(r <= epsilon))
    raise ValueError(f"Unsupported constraint kind: {kind}")
