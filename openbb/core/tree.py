"""
The branch-and-bound search engine.

The engine owns one active list and the incumbent/upper-bound state and
runs the generic loop: pop a node, prune it by bound, accept it as the
new incumbent or branch it and push the children.
"""

import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional

from openbb.core.node import BBNode
from openbb.core.selection import ActiveList, DepthFirstList


class BBStatus(Enum):
    """Status of a branch-and-bound search."""
    NOT_SOLVED = auto()
    SEARCHING = auto()
    OPTIMAL = auto()
    INFEASIBLE = auto()
    NODE_LIMIT = auto()
    TIME_LIMIT = auto()


@dataclass
class BBConfig:
    """Configuration for the branch-and-bound engine."""
    # Pruning: True discards a node whose value equals the upper bound
    prune_ties: bool = True

    # Search budget (0 = unlimited)
    max_nodes: int = 0
    max_time: float = 0.0  # seconds

    # Logging
    verbose: bool = False
    log_frequency: int = 10  # Log every N nodes

    # Callbacks
    node_callback: Optional[Callable[[BBNode, "BranchAndBound"], None]] = None

    def __post_init__(self):
        if self.log_frequency < 1:
            raise ValueError(f"log_frequency must be at least 1, got {self.log_frequency}")
        if self.max_nodes < 0 or self.max_time < 0:
            raise ValueError("max_nodes and max_time must be non-negative (0 = unlimited)")


@dataclass
class TreeStats:
    """Statistics about one search."""
    nodes_created: int = 0
    nodes_processed: int = 0
    nodes_pruned_bound: int = 0
    nodes_pruned_infeasible: int = 0
    nodes_candidate: int = 0
    nodes_branched: int = 0
    max_open: int = 0
    best_upper_bound: float = float("inf")

    @property
    def nodes_pruned(self) -> int:
        """Nodes discarded without being accepted or branched."""
        return self.nodes_pruned_bound + self.nodes_pruned_infeasible


class BranchAndBound:
    """
    Generic branch-and-bound minimizer.

    Example:
        from openbb import BranchAndBound, BestFirstList

        engine = BranchAndBound(BestFirstList(), root)
        incumbent = engine.search()
        if incumbent is not None:
            print(engine.minimum(), engine.minimizer())
    """

    def __init__(
        self,
        active_list: Optional[ActiveList] = None,
        root: Optional[BBNode] = None,
        config: Optional[BBConfig] = None,
    ):
        """
        Create a branch-and-bound engine.

        Args:
            active_list: Frontier of pending nodes (default: depth-first stack)
            root: Root node; may also be given later with set_initials()
            config: Engine configuration
        """
        self._active = active_list if active_list is not None else DepthFirstList()
        self.config = config or BBConfig()

        self._incumbent: Optional[BBNode] = None
        self._upper = float("inf")
        self._status = BBStatus.NOT_SOLVED
        self._stats = TreeStats()
        self._nodes_explored = 0
        self._start_time = 0.0

        if root is not None:
            self.set_initials(root)

    def set_initials(self, root: BBNode) -> None:
        """Reset the engine so that the next search starts from ``root``."""
        self._active.clear()
        self._active.add(root)

        self._upper = float("inf")
        self._incumbent = None
        self._status = BBStatus.NOT_SOLVED
        self._stats = TreeStats(nodes_created=1, max_open=1)
        self._nodes_explored = 0
        self._start_time = 0.0

    def step(self) -> bool:
        """
        Process one node.

        Returns:
            True while there are nodes left to process
        """
        if self._active.is_empty():
            return False

        node = self._active.pop()
        self._nodes_explored += 1
        self._stats.nodes_processed += 1

        if self._is_pruned(node):
            if node.is_infeasible:
                self._stats.nodes_pruned_infeasible += 1
            else:
                self._stats.nodes_pruned_bound += 1
        elif node.is_candidate():
            self._incumbent = node
            self._stats.nodes_candidate += 1
            if node.value() < self._upper:
                self._upper = node.value()
                self._stats.best_upper_bound = self._upper
        else:
            children = node.branching()
            self._active.add_all(children)
            self._stats.nodes_branched += 1
            self._stats.nodes_created += len(children)
            self._stats.max_open = max(self._stats.max_open, self._active.size())

        if self.config.node_callback:
            self.config.node_callback(node, self)

        return not self._active.is_empty()

    def _is_pruned(self, node: BBNode) -> bool:
        """Prune by bound; an infeasible node (value +inf) never survives."""
        value = node.value()
        if value == float("inf"):
            return True
        if self.config.prune_ties:
            return value >= self._upper
        return value > self._upper

    def search(self) -> Optional[BBNode]:
        """
        Run the search until the active list is empty.

        Returns:
            The incumbent, or None if no candidate was ever accepted
            (the problem is infeasible)
        """
        self._start_time = time.time()
        self._status = BBStatus.SEARCHING

        while not self._active.is_empty():
            limit = self._check_termination()
            if limit is not None:
                self._status = limit
                break

            self.step()

            if self.config.verbose and self._nodes_explored % self.config.log_frequency == 0:
                self._log_progress()

        if self._status == BBStatus.SEARCHING:
            self._status = BBStatus.OPTIMAL if self._incumbent is not None else BBStatus.INFEASIBLE

        if self.config.verbose:
            print(
                f"Search finished: {self._status.name} | "
                f"Nodes {self._nodes_explored} | "
                f"UB {self._upper:.6g} | "
                f"Time {self.elapsed:.2f}s"
            )

        return self._incumbent

    def _check_termination(self) -> Optional[BBStatus]:
        """Check the search budget."""
        if self.config.max_nodes > 0 and self._nodes_explored >= self.config.max_nodes:
            return BBStatus.NODE_LIMIT

        if self.config.max_time > 0 and self.elapsed >= self.config.max_time:
            return BBStatus.TIME_LIMIT

        return None

    def _log_progress(self) -> None:
        """Log search progress."""
        print(
            f"Node {self._nodes_explored:6d} | "
            f"UB {self._upper:12.4f} | "
            f"Open {self._active.size():5d} | "
            f"Time {self.elapsed:8.1f}s"
        )

    def minimum(self) -> float:
        """Best objective value found; +inf if the problem is infeasible."""
        incumbent = self.incumbent()
        return incumbent.value() if incumbent is not None else float("inf")

    def minimizer(self) -> Optional[Any]:
        """Solution of the incumbent; None if the problem is infeasible."""
        incumbent = self.incumbent()
        return incumbent.solution() if incumbent is not None else None

    def incumbent(self) -> Optional[BBNode]:
        """Get the incumbent, searching first if no search has run yet."""
        if self._status == BBStatus.NOT_SOLVED:
            self.search()
        return self._incumbent

    @property
    def upper_bound(self) -> float:
        """Current best objective value (+inf until a candidate is accepted)."""
        return self._upper

    @property
    def active_list(self) -> ActiveList:
        """The frontier of pending nodes."""
        return self._active

    @property
    def status(self) -> BBStatus:
        """Search status."""
        return self._status

    @property
    def nodes_explored(self) -> int:
        """Number of nodes popped from the active list."""
        return self._nodes_explored

    @property
    def elapsed(self) -> float:
        """Seconds since the current search started."""
        if self._start_time == 0.0:
            return 0.0
        return time.time() - self._start_time

    @property
    def stats(self) -> TreeStats:
        """Search statistics."""
        return self._stats
