"""
Active lists: the frontier of pending nodes.

The pop order of an active list decides the traversal order of the
search (depth-first, best-first, breadth-first). The engine only talks
to the ``ActiveList`` interface, so any ordering can be swapped in.
"""

import heapq
from abc import ABC, abstractmethod
from collections import deque

from openbb.core.node import BBNode


class ActiveList(ABC):
    """Abstract frontier of pending branch-and-bound nodes."""

    @abstractmethod
    def is_empty(self) -> bool:
        """Check if there are any pending nodes."""
        pass

    @abstractmethod
    def add(self, node: BBNode) -> bool:
        """
        Add a node to the list.

        Returns:
            True if the collection changed
        """
        pass

    def add_all(self, nodes: list[BBNode]) -> bool:
        """Add multiple nodes, in order."""
        changed = False
        for node in nodes:
            changed = self.add(node) or changed
        return changed

    @abstractmethod
    def pop(self) -> BBNode:
        """
        Remove and return the next node.

        Raises:
            IndexError: if the list is empty
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """Get the number of pending nodes."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all pending nodes."""
        pass

    def __len__(self) -> int:
        return self.size()


class DepthFirstList(ActiveList):
    """Last-in-first-out stack; gives depth-first traversal."""

    def __init__(self):
        self._stack: list[BBNode] = []

    def is_empty(self) -> bool:
        return len(self._stack) == 0

    def add(self, node: BBNode) -> bool:
        self._stack.append(node)
        return True

    def pop(self) -> BBNode:
        if not self._stack:
            raise IndexError("pop from an empty active list")
        return self._stack.pop()

    def size(self) -> int:
        return len(self._stack)

    def clear(self) -> None:
        self._stack = []


class BestFirstList(ActiveList):
    """Best-bound selection: always pops the node with the lowest value."""

    def __init__(self):
        self._heap: list[tuple] = []  # (value, counter, node)
        self._counter = 0

    def is_empty(self) -> bool:
        return len(self._heap) == 0

    def add(self, node: BBNode) -> bool:
        heapq.heappush(self._heap, (node.value(), self._counter, node))
        self._counter += 1
        return True

    def pop(self) -> BBNode:
        if not self._heap:
            raise IndexError("pop from an empty active list")
        _, _, node = heapq.heappop(self._heap)
        return node

    def size(self) -> int:
        return len(self._heap)

    def best_bound(self) -> float:
        """Get the lowest value among pending nodes."""
        if not self._heap:
            return float("inf")
        return self._heap[0][0]

    def clear(self) -> None:
        self._heap = []
        self._counter = 0


class BreadthFirstList(ActiveList):
    """First-in-first-out queue; explores the tree level by level."""

    def __init__(self):
        self._queue: deque[BBNode] = deque()

    def is_empty(self) -> bool:
        return len(self._queue) == 0

    def add(self, node: BBNode) -> bool:
        self._queue.append(node)
        return True

    def pop(self) -> BBNode:
        if not self._queue:
            raise IndexError("pop from an empty active list")
        return self._queue.popleft()

    def size(self) -> int:
        return len(self._queue)

    def clear(self) -> None:
        self._queue.clear()


def create_active_list(name: str) -> ActiveList:
    """Create an active list by name."""
    name_lower = name.lower()
    if name_lower in ("depth_first", "depthfirst", "dfs"):
        return DepthFirstList()
    elif name_lower in ("best_first", "bestfirst"):
        return BestFirstList()
    elif name_lower in ("breadth_first", "breadthfirst", "bfs"):
        return BreadthFirstList()
    raise ValueError(f"Unknown active list: {name}")
