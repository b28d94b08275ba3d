"""
Core branch-and-bound data structures.

The engine, the abstract node and the active lists know nothing about
linear programming; the ILP layer in ``openbb.ilp`` builds on them.
"""

from openbb.core.node import BBNode
from openbb.core.selection import (
    ActiveList,
    BestFirstList,
    BreadthFirstList,
    DepthFirstList,
    create_active_list,
)
from openbb.core.tree import BBConfig, BBStatus, BranchAndBound, TreeStats

__all__ = [
    "BBNode",
    "ActiveList",
    "DepthFirstList",
    "BestFirstList",
    "BreadthFirstList",
    "create_active_list",
    "BranchAndBound",
    "BBConfig",
    "BBStatus",
    "TreeStats",
]
