"""Graph module providing the core graph model and algorithms.

This module contains:
- Graph[T]: An immutable, index-based directed graph with value interning
- bfs/dfs: Traversals without a visited set, in visit and path flavours
- topological_sort: Kahn's algorithm reporting cycles
- check_max_depth: Depth bound decision for the traversals
"""

from ._algorithms import CycleDetectedError, topological_order, topological_sort
from ._depth import DEFAULT_MAX_DEPTH, DepthLimitExceededError, check_max_depth
from ._graph import Edge, Graph, NodeNotFoundError, RemapError
from ._traversal import PathVisitFn, VisitFn, bfs, bfs_path, dfs, dfs_path

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "CycleDetectedError",
    "DepthLimitExceededError",
    "Edge",
    "Graph",
    "NodeNotFoundError",
    "PathVisitFn",
    "RemapError",
    "VisitFn",
    "bfs",
    "bfs_path",
    "check_max_depth",
    "dfs",
    "dfs_path",
    "topological_order",
    "topological_sort",
]
