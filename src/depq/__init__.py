"""Structural queries over dependency graphs given as edge lists."""

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "CycleDetectedError",
    "DepthLimitExceededError",
    "Edge",
    "Graph",
    "InputFormat",
    "NodeNotFoundError",
    "OutputFormat",
    "ParseError",
    "RankDir",
    "RemapError",
    "bfs",
    "bfs_path",
    "check_max_depth",
    "dfs",
    "dfs_path",
    "dump",
    "dump_path",
    "load",
    "load_path",
    "topological_order",
    "topological_sort",
]

from ._graph import (
    DEFAULT_MAX_DEPTH,
    CycleDetectedError,
    DepthLimitExceededError,
    Edge,
    Graph,
    NodeNotFoundError,
    RemapError,
    bfs,
    bfs_path,
    check_max_depth,
    dfs,
    dfs_path,
    topological_order,
    topological_sort,
)
from ._io import InputFormat, OutputFormat, ParseError, RankDir, dump, dump_path, load, load_path
