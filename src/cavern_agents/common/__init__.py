"""Shared search primitives: priority queue and shortest paths."""

from .heap import Heap
from .paths import Path, ShortestPathTree, path_cost, shortest_path, shortest_paths_from

__all__ = ["Heap", "Path", "ShortestPathTree", "path_cost", "shortest_path", "shortest_paths_from"]
