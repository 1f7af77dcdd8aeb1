"""
Exception types raised by the cavern agents and the reference game.

All of these signal a violated precondition. Nothing in the agents catches
them; they propagate to the caller or test harness.
"""

from __future__ import annotations


class CavernError(Exception):
    """Base class for every cavern error."""


class InvalidMoveError(CavernError):
    """A move was attempted to a node that is not adjacent to the current one."""


class NoGoldError(CavernError):
    """Gold pickup was attempted on a tile that holds none."""


class EmptyQueueError(CavernError, IndexError):
    """Extraction from an empty priority queue."""


class PathError(CavernError):
    """Base class for graph-level errors surfaced by the path finder."""


class NoPathError(PathError):
    """Destination is not reachable from the source."""


class InvalidEdgeWeightError(PathError, ValueError):
    """A negative edge length was presented to the path finder."""
