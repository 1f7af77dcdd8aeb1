"""
Binary-heap priority queue used by the path finder and the scram planner.

Wraps heapq with a max/min mode fixed at construction and a monotonically
increasing tie breaker, so equal priorities come out in insertion order.
"""

from __future__ import annotations

import heapq
from typing import Generic, TypeVar

from cavern_agents.errors import EmptyQueueError

T = TypeVar("T")


class Heap(Generic[T]):
    """Priority queue of arbitrary elements.

    Elements need not be hashable or comparable, and the same element may be
    inserted more than once (the path finder re-inserts nodes whose tentative
    distance improved instead of decreasing a key in place).
    """

    def __init__(self, is_max: bool = False):
        self._is_max = is_max
        # Entries: (sort_key, tie_breaker, element)
        self._entries: list[tuple[float, int, T]] = []
        self._counter = 0

    @property
    def is_max(self) -> bool:
        return self._is_max

    def insert(self, element: T, priority: float) -> None:
        """Add element with the given priority in O(log n)."""
        key = -priority if self._is_max else priority
        heapq.heappush(self._entries, (key, self._counter, element))
        self._counter += 1

    def extract_best(self) -> T:
        """Remove and return the highest-priority element (lowest in min mode)."""
        if not self._entries:
            raise EmptyQueueError("extract_best() on an empty heap")
        _, _, element = heapq.heappop(self._entries)
        return element

    def extract_best_with_priority(self) -> tuple[T, float]:
        """Like extract_best(), also returning the priority it was inserted with."""
        if not self._entries:
            raise EmptyQueueError("extract_best() on an empty heap")
        key, _, element = heapq.heappop(self._entries)
        return element, (-key if self._is_max else key)

    def peek(self) -> T:
        """Return the best element without removing it."""
        if not self._entries:
            raise EmptyQueueError("peek() on an empty heap")
        return self._entries[0][2]

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        mode = "max" if self._is_max else "min"
        return f"Heap({mode}, size={len(self._entries)})"
