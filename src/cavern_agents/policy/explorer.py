"""
Explorer for the hunt phase.

Depth-first search over a graph seen one node at a time, with the neighbours
of each node tried in order of their heuristic distance to the orb. Runs on
an explicit stack of frames instead of recursion; the visiting order is the
same as the recursive formulation:

    walk(node):
        if on orb: return
        mark node visited
        for n in sorted(neighbors):
            if n unvisited:
                move to n; walk(n)
                if on orb: return
                move back to node
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection, Optional

from .debug_logger import DebugLogger
from .state import HuntState, NodeStatus
from .types import HuntOutcome, HuntPhase


@dataclass
class HuntFrame:
    """One level of the depth-first descent."""

    node_id: int
    candidates: list[NodeStatus]
    cursor: int = 0


@dataclass
class HuntSearch:
    """Search state for a single hunt call. Discarded when the call returns."""

    visited: set[int] = field(default_factory=set)
    stack: list[HuntFrame] = field(default_factory=list)
    outcome: HuntOutcome = field(default_factory=HuntOutcome)


class Explorer:
    """Moves the hunter from its current node to the orb."""

    def __init__(self, ordered: bool = True, logger: Optional[DebugLogger] = None):
        self._ordered = ordered
        self._logger = logger or DebugLogger()

    def hunt(self, state: HuntState) -> HuntOutcome:
        """Search until standing on the orb.

        Returns the moment ``distance_to_orb()`` reads 0, without moving
        again. If every reachable node is visited first (the orb is not
        reachable), returns with phase EXHAUSTED back at the starting node.
        """
        search = HuntSearch()
        self._logger.hunt_started(state.current_location(), state.distance_to_orb())

        if state.distance_to_orb() == 0:
            search.outcome.phase = HuntPhase.FOUND
            self._logger.hunt_finished(search.outcome)
            return search.outcome

        self._enter(state, search)
        while search.stack:
            frame = search.stack[-1]
            candidate = self._next_candidate(frame, search.visited)

            if candidate is None:
                # Frame exhausted: step back to where this descent started
                search.stack.pop()
                if search.stack:
                    self._move(state, search, search.stack[-1].node_id, backtrack=True)
                continue

            self._move(state, search, candidate.node_id)
            if state.distance_to_orb() == 0:
                search.outcome.phase = HuntPhase.FOUND
                break
            self._enter(state, search)
        else:
            search.outcome.phase = HuntPhase.EXHAUSTED

        search.outcome.visited = len(search.visited)
        self._logger.hunt_finished(search.outcome)
        return search.outcome

    def order_candidates(self, neighbors: Collection[NodeStatus]) -> list[NodeStatus]:
        """Closest-to-orb first, ties by id. Snapshot order when unordered."""
        if self._ordered:
            return sorted(neighbors)
        return list(neighbors)

    def _enter(self, state: HuntState, search: HuntSearch) -> None:
        node_id = state.current_location()
        search.visited.add(node_id)
        search.stack.append(HuntFrame(node_id=node_id, candidates=self.order_candidates(state.neighbors())))

    def _next_candidate(self, frame: HuntFrame, visited: set[int]) -> Optional[NodeStatus]:
        # Visited is checked lazily: a node may be visited by a deeper frame
        # after this frame's snapshot was taken.
        while frame.cursor < len(frame.candidates):
            candidate = frame.candidates[frame.cursor]
            frame.cursor += 1
            if candidate.node_id not in visited:
                return candidate
        return None

    def _move(self, state: HuntState, search: HuntSearch, node_id: int, backtrack: bool = False) -> None:
        state.move_to(node_id)
        search.outcome.moves += 1
        if backtrack:
            search.outcome.backtracks += 1
        if self._logger.level >= 2:
            self._logger.hunt_move(node_id, state.distance_to_orb(), backtrack=backtrack)
