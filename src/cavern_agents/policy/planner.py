"""
Planner for the scram phase.

Each round ranks every gold node by ``gold + K / distance`` (distance is the
shortest-path cost from where the hunter stands), then takes the best one
whose round trip, there and on to the exit, fits in the steps left. When no
candidate fits, the hunter walks the shortest path to the exit.

Because every detour is checked against the full cost of reaching the exit
afterwards, the exit stays affordable after every move.
"""

from __future__ import annotations

from typing import Optional

from cavern_agents.common.heap import Heap
from cavern_agents.common.paths import Path, ShortestPathTree, shortest_path, shortest_paths_from

from .debug_logger import DebugLogger
from .state import CavernNode, ScramState
from .types import DEFAULT_PROXIMITY_WEIGHT, ScramOutcome, ScramPhase


class Planner:
    """Greedy, budget-safe gold collection followed by escape."""

    def __init__(
        self,
        proximity_weight: float = DEFAULT_PROXIMITY_WEIGHT,
        collect_en_route: bool = True,
        greedy: bool = True,
        logger: Optional[DebugLogger] = None,
    ):
        self._proximity_weight = proximity_weight
        self._collect_en_route = collect_en_route
        self._greedy = greedy
        self._logger = logger or DebugLogger()

    def score(self, gold: int, distance: int) -> float:
        """Rank of a gold node: its gold plus K over its distance.

        Zero-distance gold (reachable over zero-length edges) is free and
        ranks above everything.
        """
        if distance == 0:
            return float("inf")
        return gold + self._proximity_weight / distance

    def scram(self, state: ScramState) -> ScramOutcome:
        """Collect what gold fits in the budget, then stop on the exit."""
        outcome = ScramOutcome()
        self._logger.scram_started()
        exit_node = state.get_exit()
        # Undirected graph: distances from the exit are distances to it
        exit_tree = shortest_paths_from(exit_node)

        if self._collect_en_route:
            self._collect(state, outcome)
        if not self._greedy:
            self._set_phase(outcome, ScramPhase.RETURNING, state)

        while outcome.phase == ScramPhase.COLLECTING:
            outcome.rounds += 1
            current = state.current_node()
            path = self._choose_detour(state, current, exit_tree, outcome.rounds)
            if path is not None:
                self._follow(state, path, exit_tree, outcome)
                outcome.detours.append(path.destination.id)

            # Unmoved after a round means nothing was affordable
            if state.current_node() == current:
                self._set_phase(outcome, ScramPhase.RETURNING, state)

        self._follow(state, shortest_path(state.current_node(), exit_node), exit_tree, outcome)
        self._set_phase(outcome, ScramPhase.DONE, state)
        self._logger.scram_finished(outcome, state.steps_left())
        return outcome

    def rank_candidates(self, state: ScramState, current: CavernNode, tree: ShortestPathTree) -> Heap[CavernNode]:
        """Max-heap of gold nodes reachable from current, excluding current."""
        candidates: Heap[CavernNode] = Heap(is_max=True)
        for node in state.all_nodes():
            if node.tile.gold <= 0 or node == current or not tree.reachable(node):
                continue
            candidates.insert(node, self.score(node.tile.gold, tree.distance_to(node)))
        return candidates

    def _choose_detour(
        self,
        state: ScramState,
        current: CavernNode,
        exit_tree: ShortestPathTree,
        round_num: int,
    ) -> Optional[Path]:
        """Best-ranked candidate whose round trip fits the budget, as a path from current."""
        tree = shortest_paths_from(current)
        candidates = self.rank_candidates(state, current, tree)
        steps_left = state.steps_left()
        self._logger.scram_round(round_num, current.id, steps_left, len(candidates))

        while candidates:
            node, priority = candidates.extract_best_with_priority()
            if not exit_tree.reachable(node):
                continue
            round_trip = tree.distance_to(node) + exit_tree.distance_to(node)
            if round_trip <= steps_left:
                self._logger.detour_committed(node.id, node.tile.gold, priority, round_trip, steps_left)
                return tree.path_to(node)
            self._logger.candidate_rejected(node.id, round_trip, steps_left)
        return None

    def _follow(self, state: ScramState, path: Path, exit_tree: ShortestPathTree, outcome: ScramOutcome) -> None:
        for node in path.steps():
            state.move_to(node)
            outcome.moves += 1
            if self._logger.enabled:
                self._logger.scram_move(node.id, state.steps_left(), exit_tree.distance_to(node))
            if self._collect_en_route or node == path.destination:
                self._collect(state, outcome)

    def _collect(self, state: ScramState, outcome: ScramOutcome) -> None:
        node = state.current_node()
        if node.tile.gold > 0:
            amount = state.pick_up_gold()
            outcome.gold += amount
            self._logger.gold_collected(node.id, amount)

    def _set_phase(self, outcome: ScramOutcome, phase: ScramPhase, state: ScramState) -> None:
        if outcome.phase != phase:
            self._logger.phase_changed(outcome.phase, phase, state.current_node().id)
            outcome.phase = phase
