"""
Reference game: hunt and scram states over an in-memory Cavern, and a
harness that plays a hunter through both phases and scores it.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import numpy as np

from cavern_agents.common.paths import shortest_path
from cavern_agents.errors import InvalidMoveError
from cavern_agents.policy.state import NodeStatus

from .cavern import Cavern, Node, generate_cavern

if TYPE_CHECKING:
    from cavern_agents.policy.hunter import Hunter

# Score multiplier for a perfect hunt; decays toward 1.0 as the hunt wanders
HUNT_BONUS_MAX = 1.3
# Default scram budget as a multiple of the shortest escape
DEFAULT_SLACK = 1.5


class GameHuntState:
    """Hunt-phase view of a cavern: current tile, its neighbours, orb distance."""

    def __init__(self, cavern: Cavern, start: Node, orb: Node):
        self._cavern = cavern
        self._current = start
        self._orb = orb
        self.moves = 0
        self.trail: list[int] = [start.id]

    @property
    def orb(self) -> Node:
        return self._orb

    def current_location(self) -> int:
        return self._current.id

    def neighbors(self) -> frozenset[NodeStatus]:
        return frozenset(NodeStatus(self._orb_distance(n), n.id) for n in self._current.neighbors())

    def distance_to_orb(self) -> int:
        return self._orb_distance(self._current)

    def move_to(self, node_id: int) -> None:
        target = next((n for n in self._current.neighbors() if n.id == node_id), None)
        if target is None:
            raise InvalidMoveError(f"node {node_id} is not adjacent to node {self._current.id}")
        self._current = target
        self.moves += 1
        self.trail.append(node_id)

    def _orb_distance(self, node: Node) -> int:
        # Grid distance ignoring walls; kept >= 1 off the orb so 0 means "on it"
        if node == self._orb:
            return 0
        return max(1, Cavern.manhattan(node, self._orb))


class GameScramState:
    """Scram-phase view of a cavern with a step budget."""

    def __init__(self, cavern: Cavern, start: Node, exit: Node, steps: int):
        self._cavern = cavern
        self._current = start
        self._exit = exit
        self._steps = steps
        self.gold_collected = 0
        self.trail: list[int] = [start.id]

    def current_node(self) -> Node:
        return self._current

    def get_exit(self) -> Node:
        return self._exit

    def all_nodes(self) -> list[Node]:
        return self._cavern.nodes()

    def steps_left(self) -> int:
        return self._steps

    def move_to(self, node: Node) -> None:
        edge = self._current.get_edge(node)
        if edge is None:
            raise InvalidMoveError(f"node {node.id} is not adjacent to node {self._current.id}")
        # Not clamped: an overspent budget is reported by the harness as a failure
        self._steps -= edge.length
        self._current = edge.get_other(self._current)
        self.trail.append(node.id)

    def pick_up_gold(self) -> int:
        amount = self._current.tile.take_gold()
        self.gold_collected += amount
        return amount

    @property
    def at_exit(self) -> bool:
        return self._current == self._exit


@dataclass
class GameSetup:
    """A cavern with the three nodes a game needs."""

    cavern: Cavern
    start: Node
    orb: Node
    exit: Node
    seed: Optional[int] = None


@dataclass
class GameResult:
    hunt_succeeded: bool
    hunt_moves: int
    min_hunt_moves: int
    scram_succeeded: bool
    gold: int
    steps_left: int
    total_gold: int
    scram_moves: int = 0
    seed: Optional[int] = None
    trail: list[int] = field(default_factory=list, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.hunt_succeeded and self.scram_succeeded

    @property
    def hunt_bonus(self) -> float:
        if not self.hunt_succeeded:
            return 1.0
        if self.hunt_moves <= self.min_hunt_moves:
            return HUNT_BONUS_MAX
        return max(1.0, HUNT_BONUS_MAX * self.min_hunt_moves / self.hunt_moves)

    @property
    def score(self) -> float:
        if not self.succeeded:
            return 0.0
        return self.gold * self.hunt_bonus


def hop_distance(start: Node, goal: Node) -> int:
    """Fewest edges between two nodes, ignoring lengths (BFS). -1 if unreachable."""
    seen = {start}
    queue: deque[tuple[Node, int]] = deque([(start, 0)])
    while queue:
        node, hops = queue.popleft()
        if node == goal:
            return hops
        for neighbor in node.neighbors():
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append((neighbor, hops + 1))
    return -1


def default_scram_budget(start: Node, exit: Node, slack: float = DEFAULT_SLACK) -> int:
    """Budget that always covers the shortest escape, plus slack for gold."""
    if slack < 1.0:
        raise ValueError(f"slack must be >= 1.0 so the exit stays reachable, got {slack}")
    escape = shortest_path(start, exit).cost
    return max(escape, int(escape * slack))


def setup_game(rows: int, cols: int, seed: Optional[int] = None, **cavern_kwargs: object) -> GameSetup:
    """Generate a cavern and pick distinct start, orb and exit nodes."""
    if rows * cols < 3:
        raise ValueError(f"need at least 3 nodes for start, orb and exit, got {rows}x{cols}")
    cavern = generate_cavern(rows, cols, seed=seed, **cavern_kwargs)  # type: ignore[arg-type]
    rng = np.random.default_rng(None if seed is None else seed + 1)
    nodes = cavern.nodes()
    start_idx, orb_idx, exit_idx = rng.choice(len(nodes), size=3, replace=False)
    return GameSetup(
        cavern=cavern,
        start=nodes[int(start_idx)],
        orb=nodes[int(orb_idx)],
        exit=nodes[int(exit_idx)],
        seed=seed,
    )


def play(hunter: Hunter, setup: GameSetup, steps: Optional[int] = None, slack: float = DEFAULT_SLACK) -> GameResult:
    """Run the hunt from start to the orb, then the scram from the orb to the exit.

    The scram starts at the orb even if the hunt failed; a failed hunt scores 0.
    """
    hunt_state = GameHuntState(setup.cavern, setup.start, setup.orb)
    hunter.hunt(hunt_state)
    hunt_succeeded = hunt_state.distance_to_orb() == 0

    total_gold = setup.cavern.total_gold()
    if steps is None:
        steps = default_scram_budget(setup.orb, setup.exit, slack)
    scram_state = GameScramState(setup.cavern, setup.orb, setup.exit, steps)
    hunter.scram(scram_state)

    return GameResult(
        hunt_succeeded=hunt_succeeded,
        hunt_moves=hunt_state.moves,
        min_hunt_moves=hop_distance(setup.start, setup.orb),
        scram_succeeded=scram_state.at_exit and scram_state.steps_left() >= 0,
        gold=scram_state.gold_collected,
        steps_left=scram_state.steps_left(),
        total_gold=total_gold,
        scram_moves=len(scram_state.trail) - 1,
        seed=setup.seed,
        trail=hunt_state.trail + scram_state.trail[1:],
    )
