"""
State facades consumed by the hunter.

HuntState exposes only the current tile and its neighbours, each annotated
with an obstacle-ignoring distance to the orb. ScramState exposes the whole
graph and a depleting step budget. Both are implemented by the game; tests
can substitute any object with the same methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Protocol

from cavern_agents.common.paths import GraphNode


@dataclass(frozen=True, order=True)
class NodeStatus:
    """A neighbour seen during the hunt: heuristic distance first, then id."""

    distance: int
    node_id: int


class HuntState(Protocol):
    """Partial-visibility view used while searching for the orb."""

    def current_location(self) -> int:
        """Id of the node the hunter is standing on."""
        ...

    def neighbors(self) -> Collection[NodeStatus]:
        """Open neighbours of the current node with their distance to the orb."""
        ...

    def distance_to_orb(self) -> int:
        """Heuristic distance from the current node to the orb; 0 iff on the orb."""
        ...

    def move_to(self, node_id: int) -> None:
        """Move to an adjacent node. Raises InvalidMoveError otherwise."""
        ...


class GoldTile(Protocol):
    gold: int


class CavernNode(GraphNode, Protocol):
    """A graph node carrying a tile with gold."""

    tile: GoldTile


class ScramState(Protocol):
    """Full-visibility view used while escaping."""

    def current_node(self) -> CavernNode: ...

    def get_exit(self) -> CavernNode: ...

    def all_nodes(self) -> Collection[CavernNode]: ...

    def steps_left(self) -> int: ...

    def move_to(self, node: CavernNode) -> None:
        """Move to an adjacent node, spending the edge length from the budget.

        Raises InvalidMoveError if node is not adjacent.
        """
        ...

    def pick_up_gold(self) -> int:
        """Collect the gold on the current node. Raises NoGoldError if there is none."""
        ...
