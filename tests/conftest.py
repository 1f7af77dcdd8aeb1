"""Shared fixtures for cavern-agents tests.

Small hand-built caverns for the scenario tests, and a scram state that
checks the escape invariant after every move.
"""

from __future__ import annotations

from typing import Callable

import pytest

from cavern_agents.common.paths import shortest_path
from cavern_agents.game.cavern import Cavern, Node
from cavern_agents.game.game_state import GameScramState


class CheckedScramState(GameScramState):
    """GameScramState that records every move after which the exit is unaffordable."""

    def __init__(self, cavern: Cavern, start: Node, exit: Node, steps: int):
        super().__init__(cavern, start, exit, steps)
        self.violations: list[tuple[int, int, int]] = []  # (node id, escape cost, steps left)
        self.moves = 0

    def move_to(self, node: Node) -> None:
        super().move_to(node)
        self.moves += 1
        escape = shortest_path(self.current_node(), self.get_exit()).cost
        if escape > self.steps_left():
            self.violations.append((node.id, escape, self.steps_left()))


def build_two_node() -> Cavern:
    """1 - 2, length 1, no gold."""
    cavern = Cavern()
    cavern.add_node(node_id=1, row=0, col=0)
    cavern.add_node(node_id=2, row=0, col=1)
    cavern.connect(1, 2, 1)
    return cavern


def build_cycle(gold_at_3: int = 10) -> Cavern:
    """Square cycle 1-2-3-4-1, every edge length 1, gold on node 3."""
    cavern = Cavern()
    coords = {1: (0, 0), 2: (0, 1), 3: (1, 1), 4: (1, 0)}
    for node_id, (row, col) in coords.items():
        cavern.add_node(node_id=node_id, row=row, col=col, gold=gold_at_3 if node_id == 3 else 0)
    cavern.connect(1, 2)
    cavern.connect(2, 3)
    cavern.connect(3, 4)
    cavern.connect(4, 1)
    return cavern


@pytest.fixture
def two_node() -> Cavern:
    return build_two_node()


@pytest.fixture
def cycle() -> Cavern:
    return build_cycle()


@pytest.fixture
def checked_scram() -> Callable[..., CheckedScramState]:
    """Factory: checked_scram(cavern, start_id, exit_id, steps)."""

    def make(cavern: Cavern, start: int, exit: int, steps: int) -> CheckedScramState:
        return CheckedScramState(cavern, cavern.node(start), cavern.node(exit), steps)

    return make
