"""
Tests for the reference game states and the play harness.

Covers:
1. Hunt state -- neighbour snapshots, orb distance, move validation
2. Scram state -- budget accounting, gold pickup, move validation
3. Budgets and scoring
4. End-to-end play with every registered hunter
"""

from __future__ import annotations

import pytest

from cavern_agents.errors import InvalidMoveError, NoGoldError
from cavern_agents.game.cavern import Cavern
from cavern_agents.game.game_state import (
    HUNT_BONUS_MAX,
    GameHuntState,
    GameResult,
    GameScramState,
    GameSetup,
    default_scram_budget,
    hop_distance,
    play,
    setup_game,
)
from cavern_agents.policy import BaselineHunter, GreedyHunter, list_hunter_names, make_hunter
from cavern_agents.policy.state import NodeStatus


class TestGameHuntState:
    def test_neighbors_carry_orb_distance(self, cycle: Cavern) -> None:
        state = GameHuntState(cycle, cycle.node(1), cycle.node(3))
        assert state.neighbors() == {NodeStatus(1, 2), NodeStatus(1, 4)}
        assert state.distance_to_orb() == 2

    def test_distance_zero_only_on_orb(self) -> None:
        cavern = Cavern()
        # Two nodes on the same coordinates: only the orb itself reads 0
        cavern.add_node(node_id=1, row=0, col=0)
        cavern.add_node(node_id=2, row=0, col=0)
        cavern.connect(1, 2)
        state = GameHuntState(cavern, cavern.node(1), cavern.node(2))
        assert state.distance_to_orb() == 1
        state.move_to(2)
        assert state.distance_to_orb() == 0

    def test_move_to_non_neighbor_raises(self, cycle: Cavern) -> None:
        state = GameHuntState(cycle, cycle.node(1), cycle.node(3))
        with pytest.raises(InvalidMoveError, match="not adjacent"):
            state.move_to(3)
        assert state.current_location() == 1
        assert state.moves == 0


class TestGameScramState:
    def test_move_spends_edge_length(self) -> None:
        cavern = Cavern()
        cavern.add_node(node_id=1)
        cavern.add_node(node_id=2, col=1)
        cavern.connect(1, 2, 4)
        state = GameScramState(cavern, cavern.node(1), cavern.node(2), 10)
        state.move_to(cavern.node(2))
        assert state.steps_left() == 6
        assert state.at_exit

    def test_move_to_non_neighbor_raises(self, cycle: Cavern) -> None:
        state = GameScramState(cycle, cycle.node(1), cycle.node(1), 10)
        with pytest.raises(InvalidMoveError):
            state.move_to(cycle.node(3))
        assert state.steps_left() == 10

    def test_pick_up_gold(self, cycle: Cavern) -> None:
        state = GameScramState(cycle, cycle.node(3), cycle.node(1), 10)
        assert state.pick_up_gold() == 10
        assert state.gold_collected == 10
        with pytest.raises(NoGoldError):
            state.pick_up_gold()

    def test_all_nodes(self, cycle: Cavern) -> None:
        state = GameScramState(cycle, cycle.node(1), cycle.node(1), 0)
        assert sorted(n.id for n in state.all_nodes()) == [1, 2, 3, 4]


class TestBudgetAndScore:
    def test_default_budget_covers_escape(self, cycle: Cavern) -> None:
        assert default_scram_budget(cycle.node(3), cycle.node(1), slack=1.0) == 2
        assert default_scram_budget(cycle.node(3), cycle.node(1), slack=2.5) == 5

    def test_default_budget_rejects_low_slack(self, cycle: Cavern) -> None:
        with pytest.raises(ValueError, match="slack"):
            default_scram_budget(cycle.node(3), cycle.node(1), slack=0.5)

    def test_hop_distance(self, cycle: Cavern) -> None:
        assert hop_distance(cycle.node(1), cycle.node(3)) == 2
        island = cycle.add_node(node_id=9)
        assert hop_distance(cycle.node(1), island) == -1

    def test_score_uses_hunt_bonus(self) -> None:
        perfect = GameResult(True, 4, 4, True, gold=100, steps_left=0, total_gold=200)
        wandering = GameResult(True, 8, 4, True, gold=100, steps_left=0, total_gold=200)
        lost = GameResult(True, 400, 4, True, gold=100, steps_left=0, total_gold=200)
        assert perfect.score == pytest.approx(100 * HUNT_BONUS_MAX)
        assert wandering.hunt_bonus == pytest.approx(1.0)
        assert lost.score == pytest.approx(100.0)

    def test_failed_run_scores_zero(self) -> None:
        result = GameResult(True, 4, 4, False, gold=100, steps_left=-1, total_gold=200)
        assert not result.succeeded
        assert result.score == 0.0


class TestPlay:
    def test_cycle_game(self, cycle: Cavern) -> None:
        setup = GameSetup(cavern=cycle, start=cycle.node(1), orb=cycle.node(2), exit=cycle.node(1))
        result = play(GreedyHunter(), setup, steps=5)

        assert result.hunt_succeeded
        assert result.hunt_moves == 1
        # From 2: node 3 costs 1 there and 2 back to the exit
        assert result.gold == 10
        assert result.scram_succeeded
        assert result.steps_left == 2

    @pytest.mark.parametrize("name", list_hunter_names())
    @pytest.mark.parametrize("seed", range(6))
    def test_every_hunter_succeeds(self, name: str, seed: int) -> None:
        setup = setup_game(10, 12, seed=seed)
        result = play(make_hunter(name), setup)

        assert result.hunt_succeeded, f"{name} missed the orb on seed {seed}"
        assert result.scram_succeeded, f"{name} did not escape on seed {seed}"
        assert 0 <= result.gold <= result.total_gold

    def test_setup_game_picks_distinct_nodes(self) -> None:
        setup = setup_game(4, 4, seed=9)
        assert len({setup.start.id, setup.orb.id, setup.exit.id}) == 3

    def test_setup_game_is_deterministic(self) -> None:
        a, b = setup_game(6, 6, seed=5), setup_game(6, 6, seed=5)
        assert (a.start.id, a.orb.id, a.exit.id) == (b.start.id, b.orb.id, b.exit.id)

    def test_baseline_escapes_on_budget(self) -> None:
        setup = setup_game(8, 8, seed=3)
        hunter = BaselineHunter()
        result = play(hunter, setup)
        assert result.scram_succeeded
        assert result.steps_left >= 0
