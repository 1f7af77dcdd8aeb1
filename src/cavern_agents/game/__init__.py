"""In-memory reference game for running and testing hunters."""

from .cavern import Cavern, Edge, Node, Tile, generate_cavern
from .game_state import (
    GameHuntState,
    GameResult,
    GameScramState,
    GameSetup,
    default_scram_budget,
    hop_distance,
    play,
    setup_game,
)

__all__ = [
    "Cavern",
    "Edge",
    "GameHuntState",
    "GameResult",
    "GameScramState",
    "GameSetup",
    "Node",
    "Tile",
    "default_scram_budget",
    "generate_cavern",
    "hop_distance",
    "play",
    "setup_game",
]
