"""Hunt and scram decision making."""

from .config import HunterConfig
from .explorer import Explorer
from .hunter import BaselineHunter, GreedyHunter, Hunter
from .planner import Planner
from .registry import get_hunter_class, list_hunter_names, make_hunter
from .state import HuntState, NodeStatus, ScramState
from .types import HuntOutcome, HuntPhase, ScramOutcome, ScramPhase

__all__ = [
    "BaselineHunter",
    "Explorer",
    "GreedyHunter",
    "Hunter",
    "HunterConfig",
    "HuntOutcome",
    "HuntPhase",
    "HuntState",
    "NodeStatus",
    "Planner",
    "ScramOutcome",
    "ScramPhase",
    "ScramState",
    "get_hunter_class",
    "list_hunter_names",
    "make_hunter",
]
