"""
Hunters: one explorer for the hunt and one planner for the scram.

Keyword overrides become a HunterConfig, the way policies elsewhere take URI
parameters: ``GreedyHunter(proximity_weight=1000, debug=1)``.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from .config import HunterConfig
from .debug_logger import DebugLogger
from .explorer import Explorer
from .planner import Planner
from .state import HuntState, ScramState
from .types import HuntOutcome, ScramOutcome


class Hunter:
    """Base hunter. Subclasses set ``short_names`` and their default config."""

    short_names: ClassVar[list[str]] = []
    defaults: ClassVar[dict[str, Any]] = {}

    def __init__(self, config: Optional[HunterConfig] = None, output: Any = None, **overrides: Any):
        if config is None:
            config = HunterConfig(**{**self.defaults, **overrides})
        elif overrides:
            config = HunterConfig(**{**config.model_dump(), **overrides})
        self.config = config
        self.logger = DebugLogger(level=config.debug, output=output)
        self.explorer = Explorer(ordered=config.ordered_hunt, logger=self.logger)
        self.planner = Planner(
            proximity_weight=config.proximity_weight,
            collect_en_route=config.collect_en_route,
            greedy=config.greedy_scram,
            logger=self.logger,
        )

    def hunt(self, state: HuntState) -> HuntOutcome:
        """Get to the orb; returns while standing on it."""
        return self.explorer.hunt(state)

    def scram(self, state: ScramState) -> ScramOutcome:
        """Get out before the budget runs out, collecting gold on the way."""
        return self.planner.scram(state)

    def __repr__(self) -> str:
        name = self.short_names[0] if self.short_names else type(self).__name__
        return f"{type(self).__name__}({name})"


class GreedyHunter(Hunter):
    """Heuristic-ordered DFS hunt, greedy budget-safe gold scram."""

    short_names = ["greedy"]


class BaselineHunter(Hunter):
    """Plain DFS hunt and shortest-path escape with no detours."""

    short_names = ["dfs", "baseline"]
    defaults = {"ordered_hunt": False, "greedy_scram": False}
