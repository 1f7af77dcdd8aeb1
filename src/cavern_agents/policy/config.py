"""Tunable hunter parameters."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .types import DEFAULT_PROXIMITY_WEIGHT


class HunterConfig(BaseModel):
    """Knobs for the explorer and planner.

    Hunters accept these as keyword overrides, e.g.
    ``make_hunter("greedy", proximity_weight=1000, debug=1)``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # K in the gold score gold + K / distance
    proximity_weight: float = Field(default=DEFAULT_PROXIMITY_WEIGHT, ge=0)
    # Pick up gold on every tile passed, not just the committed target
    collect_en_route: bool = Field(default=True)
    # Sort hunt candidates by distance to the orb (False = plain DFS)
    ordered_hunt: bool = Field(default=True)
    # Detour for gold during scram (False = straight to the exit)
    greedy_scram: bool = Field(default=True)
    # 0 = silent, 1 = decisions, 2 = every move
    debug: int = Field(default=0, ge=0, le=2)
