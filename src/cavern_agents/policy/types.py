"""
Types and constants for the hunter.

Phase enums and the per-call outcome records returned by the explorer and
the planner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class HuntPhase(Enum):
    """Explorer states."""

    EXPLORING = "exploring"
    FOUND = "found"
    EXHAUSTED = "exhausted"  # Every reachable node visited without finding the orb


class ScramPhase(Enum):
    """Planner states, in the order they are entered."""

    COLLECTING = "collecting"  # Detouring for affordable gold
    RETURNING = "returning"  # Nothing affordable left, heading for the exit
    DONE = "done"  # Standing on the exit


# Default weight of proximity in the gold score: gold + K / distance.
# Empirically tuned; large enough that nearby gold outranks richer far gold
# for gold amounts up to a few thousand.
DEFAULT_PROXIMITY_WEIGHT = 52850.0


@dataclass
class HuntOutcome:
    """Summary of one hunt call."""

    phase: HuntPhase = HuntPhase.EXPLORING
    moves: int = 0
    backtracks: int = 0
    visited: int = 0

    @property
    def found(self) -> bool:
        return self.phase == HuntPhase.FOUND


@dataclass
class ScramOutcome:
    """Summary of one scram call."""

    phase: ScramPhase = ScramPhase.COLLECTING
    moves: int = 0
    rounds: int = 0
    gold: int = 0
    detours: list[int] = field(default_factory=list)  # Ids of committed gold targets, in order

    @property
    def done(self) -> bool:
        return self.phase == ScramPhase.DONE
