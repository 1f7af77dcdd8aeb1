"""
Debug output for the hunter.

Verbosity levels (``HunterConfig.debug``):
    0 - disabled (default)
    1 - decisions: hunt start/end, committed gold detours, phase changes
    2 - full detail: every move, backtrack, rejected candidate, escape margin

All lines are prefixed with ``[cavern:debug]`` and written to ``sys.stderr``
by default so they do not mix with the runner's results on stdout. The
end-of-phase summaries are single JSON objects prefixed with
``[cavern:debug:summary]`` for scripts that grep them.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass
from typing import Any, Optional

from .types import HuntOutcome, ScramOutcome, ScramPhase

# ---------------------------------------------------------------------------
# Per-move record
# ---------------------------------------------------------------------------


@dataclass
class MoveRecord:
    """One committed move during scram."""

    node_id: int
    steps_left: int
    escape_cost: int

    @property
    def margin(self) -> int:
        return self.steps_left - self.escape_cost


# ---------------------------------------------------------------------------
# DebugLogger
# ---------------------------------------------------------------------------


class DebugLogger:
    """Emits structured debug lines for one hunter.

    Parameters
    ----------
    level : int
        Verbosity level (0, 1 or 2).
    output : file-like, optional
        Where to write output. Defaults to ``sys.stderr``.
    """

    PREFIX = "[cavern:debug]"
    SUMMARY_PREFIX = "[cavern:debug:summary]"

    def __init__(self, level: int = 0, output: Any = None) -> None:
        self.level = level
        self._out = output
        self.moves: list[MoveRecord] = []

    @property
    def enabled(self) -> bool:
        return self.level >= 1

    # ------------------------------------------------------------------
    # Hunt
    # ------------------------------------------------------------------

    def hunt_started(self, location: int, distance: int) -> None:
        if self.level >= 1:
            self._emit(f"hunt start at={location} orb_dist={distance}")

    def hunt_move(self, node_id: int, distance: int, backtrack: bool = False) -> None:
        if self.level >= 2:
            kind = "back" if backtrack else "move"
            self._emit(f"  hunt {kind} -> {node_id} orb_dist={distance}")

    def hunt_finished(self, outcome: HuntOutcome) -> None:
        if self.level >= 1:
            self._emit(
                f"hunt {outcome.phase.value} moves={outcome.moves} "
                f"backtracks={outcome.backtracks} visited={outcome.visited}"
            )
            self._summary("hunt", {**asdict(outcome), "phase": outcome.phase.value})

    # ------------------------------------------------------------------
    # Scram
    # ------------------------------------------------------------------

    def scram_started(self) -> None:
        # Move records cover one scram call
        self.moves.clear()

    def scram_round(self, round_num: int, node_id: int, steps_left: int, candidates: int) -> None:
        if self.level >= 2:
            self._emit(f"scram round={round_num} at={node_id} steps_left={steps_left} candidates={candidates}")

    def candidate_rejected(self, node_id: int, round_trip: int, steps_left: int) -> None:
        if self.level >= 2:
            self._emit(f"  skip {node_id}: round_trip={round_trip} > steps_left={steps_left}")

    def detour_committed(self, node_id: int, gold: int, priority: float, round_trip: int, steps_left: int) -> None:
        if self.level >= 1:
            self._emit(
                f"detour -> {node_id} gold={gold} priority={priority:.1f} "
                f"round_trip={round_trip} steps_left={steps_left}"
            )

    def scram_move(self, node_id: int, steps_left: int, escape_cost: int) -> None:
        record = MoveRecord(node_id=node_id, steps_left=steps_left, escape_cost=escape_cost)
        if self.enabled:
            self.moves.append(record)
        if self.level >= 2:
            self._emit(f"  scram move -> {node_id} steps_left={steps_left} escape={escape_cost} margin={record.margin}")
        if record.margin < 0 and self.level >= 1:
            self._emit(f"ESCAPE MARGIN VIOLATED at {node_id}: escape={escape_cost} > steps_left={steps_left}")

    def gold_collected(self, node_id: int, amount: int) -> None:
        if self.level >= 2:
            self._emit(f"  gold +{amount} at {node_id}")

    def phase_changed(self, old: ScramPhase, new: ScramPhase, node_id: Optional[int] = None) -> None:
        if self.level >= 1:
            where = f" at={node_id}" if node_id is not None else ""
            self._emit(f"scram {old.value} -> {new.value}{where}")

    def scram_finished(self, outcome: ScramOutcome, steps_left: int) -> None:
        if self.level >= 1:
            self._emit(
                f"scram {outcome.phase.value} gold={outcome.gold} moves={outcome.moves} "
                f"detours={len(outcome.detours)} steps_left={steps_left}"
            )
            summary = {**asdict(outcome), "phase": outcome.phase.value, "steps_left": steps_left}
            self._summary("scram", summary)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _summary(self, kind: str, payload: dict[str, Any]) -> None:
        line = json.dumps({"kind": kind, **payload}, separators=(",", ":"))
        print(f"{self.SUMMARY_PREFIX} {line}", file=self._stream(), flush=True)

    def _emit(self, msg: str) -> None:
        print(f"{self.PREFIX} {msg}", file=self._stream(), flush=True)

    def _stream(self) -> Any:
        # Resolved per call so pytest's capsys sees the output
        return self._out or sys.stderr
