#!/usr/bin/env python3
"""run_cavern.py: play hunters through seeded random caverns and report results.

Usage:
    python scripts/run_cavern.py [--hunter greedy] [--episodes 10] [--seed 0] [--format {table,json}]

Each episode generates a cavern from ``seed + episode``, runs the hunt from a
random start to the orb, then the scram from the orb to the exit. Exits with
status 1 if any episode fails.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict

from cavern_agents.game import GameResult, play, setup_game
from cavern_agents.policy import list_hunter_names, make_hunter

COLUMNS = ["seed", "hunt", "hunt_moves", "min_moves", "scram", "gold", "total_gold", "steps_left", "score"]


def run_episodes(args: argparse.Namespace) -> list[GameResult]:
    overrides: dict[str, object] = {"debug": args.debug}
    if args.proximity_weight is not None:
        overrides["proximity_weight"] = args.proximity_weight

    results = []
    for episode in range(args.episodes):
        hunter = make_hunter(args.hunter, **overrides)
        setup = setup_game(args.rows, args.cols, seed=args.seed + episode)
        results.append(play(hunter, setup, slack=args.slack))
    return results


def result_row(result: GameResult) -> dict[str, object]:
    return {
        "seed": result.seed,
        "hunt": "ok" if result.hunt_succeeded else "FAIL",
        "hunt_moves": result.hunt_moves,
        "min_moves": result.min_hunt_moves,
        "scram": "ok" if result.scram_succeeded else "FAIL",
        "gold": result.gold,
        "total_gold": result.total_gold,
        "steps_left": result.steps_left,
        "score": f"{result.score:.1f}",
    }


def print_table(hunter_name: str, results: list[GameResult]) -> None:
    """Print a human-readable results table with averages."""
    if not results:
        print("No episodes run.")
        return

    rows = [result_row(r) for r in results]
    col_widths = [max(len(c), max(len(str(row[c])) for row in rows)) for c in COLUMNS]
    header = "  ".join(c.rjust(w) for c, w in zip(COLUMNS, col_widths))
    sep = "-" * len(header)

    print(f"hunter: {hunter_name}")
    print(sep)
    print(header)
    print(sep)
    for row in rows:
        print("  ".join(str(row[c]).rjust(w) for c, w in zip(COLUMNS, col_widths)))
    print(sep)

    n = len(results)
    wins = sum(1 for r in results if r.succeeded)
    print(
        f"succeeded {wins}/{n}  "
        f"avg hunt moves {sum(r.hunt_moves for r in results) / n:.1f}  "
        f"avg gold {sum(r.gold for r in results) / n:.1f}  "
        f"avg score {sum(r.score for r in results) / n:.1f}"
    )


def print_json_output(hunter_name: str, results: list[GameResult]) -> None:
    payload = {
        "hunter": hunter_name,
        "episodes": [{**asdict(r), "score": r.score, "hunt_bonus": r.hunt_bonus} for r in results],
    }
    for episode in payload["episodes"]:
        episode.pop("trail", None)
    print(json.dumps(payload, indent=2, default=str))


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--hunter", default="greedy", choices=list_hunter_names(), help="Hunter short name")
    parser.add_argument("--episodes", type=int, default=10, help="Number of caverns to play (default: 10)")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first cavern (default: 0)")
    parser.add_argument("--rows", type=int, default=12, help="Cavern rows (default: 12)")
    parser.add_argument("--cols", type=int, default=16, help="Cavern columns (default: 16)")
    parser.add_argument("--slack", type=float, default=1.5, help="Scram budget / shortest escape (default: 1.5)")
    parser.add_argument("--proximity-weight", type=float, default=None, help="Override K in gold + K / distance")
    parser.add_argument("--debug", type=int, choices=[0, 1, 2], default=0, help="Debug verbosity on stderr")
    parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format (default: table)")
    args = parser.parse_args()

    if args.episodes < 1:
        print("Error: --episodes must be at least 1", file=sys.stderr)
        return 1

    results = run_episodes(args)

    if args.format == "table":
        print_table(args.hunter, results)
    else:
        print_json_output(args.hunter, results)

    return 0 if all(r.succeeded for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
