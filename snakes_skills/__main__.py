"""CLI entry point: python -m snakes_skills {simulate,chart,board}."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from snakes_skills.board import DEFAULT_BOARD
from snakes_skills.chart import make_summary_chart
from snakes_skills.engine import RuleSet
from snakes_skills.errors import GameError
from snakes_skills.stats import SimulationSummary, simulate, summarize


RESULTS_DIR = Path("results")
DEFAULT_NAMES = ["P1", "P2"]


def _env_seed() -> int | None:
    raw = os.environ.get("SNAKES_SKILLS_SEED")
    return int(raw) if raw else None


def _run_simulation(args: argparse.Namespace) -> SimulationSummary:
    rules = RuleSet(stop_at_first_win=args.first_win)
    results = simulate(
        args.games, args.players,
        seed=args.seed, max_turns=args.max_turns, rules=rules,
    )
    return summarize(results, args.players)


def _print_summary(summary: SimulationSummary) -> None:
    print(f"\n{summary.games} games")
    print("=" * 40)
    for name in summary.names:
        wins = summary.wins_by_player[name]
        share = wins / summary.games if summary.games else 0.0
        print(f"  {name:20s} {wins:6d}  ({share:6.1%})")
    print(f"\n  mean turns   {summary.mean_turns:7.1f}")
    print(f"  median turns {summary.median_turns:7.1f}")
    if summary.max_turns_hit:
        print(f"  hit turn cap {summary.max_turns_hit:7d}")


# ── simulate ─────────────────────────────────────────────────────────

def cmd_simulate(args: argparse.Namespace) -> None:
    """Simulate passive games and print who wins how often."""
    _print_summary(_run_simulation(args))


# ── chart ────────────────────────────────────────────────────────────

def cmd_chart(args: argparse.Namespace) -> None:
    """Simulate passive games and save a summary chart."""
    summary = _run_simulation(args)
    if not summary.games:
        print("No games simulated.", file=sys.stderr)
        sys.exit(1)
    if args.output:
        out = args.output
    else:
        RESULTS_DIR.mkdir(exist_ok=True)
        out = str(RESULTS_DIR / "simulation.png")
    make_summary_chart(summary, output_path=out)
    print(f"Chart saved to {out}")


# ── board ────────────────────────────────────────────────────────────

def cmd_board(args: argparse.Namespace) -> None:
    """Print the special-cell tables."""
    board = DEFAULT_BOARD
    print("Ladders")
    for foot, top in sorted(board.ladders.items()):
        print(f"  {foot:3d} → {top}")
    print("Snakes")
    for head, tail in sorted(board.snakes.items()):
        print(f"  {head:3d} → {tail}")
    print("Skill tiles")
    print("  " + ", ".join(str(c) for c in sorted(board.skill_tiles)))


# ── main ─────────────────────────────────────────────────────────────

def _add_simulation_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--games", type=int, default=1000, help="Games to simulate (default 1000)")
    p.add_argument("--players", nargs="+", default=DEFAULT_NAMES, help="Player names, 2-4")
    p.add_argument("--seed", type=int, default=_env_seed(), help="Base seed (env SNAKES_SKILLS_SEED)")
    p.add_argument("--max-turns", type=int, default=1000, help="Turn cap per game")
    p.add_argument("--first-win", action="store_true", help="End each game at the first win")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="snakes_skills",
        description="Snakes & Ladders with skills — simulation tools",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("SNAKES_SKILLS_LOG_LEVEL", "WARNING"),
        help="Logging level (env SNAKES_SKILLS_LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="command")

    p_sim = sub.add_parser("simulate", help="Simulate games and print win rates")
    _add_simulation_args(p_sim)

    p_chart = sub.add_parser("chart", help="Simulate games and save a chart")
    _add_simulation_args(p_chart)
    p_chart.add_argument("--output", "-o", help="Output PNG path")

    sub.add_parser("board", help="Show snakes, ladders and skill tiles")

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "simulate":
            cmd_simulate(args)
        elif args.command == "chart":
            cmd_chart(args)
        elif args.command == "board":
            cmd_board(args)
        else:
            parser.print_help()
    except GameError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
