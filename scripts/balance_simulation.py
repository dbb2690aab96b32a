#!/usr/bin/env python3
"""
Balance Simulation for Quiz Clash

Plays many games between a simulated home player and a computer policy using
the real engine, then reports win rates, scores and strategy frequencies.

Usage:
    # Adaptive computer vs random home player, medium difficulty
    python scripts/balance_simulation.py

    # Hard difficulty, 500 games, strong home player
    python scripts/balance_simulation.py --difficulty hard --games 500 --accuracy 0.9

    # Machine-readable output
    python scripts/balance_simulation.py --json
"""

import argparse
import json
import logging
import sys

from quizclash.models.state import Difficulty
from quizclash.opponents.base import list_policy_types
from quizclash.parameters import DEFAULT_MAX_TURNS
from quizclash.storage import get_log_level
from quizclash.testing import BatchResults, run_batch


def print_report(results: BatchResults) -> None:
    print("=" * 60)
    print(f"QUIZ CLASH BALANCE: {results.home_policy} (home) vs {results.away_policy} (away)")
    print(f"Difficulty: {results.difficulty.value}   Games: {results.total_games}")
    print("=" * 60)
    print(f"Home wins: {results.home_wins:>5} ({results.home_win_rate:.1%})")
    print(f"Away wins: {results.away_wins:>5} ({results.away_win_rate:.1%})")
    print(f"Draws:     {results.draws:>5} ({results.draw_rate:.1%})")
    print("-" * 60)
    print(f"Average home score: {results.avg_home_score:.1f}")
    print(f"Average away score: {results.avg_away_score:.1f}")
    print("-" * 60)
    for side in ("home", "away"):
        freqs = results.strategy_frequencies(side)
        line = ", ".join(f"{name} {share:.1%}" for name, share in freqs.items())
        print(f"{side.title()} strategies: {line}")


def main():
    parser = argparse.ArgumentParser(
        description="Run Quiz Clash balance simulations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    policies = list_policy_types()
    parser.add_argument("--games", type=int, default=200, help="Number of games (default: 200)")
    parser.add_argument("--home-policy", choices=policies, default="random", help="Home strategy policy")
    parser.add_argument("--away-policy", choices=policies, default="adaptive", help="Away strategy policy")
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.MEDIUM.value,
        help="Computer difficulty (default: medium)",
    )
    parser.add_argument("--accuracy", type=float, default=0.7, help="Home answer accuracy (default: 0.7)")
    parser.add_argument("--max-turns", type=int, default=DEFAULT_MAX_TURNS, help="Rounds per game")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility (default: 42)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, get_log_level(), logging.WARNING))

    try:
        results = run_batch(
            args.games,
            home_policy=args.home_policy,
            away_policy=args.away_policy,
            difficulty=args.difficulty,
            home_accuracy=args.accuracy,
            max_turns=args.max_turns,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(results.to_dict(), indent=2))
    else:
        print_report(results)


if __name__ == "__main__":
    main()
