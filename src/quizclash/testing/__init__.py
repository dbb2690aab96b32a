"""Simulation utilities for Quiz Clash.

- game_runner: Play one full game with a simulated home player
- batch_runner: Play many games and aggregate balance statistics
"""

from quizclash.testing.batch_runner import BatchResults, run_batch
from quizclash.testing.game_runner import GameResult, GameRunner, SimulatedPlayer

__all__ = [
    "GameRunner",
    "GameResult",
    "SimulatedPlayer",
    "BatchResults",
    "run_batch",
]
