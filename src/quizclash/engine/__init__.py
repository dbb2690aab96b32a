"""Game engine module for Quiz Clash.

This module contains the core game logic including:
- combat: The shared damage formula
- battle_log: Bounded, timestamped event log
- scoring: Winner determination and end-of-game summary
- game_engine: Turn state machine and action handlers

Usage:
    from quizclash.engine import create_game

    game = create_game(difficulty="hard")

    snapshot = game.get_snapshot()
    print(snapshot.current_question.text)

    game.answer_question(0)        # home acts
    game.ai_take_turn()            # away acts

    if game.is_game_over():
        print(game.get_winner())
"""

from quizclash.engine.battle_log import BattleLog
from quizclash.engine.combat import CombatOutcome, calculate_raw_damage, resolve_attack
from quizclash.engine.game_engine import SIDE_LABELS, GameEngine, create_game
from quizclash.engine.scoring import (
    GameSummary,
    ScoreBreakdown,
    calculate_final_score,
    calculate_performance_rating,
    calculate_win_margin,
    determine_winner,
    summarize_game,
)

__all__ = [
    # Game engine
    "GameEngine",
    "SIDE_LABELS",
    "create_game",
    # Combat
    "CombatOutcome",
    "calculate_raw_damage",
    "resolve_attack",
    # Battle log
    "BattleLog",
    # Scoring
    "GameSummary",
    "ScoreBreakdown",
    "calculate_final_score",
    "calculate_performance_rating",
    "calculate_win_margin",
    "determine_winner",
    "summarize_game",
]
