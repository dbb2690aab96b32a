"""Scoring utilities for Quiz Clash.

The engine decides the winner from raw scores only (determine_winner).
The remaining helpers build the end-of-game summary shown by the CLI and
aggregated by the simulation runner:

    final_score        = floor(score + knowledge + 0.2 * troops + 0.1 * health)
    performance_rating = 50 + 30 * score_ratio + 10 * health_ratio + 10 * knowledge_ratio
    win_margin         = round((winner - loser) / loser * 100), 100 if loser == 0
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from quizclash.models.state import GameState, PlayerRecord, Side, Winner
from quizclash.parameters import CORRECT_ANSWER_KNOWLEDGE, STARTING_HEALTH

KNOWLEDGE_BONUS_RATE = 1.0
TROOP_BONUS_RATE = 0.2
HEALTH_BONUS_RATE = 0.1
EXPECTED_SCORE_PER_TURN = 15


def determine_winner(home_score: float, away_score: float) -> Winner:
    """Strictly higher score wins; equal scores draw."""
    if home_score > away_score:
        return Winner.HOME
    if away_score > home_score:
        return Winner.AWAY
    return Winner.DRAW


def calculate_final_score(record: PlayerRecord) -> int:
    """Adjusted score rewarding knowledge, unspent troops and survival."""
    score = record.score
    score += record.knowledge * KNOWLEDGE_BONUS_RATE
    score += record.troops * TROOP_BONUS_RATE
    score += record.display_health * HEALTH_BONUS_RATE
    return math.floor(score)


def calculate_performance_rating(record: PlayerRecord, total_turns: int) -> int:
    """Rating from 0 to 100.

    Args:
        record: The side's final record
        total_turns: Turn budget of the game

    Returns:
        Rating, base 50, capped at 100
    """
    rating = 50.0

    max_expected_score = total_turns * EXPECTED_SCORE_PER_TURN
    if max_expected_score > 0:
        rating += min(record.score / max_expected_score, 1.0) * 30

    rating += (record.display_health / STARTING_HEALTH) * 10

    max_knowledge = total_turns * CORRECT_ANSWER_KNOWLEDGE
    if max_knowledge > 0:
        rating += min(record.knowledge / max_knowledge, 1.0) * 10

    return min(100, math.floor(rating))


def calculate_win_margin(winner_score: float, loser_score: float) -> int:
    """Winner's lead as a percentage of the loser's score."""
    if loser_score == 0:
        return 100
    return round((winner_score - loser_score) / loser_score * 100)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-side end-of-game numbers."""

    side: Side
    score: float
    final_score: int
    performance_rating: int


@dataclass(frozen=True)
class GameSummary:
    """End-of-game summary for display and statistics.

    Attributes:
        winner: Winner by raw score
        home: Home side breakdown
        away: Away side breakdown
        win_margin: Winner's lead in percent (0 for a draw)
        turns_played: Rounds completed
    """

    winner: Winner
    home: ScoreBreakdown
    away: ScoreBreakdown
    win_margin: int
    turns_played: int

    def for_side(self, side: Side) -> ScoreBreakdown:
        return self.home if side == Side.HOME else self.away


def summarize_game(players: dict[Side, PlayerRecord], state: GameState) -> GameSummary:
    """Build the summary for the current (usually finished) game."""
    breakdowns = {
        side: ScoreBreakdown(
            side=side,
            score=record.score,
            final_score=calculate_final_score(record),
            performance_rating=calculate_performance_rating(record, state.max_turns),
        )
        for side, record in players.items()
    }
    home_score = players[Side.HOME].score
    away_score = players[Side.AWAY].score
    winner = state.winner if state.game_over else determine_winner(home_score, away_score)

    if winner == Winner.HOME:
        margin = calculate_win_margin(home_score, away_score)
    elif winner == Winner.AWAY:
        margin = calculate_win_margin(away_score, home_score)
    else:
        margin = 0

    return GameSummary(
        winner=winner,
        home=breakdowns[Side.HOME],
        away=breakdowns[Side.AWAY],
        win_margin=margin,
        turns_played=min(state.current_turn, state.max_turns),
    )
