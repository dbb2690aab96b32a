"""Quiz Clash game models.

This module exports the core data structures for the game.
"""

from .actions import (
    ActionResult,
    AITurnResult,
    AnswerResult,
    AttackResult,
    DefendResult,
    Strategy,
    StrategyWeights,
    is_favorable_outcome,
)
from .questions import (
    DEFAULT_QUESTIONS,
    Question,
    QuestionBank,
    default_question_bank,
)
from .state import (
    Difficulty,
    GameSnapshot,
    GameState,
    PlayerRecord,
    Side,
    Winner,
)

__all__ = [
    # Enums
    "Side",
    "Winner",
    "Difficulty",
    "Strategy",
    "StrategyWeights",
    # State Models
    "GameState",
    "PlayerRecord",
    "GameSnapshot",
    # Questions
    "Question",
    "QuestionBank",
    "DEFAULT_QUESTIONS",
    "default_question_bank",
    # Action Results
    "ActionResult",
    "AnswerResult",
    "AttackResult",
    "DefendResult",
    "AITurnResult",
    "is_favorable_outcome",
]
