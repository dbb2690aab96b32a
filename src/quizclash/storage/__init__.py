"""Storage and configuration module for Quiz Clash.

This module provides the question repositories and the environment-based
configuration.

Usage:
    from quizclash.storage import get_question_repository

    bank = get_question_repository().get_question_bank()

Configuration via environment variables:
    QUIZCLASH_MAX_TURNS: Round budget (default: 20)
    QUIZCLASH_DIFFICULTY: "easy", "medium" or "hard" (default: "medium")
    QUIZCLASH_QUESTIONS_PATH: JSON question file (default: built-in bank)
    QUIZCLASH_AI_DELAY: CLI thinking delay in seconds (default: 0.8)
    QUIZCLASH_LOG_LEVEL: Logging level name (default: "WARNING")
"""

from .config import (
    get_ai_delay,
    get_default_difficulty,
    get_log_level,
    get_max_turns,
    get_question_repository,
    get_questions_path,
)
from .repository import (
    BuiltinQuestionRepository,
    FileQuestionRepository,
    QuestionRepository,
)

__all__ = [
    # Abstract interface
    "QuestionRepository",
    # Implementations
    "BuiltinQuestionRepository",
    "FileQuestionRepository",
    # Configuration
    "get_max_turns",
    "get_default_difficulty",
    "get_questions_path",
    "get_ai_delay",
    "get_log_level",
    # Factory functions
    "get_question_repository",
]
