"""Configuration for Quiz Clash.

This module reads configuration from environment variables and provides the
factory that picks the question repository.
"""

import logging
import os

from quizclash.models.state import Difficulty
from quizclash.parameters import DEFAULT_MAX_TURNS

from .repository import BuiltinQuestionRepository, FileQuestionRepository, QuestionRepository

logger = logging.getLogger(__name__)

# Default configuration (can be overridden via environment variables)
DEFAULT_DIFFICULTY = Difficulty.MEDIUM
DEFAULT_AI_DELAY = 0.8
DEFAULT_LOG_LEVEL = "WARNING"


def get_max_turns() -> int:
    """Get configured turn budget from environment.

    Falls back to the default for missing, non-numeric or non-positive values.
    """
    raw = os.environ.get("QUIZCLASH_MAX_TURNS")
    if raw is None:
        return DEFAULT_MAX_TURNS
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric QUIZCLASH_MAX_TURNS={raw!r}")
        return DEFAULT_MAX_TURNS
    if value < 1:
        logger.warning(f"Ignoring non-positive QUIZCLASH_MAX_TURNS={raw!r}")
        return DEFAULT_MAX_TURNS
    return value


def get_default_difficulty() -> Difficulty:
    """Get configured starting difficulty from environment."""
    raw = os.environ.get("QUIZCLASH_DIFFICULTY", DEFAULT_DIFFICULTY.value).lower()
    try:
        return Difficulty(raw)
    except ValueError:
        logger.warning(f"Ignoring unknown QUIZCLASH_DIFFICULTY={raw!r}")
        return DEFAULT_DIFFICULTY


def get_questions_path() -> str | None:
    """Get configured question file path from environment (None = built-in bank)."""
    return os.environ.get("QUIZCLASH_QUESTIONS_PATH") or None


def get_ai_delay() -> float:
    """Get the CLI's simulated thinking delay in seconds."""
    raw = os.environ.get("QUIZCLASH_AI_DELAY")
    if raw is None:
        return DEFAULT_AI_DELAY
    try:
        return max(0.0, float(raw))
    except ValueError:
        logger.warning(f"Ignoring non-numeric QUIZCLASH_AI_DELAY={raw!r}")
        return DEFAULT_AI_DELAY


def get_log_level() -> str:
    """Get configured logging level name from environment."""
    return os.environ.get("QUIZCLASH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def get_question_repository(path: str | None = None) -> QuestionRepository:
    """Factory function to create the question repository.

    Args:
        path: Question file to read. If None, uses environment config.

    Returns:
        QuestionRepository instance
    """
    if path is None:
        path = get_questions_path()

    if path:
        return FileQuestionRepository(path)
    return BuiltinQuestionRepository()
