"""Question repositories for Quiz Clash.

The engine only needs a QuestionBank; repositories decide where it comes
from. The built-in bank ships with the package, the file repository reads a
JSON document so question sets can be swapped without code changes.

File format (either form is accepted):

    [{"text": "...", "options": ["a", "b", "c", "d"], "correct_index": 0}, ...]
    {"name": "General", "questions": [ ... same items ... ]}
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from quizclash.models.questions import QuestionBank, default_question_bank

logger = logging.getLogger(__name__)


class QuestionRepository(ABC):
    """Abstract base class for question storage."""

    @abstractmethod
    def get_question_bank(self) -> QuestionBank:
        """Load the question bank.

        Returns:
            Non-empty QuestionBank

        Raises:
            ValueError: If the stored questions are missing, empty or malformed
        """
        pass


class BuiltinQuestionRepository(QuestionRepository):
    """Serves the questions bundled with the package."""

    def get_question_bank(self) -> QuestionBank:
        return default_question_bank()


class FileQuestionRepository(QuestionRepository):
    """JSON file-based question repository."""

    def __init__(self, path: str | Path):
        """Initialize repository.

        Args:
            path: Path to the JSON question file
        """
        self.path = Path(path)

    def get_question_bank(self) -> QuestionBank:
        """Load and validate the question file."""
        if not self.path.exists():
            raise ValueError(f"Question file not found: {self.path}")

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Question file {self.path} is not valid JSON: {e}") from e

        items = data.get("questions", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise ValueError(f"Question file {self.path} must contain a list of questions")

        try:
            bank = QuestionBank.from_questions(items)
        except ValidationError as e:
            raise ValueError(f"Invalid questions in {self.path}: {e}") from e

        logger.info(f"Loaded {len(bank)} questions from {self.path}")
        return bank

    def save_question_bank(self, bank: QuestionBank, name: str = "") -> None:
        """Write a bank to the file in the document form."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        document = {
            "name": name or self.path.stem,
            "questions": [q.model_dump(mode="json") for q in bank.questions],
        }
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)
