"""Trivia questions for Quiz Clash.

A QuestionBank is an immutable, ordered, non-empty sequence of questions.
It holds no cursor; the engine owns the single shared cursor and reads
questions by index.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator

OPTIONS_PER_QUESTION = 4


class Question(BaseModel):
    """A single multiple-choice trivia item.

    Attributes:
        text: The question text
        options: Exactly four answer options
        correct_index: Index into options of the correct answer
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1)
    options: tuple[str, ...] = Field(..., min_length=OPTIONS_PER_QUESTION, max_length=OPTIONS_PER_QUESTION)
    correct_index: int = Field(..., ge=0, lt=OPTIONS_PER_QUESTION)

    def is_correct(self, option_index: int) -> bool:
        """Check an answer against the correct option.

        Only a plain int can match; bools and other types are wrong answers.
        """
        if isinstance(option_index, bool) or not isinstance(option_index, int):
            return False
        return option_index == self.correct_index

    @property
    def correct_option(self) -> str:
        """Text of the correct option."""
        return self.options[self.correct_index]


class QuestionBank(BaseModel):
    """Immutable ordered collection of questions."""

    model_config = ConfigDict(frozen=True)

    questions: tuple[Question, ...]

    @model_validator(mode="after")
    def check_not_empty(self) -> QuestionBank:
        """An empty bank is a configuration error."""
        if not self.questions:
            raise ValueError("QuestionBank must contain at least one question")
        return self

    @classmethod
    def from_questions(cls, questions: Iterable[Question | dict]) -> QuestionBank:
        """Build a bank from Question objects or plain dicts."""
        return cls(questions=tuple(questions))

    def __len__(self) -> int:
        return len(self.questions)

    def __getitem__(self, index: int) -> Question:
        return self.questions[index]

    def next_index(self, index: int) -> int:
        """Cursor position after index, wrapping at the end of the bank."""
        return (index + 1) % len(self.questions)


DEFAULT_QUESTIONS: Sequence[dict] = (
    {
        "text": "What is the capital of France?",
        "options": ("Paris", "London", "Berlin", "Madrid"),
        "correct_index": 0,
    },
    {
        "text": "Which planet is known as the Red Planet?",
        "options": ("Earth", "Mars", "Jupiter", "Venus"),
        "correct_index": 1,
    },
    {
        "text": "What is the largest mammal in the world?",
        "options": ("Elephant", "Blue Whale", "Giraffe", "Polar Bear"),
        "correct_index": 1,
    },
    {
        "text": "Who painted the Mona Lisa?",
        "options": ("Van Gogh", "Picasso", "Da Vinci", "Rembrandt"),
        "correct_index": 2,
    },
    {
        "text": "What is the chemical symbol for Gold?",
        "options": ("Go", "Gd", "Au", "Ag"),
        "correct_index": 2,
    },
    {
        "text": "How many continents are there?",
        "options": ("5", "6", "7", "8"),
        "correct_index": 2,
    },
    {
        "text": "What is the smallest prime number?",
        "options": ("0", "1", "2", "3"),
        "correct_index": 2,
    },
    {
        "text": "Which element is the most abundant in Earth's atmosphere?",
        "options": ("Oxygen", "Carbon", "Nitrogen", "Hydrogen"),
        "correct_index": 2,
    },
    {
        "text": "Who wrote 'Romeo and Juliet'?",
        "options": ("Charles Dickens", "William Shakespeare", "Mark Twain", "Jane Austen"),
        "correct_index": 1,
    },
    {
        "text": "What is the speed of light in vacuum (m/s)?",
        "options": ("299,792,458", "300,000,000", "299,792", "299,792,459"),
        "correct_index": 0,
    },
)


def default_question_bank() -> QuestionBank:
    """The built-in ten-question bank."""
    return QuestionBank.from_questions(DEFAULT_QUESTIONS)
