"""Game state models for Quiz Clash.

This module defines the per-side PlayerRecord and the overall GameState.
Both are mutated only by the engine's action handlers; everything handed to
callers is a deep copy.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from quizclash.models.questions import Question
from quizclash.parameters import (
    DEFAULT_MAX_TURNS,
    STARTING_DEFENSE,
    STARTING_HEALTH,
    STARTING_TROOPS,
)


class Side(str, Enum):
    """One of the two contestants.

    HOME is human-operated by default, AWAY is computer-operated.
    Inherits from str for proper JSON serialization.
    """

    HOME = "home"
    AWAY = "away"

    @property
    def opponent(self) -> Side:
        """The other side."""
        return Side.AWAY if self is Side.HOME else Side.HOME


class Winner(str, Enum):
    """Outcome of a finished game (NONE while the game is running)."""

    HOME = "home"
    AWAY = "away"
    DRAW = "draw"
    NONE = "none"


class Difficulty(str, Enum):
    """Computer side difficulty level."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class PlayerRecord(BaseModel):
    """Mutable per-side stats.

    Attributes:
        score: Accumulated points (answers and damage dealt)
        health: House health, may go below 0 (see display_health)
        defense: Flat reduction applied to incoming damage
        troops: Remaining troop pool
        knowledge: Knowledge gained from correct answers
        house_defended: Whether the house is fortified against the next attack
    """

    score: float = Field(default=0.0, ge=0.0)
    health: int = Field(default=STARTING_HEALTH)
    defense: int = Field(default=STARTING_DEFENSE, ge=0)
    troops: int = Field(default=STARTING_TROOPS, ge=0)
    knowledge: int = Field(default=0, ge=0)
    house_defended: bool = Field(default=False)

    @property
    def display_health(self) -> int:
        """Health clamped at zero for presentation."""
        return max(0, self.health)

    @property
    def health_ratio(self) -> float:
        """Health as a fraction of starting health."""
        return self.health / STARTING_HEALTH


class GameState(BaseModel):
    """Overall game state.

    Attributes:
        current_turn: Round number, starts at 1 and only increments when
            ownership passes from away back to home
        max_turns: Round budget; exceeding it ends the game
        active_side: Side whose action is awaited
        game_over: Whether the game has ended
        winner: Winner once the game is over, NONE before
        difficulty: Computer side difficulty
        controlled_side: Which logical side the human operates
    """

    current_turn: int = Field(default=1, ge=1)
    max_turns: int = Field(default=DEFAULT_MAX_TURNS, ge=1)
    active_side: Side = Field(default=Side.HOME)
    game_over: bool = Field(default=False)
    winner: Winner = Field(default=Winner.NONE)
    difficulty: Difficulty = Field(default=Difficulty.MEDIUM)
    controlled_side: Side = Field(default=Side.HOME)

    @model_validator(mode="after")
    def check_winner_consistency(self) -> GameState:
        """A finished game must name a winner (or a draw)."""
        if self.game_over and self.winner == Winner.NONE:
            raise ValueError("game_over requires a winner or draw")
        return self

    @property
    def turn_ratio(self) -> float:
        """Fraction of the turn budget consumed."""
        return self.current_turn / self.max_turns

    @property
    def display_turn(self) -> int:
        """Current turn capped at max_turns (the counter overshoots by one at the end)."""
        return min(self.current_turn, self.max_turns)

    def to_dict(self) -> dict:
        """Serialize state to dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> GameState:
        """Deserialize state from dictionary."""
        return cls.model_validate(data)


class GameSnapshot(BaseModel):
    """Read-only copy of everything the presentation layer needs.

    Built from deep copies, so mutating a snapshot never affects the engine
    or later snapshots.

    Attributes:
        state: Overall game state
        players: Both PlayerRecords keyed by side
        current_question: The question at the shared cursor
        log: Battle log lines, oldest first
    """

    state: GameState
    players: dict[Side, PlayerRecord]
    current_question: Question
    log: list[str] = Field(default_factory=list)

    @property
    def home(self) -> PlayerRecord:
        """Home side record."""
        return self.players[Side.HOME]

    @property
    def away(self) -> PlayerRecord:
        """Away side record."""
        return self.players[Side.AWAY]

    def to_json(self) -> str:
        """Serialize snapshot to JSON string."""
        return self.model_dump_json(indent=2)
