"""Action definitions for Quiz Clash.

This module defines the three mutually exclusive strategies a side can play
each turn and the result shapes returned to callers after an action resolves.
Results are returned for feedback only and are never persisted.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class Strategy(str, Enum):
    """The three actions available each turn.

    Declaration order is the band order used for weighted sampling.
    """

    ANSWER = "answer"
    ATTACK = "attack"
    DEFEND = "defend"


class StrategyWeights(BaseModel):
    """Probability weights over the three strategies.

    Weights are non-negative; normalized() rescales them to sum to 1 and is a
    no-op when all three are zero.
    """

    answer: float = Field(default=0.0, ge=0.0)
    attack: float = Field(default=0.0, ge=0.0)
    defend: float = Field(default=0.0, ge=0.0)

    @property
    def total(self) -> float:
        """Sum of the three weights."""
        return self.answer + self.attack + self.defend

    def get(self, strategy: Strategy) -> float:
        """Weight for a strategy."""
        return getattr(self, strategy.value)

    @property
    def dominant(self) -> Strategy:
        """Heaviest strategy; ties go to the one declared first."""
        best = Strategy.ANSWER
        for strategy in (Strategy.ATTACK, Strategy.DEFEND):
            if self.get(strategy) > self.get(best):
                best = strategy
        return best

    def with_bonus(self, strategy: Strategy, amount: float) -> StrategyWeights:
        """Copy with amount added to one strategy's weight."""
        return self.model_copy(update={strategy.value: self.get(strategy) + amount})

    def normalized(self) -> StrategyWeights:
        """Copy rescaled to sum to 1 (unchanged if the total is zero)."""
        total = self.total
        if total <= 0:
            return self.model_copy()
        return StrategyWeights(
            answer=self.answer / total,
            attack=self.attack / total,
            defend=self.defend / total,
        )

    def as_dict(self) -> dict[str, float]:
        """Plain mapping of strategy name to weight."""
        return {"answer": self.answer, "attack": self.attack, "defend": self.defend}


class AnswerResult(BaseModel):
    """Outcome of answering a question."""

    kind: Literal["answer"] = "answer"
    success: bool
    points_awarded: int = Field(default=0, ge=0)


class AttackResult(BaseModel):
    """Outcome of sending troops.

    Attributes:
        troops_sent: Troops actually committed (0 if the pool was empty)
        damage_dealt: Health removed from the defender after mitigation
    """

    kind: Literal["attack"] = "attack"
    troops_sent: int = Field(default=0, ge=0)
    damage_dealt: int = Field(default=0, ge=0)


class DefendResult(BaseModel):
    """Outcome of fortifying a house."""

    kind: Literal["defend"] = "defend"
    defended: bool = True


ActionResult = Annotated[
    Union[AnswerResult, AttackResult, DefendResult],
    Field(discriminator="kind"),
]


class AITurnResult(BaseModel):
    """What the computer side did on its turn."""

    strategy: Strategy
    result: ActionResult

    def is_favorable(self) -> bool:
        """Whether the outcome counts as a success for reinforcement."""
        return is_favorable_outcome(self.strategy, self.result)


def is_favorable_outcome(strategy: Strategy, result: BaseModel) -> bool:
    """Decide whether an action outcome should be reinforced.

    - answer: the question was answered correctly
    - attack: some damage got through
    - defend: the house ended up fortified
    """
    if strategy == Strategy.ANSWER:
        return isinstance(result, AnswerResult) and result.success
    if strategy == Strategy.ATTACK:
        return isinstance(result, AttackResult) and result.damage_dealt > 0
    if strategy == Strategy.DEFEND:
        return isinstance(result, DefendResult) and result.defended
    return False
