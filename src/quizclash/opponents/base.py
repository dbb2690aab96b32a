"""Base strategy policy interface for Quiz Clash.

This module defines the abstract base class the engine consults whenever the
computer side is to move, the context handed to it, and the factory used by
the CLI and the simulation runner.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field

from quizclash.models.actions import ActionResult, Strategy, StrategyWeights
from quizclash.models.state import Difficulty, PlayerRecord


class PolicyContext(BaseModel):
    """What a policy gets to see before choosing.

    Records are copies; policies cannot mutate engine state through them.

    Attributes:
        me: Record of the side the policy plays
        opponent: Record of the other side
        current_turn: Current round number
        max_turns: Round budget
        difficulty: Game difficulty
    """

    me: PlayerRecord
    opponent: PlayerRecord
    current_turn: int = Field(default=1, ge=1)
    max_turns: int = Field(default=20, ge=1)
    difficulty: Difficulty = Field(default=Difficulty.MEDIUM)

    @property
    def turn_ratio(self) -> float:
        """Fraction of the turn budget consumed."""
        return self.current_turn / self.max_turns


class StrategyPolicy(ABC):
    """Abstract base class for computer-side strategy selection.

    Subclasses:
        - AdaptiveStrategyPolicy (override chain + reinforcement)
        - RandomStrategyPolicy (uniform, no learning)
        - ScriptedStrategyPolicy (fixed cycle, for tests and simulations)
    """

    def __init__(self, name: str = "Policy", rng: Optional[random.Random] = None):
        """Initialize policy.

        Args:
            name: Display name for the policy
            rng: Random source; a fresh unseeded one if omitted
        """
        self.name = name
        self._random = rng or random.Random()

    @property
    def rng(self) -> random.Random:
        """Random source used for sampling."""
        return self._random

    @rng.setter
    def rng(self, value: random.Random) -> None:
        self._random = value

    @abstractmethod
    def choose(self, context: PolicyContext) -> Strategy:
        """Choose the strategy for this turn.

        Args:
            context: Snapshot of both sides and the turn counters

        Returns:
            The chosen strategy
        """
        pass

    def adapt(
        self,
        strategy: Strategy,
        result: ActionResult,
        context: Optional[PolicyContext] = None,
    ) -> None:
        """Process the outcome of the chosen action.

        Default implementation does nothing. Subclasses can override
        to implement learning behavior.
        """
        pass

    def reset(self) -> None:
        """Forget everything learned in the current game."""
        pass

    def get_personality(self) -> dict[str, float]:
        """Trait summary for display (none unless overridden)."""
        return {}

    @property
    def weights(self) -> StrategyWeights:
        """Current selection weights (uniform unless overridden)."""
        third = 1.0 / 3.0
        return StrategyWeights(answer=third, attack=third, defend=third)


def list_policy_types() -> list[str]:
    """Names accepted by get_policy_by_type."""
    return ["adaptive", "random"]


def get_policy_by_type(policy_type: str, rng: Optional[random.Random] = None) -> StrategyPolicy:
    """Create a policy by type name.

    Args:
        policy_type: One of list_policy_types()
        rng: Random source handed to the policy

    Returns:
        StrategyPolicy instance

    Raises:
        ValueError: If policy type is unknown
    """
    # Import here to avoid circular imports
    from quizclash.opponents.adaptive import AdaptiveStrategyPolicy
    from quizclash.opponents.deterministic import RandomStrategyPolicy

    type_name = policy_type.lower().replace("-", "_").replace(" ", "_")
    policy_map: dict[str, type[StrategyPolicy]] = {
        "adaptive": AdaptiveStrategyPolicy,
        "random": RandomStrategyPolicy,
        "uniform": RandomStrategyPolicy,
    }

    if type_name in policy_map:
        return policy_map[type_name](rng=rng)

    raise ValueError(
        f"Unknown policy type: {policy_type}. "
        f"Valid types: {list(policy_map.keys())}"
    )
