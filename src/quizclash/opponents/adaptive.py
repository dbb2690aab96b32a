"""Adaptive strategy policy for the computer side.

Selection happens in two stages every turn:

1. Override chain. Situational rules are evaluated top to bottom and the
   first match overwrites (does not blend) the weight vector:

       self health < 30          -> answer 0.2, attack 0.2, defend 0.6
       opponent health < 30      -> answer 0.2, attack 0.6, defend 0.2
       self knowledge < 20       -> answer 0.6, attack 0.3, defend 0.1
       turn ratio > 0.7          -> answer 0.3, attack 0.5, defend 0.2
       self health ratio < 0.5   -> answer 0.2, attack 0.3, defend 0.5
       otherwise                 -> keep the learned weights

   The vector is renormalized afterwards.

2. Weighted draw. r is drawn uniformly from [0, total) and the bands
   answer -> attack -> defend are walked in that order.

After the action resolves, adapt() adds LEARNING_RATE to the weight of the
strategy just played if it was favorable, then renormalizes.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from quizclash.models.actions import (
    ActionResult,
    Strategy,
    StrategyWeights,
    is_favorable_outcome,
)
from quizclash.opponents.base import PolicyContext, StrategyPolicy
from quizclash.parameters import (
    ADAPTABILITY,
    CAUTIOUS_HEALTH_RATIO,
    INITIAL_STRATEGY_WEIGHTS,
    LATE_GAME_TURN_RATIO,
    LEARNING_RATE,
    LOW_HEALTH_THRESHOLD,
    LOW_KNOWLEDGE_THRESHOLD,
    TRAIT_STEP,
)

logger = logging.getLogger(__name__)

DESPERATE_DEFENSE = StrategyWeights(answer=0.2, attack=0.2, defend=0.6)
OPPORTUNISTIC_ATTACK = StrategyWeights(answer=0.2, attack=0.6, defend=0.2)
CATCH_UP_LEARNING = StrategyWeights(answer=0.6, attack=0.3, defend=0.1)
END_GAME_AGGRESSION = StrategyWeights(answer=0.3, attack=0.5, defend=0.2)
SURVIVAL_CAUTION = StrategyWeights(answer=0.2, attack=0.3, defend=0.5)

UNIFORM_WEIGHTS = StrategyWeights(answer=1.0, attack=1.0, defend=1.0)


class AdaptiveStrategyPolicy(StrategyPolicy):
    """Hand-tuned override chain plus slow reinforcement drift.

    Attributes:
        learning_rate: Bonus added to a strategy after a favorable outcome
        aggression: Trait raised by successful attacks (0.5 to 1.0)
        defensiveness: Trait raised by successful fortifications (0.5 to 1.0)
        knowledge: Own knowledge as last seen in a PolicyContext
        last_rule: Name of the override that fired on the last choose() call
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        initial_weights: Optional[StrategyWeights] = None,
        learning_rate: float = LEARNING_RATE,
    ) -> None:
        super().__init__(name="Adaptive", rng=rng)
        self._initial_weights = initial_weights or StrategyWeights(**INITIAL_STRATEGY_WEIGHTS)
        self.learning_rate = learning_rate
        self.last_rule: Optional[str] = None
        self.reset()

    def reset(self) -> None:
        """Restore initial weights and neutral traits."""
        self._weights = self._initial_weights.model_copy()
        self.aggression = 0.5
        self.defensiveness = 0.5
        self.knowledge = 0
        self.last_rule = None

    @property
    def weights(self) -> StrategyWeights:
        """Copy of the current weight vector."""
        return self._weights.model_copy()

    def apply_overrides(self, context: PolicyContext) -> Optional[str]:
        """Run the override chain and renormalize.

        Returns:
            Name of the rule that fired, or None if the learned weights were kept
        """
        me = context.me
        self.knowledge = me.knowledge
        rule: Optional[str] = None

        if me.health < LOW_HEALTH_THRESHOLD:
            self._weights, rule = DESPERATE_DEFENSE.model_copy(), "desperate_defense"
        elif context.opponent.health < LOW_HEALTH_THRESHOLD:
            self._weights, rule = OPPORTUNISTIC_ATTACK.model_copy(), "opportunistic_attack"
        elif me.knowledge < LOW_KNOWLEDGE_THRESHOLD:
            self._weights, rule = CATCH_UP_LEARNING.model_copy(), "catch_up_learning"
        elif context.turn_ratio > LATE_GAME_TURN_RATIO:
            self._weights, rule = END_GAME_AGGRESSION.model_copy(), "end_game_aggression"
        elif me.health_ratio < CAUTIOUS_HEALTH_RATIO:
            self._weights, rule = SURVIVAL_CAUTION.model_copy(), "survival_caution"

        self._weights = self._weights.normalized()
        self.last_rule = rule
        return rule

    def select(self) -> Strategy:
        """Weighted draw over the current vector.

        A zero vector samples uniformly instead.
        """
        weights = self._weights
        if weights.total <= 0:
            logger.warning("All strategy weights are zero; sampling uniformly")
            weights = UNIFORM_WEIGHTS

        r = self.rng.random() * weights.total
        if r < weights.answer:
            return Strategy.ANSWER
        if r < weights.answer + weights.attack:
            return Strategy.ATTACK
        return Strategy.DEFEND

    def choose(self, context: PolicyContext) -> Strategy:
        """Apply the override chain, then draw a strategy."""
        rule = self.apply_overrides(context)
        strategy = self.select()
        logger.debug(f"Adaptive policy chose {strategy.value} (override={rule}, weights={self._weights.as_dict()})")
        return strategy

    def adapt(
        self,
        strategy: Strategy,
        result: ActionResult,
        context: Optional[PolicyContext] = None,
    ) -> None:
        """Reinforce the strategy just played if it went well."""
        if context is not None:
            self.knowledge = context.me.knowledge
        if is_favorable_outcome(strategy, result):
            self._weights = self._weights.with_bonus(strategy, self.learning_rate)
            if strategy == Strategy.ATTACK:
                self.aggression = min(1.0, self.aggression + TRAIT_STEP)
            elif strategy == Strategy.DEFEND:
                self.defensiveness = min(1.0, self.defensiveness + TRAIT_STEP)
        self._weights = self._weights.normalized()

    def get_personality(self) -> dict[str, float]:
        """Trait summary for display."""
        return {
            "knowledge": self.knowledge,
            "aggression": self.aggression,
            "defensiveness": self.defensiveness,
            "adaptability": ADAPTABILITY,
        }
