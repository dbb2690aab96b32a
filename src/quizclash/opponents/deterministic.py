"""Non-learning strategy policies for Quiz Clash.

These are used by the simulation runner as baselines and by tests that
need the computer side to behave predictably.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Optional

from quizclash.models.actions import Strategy
from quizclash.opponents.base import PolicyContext, StrategyPolicy


class RandomStrategyPolicy(StrategyPolicy):
    """Picks each strategy with equal probability and never learns."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        super().__init__(name="Random", rng=rng)

    def choose(self, context: PolicyContext) -> Strategy:
        return self.rng.choice(list(Strategy))


class ScriptedStrategyPolicy(StrategyPolicy):
    """Plays a fixed sequence of strategies, cycling when it runs out.

    Args:
        script: Strategies (or their string values) to play in order
        rng: Unused; accepted for factory compatibility
    """

    def __init__(
        self,
        script: Sequence[Strategy | str],
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(name="Scripted", rng=rng)
        if not script:
            raise ValueError("ScriptedStrategyPolicy needs at least one strategy")
        self.script = [Strategy(s) for s in script]
        self._position = 0

    def choose(self, context: PolicyContext) -> Strategy:
        strategy = self.script[self._position % len(self.script)]
        self._position += 1
        return strategy

    def reset(self) -> None:
        self._position = 0
