"""Strategy policies for the computer side of Quiz Clash.

1. Adaptive policy - override chain plus reinforcement (the default)
2. Baselines - uniform random and scripted sequences

All policies implement the StrategyPolicy base class interface and are
injected into the engine.
"""

from quizclash.opponents.adaptive import AdaptiveStrategyPolicy
from quizclash.opponents.base import (
    PolicyContext,
    StrategyPolicy,
    get_policy_by_type,
    list_policy_types,
)
from quizclash.opponents.deterministic import (
    RandomStrategyPolicy,
    ScriptedStrategyPolicy,
)

__all__ = [
    # Base classes and types
    "StrategyPolicy",
    "PolicyContext",
    # Factory functions
    "get_policy_by_type",
    "list_policy_types",
    # Policies
    "AdaptiveStrategyPolicy",
    "RandomStrategyPolicy",
    "ScriptedStrategyPolicy",
]
