"""Game balance parameters for Quiz Clash.

This module is the SINGLE SOURCE OF TRUTH for all tunable game constants.
The engine, the strategy policies and the scoring summary import from here.

Parameter Categories:
- Player Setup: Starting stats for both sides
- Knowledge: Rewards for answering questions
- Combat: Troop damage and fortification
- Computer Side: Difficulty, troop sampling, strategy weights
- Logging: Battle log retention

Usage:
    from quizclash.parameters import DAMAGE_PER_TROOP, LEARNING_RATE
"""

# =============================================================================
# PLAYER SETUP
# =============================================================================

STARTING_HEALTH = 100
"""Health each side starts with.

Health may be driven below zero internally; displays clamp it at 0.
The override chain in the adaptive policy reads health as a fraction
of this value.
"""

STARTING_DEFENSE = 50
"""Defense each side starts with.

Defense is subtracted from every incoming attack after fortification
halving, so with 50 defense an unfortified side shrugs off 5 troops.
"""

STARTING_TROOPS = 10
"""Troop pool each side starts with. Troops are never replenished."""

DEFAULT_MAX_TURNS = 20
"""Number of full rounds (home action + away action) before scoring."""


# =============================================================================
# KNOWLEDGE
# =============================================================================

CORRECT_ANSWER_POINTS = 10
"""Score awarded for a correct answer."""

CORRECT_ANSWER_KNOWLEDGE = 5
"""Knowledge gained for a correct answer."""


# =============================================================================
# COMBAT
# =============================================================================

DAMAGE_PER_TROOP = 10
"""Raw damage contributed by each troop sent."""

FORTIFIED_DAMAGE_FACTOR = 0.5
"""Multiplier applied to raw damage when the defender's house is fortified.

The halved value is floored before defense is subtracted.
"""

DAMAGE_SCORE_RATE = 0.5
"""Score credited to the attacker per point of damage actually dealt."""

DEFEND_BONUS = 20
"""Defense added each time a side fortifies its house. Stacks without limit."""


# =============================================================================
# COMPUTER SIDE
# =============================================================================

AI_CORRECT_CHANCE = {
    "easy": 0.6,
    "medium": 0.75,
    "hard": 0.9,
}
"""Probability that the computer side answers its question correctly."""

AI_DEFAULT_CORRECT_CHANCE = 0.75
"""Correctness probability used for an unrecognized difficulty."""

AI_MAX_TROOPS_PER_ATTACK = 5
"""Upper bound on the troops the computer side commits in one attack."""

AI_TROOP_FRACTION_MIN = 0.3
"""Lower end of the random fraction of the troop cap that gets committed.

troops = floor(min(cap, pool) * (MIN + (1 - MIN) * rand)), at least 1.
"""

INITIAL_STRATEGY_WEIGHTS = {"answer": 0.4, "attack": 0.4, "defend": 0.2}
"""Starting weight vector for the adaptive strategy policy."""

LEARNING_RATE = 0.05
"""Weight added to a strategy after it produced a favorable outcome."""

TRAIT_STEP = 0.1
"""Increment for the aggression/defensiveness personality traits."""

ADAPTABILITY = 0.7
"""Fixed adaptability trait reported in the computer side's personality."""

LOW_HEALTH_THRESHOLD = 30
"""Absolute health below which the override chain reacts (self or opponent)."""

LOW_KNOWLEDGE_THRESHOLD = 20
"""Knowledge below which the computer side prioritizes answering."""

LATE_GAME_TURN_RATIO = 0.7
"""Fraction of the turn budget after which the computer side turns aggressive."""

CAUTIOUS_HEALTH_RATIO = 0.5
"""Health fraction below which the computer side leans defensive."""


# =============================================================================
# LOGGING
# =============================================================================

BATTLE_LOG_CAPACITY = 20
"""Maximum number of battle log entries kept (oldest evicted first)."""
