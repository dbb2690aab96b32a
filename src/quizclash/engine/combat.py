"""Combat resolution for Quiz Clash.

A single pure formula shared by both sides:

    raw_damage    = troops_sent * DAMAGE_PER_TROOP
    mitigated     = floor(raw_damage * 0.5)   if the defender is fortified
    actual_damage = max(0, mitigated - defender_defense)
    score_credit  = actual_damage * DAMAGE_SCORE_RATE
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from quizclash.parameters import (
    DAMAGE_PER_TROOP,
    DAMAGE_SCORE_RATE,
    FORTIFIED_DAMAGE_FACTOR,
)


@dataclass(frozen=True)
class CombatOutcome:
    """Result of resolving one attack.

    Attributes:
        troops_sent: Troops committed by the attacker
        raw_damage: Damage before any mitigation
        mitigated_damage: Damage after fortification halving
        actual_damage: Damage that reaches the defender's health
        score_credit: Score credited to the attacker
        fortified: Whether the defender's fortification applied
    """

    troops_sent: int
    raw_damage: int
    mitigated_damage: int
    actual_damage: int
    score_credit: float
    fortified: bool

    @property
    def blocked(self) -> bool:
        """True when defense absorbed the whole attack."""
        return self.actual_damage == 0


def calculate_raw_damage(troops_sent: int) -> int:
    """Raw damage from a troop commitment."""
    return troops_sent * DAMAGE_PER_TROOP


def resolve_attack(
    troops_sent: int,
    defender_defended: bool,
    defender_defense: int,
) -> CombatOutcome:
    """Resolve an attack against a defender.

    Args:
        troops_sent: Troops committed (callers guarantee > 0)
        defender_defended: Whether the defender's house is fortified
        defender_defense: Defender's flat defense value

    Returns:
        CombatOutcome with the damage that gets through and the attacker's
        score credit
    """
    raw = calculate_raw_damage(troops_sent)
    mitigated = math.floor(raw * FORTIFIED_DAMAGE_FACTOR) if defender_defended else raw
    actual = max(0, mitigated - defender_defense)
    return CombatOutcome(
        troops_sent=troops_sent,
        raw_damage=raw,
        mitigated_damage=mitigated,
        actual_damage=actual,
        score_credit=actual * DAMAGE_SCORE_RATE,
        fortified=defender_defended,
    )
