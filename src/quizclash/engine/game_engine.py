"""Core game engine for Quiz Clash.

This module implements the GameEngine class, which owns the game state, both
player records, the shared question cursor and the battle log, and applies one
action per public call.

Turn Sequence:
1. HOME acts (answer_question / send_troops / defend_house)
2. Ownership passes to AWAY (no turn increment)
3. AWAY acts (ai_take_turn, driven by the injected StrategyPolicy)
4. Ownership returns to HOME and current_turn increments
5. If current_turn now exceeds max_turns the game ends and is scored

Invalid calls (wrong side, game over, nothing to send) never raise; they
return None (or False) and leave the state untouched.
"""

from __future__ import annotations

import logging
import math
import random
import threading
from collections.abc import Sequence
from datetime import datetime
from typing import Callable, Optional, Union

from quizclash.engine.battle_log import BattleLog
from quizclash.engine.combat import resolve_attack
from quizclash.engine.scoring import GameSummary, determine_winner, summarize_game
from quizclash.models.actions import (
    ActionResult,
    AITurnResult,
    AnswerResult,
    AttackResult,
    DefendResult,
    Strategy,
)
from quizclash.models.questions import Question, QuestionBank, default_question_bank
from quizclash.models.state import (
    Difficulty,
    GameSnapshot,
    GameState,
    PlayerRecord,
    Side,
    Winner,
)
from quizclash.opponents.adaptive import AdaptiveStrategyPolicy
from quizclash.opponents.base import PolicyContext, StrategyPolicy
from quizclash.parameters import (
    AI_CORRECT_CHANCE,
    AI_DEFAULT_CORRECT_CHANCE,
    AI_MAX_TROOPS_PER_ATTACK,
    AI_TROOP_FRACTION_MIN,
    BATTLE_LOG_CAPACITY,
    CORRECT_ANSWER_KNOWLEDGE,
    CORRECT_ANSWER_POINTS,
    DEFAULT_MAX_TURNS,
    DEFEND_BONUS,
)

logger = logging.getLogger(__name__)

SIDE_LABELS = {Side.HOME: "Home", Side.AWAY: "Away"}


class GameEngine:
    """Turn engine managing a single game.

    The GameEngine handles:
    - Turn ownership and the turn counter
    - Answer, attack and defend semantics for both sides
    - Consulting the StrategyPolicy on the computer side's turn
    - Terminal condition and winner
    - Copy-on-read snapshots for the presentation layer

    All public methods hold one re-entrant lock, so a snapshot never observes a
    half-applied action.

    Attributes:
        state: Current game state
        players: PlayerRecord per side
        questions: The question bank
        policy: Strategy policy for the computer side
        log: Battle log
    """

    def __init__(
        self,
        question_bank: Optional[Union[QuestionBank, Sequence[Question | dict]]] = None,
        policy: Optional[StrategyPolicy] = None,
        max_turns: int = DEFAULT_MAX_TURNS,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        log_capacity: int = BATTLE_LOG_CAPACITY,
    ) -> None:
        """Initialize the engine and start a game.

        Args:
            question_bank: Questions to play with (default: built-in bank)
            policy: Computer side policy (default: AdaptiveStrategyPolicy
                sharing the engine's random source)
            max_turns: Round budget
            difficulty: Initial difficulty, restored on every init()
            rng: Random source for every probabilistic step
            clock: Time source for battle log timestamps
            log_capacity: Battle log size

        Raises:
            ValueError: If the question bank is empty or invalid, or the
                configuration values are out of range
        """
        if max_turns < 1:
            raise ValueError(f"max_turns must be at least 1, got {max_turns}")

        self._random = rng or random.Random()
        self._lock = threading.RLock()

        if question_bank is None:
            question_bank = default_question_bank()
        elif not isinstance(question_bank, QuestionBank):
            question_bank = QuestionBank.from_questions(question_bank)
        self.questions: QuestionBank = question_bank

        self.policy: StrategyPolicy = policy or AdaptiveStrategyPolicy(rng=self._random)
        self._max_turns = max_turns
        self._difficulty = Difficulty(difficulty)

        self.log = BattleLog(capacity=log_capacity, clock=clock)
        self.state = GameState(max_turns=max_turns, difficulty=self._difficulty)
        self.players: dict[Side, PlayerRecord] = {}
        self.current_question_index = 0

        self.init()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def init(self) -> GameEngine:
        """Start a new game.

        Resets state and both records, keeps the controlled side, picks a
        random starting question and resets the policy and the log.
        """
        with self._lock:
            controlled_side = self.state.controlled_side
            self.state = GameState(
                max_turns=self._max_turns,
                difficulty=self._difficulty,
                controlled_side=controlled_side,
            )
            self.players = {Side.HOME: PlayerRecord(), Side.AWAY: PlayerRecord()}
            self.current_question_index = self._random.randrange(len(self.questions))
            self.policy.reset()
            self.log.reset(f"Game started! {SIDE_LABELS[Side.HOME]} goes first.")
            logger.info(
                f"New game: max_turns={self._max_turns}, difficulty={self._difficulty.value}, "
                f"policy={self.policy.name}, question={self.current_question_index}"
            )
            return self

    # =========================================================================
    # Public API - reads
    # =========================================================================

    @property
    def current_question(self) -> Question:
        """Question at the shared cursor."""
        return self.questions[self.current_question_index]

    def get_snapshot(self) -> GameSnapshot:
        """Get a deep copy of everything the presentation layer reads.

        Returns:
            GameSnapshot independent of the engine's internal state
        """
        with self._lock:
            return GameSnapshot(
                state=self.state.model_copy(deep=True),
                players={side: record.model_copy(deep=True) for side, record in self.players.items()},
                current_question=self.current_question,
                log=self.log.entries(),
            )

    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self.state.game_over

    def get_winner(self) -> Winner:
        """Winner of a finished game, NONE while running."""
        return self.state.winner

    def get_score_summary(self) -> GameSummary:
        """End-of-game style score summary for the current state."""
        with self._lock:
            return summarize_game(self.players, self.state)

    def ai_correct_chance(self) -> float:
        """Probability that the computer side answers correctly."""
        return AI_CORRECT_CHANCE.get(self.state.difficulty.value, AI_DEFAULT_CORRECT_CHANCE)

    # =========================================================================
    # Public API - home side actions
    # =========================================================================

    def answer_question(self, option_index: int) -> Optional[AnswerResult]:
        """Answer the current question for the home side.

        The cursor and the turn advance whether or not the answer is correct.

        Returns:
            AnswerResult, or None if it is not home's turn or the game is over
        """
        with self._lock:
            if not self._can_act(Side.HOME, "answer_question"):
                return None
            result = self._resolve_answer(Side.HOME, self.current_question.is_correct(option_index))
            self.advance_turn()
            return result

    def send_troops(self, requested_count: int) -> Optional[AttackResult]:
        """Attack the away side with up to requested_count troops.

        Returns:
            AttackResult, or None if the call was rejected (wrong turn, game
            over, or no troops to send; the last case is logged and does not
            advance the turn)
        """
        with self._lock:
            if not self._can_act(Side.HOME, "send_troops"):
                return None
            try:
                requested = int(requested_count)
            except (TypeError, ValueError, OverflowError):
                logger.debug(f"send_troops rejected: invalid troop count {requested_count!r}")
                return None

            troops = min(requested, self.players[Side.HOME].troops)
            if troops <= 0:
                self.log.append(f"{SIDE_LABELS[Side.HOME]} has no troops to send!")
                return None

            result = self._resolve_attack(Side.HOME, troops)
            self.advance_turn()
            return result

    def defend_house(self) -> bool:
        """Fortify the home side's house.

        Returns:
            True, or False if it is not home's turn or the game is over
        """
        with self._lock:
            if not self._can_act(Side.HOME, "defend_house"):
                return False
            self._resolve_defend(Side.HOME)
            self.advance_turn()
            return True

    # =========================================================================
    # Public API - computer side
    # =========================================================================

    def ai_take_turn(self) -> Optional[AITurnResult]:
        """Let the strategy policy play the away side's turn.

        Returns:
            AITurnResult with the chosen strategy and its outcome, or None if
            it is not away's turn or the game is over
        """
        with self._lock:
            if not self._can_act(Side.AWAY, "ai_take_turn"):
                return None

            strategy = self.policy.choose(self._policy_context(Side.AWAY))
            result: ActionResult
            if strategy == Strategy.ANSWER:
                correct = self._random.random() < self.ai_correct_chance()
                result = self._resolve_answer(Side.AWAY, correct)
            elif strategy == Strategy.ATTACK:
                troops = self._sample_ai_troops()
                if troops <= 0:
                    self.log.append(f"{SIDE_LABELS[Side.AWAY]} has no troops to send!")
                    result = AttackResult(troops_sent=0, damage_dealt=0)
                else:
                    result = self._resolve_attack(Side.AWAY, troops)
            else:
                result = self._resolve_defend(Side.AWAY)

            self.policy.adapt(strategy, result, self._policy_context(Side.AWAY))
            self.advance_turn()
            return AITurnResult(strategy=strategy, result=result)

    # =========================================================================
    # Public API - turn control and settings
    # =========================================================================

    def advance_turn(self) -> bool:
        """Pass ownership to the other side.

        Away -> home increments current_turn and ends the game once it exceeds
        max_turns. Only the side whose turn is starting has its fortification
        cleared, so a defend holds through the opponent's next action.

        Returns:
            True if play continues, False if the game is (now) over
        """
        with self._lock:
            if self.state.game_over:
                return False

            if self.state.active_side == Side.HOME:
                self.state.active_side = Side.AWAY
            else:
                self.state.active_side = Side.HOME
                self.state.current_turn += 1
                if self.state.current_turn > self.state.max_turns:
                    self._end_game()
                    return False

            self.players[self.state.active_side].house_defended = False
            self.log.append(
                f"Turn {self.state.current_turn}: {SIDE_LABELS[self.state.active_side].upper()}'s turn"
            )
            return True

    def set_difficulty(self, level: Union[Difficulty, str]) -> bool:
        """Change the computer side's difficulty for the current game."""
        with self._lock:
            try:
                difficulty = Difficulty(level)
            except (TypeError, ValueError):
                logger.debug(f"set_difficulty rejected: {level!r}")
                return False
            self.state.difficulty = difficulty
            self.log.append(f"Difficulty set to {difficulty.value}")
            return True

    def set_controlled_side(self, side: Union[Side, str]) -> bool:
        """Record which logical side the human operates."""
        with self._lock:
            try:
                controlled = Side(side)
            except (TypeError, ValueError):
                logger.debug(f"set_controlled_side rejected: {side!r}")
                return False
            self.state.controlled_side = controlled
            self.log.append(f"Player now controls {SIDE_LABELS[controlled].upper()} side")
            return True

    def swap_sides(self) -> None:
        """Exchange the two PlayerRecords wholesale.

        Scores and stats travel with their records; only the side labels
        they sit under change.
        """
        with self._lock:
            self.players[Side.HOME], self.players[Side.AWAY] = (
                self.players[Side.AWAY],
                self.players[Side.HOME],
            )
            self.log.append("Player controls swapped - home and away records exchanged")

    # =========================================================================
    # Action handlers
    # =========================================================================

    def _can_act(self, side: Side, operation: str) -> bool:
        if self.state.game_over:
            logger.debug(f"{operation} rejected: game is over")
            return False
        if self.state.active_side != side:
            logger.debug(f"{operation} rejected: it is {self.state.active_side.value}'s turn")
            return False
        return True

    def _resolve_answer(self, side: Side, correct: bool) -> AnswerResult:
        record = self.players[side]
        label = SIDE_LABELS[side]
        points = 0

        if correct:
            points = CORRECT_ANSWER_POINTS
            record.score += points
            record.knowledge += CORRECT_ANSWER_KNOWLEDGE
            self.log.append(f"{label} answered correctly! +{points} points. Knowledge increased.")
        else:
            self.log.append(f"{label} answered incorrectly. No points gained.")

        self.current_question_index = self.questions.next_index(self.current_question_index)
        return AnswerResult(success=correct, points_awarded=points)

    def _resolve_attack(self, attacker: Side, troops: int) -> AttackResult:
        attacking = self.players[attacker]
        defending = self.players[attacker.opponent]
        label = SIDE_LABELS[attacker]
        target = SIDE_LABELS[attacker.opponent]

        attacking.troops -= troops
        outcome = resolve_attack(troops, defending.house_defended, defending.defense)

        if outcome.fortified:
            self.log.append(f"{label} sent {troops} troops! {target}'s defense reduced damage by 50%.")
        else:
            self.log.append(f"{label} sent {troops} troops! Attacking {target}'s house.")

        defending.health -= outcome.actual_damage
        attacking.score += outcome.score_credit

        if outcome.blocked:
            self.log.append(f"Attack blocked by {target}'s defense.")
        else:
            self.log.append(f"Attack successful! {target} lost {outcome.actual_damage} health.")

        return AttackResult(troops_sent=troops, damage_dealt=outcome.actual_damage)

    def _resolve_defend(self, side: Side) -> DefendResult:
        record = self.players[side]
        record.house_defended = True
        record.defense += DEFEND_BONUS
        self.log.append(f"{SIDE_LABELS[side]} fortified their house! Defense increased.")
        return DefendResult(defended=record.house_defended)

    def _sample_ai_troops(self) -> int:
        """floor(min(5, troops) * (0.3 + 0.7 * rand)), at least 1 if any troops remain."""
        cap = min(AI_MAX_TROOPS_PER_ATTACK, self.players[Side.AWAY].troops)
        if cap <= 0:
            return 0
        fraction = AI_TROOP_FRACTION_MIN + (1 - AI_TROOP_FRACTION_MIN) * self._random.random()
        return max(1, math.floor(cap * fraction))

    def _policy_context(self, side: Side) -> PolicyContext:
        return PolicyContext(
            me=self.players[side].model_copy(deep=True),
            opponent=self.players[side.opponent].model_copy(deep=True),
            current_turn=self.state.current_turn,
            max_turns=self.state.max_turns,
            difficulty=self.state.difficulty,
        )

    def _end_game(self) -> None:
        home_score = self.players[Side.HOME].score
        away_score = self.players[Side.AWAY].score
        winner = determine_winner(home_score, away_score)

        self.state.winner = winner
        self.state.game_over = True

        if winner == Winner.DRAW:
            self.log.append(f"Game over! It's a draw with {home_score:g} points each!")
        else:
            winning_side = Side(winner.value)
            winning_score = self.players[winning_side].score
            self.log.append(f"Game over! {SIDE_LABELS[winning_side]} wins with {winning_score:g} points!")

        logger.info(f"Game over: winner={winner.value}, home={home_score:g}, away={away_score:g}")


def create_game(
    question_bank: Optional[QuestionBank] = None,
    policy_type: str = "adaptive",
    difficulty: Optional[Union[Difficulty, str]] = None,
    max_turns: Optional[int] = None,
    random_seed: Optional[int] = None,
) -> GameEngine:
    """Factory function to create a game from configuration.

    Values left as None come from the environment (see quizclash.storage).

    Args:
        question_bank: Questions to use (default: configured repository)
        policy_type: Computer side policy name
        difficulty: Starting difficulty
        max_turns: Round budget
        random_seed: Seed for the engine's random source

    Returns:
        Initialized GameEngine
    """
    from quizclash.opponents.base import get_policy_by_type
    from quizclash.storage import get_default_difficulty, get_max_turns, get_question_repository

    rng = random.Random(random_seed)
    if question_bank is None:
        question_bank = get_question_repository().get_question_bank()

    return GameEngine(
        question_bank=question_bank,
        policy=get_policy_by_type(policy_type, rng=rng),
        max_turns=max_turns if max_turns is not None else get_max_turns(),
        difficulty=difficulty if difficulty is not None else get_default_difficulty(),
        rng=rng,
    )
