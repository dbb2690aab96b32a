"""Unit tests for quizclash.models.state and quizclash.models.actions.

Tests cover:
- Side: opponent mapping
- PlayerRecord: defaults, display clamping, health ratio
- GameState: winner consistency, display turn, serialization
- GameSnapshot: side accessors, JSON output
- StrategyWeights: normalization, zero vector, bonus
- is_favorable_outcome: per strategy
- AITurnResult: discriminated result parsing
"""

import json

import pytest
from pydantic import ValidationError

from quizclash.models.actions import (
    AITurnResult,
    AnswerResult,
    AttackResult,
    DefendResult,
    Strategy,
    StrategyWeights,
    is_favorable_outcome,
)
from quizclash.models.questions import default_question_bank
from quizclash.models.state import (
    GameSnapshot,
    GameState,
    PlayerRecord,
    Side,
    Winner,
)


class TestSide:
    """Tests for Side enum."""

    def test_opponent(self):
        assert Side.HOME.opponent == Side.AWAY
        assert Side.AWAY.opponent == Side.HOME

    def test_parses_from_string(self):
        assert Side("away") == Side.AWAY


class TestPlayerRecord:
    """Tests for PlayerRecord class."""

    def test_starting_values(self, sample_player_record):
        record = sample_player_record
        assert record.score == 0
        assert record.health == 100
        assert record.defense == 50
        assert record.troops == 10
        assert record.knowledge == 0
        assert record.house_defended is False

    def test_display_health_clamps_at_zero(self):
        record = PlayerRecord(health=-15)
        assert record.health == -15
        assert record.display_health == 0

    def test_health_ratio(self):
        assert PlayerRecord(health=40).health_ratio == pytest.approx(0.4)

    def test_negative_troops_rejected(self):
        with pytest.raises(ValidationError):
            PlayerRecord(troops=-1)


class TestGameState:
    """Tests for GameState class."""

    def test_defaults(self, sample_game_state):
        state = sample_game_state
        assert state.current_turn == 1
        assert state.max_turns == 20
        assert state.active_side == Side.HOME
        assert state.game_over is False
        assert state.winner == Winner.NONE
        assert state.controlled_side == Side.HOME

    def test_game_over_requires_winner(self):
        with pytest.raises(ValidationError):
            GameState(game_over=True)
        assert GameState(game_over=True, winner=Winner.DRAW).game_over

    def test_display_turn_caps_overshoot(self):
        state = GameState(current_turn=21, max_turns=20, game_over=True, winner=Winner.HOME)
        assert state.display_turn == 20

    def test_dict_roundtrip_preserves_enums(self):
        state = GameState(current_turn=4, active_side=Side.AWAY, difficulty="hard")
        data = state.to_dict()
        assert data["active_side"] == "away"
        assert data["difficulty"] == "hard"
        assert GameState.from_dict(data) == state


class TestGameSnapshot:
    """Tests for GameSnapshot class."""

    def test_side_accessors_and_json(self):
        snapshot = GameSnapshot(
            state=GameState(),
            players={Side.HOME: PlayerRecord(score=10), Side.AWAY: PlayerRecord(score=5)},
            current_question=default_question_bank()[0],
            log=["[12:00:00] Game started!"],
        )
        assert snapshot.home.score == 10
        assert snapshot.away.score == 5
        data = json.loads(snapshot.to_json())
        assert data["current_question"]["text"] == "What is the capital of France?"
        assert data["players"]["home"]["score"] == 10


class TestStrategyWeights:
    """Tests for StrategyWeights class."""

    def test_normalized_sums_to_one(self):
        weights = StrategyWeights(answer=2.0, attack=1.0, defend=1.0).normalized()
        assert weights.total == pytest.approx(1.0)
        assert weights.answer == pytest.approx(0.5)

    def test_zero_vector_left_unchanged(self):
        weights = StrategyWeights().normalized()
        assert weights.as_dict() == {"answer": 0.0, "attack": 0.0, "defend": 0.0}

    def test_with_bonus_returns_copy(self):
        weights = StrategyWeights(answer=0.4, attack=0.4, defend=0.2)
        boosted = weights.with_bonus(Strategy.DEFEND, 0.05)
        assert boosted.defend == pytest.approx(0.25)
        assert weights.defend == pytest.approx(0.2)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            StrategyWeights(answer=-0.1)

    def test_dominant_strategy(self):
        assert StrategyWeights(answer=0.2, attack=0.5, defend=0.3).dominant == Strategy.ATTACK
        assert StrategyWeights(answer=0.2, attack=0.2, defend=0.6).dominant == Strategy.DEFEND
        # Ties go to the strategy declared first
        assert StrategyWeights(answer=0.4, attack=0.4, defend=0.2).dominant == Strategy.ANSWER


class TestFavorableOutcome:
    """Tests for is_favorable_outcome."""

    def test_answer(self):
        assert is_favorable_outcome(Strategy.ANSWER, AnswerResult(success=True, points_awarded=10))
        assert not is_favorable_outcome(Strategy.ANSWER, AnswerResult(success=False))

    def test_attack_needs_damage(self):
        assert is_favorable_outcome(Strategy.ATTACK, AttackResult(troops_sent=3, damage_dealt=20))
        assert not is_favorable_outcome(Strategy.ATTACK, AttackResult(troops_sent=3, damage_dealt=0))

    def test_defend(self):
        assert is_favorable_outcome(Strategy.DEFEND, DefendResult())

    def test_mismatched_result(self):
        assert not is_favorable_outcome(Strategy.DEFEND, AnswerResult(success=True))


class TestAITurnResult:
    """Tests for AITurnResult class."""

    def test_result_parsed_by_kind(self):
        turn = AITurnResult.model_validate(
            {"strategy": "attack", "result": {"kind": "attack", "troops_sent": 2, "damage_dealt": 0}}
        )
        assert isinstance(turn.result, AttackResult)
        assert not turn.is_favorable()
