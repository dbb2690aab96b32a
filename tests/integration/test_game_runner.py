"""Tests for the simulation framework.

Tests cover:
- SimulatedPlayer: strategy execution, accuracy, empty troop pool
- GameRunner: full games with the real engine and policies
- run_batch: aggregation and reproducibility
"""

import random

import pytest

from quizclash.engine.game_engine import GameEngine
from quizclash.models.actions import Strategy
from quizclash.models.state import Difficulty, Side, Winner
from quizclash.opponents import (
    AdaptiveStrategyPolicy,
    RandomStrategyPolicy,
    ScriptedStrategyPolicy,
)
from quizclash.testing import BatchResults, GameResult, GameRunner, SimulatedPlayer, run_batch


class TestSimulatedPlayer:
    """Tests for SimulatedPlayer."""

    def test_perfect_accuracy_answers_correctly(self, engine):
        player = SimulatedPlayer(ScriptedStrategyPolicy(["answer"]), accuracy=1.0, rng=random.Random(1))
        assert player.take_turn(engine) == Strategy.ANSWER
        assert engine.get_snapshot().home.score == 10

    def test_zero_accuracy_always_misses(self, engine):
        player = SimulatedPlayer(ScriptedStrategyPolicy(["answer"]), accuracy=0.0, rng=random.Random(1))
        player.take_turn(engine)
        assert engine.get_snapshot().home.score == 0

    def test_attack_without_troops_defends(self, engine):
        engine.players[Side.HOME].troops = 0
        player = SimulatedPlayer(ScriptedStrategyPolicy(["attack"]))
        assert player.take_turn(engine) == Strategy.DEFEND
        assert engine.get_snapshot().home.house_defended is True

    def test_attack_sends_at_most_five(self, engine):
        player = SimulatedPlayer(ScriptedStrategyPolicy(["attack"]), rng=random.Random(4))
        player.take_turn(engine)
        assert 5 <= engine.get_snapshot().home.troops <= 9

    def test_accuracy_bounds(self):
        with pytest.raises(ValueError):
            SimulatedPlayer(RandomStrategyPolicy(), accuracy=1.5)


class TestGameRunner:
    """Tests for GameRunner with real policies."""

    def test_full_game(self):
        rng = random.Random(42)
        engine = GameEngine(rng=rng, max_turns=20)
        player = SimulatedPlayer(RandomStrategyPolicy(rng=random.Random(7)), rng=random.Random(8))

        result = GameRunner(engine, player).run_game()

        assert isinstance(result, GameResult)
        assert engine.is_game_over()
        assert result.turns_played == 20
        assert sum(result.home_strategies.values()) == 20
        assert sum(result.away_strategies.values()) == 20
        assert result.winner in (Winner.HOME, Winner.AWAY, Winner.DRAW)
        assert result.winner == result.summary.winner

    def test_winner_matches_scores(self):
        engine = GameEngine(rng=random.Random(3), max_turns=10)
        player = SimulatedPlayer(AdaptiveStrategyPolicy(rng=random.Random(5)), rng=random.Random(6))
        result = GameRunner(engine, player).run_game()

        if result.home_score > result.away_score:
            assert result.winner == Winner.HOME
        elif result.away_score > result.home_score:
            assert result.winner == Winner.AWAY
        else:
            assert result.winner == Winner.DRAW

    def test_to_dict(self, make_engine):
        engine = make_engine(["defend"], max_turns=2)
        player = SimulatedPlayer(ScriptedStrategyPolicy(["answer"]), accuracy=1.0)
        data = GameRunner(engine, player).run_game().to_dict()

        assert data["winner"] == "home"
        assert data["home_score"] == 20
        assert data["away_strategies"] == {"defend": 2}
        assert data["history"] == [("answer", "defend"), ("answer", "defend")]


class TestRunBatch:
    """Tests for run_batch."""

    def test_aggregates(self):
        results = run_batch(10, max_turns=5, seed=1)

        assert isinstance(results, BatchResults)
        assert results.total_games == 10
        assert results.home_wins + results.away_wins + results.draws == 10
        assert results.home_win_rate + results.away_win_rate + results.draw_rate == pytest.approx(1.0)
        assert sum(results.away_strategies.values()) == 50
        assert sum(results.strategy_frequencies("away").values()) == pytest.approx(1.0, abs=1e-3)

    def test_seeded_batches_match(self):
        first = run_batch(5, difficulty="hard", max_turns=4, seed=9)
        second = run_batch(5, difficulty=Difficulty.HARD, max_turns=4, seed=9)
        assert first.to_dict() == second.to_dict()

    def test_rejects_empty_batch(self):
        with pytest.raises(ValueError):
            run_batch(0)

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            run_batch(1, away_policy="oracle")
