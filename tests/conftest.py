"""Shared pytest fixtures and markers for all tests."""

import random
from datetime import datetime

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "cli: marks Textual application tests"
    )


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float = 0.0):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def fixed_random():
    """The FixedRandom class, for tests that build their own engines."""
    return FixedRandom


@pytest.fixture
def fixed_clock():
    """Clock that always reports 12:34:56."""
    return lambda: datetime(2024, 1, 1, 12, 34, 56)


@pytest.fixture
def make_engine(fixed_clock):
    """Factory for engines with a deterministic computer side.

    Usage:
        engine = make_engine(["attack"], roll=0.0)
    """
    from quizclash.engine.game_engine import GameEngine
    from quizclash.opponents.deterministic import ScriptedStrategyPolicy

    def _make(script=("answer",), roll=0.0, **kwargs):
        kwargs.setdefault("clock", fixed_clock)
        return GameEngine(
            policy=ScriptedStrategyPolicy(list(script)),
            rng=FixedRandom(roll),
            **kwargs,
        )

    return _make


@pytest.fixture
def engine(make_engine):
    """Engine whose computer side always answers, and always correctly."""
    return make_engine()


@pytest.fixture
def sample_player_record():
    """Provide a default player record for testing."""
    from quizclash.models.state import PlayerRecord
    return PlayerRecord()


@pytest.fixture
def sample_game_state():
    """Provide a default game state for testing."""
    from quizclash.models.state import GameState
    return GameState()
