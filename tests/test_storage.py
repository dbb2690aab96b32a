"""Tests for quizclash.storage (question repositories and configuration)."""

import json
import logging

import pytest

from quizclash.models.questions import QuestionBank, default_question_bank
from quizclash.models.state import Difficulty
from quizclash.storage import (
    BuiltinQuestionRepository,
    FileQuestionRepository,
    get_ai_delay,
    get_default_difficulty,
    get_log_level,
    get_max_turns,
    get_question_repository,
    get_questions_path,
)

SAMPLE_QUESTIONS = [
    {"text": "2 + 2?", "options": ["3", "4", "5", "22"], "correct_index": 1},
    {"text": "Largest ocean?", "options": ["Atlantic", "Indian", "Arctic", "Pacific"], "correct_index": 3},
]


class TestBuiltinQuestionRepository:
    """Tests for BuiltinQuestionRepository."""

    def test_serves_default_bank(self):
        assert BuiltinQuestionRepository().get_question_bank() == default_question_bank()


class TestFileQuestionRepository:
    """Tests for FileQuestionRepository."""

    def test_load_plain_list(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps(SAMPLE_QUESTIONS))

        bank = FileQuestionRepository(path).get_question_bank()

        assert len(bank) == 2
        assert bank[1].correct_option == "Pacific"

    def test_load_document_form(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps({"name": "Math", "questions": SAMPLE_QUESTIONS[:1]}))
        assert len(FileQuestionRepository(str(path)).get_question_bank()) == 1

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "nested" / "bank.json"
        repo = FileQuestionRepository(path)
        repo.save_question_bank(QuestionBank.from_questions(SAMPLE_QUESTIONS), name="Sample")

        document = json.loads(path.read_text())
        assert document["name"] == "Sample"
        assert repo.get_question_bank() == QuestionBank.from_questions(SAMPLE_QUESTIONS)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            FileQuestionRepository(tmp_path / "missing.json").get_question_bank()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="not valid JSON"):
            FileQuestionRepository(path).get_question_bank()

    def test_empty_bank(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"questions": []}))
        with pytest.raises(ValueError, match="Invalid questions"):
            FileQuestionRepository(path).get_question_bank()

    def test_malformed_question(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"text": "Q?", "options": ["a", "b"], "correct_index": 0}]))
        with pytest.raises(ValueError, match="Invalid questions"):
            FileQuestionRepository(path).get_question_bank()

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"questions": "none"}))
        with pytest.raises(ValueError, match="list of questions"):
            FileQuestionRepository(path).get_question_bank()


class TestConfig:
    """Tests for environment configuration."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "QUIZCLASH_MAX_TURNS",
            "QUIZCLASH_DIFFICULTY",
            "QUIZCLASH_QUESTIONS_PATH",
            "QUIZCLASH_AI_DELAY",
            "QUIZCLASH_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        assert get_max_turns() == 20
        assert get_default_difficulty() == Difficulty.MEDIUM
        assert get_questions_path() is None
        assert get_ai_delay() == pytest.approx(0.8)
        assert get_log_level() == "WARNING"
        assert isinstance(get_question_repository(), BuiltinQuestionRepository)

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("QUIZCLASH_MAX_TURNS", "12")
        monkeypatch.setenv("QUIZCLASH_DIFFICULTY", "EASY")
        monkeypatch.setenv("QUIZCLASH_QUESTIONS_PATH", str(tmp_path / "q.json"))
        monkeypatch.setenv("QUIZCLASH_AI_DELAY", "0")
        monkeypatch.setenv("QUIZCLASH_LOG_LEVEL", "debug")

        assert get_max_turns() == 12
        assert get_default_difficulty() == Difficulty.EASY
        assert get_ai_delay() == 0.0
        assert get_log_level() == "DEBUG"
        repo = get_question_repository()
        assert isinstance(repo, FileQuestionRepository)
        assert repo.path == tmp_path / "q.json"

    @pytest.mark.parametrize("raw", ["many", "0", "-4"])
    def test_bad_max_turns_falls_back(self, monkeypatch, caplog, raw):
        monkeypatch.setenv("QUIZCLASH_MAX_TURNS", raw)
        with caplog.at_level(logging.WARNING, logger="quizclash.storage.config"):
            assert get_max_turns() == 20
        assert "QUIZCLASH_MAX_TURNS" in caplog.text

    def test_bad_difficulty_falls_back(self, monkeypatch):
        monkeypatch.setenv("QUIZCLASH_DIFFICULTY", "nightmare")
        assert get_default_difficulty() == Difficulty.MEDIUM

    def test_negative_delay_clamped(self, monkeypatch):
        monkeypatch.setenv("QUIZCLASH_AI_DELAY", "-1")
        assert get_ai_delay() == 0.0

    def test_explicit_path_beats_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("QUIZCLASH_QUESTIONS_PATH", str(tmp_path / "env.json"))
        repo = get_question_repository(str(tmp_path / "arg.json"))
        assert repo.path == tmp_path / "arg.json"
