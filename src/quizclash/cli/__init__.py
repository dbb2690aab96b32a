"""Quiz Clash CLI module.

Provides a Textual-based terminal interface for playing Quiz Clash.

Usage:
    quizclash

Or directly:
    python -m quizclash.cli.app
"""

from quizclash.cli.app import QuizClashApp, main

__all__ = ["QuizClashApp", "main"]
