"""Quiz Clash CLI Application.

A Textual-based terminal front-end for the game engine. It only reads
snapshots and calls the engine's public operations:
- Main menu with difficulty and side selection
- Game screen with question, actions, both sides' stats and the battle log
- Computer strategy panel and a how-to-play panel
- Simulated "thinking" delay before the computer moves
- End-game results with score breakdown
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Rule, Static

from quizclash.engine.game_engine import GameEngine, create_game
from quizclash.engine.scoring import ScoreBreakdown
from quizclash.models.actions import AITurnResult, AnswerResult, AttackResult, Strategy
from quizclash.models.state import Difficulty, GameSnapshot, PlayerRecord, Side, Winner
from quizclash.opponents.base import StrategyPolicy
from quizclash.storage import get_ai_delay, get_default_difficulty, get_log_level

logger = logging.getLogger(__name__)


# =============================================================================
# Theme and Styles
# =============================================================================

CSS = """
Screen {
    background: $surface;
}

#main-menu {
    align: center middle;
    width: 100%;
    height: 100%;
}

.menu-container {
    width: 60;
    height: auto;
    border: solid green;
    padding: 1 2;
}

.menu-title {
    text-align: center;
    text-style: bold;
    color: $success;
    margin-bottom: 1;
}

.menu-button {
    width: 100%;
    margin: 1 0;
}

#status-bar {
    dock: top;
    height: 1;
    background: $primary-darken-2;
    color: $text;
    padding: 0 1;
}

#stats-row {
    height: auto;
}

.stats-box {
    width: 1fr;
    border: solid $primary;
    padding: 0 1;
    height: auto;
}

.stats-header {
    text-style: bold;
    color: $secondary;
}

#question-panel {
    border: solid $warning;
    padding: 0 1;
    height: auto;
}

#question-text {
    text-style: bold;
    margin-bottom: 1;
}

.option-button {
    width: 1fr;
    margin: 0 1 0 0;
}

#actions-row {
    height: auto;
    margin: 1 0;
}

#troop-input {
    width: 16;
}

#log-panel {
    border: solid $primary;
    height: 1fr;
    padding: 0 1;
}

#ai-panel {
    border: solid $secondary;
    padding: 0 1;
    height: auto;
}

#help-panel {
    border: solid $success;
    padding: 0 1;
    height: auto;
    display: none;
}

#help-panel.visible {
    display: block;
}

.panel-title {
    text-style: bold;
    color: $secondary;
}

.winner-banner {
    text-align: center;
    text-style: bold;
    color: $warning;
}
"""


def format_record(title: str, record: PlayerRecord) -> str:
    """Multi-line stats block for one side."""
    fortified = "yes" if record.house_defended else "no"
    return (
        f"{title}\n"
        f"Score: {record.score:g}   Health: {record.display_health}\n"
        f"Defense: {record.defense}   Troops: {record.troops}\n"
        f"Knowledge: {record.knowledge}   Fortified: {fortified}"
    )


def describe_ai_turn(turn: AITurnResult) -> str:
    """One-line notification text for the computer side's move."""
    result = turn.result
    if isinstance(result, AnswerResult):
        return "Computer answered correctly!" if result.success else "Computer answered incorrectly."
    if isinstance(result, AttackResult):
        if result.troops_sent == 0:
            return "Computer had no troops to send."
        return f"Computer sent {result.troops_sent} troops for {result.damage_dealt} damage."
    return "Computer fortified its house."


def format_policy(policy: StrategyPolicy) -> str:
    """Strategy weights with the dominant one marked, plus personality traits."""
    weights = policy.weights
    dominant = weights.dominant
    lines = [f"COMPUTER STRATEGY ({policy.name})"]
    for strategy in Strategy:
        marker = ">" if strategy == dominant else " "
        lines.append(f"{marker} {strategy.value.title():<7} {weights.get(strategy):.0%}")
    traits = policy.get_personality()
    if traits:
        lines.append("   ".join(f"{name.title()}: {value:g}" for name, value in traits.items()))
    return "\n".join(lines)


HOW_TO_PLAY = """HOW TO PLAY
Each turn pick one action, then the computer takes its turn.
1-4  Answer the question: +10 points and +5 knowledge if correct
a    Send troops: 10 damage per troop, minus the defender's defense
d    Defend: +20 defense, halves the next attack against you
e    End turn without acting
Highest score after the last turn wins. Press h to hide this panel."""


# =============================================================================
# Screens
# =============================================================================


class MainMenuScreen(Screen):
    """Main menu screen with game options."""

    BINDINGS = [
        Binding("n", "new_game", "New Game"),
        Binding("q", "quit", "Quit"),
    ]

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="main-menu"):
            with Vertical(classes="menu-container"):
                yield Static("QUIZ CLASH", classes="menu-title")
                yield Static("Answer, attack or defend", classes="menu-title")
                yield Rule()
                yield Button("New Game", id="new-game", classes="menu-button", variant="success")
                yield Button(self._difficulty_label(), id="difficulty", classes="menu-button", variant="primary")
                yield Button(self._side_label(), id="side", classes="menu-button", variant="default")
                yield Button("Quit", id="quit", classes="menu-button", variant="error")
        yield Footer()

    def _difficulty_label(self) -> str:
        return f"Difficulty: {self.app.difficulty.value.title()}"

    def _side_label(self) -> str:
        return f"Play as: {self.app.controlled_side.value.title()}"

    @on(Button.Pressed, "#new-game")
    def start_new_game(self) -> None:
        self.app.push_screen(GameScreen())

    @on(Button.Pressed, "#difficulty")
    def cycle_difficulty(self) -> None:
        levels = list(Difficulty)
        self.app.difficulty = levels[(levels.index(self.app.difficulty) + 1) % len(levels)]
        self.query_one("#difficulty", Button).label = self._difficulty_label()

    @on(Button.Pressed, "#side")
    def toggle_side(self) -> None:
        self.app.controlled_side = self.app.controlled_side.opponent
        self.query_one("#side", Button).label = self._side_label()

    @on(Button.Pressed, "#quit")
    def quit_app(self) -> None:
        self.app.exit()

    def action_new_game(self) -> None:
        self.start_new_game()

    def action_quit(self) -> None:
        self.app.exit()


class GameScreen(Screen):
    """Main game screen with all game panels."""

    AUTO_FOCUS = None

    BINDINGS = [
        Binding("escape", "main_menu", "Main Menu"),
        Binding("1", "answer(0)", "Option 1", show=False),
        Binding("2", "answer(1)", "Option 2", show=False),
        Binding("3", "answer(2)", "Option 3", show=False),
        Binding("4", "answer(3)", "Option 4", show=False),
        Binding("a", "attack", "Attack"),
        Binding("d", "defend", "Defend"),
        Binding("e", "end_turn", "End Turn"),
        Binding("h", "toggle_help", "How to Play"),
        Binding("r", "restart", "Restart"),
    ]

    def __init__(self, engine: Optional[GameEngine] = None) -> None:
        super().__init__()
        self.engine = engine
        self._ai_pending = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("Turn 1", id="status-bar")
        with Vertical():
            with Horizontal(id="stats-row"):
                yield Static("", id="you-stats", classes="stats-box")
                yield Static("", id="computer-stats", classes="stats-box")
            with Vertical(id="question-panel"):
                yield Static("QUESTION (1-4 to answer)", classes="panel-title")
                yield Static("", id="question-text")
                with Horizontal():
                    for index in range(4):
                        yield Button("", id=f"option-{index}", classes="option-button")
            with Horizontal(id="actions-row"):
                yield Input(value="3", placeholder="Troops", id="troop-input", type="integer")
                yield Button("Send Troops (a)", id="attack-btn", classes="action-button", variant="error")
                yield Button("Defend House (d)", id="defend-btn", classes="action-button", variant="primary")
                yield Button("End Turn (e)", id="end-turn-btn", classes="action-button", variant="default")
            yield Static(HOW_TO_PLAY, id="help-panel")
            yield Static("", id="ai-panel")
            with VerticalScroll(id="log-panel"):
                yield Static("BATTLE LOG", classes="panel-title")
                yield Static("", id="log-text")
        yield Footer()

    def on_mount(self) -> None:
        """Create the engine (unless one was injected) and draw the board."""
        if self.engine is None:
            self.engine = self.app.create_engine()
        if self.app.controlled_side == Side.AWAY and self.engine.get_snapshot().state.controlled_side != Side.AWAY:
            self.engine.set_controlled_side(Side.AWAY)
            self.engine.swap_sides()
        self.update_display()

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def update_display(self) -> None:
        """Redraw every panel from a fresh snapshot."""
        snapshot = self.engine.get_snapshot()
        state = snapshot.state

        turn_owner = "Your move" if state.active_side == Side.HOME else "Computer is thinking..."
        if state.game_over:
            turn_owner = "Game over"
        self.query_one("#status-bar", Static).update(
            f"Turn {state.display_turn}/{state.max_turns} | {state.difficulty.value.title()} | {turn_owner}"
        )

        you = f"YOU ({state.controlled_side.value.upper()})"
        self.query_one("#you-stats", Static).update(format_record(you, snapshot.home))
        self.query_one("#computer-stats", Static).update(format_record("COMPUTER", snapshot.away))

        question = snapshot.current_question
        self.query_one("#question-text", Static).update(question.text)
        for index, option in enumerate(question.options):
            self.query_one(f"#option-{index}", Button).label = f"{index + 1}. {option}"

        self.query_one("#log-text", Static).update("\n".join(reversed(snapshot.log)))
        self.query_one("#ai-panel", Static).update(format_policy(self.engine.policy))
        self._set_actions_enabled(self._human_can_act(snapshot))

    def _human_can_act(self, snapshot: GameSnapshot) -> bool:
        return snapshot.state.active_side == Side.HOME and not snapshot.state.game_over and not self._ai_pending

    def _set_actions_enabled(self, enabled: bool) -> None:
        for button in self.query(".option-button, .action-button").results(Button):
            button.disabled = not enabled

    # -------------------------------------------------------------------------
    # Human actions
    # -------------------------------------------------------------------------

    def action_answer(self, option_index: int) -> None:
        result = self.engine.answer_question(option_index)
        if result is None:
            return
        if result.success:
            self.notify(f"Correct! +{result.points_awarded} points")
        else:
            self.notify("Incorrect answer", severity="warning")
        self._after_human_action()

    def action_attack(self) -> None:
        if not self._human_can_act(self.engine.get_snapshot()):
            return
        raw = self.query_one("#troop-input", Input).value
        try:
            requested = int(raw)
        except ValueError:
            self.notify("Enter a number of troops", severity="error")
            return
        result = self.engine.send_troops(requested)
        if result is None:
            self.notify("No troops to send", severity="error")
            self.update_display()
            return
        self.notify(f"Sent {result.troops_sent} troops for {result.damage_dealt} damage")
        self._after_human_action()

    def action_defend(self) -> None:
        if self.engine.defend_house():
            self.notify("House fortified")
            self._after_human_action()

    def action_end_turn(self) -> None:
        """Pass without acting."""
        if not self._human_can_act(self.engine.get_snapshot()):
            return
        self.engine.advance_turn()
        self.notify("Turn passed")
        self._after_human_action()

    def action_toggle_help(self) -> None:
        self.query_one("#help-panel", Static).toggle_class("visible")

    def action_restart(self) -> None:
        self._ai_pending = False
        self.engine.init()
        self.engine.set_difficulty(self.app.difficulty)
        self.update_display()

    def action_main_menu(self) -> None:
        self.app.pop_screen()

    @on(Button.Pressed, ".option-button")
    def option_pressed(self, event: Button.Pressed) -> None:
        self.action_answer(int(str(event.button.id).split("-")[1]))

    @on(Button.Pressed, "#attack-btn")
    def attack_pressed(self) -> None:
        self.action_attack()

    @on(Button.Pressed, "#defend-btn")
    def defend_pressed(self) -> None:
        self.action_defend()

    @on(Button.Pressed, "#end-turn-btn")
    def end_turn_pressed(self) -> None:
        self.action_end_turn()

    # -------------------------------------------------------------------------
    # Computer turn
    # -------------------------------------------------------------------------

    def _after_human_action(self) -> None:
        if self.engine.is_game_over():
            self._finish()
            return
        self._ai_pending = True
        self.update_display()
        # Textual timers need a positive interval
        if self.app.ai_delay > 0:
            self.set_timer(self.app.ai_delay, self._run_ai_turn)
        else:
            self.call_later(self._run_ai_turn)

    def _run_ai_turn(self) -> None:
        self._ai_pending = False
        turn = self.engine.ai_take_turn()
        if turn is not None:
            self.notify(describe_ai_turn(turn))
        if self.engine.is_game_over():
            self._finish()
            return
        self.update_display()

    def _finish(self) -> None:
        self.update_display()
        self.app.push_screen(EndGameScreen(self.engine))


class EndGameScreen(Screen):
    """Screen showing game results."""

    BINDINGS = [
        Binding("p", "play_again", "Play Again"),
        Binding("m", "main_menu", "Main Menu"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, engine: GameEngine) -> None:
        super().__init__()
        self.engine = engine

    def compose(self) -> ComposeResult:
        summary = self.engine.get_score_summary()
        yield Header()
        with Container(id="main-menu"):
            with Vertical(classes="menu-container"):
                yield Static("GAME OVER", classes="menu-title")
                yield Static(self._banner(summary.winner), classes="winner-banner")
                yield Rule()
                yield Static(self._breakdown("You", summary.home))
                yield Static(self._breakdown("Computer", summary.away))
                if summary.winner != Winner.DRAW:
                    yield Static(f"Win margin: {summary.win_margin}%")
                yield Rule()
                yield Button("Play Again", id="play-again", variant="success", classes="menu-button")
                yield Button("Main Menu", id="main-menu-btn", variant="default", classes="menu-button")
                yield Button("Quit", id="quit", variant="error", classes="menu-button")
        yield Footer()

    @staticmethod
    def _banner(winner: Winner) -> str:
        if winner == Winner.HOME:
            return "You win!"
        if winner == Winner.AWAY:
            return "The computer wins."
        return "It's a draw."

    @staticmethod
    def _breakdown(title: str, breakdown: ScoreBreakdown) -> str:
        return (
            f"{title}: {breakdown.score:g} points "
            f"(final {breakdown.final_score}, rating {breakdown.performance_rating}/100)"
        )

    @on(Button.Pressed, "#play-again")
    def play_again(self) -> None:
        self.app.pop_screen()
        game_screen = self.app.screen
        if isinstance(game_screen, GameScreen):
            game_screen.action_restart()

    @on(Button.Pressed, "#main-menu-btn")
    def go_to_main_menu(self) -> None:
        # Pop all screens back to main menu (keep base Screen + MainMenuScreen)
        while len(self.app.screen_stack) > 2:
            self.app.pop_screen()

    @on(Button.Pressed, "#quit")
    def quit_app(self) -> None:
        self.app.exit()

    def action_play_again(self) -> None:
        self.play_again()

    def action_main_menu(self) -> None:
        self.go_to_main_menu()

    def action_quit(self) -> None:
        self.app.exit()


# =============================================================================
# Main Application
# =============================================================================


class QuizClashApp(App):
    """Main Quiz Clash CLI application."""

    TITLE = "Quiz Clash"
    SUB_TITLE = "Answer, attack or defend"
    CSS = CSS

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        policy_type: str = "adaptive",
        ai_delay: Optional[float] = None,
        random_seed: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.policy_type = policy_type
        self.ai_delay = get_ai_delay() if ai_delay is None else ai_delay
        self.random_seed = random_seed
        self.difficulty: Difficulty = get_default_difficulty()
        self.controlled_side: Side = Side.HOME

    def create_engine(self) -> GameEngine:
        """Build an engine with the current menu settings."""
        return create_game(
            policy_type=self.policy_type,
            difficulty=self.difficulty,
            random_seed=self.random_seed if self.random_seed is not None else random.randrange(2**32),
        )

    def on_mount(self) -> None:
        """Show main menu when app starts."""
        self.push_screen(MainMenuScreen())


def main() -> None:
    """Entry point for the CLI application."""
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename="quizclash.log",
    )
    app = QuizClashApp()
    app.run()


if __name__ == "__main__":
    main()
