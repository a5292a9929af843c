from __future__ import annotations

import logging
from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Footer, Header, Static

from config import RunSettings, configure_logging, parse_args
from corpus import ENGLISH_WORDS, CorpusError, load_word_file
from scoring import Score, compute_score
from session import (
    Backspace,
    Cancel,
    CharMark,
    KeyEvent,
    Keystroke,
    Phase,
    SessionState,
    Space,
    WordMark,
    current_word_marks,
    new_session,
    process,
    word_marks,
)
from timer import TICK_SECONDS, needs_ticks, tick
from wikipedia import fetch_wikipedia_words
from words import WordSupply


logger = logging.getLogger(__name__)

WORD_STYLES = {
    WordMark.CORRECT: "bold green",
    WordMark.INCORRECT: "bold red strike",
    WordMark.PENDING: "dim",
}
CHAR_STYLES = {
    CharMark.MATCHED: "bold",
    CharMark.MISMATCHED: "bold red strike",
    CharMark.PLACEHOLDER: "dim",
}
CURSOR_STYLE = "underline"
TIMER_STYLE = "bold italic"


def render_words(state: SessionState) -> Text:
    """Render the target words with their typing marks."""
    text = Text()
    for i, (word, mark) in enumerate(zip(state.target_words, word_marks(state))):
        if i:
            text.append(" ")
        if mark is WordMark.CURRENT:
            for j, (ch, char_mark) in enumerate(current_word_marks(state)):
                style = CURSOR_STYLE if j == state.word_cursor else CHAR_STYLES[char_mark]
                text.append(ch, style=style)
        else:
            text.append(word, style=WORD_STYLES[mark])
    return text


def build_word_supply(settings: RunSettings) -> WordSupply:
    """Pick the corpus the settings ask for."""
    if settings.words_file is not None:
        logger.info("Loading words from %s", settings.words_file)
        return WordSupply(load_word_file(settings.words_file))
    if settings.source == "wikipedia":
        words = fetch_wikipedia_words()
        if words:
            logger.info("Using %d words from Wikipedia", len(words))
            return WordSupply(words)
        logger.warning("No words collected from Wikipedia, using the English corpus")
    return WordSupply(ENGLISH_WORDS)


class TypingScreen(Screen):
    BINDINGS = [
        Binding("escape", "cancel", "Quit", priority=True),
        Binding("ctrl+c", "cancel", "Quit", show=False, priority=True),
    ]

    def __init__(self, supply: WordSupply, settings: RunSettings) -> None:
        super().__init__()
        self.supply = supply
        self.settings = settings
        self.state = new_session(supply, settings.duration, settings.word_count)
        self._ticker: Optional[Timer] = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="typing"):
            yield Static("", id="timer")
            yield Static("", id="words")
            yield Static("Start typing to begin the test.", id="hint")
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_view()

    def on_key(self, event: events.Key) -> None:
        key_event = self._translate(event)
        if key_event is None:
            return
        event.stop()
        self._apply(process(self.state, key_event, self.supply))

    def action_cancel(self) -> None:
        self.state = process(self.state, Cancel(), self.supply)
        self._stop_ticker()
        self.app.exit()

    def _translate(self, event: events.Key) -> Optional[KeyEvent]:
        if event.key == "backspace":
            return Backspace()
        if event.key == "space":
            return Space()
        if event.is_printable and event.character:
            return Keystroke(event.character)
        return None

    def _on_tick(self) -> None:
        self._apply(tick(self.state))

    def _apply(self, state: SessionState) -> None:
        self.state = state
        if needs_ticks(state) and self._ticker is None:
            self._ticker = self.set_interval(TICK_SECONDS, self._on_tick)
        elif not needs_ticks(state):
            self._stop_ticker()

        if state.phase is Phase.FINISHED:
            self.app.switch_screen(ResultsScreen(compute_score(state), self.supply, self.settings))
            return
        self._refresh_view()

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
            self._ticker = None

    def _refresh_view(self) -> None:
        self.query_one("#timer", Static).update(
            Text(str(self.state.time_remaining), style=TIMER_STYLE)
        )
        self.query_one("#words", Static).update(render_words(self.state))
        hint = "" if self.state.phase is Phase.RUNNING else "Start typing to begin the test."
        self.query_one("#hint", Static).update(hint)


class ResultsScreen(Screen):
    BINDINGS = [
        ("enter", "restart", "Restart"),
        ("r", "restart", "Restart"),
        ("escape", "quit", "Quit"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, score: Score, supply: WordSupply, settings: RunSettings) -> None:
        super().__init__()
        self.score = score
        self.supply = supply
        self.settings = settings

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="results"):
            yield Static("Results", id="results-title")
            yield Static(f"WPM: {self.score.net_wpm}", id="results-wpm")
            yield Static(f"Raw WPM: {self.score.gross_wpm}", id="results-raw-wpm")
            yield Static(f"Accuracy: {self.score.accuracy:.1f}%", id="results-accuracy")
            yield Static(f"Correct: {self.score.correct}", id="results-correct")
            yield Static(f"Errors: {self.score.errors}", id="results-errors")
        yield Footer()

    def action_restart(self) -> None:
        self.app.switch_screen(TypingScreen(self.supply, self.settings))

    def action_quit(self) -> None:
        self.app.exit()


class TypingTestApp(App):
    CSS = """
    #typing, #results {
        padding: 1 2;
        border: round $primary;
    }

    #timer {
        margin-bottom: 1;
    }

    #hint {
        color: $text-muted;
        margin-top: 1;
    }

    #results-title {
        text-style: bold underline;
        margin-bottom: 1;
    }
    """

    TITLE = "typespeed"

    def __init__(self, supply: WordSupply, settings: RunSettings) -> None:
        super().__init__()
        self.supply = supply
        self.settings = settings

    def on_mount(self) -> None:
        self.push_screen(TypingScreen(self.supply, self.settings))


def main() -> None:
    settings = parse_args()
    configure_logging(settings.log_level)
    try:
        supply = build_word_supply(settings)
    except CorpusError as exc:
        raise SystemExit(f"Error: {exc}") from exc
    TypingTestApp(supply, settings).run()


if __name__ == "__main__":
    main()
