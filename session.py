"""Typing-session state and the keyboard side of its state machine.

A session is an immutable :class:`SessionState`. Every keyboard event is fed
through :func:`process`, which returns the next state; illegal input (typing
past the end of a word, backspacing into a scored word, spacing over an empty
word) leaves the state untouched instead of raising. Timer ticks live in
:mod:`timer`.
"""

from __future__ import annotations

import datetime as dt
import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from words import WordSupply


logger = logging.getLogger(__name__)

INITIAL_WORD_COUNT = 20
MIN_WORDS_LEFT = 8
WORDS_TO_GENERATE = 10


class Phase(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


class CharMark(enum.Enum):
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    PLACEHOLDER = "placeholder"


class WordMark(enum.Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CURRENT = "current"
    PENDING = "pending"


@dataclass(frozen=True)
class Keystroke:
    char: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Space:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


KeyEvent = Union[Keystroke, Backspace, Space, Cancel]


@dataclass(frozen=True)
class SessionState:
    phase: Phase
    target_words: tuple[str, ...]
    time_remaining: int
    current_word_index: int = 0
    current_input: str = ""
    typed_text: str = ""
    correct_count: int = 0
    error_count: int = 0
    word_results: tuple[bool, ...] = field(default_factory=tuple)
    started_at: Optional[dt.datetime] = None
    ended_at: Optional[dt.datetime] = None
    replenish: bool = True
    cancelled: bool = False

    @property
    def word_cursor(self) -> int:
        """Characters typed so far into the current word."""
        return len(self.current_input)

    @property
    def current_word(self) -> str:
        return self.target_words[self.current_word_index]

    @property
    def is_last_word(self) -> bool:
        return self.current_word_index == len(self.target_words) - 1

    @property
    def is_finished(self) -> bool:
        return self.phase is Phase.FINISHED


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def new_session(
    supply: WordSupply, duration: int, word_count: Optional[int] = None
) -> SessionState:
    """Build a NotStarted session.

    Without ``word_count`` the word queue is refilled as the user advances and
    the test ends on the timer. With ``word_count`` exactly that many words
    (capped by the corpus size) are drawn up front and completing the last
    one ends the test.
    """
    if duration <= 0:
        raise ValueError("Test duration must be greater than 0 seconds")
    if word_count is not None and word_count <= 0:
        raise ValueError("Word count must be greater than 0")

    count = INITIAL_WORD_COUNT if word_count is None else word_count
    return SessionState(
        phase=Phase.NOT_STARTED,
        target_words=tuple(supply.sample(count)),
        time_remaining=duration,
        replenish=word_count is None,
    )


def activate(state: SessionState, now: Optional[dt.datetime] = None) -> SessionState:
    """Move a NotStarted session to Running and stamp its start time."""
    if state.phase is not Phase.NOT_STARTED or state.cancelled:
        return state
    logger.info("Session started with %ds on the clock", state.time_remaining)
    return replace(state, phase=Phase.RUNNING, started_at=now or _now())


def finish(state: SessionState, now: Optional[dt.datetime] = None) -> SessionState:
    """Move a Running session to Finished; any other phase is left alone."""
    if state.phase is not Phase.RUNNING:
        return state
    return replace(state, phase=Phase.FINISHED, ended_at=now or _now())


def process(
    state: SessionState,
    event: KeyEvent,
    supply: WordSupply,
    now: Optional[dt.datetime] = None,
) -> SessionState:
    """Apply one keyboard event and return the resulting state."""
    if state.phase is Phase.FINISHED:
        return state
    if isinstance(event, Cancel):
        if not state.cancelled:
            logger.info("Session cancelled in phase %s", state.phase.value)
        return replace(state, cancelled=True)
    if state.cancelled:
        return state

    if state.phase is Phase.NOT_STARTED:
        state = activate(state, now)

    if isinstance(event, Backspace):
        return _erase(state)
    if isinstance(event, Space) or (isinstance(event, Keystroke) and event.char == " "):
        return _advance(state, supply, now)
    if isinstance(event, Keystroke):
        return _type_char(state, event.char)
    return state


def _erase(state: SessionState) -> SessionState:
    if state.word_cursor == 0:
        return state
    return replace(
        state,
        current_input=state.current_input[:-1],
        typed_text=state.typed_text[:-1],
    )


def _type_char(state: SessionState, char: str) -> SessionState:
    if len(char) != 1 or not char.isprintable():
        return state
    if state.word_cursor >= len(state.current_word):
        return state
    return replace(
        state,
        current_input=state.current_input + char,
        typed_text=state.typed_text + char,
    )


def _advance(
    state: SessionState, supply: WordSupply, now: Optional[dt.datetime]
) -> SessionState:
    if state.word_cursor == 0:
        return state

    correct = state.current_input == state.current_word
    scored = replace(
        state,
        correct_count=state.correct_count + int(correct),
        error_count=state.error_count + int(not correct),
        word_results=state.word_results + (correct,),
    )

    if scored.is_last_word:
        logger.info("Session finished on the last word")
        return finish(scored, now)

    next_index = scored.current_word_index + 1
    target_words = scored.target_words
    if scored.replenish and len(target_words) - next_index < MIN_WORDS_LEFT:
        more = supply.sample(WORDS_TO_GENERATE)
        logger.debug("Replenished word queue with %d words", len(more))
        target_words = target_words + tuple(more)

    return replace(
        scored,
        target_words=target_words,
        current_word_index=next_index,
        current_input="",
        typed_text=scored.typed_text + " ",
    )


def current_word_marks(state: SessionState) -> list[tuple[str, CharMark]]:
    """Per-character marks for the word being typed.

    Typed positions carry the typed character, untyped positions carry the
    target character as a placeholder.
    """
    target = state.current_word
    marks: list[tuple[str, CharMark]] = []
    for i, expected in enumerate(target):
        if i < state.word_cursor:
            typed = state.current_input[i]
            mark = CharMark.MATCHED if typed == expected else CharMark.MISMATCHED
            marks.append((typed, mark))
        else:
            marks.append((expected, CharMark.PLACEHOLDER))
    return marks


def word_marks(state: SessionState) -> list[WordMark]:
    """Whole-word marks for every target word."""
    marks = []
    for i in range(len(state.target_words)):
        if i < len(state.word_results):
            marks.append(WordMark.CORRECT if state.word_results[i] else WordMark.INCORRECT)
        elif i == state.current_word_index and not state.is_finished:
            marks.append(WordMark.CURRENT)
        else:
            marks.append(WordMark.PENDING)
    return marks
