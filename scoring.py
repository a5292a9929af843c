from __future__ import annotations

import math
from dataclasses import dataclass

from session import Phase, SessionState


CHARS_PER_WORD = 5
MIN_ELAPSED_MINUTES = 0.5


@dataclass(frozen=True)
class Score:
    gross_wpm: int
    net_wpm: int
    accuracy: float
    correct: int
    errors: int
    elapsed_s: float


def calculate_wpm(typed_chars: int, errors: int, elapsed_s: float) -> tuple[int, int]:
    """Return ``(gross, net)`` words per minute, floored to whole words.

    Elapsed time below half a minute is treated as half a minute.
    """
    minutes = max(elapsed_s / 60.0, MIN_ELAPSED_MINUTES)
    words = typed_chars / CHARS_PER_WORD
    gross = math.floor(words / minutes)
    net = math.floor(max((words - errors) / minutes, 0))
    return gross, net


def calculate_accuracy(correct: int, errors: int) -> float:
    total = correct + errors
    if total == 0:
        return 100.0
    return 100.0 * correct / total


def compute_score(state: SessionState) -> Score:
    if state.phase is not Phase.FINISHED or state.started_at is None or state.ended_at is None:
        raise ValueError("Scores are only available for a finished session")

    elapsed_s = (state.ended_at - state.started_at).total_seconds()
    gross, net = calculate_wpm(len(state.typed_text), state.error_count, elapsed_s)
    return Score(
        gross_wpm=gross,
        net_wpm=net,
        accuracy=calculate_accuracy(state.correct_count, state.error_count),
        correct=state.correct_count,
        errors=state.error_count,
        elapsed_s=elapsed_s,
    )
