"""Shared fixtures for the typing test suite."""

from __future__ import annotations

import datetime as dt

import pytest

from session import Backspace, Keystroke, Space, process
from words import WordSupply


START = dt.datetime(2024, 1, 1, 12, 0, 0, tzinfo=dt.timezone.utc)


class OrderedSupply(WordSupply):
    """WordSupply that always hands out the corpus in order."""

    def sample(self, n):
        count = min(max(n, 0), len(self.corpus))
        return [w.lower() for w in self.corpus[:count]]


def type_text(state, text, supply, now=START):
    """Feed ``text`` key by key; ``\\b`` is a backspace, `` `` a space."""
    for ch in text:
        if ch == " ":
            event = Space()
        elif ch == "\b":
            event = Backspace()
        else:
            event = Keystroke(ch)
        state = process(state, event, supply, now)
    return state


@pytest.fixture
def start_time():
    return START


@pytest.fixture
def cat_dog_supply():
    return OrderedSupply(["cat", "dog"])


@pytest.fixture
def english_like_supply():
    return OrderedSupply(
        ["the", "quick", "brown", "fox", "jumps", "over", "lazy", "dog", "and", "runs",
         "away", "from", "home", "into", "woods", "today"]
    )
