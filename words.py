from __future__ import annotations

import logging
import random
from typing import Iterable, Optional


logger = logging.getLogger(__name__)


class WordSupply:
    """Random source of target words drawn from a fixed corpus.

    Words are drawn independently with replacement, so the same word may
    appear several times in one batch. A request for more words than the
    corpus holds is capped at the corpus size.
    """

    def __init__(self, corpus: Iterable[str], rng: Optional[random.Random] = None) -> None:
        self._corpus: tuple[str, ...] = tuple(corpus)
        if not self._corpus:
            raise ValueError("WordSupply needs at least one word")
        self._rng = rng or random.Random()

    @property
    def corpus(self) -> tuple[str, ...]:
        return self._corpus

    def __len__(self) -> int:
        return len(self._corpus)

    def sample(self, n: int) -> list[str]:
        count = min(max(n, 0), len(self._corpus))
        words = [self._rng.choice(self._corpus).lower() for _ in range(count)]
        logger.debug("Sampled %d of %d requested words", count, n)
        return words
