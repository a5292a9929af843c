from __future__ import annotations

import logging
import re
import string

import requests


logger = logging.getLogger(__name__)

WIKI_RANDOM_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/random/summary"


def _clean_text(text: str) -> str:
    text = re.sub(r"\[\d+\]", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text


def _extract_words(text: str) -> list[str]:
    words = []
    for token in text.split():
        word = token.strip(string.punctuation)
        if word.isascii() and word.isalpha():
            words.append(word.lower())
    return words


def fetch_wikipedia_words(min_words: int = 100, tries: int = 5) -> list[str]:
    """Collect lowercase words from random Wikipedia article summaries.

    Stops once ``min_words`` words are collected or after ``tries`` requests.
    A failed request ends collection early and the words gathered so far are
    returned, which may be an empty list.
    """
    collected: list[str] = []
    for _ in range(tries):
        try:
            response = requests.get(
                WIKI_RANDOM_SUMMARY_URL,
                timeout=8,
                allow_redirects=True,
                headers={
                    "User-Agent": "typespeed/0.1 (terminal typing test; python requests)",
                    "Accept": "application/json",
                },
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Could not fetch Wikipedia article: %s", exc)
            break

        extract = _clean_text(data.get("extract") or "")
        words = _extract_words(extract)
        logger.debug("Article %r gave %d words", data.get("title"), len(words))
        collected.extend(words)

        if len(collected) >= min_words:
            break

    return collected
