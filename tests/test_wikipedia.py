"""Tests for wikipedia: remote corpus collection with requests mocked out."""

from __future__ import annotations

import logging

import pytest
import requests

import wikipedia
from wikipedia import fetch_wikipedia_words


class FakeResponse:
    def __init__(self, payload, status_error=None):
        self._payload = payload
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error is not None:
            raise self._status_error

    def json(self):
        return self._payload


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get with a queue of canned responses."""
    responses = []
    calls = []

    def _get(url, **kwargs):
        calls.append(url)
        item = responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    monkeypatch.setattr(wikipedia.requests, "get", _get)
    return responses, calls


class TestFetchWikipediaWords:
    def test_cleans_and_lowercases(self, fake_get):
        responses, _ = fake_get
        responses.append(
            FakeResponse({"title": "Cats", "extract": "The Cat[1] is a small,  furry animal."})
        )
        words = fetch_wikipedia_words(min_words=3, tries=1)
        assert words == ["the", "cat", "is", "a", "small", "furry", "animal"]

    def test_accumulates_until_enough(self, fake_get):
        responses, calls = fake_get
        responses.extend(
            [
                FakeResponse({"extract": "one two"}),
                FakeResponse({"extract": "three four"}),
                FakeResponse({"extract": "five six"}),
            ]
        )
        words = fetch_wikipedia_words(min_words=4, tries=5)
        assert words == ["one", "two", "three", "four"]
        assert len(calls) == 2

    def test_stops_after_tries(self, fake_get):
        responses, calls = fake_get
        responses.extend([FakeResponse({"extract": "word"}) for _ in range(3)])
        assert fetch_wikipedia_words(min_words=100, tries=3) == ["word"] * 3
        assert len(calls) == 3

    def test_skips_non_ascii_and_contractions(self, fake_get):
        responses, _ = fake_get
        responses.append(FakeResponse({"extract": "Z\u00fcrich isn't na\u00efve"}))
        assert fetch_wikipedia_words(min_words=1, tries=1) == []

    def test_strips_surrounding_punctuation(self, fake_get):
        responses, _ = fake_get
        responses.append(
            FakeResponse({"extract": "(Bern) is \"old\"; Z\u00fcrich, too."})
        )
        assert fetch_wikipedia_words(min_words=1, tries=1) == ["bern", "is", "old", "too"]

    def test_missing_extract(self, fake_get):
        responses, _ = fake_get
        responses.append(FakeResponse({"title": "Empty"}))
        assert fetch_wikipedia_words(min_words=1, tries=1) == []

    def test_network_error_returns_collected(self, fake_get, caplog):
        responses, _ = fake_get
        responses.extend(
            [
                FakeResponse({"extract": "alpha beta"}),
                requests.ConnectionError("offline"),
            ]
        )
        with caplog.at_level(logging.WARNING, logger="wikipedia"):
            words = fetch_wikipedia_words(min_words=10, tries=5)
        assert words == ["alpha", "beta"]
        assert "Could not fetch Wikipedia article" in caplog.text

    def test_http_error(self, fake_get):
        responses, _ = fake_get
        responses.append(FakeResponse({}, status_error=requests.HTTPError("503")))
        assert fetch_wikipedia_words(min_words=1, tries=2) == []
