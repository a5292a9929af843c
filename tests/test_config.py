"""Tests for config: command-line parsing and settings validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from config import DEFAULT_DURATION, RunSettings, parse_args


class TestRunSettings:
    def test_defaults(self):
        settings = RunSettings()
        assert settings.duration == DEFAULT_DURATION
        assert settings.word_count is None
        assert settings.source == "english"
        assert settings.words_file is None
        assert settings.log_level == "WARNING"

    @pytest.mark.parametrize("duration", [0, -1])
    def test_duration_must_be_positive(self, duration):
        with pytest.raises(ValidationError):
            RunSettings(duration=duration)

    def test_log_level_normalized(self):
        assert RunSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            RunSettings(log_level="chatty")


class TestParseArgs:
    def test_defaults(self):
        settings = parse_args([])
        assert settings.duration == 30

    def test_all_flags(self, tmp_path):
        path = tmp_path / "words.txt"
        settings = parse_args(
            ["--time", "60", "--words", "25", "--source", "wikipedia",
             "--words-file", str(path), "--log-level", "info"]
        )
        assert settings.duration == 60
        assert settings.word_count == 25
        assert settings.source == "wikipedia"
        assert settings.words_file == Path(path)
        assert settings.log_level == "INFO"

    def test_zero_duration_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--time", "0"])
        assert exc_info.value.code == 1
        assert "Error: Test duration must be greater than 0 seconds" in capsys.readouterr().err

    def test_negative_word_count_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--words", "-2"])
        assert exc_info.value.code == 1
        assert "Word count must be greater than 0" in capsys.readouterr().err

    def test_unknown_source_rejected_by_argparse(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--source", "klingon"])
        assert exc_info.value.code == 2
