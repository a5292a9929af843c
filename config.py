"""Command-line settings and logging setup for the typing test."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Literal, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator
from textual.logging import TextualHandler


DEFAULT_DURATION = 30
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class RunSettings(BaseModel):
    """Settings for one run of the typing test."""

    duration: int = Field(
        default=DEFAULT_DURATION,
        gt=0,
        description="Duration of the typing test in seconds",
    )
    word_count: Optional[int] = Field(
        default=None,
        gt=0,
        description="Fixed number of words; unlimited when omitted",
    )
    source: Literal["english", "wikipedia"] = Field(
        default="english", description="Where target words come from"
    )
    words_file: Optional[Path] = Field(
        default=None, description="Whitespace-separated word list to use instead"
    )
    log_level: str = Field(default="WARNING", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = error["loc"][0] if error["loc"] else ""
    if field == "duration":
        return "Test duration must be greater than 0 seconds"
    if field == "word_count":
        return "Word count must be greater than 0"
    return f"{field}: {error['msg']}" if field else error["msg"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typespeed", description="Measure your typing speed in the terminal."
    )
    parser.add_argument(
        "--time",
        dest="duration",
        type=int,
        default=DEFAULT_DURATION,
        help="Duration of the typing test in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--words",
        dest="word_count",
        type=int,
        default=None,
        help="End the test after this many words instead of running endlessly",
    )
    parser.add_argument(
        "--source",
        choices=["english", "wikipedia"],
        default="english",
        help="Word source (default: %(default)s)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        default=None,
        help="Use words from this file instead of --source",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level for the Textual console (default: %(default)s)",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> RunSettings:
    """Parse and validate command-line arguments, exiting on bad input."""
    args = build_parser().parse_args(argv)
    try:
        return RunSettings(**vars(args))
    except ValidationError as exc:
        print(f"Error: {_first_error(exc)}", file=sys.stderr)
        raise SystemExit(1) from exc


def configure_logging(level: str = "WARNING") -> None:
    """Send application logs to the Textual devtools console."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[TextualHandler()],
    )
