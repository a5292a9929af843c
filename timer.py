from __future__ import annotations

import datetime as dt
import logging
from dataclasses import replace
from typing import Optional

from session import Phase, SessionState, finish


logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0


def tick(state: SessionState, now: Optional[dt.datetime] = None) -> SessionState:
    """Count one second off a running session, finishing it at zero.

    Ticks that arrive while the session is not running (not yet started,
    already finished, or cancelled) are ignored.
    """
    if state.phase is not Phase.RUNNING or state.cancelled:
        return state

    remaining = state.time_remaining - 1
    state = replace(state, time_remaining=max(remaining, 0))
    if remaining <= 0:
        logger.info("Session finished on the timer")
        return finish(state, now)
    return state


def needs_ticks(state: SessionState) -> bool:
    """Whether the driver should keep its periodic tick scheduled."""
    return state.phase is Phase.RUNNING and not state.cancelled
