"""Timestamped state messages printed by the simulation."""

from __future__ import annotations

import sys
import time
from enum import Enum
from typing import TextIO


class Event(Enum):
    """A state change a philosopher reports."""

    TAKEN_FORK = "has taken a fork"
    EATING = "is eating"
    SLEEPING = "is sleeping"
    THINKING = "is thinking"
    DIED = "died"


def now_ms() -> int:
    """Current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def format_event(event: Event, timestamp: int, number: int) -> str:
    """Render one message line."""
    return f"{timestamp} {number} {event.value}\n"


def report(
    event: Event, start_time: int, number: int, stream: TextIO | None = None
) -> int:
    """Write the message for *event* and return its timestamp.

    Taking the forks is reported once for each of the two forks.
    """
    out = sys.stdout if stream is None else stream
    timestamp = now_ms() - start_time
    line = format_event(event, timestamp, number)
    repeat = 2 if event is Event.TAKEN_FORK else 1
    out.write(line * repeat)
    out.flush()
    return timestamp