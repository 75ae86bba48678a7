"""Command-line parameters of the dining philosophers simulation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ExitCode(IntEnum):
    """Status codes the program exits with."""

    SUCCESS = 0
    PARAM_COUNT = 1
    PARAM_PHILO_COUNT = 2
    PARAM_PHILO_DIE = 3
    PARAM_PHILO_EAT = 4
    PARAM_PHILO_SLEEP = 5
    PARAM_PHILO_MUST_EAT_COUNT = 6
    MEMBER_MUTEX_INIT = 7
    MEMBER_MUTEX_LOCK = 8
    MEMBER_THREAD_CREATE = 9
    INIT_INFO = 10
    USED_FORK = 11
    GET_TIME = 12
    NONE_SIDE = 13
    START_DIE_OBSERVER = 14
    PASS = 15


class ParamError(ValueError):
    """Raised when the command-line parameters are invalid."""

    def __init__(self, code: ExitCode, message: str) -> None:
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class Params:
    """Simulation parameters.

    ``die`` is in milliseconds; ``eat`` and ``sleep`` are in microseconds.
    ``must_eat_count`` is -1 when no limit was given.
    """

    count: int
    die: int
    eat: int
    sleep: int
    must_eat_count: int = -1


def parse_int(text: str) -> int:
    """Parse a signed decimal integer that must fit in 32 bits."""
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f"out of range: {text!r}")
    return value


def _parse_field(text: str, minimum: int, code: ExitCode, name: str) -> int:
    try:
        value = parse_int(text)
    except ValueError as exc:
        raise ParamError(code, f"invalid {name}: {text!r}") from exc
    if value < minimum:
        raise ParamError(code, f"invalid {name}: {text!r}")
    return value


def _to_microseconds(value: int, code: ExitCode, name: str) -> int:
    scaled = value * 1000
    if scaled > INT32_MAX:
        raise ParamError(code, f"{name} is too large")
    return scaled


def parse_params(args: Sequence[str]) -> Params:
    """Build Params from the arguments that follow the program name.

    Expects: number_of_philosophers time_to_die time_to_eat time_to_sleep
    [number_of_times_each_philosopher_must_eat].
    """
    if len(args) not in (4, 5):
        raise ParamError(ExitCode.PARAM_COUNT, "expected 4 or 5 arguments")
    count = _parse_field(args[0], 1, ExitCode.PARAM_PHILO_COUNT, "philosopher count")
    die = _parse_field(args[1], 0, ExitCode.PARAM_PHILO_DIE, "time to die")
    eat = _parse_field(args[2], 0, ExitCode.PARAM_PHILO_EAT, "time to eat")
    sleep = _parse_field(args[3], 0, ExitCode.PARAM_PHILO_SLEEP, "time to sleep")
    must_eat_count = -1
    if len(args) == 5:
        must_eat_count = _parse_field(
            args[4], 0, ExitCode.PARAM_PHILO_MUST_EAT_COUNT, "must eat count"
        )
    return Params(
        count=count,
        die=die,
        eat=_to_microseconds(eat, ExitCode.PARAM_PHILO_EAT, "time to eat"),
        sleep=_to_microseconds(sleep, ExitCode.PARAM_PHILO_SLEEP, "time to sleep"),
        must_eat_count=must_eat_count,
    )