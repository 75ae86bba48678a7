"""Philosophers and the worker threads that drive them."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, TextIO

from .output import Event, report
from .params import INT32_MAX, Params


class Status(IntEnum):
    """What a philosopher is doing."""

    EAT = 0
    SLEEP = 1
    THINK = 2
    DIE = 3


def _now_us() -> int:
    return time.time_ns() // 1000


@dataclass
class SharedState:
    """State shared by the commander, the observer and every philosopher.

    ``lock`` is the master lock used for the hand-over between the
    commander and a philosopher that has been allowed to eat.
    """

    params: Params
    start_time: int
    stream: Optional[TextIO] = None
    lock: threading.Lock = field(default_factory=threading.Lock)
    members: List["Philosopher"] = field(default_factory=list)
    _stop: threading.Event = field(default_factory=threading.Event, repr=False)

    @property
    def exiting(self) -> bool:
        """True once the simulation has been told to stop."""
        return self._stop.is_set()

    def request_exit(self) -> None:
        """Tell every participant to stop."""
        self._stop.set()

    def signal(self) -> None:
        """Release the master lock if it is held."""
        try:
            self.lock.release()
        except RuntimeError:
            pass


class Philosopher:
    """One philosopher: its forks, its meal history and its thread."""

    def __init__(self, number: int, shared: SharedState) -> None:
        self.number = number
        self.shared = shared
        self.status = Status.THINK
        self.has_fork = True
        self.partner: Optional[Philosopher] = None
        self.eat_count = 0
        self.eat_time = _now_us()
        self._permit = threading.Lock()
        self._permit.acquire()
        self._thread: Optional[threading.Thread] = None

    def __repr__(self) -> str:
        return (
            f"Philosopher(number={self.number}, status={self.status.name}, "
            f"has_fork={self.has_fork}, eat_count={self.eat_count})"
        )

    def _report(self, event: Event) -> None:
        report(event, self.shared.start_time, self.number, self.shared.stream)

    def _should_stop(self) -> bool:
        return self.shared.exiting or self.status is Status.DIE

    def start(self) -> None:
        """Start the philosopher's thread."""
        if self._thread is not None:
            raise RuntimeError(f"philosopher {self.number} already started")
        self._thread = threading.Thread(
            target=self.run, name=f"philosopher-{self.number}", daemon=True
        )
        self._thread.start()

    def run(self) -> None:
        """Think, eat and sleep until the simulation stops or this one dies."""
        while not self._should_stop():
            if self.think():
                break
            if self.eat():
                break
            self.sleep()
        self.status = Status.DIE
        self.shared.signal()

    def think(self) -> bool:
        """Wait until allowed to eat. Return True if the loop must stop."""
        self.status = Status.THINK
        self._report(Event.THINKING)
        self._permit.acquire()
        return self._should_stop()

    def eat(self) -> bool:
        """Eat with the partner's fork. Return True if the loop must stop."""
        partner = self.partner
        if partner is None:
            raise RuntimeError(f"philosopher {self.number} has no fork to borrow")
        self.status = Status.EAT
        self.has_fork = False
        partner.has_fork = False
        self.shared.signal()
        self.eat_time = _now_us()
        if self.shared.exiting:
            return True
        self._report(Event.TAKEN_FORK)
        self._report(Event.EATING)
        self.eat_count += 1
        limit = self.shared.params.must_eat_count
        if limit != -1 and min_eat_count(self.shared.members) >= limit:
            self.shared.request_exit()
            return True
        time.sleep(self.shared.params.eat / 1_000_000)
        if self._should_stop():
            return True
        self.has_fork = True
        partner.has_fork = True
        return False

    def sleep(self) -> None:
        """Sleep for the configured time."""
        self.status = Status.SLEEP
        self._report(Event.SLEEPING)
        time.sleep(self.shared.params.sleep / 1_000_000)

    def release(self) -> None:
        """Let the philosopher go on from thinking to eating."""
        try:
            self._permit.release()
        except RuntimeError:
            pass

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the thread; return True if it has finished."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()


def min_eat_count(members: Iterable[Philosopher]) -> int:
    """The lowest number of meals eaten by any philosopher."""
    return min((member.eat_count for member in members), default=INT32_MAX)


def create_members(shared: SharedState) -> List[Philosopher]:
    """Create and start ``shared.params.count`` philosophers.

    The list is stored in ``shared.members``; index equals number.
    """
    members = [Philosopher(number, shared) for number in range(shared.params.count)]
    shared.members = members
    for member in reversed(members):
        member.start()
    return members