"""The simulation driver: commander, death observer and command entry."""

from __future__ import annotations

import sys
import threading
import time
from typing import Optional, Sequence, TextIO, Tuple, TypeVar

from .member import Philosopher, SharedState, Status, create_members
from .output import Event, now_ms, report
from .params import ExitCode, Params, ParamError, parse_params
from .sequential import Sequential

T = TypeVar("T")

_OBSERVER_PERIOD = 0.0005
_HANDOVER_POLL = 0.01
_DEATH_REPORT_DELAY = 0.002


def neighbours(members: Sequence[T], number: int) -> Optional[Tuple[T, T]]:
    """Return the (left, right) neighbours of *number*, or None when alone."""
    size = len(members)
    if size <= 1:
        return None
    return members[(number - 1) % size], members[(number + 1) % size]


def select_fork(member, left, right):
    """Pick the neighbour whose fork *member* may borrow.

    The right neighbour is preferred when both forks are free. Returns None
    when neither fork is free, or when the chosen neighbour last ate earlier
    (to the millisecond) than *member* and so has priority.
    """
    if right.has_fork:
        partner = right
    elif left.has_fork:
        partner = left
    else:
        return None
    if partner.eat_time // 1000 < member.eat_time // 1000:
        return None
    return partner


class Simulation:
    """A running table of philosophers, usable as a context manager."""

    def __init__(self, params: Params, stream: Optional[TextIO] = None) -> None:
        self.params = params
        self.shared = SharedState(params=params, start_time=now_ms(), stream=stream)
        self.members = create_members(self.shared)
        self._sequential: Sequential[Philosopher] = Sequential(self.members)
        self._observer: Optional[threading.Thread] = None
        self._observer_stop = threading.Event()
        self._closed = False

    def __enter__(self) -> "Simulation":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def run(self) -> ExitCode:
        """Start the death observer and direct the philosophers until done."""
        if self._closed:
            raise RuntimeError("simulation is closed")
        if self._observer is not None:
            raise RuntimeError("simulation already ran")
        self._observer = threading.Thread(
            target=self._observe, name="death-observer", daemon=True
        )
        self._observer.start()
        self._command()
        return ExitCode.SUCCESS

    def close(self) -> None:
        """Stop the observer and every philosopher and wait for their threads."""
        if self._closed:
            return
        self._closed = True
        self._observer_stop.set()
        self.shared.request_exit()
        if self._observer is not None:
            self._observer.join()
        timeout = (self.params.eat + self.params.sleep) / 1_000_000 + 1.0
        for member in reversed(self.members):
            member.release()
            member.join(timeout)
        self.shared.signal()

    def _command(self) -> None:
        sequential = self._sequential
        while not self.shared.exiting:
            member = sequential.current()
            if member is None:
                break
            if member.status is Status.DIE:
                self._bury(member)
                advanced = True
            elif member.status is Status.THINK:
                advanced = self._offer_fork(member)
            else:
                advanced = False
            if not advanced and sequential.next() is None:
                sequential.move_current_to_begin()
                time.sleep(0)

    def _bury(self, member: Philosopher) -> None:
        member.release()
        sequential = self._sequential
        was_end = sequential.is_end()
        sequential.erase()
        if was_end:
            sequential.move_current_to_begin()

    def _offer_fork(self, member: Philosopher) -> bool:
        if not member.has_fork:
            return False
        sides = neighbours(self.shared.members, member.number)
        if sides is None:
            return False
        partner = select_fork(member, *sides)
        if partner is None:
            return False
        member.partner = partner
        lock = self.shared.lock
        lock.acquire()
        member.release()
        while not lock.acquire(timeout=_HANDOVER_POLL):
            if self.shared.exiting:
                break
        self._sequential.move_end()
        self.shared.signal()
        return True

    def _observe(self) -> None:
        while not self._observer_stop.is_set() and not self.shared.exiting:
            self._check_deaths(now_ms())
            self._observer_stop.wait(_OBSERVER_PERIOD)

    def _check_deaths(self, now: int) -> None:
        for member in self.shared.members:
            if member.status is Status.DIE:
                continue
            if member.eat_time // 1000 + self.params.die < now:
                self.shared.request_exit()
                member.status = Status.DIE
                time.sleep(_DEATH_REPORT_DELAY)
                report(
                    Event.DIED,
                    self.shared.start_time,
                    member.number,
                    self.shared.stream,
                )
                break


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulation from command-line arguments; return the exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        params = parse_params(args)
    except ParamError as exc:
        print(f"philosim: {exc}", file=sys.stderr)
        return int(ExitCode.INIT_INFO)
    with Simulation(params) as simulation:
        return int(simulation.run())


if __name__ == "__main__":
    sys.exit(main())