import io
from unittest import mock

import pytest

from philosim.output import Event, format_event, now_ms, report


def test_format_eating():
    assert format_event(Event.EATING, 200, 3) == "200 3 is eating\n"


def test_format_died():
    assert format_event(Event.DIED, 0, 1) == "0 1 died\n"


@pytest.mark.parametrize(
    "event, text",
    [
        (Event.TAKEN_FORK, "has taken a fork"),
        (Event.SLEEPING, "is sleeping"),
        (Event.THINKING, "is thinking"),
    ],
)
def test_format_messages(event, text):
    assert format_event(event, 15, 4) == f"15 4 {text}\n"


def test_now_ms_truncates_nanoseconds():
    with mock.patch("time.time_ns", return_value=5_999_999):
        assert now_ms() == 5


def test_now_ms_is_monotone_enough():
    first = now_ms()
    second = now_ms()
    assert second >= first


def test_report_single_line():
    stream = io.StringIO()
    start = now_ms()
    timestamp = report(Event.SLEEPING, start, 2, stream)
    assert timestamp >= 0
    assert stream.getvalue() == format_event(Event.SLEEPING, timestamp, 2)


def test_report_taken_fork_writes_two_lines():
    stream = io.StringIO()
    timestamp = report(Event.TAKEN_FORK, now_ms(), 7, stream)
    lines = stream.getvalue().splitlines(keepends=True)
    assert lines == [format_event(Event.TAKEN_FORK, timestamp, 7)] * 2


def test_report_uses_start_time_offset():
    stream = io.StringIO()
    with mock.patch("time.time_ns", return_value=3_000_000_000):
        timestamp = report(Event.THINKING, 2500, 1, stream)
    assert timestamp == 500
    assert stream.getvalue() == "500 1 is thinking\n"


def test_report_defaults_to_stdout(capsys):
    timestamp = report(Event.DIED, now_ms(), 9)
    assert capsys.readouterr().out == format_event(Event.DIED, timestamp, 9)