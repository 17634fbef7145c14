from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest

from lib_log_fanout.adapters.error_channel import RecordingErrorChannel
from lib_log_fanout.adapters.remote.newrelic import NewRelicTransport
from lib_log_fanout.application.ports import ClockPort, TransportPort
from lib_log_fanout.application.use_cases.dispatch import FanOut, SystemClock, create_dispatch
from lib_log_fanout.domain import Severity


class Recorder:
    def __init__(self, name: str, journal: list[tuple[str, Severity, str, tuple[Any, ...], datetime]]) -> None:
        self.name = name
        self.journal = journal

    def log(self, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> None:
        self.journal.append((self.name, severity, scope, tuple(values), timestamp))


def test_transports_receive_calls_in_registration_order(fixed_clock) -> None:
    journal: list = []
    dispatch = create_dispatch([Recorder("first", journal), Recorder("second", journal)], fixed_clock)

    dispatch(Severity.WARN, "db", ["slow", 12])

    assert [entry[0] for entry in journal] == ["first", "second"]
    assert all(entry[1:4] == (Severity.WARN, "db", ("slow", 12)) for entry in journal)


def test_every_transport_sees_the_same_timestamp(fixed_clock, fixed_timestamp) -> None:
    journal: list = []
    dispatch = create_dispatch([Recorder("a", journal), Recorder("b", journal), Recorder("c", journal)], fixed_clock)

    returned = dispatch(Severity.INFO, "default", ["tick"])

    assert returned == fixed_timestamp
    assert {entry[4] for entry in journal} == {fixed_timestamp}
    assert fixed_clock.calls == 1


def test_empty_scope_falls_back_to_default(fixed_clock) -> None:
    journal: list = []
    dispatch = create_dispatch([Recorder("only", journal)], fixed_clock)

    dispatch(Severity.LOG, "", ["x"])

    assert journal[0][2] == "default"


def test_transport_list_is_frozen_at_construction(fixed_clock) -> None:
    journal: list = []
    transports = [Recorder("first", journal)]
    dispatch = create_dispatch(transports, fixed_clock)
    transports.append(Recorder("late", journal))

    dispatch(Severity.INFO, "default", [])

    assert [entry[0] for entry in journal] == ["first"]
    assert isinstance(dispatch, FanOut)
    assert len(dispatch.transports) == 1


def test_failed_remote_send_does_not_stop_later_transports(fixed_clock) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    errors = RecordingErrorChannel()
    remote = NewRelicTransport(api_key="key", background=False, errors=errors, http_transport=httpx.MockTransport(refuse))
    journal: list = []
    dispatch = create_dispatch([remote, Recorder("after", journal)], fixed_clock)

    dispatch(Severity.ERROR, "default", ["boom"])

    assert [entry[0] for entry in journal] == ["after"]
    assert errors.messages == ["Network error sending log event to New Relic: connection refused"]


def test_system_clock_returns_aware_utc() -> None:
    now = SystemClock().now()
    assert now.utcoffset() is not None
    assert now.utcoffset().total_seconds() == 0


def test_recorder_and_clock_satisfy_ports(fixed_clock) -> None:
    assert isinstance(Recorder("x", []), TransportPort)
    assert isinstance(fixed_clock, ClockPort)
    assert isinstance(SystemClock(), ClockPort)


def test_clock_time_is_normalised_to_utc() -> None:
    class ShiftedClock:
        def now(self) -> datetime:
            return datetime(2025, 9, 23, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    journal: list = []
    dispatch = create_dispatch([Recorder("only", journal)], ShiftedClock())

    stamped = dispatch(Severity.INFO, "default", ["x"])

    assert stamped.tzinfo is timezone.utc
    assert stamped == datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)
    assert journal[0][4] is stamped


def test_naive_clock_is_rejected() -> None:
    class NaiveClock:
        def now(self) -> datetime:
            return datetime(2025, 9, 23, 12, 0)

    dispatch = create_dispatch([Recorder("only", [])], NaiveClock())

    with pytest.raises(ValueError, match="timezone-aware"):
        dispatch(Severity.INFO, "default", ["x"])
