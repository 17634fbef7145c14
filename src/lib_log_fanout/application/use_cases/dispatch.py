"""Use case fanning a single log call out to every registered transport.

Purpose
-------
Freeze the transport list and the clock into one callable that stamps a call
with a shared timestamp and hands it to each transport in order.

Contents
--------
* :class:`FanOut` - the dispatch callable.
* :func:`create_dispatch` - factory used by :class:`lib_log_fanout.log.Log`.

System Role
-----------
Application-layer orchestrator. It does not filter, serialize, or catch:
transports own their filter and swallow their own failures, so iteration is
plain and sequential.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from lib_log_fanout.application.ports import ClockPort, TransportPort
from lib_log_fanout.domain import DEFAULT_SCOPE, LogEvent, Severity

logger = logging.getLogger(__name__)


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        """Return the current UTC timestamp with timezone info."""
        return datetime.now(timezone.utc)


class FanOut:
    """Dispatch callable bound to an immutable transport tuple.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.calls = []
    ...     def log(self, severity, scope, values, timestamp):
    ...         self.calls.append((severity.name, scope, tuple(values)))
    >>> first, second = Recorder(), Recorder()
    >>> dispatch = create_dispatch([first, second])
    >>> _ = dispatch(Severity.INFO, "default", ("hello", 1))
    >>> first.calls == second.calls == [("INFO", "default", ("hello", 1))]
    True
    """

    def __init__(self, transports: Iterable[TransportPort], clock: ClockPort) -> None:
        self._transports: tuple[TransportPort, ...] = tuple(transports)
        self._clock = clock

    @property
    def transports(self) -> tuple[TransportPort, ...]:
        return self._transports

    def __call__(self, severity: Severity, scope: str, values: Sequence[Any]) -> datetime:
        """Stamp the call once and forward it to each transport in order.

        The call is captured as a :class:`LogEvent`, so a clock returning a
        naive timestamp raises ``ValueError`` here and aware timestamps reach
        transports normalised to UTC. Returns that shared timestamp.
        """

        event = LogEvent.create(severity, scope or DEFAULT_SCOPE, values, self._clock.now())
        for transport in self._transports:
            transport.log(event.severity, event.scope, event.values, event.timestamp)
        return event.timestamp


def create_dispatch(transports: Iterable[TransportPort], clock: ClockPort | None = None) -> FanOut:
    """Build the fan-out callable for ``transports``."""

    fan_out = FanOut(transports, clock or SystemClock())
    logger.debug("dispatch created with %d transport(s)", len(fan_out.transports))
    return fan_out


__all__ = ["FanOut", "SystemClock", "create_dispatch"]
