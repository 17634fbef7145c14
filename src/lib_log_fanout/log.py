"""Logging façade fanning every call out to the registered transports.

Purpose
-------
Expose the single entry point host applications use: one method per
severity, each forwarding ``(severity, scope, values, timestamp)`` to every
transport in registration order.

Contents
--------
* :class:`Log` - the dispatcher.

System Role
-----------
Outer shell over :func:`lib_log_fanout.application.use_cases.dispatch.create_dispatch`.
The dispatcher itself never fails: transports filter and swallow their own
errors. Background I/O started by transports is not awaited here.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from lib_log_fanout.adapters.console import ConsoleTransport
from lib_log_fanout.application.ports import ClockPort, TransportPort
from lib_log_fanout.application.use_cases.dispatch import FanOut, create_dispatch
from lib_log_fanout.domain import DEFAULT_SCOPE, Severity


class Log:
    """Dispatch severity-tagged values to a fixed list of transports.

    Parameters
    ----------
    transports:
        Transports in fan-out order. ``None`` or an empty iterable installs a
        single :class:`ConsoleTransport` with default options. The sequence is
        copied; later changes to the caller's list have no effect.
    clock:
        Optional :class:`ClockPort`; defaults to UTC wall-clock time.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.lines = []
    ...     def log(self, severity, scope, values, timestamp):
    ...         self.lines.append(f"{severity.value} {scope}: {' '.join(map(str, values))}")
    >>> recorder = Recorder()
    >>> log = Log([recorder])
    >>> log.warn("disk", 91)
    >>> recorder.lines
    ['WARN default: disk 91']
    """

    def __init__(self, transports: Iterable[TransportPort] | None = None, *, clock: ClockPort | None = None) -> None:
        selected = list(transports) if transports is not None else []
        if not selected:
            selected = [ConsoleTransport()]
        self._dispatch: FanOut = create_dispatch(selected, clock)

    @property
    def transports(self) -> tuple[TransportPort, ...]:
        """Return the registered transports in fan-out order."""

        return self._dispatch.transports

    def debug(self, *values: Any) -> None:
        """Emit a ``DEBUG`` call."""
        self.forward(Severity.DEBUG, DEFAULT_SCOPE, values)

    def info(self, *values: Any) -> None:
        """Emit an ``INFO`` call."""
        self.forward(Severity.INFO, DEFAULT_SCOPE, values)

    def log(self, *values: Any) -> None:
        """Emit a ``LOG`` call."""
        self.forward(Severity.LOG, DEFAULT_SCOPE, values)

    def warn(self, *values: Any) -> None:
        """Emit a ``WARN`` call."""
        self.forward(Severity.WARN, DEFAULT_SCOPE, values)

    def error(self, *values: Any) -> None:
        """Emit an ``ERROR`` call."""
        self.forward(Severity.ERROR, DEFAULT_SCOPE, values)

    def forward(self, severity: Severity, scope: str, values: Sequence[Any]) -> datetime:
        """Stamp the call once and hand it to every transport in order.

        Returns
        -------
        datetime
            The timestamp every transport received for this call.
        """

        return self._dispatch(severity, scope, values)

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Wait for background I/O of transports that expose ``wait_until_idle``.

        Returns ``False`` when any transport is still busy after ``timeout``
        seconds (applied per transport).
        """

        idle = True
        for transport in self.transports:
            waiter = getattr(transport, "wait_until_idle", None)
            if callable(waiter) and not waiter(timeout):
                idle = False
        return idle


__all__ = ["Log"]
