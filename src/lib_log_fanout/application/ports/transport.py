"""Transport port describing the contract every sink implements.

Purpose
-------
Define the single capability the dispatcher relies on so console, file,
remote, and user-defined sinks plug in interchangeably.

Contents
--------
* :class:`TransportPort` - runtime-checkable protocol with a single ``log``
  method.

System Role
-----------
The dispatcher iterates a sequence of :class:`TransportPort` objects. An
implementation must apply its own filter first and must never raise out of
``log``; sink failures go to an :class:`~lib_log_fanout.application.ports.error_channel.ErrorChannelPort`.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from lib_log_fanout.domain.severity import Severity


@runtime_checkable
class TransportPort(Protocol):
    """Receive one dispatched log call and conditionally persist it."""

    def log(self, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> None:
        """Handle a log call; never raises."""


__all__ = ["TransportPort"]
