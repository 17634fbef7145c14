"""Domain event describing a single dispatcher call.

Purpose
-------
Provide an immutable representation of one log call as every transport sees
it: severity, scope, the caller's values, and the shared timestamp.

Contents
--------
* :class:`LogEvent` dataclass with timestamp helpers.
* Utility function ``_ensure_aware`` for timestamp validation.
* :func:`format_timestamp` rendering the ISO-8601 form used by all sinks.

System Role
-----------
Sits in the domain layer so transports format the same instant identically;
the dispatcher creates one event per call and drops it after fan-out.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from .severity import Severity

DEFAULT_SCOPE = "default"


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """Render ``ts`` as UTC ISO-8601 with millisecond precision.

    Naive datetimes are interpreted as UTC.

    Examples
    --------
    >>> format_timestamp(datetime(2025, 9, 23, 12, 0, 5, 123456, tzinfo=timezone.utc))
    '2025-09-23T12:00:05.123Z'
    """

    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    utc = ts.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event handed to every transport.

    Attributes
    ----------
    severity:
        :class:`Severity` chosen by the dispatcher method.
    scope:
        Caller-supplied grouping label; ``"default"`` for the plain methods.
    values:
        Tuple copy of the values passed by the caller, in order.
    timestamp:
        Time of the call in timezone-aware UTC.
    """

    severity: Severity
    values: tuple[Any, ...]
    timestamp: datetime
    scope: str = DEFAULT_SCOPE

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "values", tuple(self.values))

    @classmethod
    def create(cls, severity: Severity, scope: str, values: Iterable[Any], timestamp: datetime) -> "LogEvent":
        """Build an event from the positional transport arguments."""

        return cls(severity=severity, values=tuple(values), timestamp=timestamp, scope=scope)

    def iso_timestamp(self) -> str:
        """Return the ISO-8601 form shared by console and file output."""

        return format_timestamp(self.timestamp)


__all__ = ["DEFAULT_SCOPE", "LogEvent", "format_timestamp"]
