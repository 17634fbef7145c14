"""Severity abstraction shared by the dispatcher and every transport.

Purpose
-------
Offer a closed, totally ordered set of severities so transports can compare an
event against their configured threshold without knowing about each other.

Contents
--------
* :class:`Severity` enum with weight, comparison, and parsing helpers.
* ``_WEIGHT_TABLE`` constant mapping severities to their ordering weight.
* :func:`weight` / :func:`compare` module-level conveniences.

System Role
-----------
Leaf of the domain layer. Filtering (:mod:`lib_log_fanout.domain.filtering`)
and all adapters depend on it; it depends on nothing.
"""

from __future__ import annotations

from enum import Enum


class Severity(Enum):
    """Enumerated severities, listed from least to most important."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    LOG = "LOG"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def weight(self) -> int:
        """Return the ordering weight used for threshold comparisons."""

        return _WEIGHT_TABLE[self]

    def compare(self, other: "Severity") -> int:
        """Return ``-1``, ``0`` or ``1`` comparing ``self`` against ``other``.

        Examples
        --------
        >>> Severity.DEBUG.compare(Severity.ERROR)
        -1
        >>> Severity.WARN.compare(Severity.WARN)
        0
        """

        mine, theirs = self.weight, other.weight
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight < other.weight

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight <= other.weight

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight > other.weight

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight >= other.weight

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        """Parse ``name`` case-insensitively; ``WARNING`` is accepted as ``WARN``."""
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown severity: {name!r}") from exc

    @classmethod
    def coerce(cls, value: "Severity | str") -> "Severity":
        """Return ``value`` as a :class:`Severity`, parsing names when needed."""

        if isinstance(value, Severity):
            return value
        return cls.from_name(value)


_WEIGHT_TABLE = {
    Severity.DEBUG: 100,
    Severity.INFO: 200,
    Severity.LOG: 300,
    Severity.WARN: 400,
    Severity.ERROR: 500,
}
# Strictly increasing in declaration order.

_ALIASES = {"WARNING": "WARN"}


def weight(severity: Severity) -> int:
    """Return the ordering weight of ``severity``."""

    return severity.weight


def compare(a: Severity, b: Severity) -> int:
    """Return ``-1``, ``0`` or ``1`` comparing ``a`` against ``b``."""

    return a.compare(b)


__all__ = ["Severity", "compare", "weight"]
