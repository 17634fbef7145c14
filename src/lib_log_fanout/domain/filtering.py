"""Per-transport severity filter.

Purpose
-------
Capture the filtering policy every transport applies before touching its sink:
an explicit severity set, when configured, fully overrides the minimum
severity threshold.

Contents
--------
* :data:`DEFAULT_MINIMUM_SEVERITY` - threshold used when none is configured.
* :class:`SeverityFilter` value object with :meth:`SeverityFilter.should_log`.

System Role
-----------
Transports hold one :class:`SeverityFilter` each (composition) and call it as
the first step of ``log``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .severity import Severity

DEFAULT_MINIMUM_SEVERITY = Severity.INFO


@dataclass(slots=True, frozen=True)
class SeverityFilter:
    """Decide whether a transport handles an event of a given severity.

    Attributes
    ----------
    minimum_severity:
        Lowest severity accepted when no explicit set is configured. ``None``
        means :data:`DEFAULT_MINIMUM_SEVERITY`.
    severities:
        Explicit set of accepted severities. When non-empty it replaces the
        threshold comparison entirely.

    Examples
    --------
    >>> SeverityFilter(minimum_severity=Severity.WARN).should_log(Severity.INFO)
    False
    >>> SeverityFilter(severities=frozenset({Severity.DEBUG})).should_log(Severity.DEBUG)
    True
    """

    minimum_severity: Severity | None = None
    severities: frozenset[Severity] | None = None

    def __post_init__(self) -> None:
        if self.severities is not None:
            object.__setattr__(self, "severities", frozenset(self.severities))

    @classmethod
    def from_options(
        cls,
        *,
        minimum_severity: Severity | str | None = None,
        severities: Iterable[Severity | str] | None = None,
    ) -> "SeverityFilter":
        """Build a filter from enum members or severity names."""

        minimum = Severity.coerce(minimum_severity) if minimum_severity is not None else None
        explicit = frozenset(Severity.coerce(item) for item in severities) if severities is not None else None
        return cls(minimum_severity=minimum, severities=explicit)

    @property
    def effective_minimum(self) -> Severity:
        """Return the threshold applied when no explicit set is active."""

        return self.minimum_severity if self.minimum_severity is not None else DEFAULT_MINIMUM_SEVERITY

    def should_log(self, severity: Severity) -> bool:
        """Return ``True`` when an event of ``severity`` passes the filter."""

        if self.severities:
            return severity in self.severities
        return severity.weight >= self.effective_minimum.weight


__all__ = ["DEFAULT_MINIMUM_SEVERITY", "SeverityFilter"]
