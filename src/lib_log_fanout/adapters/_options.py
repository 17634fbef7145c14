"""Option dataclasses shared by all transports.

Every transport is configured through a frozen dataclass whose fields all
carry defaults. :meth:`TransportOptions.merged` applies overrides field by
field, last write wins; nested values are replaced, never merged.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields, replace
from typing import Any, TypeVar

from lib_log_fanout.domain import Severity, SeverityFilter

_OptionsT = TypeVar("_OptionsT", bound="TransportOptions")


@dataclass(slots=True, frozen=True)
class TransportOptions:
    """Filter options every transport recognises.

    Attributes
    ----------
    minimum_severity:
        Lowest accepted severity (member or name); ``None`` means ``INFO``.
    severities:
        Explicit accepted severities; overrides ``minimum_severity`` when
        non-empty.
    """

    minimum_severity: Severity | str | None = None
    severities: Iterable[Severity | str] | None = None

    def merged(self: _OptionsT, **overrides: Any) -> _OptionsT:
        """Return a copy with ``overrides`` applied.

        Examples
        --------
        >>> TransportOptions().merged(minimum_severity="warn").minimum_severity
        'warn'
        """

        if not overrides:
            return self
        known = {item.name for item in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise TypeError(f"Unknown option(s) for {type(self).__name__}: {', '.join(unknown)}")
        return replace(self, **overrides)

    def build_filter(self) -> SeverityFilter:
        """Translate the filter options into a :class:`SeverityFilter`."""

        severities = tuple(self.severities) if self.severities is not None else None
        return SeverityFilter.from_options(minimum_severity=self.minimum_severity, severities=severities)


def resolve_options(base: _OptionsT | None, default: type[_OptionsT], overrides: dict[str, Any]) -> _OptionsT:
    """Start from ``base`` (or the defaults) and apply keyword ``overrides``."""

    options = base if base is not None else default()
    return options.merged(**overrides)


__all__ = ["TransportOptions", "resolve_options"]
