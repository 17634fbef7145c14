"""Domain entities and value objects used by the logging facade."""

from __future__ import annotations

from .events import DEFAULT_SCOPE, LogEvent, format_timestamp
from .filtering import DEFAULT_MINIMUM_SEVERITY, SeverityFilter
from .serialization import UNDEFINED, ValueShape, classify, join_values, serialize_value, serialize_values
from .severity import Severity, compare, weight

__all__ = [
    "DEFAULT_MINIMUM_SEVERITY",
    "DEFAULT_SCOPE",
    "LogEvent",
    "Severity",
    "SeverityFilter",
    "UNDEFINED",
    "ValueShape",
    "classify",
    "compare",
    "format_timestamp",
    "join_values",
    "serialize_value",
    "serialize_values",
    "weight",
]
