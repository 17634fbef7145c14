"""Value serializer turning arbitrary loggable values into stable text.

Purpose
-------
Every transport joins the caller's values into one message. This module owns
the per-value conversion so console, file, and remote sinks render the same
value identically.

Contents
--------
* :class:`ValueShape` - closed set of shape tags driving dispatch.
* :data:`UNDEFINED` - sentinel for an explicitly absent value.
* :func:`classify`, :func:`serialize_value`, :func:`serialize_values`,
  :func:`join_values`.

System Role
-----------
Pure domain helper; side-effect free. Every acyclic value yields a string:
composites json cannot encode fall back to ``str()``. Cyclic containers are
not supported and recurse until Python's recursion limit is hit.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping, Set
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Callable, Iterable
from uuid import UUID


class _Undefined:
    """Marker for a value the caller declared absent."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()


class ValueShape(Enum):
    """Shape tags evaluated in declaration order; first match wins."""

    MAPPING = "mapping"
    UNIQUE_COLLECTION = "unique_collection"
    COMPOSITE = "composite"
    ABSENT = "absent"
    SCALAR = "scalar"


_SCALAR_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    int,
    float,
    complex,
    Decimal,
    Enum,
    datetime,
    date,
    time,
    UUID,
    PurePath,
)


def classify(value: Any) -> ValueShape:
    """Return the :class:`ValueShape` tag for ``value``.

    Examples
    --------
    >>> classify({"a": 1}).name, classify({1, 2}).name, classify([1]).name
    ('MAPPING', 'UNIQUE_COLLECTION', 'COMPOSITE')
    >>> classify(None).name, classify(42).name
    ('ABSENT', 'SCALAR')
    """

    if isinstance(value, Mapping):
        return ValueShape.MAPPING
    if isinstance(value, Set):
        return ValueShape.UNIQUE_COLLECTION
    if value is None or value is UNDEFINED:
        return ValueShape.ABSENT
    if isinstance(value, _SCALAR_TYPES):
        return ValueShape.SCALAR
    return ValueShape.COMPOSITE


def _serialize_mapping(value: Mapping[Any, Any]) -> str:
    entries = ", ".join(f"{serialize_value(key)} => {serialize_value(item)}" for key, item in value.items())
    return f"Map:{{ {entries} }}"


def _serialize_unique_collection(value: Set[Any]) -> str:
    items = ", ".join(serialize_value(item) for item in value)
    return f"Set:{{ {items} }}"


_JSON_KEY_TYPES: tuple[type, ...] = (str, int, float, bool, type(None))


def _shallow_fields(value: Any) -> dict[str, Any]:
    """Return a dataclass instance's fields without deep-copying them."""
    return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}


def _to_jsonable(value: Any) -> Any:
    """Rewrite containers into shapes :func:`json.dumps` accepts.

    Keys json cannot encode are replaced by their serialized text; leaves are
    left for :func:`_json_default`.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = _shallow_fields(value)
    if isinstance(value, Mapping):
        return {
            (key if isinstance(key, _JSON_KEY_TYPES) else serialize_value(key)): _to_jsonable(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple, Set)):
        return [_to_jsonable(item) for item in value]
    return value


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _to_jsonable(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return str(value)


def _serialize_composite(value: Any) -> str:
    try:
        return json.dumps(_to_jsonable(value), default=_json_default, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        # e.g. an Enum member whose value json rejects
        return str(value)


def _serialize_absent(_value: Any) -> str:
    return "undefined"


def _serialize_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


_SERIALIZERS: dict[ValueShape, Callable[[Any], str]] = {
    ValueShape.MAPPING: _serialize_mapping,
    ValueShape.UNIQUE_COLLECTION: _serialize_unique_collection,
    ValueShape.COMPOSITE: _serialize_composite,
    ValueShape.ABSENT: _serialize_absent,
    ValueShape.SCALAR: _serialize_scalar,
}


def serialize_value(value: Any) -> str:
    """Convert a single value into text.

    Examples
    --------
    >>> serialize_value(42)
    '42'
    >>> serialize_value(None)
    'undefined'
    >>> serialize_value({"a": 1, "b": 2})
    'Map:{ a => 1, b => 2 }'
    >>> serialize_value({"x": {"y"}})
    'Map:{ x => Set:{ y } }'
    >>> serialize_value([1, "two"])
    '[1,"two"]'
    """

    return _SERIALIZERS[classify(value)](value)


def serialize_values(values: Iterable[Any]) -> list[str]:
    """Convert each value independently, preserving order."""

    return [serialize_value(value) for value in values]


def join_values(values: Iterable[Any], separator: str = " ") -> str:
    """Serialize ``values`` and join them with ``separator``."""

    return separator.join(serialize_values(values))


__all__ = [
    "UNDEFINED",
    "ValueShape",
    "classify",
    "join_values",
    "serialize_value",
    "serialize_values",
]
