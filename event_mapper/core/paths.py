"""
Dotted-path lookup.

Walks plain mappings and sequences with a path such as "a.b", "items.0.id"
or "items[0].id". Independent of the schema library.
"""

import re
from collections.abc import Mapping
from typing import Any, List

_SEGMENT_PATTERN = re.compile(r"[^.\[\]]+|\[\s*(['\"])(.*?)\1\s*\]")


class _Missing:
    """Marker for a value that could not be located."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()


def split_path(path: str) -> List[str]:
    """
    Split a dotted path into segments.

    Example: 'a.b[0]["c.d"]' -> ["a", "b", "0", "c.d"]
    """
    segments = []
    for match in _SEGMENT_PATTERN.finditer(path):
        if match.group(1):
            segments.append(match.group(2))
        else:
            segments.append(match.group(0))
    return segments


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(segment, MISSING)
    if isinstance(current, (list, tuple)) and segment.isdecimal():
        index = int(segment)
        if index < len(current):
            return current[index]
    return MISSING


def get_path(value: Any, path: str) -> Any:
    """
    Look up `path` inside `value`.

    A key equal to the whole path wins over nested lookup, so flat mappings
    with dotted keys resolve directly. Returns MISSING when any segment is
    absent; a None stored at the last segment is returned as None.
    """
    if isinstance(value, Mapping) and path in value:
        return value[path]

    current = value
    for segment in split_path(path):
        current = _step(current, segment)
        if current is MISSING:
            return MISSING
    return current
