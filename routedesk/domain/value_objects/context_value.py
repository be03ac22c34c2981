"""Typed values for predicate lookups over ticket context.

A ticket context is a tree of JSON-like values. Path resolution distinguishes
a missing value (``ABSENT``) from an explicit ``None`` (JSON null) so that a
missing field never matches a predicate.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, Union


class _Absent:
    """Marker for a path segment that does not exist."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent()

Scalar = Union[str, int, float, bool, None]
ContextValue = Union[Scalar, Mapping[str, "ContextValue"], Sequence["ContextValue"]]

PATH_SEPARATOR = "."


def is_scalar(value: object) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _step(current: ContextValue | _Absent, segment: str) -> ContextValue | _Absent:
    """Descend one segment. Anything but a mapping or sequence is a dead end."""
    if isinstance(current, Mapping):
        return current.get(segment, ABSENT)
    if _is_sequence(current) and segment.isdigit():
        index = int(segment)
        return current[index] if index < len(current) else ABSENT
    return ABSENT


def resolve_path(root: Mapping[str, ContextValue], path: str) -> ContextValue | _Absent:
    """Resolve a dotted *path* against *root*.

    ``"data.productFamily"`` walks ``root["data"]["productFamily"]``;
    a numeric segment indexes into a sequence (``"data.lines.0.sku"``).
    Returns ``ABSENT`` as soon as a segment is missing.
    """
    current: ContextValue | _Absent = root
    for segment in path.split(PATH_SEPARATOR):
        current = _step(current, segment)
        if current is ABSENT:
            return ABSENT
    return current


def strict_equals(left: object, right: object) -> bool:
    """Equality without coercion: ``True`` never equals ``1``."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if left is None or right is None:
        return left is right
    if isinstance(left, str) != isinstance(right, str):
        return False
    return left == right
