"""Dotted-path addressing for nested message dictionaries.

Message ids such as "app.nav.home" address nested dictionaries in deep
mode. This module reads (resolve) and writes (assign) such paths.

Paths are tokenized up front into typed segments: a segment that starts
like an integer ("0", "12", " 3") is a list index, anything else a map key.
The kind of the NEXT segment decides whether a missing intermediate
container is created as a list or a dict, independent of the order in
which paths are written.

List positions skipped over by an index path hold the MISSING sentinel,
so a stored None at a list index counts as written. Serialization
renders such holes as null.

Example:
    >>> tree: dict[str, object] = {}
    >>> assign(tree, "app.items[0].label", "First")
    >>> tree
    {'app': {'items': [{'label': 'First'}]}}
    >>> resolve(tree, "app.items.0.label")
    'First'
    >>> resolve(tree, "app.missing") is MISSING
    True

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from svextract.diagnostics import PathConflictError
from svextract.diagnostics.templates import ErrorTemplate

__all__ = [
    "MISSING",
    "PathSegment",
    "SegmentKind",
    "assign",
    "is_defined",
    "is_number_string",
    "resolve",
    "tokenize_path",
]

type Container = dict[str, object] | list[object]

_BRACKET_INDEX = re.compile(r"\[(\w+)\]")
_NUMBER_PREFIX = re.compile(r"\s*[+-]?\d")


class _Missing:
    """Sentinel for "no value at this path" (distinct from a stored None)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


class SegmentKind(StrEnum):
    """Kind of a path segment."""

    MAP_KEY = "map_key"
    LIST_INDEX = "list_index"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One component of a tokenized path.

    Attributes:
        key: Raw segment text
        kind: Whether the segment addresses a list position or a map key
    """

    key: str
    kind: SegmentKind

    @property
    def index(self) -> int | None:
        """List position for canonical non-negative integers, else None."""
        if self.key.isascii() and self.key.isdigit():
            return int(self.key)
        return None


def is_number_string(text: str) -> bool:
    """Check whether text starts like an integer (parseInt semantics)."""
    return _NUMBER_PREFIX.match(text) is not None


def tokenize_path(path: str) -> tuple[PathSegment, ...]:
    """Split a dotted/bracketed path into typed segments.

    Bracket indices are normalized to dots first: "a[0].b" -> "a.0.b".

    Args:
        path: Path string

    Returns:
        Tuple of segments (never empty; "" yields one empty map key)
    """
    normalized = _BRACKET_INDEX.sub(r".\1", path)
    return tuple(
        PathSegment(
            key=part,
            kind=SegmentKind.LIST_INDEX if is_number_string(part) else SegmentKind.MAP_KEY,
        )
        for part in normalized.split(".")
    )


def _lookup(obj: object, key: str) -> object:
    if isinstance(obj, dict):
        return obj.get(key, MISSING)
    if isinstance(obj, list) and key.isascii() and key.isdigit():
        position = int(key)
        # MISSING entries are holes left by assign(), not stored values
        if position < len(obj) and obj[position] is not MISSING:
            return obj[position]
    return MISSING


def resolve(container: Container, path: str | None) -> object:
    """Read the value stored at path.

    Lookup order:
    1. path as a direct (flat) key of container
    2. walk the dot-separated segments; at every level below the root, the
       remaining suffix joined back with dots is tried as a flat key first,
       so flat keys containing dots are found inside nested structures

    Args:
        container: Nested dictionary (or list) to read from
        path: Dotted path, or None

    Returns:
        The stored value, or MISSING when nothing is stored there
    """
    if path is None:
        return MISSING

    direct = _lookup(container, path)
    if direct is not MISSING:
        return direct

    keys = path.split(".")
    result: object = container
    for position, key in enumerate(keys):
        if not isinstance(result, (dict, list)):
            return MISSING
        if position > 0:
            partial = _lookup(result, ".".join(keys[position:]))
            if partial is not MISSING:
                return partial
        result = _lookup(result, key)
    return result


def is_defined(container: Container, path: str | None) -> bool:
    """Check whether any value (including None) is stored at path."""
    return resolve(container, path) is not MISSING


def _contains(ref: Container, segment: PathSegment) -> bool:
    if isinstance(ref, dict):
        return segment.key in ref
    index = segment.index
    return index is not None and index < len(ref) and ref[index] is not MISSING


def _child(ref: Container, segment: PathSegment) -> object:
    if isinstance(ref, dict):
        return ref[segment.key]
    return ref[segment.index]  # type: ignore[index]  # _contains checked it


def _store(ref: Container, segment: PathSegment, value: object, path: str) -> None:
    if isinstance(ref, dict):
        ref[segment.key] = value
        return
    index = segment.index
    if index is None:
        raise PathConflictError(ErrorTemplate.path_conflict(path, segment.key))
    # Positions skipped over hold MISSING (rendered as null)
    ref.extend([MISSING] * (index + 1 - len(ref)))
    ref[index] = value


def assign(container: Container, path: str, value: object) -> None:
    """Write value at path, creating intermediate containers.

    Existing entries are descended into, never replaced; if the full path
    already exists the call is a no-op.

    Args:
        container: Nested dictionary to write into (mutated)
        path: Dotted/bracketed path
        value: Value for the last segment

    Raises:
        PathConflictError: If a segment has to be written below a plain
            value, or a non-index segment addresses a list
    """
    segments = tokenize_path(path)
    last = len(segments) - 1
    ref: object = container
    for position, segment in enumerate(segments):
        if not isinstance(ref, (dict, list)):
            raise PathConflictError(ErrorTemplate.path_conflict(path, segment.key))
        if _contains(ref, segment):
            ref = _child(ref, segment)
            continue
        if position < last:
            next_kind = segments[position + 1].kind
            created: Container = [] if next_kind is SegmentKind.LIST_INDEX else {}
            _store(ref, segment, created, path)
            ref = created
        else:
            _store(ref, segment, value, path)
