"""Text measurement and position conversion across units.

Python indexes strings by codepoint, storage counts bytes, and users see
grapheme clusters.  Every helper here takes a codepoint index as the
pivot and converts to or from one of the other two.
"""

from __future__ import annotations

import bisect
from enum import StrEnum, auto

import grapheme


class Unit(StrEnum):
    """Unit a text position is expressed in."""

    BYTE = auto()
    GRAPHEME = auto()
    CHAR = auto()


class InvalidPositionError(ValueError):
    """A position violates the caller contract (negative, out of range, mid-cluster)."""


# Codec names without a byte-order mark, so one codepoint always encodes
# to the same number of bytes regardless of its position in the text.
ENCODINGS: dict[str, str] = {
    "utf-8": "utf-8",
    "utf8": "utf-8",
    "utf-16": "utf-16-le",
    "utf-16-le": "utf-16-le",
    "utf-16-be": "utf-16-be",
    "utf-32": "utf-32-le",
    "utf-32-le": "utf-32-le",
    "utf-32-be": "utf-32-be",
}


def resolve_encoding(name: str) -> str:
    """Return the BOM-free codec for *name*, raising ValueError if unsupported."""
    codec = ENCODINGS.get(name.lower().replace("_", "-"))
    if codec is None:
        raise ValueError(f"Unknown encoding '{name}'. Choose from: {sorted(set(ENCODINGS.values()))}")
    return codec


def parse_unit(value: str | Unit) -> Unit:
    try:
        return Unit(value)
    except ValueError:
        raise ValueError(f"Unknown unit '{value}'. Choose from: {[u.value for u in Unit]}") from None


def check_position(position: int, limit: int | None = None) -> int:
    """Validate a caller-supplied position and return it unchanged."""
    if isinstance(position, bool) or not isinstance(position, int):
        raise InvalidPositionError(f"Position must be an int, got {type(position).__name__}")
    if position < 0:
        raise InvalidPositionError(f"Position {position} is negative")
    if limit is not None and position > limit:
        raise InvalidPositionError(f"Position {position} is past the end ({limit})")
    return position


# ── Measurement ─────────────────────────────────────────────────────


def byte_length(text: str, encoding: str = "utf-8") -> int:
    return len(text.encode(resolve_encoding(encoding)))


def grapheme_length(text: str) -> int:
    return grapheme.length(text)


def length_in(text: str, unit: Unit, encoding: str = "utf-8") -> int:
    """Length of *text* measured in *unit*."""
    match unit:
        case Unit.BYTE:
            return byte_length(text, encoding)
        case Unit.GRAPHEME:
            return grapheme_length(text)
        case Unit.CHAR:
            return len(text)
    raise ValueError(f"Unknown unit '{unit}'")


def boundaries(text: str) -> list[int]:
    """Codepoint indices of every grapheme cluster boundary, 0 and len(text) included."""
    result = [0]
    for size in grapheme.grapheme_lengths(text):
        result.append(result[-1] + size)
    return result


# ── Codepoint <-> grapheme ──────────────────────────────────────────


def char_to_grapheme(text: str, index: int) -> int:
    """Convert a codepoint index to a grapheme index.

    *index* must sit on a cluster boundary; splitting a cluster raises.
    """
    check_position(index, len(text))
    bounds = boundaries(text)
    pos = bisect.bisect_left(bounds, index)
    if bounds[pos] != index:
        raise InvalidPositionError(f"Index {index} splits a grapheme cluster")
    return pos


def grapheme_to_char(text: str, index: int) -> int:
    bounds = boundaries(text)
    check_position(index, len(bounds) - 1)
    return bounds[index]


def snap_to_boundary(text: str, index: int, *, forward: bool = False) -> int:
    """Move a codepoint index onto the nearest cluster boundary.

    Rounds down unless *forward* is set.  Out-of-range indices are clamped.
    """
    index = max(0, min(index, len(text)))
    bounds = boundaries(text)
    pos = bisect.bisect_left(bounds, index)
    if bounds[pos] == index:
        return index
    return bounds[pos] if forward else bounds[pos - 1]


# ── Codepoint <-> byte ──────────────────────────────────────────────


def char_to_byte(text: str, index: int, encoding: str = "utf-8") -> int:
    check_position(index, len(text))
    return len(text[:index].encode(resolve_encoding(encoding)))


def byte_to_char(text: str, index: int, encoding: str = "utf-8") -> int:
    """Convert a byte offset to a codepoint index.

    A byte offset that falls inside one encoded codepoint raises.
    """
    codec = resolve_encoding(encoding)
    check_position(index)
    consumed = 0
    for i, ch in enumerate(text):
        if consumed == index:
            return i
        consumed += len(ch.encode(codec))
        if consumed > index:
            raise InvalidPositionError(f"Byte offset {index} falls inside codepoint {i}")
    if consumed == index:
        return len(text)
    raise InvalidPositionError(f"Byte offset {index} is past the end ({consumed})")


# ── Any unit <-> codepoint ──────────────────────────────────────────


def to_char_index(text: str, position: int, unit: Unit, encoding: str = "utf-8") -> int:
    """Convert *position* in *unit* to a codepoint index into *text*."""
    match unit:
        case Unit.CHAR:
            return check_position(position, len(text))
        case Unit.GRAPHEME:
            return grapheme_to_char(text, position)
        case Unit.BYTE:
            return byte_to_char(text, position, encoding)
    raise ValueError(f"Unknown unit '{unit}'")


def from_char_index(text: str, index: int, unit: Unit, encoding: str = "utf-8") -> int:
    """Convert a codepoint index into *text* to a position in *unit*."""
    match unit:
        case Unit.CHAR:
            return check_position(index, len(text))
        case Unit.GRAPHEME:
            return char_to_grapheme(text, index)
        case Unit.BYTE:
            return char_to_byte(text, index, encoding)
    raise ValueError(f"Unknown unit '{unit}'")
