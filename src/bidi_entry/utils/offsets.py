"""Translate positions between logical and visual coordinate spaces.

Each call works in exactly one unit.  A caller counting grapheme
clusters passes ``Unit.GRAPHEME``, one counting storage bytes passes
``Unit.BYTE``, one holding Python ``str`` indices passes ``Unit.CHAR``.
Passing a position in one unit with another unit is undefined: the
result is a number, but not a meaningful one.
"""

from __future__ import annotations

from dataclasses import dataclass

from bidi_entry.utils.graphemes import Unit, check_position, parse_unit


@dataclass(frozen=True, slots=True)
class OffsetRecord:
    """How far visual positions sit ahead of logical ones, per unit."""

    byte_offset: int = 0
    grapheme_offset: int = 0
    char_offset: int = 0

    @property
    def hinted(self) -> bool:
        return self.grapheme_offset > 0

    def for_unit(self, unit: Unit) -> int:
        match parse_unit(unit):
            case Unit.BYTE:
                return self.byte_offset
            case Unit.GRAPHEME:
                return self.grapheme_offset
            case Unit.CHAR:
                return self.char_offset
        raise ValueError(f"Unknown unit '{unit}'")

    def as_dict(self) -> dict[str, int]:
        return {
            "byte_offset": self.byte_offset,
            "grapheme_offset": self.grapheme_offset,
            "char_offset": self.char_offset,
        }


def to_logical(
    visual_position: int,
    offsets: OffsetRecord,
    unit: Unit = Unit.GRAPHEME,
    *,
    limit: int | None = None,
) -> int:
    """Map a visual position to logical space.

    Positions inside the hint region have no logical counterpart and map
    to 0.  *limit*, when given, is the visual length in *unit*; anything
    past it is rejected.
    """
    check_position(visual_position, limit)
    return max(0, visual_position - offsets.for_unit(unit))


def to_visual(
    logical_position: int,
    offsets: OffsetRecord,
    unit: Unit = Unit.GRAPHEME,
    *,
    limit: int | None = None,
) -> int:
    """Map a logical position to visual space.

    *limit*, when given, is the logical length in *unit*.
    """
    check_position(logical_position, limit)
    return logical_position + offsets.for_unit(unit)


def translate_range(
    start: int,
    end: int,
    offsets: OffsetRecord,
    unit: Unit = Unit.GRAPHEME,
    *,
    to: str = "logical",
    limit: int | None = None,
) -> tuple[int, int]:
    """Translate a selection range, returning it with ``start <= end``."""
    if to == "logical":
        func = to_logical
    elif to == "visual":
        func = to_visual
    else:
        raise ValueError(f"Unknown target space '{to}'. Choose from: ['logical', 'visual']")
    lo, hi = sorted((start, end))
    return func(lo, offsets, unit, limit=limit), func(hi, offsets, unit, limit=limit)
