"""Direction hinting and logical/visual position mapping."""

from __future__ import annotations

from bidi_entry.utils.bidi import has_rtl, is_hint_char, needs_rtl_hint
from bidi_entry.utils.graphemes import InvalidPositionError, Unit
from bidi_entry.utils.offsets import OffsetRecord, to_logical, to_visual, translate_range
from bidi_entry.utils.visual import HINT_CHAR, VisualText, build_visual, strip_hint

__all__ = [
    "needs_rtl_hint",
    "is_hint_char",
    "has_rtl",
    "build_visual",
    "strip_hint",
    "VisualText",
    "HINT_CHAR",
    "OffsetRecord",
    "to_logical",
    "to_visual",
    "translate_range",
    "Unit",
    "InvalidPositionError",
]
