"""Build the string handed to rendering from the string the user typed.

When the text needs a direction hint a LEFT-TO-RIGHT MARK is prepended.
The mark is invisible and not user-addressable, so every position read
back from the rendered string must be shifted by the recorded offsets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from bidi_entry.utils.bidi import needs_rtl_hint
from bidi_entry.utils.graphemes import (
    Unit,
    byte_length,
    length_in,
    resolve_encoding,
)
from bidi_entry.utils.offsets import OffsetRecord, to_logical, to_visual

logger = logging.getLogger(__name__)

# U+200E LEFT-TO-RIGHT MARK.
HINT_CHAR = "\u200e"


def hint_offsets(encoding: str = "utf-8") -> OffsetRecord:
    """The offsets introduced by one hint character in *encoding*."""
    return OffsetRecord(
        byte_offset=byte_length(HINT_CHAR, encoding),
        grapheme_offset=1,
        char_offset=1,
    )


@dataclass(frozen=True, slots=True)
class VisualText:
    """A rendered string together with the logical text it came from.

    Unpacks as ``(text, offsets)``.
    """

    text: str
    logical: str
    offsets: OffsetRecord
    encoding: str = "utf-8"

    def __iter__(self) -> Iterator[object]:
        return iter((self.text, self.offsets))

    def __str__(self) -> str:
        return self.text

    @property
    def hinted(self) -> bool:
        return self.offsets.hinted

    def length(self, unit: Unit = Unit.GRAPHEME) -> int:
        """Length of the visual string in *unit*."""
        return length_in(self.logical, unit, self.encoding) + self.offsets.for_unit(unit)

    def logical_length(self, unit: Unit = Unit.GRAPHEME) -> int:
        return length_in(self.logical, unit, self.encoding)

    def to_logical(self, position: int, unit: Unit = Unit.GRAPHEME) -> int:
        """Translate a visual position, rejecting anything past the visual end."""
        return to_logical(position, self.offsets, unit, limit=self.length(unit))

    def to_visual(self, position: int, unit: Unit = Unit.GRAPHEME) -> int:
        """Translate a logical position, rejecting anything past the logical end."""
        return to_visual(position, self.offsets, unit, limit=self.logical_length(unit))


def build_visual(text: str, encoding: str = "utf-8") -> VisualText:
    """Return the visual form of *text* and the offsets it introduces.

    The logical text is never altered; at most one hint character is
    prepended.  Always pass logical text, never a previous result.
    """
    resolve_encoding(encoding)
    if not needs_rtl_hint(text):
        return VisualText(text=text, logical=text, offsets=OffsetRecord(), encoding=encoding)

    record = hint_offsets(encoding)
    logger.debug("Prepending direction hint (%d bytes in %s)", record.byte_offset, encoding)
    return VisualText(text=HINT_CHAR + text, logical=text, offsets=record, encoding=encoding)


def strip_hint(visual: str) -> str:
    """Remove one leading hint character, recovering the logical text."""
    if visual.startswith(HINT_CHAR):
        return visual[len(HINT_CHAR):]
    return visual
