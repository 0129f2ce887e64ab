"""Single-line editing state over logical text.

The editor owns the logical text, the cursor and the selection anchor.
All three are kept as codepoint indices that never split a grapheme
cluster.  The visual text is derived: it is dropped on every mutation
and rebuilt from scratch the next time someone asks for it.
"""

from __future__ import annotations

import bisect
import logging

import grapheme

from bidi_entry.utils.graphemes import (
    Unit,
    boundaries,
    from_char_index,
    grapheme_length,
    parse_unit,
    resolve_encoding,
    snap_to_boundary,
    to_char_index,
)
from bidi_entry.utils.visual import VisualText, build_visual

logger = logging.getLogger(__name__)


class LineEditor:
    """Editing model for a single-line input field.

    Positions handed out by the editor are logical unless a method says
    otherwise.  Call ``visual`` to get the string for rendering and
    ``cursor_in(unit, visual=True)`` to place the caret on it.
    """

    def __init__(self, text: str = "", *, encoding: str = "utf-8", max_length: int = 0) -> None:
        resolve_encoding(encoding)
        if max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {max_length}")
        self._encoding = encoding
        self._max_length = max_length
        self._text = ""
        self._cursor = 0
        self._anchor: int | None = None
        self._visual: VisualText | None = None
        self._hinted = False
        self.set_text(text)

    # -- Properties -------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def cursor(self) -> int:
        """Logical cursor as a codepoint index."""
        return self._cursor

    @property
    def selection(self) -> tuple[int, int] | None:
        """Selected ``(start, end)`` codepoint range, or None."""
        if self._anchor is None or self._anchor == self._cursor:
            return None
        return min(self._anchor, self._cursor), max(self._anchor, self._cursor)

    @property
    def selected_text(self) -> str:
        sel = self.selection
        if sel is None:
            return ""
        return self._text[sel[0] : sel[1]]

    @property
    def visual(self) -> VisualText:
        """The visual text for the current logical text."""
        if self._visual is None:
            self._visual = build_visual(self._text, self._encoding)
        return self._visual

    @property
    def hinted(self) -> bool:
        return self.visual.hinted

    # -- Helpers ----------------------------------------------------------

    def _replace(self, text: str, cursor: int) -> None:
        """Swap in new logical text and rebuild the derived state."""
        self._text = text
        self._cursor = snap_to_boundary(text, cursor, forward=True)
        self._anchor = None
        self._visual = None
        hinted = self.visual.hinted
        if hinted != self._hinted:
            logger.debug("Direction hint %s", "added" if hinted else "removed")
            self._hinted = hinted

    def _move(self, index: int, select: bool) -> None:
        if select:
            if self._anchor is None:
                self._anchor = self._cursor
        else:
            self._anchor = None
        self._cursor = index

    def _prev_boundary(self, index: int) -> int:
        bounds = boundaries(self._text)
        pos = bisect.bisect_left(bounds, index)
        return bounds[max(0, pos - 1)]

    def _next_boundary(self, index: int) -> int:
        bounds = boundaries(self._text)
        pos = bisect.bisect_right(bounds, index)
        return bounds[min(pos, len(bounds) - 1)]

    def _is_space_before(self, index: int) -> bool:
        return self._text[self._prev_boundary(index) : index].isspace()

    def _is_space_after(self, index: int) -> bool:
        return self._text[index : self._next_boundary(index)].isspace()

    def _delete_range(self, start: int, end: int) -> None:
        self._replace(self._text[:start] + self._text[end:], start)

    # -- Editing ----------------------------------------------------------

    def set_text(self, text: str) -> None:
        """Replace the whole text and put the cursor at the end."""
        self._replace(text, len(text))

    def clear(self) -> None:
        self._replace("", 0)

    def insert(self, text: str) -> None:
        """Insert *text* at the cursor, replacing the selection if any."""
        start, end = self.selection or (self._cursor, self._cursor)
        remaining = self._text[:start] + self._text[end:]
        if self._max_length:
            room = self._max_length - grapheme_length(remaining)
            if room <= 0:
                logger.debug("Insert dropped: max_length %d reached", self._max_length)
                return
            text = grapheme.slice(text, 0, room)
        self._replace(remaining[:start] + text + remaining[start:], start + len(text))

    def delete_backward(self) -> None:
        """Delete the selection, or one grapheme cluster before the cursor."""
        sel = self.selection
        if sel is not None:
            self._delete_range(*sel)
        elif self._cursor > 0:
            self._delete_range(self._prev_boundary(self._cursor), self._cursor)

    def delete_forward(self) -> None:
        """Delete the selection, or one grapheme cluster after the cursor."""
        sel = self.selection
        if sel is not None:
            self._delete_range(*sel)
        elif self._cursor < len(self._text):
            self._delete_range(self._cursor, self._next_boundary(self._cursor))

    def delete_word_backward(self) -> None:
        sel = self.selection
        if sel is not None:
            self._delete_range(*sel)
            return
        end = self._cursor
        self.move_word_left()
        self._delete_range(self._cursor, end)

    # -- Movement ---------------------------------------------------------

    def move_left(self, select: bool = False) -> None:
        sel = self.selection
        if sel is not None and not select:
            self._move(sel[0], False)
        else:
            self._move(self._prev_boundary(self._cursor), select)

    def move_right(self, select: bool = False) -> None:
        sel = self.selection
        if sel is not None and not select:
            self._move(sel[1], False)
        else:
            self._move(self._next_boundary(self._cursor), select)

    def move_word_left(self, select: bool = False) -> None:
        index = self._cursor
        while index > 0 and self._is_space_before(index):
            index = self._prev_boundary(index)
        while index > 0 and not self._is_space_before(index):
            index = self._prev_boundary(index)
        self._move(index, select)

    def move_word_right(self, select: bool = False) -> None:
        index = self._cursor
        end = len(self._text)
        while index < end and self._is_space_after(index):
            index = self._next_boundary(index)
        while index < end and not self._is_space_after(index):
            index = self._next_boundary(index)
        self._move(index, select)

    def home(self, select: bool = False) -> None:
        self._move(0, select)

    def end(self, select: bool = False) -> None:
        self._move(len(self._text), select)

    def select_all(self) -> None:
        self._anchor = 0
        self._cursor = len(self._text)

    # -- Coordinates ------------------------------------------------------

    def cursor_in(self, unit: Unit, visual: bool = False) -> int:
        """The cursor expressed in *unit*, in logical or visual space."""
        position = from_char_index(self._text, self._cursor, unit, self._encoding)
        if visual:
            return self.visual.to_visual(position, unit)
        return position

    def selection_in(self, unit: Unit, visual: bool = False) -> tuple[int, int] | None:
        sel = self.selection
        if sel is None:
            return None
        start, end = (from_char_index(self._text, i, unit, self._encoding) for i in sel)
        if visual:
            return self.visual.to_visual(start, unit), self.visual.to_visual(end, unit)
        return start, end

    def set_cursor_from_visual(self, position: int, unit: Unit, select: bool = False) -> None:
        """Place the cursor from a position in the rendered string.

        Positions inside the direction hint land on logical 0.  Codepoint
        positions inside a cluster snap to the cluster start.
        """
        unit = parse_unit(unit)
        logical = self.visual.to_logical(position, unit)
        if unit is not Unit.CHAR:
            logical = to_char_index(self._text, logical, unit, self._encoding)
        index = snap_to_boundary(self._text, logical)
        self._move(index, select)
