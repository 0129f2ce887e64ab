"""Single-line text input that renders RTL-leading text with a direction hint."""

from __future__ import annotations

import logging

import grapheme
from rich.cells import cell_len
from rich.text import Text
from textual import events
from textual.binding import Binding
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget

from bidi_entry.services.line_editor import LineEditor
from bidi_entry.utils.graphemes import Unit, snap_to_boundary
from bidi_entry.utils.visual import HINT_CHAR

logger = logging.getLogger(__name__)


class HintedInput(Widget, can_focus=True):
    """A one-line input field backed by :class:`LineEditor`.

    The field always renders the *visual* text.  When the logical text
    starts with Arabic a LEFT-TO-RIGHT MARK is prepended, and the caret
    and selection are shifted onto the rendered string through the
    editor's offset translation.

    Messages emitted:
        ``Changed``   -- after every edit, with logical and visual text.
        ``Submitted`` -- on Enter, with the logical text.
    """

    DEFAULT_CSS = """
    HintedInput {
        height: 1;
        width: 1fr;
        background: $boost;
        padding: 0 1;
    }

    HintedInput:focus {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("left", "cursor_left", "Left", show=False),
        Binding("right", "cursor_right", "Right", show=False),
        Binding("shift+left", "cursor_left(True)", show=False),
        Binding("shift+right", "cursor_right(True)", show=False),
        Binding("ctrl+left", "word_left", show=False),
        Binding("ctrl+right", "word_right", show=False),
        Binding("home", "home", show=False),
        Binding("end", "end", show=False),
        Binding("shift+home", "home(True)", show=False),
        Binding("shift+end", "end(True)", show=False),
        Binding("backspace", "delete_left", show=False),
        Binding("delete", "delete_right", show=False),
        Binding("ctrl+w", "delete_word_left", show=False),
        Binding("ctrl+a", "select_all", show=False),
        Binding("ctrl+u", "clear", show=False),
        Binding("enter", "submit", show=False),
    ]

    placeholder: reactive[str] = reactive("")

    # ── Messages ────────────────────────────────────────────────────

    class Changed(Message):
        """Posted after the logical text changes."""

        def __init__(self, input: HintedInput, value: str, visual: str) -> None:
            self.input = input
            self.value = value
            self.visual = visual
            super().__init__()

        @property
        def control(self) -> HintedInput:
            return self.input

    class CursorMoved(Message):
        """Posted after the caret or selection moves without a text change."""

        def __init__(self, input: HintedInput) -> None:
            self.input = input
            super().__init__()

        @property
        def control(self) -> HintedInput:
            return self.input

    class Submitted(Message):
        """Posted when the user presses Enter."""

        def __init__(self, input: HintedInput, value: str) -> None:
            self.input = input
            self.value = value
            super().__init__()

        @property
        def control(self) -> HintedInput:
            return self.input

    def __init__(
        self,
        value: str = "",
        *,
        placeholder: str = "",
        encoding: str = "utf-8",
        max_length: int = 0,
        strip_on_submit: bool = True,
        cursor_style: str = "reverse",
        selection_style: str = "on #3a3a8a",
        placeholder_color: str = "#808080",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._editor = LineEditor(value, encoding=encoding, max_length=max_length)
        self._strip_on_submit = strip_on_submit
        self._cursor_style = cursor_style
        self._selection_style = selection_style
        self._placeholder_color = placeholder_color
        # First visible codepoint of the visual text.
        self._scroll = 0
        self.placeholder = placeholder

    # ── Public API ──────────────────────────────────────────────────

    @property
    def editor(self) -> LineEditor:
        return self._editor

    @property
    def value(self) -> str:
        """The logical text, exactly as typed."""
        return self._editor.text

    @value.setter
    def value(self, text: str) -> None:
        self._edit(self._editor.set_text, text)

    @property
    def visual_value(self) -> str:
        """The string handed to rendering."""
        return self._editor.visual.text

    @property
    def hinted(self) -> bool:
        return self._editor.hinted

    @property
    def cursor_position(self) -> int:
        """Logical cursor as a codepoint index."""
        return self._editor.cursor

    def insert_text(self, text: str) -> None:
        self._edit(self._editor.insert, text)

    # ── Editing plumbing ────────────────────────────────────────────

    def _edit(self, operation, *args) -> None:
        before = self._editor.text
        operation(*args)
        if self._editor.text != before:
            self.post_message(self.Changed(self, self._editor.text, self._editor.visual.text))
        self.refresh()

    def _navigate(self, operation, *args) -> None:
        before = (self._editor.cursor, self._editor.selection)
        operation(*args)
        if (self._editor.cursor, self._editor.selection) != before:
            self.post_message(self.CursorMoved(self))
        self.refresh()

    # ── Rendering ───────────────────────────────────────────────────

    def _update_scroll(self, display: str, caret: int) -> None:
        """Keep the caret cell within the visible width."""
        width = self.size.width
        if width <= 0:
            self._scroll = 0
            return
        if caret < self._scroll:
            self._scroll = caret
        while self._scroll < caret and cell_len(display[self._scroll : caret + 1]) > width:
            self._scroll += 1
        self._scroll = snap_to_boundary(display, self._scroll, forward=True)

    def render(self) -> Text:
        editor = self._editor
        if not editor.text:
            result = Text()
            if self.has_focus:
                result.append(" ", style=self._cursor_style)
            result.append(self.placeholder, style=self._placeholder_color)
            return result

        # Trailing space gives the caret a cell to sit on at end of line.
        display = editor.visual.text + " "
        caret = editor.cursor_in(Unit.CHAR, visual=True)
        self._update_scroll(display, caret)

        result = Text(display, no_wrap=True)
        selection = editor.selection_in(Unit.CHAR, visual=True)
        if selection is not None:
            result.stylize(self._selection_style, *selection)
        if self.has_focus:
            cluster = next(grapheme.graphemes(display[caret:]), " ")
            result.stylize(self._cursor_style, caret, caret + len(cluster))

        if self._scroll:
            result = result[self._scroll :]
            if editor.hinted:
                # The shaping engine still needs the hint at the start of the line.
                result = Text(HINT_CHAR) + result
        return result

    def on_focus(self) -> None:
        self.refresh()

    def on_blur(self) -> None:
        self.refresh()

    # ── Input handling ──────────────────────────────────────────────

    def on_key(self, event: events.Key) -> None:
        if event.is_printable and event.character:
            event.stop()
            event.prevent_default()
            self.insert_text(event.character)

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        # Single line: pasted line breaks are dropped.
        text = event.text.replace("\r\n", "").replace("\r", "").replace("\n", "")
        if text:
            self.insert_text(text)

    def on_click(self, event: events.Click) -> None:
        """Move the caret to the clicked cell."""
        event.stop()
        display = self._editor.visual.text
        column = event.x - self.styles.padding.left
        index = self._scroll
        used = 0
        while index < len(display):
            width = cell_len(display[index])
            if used + width > column:
                break
            used += width
            index += 1
        self._navigate(self._editor.set_cursor_from_visual, index, Unit.CHAR)

    # ── Actions ─────────────────────────────────────────────────────

    def action_cursor_left(self, select: bool = False) -> None:
        self._navigate(self._editor.move_left, select)

    def action_cursor_right(self, select: bool = False) -> None:
        self._navigate(self._editor.move_right, select)

    def action_word_left(self) -> None:
        self._navigate(self._editor.move_word_left)

    def action_word_right(self) -> None:
        self._navigate(self._editor.move_word_right)

    def action_home(self, select: bool = False) -> None:
        self._navigate(self._editor.home, select)

    def action_end(self, select: bool = False) -> None:
        self._navigate(self._editor.end, select)

    def action_select_all(self) -> None:
        self._navigate(self._editor.select_all)

    def action_delete_left(self) -> None:
        self._edit(self._editor.delete_backward)

    def action_delete_right(self) -> None:
        self._edit(self._editor.delete_forward)

    def action_delete_word_left(self) -> None:
        self._edit(self._editor.delete_word_backward)

    def action_clear(self) -> None:
        self._edit(self._editor.clear)

    def action_submit(self) -> None:
        value = self._editor.text
        if self._strip_on_submit:
            value = value.strip()
        logger.debug("Submitted %d characters (hinted=%s)", len(value), self._editor.hinted)
        self.post_message(self.Submitted(self, value))
