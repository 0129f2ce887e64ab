"""Demo Textual application for the hinted input field."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Static

from bidi_entry.config.settings import Settings, get_settings
from bidi_entry.ui.widgets.hinted_input import HintedInput
from bidi_entry.utils.graphemes import Unit

logger = logging.getLogger(__name__)


def describe_positions(field: HintedInput) -> str:
    """One-line summary of the hint state and caret in every unit."""
    editor = field.editor
    parts = [f"hint: {'on' if editor.hinted else 'off'}"]
    for unit in Unit:
        logical = editor.cursor_in(unit)
        visual = editor.cursor_in(unit, visual=True)
        parts.append(f"{unit.value} {logical}->{visual}")
    return "  ".join(parts)


class BidiEntryApp(App):
    """Single input field with a live readout of logical/visual positions."""

    TITLE = "bidi-entry"

    CSS = """
    Screen {
        align: center middle;
    }

    #entry-box {
        width: 60;
        height: auto;
        border: round $primary;
        padding: 1 2;
    }

    #entry-status {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("escape", "quit", "Quit", show=False),
        Binding("ctrl+q", "quit", "Quit", show=False),
    ]

    def __init__(self, settings: Settings | None = None, value: str = "") -> None:
        super().__init__()
        self.settings = settings or get_settings()
        self._initial_value = value

    def compose(self) -> ComposeResult:
        with Vertical(id="entry-box"):
            yield HintedInput(
                self._initial_value,
                placeholder=self.settings.input.placeholder,
                encoding=self.settings.bidi.encoding,
                max_length=self.settings.input.max_length,
                strip_on_submit=self.settings.input.strip_on_submit,
                id="entry-field",
            )
            yield Static("", id="entry-status")

    def on_mount(self) -> None:
        field = self.query_one("#entry-field", HintedInput)
        field.focus()
        self._update_status(field)

    def _update_status(self, field: HintedInput) -> None:
        self.query_one("#entry-status", Static).update(describe_positions(field))

    def on_hinted_input_changed(self, event: HintedInput.Changed) -> None:
        self._update_status(event.input)

    def on_hinted_input_cursor_moved(self, event: HintedInput.CursorMoved) -> None:
        self._update_status(event.input)

    def on_hinted_input_submitted(self, event: HintedInput.Submitted) -> None:
        if event.value:
            self.notify(event.value, title="Submitted", timeout=4)
        else:
            self.notify("Nothing entered.", severity="warning", timeout=3)
