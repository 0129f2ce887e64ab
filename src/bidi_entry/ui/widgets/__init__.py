"""Reusable widgets for the TUI."""

from __future__ import annotations

from bidi_entry.ui.widgets.hinted_input import HintedInput

__all__ = ["HintedInput"]
