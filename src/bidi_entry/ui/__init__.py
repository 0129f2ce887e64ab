"""UI components for bidi-entry."""

from __future__ import annotations

from bidi_entry.ui.widgets.hinted_input import HintedInput

__all__ = ["HintedInput"]
