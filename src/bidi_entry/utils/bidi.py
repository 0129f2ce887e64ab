"""Direction classification for single-line text entry.

Terminals and most shaping engines pick a base direction from the first
strong character they see.  When the user starts typing Arabic into an
LTR input field the engine flips the whole line, so the caret and the
typed order drift apart.  This module decides when a direction hint is
needed; ``visual.py`` inserts it.
"""

from __future__ import annotations

import re

# Blocks that trigger a direction hint when they lead the text (inclusive).
HINT_RANGES: tuple[tuple[int, int], ...] = (
    (0x0600, 0x06FF),  # Arabic
    (0x0750, 0x077F),  # Arabic Supplement
    (0x08A0, 0x08FF),  # Arabic Extended-A
    (0xFB50, 0xFDFF),  # Arabic Presentation Forms-A
    (0xFE70, 0xFEFF),  # Arabic Presentation Forms-B
)

# Every RTL script block (Arabic, Hebrew, Thaana, Syriac, N'Ko).
_RTL_RANGES: tuple[tuple[int, int], ...] = (
    (0x0590, 0x05FF),
    (0x0600, 0x06FF),
    (0x0700, 0x074F),
    (0x0750, 0x077F),
    (0x0780, 0x07BF),
    (0x07C0, 0x07FF),
    (0x08A0, 0x08FF),
    (0xFB1D, 0xFB4F),
    (0xFB50, 0xFDFF),
    (0xFE70, 0xFEFF),
)


def _char_class(ranges: tuple[tuple[int, int], ...]) -> re.Pattern[str]:
    body = "".join(f"{re.escape(chr(lo))}-{re.escape(chr(hi))}" for lo, hi in ranges)
    return re.compile(f"[{body}]")


_HINT_RE = _char_class(HINT_RANGES)
_RTL_RE = _char_class(_RTL_RANGES)


def has_rtl(text: str) -> bool:
    """Return True if text contains any RTL script characters.

    Diagnostic only: the hint decision looks at the leading character,
    never at embedded runs.
    """
    return bool(_RTL_RE.search(text))


def is_hint_char(ch: str) -> bool:
    """Return True if the single character *ch* falls in a hinted block."""
    return len(ch) == 1 and _HINT_RE.fullmatch(ch) is not None


def first_significant_char(text: str) -> str | None:
    """Return the first non-whitespace character of *text*, or None."""
    for ch in text:
        if not ch.isspace():
            return ch
    return None


def needs_rtl_hint(text: str) -> bool:
    """Return True if *text* must be rendered with a leading direction hint.

    Only the first non-whitespace character is inspected.  Leading
    whitespace is skipped for classification but stays in the text.
    Empty and whitespace-only strings never need a hint.
    """
    ch = first_significant_char(text)
    if ch is None:
        return False
    return is_hint_char(ch)
