"""Display-width helpers for text entering the grid."""

from __future__ import annotations

import wcwidth as _wcwidth


def char_width(ch: str) -> int:
    """Return the terminal column width of a single code point.

    Control characters report ``-1`` and combining marks ``0``.
    """
    return _wcwidth.wcwidth(ch)


def is_cell_glyph(ch: str) -> bool:
    """Whether ``ch`` can occupy a grid cell on its own."""
    return len(ch) == 1 and char_width(ch) > 0


def is_printable_key(ch: str) -> bool:
    """Printable ASCII, the only glyphs accepted from the keyboard."""
    return len(ch) == 1 and " " <= ch <= "~"
