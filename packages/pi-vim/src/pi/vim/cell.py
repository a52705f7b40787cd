"""Grid cells and character classes."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class CellKind(enum.Enum):
    """What a cell holds: a plain glyph or one segment of a tab run."""

    PLAIN = "plain"
    TAB_LEFT = "tab_left"
    TAB_MIDDLE = "tab_middle"
    TAB_RIGHT = "tab_right"


TAB_KINDS = frozenset({CellKind.TAB_LEFT, CellKind.TAB_MIDDLE, CellKind.TAB_RIGHT})


@dataclass(frozen=True)
class Cell:
    """One grid position.

    ``char`` is either ``""`` (empty) or a single glyph. Tab cells carry no
    glyph of their own and render as a blank.
    """

    char: str = ""
    highlight: str | None = None
    kind: CellKind = CellKind.PLAIN

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.PLAIN and self.char == ""

    @property
    def is_tab(self) -> bool:
        return self.kind in TAB_KINDS

    @property
    def display_char(self) -> str:
        if self.is_tab:
            return " "
        return self.char or " "


EMPTY_CELL = Cell()
TAB_LEFT_CELL = Cell(kind=CellKind.TAB_LEFT)
TAB_MIDDLE_CELL = Cell(kind=CellKind.TAB_MIDDLE)
TAB_RIGHT_CELL = Cell(kind=CellKind.TAB_RIGHT)


def tab_run(length: int) -> list[Cell]:
    """Return the cells of a tab run spanning ``length`` columns (at least 2)."""
    if length < 2:
        raise ValueError(f"tab run needs at least 2 cells, got {length}")
    return [TAB_LEFT_CELL] + [TAB_MIDDLE_CELL] * (length - 2) + [TAB_RIGHT_CELL]


# ---------------------------------------------------------------------------
# Character classes used by word motions
# ---------------------------------------------------------------------------


class CharClass(enum.Enum):
    BLANK = "blank"
    PUNCT = "punct"
    WORD = "word"


def is_blank(cell: Cell) -> bool:
    """Empty cells, whitespace glyphs and tab cells separate words."""
    return cell.is_empty or cell.is_tab or cell.char.isspace()


def is_word_char(char: str) -> bool:
    return char == "_" or char.isalnum()


def char_class(cell: Cell) -> CharClass:
    if is_blank(cell):
        return CharClass.BLANK
    if is_word_char(cell.char):
        return CharClass.WORD
    return CharClass.PUNCT
