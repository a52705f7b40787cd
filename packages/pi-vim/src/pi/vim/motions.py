"""Word and line-start motions over a :class:`VimGrid`.

Each function takes a grid and a start position and returns the target
position, or ``None`` when the motion has nowhere to go. The grid is never
modified.

Positions are walked in reading order over occupied columns only: a row's
content ends at its rightmost occupied cell and an empty row is visited once,
at column 0. Crossing a row boundary always ends a word. An empty row is a
stop for ``w``, ``b`` and ``ge``; ``e`` passes over it like any blank.

A *word* is a run of letters, digits and underscores; every punctuation
character is a word of its own. A *WORD* (``big=True``) is any run of
non-blank cells.
"""

from __future__ import annotations

from pi.vim.cell import CellKind, CharClass, char_class
from pi.vim.grid import Position, VimGrid


def _class_at(grid: VimGrid, pos: Position, big: bool) -> CharClass:
    cls = char_class(grid.get(pos.row, pos.col))
    if big and cls is CharClass.PUNCT:
        return CharClass.WORD
    return cls


def _joins(cls: CharClass, other: CharClass) -> bool:
    """Whether two neighbouring cells belong to the same word."""
    return cls is CharClass.WORD and other is CharClass.WORD


def _skippable(grid: VimGrid, pos: Position, big: bool) -> bool:
    """A blank cell that is not the stop on an empty row."""
    return _class_at(grid, pos, big) is CharClass.BLANK and not grid.is_row_empty(pos.row)


def next_position(grid: VimGrid, row: int, col: int) -> Position | None:
    """The position after ``(row, col)`` in reading order."""
    if col < grid.rightmost_occupied(row):
        return Position(row, col + 1)
    if row + 1 < grid.num_rows:
        return Position(row + 1, 0)
    return None


def prev_position(grid: VimGrid, row: int, col: int) -> Position | None:
    """The position before ``(row, col)`` in reading order."""
    rightmost = grid.rightmost_occupied(row)
    if col > 0 and rightmost >= 0:
        return Position(row, min(col - 1, rightmost))
    if row > 0:
        return Position(row - 1, max(grid.rightmost_occupied(row - 1), 0))
    return None


def word_forward(grid: VimGrid, row: int, col: int, big: bool = False) -> Position | None:
    """``w`` / ``W``: start of the next word."""
    pos = Position(row, col)
    cls = _class_at(grid, pos, big)
    nxt = next_position(grid, *pos)
    while nxt is not None and nxt.row == pos.row and _joins(cls, _class_at(grid, nxt, big)):
        pos = nxt
        nxt = next_position(grid, *pos)
    while nxt is not None and _skippable(grid, nxt, big):
        nxt = next_position(grid, *nxt)
    return nxt


def word_end(grid: VimGrid, row: int, col: int, big: bool = False) -> Position | None:
    """``e`` / ``E``: end of the current or next word, always moving."""
    pos = next_position(grid, row, col)
    while pos is not None and _class_at(grid, pos, big) is CharClass.BLANK:
        pos = next_position(grid, *pos)
    if pos is None:
        return None
    cls = _class_at(grid, pos, big)
    nxt = next_position(grid, *pos)
    while nxt is not None and nxt.row == pos.row and _joins(cls, _class_at(grid, nxt, big)):
        pos = nxt
        nxt = next_position(grid, *pos)
    return pos


def word_backward(grid: VimGrid, row: int, col: int, big: bool = False) -> Position | None:
    """``b`` / ``B``: start of the current or previous word, always moving."""
    pos = prev_position(grid, row, col)
    while pos is not None and _skippable(grid, pos, big):
        pos = prev_position(grid, *pos)
    if pos is None:
        return None
    cls = _class_at(grid, pos, big)
    prv = prev_position(grid, *pos)
    while prv is not None and prv.row == pos.row and _joins(cls, _class_at(grid, prv, big)):
        pos = prv
        prv = prev_position(grid, *pos)
    return pos


def word_end_backward(grid: VimGrid, row: int, col: int, big: bool = False) -> Position | None:
    """``ge`` / ``gE``: end of the previous word."""
    pos = Position(row, col)
    cls = _class_at(grid, pos, big)
    prv = prev_position(grid, *pos)
    while prv is not None and prv.row == pos.row and _joins(cls, _class_at(grid, prv, big)):
        pos = prv
        prv = prev_position(grid, *pos)
    while prv is not None and _skippable(grid, prv, big):
        prv = prev_position(grid, *prv)
    return prv


def first_non_blank(grid: VimGrid, row: int) -> int:
    """Column of the first non-blank cell of ``row``.

    On a row holding only blanks this is the left cell of the last tab run,
    or failing that the last whitespace cell. An empty row gives 0.
    """
    rightmost = grid.rightmost_occupied(row)
    for c in range(rightmost + 1):
        if char_class(grid.get(row, c)) is not CharClass.BLANK:
            return c
    for c in range(rightmost, -1, -1):
        if grid.get(row, c).kind is CellKind.TAB_LEFT:
            return c
    return max(rightmost, 0)
