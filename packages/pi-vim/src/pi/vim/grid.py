"""The editing buffer: a resizable grid of cells with cursor and mode state.

Rows always have the same number of cells and the grid never drops below
one row or one column. The logical end of a row is its rightmost non-empty
cell; everything past it is padding.

The cursor is stored as a raw position plus a *virtual column*, the column
the user last asked for horizontally. Reads go through :meth:`VimGrid.get_cursor`,
which clamps the virtual column to what the current row and mode allow and
keeps it off the interior of tab runs.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import replace
from typing import Iterable, NamedTuple

from pi.vim.cell import EMPTY_CELL, Cell, CellKind, tab_run
from pi.vim.config import TAB_SIZE
from pi.vim.utils import is_cell_glyph

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    NORMAL = "normal"
    INSERT = "insert"


class OutOfBoundsError(IndexError):
    """Raised when reading a cell outside the grid."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"OOB({row},{col})")
        self.row = row
        self.col = col


class Position(NamedTuple):
    row: int
    col: int


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------


def expand_line(line: str, tab_size: int = TAB_SIZE) -> list[Cell]:
    """Turn one line of text into cells, expanding tabs into tab runs.

    A tab one column short of its stop becomes a single space, the same
    thing the Tab key produces there. Zero-width and control characters are
    dropped.
    """
    cells: list[Cell] = []
    for ch in line:
        if ch == "\t":
            col = len(cells)
            distance = (col // tab_size + 1) * tab_size - col
            if distance == 1:
                cells.append(Cell(" "))
            else:
                cells.extend(tab_run(distance))
        elif is_cell_glyph(ch):
            cells.append(Cell(ch))
    return cells


def _fit_row(cells: list[Cell], width: int) -> list[Cell]:
    """Trim ``cells`` to ``width``, blanking a tab run cut by the edge."""
    if len(cells) <= width:
        return cells
    row = cells[:width]
    col = width - 1
    while col >= 0 and row[col].kind in (CellKind.TAB_LEFT, CellKind.TAB_MIDDLE):
        kind = row[col].kind
        row[col] = EMPTY_CELL
        col -= 1
        if kind is CellKind.TAB_LEFT:
            break
    return row


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# VimGrid
# ---------------------------------------------------------------------------


class VimGrid:
    """A rows x cols matrix of :class:`Cell` plus cursor and mode."""

    def __init__(self, num_rows: int, num_cols: int, fill: Cell = EMPTY_CELL) -> None:
        self._num_rows = max(1, num_rows)
        self._num_cols = max(1, num_cols)
        self._grid: list[list[Cell]] = [
            [fill] * self._num_cols for _ in range(self._num_rows)
        ]
        self._cursor_row = 0
        self._cursor_col = 0
        self._virtual_col = 0
        self._mode = Mode.NORMAL

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        cols: int | None = None,
        initial_cursor: tuple[int, int] | None = None,
        tab_size: int = TAB_SIZE,
    ) -> VimGrid:
        """Build a grid from text lines.

        The width is ``cols`` when given, otherwise the widest line after tab
        expansion. Lines wider than the grid are trimmed.
        """
        expanded = [expand_line(line, tab_size) for line in lines]
        widest = max((len(cells) for cells in expanded), default=0)
        grid = cls(len(expanded), cols if cols is not None else widest)
        for r, cells in enumerate(expanded):
            for c, cell in enumerate(_fit_row(cells, grid.num_cols)):
                grid.set(r, c, cell)
        if initial_cursor is not None:
            grid.set_cursor(*initial_cursor)
        return grid

    # -- dimensions ----------------------------------------------------------

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def num_cols(self) -> int:
        return self._num_cols

    # -- cell access ---------------------------------------------------------

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self._num_rows and 0 <= c < self._num_cols

    def get(self, r: int, c: int) -> Cell:
        if not self.in_bounds(r, c):
            raise OutOfBoundsError(r, c)
        return self._grid[r][c]

    def set(self, r: int, c: int, cell: Cell) -> None:
        """Write a cell. Writes outside the grid are ignored."""
        if not self.in_bounds(r, c):
            return
        if len(cell.char) > 1:
            cell = replace(cell, char=cell.char[:1])
        self._grid[r][c] = cell

    def is_empty(self, r: int, c: int) -> bool:
        if not self.in_bounds(r, c):
            return True
        return self._grid[r][c].is_empty

    def rightmost_occupied(self, row: int) -> int:
        """Return the highest non-empty column of ``row``, or -1."""
        if not self.in_bounds(row, 0):
            return -1
        cells = self._grid[row]
        for c in range(self._num_cols - 1, -1, -1):
            if not cells[c].is_empty:
                return c
        return -1

    def is_row_empty(self, row: int) -> bool:
        return self.rightmost_occupied(row) < 0

    @property
    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self._grid)

    def get_grid(self) -> tuple[tuple[Cell, ...], ...]:
        return self.rows

    def to_lines(self) -> list[str]:
        """Render each row as text up to its last occupied cell."""
        lines = []
        for r, row in enumerate(self._grid):
            end = self.rightmost_occupied(r) + 1
            lines.append("".join(cell.display_char for cell in row[:end]))
        return lines

    # -- tab runs ------------------------------------------------------------

    def tab_run_bounds(self, row: int, col: int) -> tuple[int, int] | None:
        """Return ``(start, end)`` of the tab run covering a cell, if any."""
        if not self.in_bounds(row, col) or not self._grid[row][col].is_tab:
            return None
        cells = self._grid[row]
        start = col
        while (
            start > 0
            and cells[start].kind is not CellKind.TAB_LEFT
            and cells[start - 1].is_tab
        ):
            start -= 1
        end = col
        while (
            end < self._num_cols - 1
            and cells[end].kind is not CellKind.TAB_RIGHT
            and cells[end + 1].is_tab
        ):
            end += 1
        return start, end

    def snap_to_tab_boundary(self, row: int, col: int) -> int:
        """Move a column inside a tab run to the run edge the mode rests on.

        Normal mode rests on the right cell, Insert mode on the left one.
        """
        bounds = self.tab_run_bounds(row, col)
        if bounds is None:
            return col
        return bounds[0] if self._mode is Mode.INSERT else bounds[1]

    # -- cursor --------------------------------------------------------------

    def _content_limit(self, row: int) -> int:
        rightmost = self.rightmost_occupied(row)
        if rightmost < 0:
            return 0
        return rightmost + 1 if self._mode is Mode.INSERT else rightmost

    def max_cursor_col(self, row: int) -> int:
        """Highest column the cursor may show on ``row`` in the current mode."""
        return min(self._content_limit(row), self._num_cols - 1)

    def get_cursor(self) -> Position:
        row = self._cursor_row
        col = _clamp(self._virtual_col, 0, self.max_cursor_col(row))
        return Position(row, self.snap_to_tab_boundary(row, col))

    def get_edit_cursor(self) -> Position:
        """The cursor position edits and horizontal moves start from.

        Same as :meth:`get_cursor`, except that in Insert mode the column one
        past a row that fills the grid is kept rather than capped to the last
        column. Typing there appends instead of landing before the last
        character.
        """
        row = self._cursor_row
        col = _clamp(self._virtual_col, 0, self._content_limit(row))
        return Position(row, self.snap_to_tab_boundary(row, col))

    def get_virtual_column(self) -> int:
        return self._virtual_col

    def set_cursor(self, row: int, col: int, update_virtual: bool = True) -> None:
        """Place the cursor, clamping to the grid.

        Insert mode may address the column just past the last one. The grid
        keeps its width; :meth:`get_cursor` shows such a position on the last
        column and :meth:`get_edit_cursor` reports it as is.
        """
        r = _clamp(row, 0, self._num_rows - 1)
        max_col = self._num_cols if self._mode is Mode.INSERT else self._num_cols - 1
        c = _clamp(col, 0, max_col)
        self._cursor_row = r
        self._cursor_col = c
        if update_virtual:
            self._virtual_col = c

    def move_cursor_by(self, dr: int, dc: int) -> None:
        """Move relative to the stored cursor; horizontal moves reset the virtual column."""
        r = _clamp(self._cursor_row + dr, 0, self._num_rows - 1)
        c = _clamp(self._cursor_col + dc, 0, self._num_cols - 1)
        self._cursor_row = r
        self._cursor_col = c
        if dc != 0:
            self._virtual_col = c

    # -- mode ----------------------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self._mode

    @mode.setter
    def mode(self, mode: Mode) -> None:
        self.set_mode(mode)

    def get_mode(self) -> Mode:
        return self._mode

    def set_mode(self, mode: Mode) -> None:
        if mode is not self._mode:
            logger.debug("Mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode

    # -- structure -----------------------------------------------------------

    def insert_row(self, at: int | None = None) -> None:
        """Insert an empty row before index ``at`` (default: at the bottom)."""
        index = self._num_rows if at is None else _clamp(at, 0, self._num_rows)
        self._grid.insert(index, [EMPTY_CELL] * self._num_cols)
        self._num_rows += 1

    def append_row(self) -> None:
        self.insert_row()

    def append_column(self) -> None:
        self.ensure_columns(self._num_cols + 1)

    def ensure_columns(self, count: int) -> None:
        """Widen every row until the grid has at least ``count`` columns."""
        extra = count - self._num_cols
        if extra <= 0:
            return
        for row in self._grid:
            row.extend([EMPTY_CELL] * extra)
        self._num_cols = count
        logger.debug("Grid widened to %s columns", count)

    def remove_row(self, at: int) -> None:
        """Delete row ``at``. The last remaining row is never removed."""
        if not 0 <= at < self._num_rows or self._num_rows <= 1:
            return
        del self._grid[at]
        self._num_rows -= 1
        if self._cursor_row >= self._num_rows:
            self._cursor_row = self._num_rows - 1
        logger.debug("Removed row %s, %s rows left", at, self._num_rows)
