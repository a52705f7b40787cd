"""Command interpreter: turns key events into buffer motions and edits.

The controller owns no text of its own. It reads and mutates the
:class:`VimGrid` it was given, one key event at a time, and keeps only the
partially typed Normal-mode command between events.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from pi.vim.cell import EMPTY_CELL, Cell, tab_run
from pi.vim.command_parser import CommandParser, Discard, Execute
from pi.vim.config import EngineConfig
from pi.vim.grid import Mode, Position, VimGrid
from pi.vim.keybindings import NORMAL_ACTIONS, CommandVocabulary, NormalAction
from pi.vim.keys import Key, KeyEvent
from pi.vim.motions import (
    first_non_blank,
    word_backward,
    word_end,
    word_end_backward,
    word_forward,
)

logger = logging.getLogger(__name__)

ActionHandler = Callable[[int, Optional[str]], None]
WordMotion = Callable[[VimGrid, int, int, bool], Optional[Position]]


class VimController:
    """Drives a :class:`VimGrid` from key events."""

    def __init__(
        self,
        grid: VimGrid,
        config: EngineConfig | None = None,
        vocabulary: CommandVocabulary | None = None,
    ) -> None:
        self.grid = grid
        self.config = config or EngineConfig()
        self._parser = CommandParser(vocabulary, max_count=self.config.max_count)
        self._actions: dict[NormalAction, ActionHandler] = {
            # Cursor movement
            "cursorLeft": lambda n, _: self._repeat(n, self._move_left),
            "cursorRight": lambda n, _: self._repeat(n, self._move_right),
            "cursorDown": lambda n, _: self._move_vertical(n),
            "cursorUp": lambda n, _: self._move_vertical(-n),
            "lineStart": lambda n, _: self.grid.move_cursor_by(0, -self.grid.num_cols),
            "lineEnd": lambda n, _: self.grid.move_cursor_by(0, self.grid.num_cols),
            # Word motions
            "wordForward": lambda n, _: self._word_motion(word_forward, n, False),
            "bigWordForward": lambda n, _: self._word_motion(word_forward, n, True),
            "wordEnd": lambda n, _: self._word_motion(word_end, n, False),
            "bigWordEnd": lambda n, _: self._word_motion(word_end, n, True),
            "wordBackward": lambda n, _: self._word_motion(word_backward, n, False),
            "bigWordBackward": lambda n, _: self._word_motion(word_backward, n, True),
            "wordEndBackward": lambda n, _: self._word_motion(word_end_backward, n, False),
            "bigWordEndBackward": lambda n, _: self._word_motion(word_end_backward, n, True),
            # Line jumps
            "gotoFirstLine": lambda n, _: self._jump_to_row(n - 1),
            "gotoLastLine": lambda n, _: self._jump_to_row(
                n - 1 if n > 1 else self.grid.num_rows - 1
            ),
            "screenTop": lambda n, _: self._jump_to_row(n - 1),
            "screenMiddle": lambda n, _: self._jump_to_row((self.grid.num_rows - 1) // 2),
            "screenBottom": lambda n, _: self._jump_to_row(self.grid.num_rows - n),
            # Mode switches
            "insert": lambda n, _: self._enter_mode(Mode.INSERT),
            "insertLineStart": lambda n, _: self._insert_at_line_start(),
            # Edits
            "deleteChar": lambda n, _: self._repeat(n, self._delete_under_cursor),
            "deleteLine": lambda n, _: self._delete_lines(n),
            "replaceChar": lambda n, arg: self._replace_chars(n, arg or ""),
        }
        missing = set(NORMAL_ACTIONS) - set(self._actions)
        if missing:
            raise RuntimeError(f"No handler for actions: {sorted(missing)}")

    @property
    def mode(self) -> Mode:
        return self.grid.mode

    @property
    def pending_command(self) -> str:
        """Keys typed so far towards an unfinished Normal-mode command."""
        return self._parser.buffer

    # ------------------------------------------------------------------
    # Input dispatch
    # ------------------------------------------------------------------

    def handle_input(self, event: KeyEvent | str) -> None:
        """Process one key event. A bare string is a key with no modifiers."""
        if isinstance(event, str):
            event = KeyEvent(event)

        if event.has_command_modifier:
            logger.debug("Ignoring modified key %s", event.key)
            return

        if event.is_arrow:
            self._parser.reset()
            self._handle_arrow(event.key)
            return

        if self.grid.mode is Mode.INSERT:
            self._handle_insert_key(event)
        else:
            self._handle_normal_key(event)

    def _handle_arrow(self, key: str) -> None:
        if key == Key.left:
            self._move_left()
        elif key == Key.right:
            self._move_right()
        elif key == Key.up:
            self._move_vertical(-1)
        elif key == Key.down:
            self._move_vertical(1)

    def _handle_insert_key(self, event: KeyEvent) -> None:
        key = event.normalized_key
        if key == Key.escape:
            self._enter_mode(Mode.NORMAL)
            return
        if key == Key.enter:
            self._split_line()
            return
        if key == Key.tab:
            self._insert_tab()
            return
        if key == Key.backspace:
            self._backspace()
            return
        if event.is_printable:
            self._insert_char(key)

    def _handle_normal_key(self, event: KeyEvent) -> None:
        key = event.normalized_key
        if key == Key.escape:
            self._parser.reset()
            return
        if key == Key.enter:
            self._parser.reset()
            self._move_vertical(1)
            return
        if not event.is_printable:
            return

        outcome = self._parser.feed(key)
        if isinstance(outcome, Execute):
            self._actions[outcome.action](outcome.count, outcome.argument)
        elif isinstance(outcome, Discard):
            logger.debug("Command %r discarded", outcome.text)

    # ------------------------------------------------------------------
    # Mode
    # ------------------------------------------------------------------

    def _pin_cursor(self) -> None:
        row, col = self.grid.get_edit_cursor()
        self.grid.set_cursor(row, col)

    def _enter_mode(self, mode: Mode) -> None:
        self._pin_cursor()
        self.grid.set_mode(mode)
        self._pin_cursor()

    def _insert_at_line_start(self) -> None:
        self._enter_mode(Mode.INSERT)
        row, _ = self.grid.get_cursor()
        self.grid.set_cursor(row, 0)

    # ------------------------------------------------------------------
    # Motions
    # ------------------------------------------------------------------

    @staticmethod
    def _repeat(count: int, step: Callable[[], bool]) -> None:
        for _ in range(count):
            if not step():
                break

    def _move_left(self) -> bool:
        grid = self.grid
        row, col = grid.get_edit_cursor()
        bounds = grid.tab_run_bounds(row, col)
        target = (bounds[0] if bounds else col) - 1
        if target < 0:
            return False
        grid.set_cursor(row, grid.snap_to_tab_boundary(row, target))
        return True

    def _move_right(self) -> bool:
        grid = self.grid
        row, col = grid.get_edit_cursor()
        rightmost = grid.rightmost_occupied(row)
        if rightmost < 0:
            return False
        bounds = grid.tab_run_bounds(row, col)
        target = (bounds[1] if bounds else col) + 1
        limit = rightmost + 1 if grid.mode is Mode.INSERT else rightmost
        if target > limit:
            return False
        grid.set_cursor(row, grid.snap_to_tab_boundary(row, target))
        return True

    def _move_vertical(self, delta: int) -> None:
        grid = self.grid
        row, _ = grid.get_cursor()
        target = max(0, min(grid.num_rows - 1, row + delta))
        if target == row:
            return
        col = max(0, min(grid.get_virtual_column(), grid.max_cursor_col(target)))
        col = grid.snap_to_tab_boundary(target, col)
        grid.set_cursor(target, col, update_virtual=False)

    def _word_motion(self, motion: WordMotion, count: int, big: bool) -> None:
        for _ in range(count):
            row, col = self.grid.get_cursor()
            target = motion(self.grid, row, col, big)
            if target is None:
                break
            self.grid.set_cursor(*target)

    def _jump_to_row(self, row: int) -> None:
        grid = self.grid
        row = max(0, min(grid.num_rows - 1, row))
        grid.set_cursor(row, first_non_blank(grid, row))

    # ------------------------------------------------------------------
    # Cell shifting
    # ------------------------------------------------------------------

    def _cell_or_empty(self, row: int, col: int) -> Cell:
        if self.grid.in_bounds(row, col):
            return self.grid.get(row, col)
        return EMPTY_CELL

    def _shift_left(self, row: int, start: int, width: int) -> None:
        """Delete ``width`` cells at ``start``, pulling the rest of the row left."""
        rightmost = self.grid.rightmost_occupied(row)
        for c in range(start, rightmost + 1):
            self.grid.set(row, c, self._cell_or_empty(row, c + width))

    def _shift_right(self, row: int, start: int, width: int) -> None:
        """Open ``width`` empty cells at ``start``. The grid must already be wide enough."""
        rightmost = self.grid.rightmost_occupied(row)
        for c in range(rightmost, start - 1, -1):
            self.grid.set(row, c + width, self.grid.get(row, c))
        for c in range(start, start + width):
            self.grid.set(row, c, EMPTY_CELL)

    # ------------------------------------------------------------------
    # Insert-mode edits
    # ------------------------------------------------------------------

    def _insert_char(self, char: str) -> None:
        grid = self.grid
        row, col = grid.get_edit_cursor()
        rightmost = grid.rightmost_occupied(row)
        grid.ensure_columns(max(rightmost, col) + 2)
        self._shift_right(row, col, 1)
        grid.set(row, col, Cell(char))
        grid.set_cursor(row, col + 1)

    def _insert_tab(self) -> None:
        grid = self.grid
        tab_size = self.config.tab_size
        row, col = grid.get_edit_cursor()
        next_stop = (col // tab_size + 1) * tab_size
        distance = next_stop - col
        if distance == 1:
            self._insert_char(" ")
            return
        rightmost = grid.rightmost_occupied(row)
        grid.ensure_columns(max(next_stop, rightmost + distance) + 1)
        self._shift_right(row, col, distance)
        for offset, cell in enumerate(tab_run(distance)):
            grid.set(row, col + offset, cell)
        grid.set_cursor(row, next_stop)

    def _split_line(self) -> None:
        grid = self.grid
        row, col = grid.get_edit_cursor()
        rightmost = grid.rightmost_occupied(row)
        grid.insert_row(row + 1)
        for c in range(col, rightmost + 1):
            grid.set(row + 1, c - col, grid.get(row, c))
            grid.set(row, c, EMPTY_CELL)
        grid.set_cursor(row + 1, 0)

    def _backspace(self) -> None:
        grid = self.grid
        row, col = grid.get_edit_cursor()
        if col == 0:
            if row > 0:
                self._join_with_previous(row)
            return
        bounds = grid.tab_run_bounds(row, col - 1)
        start = bounds[0] if bounds else col - 1
        self._shift_left(row, start, col - start)
        grid.set_cursor(row, start)

    def _join_with_previous(self, row: int) -> None:
        grid = self.grid
        join_col = grid.rightmost_occupied(row - 1) + 1
        rightmost = grid.rightmost_occupied(row)
        grid.ensure_columns(join_col + rightmost + 1)
        for c in range(rightmost + 1):
            grid.set(row - 1, join_col + c, grid.get(row, c))
        grid.remove_row(row)
        grid.set_cursor(row - 1, join_col)

    # ------------------------------------------------------------------
    # Normal-mode edits
    # ------------------------------------------------------------------

    def _delete_under_cursor(self) -> bool:
        grid = self.grid
        row, col = grid.get_cursor()
        if col > grid.rightmost_occupied(row):
            return False
        bounds = grid.tab_run_bounds(row, col)
        start, end = bounds if bounds else (col, col)
        self._shift_left(row, start, end - start + 1)
        grid.set_cursor(row, start)
        return True

    def _replace_chars(self, count: int, char: str) -> None:
        grid = self.grid
        row, col = grid.get_cursor()
        if not char or not grid.in_bounds(row, col + count - 1):
            logger.debug("Replace of %s cells at (%s, %s) does not fit", count, row, col)
            return
        for i in range(count):
            bounds = grid.tab_run_bounds(row, col)
            if bounds is not None:
                start, end = bounds
                self._shift_left(row, start + 1, end - start)
                col = start
            grid.set(row, col, Cell(char))
            if i < count - 1:
                col += 1
        grid.set_cursor(row, col)

    def _delete_lines(self, count: int) -> None:
        grid = self.grid
        for _ in range(count):
            row, _ = grid.get_cursor()
            if grid.num_rows == 1:
                for c in range(grid.num_cols):
                    grid.set(0, c, EMPTY_CELL)
                break
            grid.remove_row(row)
