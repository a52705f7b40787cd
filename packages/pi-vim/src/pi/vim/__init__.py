"""pi-vim: modal Vim-style editing over a fixed-size character grid."""

# Cells
from pi.vim.cell import EMPTY_CELL, Cell, CellKind, tab_run

# Command parsing
from pi.vim.command_parser import CommandParser, Discard, Execute, Pending

# Configuration
from pi.vim.config import TAB_SIZE, EngineConfig

# Command interpreter
from pi.vim.controller import VimController

# Buffer
from pi.vim.grid import Mode, OutOfBoundsError, Position, VimGrid

# Command vocabulary
from pi.vim.keybindings import (
    DEFAULT_NORMAL_BINDINGS,
    CommandVocabulary,
    NormalAction,
    get_command_vocabulary,
    set_command_vocabulary,
)

# Key events
from pi.vim.keys import Key, KeyEvent, decode_terminal_input, parse_key_id

__all__ = [
    # Cells
    "Cell",
    "CellKind",
    "EMPTY_CELL",
    "tab_run",
    # Command parsing
    "CommandParser",
    "Discard",
    "Execute",
    "Pending",
    # Configuration
    "EngineConfig",
    "TAB_SIZE",
    # Command interpreter
    "VimController",
    # Buffer
    "Mode",
    "OutOfBoundsError",
    "Position",
    "VimGrid",
    # Command vocabulary
    "CommandVocabulary",
    "DEFAULT_NORMAL_BINDINGS",
    "NormalAction",
    "get_command_vocabulary",
    "set_command_vocabulary",
    # Key events
    "Key",
    "KeyEvent",
    "decode_terminal_input",
    "parse_key_id",
]
