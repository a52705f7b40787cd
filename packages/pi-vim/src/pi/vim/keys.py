"""Key events, key identifiers and raw terminal input decoding.

Key names follow the DOM ``KeyboardEvent.key`` vocabulary (``"ArrowLeft"``,
``"Escape"``...) since that is what browser hosts hand over; printable keys
are the character itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from pi.vim.utils import is_printable_key


class Key:
    """Named key constants."""

    escape = "Escape"
    enter = "Enter"
    tab = "Tab"
    backspace = "Backspace"
    left = "ArrowLeft"
    right = "ArrowRight"
    up = "ArrowUp"
    down = "ArrowDown"


ARROW_KEYS = frozenset({Key.left, Key.right, Key.up, Key.down})

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
    "meta": 8,
}

# Lower-case key-id names accepted by ``parse_key_id``.
_KEY_ALIASES: dict[str, str] = {
    "escape": Key.escape,
    "esc": Key.escape,
    "enter": Key.enter,
    "return": Key.enter,
    "tab": Key.tab,
    "backspace": Key.backspace,
    "left": Key.left,
    "right": Key.right,
    "up": Key.up,
    "down": Key.down,
    "space": " ",
    "plus": "+",
}

# Shifted digit row on a US layout. Some hosts report the unshifted key.
_SHIFTED_DIGITS: dict[str, str] = {
    "1": "!", "2": "@", "3": "#", "4": "$", "5": "%",
    "6": "^", "7": "&", "8": "*", "9": "(", "0": ")",
}

_ARROW_FINALS: dict[str, str] = {
    "A": Key.up,
    "B": Key.down,
    "C": Key.right,
    "D": Key.left,
}


# ---------------------------------------------------------------------------
# KeyEvent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    """One key press as delivered by the host."""

    key: str
    ctrl: bool = False
    meta: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def has_command_modifier(self) -> bool:
        """Ctrl, meta and alt chords belong to the host, not the editor."""
        return self.ctrl or self.meta or self.alt

    @property
    def normalized_key(self) -> str:
        """The key with shifted digits resolved (``shift+4`` is ``$``)."""
        if self.shift and self.key in _SHIFTED_DIGITS:
            return _SHIFTED_DIGITS[self.key]
        return self.key

    @property
    def is_printable(self) -> bool:
        return is_printable_key(self.normalized_key)

    @property
    def is_arrow(self) -> bool:
        return self.key in ARROW_KEYS

    @classmethod
    def from_key_id(cls, key_id: str) -> KeyEvent | None:
        parsed = parse_key_id(key_id)
        if parsed is None:
            return None
        key, modifiers = parsed
        return cls(
            key=key,
            shift=bool(modifiers & MODIFIERS["shift"]),
            alt=bool(modifiers & MODIFIERS["alt"]),
            ctrl=bool(modifiers & MODIFIERS["ctrl"]),
            meta=bool(modifiers & MODIFIERS["meta"]),
        )

    @classmethod
    def from_terminal(cls, data: str) -> KeyEvent | None:
        """Decode raw terminal input into an event, or ``None`` if unknown."""
        return decode_terminal_input(data)


# ---------------------------------------------------------------------------
# Key identifiers
# ---------------------------------------------------------------------------


def parse_key_id(key_id: str) -> tuple[str, int] | None:
    """Split a key identifier like ``"ctrl+shift+a"`` into ``(key, modifiers)``.

    ``modifiers`` is a bitmask (shift=1, alt=2, ctrl=4, meta=8). Named keys
    are matched case-insensitively and mapped to their event names. Returns
    ``None`` when no base key is present.
    """
    if not key_id:
        return None
    if key_id == "+":
        return "+", 0

    parts = key_id.split("+")
    modifier = 0
    key_parts: list[str] = []

    for part in parts:
        lower = part.lower()
        if lower in MODIFIERS:
            modifier |= MODIFIERS[lower]
        else:
            key_parts.append(part)

    key = "+".join(key_parts)
    if not key:
        return None

    return _KEY_ALIASES.get(key.lower(), key), modifier


# ---------------------------------------------------------------------------
# Terminal input
# ---------------------------------------------------------------------------


def decode_terminal_input(data: str) -> KeyEvent | None:
    """Map legacy terminal bytes onto a :class:`KeyEvent`.

    Handles printable characters, ESC, CR/LF, TAB, DEL/BS, CSI and SS3
    arrow sequences, C0 control letters and ESC-prefixed alt keys.
    """
    if not data:
        return None

    if data == "\x1b":
        return KeyEvent(Key.escape)
    if data in ("\r", "\n"):
        return KeyEvent(Key.enter)
    if data == "\t":
        return KeyEvent(Key.tab)
    if data in ("\x7f", "\x08"):
        return KeyEvent(Key.backspace)

    # CSI / SS3 arrows: ESC [ A, ESC O A, ESC [ 1 ; <mod> A
    if len(data) >= 3 and data[0] == "\x1b" and data[1] in "[O":
        final = data[-1]
        arrow = _ARROW_FINALS.get(final)
        if arrow is None:
            return None
        params = data[2:-1]
        if not params:
            return KeyEvent(arrow)
        _, _, mod_text = params.partition(";")
        if not mod_text.isdigit():
            return None
        mod = int(mod_text) - 1
        return KeyEvent(
            arrow,
            shift=bool(mod & MODIFIERS["shift"]),
            alt=bool(mod & MODIFIERS["alt"]),
            ctrl=bool(mod & MODIFIERS["ctrl"]),
        )

    # Alt + key arrives as ESC followed by the key
    if len(data) == 2 and data[0] == "\x1b":
        inner = decode_terminal_input(data[1])
        if inner is None:
            return None
        return KeyEvent(inner.key, ctrl=inner.ctrl, alt=True)

    if len(data) == 1:
        code = ord(data)
        if 1 <= code <= 26:
            return KeyEvent(chr(code + 96), ctrl=True)
        if is_printable_key(data):
            return KeyEvent(data)

    return None
