"""Tests for pi.vim.keys -- key events, key ids and terminal decoding."""

from __future__ import annotations

from pi.vim.keys import Key, KeyEvent, decode_terminal_input, parse_key_id


# ---------------------------------------------------------------------------
# KeyEvent
# ---------------------------------------------------------------------------


class TestKeyEvent:
    def test_plain_key(self) -> None:
        event = KeyEvent("a")
        assert event.is_printable
        assert not event.has_command_modifier
        assert not event.is_arrow

    def test_command_modifiers(self) -> None:
        assert KeyEvent("a", ctrl=True).has_command_modifier
        assert KeyEvent("a", meta=True).has_command_modifier
        assert KeyEvent("a", alt=True).has_command_modifier
        assert not KeyEvent("A", shift=True).has_command_modifier

    def test_shift_four_is_dollar(self) -> None:
        assert KeyEvent("4", shift=True).normalized_key == "$"
        assert KeyEvent("4").normalized_key == "4"
        assert KeyEvent("$", shift=True).normalized_key == "$"

    def test_named_keys_are_not_printable(self) -> None:
        for key in (Key.escape, Key.enter, Key.tab, Key.backspace, Key.left):
            assert not KeyEvent(key).is_printable

    def test_non_ascii_is_not_printable(self) -> None:
        assert not KeyEvent("é").is_printable

    def test_arrows(self) -> None:
        for key in (Key.left, Key.right, Key.up, Key.down):
            assert KeyEvent(key).is_arrow


# ---------------------------------------------------------------------------
# parse_key_id
# ---------------------------------------------------------------------------


class TestParseKeyId:
    def test_plain_character(self) -> None:
        assert parse_key_id("x") == ("x", 0)

    def test_modifier_bits(self) -> None:
        assert parse_key_id("ctrl+shift+a") == ("a", 5)
        assert parse_key_id("alt+x") == ("x", 2)
        assert parse_key_id("meta+x") == ("x", 8)

    def test_named_keys_map_to_event_names(self) -> None:
        assert parse_key_id("escape") == (Key.escape, 0)
        assert parse_key_id("Up") == (Key.up, 0)
        assert parse_key_id("space") == (" ", 0)

    def test_plus_key(self) -> None:
        assert parse_key_id("+") == ("+", 0)
        assert parse_key_id("shift++") == ("+", 1)

    def test_empty_and_modifier_only(self) -> None:
        assert parse_key_id("") is None
        assert parse_key_id("ctrl") is None

    def test_from_key_id(self) -> None:
        event = KeyEvent.from_key_id("shift+4")
        assert event == KeyEvent("4", shift=True)
        assert event is not None and event.normalized_key == "$"
        assert KeyEvent.from_key_id("") is None


# ---------------------------------------------------------------------------
# Terminal input
# ---------------------------------------------------------------------------


class TestDecodeTerminalInput:
    def test_printable(self) -> None:
        assert decode_terminal_input("w") == KeyEvent("w")
        assert decode_terminal_input("$") == KeyEvent("$")

    def test_control_bytes(self) -> None:
        assert decode_terminal_input("\x1b") == KeyEvent(Key.escape)
        assert decode_terminal_input("\r") == KeyEvent(Key.enter)
        assert decode_terminal_input("\n") == KeyEvent(Key.enter)
        assert decode_terminal_input("\t") == KeyEvent(Key.tab)
        assert decode_terminal_input("\x7f") == KeyEvent(Key.backspace)

    def test_ctrl_letters(self) -> None:
        assert decode_terminal_input("\x01") == KeyEvent("a", ctrl=True)
        assert decode_terminal_input("\x17") == KeyEvent("w", ctrl=True)

    def test_arrows(self) -> None:
        assert decode_terminal_input("\x1b[A") == KeyEvent(Key.up)
        assert decode_terminal_input("\x1b[D") == KeyEvent(Key.left)
        assert decode_terminal_input("\x1bOC") == KeyEvent(Key.right)

    def test_modified_arrow(self) -> None:
        assert decode_terminal_input("\x1b[1;5B") == KeyEvent(Key.down, ctrl=True)
        assert decode_terminal_input("\x1b[1;2A") == KeyEvent(Key.up, shift=True)

    def test_alt_prefix(self) -> None:
        assert decode_terminal_input("\x1bb") == KeyEvent("b", alt=True)

    def test_unknown_sequences(self) -> None:
        assert decode_terminal_input("") is None
        assert decode_terminal_input("\x1b[15~") is None
        assert decode_terminal_input("ab") is None

    def test_from_terminal_alias(self) -> None:
        assert KeyEvent.from_terminal("\x1b[C") == KeyEvent(Key.right)
