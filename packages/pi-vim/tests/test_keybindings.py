"""Tests for pi.vim.keybindings -- the Normal-mode command vocabulary."""

from __future__ import annotations

from pi.vim.keybindings import (
    DEFAULT_NORMAL_BINDINGS,
    NORMAL_ACTIONS,
    CommandVocabulary,
    get_command_vocabulary,
    set_command_vocabulary,
)


class TestDefaultNormalBindings:
    """DEFAULT_NORMAL_BINDINGS covers the whole command vocabulary."""

    def test_every_action_is_bound(self) -> None:
        assert set(DEFAULT_NORMAL_BINDINGS) == set(NORMAL_ACTIONS)

    def test_vocabulary_tokens(self) -> None:
        vocab = CommandVocabulary()
        for token in [
            "h", "j", "k", "l", "0", "$", "i", "I", "x", "dd", "gg", "G",
            "H", "M", "L", "gj", "gk", "w", "W", "e", "E", "b", "B",
            "ge", "gE", "r",
        ]:
            assert vocab.action_for(token) is not None, f"Unbound token: {token}"

    def test_display_line_motions_share_actions(self) -> None:
        vocab = CommandVocabulary()
        assert vocab.action_for("gj") == vocab.action_for("j") == "cursorDown"
        assert vocab.action_for("gk") == vocab.action_for("k") == "cursorUp"


class TestCommandVocabulary:
    def test_unknown_token(self) -> None:
        assert CommandVocabulary().action_for("q") is None

    def test_prefixes(self) -> None:
        vocab = CommandVocabulary()
        for prefix in ("d", "g", "r", "y", "c"):
            assert vocab.is_prefix(prefix)
        assert not vocab.is_prefix("dd")
        assert not vocab.is_prefix("q")

    def test_replace_takes_argument(self) -> None:
        vocab = CommandVocabulary()
        assert vocab.takes_argument("r")
        assert not vocab.takes_argument("x")

    def test_get_tokens(self) -> None:
        vocab = CommandVocabulary()
        assert vocab.get_tokens("cursorDown") == ["j", "gj"]
        assert vocab.get_tokens("deleteLine") == ["dd"]

    def test_override_replaces_tokens(self) -> None:
        vocab = CommandVocabulary({"deleteChar": "X"})
        assert vocab.action_for("X") == "deleteChar"
        assert vocab.action_for("x") is None
        assert vocab.action_for("dd") == "deleteLine"

    def test_multi_key_override_adds_prefix(self) -> None:
        vocab = CommandVocabulary({"gotoFirstLine": "zz"})
        assert vocab.is_prefix("z")

    def test_set_config_rebuilds(self) -> None:
        vocab = CommandVocabulary()
        vocab.set_config({"insert": ["i", "a"]})
        assert vocab.action_for("a") == "insert"
        vocab.set_config({})
        assert vocab.action_for("a") is None


class TestGlobalVocabulary:
    """get_command_vocabulary / set_command_vocabulary manage a global instance."""

    def teardown_method(self) -> None:
        import pi.vim.keybindings as kb_module
        kb_module._global_command_vocabulary = None

    def test_get_returns_same_instance(self) -> None:
        assert get_command_vocabulary() is get_command_vocabulary()

    def test_set_replaces_global(self) -> None:
        custom = CommandVocabulary({"deleteChar": "X"})
        set_command_vocabulary(custom)
        assert get_command_vocabulary() is custom
