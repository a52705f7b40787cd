"""Normal-mode command vocabulary."""

from __future__ import annotations

from typing import Literal, get_args

NormalAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorDown",
    "cursorUp",
    "lineStart",
    "lineEnd",
    # Word motions
    "wordForward",
    "bigWordForward",
    "wordEnd",
    "bigWordEnd",
    "wordBackward",
    "bigWordBackward",
    "wordEndBackward",
    "bigWordEndBackward",
    # Line jumps
    "gotoFirstLine",
    "gotoLastLine",
    "screenTop",
    "screenMiddle",
    "screenBottom",
    # Mode switches
    "insert",
    "insertLineStart",
    # Edits
    "deleteChar",
    "deleteLine",
    "replaceChar",
]

NORMAL_ACTIONS: tuple[NormalAction, ...] = get_args(NormalAction)

CommandVocabularyConfig = dict[NormalAction, str | list[str]]

DEFAULT_NORMAL_BINDINGS: dict[NormalAction, str | list[str]] = {
    # Cursor movement
    "cursorLeft": "h",
    "cursorRight": "l",
    "cursorDown": ["j", "gj"],
    "cursorUp": ["k", "gk"],
    "lineStart": "0",
    "lineEnd": "$",
    # Word motions
    "wordForward": "w",
    "bigWordForward": "W",
    "wordEnd": "e",
    "bigWordEnd": "E",
    "wordBackward": "b",
    "bigWordBackward": "B",
    "wordEndBackward": "ge",
    "bigWordEndBackward": "gE",
    # Line jumps
    "gotoFirstLine": "gg",
    "gotoLastLine": "G",
    "screenTop": "H",
    "screenMiddle": "M",
    "screenBottom": "L",
    # Mode switches
    "insert": "i",
    "insertLineStart": "I",
    # Edits
    "deleteChar": "x",
    "deleteLine": "dd",
    "replaceChar": "r",
}

# Operator keys that are always worth waiting on, bound or not.
PENDING_PREFIXES = frozenset({"d", "y", "c", "g", "r"})

# Actions whose token is followed by one literal character.
ARGUMENT_ACTIONS: frozenset[NormalAction] = frozenset({"replaceChar"})


class CommandVocabulary:
    """Maps command tokens to Normal-mode actions."""

    def __init__(self, config: CommandVocabularyConfig | None = None) -> None:
        self._action_to_tokens: dict[NormalAction, list[str]] = {}
        self._token_to_action: dict[str, NormalAction] = {}
        self._prefixes: set[str] = set()
        self._build_maps(config or {})

    def _build_maps(self, config: CommandVocabularyConfig) -> None:
        self._action_to_tokens.clear()

        # Start with defaults
        for action, tokens in DEFAULT_NORMAL_BINDINGS.items():
            token_list = tokens if isinstance(tokens, list) else [tokens]
            self._action_to_tokens[action] = list(token_list)

        # Override with user config
        for action, tokens in config.items():
            token_list = tokens if isinstance(tokens, list) else [tokens]
            self._action_to_tokens[action] = list(token_list)

        self._token_to_action = {
            token: action
            for action, tokens in self._action_to_tokens.items()
            for token in tokens
        }
        self._prefixes = set(PENDING_PREFIXES)
        for token, action in self._token_to_action.items():
            self._prefixes.update(token[:i] for i in range(1, len(token)))
            if action in ARGUMENT_ACTIONS:
                self._prefixes.add(token)

    def action_for(self, token: str) -> NormalAction | None:
        """Return the action bound to a complete token."""
        return self._token_to_action.get(token)

    def is_prefix(self, token: str) -> bool:
        """Whether ``token`` may still grow into a command."""
        return token in self._prefixes

    def takes_argument(self, token: str) -> bool:
        action = self._token_to_action.get(token)
        return action is not None and action in ARGUMENT_ACTIONS

    def get_tokens(self, action: NormalAction) -> list[str]:
        """Get tokens bound to an action."""
        return self._action_to_tokens.get(action, [])

    def set_config(self, config: CommandVocabularyConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_command_vocabulary: CommandVocabulary | None = None


def get_command_vocabulary() -> CommandVocabulary:
    global _global_command_vocabulary
    if _global_command_vocabulary is None:
        _global_command_vocabulary = CommandVocabulary()
    return _global_command_vocabulary


def set_command_vocabulary(vocabulary: CommandVocabulary) -> None:
    global _global_command_vocabulary
    _global_command_vocabulary = vocabulary
