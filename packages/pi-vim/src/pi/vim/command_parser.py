"""Incremental parser for counted Normal-mode commands.

Keys are fed one at a time. The accumulated text is an optional count
(``[1-9][0-9]*``) followed by a command token; each key resolves to one of
three outcomes: the command is complete, more keys are needed, or the text
can never become a command and is thrown away.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from pi.vim.config import MAX_COUNT
from pi.vim.keybindings import CommandVocabulary, NormalAction, get_command_vocabulary
from pi.vim.utils import is_printable_key

logger = logging.getLogger(__name__)

_COUNT_RE = re.compile(r"[1-9][0-9]*")


@dataclass(frozen=True)
class Execute:
    action: NormalAction
    count: int = 1
    argument: str | None = None


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Discard:
    text: str = ""


ParseOutcome = Union[Execute, Pending, Discard]


class CommandParser:
    """Accumulates Normal-mode keys until they form a command."""

    def __init__(
        self,
        vocabulary: CommandVocabulary | None = None,
        max_count: int = MAX_COUNT,
    ) -> None:
        self._vocabulary = vocabulary or get_command_vocabulary()
        self._max_count = max_count
        self._buffer = ""

    @property
    def buffer(self) -> str:
        return self._buffer

    def reset(self) -> None:
        self._buffer = ""

    def feed(self, char: str) -> ParseOutcome:
        self._buffer += char
        outcome = self._resolve(self._buffer)
        if not isinstance(outcome, Pending):
            self._buffer = ""
        if isinstance(outcome, Discard):
            logger.debug("Discarding unrecognised command %r", outcome.text)
        return outcome

    def _resolve(self, text: str) -> ParseOutcome:
        count = 1
        rest = text
        match = _COUNT_RE.match(text)
        if match:
            count = min(int(match.group()), self._max_count)
            rest = text[match.end():]

        if not rest:
            return Pending()

        vocab = self._vocabulary
        if len(rest) >= 2 and vocab.takes_argument(rest[:-1]):
            token, argument = rest[:-1], rest[-1]
            action = vocab.action_for(token)
            if action is None or not is_printable_key(argument):
                return Discard(text)
            return Execute(action, count, argument)

        action = vocab.action_for(rest)
        if action is not None and not vocab.takes_argument(rest):
            return Execute(action, count)
        if vocab.is_prefix(rest):
            return Pending()
        return Discard(text)
