"""Recovery of removed class names from the engine's usage log.

The engine reports what it removed only as diagnostic text, streamed as a
sequence of tokens. A class that was removed entirely appears as a line
holding nothing but its name; partially used classes are followed by a
``:`` and their removed members on indented lines. ``UsageLogParser``
recognizes the first shape by token adjacency to the line separator.

A line of free text that is not a class name is indistinguishable from a
removed class, and a class name that shares its line with other tokens is
dropped.
"""

from __future__ import annotations

import re
from enum import Enum, auto
from typing import Iterable, Iterator

LINE_SEPARATOR = "\n"

_LINE_RE = re.compile(r"^(\s*)(.*?)(:?)$")


class ParserState(Enum):
    """Position of the parser within the current line."""

    IDLE = auto()  # at the start of a line
    EXPECTING = auto()  # one token seen, waiting for the separator
    SKIPPING = auto()  # line rejected, waiting for the separator


class UsageLogParser:
    """Token consumer that collects one class name per usage log line."""

    def __init__(self, removed: set[str] | None = None) -> None:
        """Initialize the parser.

        Args:
            removed: Set to add confirmed names to. Shared with the caller so
                other consumers can reconcile it while the engine runs.
        """
        self.removed: set[str] = removed if removed is not None else set()
        self.state = ParserState.IDLE
        self._candidate: str | None = None

    def accept(self, token: str) -> None:
        """Consume the next token of the usage log."""
        if token == LINE_SEPARATOR:
            if self.state is ParserState.EXPECTING and self._candidate is not None:
                self.removed.add(self._candidate)
            self._candidate = None
            self.state = ParserState.IDLE
        elif self.state is ParserState.IDLE:
            self._candidate = token
            self.state = ParserState.EXPECTING
        else:
            self._candidate = None
            self.state = ParserState.SKIPPING

    def feed(self, tokens: Iterable[str]) -> set[str]:
        """Consume a sequence of tokens and return the removed set."""
        for token in tokens:
            self.accept(token)
        return self.removed


def tokenize_usage_line(line: str) -> list[str]:
    """Split one usage log line into the tokens the engine would stream."""
    if not line.strip():
        return []
    match = _LINE_RE.match(line)
    indent, body, colon = match.groups()
    return [token for token in (indent, body, colon) if token]


def tokenize_usage_text(text: str) -> Iterator[str]:
    """Turn a printed usage log into a token stream.

    Every line contributes its indentation, its body and a trailing ``:`` as
    separate tokens, followed by ``LINE_SEPARATOR``.
    """
    for line in text.splitlines():
        yield from tokenize_usage_line(line)
        yield LINE_SEPARATOR


def parse_usage_text(text: str) -> set[str]:
    """Return the classes a printed usage log reports as removed."""
    return UsageLogParser().feed(tokenize_usage_text(text))
