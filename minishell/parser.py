"""Grouping typed tokens into the command lines of a pipeline."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from minishell.lexer import Token, TokenType


class RedirKind(enum.Enum):
    """The kind of a redirection operator."""

    IN = "<"
    OUT = ">"
    APPEND = ">>"
    HEREDOC = "<<"


_REDIR_KINDS = {
    TokenType.REDIR_IN: RedirKind.IN,
    TokenType.REDIR_OUT: RedirKind.OUT,
    TokenType.APPEND: RedirKind.APPEND,
    TokenType.HERE_DOC: RedirKind.HEREDOC,
}

_WORD_TYPES = frozenset({TokenType.CMD, TokenType.ARG, TokenType.WORD})


@dataclass(frozen=True)
class Redirection:
    """A redirection and the file (or here-document limiter) it names."""

    kind: RedirKind
    target: Optional[str] = None


@dataclass
class CommandLine:
    """One command of a pipeline: its argument words and its redirections."""

    words: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)

    @classmethod
    def from_tokens(cls, tokens: Sequence[Token]) -> "CommandLine":
        """Build the command that starts at the first of ``tokens``."""
        return cls(collect_words(tokens), collect_redirections(tokens))


def collect_words(tokens: Iterable[Token]) -> list[str]:
    """Command and argument words up to the first pipe."""
    words: list[str] = []
    for token in tokens:
        if token.type is TokenType.PIPE:
            break
        if token.type in _WORD_TYPES:
            words.append(token.value)
    return words


def collect_redirections(tokens: Iterable[Token]) -> list[Redirection]:
    """Redirections up to the first pipe; each takes the token after it as target."""
    redirections: list[Redirection] = []
    remaining = iter(tokens)
    for token in remaining:
        if token.type is TokenType.PIPE:
            break
        kind = _REDIR_KINDS.get(token.type)
        if kind is None:
            continue
        target = next(remaining, None)
        redirections.append(
            Redirection(kind, target.value if target is not None else None)
        )
    return redirections


def split_pipeline(tokens: Iterable[Token]) -> list[CommandLine]:
    """One CommandLine for each pipe-separated part of ``tokens``.

    A pipe at the very end does not start another command.
    """
    token_list = list(tokens)
    cmdlines: list[CommandLine] = []
    start = 0
    while start < len(token_list):
        cmdlines.append(CommandLine.from_tokens(token_list[start:]))
        pipe_at = next(
            (
                index
                for index, token in enumerate(token_list[start:], start)
                if token.type is TokenType.PIPE
            ),
            None,
        )
        if pipe_at is None:
            break
        start = pipe_at + 1
    return cmdlines