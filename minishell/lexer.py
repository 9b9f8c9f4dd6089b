"""Splitting a command line into typed tokens."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from minishell.checks import is_quoted


class TokenType(enum.Enum):
    """What role a token plays on the command line."""

    CMD = "cmd"
    ARG = "arg"
    WORD = "word"
    PIPE = "pipe"
    REDIR_IN = "redir_in"
    REDIR_OUT = "redir_out"
    HERE_DOC = "here_doc"
    APPEND = "append"
    INFILE = "infile"
    OUTFILE = "outfile"
    LIMITER = "limiter"


@dataclass
class Token:
    """One word or operator of a command line."""

    value: str
    type: TokenType = TokenType.WORD


_OPERATORS = {
    "|": TokenType.PIPE,
    "<": TokenType.REDIR_IN,
    ">": TokenType.REDIR_OUT,
    "<<": TokenType.HERE_DOC,
    ">>": TokenType.APPEND,
}


def is_separator(c: str, next_c: str) -> bool:
    """Return True when ``c`` starts a pipe or redirection operator."""
    return c != "" and c in "|<>"


def is_quote(c: str) -> bool:
    return c != "" and c in "\"'"


def is_space(c: str) -> bool:
    return c != "" and c in " \t\n"


def _char_at(s: str, index: int) -> str:
    return s[index] if 0 <= index < len(s) else ""


def _read_separator(s: str, start: int) -> int:
    pair = s[start:start + 2]
    return start + (2 if pair in ("<<", ">>") else 1)


def _read_word(s: str, start: int) -> int:
    pos = start
    in_quotes = False
    while pos < len(s) and not is_space(s[pos]) and (
        in_quotes or not is_separator(s[pos], _char_at(s, pos + 1))
    ):
        if is_quote(s[pos]):
            quote = s[pos]
            in_quotes = not in_quotes
            pos += 1
            while pos < len(s) and s[pos] != quote:
                pos += 1
            if pos < len(s):
                in_quotes = not in_quotes
        pos += 1
    return pos


def split_words(s: str) -> list[str]:
    """Cut a command line into words and operators, keeping quotes in place."""
    words: list[str] = []
    pos = 0
    while pos < len(s):
        char = s[pos]
        next_c = _char_at(s, pos + 1)
        if is_quote(char):
            end = _read_word(s, pos)
        elif not is_space(char) and is_separator(char, next_c) and not is_quoted(s, pos):
            end = _read_separator(s, pos)
        elif not is_space(char) and not is_separator(char, next_c):
            end = _read_word(s, pos)
        else:
            pos += 1
            continue
        words.append(s[pos:end])
        pos = end
    return words


def word_type(previous: Optional[Token]) -> TokenType:
    """Type of a plain word, decided by the token before it."""
    if previous is None:
        return TokenType.CMD
    if previous.type in (TokenType.INFILE, TokenType.PIPE):
        return TokenType.CMD
    if previous.type is TokenType.REDIR_IN:
        return TokenType.INFILE
    if previous.type in (TokenType.REDIR_OUT, TokenType.APPEND):
        return TokenType.OUTFILE
    if previous.type is TokenType.HERE_DOC:
        return TokenType.LIMITER
    return TokenType.WORD


def token_type(value: str, previous: Optional[Token]) -> TokenType:
    """Type of a token given its text and the token before it."""
    if value in _OPERATORS:
        return _OPERATORS[value]
    if value[:2] == " -":
        return TokenType.ARG
    return word_type(previous)


def lex(text: str) -> list[Token]:
    """Split ``text`` and give every token its type."""
    tokens: list[Token] = []
    previous: Optional[Token] = None
    for word in split_words(text):
        token = Token(word, token_type(word, previous))
        tokens.append(token)
        previous = token
    return tokens