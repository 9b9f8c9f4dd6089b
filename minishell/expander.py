"""Variable expansion and quote removal on lexed tokens."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from minishell.environment import Environment, EnvVar
from minishell.lexer import Token, TokenType


def _is_name_char(c: str) -> bool:
    return c != "" and ((c.isascii() and c.isalnum()) or c == "_")


def remove_quotes(s: str) -> str:
    """Drop the quote characters that open and close quoted runs in ``s``."""
    in_single = False
    in_double = False
    kept: list[str] = []
    for char in s:
        if char == "'" and not in_double:
            in_single = not in_single
        elif char == '"' and not in_single:
            in_double = not in_double
        else:
            kept.append(char)
    return "".join(kept)


def expandable(s: str, pos: int) -> bool:
    """Return True when the ``$`` at ``pos`` starts an expansion.

    It must not sit inside single quotes, and the character after it must be
    a letter, a digit, ``_`` or ``?``.
    """
    if pos < 0 or pos >= len(s):
        return False
    in_single = False
    in_double = False
    for char in s[: pos + 1]:
        if char == '"' and not in_single:
            in_double = not in_double
        elif char == "'" and not in_double:
            in_single = not in_single
    if in_single:
        return False
    following = s[pos + 1] if pos + 1 < len(s) else ""
    return _is_name_char(following) or following == "?"


def read_variable_name(s: str, pos: int) -> tuple[str, int]:
    """Read the name after the ``$`` at ``pos``; return it and the index past it."""
    if pos >= len(s) or s[pos] != "$":
        raise ValueError(f"no '$' at position {pos}")
    end = pos + 1
    while end < len(s) and _is_name_char(s[end]):
        end += 1
    return s[pos + 1:end], end


def find_variable(name: str, env: Optional[Environment]) -> Optional[EnvVar]:
    """The variable called exactly ``name``, or None."""
    if not name or env is None or len(env) == 0:
        return None
    return env.find(name)


def expand_value(value: str, env: Optional[Environment], last_status: int) -> str:
    """Replace ``$NAME`` and ``$?`` in ``value``; ``$$`` is kept as it is.

    An empty environment, or one whose first entry has no value, leaves the
    text untouched.
    """
    if env is None or len(env) == 0:
        return value
    first = next(iter(env))
    if first.value is None:
        return value
    parts: list[str] = []
    pos = 0
    while pos < len(value):
        char = value[pos]
        following = value[pos + 1] if pos + 1 < len(value) else ""
        if char == "$" and following:
            if following == "$":
                parts.append("$$")
                pos += 2
                continue
            if following == "?" and expandable(value, pos):
                parts.append(str(last_status))
                pos += 2
                continue
            if expandable(value, pos):
                name, pos = read_variable_name(value, pos)
                var = find_variable(name, env)
                if var is not None and var.value is not None:
                    parts.append(var.value)
                continue
        parts.append(char)
        pos += 1
    return "".join(parts)


def expand_tokens(
    tokens: Iterable[Token], env: Optional[Environment], last_status: int
) -> list[Token]:
    """Expand and unquote every token in place and return them as a list.

    A here-document limiter is only unquoted. After each token is handled,
    quotes are stripped from it and from every token after it, so later
    tokens are unquoted before their own expansion.
    """
    token_list = list(tokens)
    previous: Optional[Token] = None
    for index, token in enumerate(token_list):
        if previous is None or previous.type is not TokenType.HERE_DOC:
            token.value = expand_value(token.value, env, last_status)
        for later in token_list[index:]:
            later.value = remove_quotes(later.value)
        previous = token
    return token_list