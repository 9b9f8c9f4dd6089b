"""Checks run on a raw command line before it is split into tokens."""

from __future__ import annotations

_FORBIDDEN = frozenset("&;%\t\v\f\r\n,()")
_BLANKS = frozenset(" \t\n\v\f\r")


class ShellSyntaxError(Exception):
    """A command line that the shell refuses to run."""

    def __init__(self, message: str, status: int = 2) -> None:
        super().__init__(message)
        self.status = status


def quotes_balanced(s: str | None) -> bool:
    """Return True when every opened quote in ``s`` is closed."""
    if s is None:
        return False
    quote = None
    for char in s:
        if quote is None and char in "\"'":
            quote = char
        elif char == quote:
            quote = None
    return quote is None


def is_quoted(s: str, index: int) -> bool:
    """Return True when position ``index`` of ``s`` lies inside quotes."""
    in_single = False
    in_double = False
    for char in s[:index]:
        if char == "'" and not in_double:
            in_single = not in_single
        elif char == '"' and not in_single:
            in_double = not in_double
    return in_single or in_double


def is_forbidden_char(c: str, next_c: str, next_next_c: str) -> bool:
    """Return True when ``c`` (with what follows it) starts an unsupported operator."""
    return c in _FORBIDDEN or (c == "|" and next_c in ("|", "&") and next_c != "")


def forbidden_chars_ok(s: str) -> bool:
    """Return False when an unquoted forbidden character is followed by more input.

    The last character of the line is never examined, and a line with
    unbalanced quotes is left for the quote check to reject.
    """
    if not quotes_balanced(s):
        return True
    for index, char in enumerate(s[:-1]):
        next_c = s[index + 1]
        next_next_c = s[index + 2] if index + 2 < len(s) else ""
        if not is_quoted(s, index) and is_forbidden_char(char, next_c, next_next_c):
            return False
    return True


def is_pipe_misuse(c: str, next_c: str, next_next_c: str) -> bool:
    """Return True when the line opens with a pipe or a redirection into a pipe."""
    return (
        c == "|"
        or (c == ">" and next_c == "|")
        or (c == ">" and next_c == " " and next_next_c == "|")
    )


def pipes_ok(s: str) -> bool:
    """Return False when the line starts badly with a pipe or ends with one."""
    if len(s) >= 3 and is_pipe_misuse(s[0], s[1], s[2]):
        return False
    stripped = s.rstrip("".join(_BLANKS))
    return not stripped.endswith("|")


def pipe_error(found: bool) -> None:
    """Raise a syntax error about a pipe unless a command was ``found`` around it."""
    if not found:
        raise ShellSyntaxError("bash: syntax error near unexpected token `|'", status=2)