"""Full validation of a command line: raw checks, lexing, expansion, redirections."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from minishell.checks import (
    ShellSyntaxError,
    forbidden_chars_ok,
    pipes_ok,
    quotes_balanced,
)
from minishell.environment import Environment
from minishell.expander import expand_tokens
from minishell.lexer import Token, TokenType, lex

_EXPECTED_TARGET = {
    TokenType.REDIR_IN: TokenType.INFILE,
    TokenType.REDIR_OUT: TokenType.OUTFILE,
    TokenType.APPEND: TokenType.OUTFILE,
}


def redirections_ok(tokens: Sequence[Token]) -> bool:
    """Return True when every ``<``, ``>`` and ``>>`` is followed by its file."""
    for index, token in enumerate(tokens):
        expected = _EXPECTED_TARGET.get(token.type)
        if expected is None:
            continue
        if index + 1 >= len(tokens) or tokens[index + 1].type is not expected:
            return False
    return True


def full_check(
    prompt: str, env: Optional[Environment], last_status: int
) -> list[Token]:
    """Check, lex and expand ``prompt``; return its tokens or raise ShellSyntaxError.

    A line rejected before lexing keeps ``last_status`` as the error's status;
    a missing redirection target sets it to 2.
    """
    if not quotes_balanced(prompt) or not forbidden_chars_ok(prompt) or not pipes_ok(prompt):
        raise ShellSyntaxError("minishell: syntax error", status=last_status)
    tokens = expand_tokens(lex(prompt), env, last_status)
    if not redirections_ok(tokens):
        raise ShellSyntaxError(
            "MYSHELL: syntax error near unexpected token `newline'", status=2
        )
    return tokens