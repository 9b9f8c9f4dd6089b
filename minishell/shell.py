"""The interactive read-check-run loop of the shell."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterable, Mapping
from typing import Optional, Union

from minishell.builtins import ShellExit, run_builtin
from minishell.checks import ShellSyntaxError
from minishell.environment import Environment
from minishell.executor import execute
from minishell.parser import split_pipeline
from minishell.validation import full_check

PROMPT = "minishell$ "

_NO_OP_STATUS = {":": 0, "#": 0, "!": 1}


def normalize_input(line: str) -> tuple[str, Optional[int]]:
    """Return the text to run and the status a no-op line sets.

    ``:`` and ``#`` set status 0 and ``!`` sets 1; they, like an empty
    line, leave nothing to run. Other lines come back unchanged with None.
    """
    if line == "" or line in _NO_OP_STATUS:
        return "", _NO_OP_STATUS.get(line)
    return line, None


class Shell:
    """Shell state: its environment and the status of the last command."""

    def __init__(
        self, environ: Union[Mapping[str, str], Iterable[str], None] = None
    ) -> None:
        self.env = Environment.from_environ(environ)
        if len(self.env) == 0:
            raise ValueError("the shell needs a non-empty environment")
        self.status = 0
        self.out = sys.stdout
        self.err = sys.stderr

    def run_line(self, line: str) -> int:
        """Check and run one command line; return its status.

        Raises ShellExit when the line ends the shell.
        """
        text, status = normalize_input(line)
        if status is not None:
            self.status = status
        if text == "exit":
            raise ShellExit(0)
        if not text:
            return self.status
        try:
            tokens = full_check(text, self.env, self.status)
        except ShellSyntaxError as error:
            self.err.write(f"{error}\n")
            self.status = error.status
            return self.status
        cmdlines = split_pipeline(tokens)
        if len(cmdlines) == 1:
            result = run_builtin(cmdlines[0].words, self.env, self.out, self.err)
            if result is not None:
                self.status = result
                return result
        self.out.flush()
        self.err.flush()
        self.status = execute(cmdlines, self.env.to_envp())
        return self.status

    def run(self, read_line: Callable[[], Optional[str]]) -> int:
        """Run lines from ``read_line`` until it returns None or the shell exits."""
        while True:
            line = read_line()
            if line is None:
                return self.status
            try:
                self.run_line(line)
            except ShellExit as stop:
                return stop.status


def _read_prompt() -> Optional[str]:
    try:
        return input(PROMPT)
    except EOFError:
        return None


def main(argv: Optional[list[str]] = None) -> int:
    """Start the interactive shell; arguments are refused."""
    if argv is None:
        argv = sys.argv[1:]
    if argv:
        sys.stderr.write("Arguments aren't allowed\n")
        return 0
    try:
        import readline  # noqa: F401  (gives input() line editing and history)
    except ImportError:
        pass
    try:
        shell = Shell(os.environ)
    except ValueError as error:
        sys.stderr.write(f"Error: {error}\n")
        return 1
    return shell.run(_read_prompt)


if __name__ == "__main__":
    sys.exit(main())