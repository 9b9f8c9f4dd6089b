"""Running a pipeline of command lines as child processes."""

from __future__ import annotations

import errno
import os
import subprocess
import sys
from collections.abc import Iterable, Sequence
from typing import BinaryIO, Optional, TextIO, Union

from minishell.parser import CommandLine, RedirKind, Redirection

_EXEC_MESSAGES = {
    errno.ENOENT: "Error: No such file or directory\n",
    errno.EACCES: "Error: Permission denied\n",
}


class CommandNotFound(Exception):
    """No program could be found for a command name."""

    status = 127

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name


def resolve_command(envp: Iterable[str], name: Optional[str]) -> str:
    """Path of the program to run for ``name``, searched in ``PATH``.

    A name holding ``/`` is returned as it is. Raises CommandNotFound.
    """
    if not name:
        raise CommandNotFound(name or "")
    if "/" in name:
        return name
    for entry in envp:
        if not entry.startswith("PATH="):
            continue
        for directory in filter(None, entry[len("PATH="):].split(":")):
            candidate = f"{directory}/{name}"
            if os.access(candidate, os.F_OK | os.X_OK):
                return candidate
    raise CommandNotFound(name)


def exit_status_for_error(error: OSError) -> int:
    """Status of a command that could not be started because of ``error``."""
    if error.errno == errno.ENOENT:
        return 127
    if error.errno == errno.EACCES:
        return 126
    return 1


def _missing(target: Optional[str]) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), target)


def open_redirections(
    redirections: Sequence[Redirection],
) -> tuple[Optional[BinaryIO], Optional[BinaryIO]]:
    """Open every input, then every output file; return the last of each.

    Every output file is created or truncated even when a later one wins.
    Raises OSError when a file cannot be opened; nothing is left open then.
    """
    stdin: Optional[BinaryIO] = None
    stdout: Optional[BinaryIO] = None
    try:
        for redirection in redirections:
            if redirection.kind is not RedirKind.IN:
                continue
            if stdin is not None:
                stdin.close()
                stdin = None
            if redirection.target is None:
                raise _missing(None)
            stdin = open(redirection.target, "rb")
        for redirection in redirections:
            if redirection.kind not in (RedirKind.OUT, RedirKind.APPEND):
                continue
            if stdout is not None:
                stdout.close()
                stdout = None
            if redirection.target is None:
                raise _missing(None)
            flags = os.O_WRONLY | os.O_CREAT
            flags |= os.O_TRUNC if redirection.kind is RedirKind.OUT else os.O_APPEND
            fd = os.open(redirection.target, flags, 0o644)
            stdout = os.fdopen(fd, "ab" if redirection.kind is RedirKind.APPEND else "wb")
    except BaseException:
        for opened in (stdin, stdout):
            if opened is not None:
                opened.close()
        raise
    return stdin, stdout


def _env_mapping(envp: Iterable[str]) -> dict[str, str]:
    env: dict[str, str] = {}
    for entry in envp:
        name, sep, value = entry.partition("=")
        if sep and name:
            env.setdefault(name, value)
    return env


def _start(
    line: CommandLine,
    envp: Sequence[str],
    env: dict[str, str],
    stdin_fd: Optional[int],
    stdout_fd: Optional[int],
    err: TextIO,
) -> Union[subprocess.Popen, int]:
    try:
        stdin_file, stdout_file = open_redirections(line.redirections)
    except OSError as error:
        err.write(f"{error.filename or ''}: {error.strerror}\n")
        return 1
    try:
        try:
            path = resolve_command(envp, line.words[0] if line.words else None)
        except CommandNotFound as missing:
            err.write("Error : command not found\n")
            return missing.status
        try:
            return subprocess.Popen(
                line.words,
                executable=path,
                stdin=stdin_file if stdin_file is not None else stdin_fd,
                stdout=stdout_file if stdout_file is not None else stdout_fd,
                env=env,
            )
        except OSError as error:
            err.write(_EXEC_MESSAGES.get(error.errno, ""))
            return exit_status_for_error(error)
    finally:
        for opened in (stdin_file, stdout_file):
            if opened is not None:
                opened.close()


def _status_of(started: Union[subprocess.Popen, int]) -> int:
    if isinstance(started, int):
        return started
    code = started.wait()
    return 128 - code if code < 0 else code


def execute(cmdlines: Iterable[CommandLine], envp: Sequence[str]) -> int:
    """Run the command lines joined by pipes; return the last one's status."""
    lines = list(cmdlines)
    if not lines:
        return 0
    envp = list(envp)
    env = _env_mapping(envp)
    err = sys.stderr
    started: list[Union[subprocess.Popen, int]] = []
    previous_read: Optional[int] = None
    for index, line in enumerate(lines):
        read_end: Optional[int] = None
        write_end: Optional[int] = None
        if index < len(lines) - 1:
            read_end, write_end = os.pipe()
        try:
            started.append(_start(line, envp, env, previous_read, write_end, err))
        finally:
            if write_end is not None:
                os.close(write_end)
            if previous_read is not None:
                os.close(previous_read)
        previous_read = read_end
    statuses = [_status_of(item) for item in started]
    return statuses[-1]