"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Optional, TextIO

from minishell.environment import Environment


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


def is_numeric(s: str) -> bool:
    """Return True when ``s`` is an optional sign followed only by ASCII digits."""
    digits = s[1:] if s[:1] in ("-", "+") else s
    return all("0" <= char <= "9" for char in digits)


def _atoi(s: str) -> int:
    text = s.lstrip(" \t\n\v\f\r")
    sign = 1
    if text[:1] in ("-", "+"):
        if text[0] == "-":
            sign = -1
        text = text[1:]
    number = 0
    for char in text:
        if not "0" <= char <= "9":
            break
        number = number * 10 + (ord(char) - ord("0"))
    return sign * number


def echo(args: Sequence[str], out: TextIO) -> int:
    """Print ``args`` separated by spaces; a leading ``-n`` drops the newline."""
    if not args:
        out.write("\n")
        return 0
    newline = True
    words = list(args)
    if words[0] == "-n":
        newline = False
        words = words[1:]
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def _change_dir(path: str, err: TextIO) -> int:
    try:
        os.chdir(path)
    except OSError as error:
        err.write(f"minishell: cd: {path}: {error.strerror}\n")
        return 1
    os.environ["PWD"] = os.getcwd()
    return 0


def cd(args: Sequence[str], err: TextIO) -> int:
    """Change directory to the single argument, or to ``$HOME`` without one."""
    if not args:
        home = os.environ.get("HOME")
        if home is None:
            err.write("minishell: cd: HOME not set\n")
            return 1
        return _change_dir(home, err)
    if len(args) > 1:
        err.write("minishel: cd: too many arguments\n")
        return 1
    return _change_dir(args[0], err)


def print_env(
    args: Sequence[str], env: Environment, out: TextIO, err: TextIO
) -> int:
    """Print every variable; arguments are refused."""
    if args:
        err.write("minishell: env: too many arguments\n")
        return 1
    for var in env:
        if var.has_equal:
            out.write(f"{var.name}=")
        out.write(f"{var.value}\n" if var.value else "\n")
    return 0


def exit_shell(args: Sequence[str], out: TextIO, err: TextIO) -> int:
    """Raise ShellExit with the requested status.

    A non-numeric argument exits with 255; more than one numeric argument
    is refused and 1 is returned without exiting.
    """
    if not args:
        out.write("exit\n")
        raise ShellExit(0)
    if not is_numeric(args[0]):
        err.write(f"minishell: exit: {args[0]}: numeric argument required\n")
        raise ShellExit(255)
    if len(args) > 1:
        err.write("exit: too many arguments\n")
        return 1
    raise ShellExit(_atoi(args[0]) % 256)


def split_assignment(word: str) -> tuple[str, Optional[str]]:
    """Split ``NAME=VALUE``; the value is None without ``=`` or when it is empty."""
    name, sep, value = word.partition("=")
    if not sep or not value:
        return name, None
    return name, value


def _sort_in_place(env: Environment) -> None:
    ordered = sorted(
        ((var.name, var.value, var.has_equal) for var in env),
        key=lambda item: item[0],
    )
    for var, (name, value, has_equal) in zip(env, ordered):
        var.name, var.value, var.has_equal = name, value, has_equal


def export(args: Sequence[str], env: Environment, out: TextIO) -> int:
    """Set variables from ``NAME[=VALUE]`` words, or list them sorted by name."""
    if not args:
        _sort_in_place(env)
        for var in env:
            line = f"export {var.name}"
            if var.has_equal:
                line += "="
            line += var.value if var.value else ""
            out.write(line + "\n")
        return 0
    for word in args:
        name, value = split_assignment(word)
        existing = env.find(name)
        if existing is None:
            env.prepend(name, value)
            continue
        if value is not None:
            existing.value = value
        existing.has_equal = value is not None
    return 0


def pwd(out: TextIO, err: TextIO) -> int:
    """Print ``$PWD`` when it names an existing path, else the real working directory."""
    current = os.environ.get("PWD")
    if current is None or not os.path.exists(current):
        try:
            current = os.getcwd()
        except OSError as error:
            err.write(f"getcwd: {error.strerror}\n")
            return 1
    out.write(f"{current}\n")
    return 0


def unset(args: Sequence[str], env: Environment) -> int:
    """Remove every named variable; unknown names are ignored."""
    for name in args:
        if env.find(name) is not None:
            env.remove(name)
    return 0


def run_builtin(
    words: Sequence[str], env: Environment, out: TextIO, err: TextIO
) -> Optional[int]:
    """Run ``words`` as a builtin and return its status, or None if it is not one."""
    if not words:
        return None
    command, args = words[0], list(words[1:])
    if command == "echo":
        return echo(args, out)
    if command == "cd":
        return cd(args, err)
    if command == "exit":
        return exit_shell(args, out, err)
    if command == "env":
        return print_env(args, env, out, err)
    if command == "pwd":
        return pwd(out, err)
    if command == "unset":
        return unset(args, env)
    if command == "export":
        return export(args, env, out)
    return None