"""The shell's own ordered list of environment variables."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Optional, Union


def find_equal_sign(s: str) -> int:
    """Index of the first ``=`` in ``s``, or -1 when there is none."""
    return s.find("=")


@dataclass
class EnvVar:
    """One variable; ``has_equal`` tells whether it was given with ``=``."""

    name: str
    value: Optional[str] = None
    has_equal: bool = True

    def entry(self) -> str:
        """The ``NAME=VALUE`` form handed to programs, or the bare name."""
        if self.has_equal:
            return f"{self.name}={self.value or ''}"
        return self.name


class Environment:
    """Variables in insertion order, looked up by exact name."""

    def __init__(self, variables: Iterable[EnvVar] = ()) -> None:
        self._vars: list[EnvVar] = list(variables)

    @classmethod
    def from_environ(
        cls, environ: Union[Mapping[str, str], Iterable[str], None] = None
    ) -> "Environment":
        """Build from ``NAME=VALUE`` strings or a mapping (the process environment by default).

        Entries without a name before ``=`` are skipped.
        """
        if environ is None:
            environ = os.environ
        if isinstance(environ, Mapping):
            entries: Iterable[str] = (f"{k}={v}" for k, v in environ.items())
        else:
            entries = environ
        env = cls()
        for entry in entries:
            split_at = find_equal_sign(entry)
            if split_at > 0:
                env.append(entry[:split_at], entry[split_at + 1:])
        return env

    def find(self, name: str) -> Optional[EnvVar]:
        """The first variable called ``name``, or None."""
        return next((var for var in self._vars if var.name == name), None)

    def append(self, name: str, value: Optional[str]) -> EnvVar:
        """Add a variable at the end and return it."""
        var = EnvVar(name, value, value is not None)
        self._vars.append(var)
        return var

    def prepend(self, name: str, value: Optional[str]) -> EnvVar:
        """Add a variable at the front and return it."""
        var = EnvVar(name, value, value is not None)
        self._vars.insert(0, var)
        return var

    def remove(self, name: str) -> EnvVar:
        """Remove and return the first variable called ``name``; KeyError if absent."""
        var = self.find(name)
        if var is None:
            raise KeyError(name)
        self._vars.remove(var)
        return var

    def to_envp(self) -> list[str]:
        """Entries in the form programs receive them."""
        return [var.entry() for var in self._vars]

    def __iter__(self) -> Iterator[EnvVar]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)