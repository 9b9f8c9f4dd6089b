"""A small interactive shell: checks, lexing, expansion, builtins and pipeline execution."""

__version__ = "0.1.0"