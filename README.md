# minishell

A small interactive shell. It reads a line, checks it for unbalanced quotes
and misplaced operators, splits it into tokens, expands `$NAME` and `$?`,
removes quotes, and runs the resulting pipeline of commands with `<`, `>`
and `>>` redirections.

## Installing

```
pip install .
```

## Running

```
minishell
```

The shell takes no arguments; if any are given it prints
`Arguments aren't allowed` and stops. Type commands at the prompt
`minishell$ `, for example:

```
ls -l | wc -l > count.txt
echo "$HOME" '$HOME'
```

Type `exit` or press Ctrl-D to leave. Line editing and history are used
when Python's `readline` module is available.

## Behaviour

- Single quotes prevent expansion. Double quotes allow it. Both kinds of quote
  are removed once expansion is done.
- `$?` expands to the status of the last command. `$$` is left as it is.
  Unknown variables expand to nothing.
- Outside quotes, the characters `& ; % , ( )`, tabs and other control
  whitespace, and the operators `||` and `|&` are rejected unless they are
  the last character of the line.
- A line that ends with `|`, or a line of at least three characters that
  starts with `|`, `>|` or `> |`, is rejected.
- Lines rejected by these checks print `minishell: syntax error` and keep the
  previous status.
- A `<`, `>` or `>>` with no file after it prints
  ``MYSHELL: syntax error near unexpected token `newline'`` and sets the
  status to 2.
- An empty line does nothing; `:` and `#` set the status to 0 and `!` sets
  it to 1.
- Commands are looked up on `PATH` unless the name contains a `/`. An unknown
  command gives status 127; a command that cannot be started gives 127 for a
  missing file, 126 for a permission error and 1 otherwise.
- When every input and output file of a command has been listed, only the
  last `<` and the last `>`/`>>` are used, but every output file is created
  or truncated.

## Built-in commands

`echo` (with `-n`), `cd`, `pwd`, `env`, `export`, `unset` and `exit` run
inside the shell when the line is a single command. In a pipeline every
command is started as an external program. `export` without arguments lists
the variables sorted by name; `exit` with a non-numeric argument ends the
shell with status 255.

## Using it as a library

```python
from minishell.shell import Shell

shell = Shell({"PATH": "/usr/bin:/bin", "HOME": "/tmp"})
status = shell.run_line("echo hello | tr a-z A-Z")
```

`Shell` needs a non-empty environment and raises `ValueError` otherwise.
`Shell.run_line` raises `minishell.builtins.ShellExit` when the line ends the
shell; `Shell.run` reads lines from a callable until it returns `None`.

The stages can also be used one at a time: `minishell.checks`,
`minishell.lexer.lex`, `minishell.expander.expand_tokens`,
`minishell.validation.full_check` (raises `minishell.checks.ShellSyntaxError`),
`minishell.parser.split_pipeline` and `minishell.executor.execute`. The
variables live in `minishell.environment.Environment`, and
`minishell.builtins.run_builtin` dispatches to the built-in commands.

## What it does not do

- Here-documents (`<<`) are recognised and parsed, but their input is not
  read and they have no effect when a command runs.
- There is no special handling of Ctrl-C or Ctrl-\.
- There are no `&&`, `||`, `;`, subshells, globbing or job control.

## Tests

```
pip install .[test]
pytest
```