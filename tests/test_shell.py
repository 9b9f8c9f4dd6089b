import io
import os

import pytest

from minishell.builtins import ShellExit
from minishell.shell import Shell, main, normalize_input


def make_shell(environ=None):
    shell = Shell(environ if environ is not None else dict(os.environ))
    shell.out = io.StringIO()
    shell.err = io.StringIO()
    return shell


@pytest.mark.parametrize(
    "line, expected",
    [("", ("", None)), (":", ("", 0)), ("#", ("", 0)), ("!", ("", 1)), ("ls -l", ("ls -l", None))],
)
def test_normalize_input(line, expected):
    assert normalize_input(line) == expected


def test_empty_environment_is_refused():
    with pytest.raises(ValueError):
        Shell([])


def test_echo_builtin_writes_to_out():
    shell = make_shell(["PATH=/bin", "HOME=/tmp"])
    assert shell.run_line("echo hello") == 0
    assert shell.out.getvalue() == "hello\n"


def test_variable_expansion():
    shell = make_shell(["HOME=/somewhere", "PATH=/bin"])
    shell.run_line("echo $HOME")
    assert shell.out.getvalue() == "/somewhere\n"


def test_bang_sets_status_seen_by_dollar_question():
    shell = make_shell(["PATH=/bin", "HOME=/tmp"])
    assert shell.run_line("!") == 1
    shell.run_line("echo $?")
    assert shell.out.getvalue() == "1\n"


def test_colon_resets_status():
    shell = make_shell(["PATH=/bin", "HOME=/tmp"])
    shell.run_line("!")
    assert shell.run_line(":") == 0
    assert shell.status == 0


def test_exit_line_raises_shell_exit_zero():
    shell = make_shell(["PATH=/bin"])
    with pytest.raises(ShellExit) as info:
        shell.run_line("exit")
    assert info.value.status == 0


def test_exit_builtin_with_status():
    shell = make_shell(["PATH=/bin"])
    with pytest.raises(ShellExit) as info:
        shell.run_line("exit 3")
    assert info.value.status == 3


def test_unbalanced_quote_keeps_status():
    shell = make_shell(["PATH=/bin"])
    shell.run_line("!")
    assert shell.run_line("echo 'abc") == 1
    assert shell.err.getvalue() != ""
    assert shell.out.getvalue() == ""


def test_missing_redirection_target_sets_status_two():
    shell = make_shell(["PATH=/bin"])
    assert shell.run_line("cat <") == 2
    assert "newline" in shell.err.getvalue()


def test_export_then_env_lists_variable():
    shell = make_shell(["PATH=/bin", "HOME=/tmp"])
    shell.run_line("export GREETING=hi")
    shell.run_line("env")
    assert "GREETING=hi\n" in shell.out.getvalue().splitlines(keepends=True)


def test_unset_removes_variable():
    shell = make_shell(["PATH=/bin", "HOME=/tmp", "DROP=me"])
    shell.run_line("unset DROP")
    assert shell.env.find("DROP") is None
    assert len(shell.env) == 2


def test_external_commands_status():
    shell = make_shell()
    assert shell.run_line("true") == 0
    assert shell.run_line("false") == 1


def test_unknown_command_is_127():
    shell = make_shell()
    assert shell.run_line("no_such_command_anywhere_xyz") == 127


def test_run_stops_at_exit_line():
    shell = make_shell(["PATH=/bin", "HOME=/tmp"])
    lines = iter(["echo one", "exit", "echo two"])
    assert shell.run(lambda: next(lines, None)) == 0
    assert shell.out.getvalue() == "one\n"


def test_run_returns_last_status_at_end_of_input():
    shell = make_shell(["PATH=/bin", "HOME=/tmp"])
    lines = iter(["!"])
    assert shell.run(lambda: next(lines, None)) == 1


def test_run_returns_exit_builtin_status():
    shell = make_shell(["PATH=/bin", "HOME=/tmp"])
    lines = iter(["exit 7", "echo never"])
    assert shell.run(lambda: next(lines, None)) == 7
    assert shell.out.getvalue() == "exit\n" or shell.out.getvalue() == ""


def test_main_refuses_arguments(capsys):
    assert main(["extra"]) == 0
    assert "Arguments aren't allowed" in capsys.readouterr().err


def test_main_runs_lines(monkeypatch, capsys):
    lines = iter(["echo hi", "exit"])

    def fake_input(prompt=""):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    assert main([]) == 0
    assert "hi\n" in capsys.readouterr().out