import pytest

from minishell.environment import EnvVar, Environment, find_equal_sign


def test_find_equal_sign():
    assert find_equal_sign("A=B") == 1
    assert find_equal_sign("=x") == 0
    assert find_equal_sign("NOPE") == -1


def test_from_environ_strings_skips_nameless_entries():
    env = Environment.from_environ(["PATH=/bin", "HOME=/home/u", "BROKEN", "=x"])
    assert [v.name for v in env] == ["PATH", "HOME"]
    assert env.find("PATH").value == "/bin"
    assert env.find("HOME").has_equal is True


def test_from_environ_keeps_later_equal_signs_in_value():
    env = Environment.from_environ(["OPTS=a=b=c"])
    assert env.find("OPTS").value == "a=b=c"


def test_from_environ_mapping():
    env = Environment.from_environ({"USER": "alice", "SHELL": "/bin/sh"})
    assert env.find("USER").value == "alice"
    assert len(env) == 2


def test_find_exact_name_only():
    env = Environment.from_environ(["HOME=/h", "HOMEDIR=/d"])
    assert env.find("HOM") is None
    assert env.find("HOMEDIR").value == "/d"


def test_append_and_prepend_order():
    env = Environment()
    env.append("B", "2")
    env.prepend("A", "1")
    env.append("C", None)
    assert [v.name for v in env] == ["A", "B", "C"]
    assert env.find("C").has_equal is False


def test_remove():
    env = Environment.from_environ(["A=1", "B=2"])
    removed = env.remove("A")
    assert removed.value == "1"
    assert [v.name for v in env] == ["B"]
    with pytest.raises(KeyError):
        env.remove("A")


def test_to_envp_with_and_without_value():
    env = Environment([EnvVar("A", "1"), EnvVar("B", None, False)])
    assert env.to_envp() == ["A=1", "B"]


def test_envp_round_trip():
    entries = ["PATH=/usr/bin:/bin", "EMPTY=", "X=y=z"]
    env = Environment.from_environ(entries)
    assert env.to_envp() == entries
    again = Environment.from_environ(env.to_envp())
    assert [(v.name, v.value) for v in again] == [(v.name, v.value) for v in env]


def test_len_matches_iteration():
    env = Environment.from_environ(["A=1", "B=2", "C=3"])
    assert len(env) == len(list(env))