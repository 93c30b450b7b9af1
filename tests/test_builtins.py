import io
import os
from pathlib import Path

import pytest

from minish.builtins import (
    ShellState,
    cd,
    echo,
    exit_shell,
    export,
    pwd,
    print_env,
    unset,
)
from minish.environment import Environment


def make_state(*entries):
    return ShellState(
        env=Environment.from_entries(entries),
        exported=Environment.from_entries(entries),
    )


def test_from_environ_bumps_only_working_level():
    state = ShellState.from_environ({"SHLVL": "1", "USER": "me"})
    assert state.env.get("SHLVL") == "2"
    assert state.exported.get("SHLVL") == "1"
    assert state.env.get("USER") == "me"


def test_from_environ_accepts_entry_strings():
    state = ShellState.from_environ(["A=1", "B=2"])
    assert state.env.entries() == ["A=1", "B=2"]
    assert state.exiting is False


def test_echo_joins_words_with_newline():
    out = io.StringIO()
    assert echo(["echo", "a", "b"], out) == 0
    assert out.getvalue() == "a b\n"


def test_echo_n_suppresses_newline():
    out = io.StringIO()
    echo(["echo", "-n", "-n", "x"], out)
    assert out.getvalue() == "x"


def test_echo_skips_space_after_empty_word():
    out = io.StringIO()
    echo(["echo", "a", "", "b"], out)
    assert out.getvalue() == "a b\n"


def test_echo_without_words_prints_newline():
    out = io.StringIO()
    echo(["echo"], out)
    assert out.getvalue() == "\n"


def test_pwd_writes_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert pwd(out) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_changes_directory_and_sets_oldpwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    start = os.getcwd()
    sub = tmp_path / "sub"
    sub.mkdir()
    state = make_state("PATH=/bin")
    err = io.StringIO()
    assert cd(["cd", str(sub)], state, err) == 0
    assert Path.cwd().resolve() == sub.resolve()
    assert state.env.get("OLDPWD") == start
    assert err.getvalue() == ""


def test_cd_missing_directory_reports(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    start = os.getcwd()
    state = make_state()
    err = io.StringIO()
    target = str(tmp_path / "nope")
    assert cd(["cd", target], state, err) == 1
    assert err.getvalue().startswith("cd: ")
    assert err.getvalue().endswith(target + "\n")
    assert os.getcwd() == start


def test_cd_extra_argument_message(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    err = io.StringIO()
    assert cd(["cd", "missing", "extra"], make_state(), err) == 1
    assert err.getvalue() == "cd: no such file or directory missing\n"


def test_cd_without_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    err = io.StringIO()
    assert cd(["cd"], make_state(), err) == 1
    assert err.getvalue() == "HOME is missing\n"


def test_cd_goes_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    state = make_state(f"HOME={home}")
    assert cd(["cd"], state, io.StringIO()) == 0
    assert Path.cwd().resolve() == home.resolve()


def test_cd_dash_without_oldpwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    err = io.StringIO()
    assert cd(["cd", "-"], make_state(), err) == 1
    assert err.getvalue() == "OLDPWD is missing\n"


def test_cd_dash_returns_to_previous(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sub = tmp_path / "sub"
    sub.mkdir()
    state = make_state()
    cd(["cd", str(sub)], state, io.StringIO())
    assert cd(["cd", "-"], state, io.StringIO()) == 0
    assert Path.cwd().resolve() == tmp_path.resolve()


def test_export_lists_sorted_declarations():
    state = make_state("B=2", "A=1")
    out = io.StringIO()
    assert export(["export"], state, out, io.StringIO()) == 0
    assert out.getvalue().splitlines() == ["declare -x A=1", "declare -x B=2"]


def test_export_assignment_adds_and_replaces():
    state = make_state("A=1")
    assert export(["export", "as=as", "A=9"], state, io.StringIO(), io.StringIO()) == 0
    assert state.env.get("as") == "as"
    assert state.exported.get("as") == "as"
    assert state.env.get("A") == "9"
    assert len(state.env) == 2


def test_export_name_only_goes_to_export_list():
    state = make_state()
    export(["export", "NAME"], state, io.StringIO(), io.StringIO())
    assert "NAME" in state.exported
    assert "NAME" not in state.env


def test_export_rejects_leading_digit():
    state = make_state()
    err = io.StringIO()
    assert export(["export", "1abc=2"], state, io.StringIO(), err) == 1
    assert err.getvalue().startswith("export: ")
    assert err.getvalue().endswith(" 1abc\n")
    assert len(state.exported) == 0


def test_export_rejects_leading_equals_with_whole_argument():
    err = io.StringIO()
    assert export(["export", "=x"], make_state(), io.StringIO(), err) == 1
    assert err.getvalue().endswith(" =x\n")


def test_export_rejects_bad_character():
    err = io.StringIO()
    assert export(["export", "a-b=1"], make_state(), io.StringIO(), err) == 1
    assert "not in the context" in err.getvalue()
    assert err.getvalue().endswith("a-b\n")


def test_unset_removes_from_both_lists():
    state = make_state("PATH=/bin")
    export(["export", "as=as"], state, io.StringIO(), io.StringIO())
    assert unset(["unset", "as=as"], state) == 0
    assert "as" not in state.env
    assert "as" not in state.exported
    assert state.env.entries() == ["PATH=/bin"]


def test_print_env_writes_entries():
    out = io.StringIO()
    assert print_env(make_state("A=1", "B=2"), out) == 0
    assert out.getvalue().splitlines() == ["A=1", "B=2"]


def test_exit_marks_state():
    state = make_state()
    err = io.StringIO()
    assert exit_shell(["exit"], state, err) == 0
    assert state.exiting is True
    assert err.getvalue() == "exit\n"


@pytest.mark.parametrize("args", [["exit", "1", "2"], ["exit", "a", "b", "c"]])
def test_exit_with_too_many_args(args):
    state = make_state()
    err = io.StringIO()
    assert exit_shell(args, state, err) == 1
    assert state.status == 1
    assert "minishell: exit: too many args" in err.getvalue()