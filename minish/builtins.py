"""Built-in shell commands working on a shared shell state."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from .environment import Environment, IdentifierKind, classify_identifier, entry_name

SUCCESS = 0
FAILURE = 1

_HOME_VAR = "HOME"
_PREVIOUS_DIRECTORY_VAR = "OLD" + "PWD"


class BuiltinError(Exception):
    """A built-in command failed; carries the exit status to report."""

    def __init__(self, message: str, status: int = FAILURE) -> None:
        super().__init__(message)
        self.status = status


@dataclass
class ShellState:
    """The environments and status flags a running shell keeps."""

    env: Environment = field(default_factory=Environment)
    exported: Environment = field(default_factory=Environment)
    status: int = SUCCESS
    exiting: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | Iterable[str]) -> ShellState:
        """Build a state from a mapping or from ``NAME=value`` strings.

        The working environment gets its ``SHLVL`` raised by one; the
        export list keeps the values as given.
        """
        if isinstance(environ, Mapping):
            entries = [f"{name}={value}" for name, value in environ.items()]
        else:
            entries = list(environ)
        env = Environment.from_entries(entries)
        env.bump_shell_level()
        return cls(env=env, exported=Environment.from_entries(entries))


def _report(error: BuiltinError, stderr: TextIO) -> int:
    stderr.write(f"{error}\n")
    return error.status


def _set_entry(environment: Environment, entry: str) -> None:
    if not environment.replace(entry):
        environment.add(entry)


def echo(args: Sequence[str], stdout: TextIO) -> int:
    """Write the arguments after ``args[0]``; leading ``-n`` flags drop the newline."""
    words = list(args[1:])
    newline = True
    while words and words[0] == "-n":
        newline = False
        words.pop(0)
    last = len(words) - 1
    pieces: list[str] = []
    for position, word in enumerate(words):
        pieces.append(word)
        if word and position < last:
            pieces.append(" ")
    if newline:
        pieces.append("\n")
    stdout.write("".join(pieces))
    return SUCCESS


def pwd(stdout: TextIO) -> int:
    """Write the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError:
        return FAILURE
    stdout.write(f"{cwd}\n")
    return SUCCESS


def _cd_target(args: Sequence[str], state: ShellState) -> str:
    if len(args) < 2:
        variable = _HOME_VAR
    elif args[1] == "-":
        variable = _PREVIOUS_DIRECTORY_VAR
    else:
        return args[1]
    if variable not in state.env or not state.env.get(variable):
        raise BuiltinError(f"{variable} is missing")
    return state.env.get(variable)


def _remember_old_directory(state: ShellState) -> None:
    try:
        cwd = os.getcwd()
    except OSError:
        return
    _set_entry(state.env, f"{_PREVIOUS_DIRECTORY_VAR}={cwd}")


def cd(args: Sequence[str], state: ShellState, stderr: TextIO) -> int:
    """Change directory to ``args[1]``, to ``$HOME`` without one, or to ``$OLDPWD`` on ``-``."""
    try:
        target = _cd_target(args, state)
        _remember_old_directory(state)
        try:
            os.chdir(target)
        except OSError as exc:
            if len(args) > 2:
                message = f"cd: no such file or directory {args[1]}"
            else:
                message = f"cd: {exc.strerror}: {target}"
            raise BuiltinError(message) from exc
    except BuiltinError as error:
        return _report(error, stderr)
    return SUCCESS


def _export_one(argument: str, state: ShellState) -> None:
    if not argument or argument.startswith("="):
        raise BuiltinError(f"export: not an identifier {argument}")
    kind = classify_identifier(argument)
    if kind is IdentifierKind.INVALID_CHAR:
        raise BuiltinError(f"export: not in the context {entry_name(argument)}")
    if kind is IdentifierKind.STARTS_WITH_DIGIT:
        raise BuiltinError(f"export: not an identifier {entry_name(argument)}")
    if kind is IdentifierKind.NAME_ONLY:
        if argument not in state.exported:
            state.exported.add(argument)
        return
    _set_entry(state.env, argument)
    _set_entry(state.exported, argument)


def export(
    args: Sequence[str], state: ShellState, stdout: TextIO, stderr: TextIO
) -> int:
    """List exported variables, or export each ``NAME`` / ``NAME=value`` argument."""
    if len(args) < 2:
        for line in state.exported.declarations():
            stdout.write(f"{line}\n")
        return SUCCESS
    status = SUCCESS
    for argument in args[1:]:
        try:
            _export_one(argument, state)
        except BuiltinError as error:
            status = _report(error, stderr)
    return status


def unset(args: Sequence[str], state: ShellState) -> int:
    """Remove each named variable from the environment and the export list."""
    for name in args[1:]:
        state.env.remove(name)
        state.exported.remove(name)
    return SUCCESS


def print_env(state: ShellState, stdout: TextIO) -> int:
    """Write every environment entry on its own line."""
    for entry in state.env:
        stdout.write(f"{entry}\n")
    return SUCCESS


def exit_shell(args: Sequence[str], state: ShellState, stderr: TextIO) -> int:
    """Mark the shell as exiting and return the status it should exit with."""
    state.exiting = True
    stderr.write("exit\n")
    if len(args) > 2:
        state.status = FAILURE
        stderr.write("minishell: exit: too many args\n")
    return state.status