"""Built-in commands and executable lookup."""

from __future__ import annotations

import os
import re
import sys
from typing import Callable

INT_MAX = 2**31 - 1
INT_MIN = -(2**31)

Builtin = Callable[[list[str]], int]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ShellExit(Exception):
    """Raised by the exit builtin to end the shell with a status."""

    def __init__(self, code: int) -> None:
        super().__init__(f"exit {code}")
        self.code = code


def _is_executable(path: str) -> bool:
    return os.access(path, os.X_OK)


def find_executable(cmd: str) -> str | None:
    """Return the full path of the executable for ``cmd``, or None if there is none."""
    if cmd.startswith("/"):
        return cmd if _is_executable(cmd) else None
    if cmd.startswith("./"):
        try:
            full = os.getcwd() + cmd[1:]
        except OSError:
            return None
        return full if _is_executable(full) else None

    search = os.environ.get("PATH")
    if search is None:
        return None
    for directory in filter(None, search.split(":")):
        full = directory + cmd if directory.endswith("/") else f"{directory}/{cmd}"
        if _is_executable(full):
            return full
    return None


def _strtol(text: str) -> tuple[int, str]:
    match = _LEADING_INT.match(text)
    if match is None:
        return 0, text
    return int(match.group(1)), text[match.end():]


def cmd_cd(argv: list[str]) -> int:
    if len(argv) == 1:
        return 0
    if len(argv) == 2:
        try:
            os.chdir(argv[1])
        except OSError:
            print(f"cd: {argv[1]}: No such file or directory")
            return 1
        return 0
    print("cd: too many arguments")
    return 1


def cmd_echo(argv: list[str]) -> int:
    print("".join(f"{arg} " for arg in argv[1:]))
    return 0


def cmd_exit(argv: list[str]) -> int:
    if len(argv) == 1:
        raise ShellExit(0)
    if len(argv) != 2:
        print("exit: too many arguments", file=sys.stderr)
        return 1
    code, rest = _strtol(argv[1])
    if code >= INT_MAX or code <= INT_MIN:
        print(f"exit: {code} exceeds the valid range", file=sys.stderr)
        return 2
    if rest:
        print(f"exit: {argv[1]} is not a valid argument", file=sys.stderr)
        return 3
    raise ShellExit(code)


def cmd_pwd(argv: list[str]) -> int:
    try:
        print(os.getcwd())
    except OSError:
        return 1
    return 0


def cmd_type(argv: list[str]) -> int:
    failed = False
    for name in argv[1:]:
        if find_builtin(name) is not None:
            print(f"{name} is a shell builtin")
        elif (path := find_executable(name)) is not None:
            print(f"{name} is {path}")
        else:
            print(f"{name}: not found")
            failed = True
    return int(failed)


BUILTINS: dict[str, Builtin] = {
    "cd": cmd_cd,
    "echo": cmd_echo,
    "exit": cmd_exit,
    "pwd": cmd_pwd,
    "type": cmd_type,
}


def find_builtin(name: str) -> Builtin | None:
    """Return the builtin called ``name``, or None."""
    return BUILTINS.get(name)