"""The interactive read-eval loop."""

from __future__ import annotations

import sys
from typing import TextIO

from minish.builtins import ShellExit, find_builtin, find_executable
from minish.external import run_external
from minish.parser import parse_command_line
from minish.redirection import RedirectionError, Redirector
from minish.redirparse import ShellSyntaxError
from minish.tokens import UnterminatedQuote

PROMPT = "$ "
SYNTAX_ERROR_STATUS = 30
NOT_FOUND_STATUS = 127


def read_command(stream: TextIO) -> str | None:
    """Read one command, which may span lines inside quotes or after a backslash.

    Returns None at end of input when nothing was read.
    """
    chars: list[str] = []
    in_single = in_double = escaped = False
    while True:
        ch = stream.read(1)
        if ch == "":
            return "".join(chars) if chars else None
        if escaped:
            escaped = False
        elif ch == "\n" and not (in_single or in_double):
            return "".join(chars)
        elif ch == "\\" and not in_single:
            escaped = True
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == "'" and not in_double:
            in_single = not in_single
        chars.append(ch)


def run_line(line: str, redirector: Redirector) -> int:
    """Parse and run one command line, returning its status.

    Redirections are undone before returning.
    """
    command = parse_command_line(line)
    try:
        redirector.apply(command.redirections)
        if command.empty:
            return 0
        name = command.argv[0]
        builtin = find_builtin(name)
        if builtin is not None:
            return builtin(command.argv)
        path = find_executable(name)
        if path is not None:
            return run_external(path, command.argv)
        print(f"{name}: command not found")
        return NOT_FOUND_STATUS
    finally:
        redirector.recover()


def main(argv: list[str] | None = None) -> int:
    """Run the shell on standard input until end of input or ``exit``."""
    redirector = Redirector()
    while True:
        sys.stdout.write(PROMPT)
        sys.stdout.flush()
        line = read_command(sys.stdin)
        if line is None:
            return 0
        try:
            run_line(line, redirector)
        except UnterminatedQuote:
            continue
        except ShellSyntaxError as exc:
            print(f"minish: {exc}", file=sys.stderr)
            return SYNTAX_ERROR_STATUS
        except RedirectionError as exc:
            print(f"redirection error: {exc}", file=sys.stderr)
            return 1
        except ShellExit as exc:
            return exc.code & 0xFF


if __name__ == "__main__":
    sys.exit(main())