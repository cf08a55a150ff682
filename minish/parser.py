"""Splitting a command line into arguments and redirections."""

from __future__ import annotations

from dataclasses import dataclass, field

from minish.redirection import Redirection
from minish.redirparse import parse_redirection
from minish.tokens import Cursor, TokenKind, read_token


@dataclass
class ParsedCommand:
    """The arguments of a command and the redirections to apply around it."""

    argv: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.argv


def parse_command_line(line: str) -> ParsedCommand:
    """Parse one line of input.

    Raises ``UnterminatedQuote`` for an open quote and ``ShellSyntaxError``
    for a malformed redirection.
    """
    cursor = Cursor(line)
    command = ParsedCommand()
    word: list[str] = []
    in_word = False

    def finish_word() -> None:
        nonlocal word, in_word
        command.argv.append("".join(word))
        word = []
        in_word = False

    while not cursor.at_end():
        starts_with_space = cursor.peek() == " "
        token = read_token(cursor)
        if token.kind is TokenKind.TEXT:
            if starts_with_space:
                # Spaces running to the end of the line.
                continue
            word.append(token.text)
            in_word = True
        elif token.kind is TokenKind.SEPARATOR:
            if in_word:
                finish_word()
        else:
            result = parse_redirection(cursor, "".join(word))
            if result.argument is not None:
                command.argv.append(result.argument)
            command.redirections.append(result.redirection)
            word = []
            in_word = False

    if in_word:
        finish_word()
    if command.argv == [""]:
        command.argv = []
    return command