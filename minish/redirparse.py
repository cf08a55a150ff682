"""Parsing of redirection operators and their targets."""

from __future__ import annotations

from dataclasses import dataclass

from minish.redirection import RedirType, Redirection
from minish.tokens import Cursor, ParseError, TokenKind, read_token


class ShellSyntaxError(ParseError):
    """Raised for a malformed redirection."""

    def __init__(self, token: str) -> None:
        super().__init__(f"syntax error near unexpected token `{token}'")
        self.token = token


@dataclass(frozen=True)
class RedirectionParse:
    """A parsed redirection and the word before the operator, if it stands as its own argument."""

    redirection: Redirection
    argument: str | None = None


def _is_number(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _operator_kind(cursor: Cursor) -> RedirType:
    first = cursor.peek()
    cursor.advance()
    if first == "<":
        kind = RedirType.INPUT
        if cursor.peek() == ">":
            kind |= RedirType.OUTPUT
            cursor.advance()
    else:
        kind = RedirType.OUTPUT
        if cursor.peek() == ">":
            kind |= RedirType.APPEND
            cursor.advance()
    return kind


def parse_redirection(cursor: Cursor, pending: str = "") -> RedirectionParse:
    """Parse a redirection starting at a '<' or '>' under the cursor.

    ``pending`` is the text of the word written directly before the operator.
    An all-digit word names the descriptor to redirect; any other word is
    returned as an argument of its own.
    """
    operator = cursor.peek()
    if operator not in ("<", ">"):
        raise ValueError(f"no redirection operator at position {cursor.pos}")

    if _is_number(pending):
        dest = int(pending)
        argument = None
    else:
        dest = 0 if operator == "<" else 1
        argument = pending or None

    kind = _operator_kind(cursor)
    while cursor.peek() == " ":
        cursor.advance()
    if cursor.at_end():
        raise ShellSyntaxError("newline")

    by_descriptor = cursor.peek() == "&"
    if by_descriptor:
        cursor.advance()
    else:
        kind |= RedirType.PATH_FD

    parts: list[str] = []
    while not cursor.at_end():
        token = read_token(cursor)
        if token.kind is not TokenKind.TEXT:
            break
        parts.append(token.text)
    target = "".join(parts)

    if not target:
        raise ShellSyntaxError(cursor.peek() or "newline")
    if by_descriptor:
        if not _is_number(target):
            raise ShellSyntaxError(target)
        return RedirectionParse(Redirection(int(target), dest, kind), argument)
    return RedirectionParse(Redirection(target, dest, kind), argument)