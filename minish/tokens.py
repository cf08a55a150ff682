"""Reading words, quotes and variable expansions from a command line."""

from __future__ import annotations

import os
import string
from dataclasses import dataclass
from enum import Enum, auto

_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DQUOTE_ESCAPABLE = frozenset('$`"\\\n')


class ParseError(Exception):
    """Raised when a command line cannot be parsed."""


class UnterminatedQuote(ParseError):
    """Raised when a quoted string runs to the end of the input."""

    def __init__(self, quote: str, partial: str = "") -> None:
        super().__init__(f"unterminated {quote} quote")
        self.quote = quote
        self.partial = partial


class TokenKind(Enum):
    TEXT = auto()
    SEPARATOR = auto()
    REDIRECT = auto()


@dataclass(frozen=True)
class Token:
    """A piece of a command line: text to add to the current word, a word break, or a redirection operator."""

    kind: TokenKind
    text: str = ""


class Cursor:
    """A position within a line of input."""

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    def peek(self, offset: int = 0) -> str:
        """Return the character at the given offset, or an empty string past either end."""
        index = self.pos + offset
        if 0 <= index < len(self.text):
            return self.text[index]
        return ""

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, len(self.text))

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def __repr__(self) -> str:
        return f"Cursor({self.text!r}, {self.pos})"


def expand_variable(cursor: Cursor) -> str | None:
    """Read a ``$NAME`` reference; return its value, "$" for a lone dollar, or None when unset."""
    cursor.advance()
    if cursor.peek() == " ":
        return "$"
    start = cursor.pos
    while cursor.peek() in _NAME_CHARS:
        cursor.advance()
    name = cursor.text[start:cursor.pos]
    if not name:
        return None
    return os.environ.get(name)


def read_double_quoted(cursor: Cursor) -> str:
    """Read a double-quoted string, expanding variables and handling escapes."""
    cursor.advance()
    parts: list[str] = []
    while True:
        ch = cursor.peek()
        if ch == "":
            raise UnterminatedQuote('"', "".join(parts))
        if ch == "$":
            value = expand_variable(cursor)
            if value is not None:
                parts.append(value)
        elif ch == "`":
            cursor.advance()
        elif ch == "\\" and cursor.peek(1) in _DQUOTE_ESCAPABLE:
            parts.append(cursor.peek(1))
            cursor.advance(2)
        elif ch == '"':
            cursor.advance()
            return "".join(parts)
        else:
            parts.append(ch)
            cursor.advance()


def read_token(cursor: Cursor) -> Token:
    """Read the next token at the cursor."""
    ch = cursor.peek()
    if ch == "":
        return Token(TokenKind.TEXT)
    if ch == "$":
        value = expand_variable(cursor)
        if value is None:
            cursor.advance()
            return Token(TokenKind.TEXT)
        return Token(TokenKind.TEXT, value)
    if ch == "~":
        cursor.advance()
        return Token(TokenKind.TEXT, os.environ.get("HOME", ""))
    if ch == " ":
        while cursor.peek() == " ":
            cursor.advance()
        if cursor.at_end():
            return Token(TokenKind.TEXT)
        return Token(TokenKind.SEPARATOR)
    if ch == "'":
        cursor.advance()
        start = cursor.pos
        end = cursor.text.find("'", start)
        if end < 0:
            partial = cursor.text[start:]
            cursor.advance(len(partial))
            raise UnterminatedQuote("'", partial)
        cursor.advance(end + 1 - start)
        return Token(TokenKind.TEXT, cursor.text[start:end])
    if ch == '"':
        return Token(TokenKind.TEXT, read_double_quoted(cursor))
    if ch in ("<", ">"):
        return Token(TokenKind.REDIRECT)
    if ch == "\\":
        cursor.advance()
        ch = cursor.peek()
    cursor.advance()
    return Token(TokenKind.TEXT, ch)