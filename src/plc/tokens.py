"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    IDENTIFIER = auto()  # [A-Za-z_]+ (keywords included)
    INTEGER = auto()  # [+-]?[0-9]+
    DECIMAL = auto()  # [+-]?[0-9]+.[0-9]+
    STRING = auto()  # "..." with quotes kept in the literal
    OPERATOR = auto()  # == != or any other single character


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with its exact source text."""

    type: TokenType
    literal: str
    span: Span

    @property
    def position(self) -> int:
        """Source offset of the first character."""
        return self.span.start.offset


KEYWORDS = frozenset({"LET", "IF", "THEN", "ELSE", "END", "WHILE", "DO", "TRUE", "FALSE"})

WHITESPACE = frozenset(" \t\n\r")

# Punctuation allowed inside string literals besides letters, digits and _
_STRING_SPECIAL = frozenset("!?/+-* ")


def is_identifier_char(ch: str) -> bool:
    """Return True if ch may appear in an identifier."""
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return "0" <= ch <= "9"


def is_string_char(ch: str) -> bool:
    """Return True if ch may appear inside a string literal."""
    return is_identifier_char(ch) or is_digit(ch) or ch in _STRING_SPECIAL
