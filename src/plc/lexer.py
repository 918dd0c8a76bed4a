"""PLC lexer — converts source text into a flat token stream."""

from __future__ import annotations

from plc.errors import LexError
from plc.tokens import (
    WHITESPACE,
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
    is_identifier_char,
    is_string_char,
)


class Lexer:
    """Tokenize PLC source text into a list of Token objects."""

    def __init__(self, source: str, filename: str = "input.plc") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._source):
            if self._peek() in WHITESPACE:
                self._advance()
                continue
            self._lex_token()
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(self, tt: TokenType, start: Position) -> Token:
        literal = self._source[start.offset : self._pos]
        tok = Token(tt, literal, Span(start, self._current_pos()))
        self._tokens.append(tok)
        return tok

    def _error(self, message: str, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self._current_pos()
        return LexError(message, pos, self._source)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_token(self) -> None:
        ch = self._peek()

        if is_identifier_char(ch):
            self._lex_identifier()
            return

        if is_digit(ch) or ch == ".":
            self._lex_number()
            return

        if ch in "+-" and is_digit(self._peek(1)):
            self._lex_number()
            return

        if ch == '"':
            self._lex_string()
            return

        self._lex_operator()

    def _lex_identifier(self) -> None:
        start = self._current_pos()
        while self._pos < len(self._source) and is_identifier_char(self._peek()):
            self._advance()
        self._emit(TokenType.IDENTIFIER, start)

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def _lex_number(self) -> None:
        start = self._current_pos()

        if self._peek() in "+-":
            self._advance()
        if not is_digit(self._peek()):
            raise self._error("number must start with a digit", start)

        self._consume_digits()

        tt = TokenType.INTEGER
        if self._peek() == "." and is_digit(self._peek(1)):
            self._advance()  # consume '.'
            self._consume_digits()
            tt = TokenType.DECIMAL
            if self._peek() == ".":
                raise self._error("more than one decimal point in number")

        self._emit(tt, start)

    def _consume_digits(self) -> None:
        while self._pos < len(self._source) and is_digit(self._peek()):
            self._advance()

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def _lex_string(self) -> None:
        start = self._current_pos()
        self._advance()  # consume opening quote

        while self._pos < len(self._source):
            ch = self._peek()
            if ch == '"':
                self._advance()
                self._emit(TokenType.STRING, start)
                return
            if not is_string_char(ch):
                raise self._error(f"unterminated string: invalid character {ch!r}")
            self._advance()

        raise self._error("unterminated string", start)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _lex_operator(self) -> None:
        start = self._current_pos()
        ch = self._advance()
        # == and != are the only two-character operators
        if ch in "=!" and self._peek() == "=":
            self._advance()
        self._emit(TokenType.OPERATOR, start)


def tokenize(source: str, filename: str = "input.plc") -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, filename).tokenize()
