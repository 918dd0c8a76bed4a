"""PLC parser — converts a token stream into an untyped AST."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from plc.ast import (
    Assignment,
    Binary,
    Declaration,
    Expression,
    ExpressionStatement,
    Function,
    Group,
    If,
    Literal,
    Source,
    Statement,
    Variable,
    While,
)
from plc.errors import ParseError
from plc.lexer import tokenize
from plc.tokens import Position, Span, Token, TokenType


class Parser:
    """Recursive descent parser for PLC token streams.

    Each grammar rule is one ``_parse_*`` method; binary levels fold
    left-associatively, lowest precedence first: equality, additive,
    multiplicative, primary.
    """

    def __init__(self, tokens: list[Token], source: str = "", filename: str = "input.plc") -> None:
        self._tokens = tokens
        self._source = source
        self._filename = filename
        self._pos = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> Token | None:
        idx = self._pos + offset
        if idx < len(self._tokens):
            return self._tokens[idx]
        return None

    def _at(self, literal: str, tt: TokenType | None = None, offset: int = 0) -> bool:
        """True if the token at *offset* has the given literal (and type)."""
        tok = self._peek(offset)
        if tok is None or tok.literal != literal:
            return False
        return tt is None or tok.type == tt

    def _at_type(self, tt: TokenType) -> bool:
        tok = self._peek()
        return tok is not None and tok.type == tt

    def _at_keyword(self, *keywords: str) -> bool:
        tok = self._peek()
        return tok is not None and tok.type == TokenType.IDENTIFIER and tok.literal in keywords

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _expect(self, literal: str, message: str) -> Token:
        if not self._at(literal):
            raise self._error(message)
        return self._advance()

    def _expect_keyword(self, keyword: str, message: str) -> Token:
        if not self._at_keyword(keyword):
            raise self._error(message)
        return self._advance()

    def _expect_identifier(self, message: str) -> Token:
        if not self._at_type(TokenType.IDENTIFIER):
            raise self._error(message)
        return self._advance()

    def _prev_end(self) -> Position:
        """End position of the previously consumed token."""
        if self._pos > 0:
            return self._tokens[self._pos - 1].span.end
        return self._eof_position()

    def _eof_position(self) -> Position:
        if self._tokens:
            return self._tokens[-1].span.end
        return Position(1, 1, 0)

    def _span_from(self, start: Position) -> Span:
        return Span(start, self._prev_end())

    def _error(self, message: str) -> ParseError:
        tok = self._peek()
        if tok is not None:
            span = tok.span
        else:
            end = self._eof_position()
            span = Span(end, end)
        return ParseError(message, span, self._source)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse(self) -> Source:
        start = self._tokens[0].span.start if self._tokens else Position(1, 1, 0)
        statements: list[Statement] = []
        while not self._at_end():
            statements.append(self._parse_statement())
        return Source(tuple(statements), self._span_from(start))

    def _parse_statement(self) -> Statement:
        if self._at_keyword("LET"):
            return self._parse_declaration()
        if self._at_keyword("IF"):
            return self._parse_if()
        if self._at_keyword("WHILE"):
            return self._parse_while()
        if self._at_type(TokenType.IDENTIFIER) and self._at("=", TokenType.OPERATOR, offset=1):
            return self._parse_assignment()
        return self._parse_expression_statement()

    def _parse_expression_statement(self) -> ExpressionStatement:
        start = self._peek().span.start
        expr = self._parse_expression()
        self._expect(";", "expected ';' after expression")
        return ExpressionStatement(expr, self._span_from(start))

    def _parse_declaration(self) -> Declaration:
        start = self._advance().span.start  # consume LET
        name = self._expect_identifier("expected variable name after 'LET'").literal
        self._expect(":", f"expected ':' after variable name '{name}'")
        type_name = self._expect_identifier("expected type name after ':'").literal

        value: Expression | None = None
        if self._at("=", TokenType.OPERATOR):
            self._advance()
            value = self._parse_expression()

        self._expect(";", "expected ';' at end of declaration")
        return Declaration(name, type_name, value, span=self._span_from(start))

    def _parse_assignment(self) -> Assignment:
        name_tok = self._advance()
        self._advance()  # consume '='
        expr = self._parse_expression()
        self._expect(";", "expected ';' at end of assignment")
        return Assignment(name_tok.literal, expr, self._span_from(name_tok.span.start))

    def _parse_if(self) -> If:
        start = self._advance().span.start  # consume IF
        condition = self._parse_expression()
        self._expect_keyword("THEN", "expected 'THEN' after IF condition")

        then_branch = self._parse_block("ELSE", "END")
        if not then_branch:
            raise self._error("expected at least one statement after 'THEN'")

        else_branch: tuple[Statement, ...] = ()
        if self._at_keyword("ELSE"):
            self._advance()
            else_branch = self._parse_block("END")
            if not else_branch:
                raise self._error("expected at least one statement after 'ELSE'")

        self._expect_keyword("END", "expected 'END' to close IF")
        return If(condition, then_branch, else_branch, self._span_from(start))

    def _parse_while(self) -> While:
        start = self._advance().span.start  # consume WHILE
        condition = self._parse_expression()
        self._expect_keyword("DO", "expected 'DO' after WHILE condition")
        body = self._parse_block("END")
        self._expect_keyword("END", "expected 'END' to close WHILE")
        return While(condition, body, self._span_from(start))

    def _parse_block(self, *terminators: str) -> tuple[Statement, ...]:
        """Parse statements up to (not including) one of the terminator keywords."""
        statements: list[Statement] = []
        while not self._at_end() and not self._at_keyword(*terminators):
            statements.append(self._parse_statement())
        return tuple(statements)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        return self._parse_equality()

    def _parse_equality(self) -> Expression:
        return self._parse_left_assoc(_EQUALITY_OPS, self._parse_additive)

    def _parse_additive(self) -> Expression:
        return self._parse_left_assoc(_ADDITIVE_OPS, self._parse_multiplicative)

    def _parse_multiplicative(self) -> Expression:
        return self._parse_left_assoc(_MULTIPLICATIVE_OPS, self._parse_primary)

    def _parse_left_assoc(
        self,
        operators: frozenset[str],
        operand: Callable[[], Expression],
    ) -> Expression:
        """operand (op operand)*, folding each new operator over the result so far."""
        start = self._peek().span.start if not self._at_end() else self._eof_position()
        expr = operand()
        while self._at_type(TokenType.OPERATOR) and self._peek().literal in operators:
            operator = self._advance().literal
            right = operand()
            expr = Binary(operator, expr, right, span=self._span_from(start))
        return expr

    def _parse_primary(self) -> Expression:
        tok = self._peek()
        if tok is None:
            raise self._error("expected expression, found end of input")

        if tok.type == TokenType.IDENTIFIER:
            if tok.literal in ("TRUE", "FALSE"):
                self._advance()
                return Literal(tok.literal == "TRUE", span=tok.span)
            return self._parse_identifier_expression()

        if tok.type == TokenType.INTEGER:
            self._advance()
            return Literal(int(tok.literal), span=tok.span)

        if tok.type == TokenType.DECIMAL:
            self._advance()
            return Literal(Decimal(tok.literal), span=tok.span)

        if tok.type == TokenType.STRING:
            self._advance()
            return Literal(tok.literal[1:-1], span=tok.span)

        if tok.literal == "(":
            self._advance()
            inner = self._parse_expression()
            self._expect(")", "expected closing ')'")
            return Group(inner, self._span_from(tok.span.start))

        raise self._error(f"expected expression, found '{tok.literal}'")

    def _parse_identifier_expression(self) -> Variable | Function:
        name_tok = self._advance()
        if not self._at("(", TokenType.OPERATOR):
            return Variable(name_tok.literal, span=name_tok.span)

        self._advance()  # consume '('
        arguments: list[Expression] = []
        if not self._at(")", TokenType.OPERATOR):
            arguments.append(self._parse_expression())
            while self._at(",", TokenType.OPERATOR):
                self._advance()
                arguments.append(self._parse_expression())
        self._expect(")", f"expected ',' or ')' in arguments to '{name_tok.literal}'")
        return Function(name_tok.literal, tuple(arguments), span=self._span_from(name_tok.span.start))


# Module-level constants
_EQUALITY_OPS: frozenset[str] = frozenset({"==", "!="})
_ADDITIVE_OPS: frozenset[str] = frozenset({"+", "-"})
_MULTIPLICATIVE_OPS: frozenset[str] = frozenset({"*", "/"})


def parse(tokens: list[Token], source: str = "", filename: str = "input.plc") -> Source:
    """Parse a token list into a Source AST."""
    return Parser(tokens, source, filename).parse()


def parse_source(source: str, filename: str = "input.plc") -> Source:
    """Convenience function: tokenize and parse source text."""
    tokens = tokenize(source, filename)
    return Parser(tokens, source, filename).parse()
