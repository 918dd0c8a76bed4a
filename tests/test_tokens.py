"""Test token classification: identifiers, numbers, strings, operators."""

import pytest

from plc.errors import LexError
from plc.tokens import TokenType

from tests.conftest import assert_literals, assert_types


class TestIdentifiers:
    def test_simple(self, lex):
        tokens = lex("getName")
        assert_types(tokens, [TokenType.IDENTIFIER])
        assert tokens[0].literal == "getName"

    def test_underscores(self, lex):
        tokens = lex("_my_var_")
        assert_literals(tokens, ["_my_var_"])

    def test_digits_end_identifier(self, lex):
        tokens = lex("abc123")
        assert_types(tokens, [TokenType.IDENTIFIER, TokenType.INTEGER])
        assert_literals(tokens, ["abc", "123"])

    def test_keywords_are_identifiers(self, lex):
        tokens = lex("LET IF THEN ELSE END WHILE DO TRUE FALSE")
        assert all(t.type == TokenType.IDENTIFIER for t in tokens)
        assert len(tokens) == 9


class TestNumbers:
    def test_integer(self, lex):
        tokens = lex("123")
        assert_types(tokens, [TokenType.INTEGER])

    def test_signed_integer(self, lex):
        tokens = lex("-42")
        assert_types(tokens, [TokenType.INTEGER])
        assert tokens[0].literal == "-42"

    def test_plus_signed_integer(self, lex):
        tokens = lex("+7")
        assert_literals(tokens, ["+7"])

    def test_decimal(self, lex):
        tokens = lex("123.456")
        assert_types(tokens, [TokenType.DECIMAL])
        assert tokens[0].literal == "123.456"

    def test_signed_decimal(self, lex):
        tokens = lex("-1.0")
        assert_types(tokens, [TokenType.DECIMAL])

    def test_trailing_dot_is_not_part_of_number(self, lex):
        # a lone "." cannot start a number
        with pytest.raises(LexError):
            lex("1.")

    def test_sign_without_digit_is_operator(self, lex):
        tokens = lex("- 1")
        assert_types(tokens, [TokenType.OPERATOR, TokenType.INTEGER])

    def test_spaced_subtraction(self, lex):
        tokens = lex("x - 1")
        assert_types(
            tokens, [TokenType.IDENTIFIER, TokenType.OPERATOR, TokenType.INTEGER]
        )


class TestStrings:
    def test_empty(self, lex):
        tokens = lex('""')
        assert_types(tokens, [TokenType.STRING])
        assert tokens[0].literal == '""'

    def test_allowed_punctuation(self, lex):
        tokens = lex('"Hello World!? a/b+c-d*e_f"')
        assert_types(tokens, [TokenType.STRING])

    def test_literal_keeps_quotes(self, lex):
        tokens = lex('"abc"')
        assert tokens[0].literal == '"abc"'


class TestOperators:
    def test_double_equals(self, lex):
        tokens = lex("==")
        assert_types(tokens, [TokenType.OPERATOR])
        assert tokens[0].literal == "=="

    def test_not_equals(self, lex):
        tokens = lex("!=")
        assert_literals(tokens, ["!="])

    def test_single_equals(self, lex):
        assert_literals(lex("="), ["="])

    def test_bang_alone(self, lex):
        assert_literals(lex("!"), ["!"])

    def test_triple_equals(self, lex):
        assert_literals(lex("==="), ["==", "="])

    def test_punctuation(self, lex):
        tokens = lex("(),:;*/")
        assert all(t.type == TokenType.OPERATOR for t in tokens)
        assert_literals(tokens, ["(", ")", ",", ":", ";", "*", "/"])

    def test_unknown_character_is_operator(self, lex):
        assert_literals(lex("$"), ["$"])


class TestWhitespace:
    def test_only_whitespace(self, lex):
        assert lex(" \t\r\n") == []

    def test_empty_input(self, lex):
        assert lex("") == []

    def test_whitespace_separates(self, lex):
        tokens = lex("LET\tx\n:\r\nINTEGER ;")
        assert_literals(tokens, ["LET", "x", ":", "INTEGER", ";"])


class TestPositions:
    def test_offsets(self, lex):
        tokens = lex("LET x: INTEGER;")
        assert [t.position for t in tokens] == [0, 4, 5, 7, 14]

    def test_line_and_column(self, lex):
        tokens = lex("LET\n  x")
        assert tokens[1].span.start.line == 2
        assert tokens[1].span.start.column == 3

    def test_span_end(self, lex):
        tokens = lex("abc")
        assert tokens[0].span.end.offset == 3


class TestStatement:
    def test_declaration(self, lex):
        tokens = lex('LET name: STRING = "x";')
        assert_types(
            tokens,
            [
                TokenType.IDENTIFIER,
                TokenType.IDENTIFIER,
                TokenType.OPERATOR,
                TokenType.IDENTIFIER,
                TokenType.OPERATOR,
                TokenType.STRING,
                TokenType.OPERATOR,
            ],
        )

    def test_comparison(self, lex):
        tokens = lex("x==1.5")
        assert_types(tokens, [TokenType.IDENTIFIER, TokenType.OPERATOR, TokenType.DECIMAL])
