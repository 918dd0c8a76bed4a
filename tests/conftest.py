"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from plc.analyzer import analyze
from plc.ast import Source
from plc.generator import generate
from plc.lexer import tokenize
from plc.parser import parse_source
from plc.scope import Scope
from plc.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def parse_text():
    """Return a helper that tokenizes and parses source into an untyped Source."""

    def _parse(source: str) -> Source:
        return parse_source(source, "test.plc")

    return _parse


@pytest.fixture
def analyze_text():
    """Return a helper that parses and analyzes source in an optional scope."""

    def _analyze(source: str, scope: Scope | None = None) -> Source:
        return analyze(parse_source(source, "test.plc"), scope, source=source)

    return _analyze


@pytest.fixture
def compile_text():
    """Return a helper that runs the whole pipeline and returns Java text."""

    def _compile(source: str, **kwargs) -> str:
        typed = analyze(parse_source(source, "test.plc"), source=source)
        return generate(typed, **kwargs)

    return _compile


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_literals(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token literals match the expected list."""
    actual = [t.literal for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def main_body(java: str) -> list[str]:
    """Return the lines between the main method's braces, dedented one level."""
    lines = java.splitlines()
    start = next(i for i, line in enumerate(lines) if "static void main" in line)
    end = len(lines) - 1 - next(
        i for i, line in enumerate(reversed(lines)) if line == "    }"
    )
    return [line[8:] for line in lines[start + 1 : end]]
