"""Tests for the --debug AST dump."""

from __future__ import annotations

import io

from plc.debug import dump_ast


def _dump(ast) -> list[str]:
    buf = io.StringIO()
    dump_ast(ast, file=buf)
    return buf.getvalue().splitlines()


def test_untyped_tree(parse_text) -> None:
    assert _dump(parse_text("LET x: INTEGER = 1;")) == [
        "Source",
        "  Declaration x INTEGER",
        "    Literal(1)",
    ]


def test_typed_tree(analyze_text) -> None:
    lines = _dump(analyze_text('IF TRUE THEN PRINT("a"); ELSE PRINT(2.5); END'))
    assert lines == [
        "Source",
        "  If",
        "    Literal(True) : BOOLEAN",
        "    Then",
        "      ExpressionStatement",
        "        Function System.out.println : VOID",
        "          Literal('a') : STRING",
        "    Else",
        "      ExpressionStatement",
        "        Function System.out.println : VOID",
        "          Literal(2.5) : DECIMAL",
    ]


def test_while_and_group(analyze_text) -> None:
    lines = _dump(analyze_text("LET i: INTEGER = 0;\nWHILE i != 2 DO i = (i + 1); END"))
    assert lines[3:] == [
        "  While",
        "    Binary != : BOOLEAN",
        "      Variable i : INTEGER",
        "      Literal(2) : INTEGER",
        "    Body",
        "      Assignment i",
        "        Group : INTEGER",
        "          Binary + : INTEGER",
        "            Variable i : INTEGER",
        "            Literal(1) : INTEGER",
    ]
