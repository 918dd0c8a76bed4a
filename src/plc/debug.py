"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

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


def dump_ast(source: Source, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Source\n")
    for stmt in source.statements:
        _dump_statement(stmt, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _type_suffix(node: Expression | Declaration) -> str:
    return f" : {node.type.name}" if node.type is not None else ""


def _dump_statement(stmt: Statement, depth: int, f: TextIO) -> None:
    pad = _indent(depth)
    if isinstance(stmt, ExpressionStatement):
        f.write(f"{pad}ExpressionStatement\n")
        _dump_expression(stmt.expression, depth + 1, f)
    elif isinstance(stmt, Declaration):
        f.write(f"{pad}Declaration {stmt.name} {stmt.type_name}{_type_suffix(stmt)}\n")
        if stmt.value is not None:
            _dump_expression(stmt.value, depth + 1, f)
    elif isinstance(stmt, Assignment):
        f.write(f"{pad}Assignment {stmt.name}\n")
        _dump_expression(stmt.expression, depth + 1, f)
    elif isinstance(stmt, If):
        f.write(f"{pad}If\n")
        _dump_expression(stmt.condition, depth + 1, f)
        _dump_block("Then", stmt.then_branch, depth + 1, f)
        if stmt.else_branch:
            _dump_block("Else", stmt.else_branch, depth + 1, f)
    elif isinstance(stmt, While):
        f.write(f"{pad}While\n")
        _dump_expression(stmt.condition, depth + 1, f)
        _dump_block("Body", stmt.body, depth + 1, f)


def _dump_block(label: str, statements: tuple[Statement, ...], depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}{label}\n")
    for stmt in statements:
        _dump_statement(stmt, depth + 1, f)


def _dump_expression(expr: Expression, depth: int, f: TextIO) -> None:
    pad = _indent(depth)
    if isinstance(expr, Literal):
        f.write(f"{pad}Literal({expr.value!r}){_type_suffix(expr)}\n")
    elif isinstance(expr, Group):
        f.write(f"{pad}Group{_type_suffix(expr)}\n")
        _dump_expression(expr.expression, depth + 1, f)
    elif isinstance(expr, Binary):
        f.write(f"{pad}Binary {expr.operator}{_type_suffix(expr)}\n")
        _dump_expression(expr.left, depth + 1, f)
        _dump_expression(expr.right, depth + 1, f)
    elif isinstance(expr, Variable):
        f.write(f"{pad}Variable {expr.name}{_type_suffix(expr)}\n")
    elif isinstance(expr, Function):
        f.write(f"{pad}Function {expr.name}{_type_suffix(expr)}\n")
        for arg in expr.arguments:
            _dump_expression(arg, depth + 1, f)
