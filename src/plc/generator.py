"""Java generator — renders a typed AST as a complete Java source file."""

from __future__ import annotations

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
from plc.stdlib import JAVA, Catalog


class Generator:
    """Emit Java text for a typed Source.

    Output is accumulated in ``_parts``; ``_newline`` starts a fresh line at
    the current indent level, which each nested block raises by one.
    """

    def __init__(self, catalog: Catalog = JAVA, class_name: str = "Main", indent: int = 4) -> None:
        self._catalog = catalog
        self._class_name = class_name
        self._indent_unit = " " * indent
        self._indent = 0
        self._parts: list[str] = []

    def generate(self, ast: Source) -> str:
        self._parts = []
        self._indent = 0

        self._write(f"public final class {self._class_name} {{")
        self._newline()
        self._indent += 1
        self._newline()
        self._write("public static void main(String[] args) {")
        self._indent += 1
        for stmt in ast.statements:
            self._newline()
            self._statement(stmt)
        self._indent -= 1
        self._newline()
        self._write("}")
        self._indent -= 1
        self._newline()
        self._newline()
        self._write("}")
        self._parts.append("\n")

        return "".join(self._parts)

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        self._parts.append(text)

    def _newline(self) -> None:
        self._parts.append("\n")
        self._parts.append(self._indent_unit * self._indent)

    def _block(self, statements: tuple[Statement, ...]) -> None:
        """Write ``{``, one indented line per statement, then ``}``."""
        self._write("{")
        if not statements:
            self._write("}")
            return
        self._indent += 1
        for stmt in statements:
            self._newline()
            self._statement(stmt)
        self._indent -= 1
        self._newline()
        self._write("}")

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _statement(self, stmt: Statement) -> None:
        if isinstance(stmt, ExpressionStatement):
            self._write(self._expression(stmt.expression))
            self._write(";")
        elif isinstance(stmt, Declaration):
            if stmt.type is None:
                raise TypeError(f"declaration of '{stmt.name}' was not analyzed")
            self._write(f"{self._catalog.target_type_name(stmt.type)} {stmt.name}")
            if stmt.value is not None:
                self._write(f" = {self._expression(stmt.value)}")
            self._write(";")
        elif isinstance(stmt, Assignment):
            self._write(f"{stmt.name} = {self._expression(stmt.expression)};")
        elif isinstance(stmt, If):
            self._write(f"if ({self._expression(stmt.condition)}) ")
            self._block(stmt.then_branch)
            if stmt.else_branch:
                self._write(" else ")
                self._block(stmt.else_branch)
        elif isinstance(stmt, While):
            self._write(f"while ({self._expression(stmt.condition)}) ")
            self._block(stmt.body)
        else:
            raise TypeError(f"unknown statement node: {type(stmt).__name__}")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _expression(self, expr: Expression) -> str:
        if isinstance(expr, Literal):
            return _literal(expr)
        if isinstance(expr, Group):
            return f"({self._expression(expr.expression)})"
        if isinstance(expr, Binary):
            return f"{self._expression(expr.left)} {expr.operator} {self._expression(expr.right)}"
        if isinstance(expr, Variable):
            return expr.name
        if isinstance(expr, Function):
            if not expr.arguments:
                return expr.name
            args = ", ".join(self._expression(arg) for arg in expr.arguments)
            return f"{expr.name}({args})"
        raise TypeError(f"unknown expression node: {type(expr).__name__}")


def _literal(expr: Literal) -> str:
    value = expr.value
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        # always positional with a decimal point, never exponent form
        text = format(Decimal(repr(value)), "f")
        return text if "." in text else text + ".0"
    return str(value)


def generate(ast: Source, catalog: Catalog = JAVA, class_name: str = "Main", indent: int = 4) -> str:
    """Render a typed Source as Java source text."""
    return Generator(catalog, class_name, indent).generate(ast)
