"""Static analysis — resolves types and rebuilds the AST as a fully typed tree."""

from __future__ import annotations

import math
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
from plc.errors import AnalysisError
from plc.scope import Scope
from plc.stdlib import JAVA, Catalog, Type
from plc.tokens import Span, is_string_char

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def check_assignable(type_: Type, target: Type) -> None:
    """Raise AnalysisError unless a *type_* value may be stored in a *target* slot.

    Assignable when the types are equal, when INTEGER widens to DECIMAL, or
    when the target is ANY and the value is not VOID.
    """
    if type_ == target:
        return
    if type_ == Type.INTEGER and target == Type.DECIMAL:
        return
    if target == Type.ANY and type_ != Type.VOID:
        return
    raise AnalysisError(f"type mismatch: {type_.name} is not assignable to {target.name}")


class Analyzer:
    """Type-check an untyped Source and return the typed copy.

    The scope chain is passed explicitly to every method: statement lists
    in IF branches and WHILE bodies are analyzed in a fresh child scope, so
    declarations inside a block are not visible after it.
    """

    def __init__(self, catalog: Catalog = JAVA, source: str = "") -> None:
        self._catalog = catalog
        self._source = source

    def _error(self, message: str, span: Span | None) -> AnalysisError:
        return AnalysisError(message, span, self._source)

    def _check_assignable(self, type_: Type, target: Type, span: Span | None) -> None:
        try:
            check_assignable(type_, target)
        except AnalysisError as exc:
            raise exc.with_source(span, self._source) from None

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def analyze(self, ast: Source, scope: Scope) -> Source:
        if not ast.statements:
            raise self._error("program must contain at least one statement", ast.span)
        statements = self._analyze_block(ast.statements, scope)
        return Source(statements, ast.span)

    def _analyze_block(self, statements: tuple[Statement, ...], scope: Scope) -> tuple[Statement, ...]:
        return tuple(self._analyze_statement(stmt, scope) for stmt in statements)

    def _analyze_statement(self, stmt: Statement, scope: Scope) -> Statement:
        if isinstance(stmt, ExpressionStatement):
            return self._analyze_expression_statement(stmt, scope)
        if isinstance(stmt, Declaration):
            return self._analyze_declaration(stmt, scope)
        if isinstance(stmt, Assignment):
            return self._analyze_assignment(stmt, scope)
        if isinstance(stmt, If):
            return self._analyze_if(stmt, scope)
        if isinstance(stmt, While):
            return self._analyze_while(stmt, scope)
        raise TypeError(f"unknown statement node: {type(stmt).__name__}")

    def _analyze_expression_statement(
        self, stmt: ExpressionStatement, scope: Scope
    ) -> ExpressionStatement:
        if not isinstance(stmt.expression, Function):
            raise self._error("expression statement must be a function call", stmt.span)
        return ExpressionStatement(self._analyze_function(stmt.expression, scope), stmt.span)

    def _analyze_declaration(self, stmt: Declaration, scope: Scope) -> Declaration:
        if scope.defined_in_this_scope(stmt.name):
            raise self._error(f"duplicate declaration of '{stmt.name}'", stmt.span)

        try:
            declared = self._catalog.resolve_type(stmt.type_name)
        except AnalysisError as exc:
            raise exc.with_source(stmt.span, self._source) from None
        if declared == Type.VOID:
            raise self._error("void is not a declarable type", stmt.span)

        # The initializer cannot see the name it initializes
        value = None
        if stmt.value is not None:
            value = self._analyze_expression(stmt.value, scope)
            self._check_assignable(value.type, declared, stmt.value.span)

        scope.define(stmt.name, declared)
        return Declaration(stmt.name, stmt.type_name, value, declared, stmt.span)

    def _analyze_assignment(self, stmt: Assignment, scope: Scope) -> Assignment:
        target = scope.lookup(stmt.name)
        if target is None:
            raise self._error(f"undefined variable '{stmt.name}'", stmt.span)
        expr = self._analyze_expression(stmt.expression, scope)
        self._check_assignable(expr.type, target, stmt.expression.span)
        return Assignment(stmt.name, expr, stmt.span)

    def _analyze_condition(self, condition: Expression, scope: Scope, keyword: str) -> Expression:
        typed = self._analyze_expression(condition, scope)
        if typed.type != Type.BOOLEAN:
            raise self._error(
                f"{keyword} condition must be BOOLEAN, got {typed.type.name}", condition.span
            )
        return typed

    def _analyze_if(self, stmt: If, scope: Scope) -> If:
        condition = self._analyze_condition(stmt.condition, scope, "IF")
        if not stmt.then_branch:
            raise self._error("IF requires at least one statement after THEN", stmt.span)
        then_branch = self._analyze_block(stmt.then_branch, scope.child())
        else_branch = self._analyze_block(stmt.else_branch, scope.child())
        return If(condition, then_branch, else_branch, stmt.span)

    def _analyze_while(self, stmt: While, scope: Scope) -> While:
        condition = self._analyze_condition(stmt.condition, scope, "WHILE")
        body = self._analyze_block(stmt.body, scope.child())
        return While(condition, body, stmt.span)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _analyze_expression(self, expr: Expression, scope: Scope) -> Expression:
        if isinstance(expr, Literal):
            return self._analyze_literal(expr)
        if isinstance(expr, Group):
            return Group(self._analyze_expression(expr.expression, scope), expr.span)
        if isinstance(expr, Binary):
            return self._analyze_binary(expr, scope)
        if isinstance(expr, Variable):
            return self._analyze_variable(expr, scope)
        if isinstance(expr, Function):
            return self._analyze_function(expr, scope)
        raise TypeError(f"unknown expression node: {type(expr).__name__}")

    def _analyze_literal(self, expr: Literal) -> Literal:
        value = expr.value
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return Literal(value, Type.BOOLEAN, expr.span)
        if isinstance(value, int):
            if not INT_MIN <= value <= INT_MAX:
                raise self._error(f"integer literal {value} is out of range", expr.span)
            return Literal(value, Type.INTEGER, expr.span)
        if isinstance(value, (Decimal, float)):
            converted = float(value)
            if math.isinf(converted):
                raise self._error(f"decimal literal {value} is out of range", expr.span)
            return Literal(converted, Type.DECIMAL, expr.span)
        if isinstance(value, str):
            for ch in value:
                if not is_string_char(ch):
                    raise self._error(f"invalid character {ch!r} in string literal", expr.span)
            return Literal(value, Type.STRING, expr.span)
        raise self._error(f"unsupported literal value {value!r}", expr.span)

    def _analyze_binary(self, expr: Binary, scope: Scope) -> Binary:
        left = self._analyze_expression(expr.left, scope)
        right = self._analyze_expression(expr.right, scope)
        lt, rt = left.type, right.type
        op = expr.operator

        if lt == Type.VOID or rt == Type.VOID:
            raise self._error(f"operand of '{op}' cannot be VOID", expr.span)

        if op in ("==", "!="):
            result = Type.BOOLEAN
        elif op == "+":
            if Type.STRING in (lt, rt):
                result = Type.STRING
            elif lt == rt == Type.INTEGER:
                result = Type.INTEGER
            else:
                result = Type.DECIMAL
        elif op in ("-", "*", "/"):
            if lt not in _NUMERIC or rt not in _NUMERIC:
                raise self._error(
                    f"operands of '{op}' are not numeric: {lt.name} {op} {rt.name}", expr.span
                )
            result = Type.INTEGER if lt == rt == Type.INTEGER else Type.DECIMAL
        else:
            raise self._error(f"unknown operator '{op}'", expr.span)

        return Binary(op, left, right, result, expr.span)

    def _analyze_variable(self, expr: Variable, scope: Scope) -> Variable:
        type_ = scope.lookup(expr.name)
        if type_ is None:
            raise self._error(f"undefined variable '{expr.name}'", expr.span)
        return Variable(expr.name, type_, expr.span)

    def _analyze_function(self, expr: Function, scope: Scope) -> Function:
        signature = self._catalog.lookup_function(expr.name, len(expr.arguments))
        if signature is None:
            if expr.name in self._catalog.function_names:
                message = f"wrong number of arguments to '{expr.name}': {len(expr.arguments)}"
            else:
                message = f"unknown function '{expr.name}'"
            raise self._error(message, expr.span)

        arguments: list[Expression] = []
        for arg, param in zip(expr.arguments, signature.parameter_types):
            typed = self._analyze_expression(arg, scope)
            self._check_assignable(typed.type, param, arg.span)
            arguments.append(typed)

        return Function(signature.target_name, tuple(arguments), signature.return_type, expr.span)


_NUMERIC = frozenset({Type.INTEGER, Type.DECIMAL})


def analyze(
    ast: Source,
    scope: Scope | None = None,
    catalog: Catalog = JAVA,
    source: str = "",
) -> Source:
    """Analyze *ast* in *scope* (a fresh root scope by default) and return the typed tree."""
    if scope is None:
        scope = Scope()
    return Analyzer(catalog, source).analyze(ast, scope)
