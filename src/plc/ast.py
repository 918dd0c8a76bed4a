"""AST node types for parsed and analyzed programs.

The untyped tree produced by the parser leaves every ``type`` field unset;
the analyzer builds a new tree in which each expression (and declaration)
carries its resolved :class:`~plc.stdlib.Type`.  Spans are kept for error
reporting only and never take part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, TypeAlias

from plc.tokens import Span

if TYPE_CHECKING:
    from plc.stdlib import Type

LiteralValue: TypeAlias = "bool | int | Decimal | float | str"


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Literal:
    """Boolean, integer, decimal, or string constant."""

    value: LiteralValue
    type: Type | None = None
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Group:
    """Parenthesized expression, kept so generation can re-emit the parens."""

    expression: Expression
    span: Span | None = field(default=None, compare=False, repr=False)

    @property
    def type(self) -> Type | None:
        return self.expression.type


@dataclass(frozen=True, slots=True)
class Binary:
    """Binary operation: == != + - * /."""

    operator: str
    left: Expression
    right: Expression
    type: Type | None = None
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Variable:
    """Reference to a declared variable."""

    name: str
    type: Type | None = None
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Function:
    """Built-in function call; ``name`` becomes the target call name after analysis."""

    name: str
    arguments: tuple[Expression, ...] = ()
    type: Type | None = None
    span: Span | None = field(default=None, compare=False, repr=False)


Expression: TypeAlias = "Literal | Group | Binary | Variable | Function"


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    """Expression evaluated for its effect; must be a function call."""

    expression: Expression
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Declaration:
    """LET name: TYPE (= value)?;"""

    name: str
    type_name: str
    value: Expression | None = None
    type: Type | None = None
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Assignment:
    """name = expression;"""

    name: str
    expression: Expression
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class If:
    """IF condition THEN ... (ELSE ...)? END"""

    condition: Expression
    then_branch: tuple[Statement, ...]
    else_branch: tuple[Statement, ...] = ()
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class While:
    """WHILE condition DO ... END"""

    condition: Expression
    body: tuple[Statement, ...] = ()
    span: Span | None = field(default=None, compare=False, repr=False)


Statement: TypeAlias = "ExpressionStatement | Declaration | Assignment | If | While"


@dataclass(frozen=True, slots=True)
class Source:
    """Root node: the whole program."""

    statements: tuple[Statement, ...]
    span: Span | None = field(default=None, compare=False, repr=False)
