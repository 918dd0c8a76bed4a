"""Lexical scopes — chained name → declared type maps used during analysis."""

from __future__ import annotations

from plc.errors import AnalysisError
from plc.stdlib import Type


class Scope:
    """One scope level; lookup walks outward through ``parent``.

    A scope owns its bindings. Each analysis run starts from its own root
    scope, and nested blocks get a ``child()`` that is dropped when the
    block ends.
    """

    def __init__(self, parent: Scope | None = None) -> None:
        self.parent = parent
        self._bindings: dict[str, Type] = {}

    def define(self, name: str, type_: Type) -> None:
        if name in self._bindings:
            raise AnalysisError(f"duplicate declaration of '{name}'")
        self._bindings[name] = type_

    def lookup(self, name: str) -> Type | None:
        """Innermost binding for *name*, or None when unbound."""
        scope: Scope | None = self
        while scope is not None:
            if name in scope._bindings:
                return scope._bindings[name]
            scope = scope.parent
        return None

    def defined_in_this_scope(self, name: str) -> bool:
        return name in self._bindings

    def child(self) -> Scope:
        return Scope(self)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __repr__(self) -> str:
        return f"Scope({self._bindings!r}, parent={self.parent!r})"
