"""Standard library catalog — type names and built-in function signatures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping

from plc.errors import AnalysisError


class Type(Enum):
    BOOLEAN = auto()
    INTEGER = auto()
    DECIMAL = auto()
    STRING = auto()
    VOID = auto()  # no value; never declarable
    ANY = auto()  # assignability target only


@dataclass(frozen=True, slots=True)
class FunctionSignature:
    """A built-in function: source name, parameter types, result, and target call."""

    name: str
    parameter_types: tuple[Type, ...]
    return_type: Type
    target_name: str

    @property
    def arity(self) -> int:
        return len(self.parameter_types)


@dataclass(frozen=True)
class Catalog:
    """Read-only registry consulted by the analyzer and the generator."""

    type_names: Mapping[Type, str]
    functions: Mapping[tuple[str, int], FunctionSignature] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [t.name for t in Type if t not in self.type_names]
        if missing:
            raise ValueError(f"catalog has no target name for: {', '.join(missing)}")
        object.__setattr__(self, "type_names", MappingProxyType(dict(self.type_names)))
        object.__setattr__(self, "functions", MappingProxyType(dict(self.functions)))

    def target_type_name(self, type_: Type) -> str:
        return self.type_names[type_]

    def resolve_type(self, name: str) -> Type:
        """Resolve a source type name (e.g. ``INTEGER``) to a :class:`Type`."""
        try:
            return Type[name]
        except KeyError:
            raise AnalysisError(f"unknown type '{name}'") from None

    def lookup_function(self, name: str, arity: int) -> FunctionSignature | None:
        return self.functions.get((name, arity))

    @property
    def function_names(self) -> frozenset[str]:
        return frozenset(name for name, _ in self.functions)


def _make_java() -> Catalog:
    functions: dict[tuple[str, int], FunctionSignature] = {}

    def f(name: str, params: tuple[Type, ...], returns: Type, target: str) -> None:
        functions[(name, len(params))] = FunctionSignature(name, params, returns, target)

    f("PRINT", (Type.ANY,), Type.VOID, "System.out.println")

    return Catalog(
        type_names={
            Type.BOOLEAN: "boolean",
            Type.INTEGER: "int",
            Type.DECIMAL: "double",
            Type.STRING: "String",
            Type.VOID: "Void",
            Type.ANY: "Object",
        },
        functions=functions,
    )


JAVA: Catalog = _make_java()
