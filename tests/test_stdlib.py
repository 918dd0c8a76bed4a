"""Standard library catalog: type names and function lookup."""

from __future__ import annotations

import pytest

from plc.errors import AnalysisError
from plc.stdlib import JAVA, Catalog, FunctionSignature, Type


class TestTypeNames:
    @pytest.mark.parametrize(
        "type_, expected",
        [
            (Type.BOOLEAN, "boolean"),
            (Type.INTEGER, "int"),
            (Type.DECIMAL, "double"),
            (Type.STRING, "String"),
            (Type.VOID, "Void"),
            (Type.ANY, "Object"),
        ],
    )
    def test_java_names(self, type_: Type, expected: str) -> None:
        assert JAVA.target_type_name(type_) == expected

    def test_resolve_type(self) -> None:
        assert JAVA.resolve_type("DECIMAL") == Type.DECIMAL

    def test_resolve_unknown_type(self) -> None:
        with pytest.raises(AnalysisError, match="unknown type 'FLOAT'"):
            JAVA.resolve_type("FLOAT")

    def test_type_names_are_case_sensitive(self) -> None:
        with pytest.raises(AnalysisError):
            JAVA.resolve_type("integer")


class TestFunctions:
    def test_print(self) -> None:
        sig = JAVA.lookup_function("PRINT", 1)
        assert sig == FunctionSignature("PRINT", (Type.ANY,), Type.VOID, "System.out.println")
        assert sig.arity == 1

    def test_wrong_arity(self) -> None:
        assert JAVA.lookup_function("PRINT", 3) is None

    def test_unknown(self) -> None:
        assert JAVA.lookup_function("READ", 0) is None

    def test_function_names(self) -> None:
        assert "PRINT" in JAVA.function_names


class TestCustomCatalog:
    def test_missing_type_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="no target name"):
            Catalog(type_names={Type.BOOLEAN: "bool"})

    def test_catalog_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            JAVA.functions[("X", 0)] = None  # type: ignore[index]
