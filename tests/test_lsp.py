"""Tests for the LSP server — diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from plc.lsp import _validate


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.plc") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="plc", version=0, text=source)
        )

    return ls, published, put


def _single_diagnostic(published):
    assert len(published) == 1
    diags = published[0].diagnostics
    assert len(diags) == 1
    d = diags[0]
    assert d.severity == DiagnosticSeverity.Error
    assert d.source == "plc"
    return d


# ---------------------------------------------------------------------------
# Lex errors
# ---------------------------------------------------------------------------


class TestLexErrors:
    def test_leading_dot(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("LET x: DECIMAL = .5;")
        _validate(ls, "file:///test.plc")

        d = _single_diagnostic(published)
        assert "digit" in d.message
        # '.' is at column 18 (1-based) → character 17 (0-based)
        assert d.range.start.line == 0
        assert d.range.start.character == 17
        assert d.range.end.character == 18


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_missing_colon(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("LET x INTEGER;")
        _validate(ls, "file:///test.plc")

        d = _single_diagnostic(published)
        assert "':'" in d.message
        assert d.range.start.character == 6
        assert d.range.end.character == 13


# ---------------------------------------------------------------------------
# Analysis errors
# ---------------------------------------------------------------------------


class TestAnalysisErrors:
    def test_undefined_variable(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("LET x: INTEGER;\ny = 1;")
        _validate(ls, "file:///test.plc")

        d = _single_diagnostic(published)
        assert "undefined variable 'y'" in d.message
        assert d.range.start.line == 1
        assert d.range.start.character == 0

    def test_empty_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("")
        _validate(ls, "file:///test.plc")

        d = _single_diagnostic(published)
        assert "at least one statement" in d.message


# ---------------------------------------------------------------------------
# Clean program → empty diagnostics
# ---------------------------------------------------------------------------


class TestCleanProgram:
    def test_valid_program(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put('LET x: INTEGER = 1;\nWHILE x != 3 DO\n    x = x + 1;\nEND\nPRINT("done");')
        _validate(ls, "file:///test.plc")

        assert len(published) == 1
        assert published[0].diagnostics == []
