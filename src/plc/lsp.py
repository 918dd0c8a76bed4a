"""Minimal LSP server for PLC — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from plc import __version__
from plc.analyzer import analyze
from plc.errors import AnalysisError, LexError, ParseError
from plc.parser import parse_source
from plc.tokens import Span

server = LanguageServer("plc-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _range(span: Span) -> Range:
    """Convert a 1-based source span to a 0-based LSP range."""
    return Range(
        start=Position(line=span.start.line - 1, character=span.start.column - 1),
        end=Position(line=span.end.line - 1, character=span.end.column - 1),
    )


def _diagnostic(message: str, range_: Range) -> Diagnostic:
    return Diagnostic(
        range=range_,
        message=message,
        severity=DiagnosticSeverity.Error,
        source="plc",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the PLC front end and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        ast = parse_source(source, filename)
        analyze(ast, source=source)
    except LexError as exc:
        line = exc.position.line - 1
        col = exc.position.column - 1
        diagnostics.append(
            _diagnostic(
                exc.message,
                Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
            )
        )
    except ParseError as exc:
        diagnostics.append(_diagnostic(exc.message, _range(exc.span)))
    except AnalysisError as exc:
        if exc.span is not None:
            range_ = _range(exc.span)
        else:
            range_ = Range(start=Position(line=0, character=0), end=Position(line=0, character=0))
        diagnostics.append(_diagnostic(exc.message, range_))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
