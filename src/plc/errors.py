"""Error types with formatted source context."""

from __future__ import annotations

from plc.tokens import Position, Span


def _snippet(
    message: str,
    source: str,
    start: Position,
    underline_len: int,
    filename: str,
) -> str:
    lines = source.splitlines(keepends=True)
    line_idx = start.line - 1
    col = start.column

    # Strip the trailing newline for display
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{start.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


def _span_underline(span: Span, source: str) -> int:
    """Underline the full span when on one line, otherwise to end of line."""
    if span.end.line == span.start.line:
        return max(1, span.end.column - span.start.column)
    lines = source.splitlines()
    idx = span.start.line - 1
    line_len = len(lines[idx]) if 0 <= idx < len(lines) else 0
    return max(1, line_len - span.start.column + 1)


class LexError(Exception):
    """Raised on the first tokenization error, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.plc") -> str:
        return _snippet(self.message, self.source, self.position, 1, filename)


class ParseError(Exception):
    """Raised on the first ill-formed construct, with span and source context."""

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    @property
    def position(self) -> Position:
        return self.span.start

    def format(self, filename: str = "input.plc") -> str:
        underline = _span_underline(self.span, self.source)
        return _snippet(self.message, self.source, self.span.start, underline, filename)


class AnalysisError(Exception):
    """Raised on the first semantic violation.

    Hand-built trees carry no spans, so ``span`` is optional and the
    formatted message degrades to a single ``error:`` line without one.
    """

    def __init__(self, message: str, span: Span | None = None, source: str = "") -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.plc") -> str:
        if self.span is None:
            return f"error: {self.message}"
        underline = _span_underline(self.span, self.source)
        return _snippet(self.message, self.source, self.span.start, underline, filename)

    def with_source(self, span: Span | None, source: str) -> AnalysisError:
        """Return a copy located at *span* (when this error has none) in *source*."""
        return AnalysisError(self.message, self.span or span, source)
