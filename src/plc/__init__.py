"""PLC toy-language to Java compiler."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plc.stdlib import Catalog

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def compile(
    source: str,
    filename: str = "input.plc",
    catalog: Catalog | None = None,
    class_name: str = "Main",
    indent: int = 4,
) -> str:
    """Tokenize, parse, analyze, and generate Java for PLC source."""
    from plc.analyzer import analyze
    from plc.generator import generate
    from plc.lexer import tokenize
    from plc.parser import parse
    from plc.stdlib import JAVA

    if catalog is None:
        catalog = JAVA

    tokens = tokenize(source, filename)
    logger.debug("%s: %d tokens", filename, len(tokens))
    ast = parse(tokens, source, filename)
    logger.debug("%s: %d top-level statements", filename, len(ast.statements))
    typed = analyze(ast, catalog=catalog, source=source)
    logger.debug("%s: analysis passed", filename)
    return generate(typed, catalog, class_name, indent)
