"""Command-line interface for PLC."""

from __future__ import annotations

import argparse
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from plc.errors import AnalysisError, LexError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_CLASS_NAME = "Main"
DEFAULT_INDENT = 4


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    class_name: str
    indent: int
    watch: bool
    debug: bool
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="plc",
        description="Compile a PLC program to Java source",
    )
    p.add_argument("input", help="Input .plc file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover plc.toml)",
    )
    p.add_argument(
        "--class-name",
        default=None,
        metavar="NAME",
        help=f"Name of the generated Java class (default: {DEFAULT_CLASS_NAME})",
    )
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help=f"Spaces per indent level in generated code (default: {DEFAULT_INDENT})",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and recompile")
    p.add_argument("--debug", action="store_true", help="Dump typed AST to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Log compiler stages to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "plc.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _check_class_name(name: str) -> str:
    if not name.isidentifier():
        raise argparse.ArgumentTypeError(f"invalid class name: {name}")
    return name


def _check_indent(value: int) -> int:
    if value < 0:
        raise argparse.ArgumentTypeError(f"indent must not be negative: {value}")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    class_name = DEFAULT_CLASS_NAME
    indent = DEFAULT_INDENT
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_class = cfg_output.get("class_name")
        if isinstance(cfg_class, str):
            class_name = cfg_class
        cfg_indent = cfg_output.get("indent")
        if isinstance(cfg_indent, int) and not isinstance(cfg_indent, bool):
            indent = cfg_indent

    if args.class_name is not None:
        class_name = args.class_name
    if args.indent is not None:
        indent = args.indent

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        class_name=_check_class_name(class_name),
        indent=_check_indent(indent),
        watch=args.watch,
        debug=args.debug,
        verbose=args.verbose,
    )


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def compile_file(options: CliOptions) -> str:
    """Read, tokenize, parse, analyze, and generate Java for a PLC file."""
    from plc.analyzer import analyze
    from plc.debug import dump_ast
    from plc.generator import generate
    from plc.parser import parse_source

    filename = str(options.input_file)
    source = options.input_file.read_text(encoding="utf-8")
    logger.debug("read %d characters from %s", len(source), filename)

    ast = parse_source(source, filename)
    typed = analyze(ast, source=source)
    logger.debug("analyzed %d statements", len(typed.statements))

    if options.debug:
        dump_ast(typed, file=sys.stderr)

    return generate(typed, class_name=options.class_name, indent=options.indent)


def _write_output(options: CliOptions, java: str) -> None:
    if options.output_file:
        options.output_file.write_text(java, encoding="utf-8")
        logger.debug("wrote %s", options.output_file)
    else:
        sys.stdout.write(java)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recompile on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write_output(options, compile_file(options))
                    print(f"Compiled {options.input_file}", file=sys.stderr)
                except (LexError, ParseError, AnalysisError) as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    setup_logging(options.verbose)

    if options.watch:
        watch_loop(options)
        return 0

    filename = str(options.input_file)
    try:
        java = compile_file(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (LexError, ParseError) as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except AnalysisError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 2

    _write_output(options, java)
    return 0
