"""Command-line interface for plugdef: lex a file and print its token stream."""

from __future__ import annotations

import argparse
import io
import json
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from plugdef.lexer import DEFAULT_COMMENT_MARKER

logger = logging.getLogger(__name__)

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    output_format: str
    comment_marker: str
    skip_layout: bool
    allow_errors: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="plugdef",
        description="Tokenize plugdef schema/plugin definition source",
    )
    p.add_argument("input", help="Input file ('-' for stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Token dump format (default: text)",
    )
    p.add_argument(
        "--skip-layout",
        action="store_true",
        default=None,
        help="Omit whitespace, line break, and comment tokens",
    )
    p.add_argument(
        "--comment-marker",
        default=None,
        metavar="MARKER",
        help=f"Comment start marker (default: {DEFAULT_COMMENT_MARKER})",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover plugdef.toml)",
    )
    p.add_argument(
        "--allow-errors",
        action="store_true",
        default=None,
        help="Exit 0 even if unscannable characters were found",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "plugdef.toml"

    if not path.is_file():
        if config_path is not None:
            raise argparse.ArgumentTypeError(f"config file not found: {path}")
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise argparse.ArgumentTypeError(f"invalid config file {path}: {exc}") from exc


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    logger.debug("config: %r", config)

    # Lexer settings: config < CLI
    comment_marker = DEFAULT_COMMENT_MARKER
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        cfg_marker = cfg_lexer.get("comment_marker")
        if isinstance(cfg_marker, str):
            comment_marker = cfg_marker
    if args.comment_marker is not None:
        comment_marker = args.comment_marker

    # Output settings: config < CLI
    output_format = "text"
    skip_layout = False
    allow_errors = False
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if isinstance(cfg_format, str):
            if cfg_format not in FORMATS:
                raise argparse.ArgumentTypeError(
                    f"invalid output format in config (expected one of {', '.join(FORMATS)}): "
                    f"{cfg_format}"
                )
            output_format = cfg_format
        cfg_skip = cfg_output.get("skip_layout")
        if isinstance(cfg_skip, bool):
            skip_layout = cfg_skip
        cfg_allow = cfg_output.get("allow_errors")
        if isinstance(cfg_allow, bool):
            allow_errors = cfg_allow
    if args.format is not None:
        output_format = args.format
    if args.skip_layout is not None:
        skip_layout = args.skip_layout
    if args.allow_errors is not None:
        allow_errors = args.allow_errors

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        output_format=output_format,
        comment_marker=comment_marker,
        skip_layout=skip_layout,
        allow_errors=allow_errors,
    )


def read_source(options: CliOptions) -> str:
    if options.input_file is None:
        return sys.stdin.read()
    return options.input_file.read_text(encoding="utf-8")


def lex_file(options: CliOptions, source: str) -> tuple[str, int]:
    """Lex *source* and render the dump; return (output text, error count).

    Each unscannable character is reported to stderr as a formatted error.
    """
    from plugdef.debug import dump_tokens, tokens_to_json
    from plugdef.errors import collect_errors
    from plugdef.lexer import significant, tokenize

    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    tokens = tokenize(source, comment_marker=options.comment_marker)
    errors = collect_errors(tokens, source)
    logger.debug("%s: %d tokens, %d errors", filename, len(tokens), len(errors))

    for err in errors:
        print(err.format(filename), file=sys.stderr)

    if options.skip_layout:
        tokens = significant(tokens)

    if options.output_format == "json":
        text = json.dumps(tokens_to_json(tokens, source), indent=2) + "\n"
    else:
        buf = io.StringIO()
        dump_tokens(tokens, source, file=buf)
        text = buf.getvalue()
    return text, len(errors)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        source = read_source(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read input: {exc}", file=sys.stderr)
        return 2

    try:
        text, error_count = lex_file(options, source)
    except ValueError as exc:
        # Bad comment marker
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        try:
            options.output_file.write_text(text, encoding="utf-8")
        except OSError as exc:
            print(f"error: cannot write output: {exc}", file=sys.stderr)
            return 2
    else:
        sys.stdout.write(text)

    if error_count and not options.allow_errors:
        logger.debug("%d unscannable characters, exiting with 1", error_count)
        return 1
    return 0
