"""Command line interface.

    svextract extract "src/**/*.svelte" messages/en.json
    svextract extract "src/**/*" --shallow --format po > messages.pot

Exit codes: 0 on success, 1 when extraction fails (syntax error in a
component, malformed definition catalog, invalid config), 2 on usage
errors.

Python 3.13+.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from svextract.batch import discover_files, extract_files, load_accumulator, write_output
from svextract.config import ExtractConfig, load_preprocessor, resolve_config_path
from svextract.diagnostics import DiagnosticFormatter, ExtractError, TemplateSyntaxError
from svextract.enums import OutputFormat

__all__ = ["build_parser", "main", "run_extract"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the svextract command."""
    parser = argparse.ArgumentParser(
        prog="svextract",
        description="Extract svelte-i18n message definitions from component files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the nested message dictionary of every component:
  svextract extract "src/**/*.svelte"

  # Merge into an existing dictionary, keeping dotted ids flat:
  svextract extract "src/**/*" messages/en.json --shallow

  # Regenerate a gettext template from scratch:
  svextract extract "src/**/*" messages.pot --format po --overwrite
""",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser(
        "extract",
        help="Extract messages into a dictionary",
        description="Extract messages from the component files matched by a glob pattern.",
    )
    extract.add_argument(
        "pattern",
        help="Glob pattern of component files (recursive ** supported)",
    )
    extract.add_argument(
        "output",
        nargs="?",
        type=Path,
        help="Output file (printed to stdout when omitted)",
    )
    extract.add_argument(
        "--shallow",
        "-s",
        action="store_true",
        help="Keep dotted message ids as flat keys",
    )
    extract.add_argument(
        "--overwrite",
        action="store_true",
        help="Ignore the existing output file instead of merging into it",
    )
    extract.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Config module defining preprocess(source, filename)",
    )
    extract.add_argument(
        "--format",
        "-f",
        dest="output_format",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=OutputFormat.JSON,
        help="Output format (default: json)",
    )
    extract.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every processed file",
    )
    return parser


def _syntax_error_hint(config_path: Path, has_preprocess: bool) -> str:
    if has_preprocess:
        return f"Check the preprocess step defined in {config_path}"
    return f"A preprocess config may be required (looked for {config_path})"


def _report(error: ExtractError, *, hint: str | None = None) -> None:
    formatter = DiagnosticFormatter(color=sys.stderr.isatty())
    diagnostic = error.diagnostic
    if diagnostic is None:
        print(f"error: {error}", file=sys.stderr)
    else:
        if hint is not None:
            diagnostic = dataclasses.replace(diagnostic, hint=hint)
        print(formatter.format(diagnostic), file=sys.stderr)


def run_extract(pattern: str, output: Path | None, config: ExtractConfig) -> int:
    """Run one extraction; returns the process exit code."""
    config_path = resolve_config_path(config.config_path)
    try:
        preprocess = load_preprocessor(config_path)
    except ExtractError as exc:
        _report(exc)
        return 1

    accumulator = load_accumulator(output, config)
    files = discover_files(pattern)
    if not files:
        logger.warning("No component files match %r", pattern)

    try:
        extract_files(files, accumulator, shallow=config.shallow, preprocess=preprocess)
    except TemplateSyntaxError as exc:
        _report(exc, hint=_syntax_error_hint(config_path, preprocess is not None))
        return 1
    except ExtractError as exc:
        _report(exc)
        return 1

    text = write_output(accumulator, output, config.output_format)
    if output is None:
        print(text)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = ExtractConfig(
        shallow=args.shallow,
        overwrite=args.overwrite,
        output_format=args.output_format,
        config_path=args.config,
    )
    return run_extract(args.pattern, args.output, config)


if __name__ == "__main__":
    sys.exit(main())
