"""Batch extraction driver.

Runs the extraction pipeline over every component file matched by a glob
pattern, threading one accumulator through all of them. Files are
processed strictly in sorted order so that the first writer of an id is
deterministic.

Python 3.13+.
"""

from __future__ import annotations

import glob
import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from babel.messages.pofile import read_po

from svextract.config import ExtractConfig, Preprocessor
from svextract.constants import SOURCE_ENCODING, TEMPLATE_FILE_PATTERN
from svextract.diagnostics import SourceReadError
from svextract.diagnostics.templates import ErrorTemplate
from svextract.enums import OutputFormat
from svextract.extraction import MessageRecord, extract_messages, merge_records
from svextract.serialization import render

__all__ = [
    "discover_files",
    "extract_file",
    "extract_files",
    "load_accumulator",
    "write_output",
]

logger = logging.getLogger(__name__)

_TEMPLATE_FILE_RE = re.compile(TEMPLATE_FILE_PATTERN, re.IGNORECASE)


def discover_files(pattern: str) -> list[Path]:
    """Component files matching a glob pattern, sorted.

    Example:
        >>> discover_files("src/**/*")
        [PosixPath('src/App.svelte'), PosixPath('src/lib/Nav.svelte')]
    """
    matches = sorted(
        path for path in glob.glob(pattern, recursive=True) if _TEMPLATE_FILE_RE.search(path)
    )
    logger.debug("Pattern %r matched %d file(s)", pattern, len(matches))
    return [Path(path) for path in matches]


def _read_json(path: Path) -> dict[str, object]:
    data = json.loads(path.read_text(encoding=SOURCE_ENCODING))
    if not isinstance(data, dict):
        msg = f"expected a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    return data


def _read_catalog(path: Path, *, shallow: bool) -> dict[str, object]:
    with path.open("rb") as fileobj:
        catalog = read_po(fileobj)
    records = [
        MessageRecord(fields={"id": message.id, "default": message.string})
        for message in catalog
        if message.id and isinstance(message.id, str)
    ]
    return merge_records(records, {}, shallow=shallow)


def load_accumulator(output: Path | None, config: ExtractConfig) -> dict[str, object]:
    """Initial accumulator for a run.

    Seeded from the existing output file unless overwriting; an output file
    that cannot be read is logged and ignored.

    Args:
        output: Output file, or None when printing to stdout
        config: Run options

    Returns:
        Seed dictionary (empty when there is nothing to seed from)
    """
    if output is None or config.overwrite or not output.is_file():
        return {}
    try:
        if config.output_format is OutputFormat.PO:
            accumulator = _read_catalog(output, shallow=config.shallow)
        else:
            accumulator = _read_json(output)
    except (OSError, ValueError) as exc:
        logger.warning("%s", ErrorTemplate.output_unreadable(str(output), str(exc)).message)
        return {}
    logger.info("Seeded %d top-level entries from %s", len(accumulator), output)
    return accumulator


def extract_file(
    path: Path,
    accumulator: dict[str, object],
    *,
    shallow: bool = False,
    preprocess: Preprocessor | None = None,
) -> dict[str, object]:
    """Extract one component file into accumulator.

    Raises:
        SourceReadError: If the file cannot be read or decoded, or the
            preprocess hook fails
        TemplateSyntaxError: If the (preprocessed) file cannot be parsed
        InvalidDefinitionError: If a definition catalog is malformed
    """
    filename = str(path)
    try:
        source = path.read_text(encoding=SOURCE_ENCODING)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(ErrorTemplate.source_unreadable(filename, str(exc))) from exc
    if preprocess is not None:
        try:
            source = preprocess(source, filename)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise SourceReadError(
                ErrorTemplate.preprocess_failed(filename, f"{type(exc).__name__}: {exc}")
            ) from exc
        if not isinstance(source, str):
            raise SourceReadError(
                ErrorTemplate.preprocess_failed(
                    filename, f"expected str, got {type(source).__name__}"
                )
            )
    logger.debug("Extracting %s", filename)
    return extract_messages(source, accumulator, shallow=shallow, filename=filename)


def extract_files(
    paths: Iterable[Path],
    accumulator: dict[str, object],
    *,
    shallow: bool = False,
    preprocess: Preprocessor | None = None,
) -> dict[str, object]:
    """Extract every file into accumulator, in order.

    The first error aborts the whole run.
    """
    count = 0
    for path in paths:
        extract_file(path, accumulator, shallow=shallow, preprocess=preprocess)
        count += 1
    logger.info("Extracted messages from %d file(s)", count)
    return accumulator


def write_output(
    accumulator: dict[str, object],
    output: Path | None,
    output_format: OutputFormat = OutputFormat.JSON,
) -> str:
    """Render accumulator and write it to output (parent directories created).

    Returns:
        Rendered text (the caller prints it when output is None)
    """
    text = render(accumulator, output_format)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding=SOURCE_ENCODING)
        logger.info("Wrote %s", output)
    return text
