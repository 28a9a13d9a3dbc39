"""Accumulator rendering.

JSON is the native output: the accumulator dumped with 2-space indentation
(nested in deep mode, flat in shallow mode). The gettext rendering flattens
the accumulator back into dotted ids and builds a Babel catalog whose
msgid is the message id and whose msgstr is the default text.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from io import BytesIO

from babel.messages.catalog import Catalog
from babel.messages.pofile import write_po

from svextract.constants import OUTPUT_INDENT, SOURCE_ENCODING
from svextract.core.paths import MISSING
from svextract.enums import OutputFormat

__all__ = ["flatten", "render", "render_json", "render_po", "to_catalog"]

logger = logging.getLogger(__name__)


def _encode_hole(value: object) -> None:
    if value is MISSING:
        return None
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def render_json(accumulator: dict[str, object]) -> str:
    """Render accumulator as indented JSON (non-ASCII kept as is).

    List holes left by index paths are written as null.
    """
    return json.dumps(
        accumulator, indent=OUTPUT_INDENT, ensure_ascii=False, default=_encode_hole
    )


def flatten(value: object, prefix: str = "") -> Iterator[tuple[str, object]]:
    """Yield (dotted id, leaf value) pairs in document order.

    List positions become numeric segments; holes left in lists by index
    paths are skipped.

    Example:
        >>> list(flatten({"app": {"title": "Hi", "items": ["a", MISSING, "c"]}}))
        [('app.title', 'Hi'), ('app.items.0', 'a'), ('app.items.2', 'c')]
    """
    if isinstance(value, dict):
        for key, child in value.items():
            yield from flatten(child, f"{prefix}.{key}" if prefix else str(key))
    elif isinstance(value, list):
        for index, child in enumerate(value):
            if child is not MISSING:
                yield from flatten(child, f"{prefix}.{index}" if prefix else str(index))
    else:
        yield prefix, value


def _msgstr(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_catalog(
    accumulator: dict[str, object],
    *,
    project: str | None = None,
    locale: str | None = None,
) -> Catalog:
    """Build a Babel catalog from accumulator.

    Args:
        accumulator: Deep or shallow accumulator
        project: Project name for the catalog header
        locale: Catalog locale (None for a template catalog)

    Returns:
        Catalog with one message per id
    """
    catalog = Catalog(locale=locale, project=project, charset=SOURCE_ENCODING)
    for message_id, default in flatten(accumulator):
        if not message_id:
            continue
        catalog.add(message_id, string=_msgstr(default))
    logger.debug("Built catalog with %d message(s)", len(catalog))
    return catalog


def render_po(accumulator: dict[str, object], *, project: str | None = None) -> str:
    """Render accumulator as a gettext PO document."""
    buffer = BytesIO()
    write_po(buffer, to_catalog(accumulator, project=project), width=0)
    return buffer.getvalue().decode(SOURCE_ENCODING)


def render(accumulator: dict[str, object], output_format: OutputFormat = OutputFormat.JSON) -> str:
    """Render accumulator in the requested format."""
    match output_format:
        case OutputFormat.PO:
            return render_po(accumulator)
        case _:
            return render_json(accumulator)
