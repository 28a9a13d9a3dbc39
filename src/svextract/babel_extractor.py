"""Babel extraction method for component files.

Registered as the ``svelte`` extractor, so a Babel mapping file can route
component files through it:

    [svelte: src/**.svelte]
    encoding = utf-8

Every message record found in a file is reported with its id as the
message string and its default text as an extracted comment.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterator, Mapping
from typing import IO, Any

from svextract.constants import SOURCE_ENCODING
from svextract.extraction import collect_messages
from svextract.syntax import parse

__all__ = ["extract_svelte"]

logger = logging.getLogger(__name__)

type ExtractionResult = tuple[int, str | None, str, list[str]]


def extract_svelte(
    fileobj: IO[bytes],
    keywords: Mapping[str, Any] | Collection[str],  # noqa: ARG001
    comment_tags: Collection[str],  # noqa: ARG001
    options: Mapping[str, Any],
) -> Iterator[ExtractionResult]:
    """Extract messages from a component file.

    Keywords and comment tags are not used: calls are recognized through
    the file's own translation library imports.

    Args:
        fileobj: Binary file object of the component
        keywords: Babel keyword specification (ignored)
        comment_tags: Translator comment tags (ignored)
        options: Mapping options; ``encoding`` selects the source encoding

    Yields:
        (lineno, funcname, message, comments) tuples

    Raises:
        TemplateSyntaxError: If the file cannot be parsed
        InvalidDefinitionError: If a definition catalog is malformed
    """
    encoding = options.get("encoding", SOURCE_ENCODING)
    source = fileobj.read().decode(encoding)
    filename = getattr(fileobj, "name", None)
    template = parse(source, filename if isinstance(filename, str) else None)

    for record in collect_messages(template):
        message_id = record.id
        if message_id is None:
            continue
        default = record.default
        comments = [default] if isinstance(default, str) and default else []
        lineno = record.loc.line if record.loc else 1
        yield lineno, None, message_id, comments
