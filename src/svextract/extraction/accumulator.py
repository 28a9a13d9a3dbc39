"""Accumulation engine.

Merges message records into a caller-owned accumulator dictionary that is
threaded through every file of a batch. Two modes:

- deep: message ids are dotted paths ("app.nav.home" -> nested dicts)
- shallow: message ids are opaque flat keys

In both modes the first writer wins: an id that already holds a value is
never overwritten, within one file or across files.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from svextract.core.paths import assign, is_defined
from svextract.diagnostics import PathConflictError
from svextract.syntax.ast import Template
from svextract.syntax.parser import parse

from .bindings import resolve_bindings
from .collector import collect_format_calls, collect_message_definitions
from .records import MessageRecord, record_from_call, record_from_definition

__all__ = ["collect_messages", "extract_messages", "merge_records"]

logger = logging.getLogger(__name__)


def collect_messages(template: Template) -> list[MessageRecord]:
    """All message records of a component: definitions first, then calls.

    Raises:
        InvalidDefinitionError: If a definition catalog holds a non key/value entry
    """
    bindings = resolve_bindings(template)
    if bindings.is_empty:
        return []

    records: list[MessageRecord] = []
    for definition in collect_message_definitions(template, bindings):
        record = record_from_definition(definition)
        if record is not None:
            records.append(record)
    for call in collect_format_calls(template, bindings):
        record = record_from_call(call)
        if record is not None:
            records.append(record)
    return records


def merge_records(
    records: Iterable[MessageRecord],
    accumulator: dict[str, object],
    *,
    shallow: bool = False,
) -> dict[str, object]:
    """Merge records into accumulator, first writer wins.

    Records without a string id are skipped. A deep-mode id that runs
    through an existing plain value (e.g. "app.title.short" after
    "app.title") is logged and skipped.

    Args:
        records: Records in merge order
        accumulator: Target dictionary (mutated)
        shallow: Treat ids as flat keys instead of dotted paths

    Returns:
        The accumulator
    """
    for record in records:
        message_id = record.id
        if message_id is None:
            continue
        if shallow:
            if message_id not in accumulator:
                accumulator[message_id] = record.default
            continue
        if is_defined(accumulator, message_id):
            continue
        try:
            assign(accumulator, message_id, record.default)
        except PathConflictError as exc:
            reason = exc.diagnostic.message if exc.diagnostic else str(exc)
            logger.warning("Skipping message %r: %s", message_id, reason)
    return accumulator


def extract_messages(
    source: str | Template,
    accumulator: dict[str, object] | None = None,
    *,
    shallow: bool = False,
    filename: str | None = None,
) -> dict[str, object]:
    """Extract the messages of one component into accumulator.

    Example:
        >>> source = '''<script>
        ...   import { _ } from 'svelte-i18n';
        ... </script>
        ... <h1>{$_('app.title', { default: 'Welcome' })}</h1>'''
        >>> extract_messages(source)
        {'app': {'title': 'Welcome'}}
        >>> extract_messages(source, shallow=True)
        {'app.title': 'Welcome'}

    Args:
        source: Component source text (already preprocessed) or parsed Template
        accumulator: Dictionary to merge into (a new one when None)
        shallow: Treat ids as flat keys instead of dotted paths
        filename: Source file, used in error messages only

    Returns:
        The accumulator (list holes left by index ids hold MISSING)

    Raises:
        TemplateSyntaxError: If source cannot be parsed
        InvalidDefinitionError: If a definition catalog is malformed
    """
    template = parse(source, filename) if isinstance(source, str) else source
    if accumulator is None:
        accumulator = {}
    records = collect_messages(template)
    logger.debug("Collected %d message(s) from %s", len(records), template.filename or "<source>")
    return merge_records(records, accumulator, shallow=shallow)
