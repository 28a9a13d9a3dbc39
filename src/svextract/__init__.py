"""svextract - svelte-i18n message extraction for component files.

Statically collects message definitions from Svelte components: calls to
the formatting stores ($_('id'), $t({ id, default })) and defineMessages()
catalogs, merged into a nested (or flat) id -> default text dictionary
suitable for seeding translation catalogs.

Public API:
    extract_messages - Extract one component into an accumulator
    collect_messages - Message records of a parsed component
    merge_records - First-writer-wins merge into an accumulator
    parse_component - Parse component source to a Template
    MessageRecord - Normalized { id, default, ... } record

Exceptions:
    ExtractError - Base exception class
    InvalidDefinitionError - Malformed defineMessages() catalog entry
    TemplateSyntaxError - Component could not be parsed

Submodules:
    svextract.syntax - Component parser, syntax tree, visitor
    svextract.extraction - Binding resolution, collection, records, accumulation
    svextract.serialization - JSON and gettext rendering
    svextract.babel_extractor - pybabel extraction method
    svextract.cli - Command line interface
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    ExtractError,
    InvalidDefinitionError,
    TemplateSyntaxError,
)
from .extraction import MessageRecord, collect_messages, extract_messages, merge_records
from .syntax import parse as parse_component

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("svextract")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ExtractError",
    "InvalidDefinitionError",
    "MessageRecord",
    "TemplateSyntaxError",
    "__version__",
    "collect_messages",
    "extract_messages",
    "merge_records",
    "parse_component",
]
