"""Message extraction pipeline.

Binding resolution, call and definition collection, literal evaluation,
record building and accumulation.

Python 3.13+.
"""

from .accumulator import collect_messages, extract_messages, merge_records
from .bindings import BindingSet, matches_reactive_name, resolve_bindings
from .collector import (
    DefinitionCollector,
    FormatCallCollector,
    collect_definition_catalogs,
    collect_format_calls,
    collect_message_definitions,
)
from .literals import evaluate_object, property_key
from .records import MessageRecord, classify_call, record_from_call, record_from_definition

__all__ = [
    "BindingSet",
    "DefinitionCollector",
    "FormatCallCollector",
    "MessageRecord",
    "classify_call",
    "collect_definition_catalogs",
    "collect_format_calls",
    "collect_message_definitions",
    "collect_messages",
    "evaluate_object",
    "extract_messages",
    "matches_reactive_name",
    "merge_records",
    "property_key",
    "record_from_call",
    "record_from_definition",
    "resolve_bindings",
]
