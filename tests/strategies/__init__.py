"""Hypothesis strategies for svextract property-based testing.

Strategies are organized by domain:

- messages: message ids, default texts, records and component sources

Usage:
    from tests.strategies import flat_ids, message_ids, component_sources
"""

from .messages import (
    component_sources,
    default_texts,
    flat_ids,
    message_entries,
    message_ids,
    path_ids,
)

__all__ = [
    "component_sources",
    "default_texts",
    "flat_ids",
    "message_entries",
    "message_ids",
    "path_ids",
]
