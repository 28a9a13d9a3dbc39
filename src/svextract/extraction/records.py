"""Message record construction.

Every collected formatting call or catalog entry is normalized into a
MessageRecord. Formatting calls come in a closed set of shapes (see
CallShape), resolved once from the argument list:

    $_({ id: 'a.b', default: 'Text' })      DESCRIPTOR
    $_('a.b', { default: 'Text' })          ID_WITH_OPTIONS
    $_('a.b')                               ID_ONLY
    $_(key), $_(42), $_()                   UNSUPPORTED (dropped)

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from svextract.enums import CallShape
from svextract.syntax.ast import ASTNode, CallExpression, Literal, ObjectExpression, SourceLocation

from .literals import evaluate_object

__all__ = [
    "MessageRecord",
    "classify_call",
    "record_from_call",
    "record_from_definition",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MessageRecord:
    """Normalized message: { id, default?, ...extra literal fields }.

    Attributes:
        fields: Evaluated literal fields (read-only view)
        loc: Location of the call or catalog entry it came from
    """

    fields: Mapping[str, object] = field(default_factory=dict)
    loc: SourceLocation | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def id(self) -> str | None:
        """Message id; None unless the id field is a string."""
        value = self.fields.get("id")
        return value if isinstance(value, str) else None

    @property
    def default(self) -> object:
        """Default text ("" when the record has no default field)."""
        return self.fields.get("default", "")

    @property
    def extras(self) -> dict[str, object]:
        """Fields other than id and default (description, values, ...)."""
        return {k: v for k, v in self.fields.items() if k not in ("id", "default")}


def _is_string_literal(node: ASTNode) -> bool:
    return isinstance(node, Literal) and isinstance(node.value, str)


def classify_call(call: CallExpression) -> CallShape:
    """Resolve the argument shape of a formatting call."""
    match call.arguments:
        case (ObjectExpression(), *_):
            return CallShape.DESCRIPTOR
        case (first, ObjectExpression(), *_) if _is_string_literal(first):
            return CallShape.ID_WITH_OPTIONS
        case (first, *_) if _is_string_literal(first):
            return CallShape.ID_ONLY
        case _:
            return CallShape.UNSUPPORTED


def record_from_call(call: CallExpression) -> MessageRecord | None:
    """Build the record of a formatting call.

    Args:
        call: Matched formatting call

    Returns:
        MessageRecord, or None when the call has no extractable id
    """
    shape = classify_call(call)
    match shape:
        case CallShape.DESCRIPTOR:
            fields = evaluate_object(call.arguments[0])  # type: ignore[arg-type]
        case CallShape.ID_WITH_OPTIONS:
            fields = evaluate_object(call.arguments[1])  # type: ignore[arg-type]
            fields["id"] = call.arguments[0].value  # type: ignore[union-attr]
        case CallShape.ID_ONLY:
            fields = {"id": call.arguments[0].value}  # type: ignore[union-attr]
        case _:
            logger.debug("Dropping formatting call without a static id at %s", call.loc)
            return None
    return MessageRecord(fields=fields, loc=call.loc)


def record_from_definition(node: ASTNode) -> MessageRecord | None:
    """Build the record of one catalog entry value.

    Args:
        node: Property value of a defineMessages() catalog

    Returns:
        MessageRecord, or None when the value is not an object literal
    """
    if not isinstance(node, ObjectExpression):
        logger.debug("Skipping catalog entry that is not an object literal at %s", getattr(node, "loc", None))
        return None
    return MessageRecord(fields=evaluate_object(node), loc=node.loc)
