"""Enumerations for svextract type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class VisitAction(StrEnum):
    """Traversal instruction returned by every visitor callback.

    StrEnum provides automatic string conversion: str(VisitAction.SKIP) == "skip"
    """

    CONTINUE = "continue"
    """Descend into the children of the current node."""

    SKIP = "skip"
    """Do not descend into the current node; continue with its siblings."""

    STOP = "stop"
    """Abort the whole walk immediately."""


class CallShape(StrEnum):
    """Supported argument layouts of a formatting call.

    Resolved once per call from argument arity and node kinds. Each shape
    has exactly one record-building rule.
    """

    DESCRIPTOR = "descriptor"
    """$_({ id: 'a.b', default: 'Text' }): object literal first argument."""

    ID_WITH_OPTIONS = "id_with_options"
    """$_('a.b', { default: 'Text' }): string id plus object literal options."""

    ID_ONLY = "id_only"
    """$_('a.b'): bare string id (any non-object second argument is ignored)."""

    UNSUPPORTED = "unsupported"
    """Anything else: no static id can be determined, the call is dropped."""


class ScriptContext(StrEnum):
    """Context of a <script> block inside a component file."""

    INSTANCE = "instance"
    """Per-component-instance script: <script>"""

    MODULE = "module"
    """Module-level script: <script context="module"> or <script module>"""


class OutputFormat(StrEnum):
    """Rendering of the final accumulator."""

    JSON = "json"
    """Indented JSON dictionary (nested in deep mode, flat in shallow mode)."""

    PO = "po"
    """Gettext catalog with msgid = message id and msgstr = default text."""


__all__ = [
    "CallShape",
    "OutputFormat",
    "ScriptContext",
    "VisitAction",
]
