"""Translation library binding resolution.

Finds which local names of a component alias the translation library's API:
the message-definition-block function (defineMessages) and the formatting
stores (format, _, t).

Naming convention: formatting stores are imported as plain names but
called through their auto-subscribed form, which carries the reactive
sigil:

    import { _ as translate } from 'svelte-i18n';
    ...
    {$translate('app.title')}

matches_reactive_name() is the single place this convention is applied.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from svextract.constants import (
    DEFINE_MESSAGES_METHOD_NAME,
    FORMAT_METHOD_NAMES,
    LIB_NAME,
    REACTIVE_SIGIL,
)
from svextract.syntax.ast import (
    ASTNode,
    CallExpression,
    Identifier,
    ImportDeclaration,
    ImportSpecifier,
    Template,
)

__all__ = [
    "BindingSet",
    "library_imports",
    "matches_reactive_name",
    "resolve_bindings",
]

logger = logging.getLogger(__name__)


def matches_reactive_name(callee_name: str, binding: str) -> bool:
    """Check whether a callee is the subscribed form of a store binding.

    Example:
        >>> matches_reactive_name("$_", "_")
        True
        >>> matches_reactive_name("_", "_")
        False
    """
    return callee_name == REACTIVE_SIGIL + binding


@dataclass(frozen=True, slots=True)
class BindingSet:
    """Local names aliasing the translation library API in one file.

    Attributes:
        definition_name: Local name of defineMessages, if imported
        format_names: Local names of the formatting stores
    """

    definition_name: str | None = None
    format_names: frozenset[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        """True when no call or definition can be recognized."""
        return self.definition_name is None and not self.format_names

    def is_format_call(self, node: ASTNode) -> bool:
        """Check whether node calls a formatting store ($_(...), $t(...))."""
        if not isinstance(node, CallExpression) or not isinstance(node.callee, Identifier):
            return False
        name = node.callee.name
        return any(matches_reactive_name(name, binding) for binding in self.format_names)

    def is_definition_call(self, node: ASTNode) -> bool:
        """Check whether node calls the definition-block function."""
        return (
            self.definition_name is not None
            and isinstance(node, CallExpression)
            and isinstance(node.callee, Identifier)
            and node.callee.name == self.definition_name
        )


def library_imports(template: Template) -> list[ImportDeclaration]:
    """Top-level imports of the translation library, instance script first."""
    return [
        node
        for node in (*template.instance_body, *template.module_body)
        if isinstance(node, ImportDeclaration) and node.source.value == LIB_NAME
    ]


def resolve_bindings(template: Template) -> BindingSet:
    """Resolve the translation library bindings of a component.

    Only named imports count; default and namespace imports are ignored.
    The first defineMessages specifier found wins.

    Args:
        template: Parsed component

    Returns:
        BindingSet (empty when the library is not imported)
    """
    definition_name: str | None = None
    format_names: set[str] = set()

    for declaration in library_imports(template):
        for specifier in declaration.specifiers:
            if not isinstance(specifier, ImportSpecifier):
                continue
            imported = specifier.imported.name
            if imported == DEFINE_MESSAGES_METHOD_NAME and definition_name is None:
                definition_name = specifier.local.name
            elif imported in FORMAT_METHOD_NAMES:
                format_names.add(specifier.local.name)

    bindings = BindingSet(definition_name=definition_name, format_names=frozenset(format_names))
    logger.debug(
        "Bindings for %s: definition=%s format=%s",
        template.filename or "<source>",
        bindings.definition_name,
        sorted(bindings.format_names),
    )
    return bindings
