"""Call and definition collection.

Two visitors walk a parsed component:

- FormatCallCollector finds formatting calls ($_('id'), $t({...})) in the
  instance script and the markup. The module script is not walked:
  formatting stores are only meaningful in instance or markup context.
- DefinitionCollector finds defineMessages({...}) calls in the instance and
  module scripts and keeps their object literal argument (the catalog).

Both stop descending at a match, so calls nested inside a matched call are
not collected a second time.

Python 3.13+.
"""

from __future__ import annotations

import logging

from svextract.diagnostics import InvalidDefinitionError
from svextract.diagnostics.templates import ErrorTemplate
from svextract.enums import VisitAction
from svextract.syntax.ast import (
    ASTNode,
    CallExpression,
    ObjectExpression,
    Property,
    Template,
    node_kind,
)
from svextract.syntax.visitor import ASTVisitor

from .bindings import BindingSet, resolve_bindings

__all__ = [
    "DefinitionCollector",
    "FormatCallCollector",
    "collect_definition_catalogs",
    "collect_format_calls",
    "collect_message_definitions",
]

logger = logging.getLogger(__name__)


class FormatCallCollector(ASTVisitor):
    """Collect calls to the formatting stores bound in a component."""

    __slots__ = ("bindings", "calls")

    def __init__(self, bindings: BindingSet, *, max_depth: int | None = None) -> None:
        super().__init__(max_depth=max_depth)
        self.bindings = bindings
        self.calls: list[CallExpression] = []

    def visit_CallExpression(self, node: CallExpression) -> VisitAction:
        if self.bindings.is_format_call(node):
            self.calls.append(node)
            return VisitAction.SKIP
        return VisitAction.CONTINUE


class DefinitionCollector(ASTVisitor):
    """Collect the catalog literals passed to the definition-block function."""

    __slots__ = ("bindings", "catalogs")

    def __init__(self, bindings: BindingSet, *, max_depth: int | None = None) -> None:
        super().__init__(max_depth=max_depth)
        self.bindings = bindings
        self.catalogs: list[ObjectExpression] = []

    def visit_CallExpression(self, node: CallExpression) -> VisitAction:
        if not self.bindings.is_definition_call(node):
            return VisitAction.CONTINUE
        if node.arguments and isinstance(node.arguments[0], ObjectExpression):
            self.catalogs.append(node.arguments[0])
            return VisitAction.SKIP
        logger.debug(
            "Ignoring %s() call without an object literal at %s",
            self.bindings.definition_name,
            node.loc,
        )
        return VisitAction.CONTINUE


def collect_format_calls(
    template: Template, bindings: BindingSet | None = None
) -> list[CallExpression]:
    """Formatting calls of a component, instance script first, then markup."""
    bindings = bindings if bindings is not None else resolve_bindings(template)
    if not bindings.format_names:
        return []
    collector = FormatCallCollector(bindings)
    collector.walk(template.instance)
    collector.walk(template.html)
    return collector.calls


def collect_definition_catalogs(
    template: Template, bindings: BindingSet | None = None
) -> list[ObjectExpression]:
    """Catalog literals of a component, instance script first, then module script."""
    bindings = bindings if bindings is not None else resolve_bindings(template)
    if bindings.definition_name is None:
        return []
    collector = DefinitionCollector(bindings)
    collector.walk(template.instance)
    collector.walk(template.module)
    return collector.catalogs


def collect_message_definitions(
    template: Template, bindings: BindingSet | None = None
) -> list[ASTNode]:
    """Definition nodes: the property values of every catalog literal.

    Example:
        defineMessages({ a: { id: 'x' }, b: { id: 'y' } })
        -> [ObjectExpression(id: 'x'), ObjectExpression(id: 'y')]

    Raises:
        InvalidDefinitionError: If a catalog entry is not a key/value
            property (a spread element, for instance)
    """
    definitions: list[ASTNode] = []
    for catalog in collect_definition_catalogs(template, bindings):
        for entry in catalog.properties:
            if not isinstance(entry, Property):
                raise InvalidDefinitionError(
                    ErrorTemplate.invalid_definition_entry(
                        node_kind(entry),
                        entry.loc.to_span() if entry.loc else None,
                        template.filename,
                    )
                )
            definitions.append(entry.value)
    return definitions
