"""Component syntax package.

Provides the component file parser, syntax tree definitions and the
visitor used by the extraction layer.

Python 3.13+.
"""

from .ast import (
    ASTNode,
    CallExpression,
    Fragment,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    Literal,
    LiteralValue,
    MustacheTag,
    ObjectExpression,
    OpaqueNode,
    Program,
    Property,
    Script,
    SourceLocation,
    SpreadElement,
    Template,
    node_kind,
)
from .parser import TemplateParser, parse
from .visitor import ASTVisitor, iter_child_nodes

__all__ = [
    "ASTNode",
    "ASTVisitor",
    "CallExpression",
    "Fragment",
    "Identifier",
    "ImportDeclaration",
    "ImportDefaultSpecifier",
    "ImportNamespaceSpecifier",
    "ImportSpecifier",
    "Literal",
    "LiteralValue",
    "MustacheTag",
    "ObjectExpression",
    "OpaqueNode",
    "Program",
    "Property",
    "Script",
    "SourceLocation",
    "SpreadElement",
    "Template",
    "TemplateParser",
    "iter_child_nodes",
    "node_kind",
    "parse",
]
