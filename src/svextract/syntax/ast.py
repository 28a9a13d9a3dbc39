"""Component syntax tree node definitions.

Script sections are represented with the ESTree subset the extractor
inspects (imports, calls, object literals, literals, identifiers); every
other construct becomes an OpaqueNode that keeps its children so walkers
can still descend through it. The markup section is reduced to the
expressions found in its {...} tags.

All nodes are frozen: trees are immutable input to the extractor.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from svextract.diagnostics.codes import SourceSpan
from svextract.enums import ScriptContext

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "SourceLocation",
    "LiteralValue",
    # Script nodes
    "Program",
    "ImportDeclaration",
    "ImportSpecifier",
    "ImportDefaultSpecifier",
    "ImportNamespaceSpecifier",
    "CallExpression",
    "ObjectExpression",
    "Property",
    "SpreadElement",
    "Identifier",
    "Literal",
    "OpaqueNode",
    # Component structure
    "Script",
    "MustacheTag",
    "Fragment",
    "Template",
    # Type aliases and helpers
    "ASTNode",
    "node_kind",
]

# ============================================================================
# BASE TYPES
# ============================================================================

type LiteralValue = str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Start position of a node in the component file.

    Attributes:
        line: Line number (1-indexed)
        column: Character column (0-indexed)
    """

    line: int
    column: int

    def __str__(self) -> str:
        return f"L{self.line}:{self.column}"

    def to_span(self) -> SourceSpan:
        """Convert to a diagnostic SourceSpan."""
        return SourceSpan(line=self.line, column=self.column)


# ============================================================================
# SCRIPT NODES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Identifier:
    """Name reference: _, $_, defineMessages, messages."""

    name: str
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class Literal:
    """Primitive literal: 'text', 42, 1.5, true, false, null.

    Regular expressions and template literals are NOT Literals.

    Attributes:
        value: Python value of the literal
        raw: Source text of the literal
    """

    value: LiteralValue
    raw: str = ""
    loc: SourceLocation | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["Literal"]:
        """Type guard for Literal."""
        return isinstance(node, Literal)


@dataclass(frozen=True, slots=True)
class SpreadElement:
    """Spread entry: ...rest"""

    argument: "ASTNode"
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class Property:
    """Key/value entry of an object literal.

    Examples:
        id: 'app.title'        (key Identifier, value Literal)
        'default': 'Hello'     (key Literal)
        [name]: value          (computed=True)
        title                  (shorthand=True, key and value Identifiers)
    """

    key: "ASTNode"
    value: "ASTNode"
    computed: bool = False
    shorthand: bool = False
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class ObjectExpression:
    """Object literal: { id: 'a', default: 'b', ...rest }"""

    properties: tuple["ASTNode", ...]
    loc: SourceLocation | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["ObjectExpression"]:
        """Type guard for ObjectExpression."""
        return isinstance(node, ObjectExpression)


@dataclass(frozen=True, slots=True)
class CallExpression:
    """Function call: callee(arg1, arg2)"""

    callee: "ASTNode"
    arguments: tuple["ASTNode", ...]
    optional: bool = False
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class ImportSpecifier:
    """Named import: { imported as local }"""

    imported: Identifier
    local: Identifier
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class ImportDefaultSpecifier:
    """Default import: import local from '...'"""

    local: Identifier
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class ImportNamespaceSpecifier:
    """Namespace import: import * as local from '...'"""

    local: Identifier
    loc: SourceLocation | None = None


type ImportSpecifierNode = ImportSpecifier | ImportDefaultSpecifier | ImportNamespaceSpecifier


@dataclass(frozen=True, slots=True)
class ImportDeclaration:
    """Import statement: import { _, defineMessages } from 'svelte-i18n'"""

    source: Literal
    specifiers: tuple[ImportSpecifierNode, ...]
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class Program:
    """Statement list of one script section."""

    body: tuple["ASTNode", ...]
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class OpaqueNode:
    """Any construct the extractor does not interpret.

    Attributes:
        kind: Node kind (ESTree name where one is known, e.g.
              "MemberExpression", otherwise the grammar's node type)
        children: Converted child nodes, in source order
    """

    kind: str
    children: tuple["ASTNode", ...] = ()
    loc: SourceLocation | None = None


# ============================================================================
# COMPONENT STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Script:
    """One <script> block.

    Attributes:
        content: Parsed statements
        context: Instance or module script
        lang: Value of the lang/type attribute, if any
    """

    content: Program
    context: ScriptContext = ScriptContext.INSTANCE
    lang: str | None = None
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class MustacheTag:
    """Expression-bearing markup tag.

    Attributes:
        kind: Tag flavor: "mustache", "spread", or the block/special tag
              name ("if", "else if", "each", "await", "key", "html",
              "debug", "const", "render")
        expression: Parsed expression
    """

    kind: str
    expression: "ASTNode"
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class Fragment:
    """Markup root: all expression-bearing tags in document order."""

    children: tuple[MustacheTag, ...] = ()


@dataclass(frozen=True, slots=True)
class Template:
    """Parsed component file.

    Attributes:
        html: Markup root
        instance: Instance script, if present
        module: Module script, if present
        filename: Source file (used in diagnostics only)
    """

    html: Fragment
    instance: Script | None = None
    module: Script | None = None
    filename: str | None = None

    @property
    def instance_body(self) -> tuple["ASTNode", ...]:
        """Top-level statements of the instance script (empty if absent)."""
        return self.instance.content.body if self.instance else ()

    @property
    def module_body(self) -> tuple["ASTNode", ...]:
        """Top-level statements of the module script (empty if absent)."""
        return self.module.content.body if self.module else ()


# ============================================================================
# TYPE ALIASES
# ============================================================================

type ASTNode = (
    Program
    | ImportDeclaration
    | ImportSpecifier
    | ImportDefaultSpecifier
    | ImportNamespaceSpecifier
    | CallExpression
    | ObjectExpression
    | Property
    | SpreadElement
    | Identifier
    | Literal
    | OpaqueNode
    | Script
    | MustacheTag
    | Fragment
    | Template
)


def node_kind(node: object) -> str:
    """Return the kind name of a node ("Property", "SpreadElement", ...)."""
    if isinstance(node, OpaqueNode):
        return node.kind
    return type(node).__name__
