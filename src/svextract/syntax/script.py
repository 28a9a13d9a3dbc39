"""Script parsing via tree-sitter.

Parses JavaScript (or TypeScript) source with the tree-sitter grammars and
converts the concrete syntax tree into the frozen nodes of
svextract.syntax.ast. Only the constructs the extractor interprets get
dedicated node types; everything else becomes an OpaqueNode.

Positions are shifted by a line/column base so that nodes of a script block
or markup expression report locations in the enclosing component file.

Python 3.13+.
"""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING, NoReturn

import tree_sitter_javascript as ts_javascript
import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser

from svextract.constants import MAX_DEPTH
from svextract.core.depth_guard import DepthGuard
from svextract.diagnostics import TemplateSyntaxError
from svextract.diagnostics.templates import ErrorTemplate

from .ast import (
    ASTNode,
    CallExpression,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    Literal,
    ObjectExpression,
    OpaqueNode,
    Program,
    Property,
    SourceLocation,
    SpreadElement,
)

if TYPE_CHECKING:
    from tree_sitter import Node

    from .ast import ImportSpecifierNode, LiteralValue

__all__ = ["parse_expression", "parse_script"]

logger = logging.getLogger(__name__)

# ESTree names for grammar node types that stay opaque
_ESTREE_KINDS: dict[str, str] = {
    "array": "ArrayExpression",
    "arrow_function": "ArrowFunctionExpression",
    "assignment_expression": "AssignmentExpression",
    "await_expression": "AwaitExpression",
    "binary_expression": "BinaryExpression",
    "computed_property_name": "ComputedPropertyName",
    "expression_statement": "ExpressionStatement",
    "function_declaration": "FunctionDeclaration",
    "function_expression": "FunctionExpression",
    "labeled_statement": "LabeledStatement",
    "lexical_declaration": "VariableDeclaration",
    "member_expression": "MemberExpression",
    "method_definition": "MethodDefinition",
    "new_expression": "NewExpression",
    "regex": "RegExpLiteral",
    "sequence_expression": "SequenceExpression",
    "subscript_expression": "MemberExpression",
    "template_string": "TemplateLiteral",
    "ternary_expression": "ConditionalExpression",
    "unary_expression": "UnaryExpression",
    "variable_declaration": "VariableDeclaration",
    "variable_declarator": "VariableDeclarator",
}

_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "private_property_identifier",
        "undefined",
    }
)

_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v"}

_TYPESCRIPT_LANGS = frozenset({"ts", "typescript", "text/typescript", "application/typescript"})


def is_typescript(lang: str | None) -> bool:
    """Check whether a script lang/type attribute selects TypeScript."""
    return lang is not None and lang.strip().lower() in _TYPESCRIPT_LANGS


@cache
def _language(typescript: bool) -> Language:
    if typescript:
        return Language(ts_typescript.language_typescript())
    return Language(ts_javascript.language())


# ============================================================================
# LITERAL DECODING
# ============================================================================


def _decode_escape(sequence: str) -> str:
    """Decode one JavaScript escape sequence (including the backslash)."""
    body = sequence[1:]
    if not body or body[0] in "\r\n\u2028\u2029":
        return ""  # line continuation
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body[0] == "u":
        digits = body[2:-1] if body.startswith("u{") else body[1:]
        return chr(int(digits, 16))
    if body[0] == "x":
        return chr(int(body[1:], 16))
    if body.isdigit() and all(c in "01234567" for c in body):
        return chr(int(body, 8))
    return body


def _string_value(node: Node) -> str:
    parts: list[str] = []
    for child in node.named_children:
        text = child.text.decode("utf-8") if child.text else ""
        if child.type == "escape_sequence":
            parts.append(_decode_escape(text))
        else:
            parts.append(text)
    # Astral characters escaped as surrogate pairs arrive as two code points
    return "".join(parts).encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def _number_value(raw: str) -> int | float:
    text = raw.replace("_", "")
    if text.endswith("n"):
        return int(text[:-1], 0)
    if text[:2].lower() in ("0x", "0o", "0b"):
        return int(text, 0)
    if len(text) > 1 and text[0] == "0" and text.isdigit():
        # Legacy octal (017) unless a digit rules it out (089)
        return int(text, 8) if all(c in "01234567" for c in text) else int(text)
    value = float(text)
    if value.is_integer() and abs(value) < 2**53:
        return int(value)
    return value


# ============================================================================
# CONVERSION
# ============================================================================


class _TreeConverter:
    """Converts a tree-sitter tree into svextract nodes."""

    __slots__ = ("_column_base", "_depth_guard", "_line_base", "_lines")

    def __init__(self, source: bytes, *, line_base: int, column_base: int, max_depth: int) -> None:
        self._lines = source.split(b"\n")
        self._line_base = line_base
        self._column_base = column_base
        self._depth_guard = DepthGuard(max_depth=max_depth)

    def location(self, node: Node) -> SourceLocation:
        row, byte_column = node.start_point
        # tree-sitter columns count bytes; diagnostics count characters
        column = len(self._lines[row][:byte_column].decode("utf-8", errors="replace"))
        if row == 0:
            column = max(column + self._column_base, 0)
        return SourceLocation(line=self._line_base + row, column=column)

    def convert(self, node: Node) -> ASTNode | None:
        """Convert node and its subtree (None for comments)."""
        if node.type == "comment":
            return None
        with self._depth_guard:
            match node.type:
                case "program":
                    return Program(body=self._children(node), loc=self.location(node))
                case "import_statement":
                    return self._import(node)
                case "call_expression":
                    return self._call(node)
                case "object":
                    return self._object(node)
                case "pair":
                    return self._pair(node)
                case "spread_element":
                    children = self._children(node)
                    return SpreadElement(
                        argument=children[0] if children else OpaqueNode("Empty"),
                        loc=self.location(node),
                    )
                case "parenthesized_expression":
                    children = self._children(node)
                    return children[0] if children else None
                case "string":
                    return self._literal(node, _string_value(node))
                case "number":
                    return self._literal(node, _number_value(self._text(node)))
                case "true" | "false":
                    return self._literal(node, node.type == "true")
                case "null":
                    return self._literal(node, None)
                case node_type if node_type in _IDENTIFIER_TYPES:
                    return Identifier(name=self._text(node), loc=self.location(node))
                case node_type:
                    return OpaqueNode(
                        kind=_ESTREE_KINDS.get(node_type, node_type),
                        children=self._children(node),
                        loc=self.location(node),
                    )

    def _text(self, node: Node) -> str:
        return node.text.decode("utf-8") if node.text else ""

    def _children(self, node: Node) -> tuple[ASTNode, ...]:
        return tuple(
            [converted for child in node.named_children if (converted := self.convert(child)) is not None]
        )

    def _literal(self, node: Node, value: LiteralValue) -> Literal:
        return Literal(value=value, raw=self._text(node), loc=self.location(node))

    def _import(self, node: Node) -> ImportDeclaration:
        source_node = node.child_by_field_name("source")
        source = (
            self._literal(source_node, _string_value(source_node))
            if source_node is not None
            else Literal(value=None)
        )
        specifiers: list[ImportSpecifierNode] = []
        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for part in clause.named_children:
                match part.type:
                    case "identifier":
                        specifiers.append(
                            ImportDefaultSpecifier(local=self._identifier(part), loc=self.location(part))
                        )
                    case "namespace_import":
                        names = [c for c in part.named_children if c.type == "identifier"]
                        if names:
                            specifiers.append(
                                ImportNamespaceSpecifier(
                                    local=self._identifier(names[0]), loc=self.location(part)
                                )
                            )
                    case "named_imports":
                        specifiers.extend(
                            self._import_specifier(spec)
                            for spec in part.named_children
                            if spec.type == "import_specifier"
                        )
        return ImportDeclaration(source=source, specifiers=tuple(specifiers), loc=self.location(node))

    def _identifier(self, node: Node) -> Identifier:
        name = _string_value(node) if node.type == "string" else self._text(node)
        return Identifier(name=name, loc=self.location(node))

    def _import_specifier(self, node: Node) -> ImportSpecifier:
        name_node = node.child_by_field_name("name")
        alias_node = node.child_by_field_name("alias")
        if name_node is None:
            name_node = node.named_children[0]
        imported = self._identifier(name_node)
        local = self._identifier(alias_node) if alias_node is not None else imported
        return ImportSpecifier(imported=imported, local=local, loc=self.location(node))

    def _call(self, node: Node) -> ASTNode:
        function = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        if function is None or arguments is None or arguments.type != "arguments":
            # Tagged template: tag`text`
            return OpaqueNode(
                kind="TaggedTemplateExpression",
                children=self._children(node),
                loc=self.location(node),
            )
        callee = self.convert(function) or OpaqueNode("Empty")
        return CallExpression(
            callee=callee,
            arguments=self._children(arguments),
            optional=node.child_by_field_name("optional_chain") is not None,
            loc=self.location(node),
        )

    def _object(self, node: Node) -> ObjectExpression:
        properties: list[ASTNode] = []
        for child in node.named_children:
            if child.type == "shorthand_property_identifier":
                name = Identifier(name=self._text(child), loc=self.location(child))
                properties.append(Property(key=name, value=name, shorthand=True, loc=name.loc))
                continue
            converted = self.convert(child)
            if converted is not None:
                properties.append(converted)
        return ObjectExpression(properties=tuple(properties), loc=self.location(node))

    def _pair(self, node: Node) -> Property:
        key_node = node.child_by_field_name("key")
        value_node = node.child_by_field_name("value")
        key = self.convert(key_node) if key_node is not None else None
        value = self.convert(value_node) if value_node is not None else None
        return Property(
            key=key or OpaqueNode("Empty"),
            value=value or OpaqueNode("Empty"),
            computed=key_node is not None and key_node.type == "computed_property_name",
            loc=self.location(node),
        )


# ============================================================================
# ERROR DETECTION
# ============================================================================


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _raise_syntax_error(converter: _TreeConverter, root: Node, filename: str | None) -> NoReturn:
    error_node = _first_error(root) or root
    snippet = error_node.text.decode("utf-8", errors="replace") if error_node.text else ""
    if not snippet:
        snippet = error_node.type  # missing token: report what was expected
    location = converter.location(error_node)
    raise TemplateSyntaxError(
        ErrorTemplate.unexpected_token(snippet[:20], location.to_span(), filename)
    )


# ============================================================================
# PUBLIC API
# ============================================================================


def parse_script(
    source: str,
    *,
    typescript: bool = False,
    line_base: int = 1,
    column_base: int = 0,
    filename: str | None = None,
    max_depth: int = MAX_DEPTH,
) -> Program:
    """Parse the content of a <script> block.

    Args:
        source: Script text
        typescript: Use the TypeScript grammar
        line_base: 1-based file line of the first script line
        column_base: 0-based file column of the first script character
        filename: Component file (diagnostics only)
        max_depth: Maximum nesting depth

    Returns:
        Program with converted top-level statements

    Raises:
        TemplateSyntaxError: If the script contains a syntax error
        DepthLimitExceededError: If nesting exceeds max_depth
    """
    encoded = source.encode("utf-8")
    tree = Parser(_language(typescript)).parse(encoded)
    converter = _TreeConverter(encoded, line_base=line_base, column_base=column_base, max_depth=max_depth)
    if tree.root_node.has_error:
        _raise_syntax_error(converter, tree.root_node, filename)
    program = converter.convert(tree.root_node)
    if not isinstance(program, Program):
        _raise_syntax_error(converter, tree.root_node, filename)
    logger.debug("Parsed script at L%d with %d statements", line_base, len(program.body))
    return program


def parse_expression(
    source: str,
    *,
    typescript: bool = False,
    line_base: int = 1,
    column_base: int = 0,
    filename: str | None = None,
    max_depth: int = MAX_DEPTH,
) -> ASTNode:
    """Parse a single expression from a markup tag.

    The text is parsed wrapped in parentheses, so object literals and
    sequence expressions parse as expressions, not statements.

    Args:
        source: Expression text
        typescript: Use the TypeScript grammar (components with lang="ts")
        line_base: 1-based file line of the first expression character
        column_base: 0-based file column of the first expression character
        filename: Component file (diagnostics only)
        max_depth: Maximum nesting depth

    Returns:
        Converted expression node

    Raises:
        TemplateSyntaxError: If the text is not a single valid expression
    """
    encoded = f"({source})".encode()
    tree = Parser(_language(typescript)).parse(encoded)
    # The opening parenthesis occupies one column before the expression
    converter = _TreeConverter(
        encoded, line_base=line_base, column_base=column_base - 1, max_depth=max_depth
    )
    root = tree.root_node
    statements = [child for child in root.named_children if child.type != "comment"]
    if root.has_error or len(statements) != 1 or not statements[0].named_children:
        _raise_syntax_error(converter, root, filename)
    expression = converter.convert(statements[0].named_children[0])
    if expression is None:
        _raise_syntax_error(converter, root, filename)
    return expression
