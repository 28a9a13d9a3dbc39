"""Component file parser.

Splits a component file (.svelte / .html) into its instance script, module
script and markup, and parses each part:

- <script> blocks are parsed with the tree-sitter JavaScript grammar, or the
  TypeScript grammar for lang="ts"
- the markup is scanned for {...} tags; the expression of every tag is
  parsed on its own

HTML comments, <style> blocks and <script> elements nested in markup are
ignored. All positions are absolute in
the component file.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from svextract.constants import MAX_DEPTH
from svextract.diagnostics import TemplateSyntaxError
from svextract.diagnostics.templates import ErrorTemplate
from svextract.enums import ScriptContext

from .ast import Fragment, MustacheTag, Script, Template
from .position import location_at
from .script import is_typescript, parse_expression, parse_script

__all__ = ["TemplateParser", "parse"]

logger = logging.getLogger(__name__)

_MARKUP_TOKEN = re.compile(r"<!--|<(?P<close>/)?(?P<name>[A-Za-z][\w:.-]*)|\{")
_RAW_TEXT_CLOSE = {
    "script": re.compile(r"</script\s*>", re.IGNORECASE),
    "style": re.compile(r"</style\s*>", re.IGNORECASE),
}
# Elements that never take children
_VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})
_ATTRIBUTE_PATTERN = re.compile(
    r"""([^\s=/>"']+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+)))?"""
)
_NON_NEWLINE = re.compile(r"[^\n]")

_SPECIAL_TAG = re.compile(r"\s*([#:/@])([\w-]*)")
_ELSE_IF = re.compile(r"\s+if\b")
_EACH_AS = re.compile(r"\s+as\b")
_AWAIT_BRANCH = re.compile(r"\s+(?:then|catch)\b")

# Tag names whose whole remaining content is an expression
_EXPRESSION_BLOCKS = frozenset({"if", "key"})
_EXPRESSION_SPECIALS = frozenset({"html", "debug", "const", "render"})


@dataclass(frozen=True, slots=True)
class _TagExpression:
    """Expression part of one markup tag (offsets relative to tag content)."""

    kind: str
    start: int
    end: int


def _parse_attributes(text: str) -> dict[str, str | None]:
    attributes: dict[str, str | None] = {}
    for match in _ATTRIBUTE_PATTERN.finditer(text):
        name, double, single, bare = match.groups()
        value = double if double is not None else single if single is not None else bare
        attributes[name.lower()] = value
    return attributes


def _blank(text: str) -> str:
    """Replace every character except newlines with a space."""
    return _NON_NEWLINE.sub(" ", text)


def _find_closing_brace(text: str, start: int) -> int:
    """Find the '}' closing a tag whose content starts at start.

    Braces inside string literals and template literals are ignored;
    ${...} substitutions inside template literals are followed.

    Returns:
        Index of the closing brace, or -1 if the tag is never closed
    """
    depth = 1
    quote: str | None = None
    template_depths: list[int] = []
    position = start
    length = len(text)
    while position < length:
        char = text[position]
        if quote is not None:
            if char == "\\":
                position += 2
                continue
            if char == quote:
                quote = None
            elif quote == "`" and char == "$" and text.startswith("{", position + 1):
                template_depths.append(depth)
                depth += 1
                quote = None
                position += 2
                continue
        elif char in "'\"`":
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if template_depths and depth == template_depths[-1]:
                template_depths.pop()
                quote = "`"
            elif depth == 0:
                return position
        position += 1
    return -1


@dataclass(frozen=True, slots=True)
class _RawBlock:
    """Comment, <script> or <style> block; its text is hidden from markup."""

    start: int
    end: int
    tag: str | None = None
    attrs: str = ""
    content_start: int = 0
    content_end: int = 0
    top_level: bool = False


def _opening_tag_end(text: str, start: int) -> int:
    """Find the '>' ending an opening tag whose attributes start at start.

    Quoted attribute values and {...} attribute expressions may contain '>'.

    Returns:
        Index of the closing '>', or -1 if the tag is never closed
    """
    quote: str | None = None
    position = start
    length = len(text)
    while position < length:
        char = text[position]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "{":
            position = _find_closing_brace(text, position + 1)
            if position == -1:
                return -1
        elif char == ">":
            return position
        position += 1
    return -1


def _scan_blocks(source: str) -> Iterator[_RawBlock]:
    """Yield comments and raw-text elements in document order.

    Element nesting is tracked so that only <script> blocks outside of any
    element (not inside <svelte:head>, <div>, ...) are marked top level.
    Markup {...} tags are stepped over as a whole.
    """
    depth = 0
    position = 0
    while (token := _MARKUP_TOKEN.search(source, position)) is not None:
        start = token.start()
        if token.group() == "{":
            closing = _find_closing_brace(source, start + 1)
            if closing == -1:
                return  # reported by the markup pass
            position = closing + 1
            continue
        if token.group() == "<!--":
            closing = source.find("-->", token.end())
            end = len(source) if closing == -1 else closing + 3
            yield _RawBlock(start=start, end=end)
            position = end
            continue

        name = token.group("name").lower()
        tag_end = _opening_tag_end(source, token.end())
        if tag_end == -1:
            return
        position = tag_end + 1
        if token.group("close"):
            depth = max(depth - 1, 0)
            continue

        self_closing = source[tag_end - 1] == "/"
        if name in _RAW_TEXT_CLOSE:
            if self_closing:
                yield _RawBlock(
                    start=start,
                    end=position,
                    tag=name,
                    attrs=source[token.end() : tag_end - 1],
                    content_start=position,
                    content_end=position,
                    top_level=depth == 0,
                )
                continue
            closing_match = _RAW_TEXT_CLOSE[name].search(source, position)
            if closing_match is None:
                continue  # left to the markup pass, like any unclosed element
            yield _RawBlock(
                start=start,
                end=closing_match.end(),
                tag=name,
                attrs=source[token.end() : tag_end],
                content_start=position,
                content_end=closing_match.start(),
                top_level=depth == 0,
            )
            position = closing_match.end()
        elif not self_closing and name not in _VOID_ELEMENTS:
            depth += 1


def _tag_expression(content: str) -> _TagExpression | None:
    """Locate the expression inside the content of a {...} tag.

    Returns:
        Expression bounds, or None for tags without an expression
        ({/if}, {:else}, {:then value}, {#snippet name()}, ...)
    """
    special = _SPECIAL_TAG.match(content)
    if special is None:
        stripped = content.lstrip()
        if stripped.startswith("..."):
            return _TagExpression("spread", len(content) - len(stripped) + 3, len(content))
        return _TagExpression("mustache", 0, len(content))

    sigil, name = special.groups()
    rest = special.end()
    match sigil:
        case "#" if name in _EXPRESSION_BLOCKS:
            return _TagExpression(name, rest, len(content))
        case "#" if name == "each":
            cut = _EACH_AS.search(content, rest)
            return _TagExpression(name, rest, cut.start() if cut else len(content))
        case "#" if name == "await":
            cut = _AWAIT_BRANCH.search(content, rest)
            return _TagExpression(name, rest, cut.start() if cut else len(content))
        case ":" if name == "else":
            else_if = _ELSE_IF.match(content, rest)
            if else_if:
                return _TagExpression("else if", else_if.end(), len(content))
            return None
        case "@" if name in _EXPRESSION_SPECIALS:
            return _TagExpression(name, rest, len(content))
        case _:
            return None


class TemplateParser:
    """Parser for component files.

    Example:
        >>> parser = TemplateParser()
        >>> template = parser.parse("<script>import { _ } from 'svelte-i18n';</script>{$_('hi')}")
        >>> len(template.instance_body), len(template.html.children)
        (1, 1)
    """

    __slots__ = ("_max_depth",)

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        """Initialize parser.

        Args:
            max_depth: Maximum nesting depth of converted trees
        """
        self._max_depth = max_depth

    def parse(self, source: str, filename: str | None = None) -> Template:
        """Parse component source.

        Only <script> blocks outside of any element are component scripts;
        a <script> nested in markup (e.g. inside <svelte:head>) is hidden
        from the markup pass like <style> blocks and comments.

        Args:
            source: Component file text (already preprocessed, if applicable)
            filename: Source file path, used in diagnostics only

        Returns:
            Parsed Template

        Raises:
            TemplateSyntaxError: On syntax errors, unclosed or empty tags, or
                duplicate script blocks
        """
        scripts: dict[ScriptContext, Script] = {}
        markup_parts: list[str] = []
        cursor = 0

        for block in _scan_blocks(source):
            markup_parts.append(source[cursor : block.start])
            markup_parts.append(_blank(source[block.start : block.end]))
            cursor = block.end
            if block.tag != "script" or not block.top_level:
                continue
            script = self._parse_script_block(source, block, filename)
            if script.context in scripts:
                raise TemplateSyntaxError(
                    ErrorTemplate.duplicate_script(
                        script.context, location_at(source, block.start).to_span(), filename
                    )
                )
            scripts[script.context] = script
        markup_parts.append(source[cursor:])

        markup = "".join(markup_parts)
        typescript = any(is_typescript(script.lang) for script in scripts.values())
        tags = tuple(self._parse_markup(source, markup, filename, typescript=typescript))

        logger.debug(
            "Parsed %s: instance=%s module=%s tags=%d",
            filename or "<source>",
            ScriptContext.INSTANCE in scripts,
            ScriptContext.MODULE in scripts,
            len(tags),
        )
        return Template(
            html=Fragment(children=tags),
            instance=scripts.get(ScriptContext.INSTANCE),
            module=scripts.get(ScriptContext.MODULE),
            filename=filename,
        )

    def _parse_script_block(self, source: str, block: _RawBlock, filename: str | None) -> Script:
        attributes = _parse_attributes(block.attrs)
        is_module = attributes.get("context") == "module" or (
            "module" in attributes and attributes["module"] is None
        )
        lang = attributes.get("lang") or attributes.get("type")
        content_location = location_at(source, block.content_start)
        program = parse_script(
            source[block.content_start : block.content_end],
            typescript=is_typescript(lang),
            line_base=content_location.line,
            column_base=content_location.column,
            filename=filename,
            max_depth=self._max_depth,
        )
        return Script(
            content=program,
            context=ScriptContext.MODULE if is_module else ScriptContext.INSTANCE,
            lang=lang,
            loc=location_at(source, block.start),
        )

    def _parse_markup(
        self, source: str, markup: str, filename: str | None, *, typescript: bool
    ) -> Iterator[MustacheTag]:
        position = 0
        while (opening := markup.find("{", position)) != -1:
            closing = _find_closing_brace(markup, opening + 1)
            if closing == -1:
                raise TemplateSyntaxError(
                    ErrorTemplate.unclosed_tag(location_at(source, opening).to_span(), filename)
                )
            position = closing + 1

            content = markup[opening + 1 : closing]
            tag = _tag_expression(content)
            if tag is None:
                continue
            text = content[tag.start : tag.end]
            if not text.strip():
                if tag.kind == "debug":
                    continue  # {@debug} without arguments
                raise TemplateSyntaxError(
                    ErrorTemplate.empty_expression(location_at(source, opening).to_span(), filename)
                )

            expression_location = location_at(source, opening + 1 + tag.start)
            yield MustacheTag(
                kind=tag.kind,
                expression=parse_expression(
                    text,
                    typescript=typescript,
                    line_base=expression_location.line,
                    column_base=expression_location.column,
                    filename=filename,
                    max_depth=self._max_depth,
                ),
                loc=location_at(source, opening),
            )


def parse(source: str, filename: str | None = None) -> Template:
    """Parse component source into a Template.

    Convenience function for TemplateParser.parse().

    Example:
        >>> from svextract.syntax import parse
        >>> template = parse("<h1>{$_('app.title')}</h1>")
        >>> template.html.children[0].kind
        'mustache'
    """
    return TemplateParser().parse(source, filename)
