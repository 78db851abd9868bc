"""Per-string template compilation.

The merger consumes any object implementing the TemplateCompiler protocol:
one translation string in, a parameter Signature plus generated code out.
BraceTemplateCompiler is the default implementation.

Template grammar (BraceTemplateCompiler):
    Hello {name}            value parameter `name`
    Read {link:the docs}    formatter `link` applied to the inner template
    {b:Hi {name}}           inner templates may hold placeholders
    \\{ \\} \\\\                literal brace / backslash

Generated expression (JavaScript):
    "Hello"                                      no parameters
    (params) => `Hello ${ params.name }`         with parameters
    (params) => `Read ${ params.link(`the docs`) }`

Generated UI fragment (only when formatters are present), a parts array the
UI layer renders node by node:
    (params) => ["Read ", params.link(["the docs"])]

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import NoReturn, Protocol

from langkit.codegen import Fragment, concat, join, quote, render, template_literal
from langkit.core import Cursor, Signature
from langkit.diagnostics import ErrorTemplate, TemplateSyntaxError

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "TemplateCompiler",
    "CompiledTemplate",
    # Default implementation
    "BraceTemplateCompiler",
    "parse_template",
    # AST
    "Text",
    "Placeholder",
    "FormatterCall",
    "TemplateElement",
]

logger = logging.getLogger(__name__)

_ESCAPABLE = frozenset("{}\\")
_NAME_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_$")
_NAME_REST = _NAME_START | frozenset("0123456789")


# ============================================================================
# PROTOCOL
# ============================================================================


@dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """Result of compiling one translation string.

    Attributes:
        signature: Parameters demanded by the template
        expression: JavaScript expression producing the translated string
        fragment: JavaScript expression producing UI parts, or None when the
            template has no formatter parameters
    """

    signature: Signature
    expression: str
    fragment: str | None = None


class TemplateCompiler(Protocol):
    """Protocol for per-string template compilers.

    Implementations must be deterministic pure functions of their input,
    since emitted output must be byte-identical across rebuilds.
    """

    def compile(self, source: str) -> CompiledTemplate:
        """Compile one translation string.

        Raises:
            TemplateSyntaxError: If source is not a valid template
        """
        ...


# ============================================================================
# AST
# ============================================================================


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text."""

    value: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Value parameter: {name}."""

    name: str


@dataclass(frozen=True, slots=True)
class FormatterCall:
    """Formatter parameter applied to an inner template: {name:body}."""

    name: str
    body: tuple[TemplateElement, ...]


type TemplateElement = Text | Placeholder | FormatterCall


# ============================================================================
# PARSER
# ============================================================================


def parse_template(source: str) -> tuple[TemplateElement, ...]:
    """Parse a brace template into elements.

    Raises:
        TemplateSyntaxError: On unbalanced braces or malformed placeholders
    """
    elements, cursor = _parse_elements(Cursor(source), nested=False)
    if not cursor.is_eof:
        _fail("Unmatched '}'", cursor)
    return elements


def _parse_elements(cursor: Cursor, *, nested: bool) -> tuple[tuple[TemplateElement, ...], Cursor]:
    elements: list[TemplateElement] = []
    text: list[str] = []

    def flush() -> None:
        if text:
            elements.append(Text("".join(text)))
            text.clear()

    while not cursor.is_eof:
        char = cursor.current
        if char == "\\" and cursor.peek(1) in _ESCAPABLE:
            text.append(cursor.source[cursor.pos + 1])
            cursor = cursor.advance(2)
        elif char == "{":
            flush()
            element, cursor = _parse_placeholder(cursor.advance())
            elements.append(element)
        elif char == "}":
            if not nested:
                _fail("Unmatched '}'", cursor)
            break
        else:
            text.append(char)
            cursor = cursor.advance()
    flush()
    return tuple(elements), cursor


def _parse_placeholder(cursor: Cursor) -> tuple[TemplateElement, Cursor]:
    """Parse after '{' up to and including the matching '}'."""
    cursor = _skip_spaces(cursor)
    start = cursor
    if cursor.is_eof or cursor.current not in _NAME_START:
        _fail("Expected parameter name", cursor)
    cursor = cursor.take_while(_NAME_REST)
    name = start.slice_to(cursor.pos)
    cursor = _skip_spaces(cursor)

    if cursor.is_eof:
        _fail("Unclosed '{'", cursor)
    if cursor.current == "}":
        return Placeholder(name), cursor.advance()
    if cursor.current == ":":
        body, cursor = _parse_elements(cursor.advance(), nested=True)
        if cursor.is_eof:
            _fail("Unclosed '{'", cursor)
        return FormatterCall(name, body), cursor.advance()
    _fail(f"Unexpected character {cursor.current!r} in placeholder", cursor)


def _skip_spaces(cursor: Cursor) -> Cursor:
    return cursor.take_while(" ")


def _fail(reason: str, cursor: Cursor) -> NoReturn:
    raise TemplateSyntaxError(
        ErrorTemplate.template_error(reason, cursor.pos),
        position=cursor.pos,
        reason=reason,
    )


# ============================================================================
# COMPILER
# ============================================================================


class BraceTemplateCompiler:
    """Default TemplateCompiler for the brace grammar.

    Stateless and thread-safe; one instance can be shared by every merge.

    Example:
        >>> result = BraceTemplateCompiler().compile("Hello {name}")
        >>> sorted(result.signature.params)
        ['name']
        >>> result.expression
        '(params) => `Hello ${ params.name }`'
    """

    def compile(self, source: str) -> CompiledTemplate:
        """Compile one translation string.

        Raises:
            TemplateSyntaxError: If source is not a valid template
        """
        elements = parse_template(source)
        signature = _signature_of(elements)
        if signature.is_empty:
            expression = quote("".join(_texts(elements)))
        else:
            expression = render(concat("(params) => ", _template_code(elements)))
        fragment = None
        if signature.has_formatters:
            fragment = render(concat("(params) => ", _fragment_code(elements)))
        logger.debug("Compiled template with signature %s", signature.describe())
        return CompiledTemplate(signature=signature, expression=expression, fragment=fragment)


def _signature_of(elements: tuple[TemplateElement, ...]) -> Signature:
    values: set[str] = set()
    formatters: set[str] = set()
    for element in _walk(elements):
        match element:
            case Placeholder(name=name):
                values.add(name)
            case FormatterCall(name=name):
                formatters.add(name)
    both = values & formatters
    if both:
        reason = f"Parameter '{sorted(both)[0]}' used both as value and formatter"
        raise TemplateSyntaxError(ErrorTemplate.template_error(reason, 0), reason=reason)
    return Signature.of(values | formatters, formatters)


def _walk(elements: tuple[TemplateElement, ...]) -> Iterator[TemplateElement]:
    for element in elements:
        yield element
        if isinstance(element, FormatterCall):
            yield from _walk(element.body)


def _texts(elements: tuple[TemplateElement, ...]) -> Iterator[str]:
    for element in elements:
        if isinstance(element, Text):
            yield element.value


def _template_code(elements: tuple[TemplateElement, ...]) -> Fragment:
    parts: list[str] = [""]
    interpolations: list[Fragment] = []
    for element in elements:
        match element:
            case Text(value=value):
                parts[-1] += value
            case Placeholder(name=name):
                interpolations.append(f"params.{name}")
                parts.append("")
            case FormatterCall(name=name, body=body):
                interpolations.append(concat(f"params.{name}(", _template_code(body), ")"))
                parts.append("")
    return template_literal(parts, interpolations)


def _fragment_code(elements: tuple[TemplateElement, ...]) -> Fragment:
    items: list[Fragment] = []
    for element in elements:
        match element:
            case Text(value=value):
                items.append(quote(value))
            case Placeholder(name=name):
                items.append(f"params.{name}")
            case FormatterCall(name=name, body=body):
                items.append(concat(f"params.{name}(", _fragment_code(body), ")"))
    return concat("[", join(items, ", "), "]")
