"""Emit the runtime data module and the type-declaration module.

Two walkers share one traversal of the canonical tree:

- RuntimeWalker emits executable JavaScript. A leaf becomes
  ``reactive("key", {"en": expr, "fr": expr})``; an interior node becomes a
  frozen object whose nested objects are plain (static) properties and whose
  leaves are accessor (reactive) properties defined through
  ``Object.defineProperties``, so the consuming runtime can recompute them
  when the active locale changes.
- DeclarationWalker emits the matching TypeScript shape.

Each walker runs in one of two modes: translations (every leaf) or snippets
(only leaves with formatter parameters, emitting UI fragments). Both record a
flat per-key table while walking: accessor functions for the runtime module,
parameter tuples for the declarations.

Property order follows traversal order within each group, and parameter
names are sorted, so unchanged sources produce byte-identical output.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from langkit.codegen import (
    Code,
    Fragment,
    Raw,
    call,
    concat,
    indent,
    indent_block,
    join,
    lines,
    obj,
    quote,
    render,
)
from langkit.constants import DEFAULT_ALIAS, GENERATED_HEADER
from langkit.core import KeyPath, Signature
from langkit.enums import PropertyKind

from .merge import CompiledLeaf, InteriorNode, LeafNode, MergeResult, Node

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "GeneratedOutput",
    "RuntimeWalker",
    "DeclarationWalker",
    "emit",
    "emit_data_module",
    "emit_types_module",
]

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_freeze = call("Object.freeze")
_define_properties = call("Object.defineProperties")
_reactive = call("reactive")


@dataclass(frozen=True, slots=True)
class GeneratedOutput:
    """Source text of both generated artifacts.

    Attributes:
        data_module: JavaScript runtime data module
        types_module: TypeScript declaration module
        locales: Discovered locale tags, in document order
        default_locale: Configured default locale
    """

    data_module: str
    types_module: str
    locales: tuple[str, ...]
    default_locale: str


type Property = tuple[str, PropertyKind, Fragment]


# ============================================================================
# WALKERS
# ============================================================================


class _TreeWalker:
    """Shared traversal: visits children in first-seen order, recording a
    table entry per leaf, and delegates rendering to subclasses."""

    def __init__(self, result: MergeResult, *, snippets: bool = False) -> None:
        self._result = result
        self._snippets = snippets
        self._included: dict[KeyPath, bool] = {}
        self.table: list[Fragment] = []

    def walk(self) -> Code:
        """Render the whole tree; fills self.table as a side effect."""
        return self._visit_interior(self._result.tree.root)

    def _visit(self, node: Node) -> Fragment:
        if isinstance(node, LeafNode):
            leaf = self._result.leaves[node.key]
            self.table.append(self._table_entry(leaf))
            return self._leaf(leaf)
        return self._visit_interior(node)

    def _visit_interior(self, node: InteriorNode) -> Code:
        properties: list[Property] = []
        for segment, child in self._result.tree.children(node):
            if not self._includes(child):
                continue
            kind = PropertyKind.REACTIVE if isinstance(child, LeafNode) else PropertyKind.STATIC
            properties.append((str(segment), kind, self._visit(child)))
        return self._interior(properties)

    def _includes(self, node: Node) -> bool:
        """Snippet mode keeps only formatter leaves and their ancestors."""
        if not self._snippets:
            return True
        if isinstance(node, LeafNode):
            return self._result.leaves[node.key].signature.has_formatters
        # Keyed by segments: ("a", "b") and ("a.b",) join to the same dotted key
        if node.path not in self._included:
            self._included[node.path] = any(
                self._includes(child) for _, child in self._result.tree.children(node)
            )
        return self._included[node.path]

    def _leaf(self, leaf: CompiledLeaf) -> Fragment:
        raise NotImplementedError

    def _interior(self, properties: list[Property]) -> Code:
        raise NotImplementedError

    def _table_entry(self, leaf: CompiledLeaf) -> Fragment:
        raise NotImplementedError


class RuntimeWalker(_TreeWalker):
    """Emits the nested translation (or snippet) object as JavaScript.

    In snippet mode every UI fragment is hoisted into a top-level
    ``const snippet_N = ...;`` declaration, collected in self.declarations.
    """

    def __init__(self, result: MergeResult, *, snippets: bool = False) -> None:
        super().__init__(result, snippets=snippets)
        self.declarations: list[Fragment] = []

    def _leaf(self, leaf: CompiledLeaf) -> Fragment:
        if self._snippets:
            values: list[tuple[str, Fragment]] = []
            for locale, fragment in leaf.fragments.items():
                name = f"snippet_{len(self.declarations)}"
                self.declarations.append(concat("const ", name, " = ", fragment, ";"))
                values.append((locale, name))
        else:
            values = list(leaf.expressions.items())
        return _reactive(quote(leaf.key), obj(values))

    def _interior(self, properties: list[Property]) -> Code:
        static = [(name, code) for name, kind, code in properties if kind is PropertyKind.STATIC]
        reactive = [(name, code) for name, kind, code in properties if kind is PropertyKind.REACTIVE]
        if reactive:
            return _freeze(_define_properties(obj(static), obj(reactive)))
        return _freeze(obj(static))

    def _table_entry(self, leaf: CompiledLeaf) -> Fragment:
        return concat("[", quote(leaf.key), ", (t) => t", leaf.path.accessor, "]")


class DeclarationWalker(_TreeWalker):
    """Emits the TypeScript shape of the translation (or snippet) object."""

    def _leaf(self, leaf: CompiledLeaf) -> Fragment:
        signature = leaf.signature
        if self._snippets:
            if signature.is_empty:
                return "Snippet<[]>"
            return concat("Snippet<[params: ", self._params(signature), "]>")
        if signature.is_empty:
            return "string"
        return concat("(params: ", self._params(signature), ") => string")

    def _interior(self, properties: list[Property]) -> Code:
        return obj((Raw(f"readonly {quote(name)}"), code) for name, _, code in properties)

    def _table_entry(self, leaf: CompiledLeaf) -> Fragment:
        if leaf.signature.is_empty:
            return concat(quote(leaf.key), ": []")
        return concat(quote(leaf.key), ": [params: ", self._params(leaf.signature), "]")

    def _params(self, signature: Signature) -> Code:
        value_type, formatter_type = ("Param", "FormatFn")
        if self._snippets:
            value_type, formatter_type = ("SnippetParam", "SnippetFormatFn")
        fields = (
            concat(
                _property_name(name),
                ": ",
                formatter_type if signature.is_formatter(name) else value_type,
            )
            for name in signature.sorted_params()
        )
        return concat("{ ", join(fields, ", "), " }")


def _property_name(name: str) -> str:
    return name if _IDENTIFIER.match(name) else quote(name)


# ============================================================================
# MODULES
# ============================================================================


def emit_data_module(
    result: MergeResult,
    default_locale: str,
    locale_names: dict[str, str] | None = None,
) -> Code:
    """Build the JavaScript runtime data module."""
    names = locale_names or {locale: locale for locale in result.locales}
    translations = RuntimeWalker(result)
    translations_code = translations.walk()
    snippets = RuntimeWalker(result, snippets=True)
    snippets_code = snippets.walk()

    sections: list[Fragment] = [
        GENERATED_HEADER,
        concat("export const availableLocales = ", _string_array(result.locales), ";"),
        concat("export const defaultLocale = ", quote(default_locale), ";"),
        concat(
            "export const localeNames = ",
            obj((locale, quote(names.get(locale, locale))) for locale in result.locales),
            ";",
        ),
    ]
    if snippets.declarations:
        sections.append(lines(snippets.declarations))
    sections.extend(
        [
            _factory("createTranslations", translations_code),
            _factory("createSnippets", snippets_code),
            concat("export const keyAccessors = ", _map(translations.table), ";"),
            concat("export const snippetAccessors = ", _map(snippets.table), ";"),
        ]
    )
    return concat(join(sections, "\n\n"), "\n")


def emit_types_module(
    result: MergeResult,
    default_locale: str,
    alias: str = DEFAULT_ALIAS,
) -> Code:
    """Build the TypeScript declaration module."""
    translations = DeclarationWalker(result)
    translations_type = translations.walk()
    snippets = DeclarationWalker(result, snippets=True)
    snippets_type = snippets.walk()

    available = join((quote(locale) for locale in result.locales), " | ") if result.locales else "never"
    body = lines(
        [
            "type Param = string | number | { toString(): string };",
            "type FormatFn = (value: string) => string;",
            "type SnippetPart = unknown;",
            "type SnippetParam = Param | SnippetPart;",
            "type SnippetFormatFn = (children: SnippetPart[]) => SnippetPart;",
            "type Snippet<P extends unknown[]> = (...args: P) => SnippetPart[];",
            "",
            concat("export type AvailableLocale = ", available, ";"),
            "export const availableLocales: AvailableLocale[];",
            concat("export const defaultLocale: ", quote(default_locale), ";"),
            "export const localeNames: Readonly<Record<AvailableLocale, string>>;",
            "",
            concat("export type Translations = ", translations_type, ";"),
            concat("export type Snippets = ", snippets_type, ";"),
            concat("export type KeyMapping = ", _type_literal(translations.table), ";"),
            concat("export type SnippetMapping = ", _type_literal(snippets.table), ";"),
            "export type TranslationKeys = keyof KeyMapping;",
            "export type SnippetKeys = keyof SnippetMapping;",
            "type Reactive<K> = (",
            "  key: K,",
            "  values: Partial<Record<AvailableLocale, unknown>>",
            ") => PropertyDescriptor;",
            "",
            "export function createTranslations(reactive: Reactive<TranslationKeys>): Translations;",
            "export function createSnippets(reactive: Reactive<SnippetKeys>): Snippets;",
            "export const keyAccessors: Map<TranslationKeys, (t: Translations) => unknown>;",
            "export const snippetAccessors: Map<SnippetKeys, (s: Snippets) => unknown>;",
        ]
    )
    return concat(
        GENERATED_HEADER,
        "\n\ndeclare module ",
        quote(alias),
        " {\n",
        indent_block(body),
        "\n}\n",
    )


def emit(
    result: MergeResult,
    default_locale: str,
    *,
    alias: str = DEFAULT_ALIAS,
    locale_names: dict[str, str] | None = None,
) -> GeneratedOutput:
    """Render both artifacts for a merged schema.

    Args:
        result: Output of merge()
        default_locale: Locale exported as defaultLocale
        alias: Module specifier of the declaration module
        locale_names: Display name per locale (defaults to the tag itself)

    Returns:
        GeneratedOutput holding both source texts
    """
    data_module = render(emit_data_module(result, default_locale, locale_names))
    types_module = render(emit_types_module(result, default_locale, alias))
    logger.debug(
        "Emitted data module (%d chars) and types module (%d chars)",
        len(data_module),
        len(types_module),
    )
    return GeneratedOutput(
        data_module=data_module,
        types_module=types_module,
        locales=result.locales,
        default_locale=default_locale,
    )


def _factory(name: str, body: Fragment) -> Code:
    return concat("export function ", name, "(reactive) {\n  return ", indent(body), ";\n}")


def _string_array(items: tuple[str, ...]) -> Code:
    return concat("[", join((quote(item) for item in items), ", "), "]")


def _map(entries: list[Fragment]) -> Code:
    if not entries:
        return concat("new Map()")
    return concat("new Map([\n  ", join(entries, ",\n  "), "\n])")


def _type_literal(entries: list[Fragment]) -> Code:
    if not entries:
        return concat("{}")
    return concat("{\n  ", join(entries, ",\n  "), "\n}")
