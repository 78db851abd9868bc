"""Tests for the runtime and declaration emitters."""

from hypothesis import given

from langkit.compiler import emit, merge
from langkit.compiler.emit import DeclarationWalker, RuntimeWalker
from langkit.codegen import render
from langkit.documents import LocaleDocument
from tests.strategies import consistent_document_sets

NAMES = {"en": "English", "fr": "Français"}


def emit_docs(*trees: tuple[str, object], default: str = "en", alias: str = "$lang"):
    documents = [LocaleDocument(locale, tree) for locale, tree in trees]
    return emit(merge(documents), default, alias=alias, locale_names=NAMES)


GREET_DATA_MODULE = """\
// Generated by langkit. Do not edit.

export const availableLocales = ["en", "fr"];

export const defaultLocale = "en";

export const localeNames = {
  "en": "English",
  "fr": "Français"
};

export function createTranslations(reactive) {
  return Object.freeze(Object.defineProperties({}, {
    "greet": reactive("greet", {
      "en": (params) => `Hello ${ params.name }`,
      "fr": (params) => `Bonjour ${ params.name }`
    })
  }));
}

export function createSnippets(reactive) {
  return Object.freeze({});
}

export const keyAccessors = new Map([
  ["greet", (t) => t["greet"]]
]);

export const snippetAccessors = new Map();
"""


# ============================================================================
# DATA MODULE
# ============================================================================


class TestDataModule:
    """JavaScript runtime module."""

    def test_greet_module_exact(self) -> None:
        output = emit_docs(
            ("en", {"greet": "Hello {name}"}),
            ("fr", {"greet": "Bonjour {name}"}),
        )
        assert output.data_module == GREET_DATA_MODULE
        assert output.locales == ("en", "fr")
        assert output.default_locale == "en"

    def test_nested_objects_are_static_leaves_reactive(self) -> None:
        output = emit_docs(("en", {"nav": {"home": "Home"}, "title": "T"}))
        module = output.data_module
        assert (
            "  return Object.freeze(Object.defineProperties({\n"
            '    "nav": Object.freeze(Object.defineProperties({}, {\n'
        ) in module
        assert '  }, {\n    "title": reactive("title", {\n' in module
        assert '["nav.home", (t) => t["nav"]["home"]]' in module

    def test_object_without_leaves_is_plain_frozen(self) -> None:
        output = emit_docs(("en", {"a": {"b": {"c": "x"}}}))
        assert 'Object.freeze({\n    "a": Object.freeze({\n' in output.data_module

    def test_list_items_use_string_subscripts(self) -> None:
        output = emit_docs(("en", {"items": ["one"]}))
        assert '["items.0", (t) => t["items"]["0"]]' in output.data_module

    def test_snippets_hoisted_into_constants(self) -> None:
        output = emit_docs(
            ("en", {"terms": "Read {link:the docs}", "plain": "x"}),
            ("fr", {"terms": "Lire {link:la doc}", "plain": "y"}),
        )
        module = output.data_module
        assert 'const snippet_0 = (params) => ["Read ", params.link(["the docs"])];' in module
        assert 'const snippet_1 = (params) => ["Lire ", params.link(["la doc"])];' in module
        assert '"en": snippet_0,\n' in module
        assert 'export const snippetAccessors = new Map([\n  ["terms", (t) => t["terms"]]\n]);' in module
        # Plain keys never appear among snippets
        assert '["plain", (t) => t["plain"]]' in module.split("snippetAccessors")[0]
        assert '"plain"' not in module.split("snippetAccessors")[1]

    def test_locale_names_default_to_tags(self) -> None:
        result = merge([LocaleDocument("en", {"a": "A"})])
        output = emit(result, "en")
        assert 'export const localeNames = {\n  "en": "en"\n};' in output.data_module


# ============================================================================
# TYPES MODULE
# ============================================================================


class TestTypesModule:
    """TypeScript declaration module."""

    def test_greet_types(self) -> None:
        output = emit_docs(
            ("en", {"greet": "Hello {name}", "bye": "Bye"}),
            ("fr", {"greet": "Bonjour {name}", "bye": "Salut"}),
        )
        types = output.types_module
        assert types.startswith('// Generated by langkit. Do not edit.\n\ndeclare module "$lang" {\n')
        assert types.endswith("\n}\n")
        assert '  export type AvailableLocale = "en" | "fr";\n' in types
        assert '  export const defaultLocale: "en";\n' in types
        assert (
            "  export type Translations = {\n"
            '    readonly "greet": (params: { name: Param }) => string,\n'
            '    readonly "bye": string\n'
            "  };\n"
        ) in types
        assert (
            "  export type KeyMapping = {\n"
            '    "greet": [params: { name: Param }],\n'
            '    "bye": []\n'
            "  };\n"
        ) in types
        assert "  export type Snippets = {};\n" in types
        assert "  export type SnippetMapping = {};\n" in types

    def test_blank_lines_are_not_indented(self) -> None:
        output = emit_docs(("en", {"a": "A"}))
        assert "\n  \n" not in output.types_module
        assert "\n\n" in output.types_module

    def test_formatter_types(self) -> None:
        output = emit_docs(("en", {"t": "{b:Hi {name}}"}))
        types = output.types_module
        assert 'readonly "t": (params: { b: FormatFn, name: Param }) => string' in types
        assert 'readonly "t": Snippet<[params: { b: SnippetFormatFn, name: SnippetParam }]>' in types
        assert '"t": [params: { b: SnippetFormatFn, name: SnippetParam }]' in types

    def test_parameters_sorted(self) -> None:
        output = emit_docs(("en", {"k": "{zeta} {alpha}"}))
        assert "(params: { alpha: Param, zeta: Param }) => string" in output.types_module

    def test_custom_alias(self) -> None:
        output = emit_docs(("en", {"a": "A"}), alias="@app/i18n")
        assert 'declare module "@app/i18n" {' in output.types_module


# ============================================================================
# WALKERS AND DETERMINISM
# ============================================================================


class TestWalkers:
    """Tables and repeatability."""

    def test_runtime_table_follows_traversal(self) -> None:
        result = merge([LocaleDocument("en", {"b": "B", "a": {"c": "C"}})])
        walker = RuntimeWalker(result)
        walker.walk()
        assert [render(entry) for entry in walker.table] == [
            '["b", (t) => t["b"]]',
            '["a.c", (t) => t["a"]["c"]]',
        ]

    def test_snippet_walker_skips_plain_subtrees(self) -> None:
        result = merge([LocaleDocument("en", {"plain": {"x": "X"}, "rich": {"y": "{f:y}"}})])
        walker = DeclarationWalker(result, snippets=True)
        code = render(walker.walk())
        assert "plain" not in code
        assert 'readonly "rich"' in code

    @given(consistent_document_sets())
    def test_emission_is_deterministic(self, generated) -> None:
        _, documents = generated
        default = documents[0].locale
        first = emit(merge(documents), default)
        second = emit(merge(documents), default)
        assert first == second


class TestDottedSegments:
    """Paths whose segments join to the same dotted key stay distinct."""

    TREE = {"a": {"b": {"d": "plain"}}, "a.b": {"c": "Read {link:docs}"}}

    def test_snippet_under_dotted_segment_survives(self) -> None:
        output = emit_docs(("en", self.TREE))
        module = output.data_module
        assert "const snippet_0 = " in module
        snippets = module.split("export const snippetAccessors")[1]
        assert '["a.b.c", (t) => t["a.b"]["c"]]' in snippets
        assert '"a.b.d"' not in snippets

    def test_snippet_declarations_survive(self) -> None:
        types = emit_docs(("en", self.TREE)).types_module
        assert '"a.b.c": [params: { link: SnippetFormatFn }]' in types
        assert "  export type Snippets = {};\n" not in types
        assert "  export type SnippetMapping = {};\n" not in types
