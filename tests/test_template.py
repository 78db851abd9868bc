"""Tests for the brace template parser and BraceTemplateCompiler."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from langkit.core import Signature
from langkit.diagnostics import DiagnosticCode, TemplateSyntaxError
from langkit.template import (
    BraceTemplateCompiler,
    FormatterCall,
    Placeholder,
    Text,
    parse_template,
)
from tests.strategies import templates

COMPILER = BraceTemplateCompiler()


# ============================================================================
# PARSER
# ============================================================================


class TestParseTemplate:
    """Element trees for valid templates."""

    def test_plain_text(self) -> None:
        assert parse_template("Hello") == (Text("Hello"),)

    def test_empty(self) -> None:
        assert parse_template("") == ()

    def test_placeholder(self) -> None:
        assert parse_template("Hi {name}!") == (Text("Hi "), Placeholder("name"), Text("!"))

    def test_spaces_inside_braces(self) -> None:
        assert parse_template("{ name }") == (Placeholder("name"),)

    def test_formatter_with_nested_placeholder(self) -> None:
        assert parse_template("{b:Hi {name}}") == (
            FormatterCall("b", (Text("Hi "), Placeholder("name"))),
        )

    def test_escaped_braces_and_backslash(self) -> None:
        assert parse_template("a \\{b\\} \\\\") == (Text("a {b} \\"),)

    def test_lone_backslash_is_literal(self) -> None:
        assert parse_template("a\\nb") == (Text("a\\nb"),)


class TestParseTemplateErrors:
    """Malformed templates report reason and position."""

    @pytest.mark.parametrize(
        ("source", "reason", "position"),
        [
            ("Hello }", "Unmatched '}'", 6),
            ("Hello {", "Expected parameter name", 7),
            ("{1}", "Expected parameter name", 1),
            ("{name", "Unclosed '{'", 5),
            ("{a:x", "Unclosed '{'", 4),
            ("{a b}", "Unexpected character 'b' in placeholder", 3),
        ],
    )
    def test_error(self, source: str, reason: str, position: int) -> None:
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse_template(source)
        error = exc_info.value
        assert error.reason == reason
        assert error.position == position
        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.TEMPLATE_SYNTAX


# ============================================================================
# COMPILER
# ============================================================================


class TestBraceTemplateCompiler:
    """Signatures and generated code."""

    def test_no_params_is_string_literal(self) -> None:
        result = COMPILER.compile("Hello")
        assert result.signature == Signature.empty()
        assert result.expression == '"Hello"'
        assert result.fragment is None

    def test_escaped_braces_stay_string_literal(self) -> None:
        assert COMPILER.compile("a \\{b\\}").expression == '"a {b}"'

    def test_backtick_and_dollar_in_plain_text(self) -> None:
        assert COMPILER.compile("`$x`").expression == '"`$x`"'

    def test_value_parameter(self) -> None:
        result = COMPILER.compile("Hello {name}")
        assert result.signature == Signature.of(["name"])
        assert result.expression == "(params) => `Hello ${ params.name }`"
        assert result.fragment is None

    def test_literal_text_is_escaped(self) -> None:
        result = COMPILER.compile("{name} costs $5\n")
        assert result.expression == "(params) => `${ params.name } costs \\$5\\n`"

    def test_formatter_parameter(self) -> None:
        result = COMPILER.compile("Read {link:the docs}")
        assert result.signature == Signature.of(["link"], fns=["link"])
        assert result.expression == "(params) => `Read ${ params.link(`the docs`) }`"
        assert result.fragment == '(params) => ["Read ", params.link(["the docs"])]'

    def test_nested_formatter(self) -> None:
        result = COMPILER.compile("{b:Hi {name}}")
        assert result.signature == Signature.of(["b", "name"], fns=["b"])
        assert result.expression == "(params) => `${ params.b(`Hi ${ params.name }`) }`"
        assert result.fragment == '(params) => [params.b(["Hi ", params.name])]'

    def test_repeated_parameter_counts_once(self) -> None:
        assert COMPILER.compile("{n} and {n}").signature == Signature.of(["n"])

    def test_value_and_formatter_with_same_name(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="both as value and formatter"):
            COMPILER.compile("{a} {a:x}")

    def test_deterministic(self) -> None:
        assert COMPILER.compile("x {a} {b:y}") == COMPILER.compile("x {a} {b:y}")

    @given(templates())
    def test_generated_templates_compile(self, source: str) -> None:
        result = COMPILER.compile(source)
        assert not result.signature.has_formatters
        assert "\n" not in result.expression


class TestTemplateSyntaxErrorContext:
    """with_context attaches key and locale."""

    def test_with_context(self) -> None:
        with pytest.raises(TemplateSyntaxError) as exc_info:
            COMPILER.compile("oops }")
        error = exc_info.value.with_context("greet", "fr")
        assert error.key == "greet"
        assert error.locale == "fr"
        assert error.position == 5
        assert str(error) == "Invalid template for 'greet' in 'fr': Unmatched '}' at position 5"
        assert error.diagnostic is not None
        assert error.diagnostic.location == "greet (fr)"


# ============================================================================
# FUZZ
# ============================================================================


@pytest.mark.fuzz
class TestParserFuzz:
    """Arbitrary brace soup either compiles or fails with a located error."""

    @given(st.text(alphabet="{}\\:ab_1 $\n", max_size=60))
    def test_parse_or_located_error(self, source: str) -> None:
        try:
            COMPILER.compile(source)
        except TemplateSyntaxError as e:
            assert 0 <= e.position <= len(source)
            assert e.diagnostic is not None
            assert e.diagnostic.code is DiagnosticCode.TEMPLATE_SYNTAX
