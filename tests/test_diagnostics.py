"""Tests for diagnostics: codes, templates, formatter, exception hierarchy."""

import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from langkit.diagnostics import (
    ArtifactWriteError,
    ConfigurationError,
    DepthLimitExceededError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    DocumentLoadError,
    ErrorTemplate,
    KeyCollisionError,
    LangError,
    MergeError,
    OutputFormat,
    SignatureMismatchError,
    StructureMismatchError,
    TemplateSyntaxError,
)

# ============================================================================
# HIERARCHY
# ============================================================================


class TestHierarchy:
    """Every error derives from LangError; merge failures from MergeError."""

    @pytest.mark.parametrize(
        "error_type",
        [StructureMismatchError, KeyCollisionError, SignatureMismatchError, DepthLimitExceededError],
    )
    def test_merge_errors(self, error_type: type) -> None:
        assert issubclass(error_type, MergeError)

    @pytest.mark.parametrize(
        "error_type",
        [TemplateSyntaxError, DocumentLoadError, ArtifactWriteError, ConfigurationError],
    )
    def test_other_errors(self, error_type: type) -> None:
        assert issubclass(error_type, LangError)
        assert not issubclass(error_type, MergeError)

    def test_plain_message(self) -> None:
        error = LangError("plain")
        assert str(error) == "plain"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        diagnostic = ErrorTemplate.no_documents("lang")
        error = ConfigurationError(diagnostic)
        assert error.diagnostic is diagnostic
        assert str(error) == "No locale documents found in lang"


# ============================================================================
# TEMPLATES
# ============================================================================


class TestErrorTemplate:
    """Codes and messages."""

    def test_structure_mismatch(self) -> None:
        diagnostic = ErrorTemplate.structure_mismatch("a.b", "fr")
        assert diagnostic.code is DiagnosticCode.STRUCTURE_MISMATCH
        assert diagnostic.message == "Translations structure mis-match: a.b"
        assert diagnostic.location == "a.b (fr)"

    def test_signature_mismatch(self) -> None:
        diagnostic = ErrorTemplate.signature_mismatch("k", "fr", "{a}", "{}")
        assert diagnostic.message == "Parameter mismatch: k (expected {a}, got {} in 'fr')"

    def test_warnings(self) -> None:
        assert ErrorTemplate.non_string_value("n", "en", "int").severity == "warning"
        assert ErrorTemplate.unknown_locale("zz").severity == "warning"

    def test_default_locale_missing_lists_available(self) -> None:
        diagnostic = ErrorTemplate.default_locale_missing("en", ("de", "fr"))
        assert "(available: de, fr)" in diagnostic.message
        assert ErrorTemplate.default_locale_missing("en", ()).message.endswith("(available: none)")

    def test_codes_are_unique(self) -> None:
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))


# ============================================================================
# FORMATTER
# ============================================================================


class TestDiagnosticFormatter:
    """rust / simple / json output."""

    DIAGNOSTIC = Diagnostic(
        code=DiagnosticCode.KEY_COLLISION,
        message="Key collision",
        hint="Rename it",
        location="a.b (en)",
    )

    def test_rust(self) -> None:
        assert DiagnosticFormatter().format(self.DIAGNOSTIC) == (
            "error[KEY_COLLISION]: Key collision\n  --> a.b (en)\n  = help: Rename it"
        )

    def test_rust_without_location_or_hint(self) -> None:
        diagnostic = Diagnostic(code=DiagnosticCode.NO_DOCUMENTS, message="none")
        assert DiagnosticFormatter().format(diagnostic) == "error[NO_DOCUMENTS]: none"

    def test_color_warning(self) -> None:
        diagnostic = ErrorTemplate.unknown_locale("zz")
        text = DiagnosticFormatter(color=True).format(diagnostic)
        assert text.startswith("\033[1;33mwarning\033[0m[UNKNOWN_LOCALE]")

    def test_simple(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        assert formatter.format(self.DIAGNOSTIC) == "KEY_COLLISION: Key collision"

    def test_json(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        assert json.loads(formatter.format(self.DIAGNOSTIC)) == {
            "code": "KEY_COLLISION",
            "message": "Key collision",
            "severity": "error",
            "hint": "Rename it",
            "location": "a.b (en)",
        }

    def test_format_all(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        text = formatter.format_all([self.DIAGNOSTIC, self.DIAGNOSTIC])
        assert text == "KEY_COLLISION: Key collision\n\nKEY_COLLISION: Key collision"

    def test_format_error_delegates(self) -> None:
        assert self.DIAGNOSTIC.format_error() == DiagnosticFormatter().format(self.DIAGNOSTIC)

    @given(st.text(max_size=40))
    def test_control_characters_cannot_forge_lines(self, key: str) -> None:
        diagnostic = ErrorTemplate.structure_mismatch(key, "en")
        rust = DiagnosticFormatter().format(diagnostic)
        simple = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic)
        assert len(rust.split("\n")) == 3
        assert "\n" not in simple
        for text in (rust, simple):
            assert "\r" not in text
            assert "\x1b" not in text
