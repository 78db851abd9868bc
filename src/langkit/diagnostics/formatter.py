"""Rendering of diagnostics for terminals, logs and editor tooling.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Keys and messages come from user documents; keep them on one line each
_CONTROL_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x1b": "\\x1b"})

_SEVERITY_COLORS = {"error": "1;31", "warning": "1;33"}


class OutputFormat(StrEnum):
    """Selectable with the CLI's --format flag."""

    RUST = "rust"
    SIMPLE = "simple"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turns a Diagnostic into text.

    rust   header line, then optional `-->` location and `= help:` lines
    simple `CODE: message` on a single line
    json   one JSON object per diagnostic, unescaped

    Example:
        >>> diagnostic = ErrorTemplate.structure_mismatch("a", "fr")
        >>> print(DiagnosticFormatter().format(diagnostic))
        error[STRUCTURE_MISMATCH]: Translations structure mis-match: a
          --> a (fr)
          = help: Make 'a' either a string or an object in every locale
        >>> print(DiagnosticFormatter(OutputFormat.SIMPLE).format(diagnostic))
        STRUCTURE_MISMATCH: Translations structure mis-match: a
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        match self.output_format:
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {_one_line(diagnostic.message)}"
            case OutputFormat.JSON:
                return _to_json(diagnostic)
            case _:
                return self._rust(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Join formatted diagnostics with a blank line between them."""
        return "\n\n".join(map(self.format, diagnostics))

    def _rust(self, diagnostic: Diagnostic) -> str:
        label = diagnostic.severity
        if self.color:
            label = f"\033[{_SEVERITY_COLORS[label]}m{label}\033[0m"
        lines = [f"{label}[{diagnostic.code.name}]: {_one_line(diagnostic.message)}"]
        if diagnostic.location:
            lines.append("  --> " + _one_line(diagnostic.location))
        if diagnostic.hint:
            lines.append("  = help: " + _one_line(diagnostic.hint))
        return "\n".join(lines)


def _to_json(diagnostic: Diagnostic) -> str:
    payload = {
        "code": diagnostic.code.name,
        "message": diagnostic.message,
        "severity": diagnostic.severity,
        "hint": diagnostic.hint,
        "location": diagnostic.location,
    }
    return json.dumps({k: v for k, v in payload.items() if v is not None}, ensure_ascii=False)


def _one_line(text: str) -> str:
    return text.translate(_CONTROL_ESCAPES)
