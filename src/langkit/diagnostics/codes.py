"""Diagnostic codes and the Diagnostic record carried by every LangError.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Stable numeric identifiers, grouped by the stage that reports them.

    1xxx merge (cross-locale consistency), 2xxx template parsing,
    3xxx file I/O, 4xxx configuration, 5xxx warnings.
    """

    STRUCTURE_MISMATCH = 1001
    SIGNATURE_MISMATCH = 1002
    KEY_COLLISION = 1003
    MAX_DEPTH_EXCEEDED = 1004

    TEMPLATE_SYNTAX = 2001

    DOCUMENT_LOAD_FAILED = 3001
    DOCUMENT_DECODE_FAILED = 3002
    ARTIFACT_WRITE_FAILED = 3003

    NO_DOCUMENTS = 4001
    DEFAULT_LOCALE_MISSING = 4002
    INVALID_CONFIGURATION = 4003

    NON_STRING_VALUE_SKIPPED = 5001
    UNKNOWN_LOCALE = 5002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """What went wrong, where, and what to do about it.

    Attributes:
        code: Identifier tools can match on
        message: One-sentence description
        hint: Suggested fix, when there is an obvious one
        location: Key path with locale, or a file path
        severity: "warning" for skipped input that does not stop a compile
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    location: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return self.message

    def format_error(self) -> str:
        """Multi-line rendering used in logs and the default CLI output.

            error[SIGNATURE_MISMATCH]: Parameter mismatch: msg (expected {name}, got {} in 'fr')
              --> msg (fr)
              = help: Use the same placeholders and formatters in every locale
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
