"""Diagnostic system for langkit errors.

Provides structured error diagnostics with codes, locations and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ArtifactWriteError,
    ConfigurationError,
    DepthLimitExceededError,
    DocumentLoadError,
    KeyCollisionError,
    LangError,
    MergeError,
    SignatureMismatchError,
    StructureMismatchError,
    TemplateSyntaxError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ArtifactWriteError",
    "ConfigurationError",
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DocumentLoadError",
    "ErrorTemplate",
    "KeyCollisionError",
    "LangError",
    "MergeError",
    "OutputFormat",
    "SignatureMismatchError",
    "StructureMismatchError",
    "TemplateSyntaxError",
]
