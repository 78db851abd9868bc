"""langkit exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic for rich error output.
Every error is fatal to the compile attempt that raised it.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ArtifactWriteError",
    "ConfigurationError",
    "DepthLimitExceededError",
    "DocumentLoadError",
    "KeyCollisionError",
    "LangError",
    "MergeError",
    "SignatureMismatchError",
    "StructureMismatchError",
    "TemplateSyntaxError",
]


class LangError(Exception):
    """Base exception for all langkit errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LangError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class MergeError(LangError):
    """Locale documents cannot be merged into one canonical key schema."""


class StructureMismatchError(MergeError):
    """A path is a leaf in one locale and an interior node in another.

    Example:
        en.json: { "a": { "b": "x" } }
        fr.json: { "a": "y" }          ← 'a' is both a string and an object

    Attributes:
        path: Canonical key of the conflicting path
    """

    def __init__(self, message: str | Diagnostic, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class KeyCollisionError(MergeError):
    """Two distinct paths join to the same canonical key.

    Example:
        { "a.b": "x", "a": { "b": "y" } }  ← both are key 'a.b'

    Attributes:
        key: The canonical key claimed twice
    """

    def __init__(self, message: str | Diagnostic, *, key: str) -> None:
        super().__init__(message)
        self.key = key


class SignatureMismatchError(MergeError):
    """The same key compiles to incompatible parameter signatures.

    Attributes:
        key: Canonical key of the translation
        locale: Locale whose signature disagrees with the reference
        expected: Reference signature description (first locale to define key)
        actual: Disagreeing signature description
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        key: str,
        locale: str = "",
        expected: str = "",
        actual: str = "",
    ) -> None:
        super().__init__(message)
        self.key = key
        self.locale = locale
        self.expected = expected
        self.actual = actual


class TemplateSyntaxError(LangError):
    """A translation string is not a valid template.

    Raised by template compilers without key context; the merger re-raises
    with the key and locale attached (see with_context).

    Attributes:
        key: Canonical key of the translation (empty until attached)
        locale: Locale of the offending document (empty until attached)
        position: Character offset of the error within the template
        reason: Compiler message without key context
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        key: str = "",
        locale: str = "",
        position: int = 0,
        reason: str = "",
    ) -> None:
        super().__init__(message)
        self.key = key
        self.locale = locale
        self.position = position
        self.reason = reason or str(message)

    def with_context(self, key: str, locale: str) -> "TemplateSyntaxError":
        """Return a copy carrying the key and locale of the offending leaf."""
        from .templates import ErrorTemplate  # noqa: PLC0415 - circular

        diagnostic = ErrorTemplate.template_syntax(key, locale, self.reason, self.position)
        return TemplateSyntaxError(
            diagnostic,
            key=key,
            locale=locale,
            position=self.position,
            reason=self.reason,
        )


class DocumentLoadError(LangError):
    """A locale document cannot be read or decoded.

    Attributes:
        path: Path of the document
    """

    def __init__(self, message: str | Diagnostic, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class ArtifactWriteError(LangError):
    """A generated artifact cannot be written.

    Attributes:
        path: Path of the artifact
    """

    def __init__(self, message: str | Diagnostic, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class ConfigurationError(LangError):
    """Compile options are invalid for the discovered documents."""


class DepthLimitExceededError(MergeError):
    """A document nests objects or lists deeper than the merger walks."""
