"""Diagnostic factories, one per failure mode.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Builds the Diagnostic for each way a compile can fail or warn.

    Raise sites pass these to the exception constructors instead of
    formatting their own messages, so wording lives in one file and tests
    can compare against it.
    """

    @staticmethod
    def structure_mismatch(path: str, locale: str) -> Diagnostic:
        """Path is a leaf in one document and an object in another.

        Args:
            path: Canonical key of the conflicting path
            locale: Locale whose document exposed the conflict

        Returns:
            Diagnostic for STRUCTURE_MISMATCH
        """
        msg = f"Translations structure mis-match: {path}"
        return Diagnostic(
            code=DiagnosticCode.STRUCTURE_MISMATCH,
            message=msg,
            hint=f"Make '{path}' either a string or an object in every locale",
            location=f"{path} ({locale})",
        )

    @staticmethod
    def key_collision(key: str, locale: str) -> Diagnostic:
        """Two distinct paths produce the same canonical key.

        Args:
            key: Joined key claimed by both paths
            locale: Locale whose document introduced the second path

        Returns:
            Diagnostic for KEY_COLLISION
        """
        msg = f"Key collision: two paths resolve to '{key}'"
        return Diagnostic(
            code=DiagnosticCode.KEY_COLLISION,
            message=msg,
            hint="Avoid '.' inside property names that shadow nested objects",
            location=f"{key} ({locale})",
        )

    @staticmethod
    def signature_mismatch(key: str, locale: str, expected: str, actual: str) -> Diagnostic:
        """Same key compiled to different parameter signatures.

        Args:
            key: Canonical key
            locale: Locale that disagrees with the reference signature
            expected: Reference signature description
            actual: Disagreeing signature description

        Returns:
            Diagnostic for SIGNATURE_MISMATCH
        """
        msg = f"Parameter mismatch: {key} (expected {expected}, got {actual} in '{locale}')"
        return Diagnostic(
            code=DiagnosticCode.SIGNATURE_MISMATCH,
            message=msg,
            hint="Use the same placeholders and formatters in every locale",
            location=f"{key} ({locale})",
        )

    @staticmethod
    def template_error(reason: str, position: int) -> Diagnostic:
        """Template failed to compile (no key context yet).

        Args:
            reason: Compiler message
            position: Character offset within the template

        Returns:
            Diagnostic for TEMPLATE_SYNTAX
        """
        msg = f"{reason} at position {position}"
        return Diagnostic(code=DiagnosticCode.TEMPLATE_SYNTAX, message=msg)

    @staticmethod
    def template_syntax(key: str, locale: str, reason: str, position: int) -> Diagnostic:
        """Template failed to compile.

        Args:
            key: Canonical key of the translation
            locale: Locale of the offending document
            reason: Compiler message
            position: Character offset within the template

        Returns:
            Diagnostic for TEMPLATE_SYNTAX
        """
        msg = f"Invalid template for '{key}' in '{locale}': {reason} at position {position}"
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_SYNTAX,
            message=msg,
            hint="Escape literal braces as \\{ and \\}",
            location=f"{key} ({locale})",
        )

    @staticmethod
    def depth_exceeded(max_depth: int, path: str) -> Diagnostic:
        """Document nesting exceeds the traversal limit.

        Args:
            max_depth: Maximum allowed depth
            path: Key path at which the limit was hit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded at '{path}'"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Flatten the translation document",
            location=path,
        )

    @staticmethod
    def document_unreadable(path: str, reason: str) -> Diagnostic:
        """Locale document could not be read.

        Args:
            path: Document path
            reason: Underlying OS error message

        Returns:
            Diagnostic for DOCUMENT_LOAD_FAILED
        """
        msg = f"Cannot read locale document {path}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.DOCUMENT_LOAD_FAILED,
            message=msg,
            location=path,
        )

    @staticmethod
    def document_invalid(path: str, reason: str, line: int, column: int) -> Diagnostic:
        """Locale document is not valid (commented) JSON.

        Args:
            path: Document path
            reason: Decoder message
            line: 1-indexed line of the error
            column: 1-indexed column of the error

        Returns:
            Diagnostic for DOCUMENT_DECODE_FAILED
        """
        msg = f"Invalid JSON in {path}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.DOCUMENT_DECODE_FAILED,
            message=msg,
            hint="Only // and /* */ comments are allowed besides standard JSON",
            location=f"{path}:{line}:{column}",
        )

    @staticmethod
    def artifact_write_failed(path: str, reason: str) -> Diagnostic:
        """Generated artifact could not be written.

        Args:
            path: Artifact path
            reason: Underlying OS error message

        Returns:
            Diagnostic for ARTIFACT_WRITE_FAILED
        """
        msg = f"Cannot write {path}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.ARTIFACT_WRITE_FAILED,
            message=msg,
            location=path,
        )

    @staticmethod
    def no_documents(directory: str) -> Diagnostic:
        """Locale directory holds no documents.

        Args:
            directory: Locale directory

        Returns:
            Diagnostic for NO_DOCUMENTS
        """
        msg = f"No locale documents found in {directory}"
        return Diagnostic(
            code=DiagnosticCode.NO_DOCUMENTS,
            message=msg,
            hint="Add one <locale>.json file per supported locale",
            location=directory,
        )

    @staticmethod
    def default_locale_missing(default_locale: str, available: tuple[str, ...]) -> Diagnostic:
        """Configured default locale has no document.

        Args:
            default_locale: Configured default locale
            available: Discovered locale tags

        Returns:
            Diagnostic for DEFAULT_LOCALE_MISSING
        """
        listing = ", ".join(available) or "none"
        msg = f"Default locale '{default_locale}' has no document (available: {listing})"
        return Diagnostic(
            code=DiagnosticCode.DEFAULT_LOCALE_MISSING,
            message=msg,
            hint=f"Add {default_locale}.json or change the default locale",
        )

    @staticmethod
    def invalid_configuration(reason: str, location: str | None = None) -> Diagnostic:
        """Configuration value is invalid.

        Args:
            reason: What is wrong with the configuration
            location: Configuration file, if any

        Returns:
            Diagnostic for INVALID_CONFIGURATION
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_CONFIGURATION,
            message=f"Invalid configuration: {reason}",
            location=location,
        )

    @staticmethod
    def non_string_value(path: str, locale: str, type_name: str) -> Diagnostic:
        """Document holds a scalar that is not a translation string.

        Args:
            path: Key path of the value
            locale: Locale of the document
            type_name: Python type name of the value

        Returns:
            Warning diagnostic for NON_STRING_VALUE_SKIPPED
        """
        msg = f"Skipping non-string value at '{path}' in '{locale}' ({type_name})"
        return Diagnostic(
            code=DiagnosticCode.NON_STRING_VALUE_SKIPPED,
            message=msg,
            location=f"{path} ({locale})",
            severity="warning",
        )

    @staticmethod
    def unknown_locale(locale: str) -> Diagnostic:
        """Locale tag is not known to CLDR.

        Args:
            locale: Locale tag derived from a document file name

        Returns:
            Warning diagnostic for UNKNOWN_LOCALE
        """
        msg = f"Locale '{locale}' is not a known CLDR locale; no display name generated"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LOCALE,
            message=msg,
            severity="warning",
        )
