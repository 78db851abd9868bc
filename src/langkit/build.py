"""Build orchestration: load documents, compile, write artifacts.

One compile pass:
    1. Load every locale document concurrently (worker threads)
    2. Merge and validate (all-or-nothing)
    3. Emit both artifacts in memory
    4. Write each artifact atomically (temp file + os.replace)

Nothing is written unless steps 1-3 succeed, so a failed compile leaves the
previous artifacts in place.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
import time
from collections.abc import Iterable
from dataclasses import dataclass, replace
from pathlib import Path

from langkit.compiler import GeneratedOutput, emit, merge
from langkit.constants import (
    DEFAULT_ALIAS,
    DEFAULT_DATA_PATH,
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_LANG_DIR,
    DEFAULT_TYPES_PATH,
)
from langkit.diagnostics import ArtifactWriteError, ConfigurationError, ErrorTemplate
from langkit.documents import LocaleDocument, load_documents
from langkit.locale_utils import locale_display_names
from langkit.template import TemplateCompiler

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "CompileOptions",
    "generate",
    "write_output",
    "compile_async",
    "compile",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Inputs and outputs of a compile pass.

    Attributes:
        default_locale: Locale exported as the default (must have a document)
        lang_dir: Directory holding <locale>.json documents
        data_path: Output path of the JavaScript data module
        types_path: Output path of the TypeScript declaration module
        alias: Module specifier declared by the types module
        debounce: Idle seconds between consecutive rebuilds in watch mode
    """

    default_locale: str
    lang_dir: str = DEFAULT_LANG_DIR
    data_path: str = DEFAULT_DATA_PATH
    types_path: str = DEFAULT_TYPES_PATH
    alias: str = DEFAULT_ALIAS
    debounce: float = DEFAULT_DEBOUNCE_SECONDS

    def __post_init__(self) -> None:
        """Validate option values.

        Raises:
            ConfigurationError: If default_locale is empty or debounce is negative
        """
        if not self.default_locale:
            raise ConfigurationError(ErrorTemplate.invalid_configuration("default locale is empty"))
        if self.debounce < 0:
            raise ConfigurationError(
                ErrorTemplate.invalid_configuration(f"debounce must be >= 0, got {self.debounce}")
            )

    def resolve(self, root: str | Path) -> CompileOptions:
        """Return a copy with every relative path anchored at root."""
        base = Path(root)
        return replace(
            self,
            lang_dir=str(base / self.lang_dir),
            data_path=str(base / self.data_path),
            types_path=str(base / self.types_path),
        )


def generate(
    documents: Iterable[LocaleDocument],
    default_locale: str,
    *,
    alias: str = DEFAULT_ALIAS,
    compiler: TemplateCompiler | None = None,
    locale_names: dict[str, str] | None = None,
    source: str = "<documents>",
) -> GeneratedOutput:
    """Compile documents into artifact text without touching the filesystem.

    Args:
        documents: Locale documents in discovery order
        default_locale: Locale exported as the default
        alias: Module specifier declared by the types module
        compiler: Template compiler (default: BraceTemplateCompiler)
        locale_names: Display names (default: Babel self-names)
        source: Where documents came from, for diagnostics

    Raises:
        ConfigurationError: No documents, or default locale has no document
        MergeError: Structural or signature conflict between locales
        TemplateSyntaxError: Invalid translation string
    """
    documents = list(documents)
    if not documents:
        raise ConfigurationError(ErrorTemplate.no_documents(source))
    locales = tuple(document.locale for document in documents)
    if default_locale not in locales:
        raise ConfigurationError(ErrorTemplate.default_locale_missing(default_locale, locales))

    result = merge(documents, compiler)
    names = locale_display_names(result.locales) if locale_names is None else locale_names
    return emit(result, default_locale, alias=alias, locale_names=names)


def _write_atomic(path: Path, text: str) -> bool:
    """Write text to path via a sibling temp file. Returns False if unchanged."""
    try:
        if path.is_file() and path.read_text(encoding="utf-8") == text:
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        temp = Path(handle.name)
        try:
            with handle:
                handle.write(text)
            os.replace(temp, path)
        except BaseException:
            temp.unlink(missing_ok=True)
            raise
    except (OSError, UnicodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise ArtifactWriteError(
            ErrorTemplate.artifact_write_failed(str(path), reason),
            path=str(path),
        ) from e
    return True


async def write_output(output: GeneratedOutput, options: CompileOptions) -> None:
    """Write both artifacts, creating parent directories as needed.

    Raises:
        ArtifactWriteError: If either file cannot be written
    """
    for path, text in (
        (Path(options.data_path), output.data_module),
        (Path(options.types_path), output.types_module),
    ):
        written = await asyncio.to_thread(_write_atomic, path, text)
        if written:
            logger.debug("Wrote %s", path)
        else:
            logger.debug("Unchanged %s", path)


async def compile_async(
    options: CompileOptions,
    compiler: TemplateCompiler | None = None,
) -> GeneratedOutput:
    """Run one full compile pass.

    Raises:
        LangError: First error encountered (load, merge, template, or write)
    """
    started = time.perf_counter()
    documents = await load_documents(options.lang_dir)
    output = generate(
        documents,
        options.default_locale,
        alias=options.alias,
        compiler=compiler,
        source=options.lang_dir,
    )
    await write_output(output, options)
    logger.info(
        "Compiled %d locale(s) [%s] in %.1f ms",
        len(output.locales),
        ", ".join(output.locales),
        (time.perf_counter() - started) * 1000,
    )
    return output


def compile(  # noqa: A001 - public entry point name
    options: CompileOptions,
    compiler: TemplateCompiler | None = None,
) -> GeneratedOutput:
    """Run one compile pass from synchronous code (one-shot builds).

    Raises:
        LangError: First error encountered (load, merge, template, or write)
    """
    return asyncio.run(compile_async(options, compiler))
