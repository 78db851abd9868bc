"""langkit - compile per-locale JSON translations into a typed JavaScript module.

Merges every <locale>.json document of a locale directory into one canonical
key schema, validates that all locales agree on structure and parameters,
and emits a runtime data module plus a TypeScript declaration module.

Public API:
    CompileOptions - Input directory, output paths, default locale
    compile - One-shot build (blocking)
    compile_async - One-shot build (coroutine)
    generate - Pure core: documents in, artifact text out
    watch - Rebuild on change with coalesced scheduling
    BraceTemplateCompiler - Default per-string template compiler

Exceptions:
    LangError - Base exception class
    MergeError - Structure, key or parameter conflicts between locales
    TemplateSyntaxError - Invalid translation string
    DocumentLoadError - Unreadable or malformed locale document
    ArtifactWriteError - Output file could not be written
    ConfigurationError - Invalid options

Submodules:
    langkit.codegen - Lazy code-generation engine
    langkit.compiler - Tree merger and emitters
    langkit.diagnostics - Error types, codes and formatting
"""

from .build import CompileOptions, compile, compile_async, generate, write_output
from .diagnostics import (
    ArtifactWriteError,
    ConfigurationError,
    DocumentLoadError,
    LangError,
    MergeError,
    TemplateSyntaxError,
)
from .documents import LocaleDocument
from .template import BraceTemplateCompiler, CompiledTemplate, TemplateCompiler
from .watch import watch

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("langkit")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArtifactWriteError",
    "BraceTemplateCompiler",
    "CompileOptions",
    "CompiledTemplate",
    "ConfigurationError",
    "DocumentLoadError",
    "LangError",
    "LocaleDocument",
    "MergeError",
    "TemplateCompiler",
    "TemplateSyntaxError",
    "__version__",
    "compile",
    "compile_async",
    "generate",
    "watch",
    "write_output",
]
