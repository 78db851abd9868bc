"""Shared constants for langkit.

Centralized defaults used by the compiler, the build orchestrator and the
CLI. Placing them here avoids circular imports between packages.

Constants are grouped by domain:
- Paths: Default locations of the locale directory and generated artifacts
- Code generation: Indentation and key separators
- Limits: Recursion protection for document traversal
- Scheduling: Rebuild debounce interval

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Paths
    "DEFAULT_LANG_DIR",
    "DEFAULT_DATA_PATH",
    "DEFAULT_TYPES_PATH",
    "DEFAULT_ALIAS",
    "DOCUMENT_SUFFIX",
    # Code generation
    "INDENT_UNIT",
    "KEY_SEPARATOR",
    "GENERATED_HEADER",
    # Limits
    "MAX_DEPTH",
    # Scheduling
    "DEFAULT_DEBOUNCE_SECONDS",
    "DEFAULT_POLL_INTERVAL",
]

# ============================================================================
# PATHS
# ============================================================================

DEFAULT_LANG_DIR: str = "./lang"
DEFAULT_DATA_PATH: str = "./.generated/lang.js"
DEFAULT_TYPES_PATH: str = "./src/lang.d.ts"

# Module specifier under which the declaration module is published.
DEFAULT_ALIAS: str = "$lang"

# Locale documents are discovered by suffix; the stem is the locale tag.
DOCUMENT_SUFFIX: str = ".json"

# ============================================================================
# CODE GENERATION
# ============================================================================

INDENT_UNIT: str = "  "

# Joins path segments into the canonical key ("nav.items.0.label").
KEY_SEPARATOR: str = "."

GENERATED_HEADER: str = "// Generated by langkit. Do not edit."

# ============================================================================
# LIMITS
# ============================================================================

# Maximum nesting depth of a locale document tree. Real translation files
# rarely nest more than 5 levels; 100 is clearly malformed input.
MAX_DEPTH: int = 100

# ============================================================================
# SCHEDULING
# ============================================================================

# Idle interval between consecutive rebuilds, absorbs bursts of file events.
DEFAULT_DEBOUNCE_SECONDS: float = 1.0

# Interval between directory snapshots of the polling watcher.
DEFAULT_POLL_INTERVAL: float = 0.5
