"""Locale document discovery and loading.

Each supported locale is one commented-JSON file in the locale directory;
the file stem is the locale tag (lang/en.json -> "en"). Documents load
concurrently in worker threads and are returned in discovery order (sorted
file names) so merges are deterministic.

Components:
    LocaleDocument - Immutable (locale, tree) pair
    discover_documents - Sorted list of document paths
    parse_document - Commented-JSON decoder
    load_documents - Concurrent loader

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path

from langkit.constants import DOCUMENT_SUFFIX
from langkit.core import Cursor
from langkit.diagnostics import DocumentLoadError, ErrorTemplate

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "LocaleDocument",
    "discover_documents",
    "strip_comments",
    "parse_document",
    "load_document",
    "load_documents",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleDocument:
    """One locale's translation tree.

    Attributes:
        locale: Locale tag derived from the file stem
        tree: Decoded document (nested dicts/lists, string leaves)
        source: Human-readable origin for diagnostics
    """

    locale: str
    tree: object
    source: str = "<memory>"


def discover_documents(directory: str | Path) -> list[Path]:
    """List locale documents in directory, sorted by file name.

    Raises:
        DocumentLoadError: If directory cannot be listed
    """
    root = Path(directory)
    try:
        paths = [p for p in root.iterdir() if p.suffix == DOCUMENT_SUFFIX and p.is_file()]
    except OSError as e:
        raise DocumentLoadError(
            ErrorTemplate.document_unreadable(str(root), e.strerror or str(e)),
            path=str(root),
        ) from e
    return sorted(paths, key=lambda p: p.name)


def strip_comments(text: str) -> str:
    """Blank out // and /* */ comments outside string literals.

    Comment characters are replaced by spaces (newlines kept) so decoder
    error positions still point at the original line and column.

    Example:
        >>> strip_comments('{"a": "x // y"} // note')
        '{"a": "x // y"}        '
    """
    out: list[str] = []
    cursor = Cursor(text)
    while not cursor.is_eof:
        char = cursor.current
        if char == '"':
            end = _string_end(cursor)
            out.append(cursor.slice_to(end))
            cursor = Cursor(text, end)
        elif cursor.startswith("//"):
            end = cursor.skip_to_line_end().pos
            out.append(" " * (end - cursor.pos))
            cursor = Cursor(text, end)
        elif cursor.startswith("/*"):
            close = text.find("*/", cursor.pos + 2)
            end = len(text) if close < 0 else close + 2
            out.append("".join(c if c in "\r\n" else " " for c in cursor.slice_to(end)))
            cursor = Cursor(text, end)
        else:
            out.append(char)
            cursor = cursor.advance()
    return "".join(out)


def _string_end(cursor: Cursor) -> int:
    """Position just past the string literal starting at cursor (or EOF)."""
    cursor = cursor.advance()
    while not cursor.is_eof:
        char = cursor.current
        if char == "\\":
            cursor = cursor.advance(2)
            continue
        cursor = cursor.advance()
        if char == '"':
            break
    return cursor.pos


def parse_document(text: str, source: str = "<memory>") -> object:
    """Decode a commented-JSON document, preserving key order.

    Raises:
        DocumentLoadError: If the text is not valid JSON once comments are removed
    """
    try:
        return json.loads(strip_comments(text))
    except json.JSONDecodeError as e:
        raise DocumentLoadError(
            ErrorTemplate.document_invalid(source, e.msg, e.lineno, e.colno),
            path=source,
        ) from e


def load_document(path: Path) -> LocaleDocument:
    """Read and decode one document (blocking).

    Raises:
        DocumentLoadError: If the file cannot be read or decoded
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise DocumentLoadError(
            ErrorTemplate.document_unreadable(str(path), reason),
            path=str(path),
        ) from e
    tree = parse_document(text, str(path))
    logger.debug("Loaded locale document %s", path)
    return LocaleDocument(locale=path.stem, tree=tree, source=str(path))


async def load_documents(directory: str | Path) -> list[LocaleDocument]:
    """Load every document in directory concurrently.

    Reads run in worker threads; results are joined in discovery order.

    Raises:
        DocumentLoadError: First load failure in discovery order
    """
    paths = discover_documents(directory)
    results = await asyncio.gather(
        *(asyncio.to_thread(load_document, path) for path in paths),
        return_exceptions=True,
    )
    documents: list[LocaleDocument] = []
    for result in results:
        if isinstance(result, BaseException):
            raise result
        documents.append(result)
    return documents
