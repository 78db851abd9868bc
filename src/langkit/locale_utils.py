"""Babel lookups for the locale tags found in the locale directory.

Tags are file stems (en.json, pt-BR.json). The generated data module carries
each locale's name in its own language, taken from CLDR, so a language
picker needs no extra tables.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from langkit.diagnostics import ErrorTemplate

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "locale_display_name",
    "locale_display_names",
    "normalize_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(tag: str) -> str:
    """BCP-47 hyphens to the underscores Babel parses.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
    """
    return "_".join(tag.split("-"))


@functools.lru_cache(maxsize=128)
def get_babel_locale(tag: str) -> Locale:
    """Parsed Babel Locale for tag, cached per tag.

    Raises:
        babel.core.UnknownLocaleError: No CLDR data for tag
        ValueError: Tag is not a well-formed identifier
    """
    # Deferred so importing langkit does not load CLDR data
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(tag))


def locale_display_name(tag: str) -> str | None:
    """Self-name of tag ("français" for "fr"), None when Babel does not know it."""
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(tag)
    except (UnknownLocaleError, ValueError):
        logger.warning("%s", ErrorTemplate.unknown_locale(tag).message)
        return None
    return locale.get_display_name(locale)


def locale_display_names(tags: Iterable[str]) -> dict[str, str]:
    """Self-name per tag; tags Babel cannot resolve name themselves."""
    return {tag: locale_display_name(tag) or tag for tag in tags}
