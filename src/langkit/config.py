"""Project configuration from pyproject.toml.

Reads an optional ``[tool.langkit]`` table:

    [tool.langkit]
    lang-dir = "./lang"
    data-out = "./.generated/lang.js"
    types-out = "./src/lang.d.ts"
    default-locale = "en"
    alias = "$lang"
    debounce = 1.0

Relative paths are anchored at the directory holding pyproject.toml.
Command-line flags override file values (see langkit.cli).

Python 3.13+.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from langkit.diagnostics import ConfigurationError, ErrorTemplate

__all__ = [
    "CONFIG_KEYS",
    "find_pyproject",
    "load_pyproject_options",
]

logger = logging.getLogger(__name__)

# TOML key -> CompileOptions field
CONFIG_KEYS: dict[str, str] = {
    "lang-dir": "lang_dir",
    "data-out": "data_path",
    "types-out": "types_path",
    "default-locale": "default_locale",
    "alias": "alias",
    "debounce": "debounce",
}

_PATH_FIELDS = frozenset({"lang_dir", "data_path", "types_path"})


def find_pyproject(start: str | Path = ".") -> Path | None:
    """Return the nearest pyproject.toml at or above start, or None."""
    directory = Path(start).resolve()
    for candidate in (directory, *directory.parents):
        path = candidate / "pyproject.toml"
        if path.is_file():
            return path
    return None


def load_pyproject_options(path: str | Path) -> dict[str, Any]:
    """Read the [tool.langkit] table as CompileOptions keyword arguments.

    Args:
        path: Path to pyproject.toml

    Returns:
        Field name -> value for every key present (empty when the table is absent)

    Raises:
        ConfigurationError: Unreadable file, invalid TOML, unknown key, or
            value of the wrong type
    """
    pyproject = Path(path)
    location = str(pyproject)
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigurationError(
            ErrorTemplate.invalid_configuration(e.strerror or str(e), location)
        ) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(ErrorTemplate.invalid_configuration(str(e), location)) from e

    table = data.get("tool", {}).get("langkit")
    if table is None:
        logger.debug("No [tool.langkit] table in %s", pyproject)
        return {}
    if not isinstance(table, dict):
        raise ConfigurationError(
            ErrorTemplate.invalid_configuration("[tool.langkit] must be a table", location)
        )

    options: dict[str, Any] = {}
    for key, value in table.items():
        field_name = CONFIG_KEYS.get(key)
        if field_name is None:
            raise ConfigurationError(
                ErrorTemplate.invalid_configuration(f"unknown key '{key}'", location)
            )
        options[field_name] = _check_value(key, field_name, value, location)

    base = pyproject.parent
    for field_name in _PATH_FIELDS & options.keys():
        options[field_name] = str(base / options[field_name])
    logger.debug("Loaded %d option(s) from %s", len(options), pyproject)
    return options


def _check_value(key: str, field_name: str, value: object, location: str) -> object:
    if field_name == "debounce":
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(
                ErrorTemplate.invalid_configuration(f"'{key}' must be a number", location)
            )
        return float(value)
    if not isinstance(value, str) or not value:
        raise ConfigurationError(
            ErrorTemplate.invalid_configuration(f"'{key}' must be a non-empty string", location)
        )
    return value
