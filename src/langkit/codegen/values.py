"""Closed value model for generic serialization.

stringify() accepts exactly these variants. Raw is the explicit escape hatch
for pre-rendered code (compiled functions, references to generated names)
that must be emitted verbatim instead of being quoted.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .code import Code, Fragment

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Variants
    "Str",
    "Num",
    "Bool",
    "Null",
    "Array",
    "Object",
    "Raw",
    # Type alias
    "Value",
    # Conversion
    "to_value",
]


@dataclass(frozen=True, slots=True)
class Str:
    """String, emitted as a quoted literal."""

    value: str


@dataclass(frozen=True, slots=True)
class Num:
    """Integer or float, emitted in its literal form."""

    value: int | float


@dataclass(frozen=True, slots=True)
class Bool:
    """Boolean, emitted as true/false."""

    value: bool


@dataclass(frozen=True, slots=True)
class Null:
    """The null literal."""


@dataclass(frozen=True, slots=True)
class Array:
    """Ordered list of values."""

    items: tuple[Value, ...] = ()


@dataclass(frozen=True, slots=True)
class Object:
    """Ordered key/value structure.

    Keys are plain names (subject to name overrides, else quoted) or Raw
    fragments emitted verbatim.
    """

    entries: tuple[tuple[str | Raw, Value], ...] = ()


@dataclass(frozen=True, slots=True)
class Raw:
    """Pre-rendered code emitted exactly as given."""

    code: Fragment


type Value = Str | Num | Bool | Null | Array | Object | Raw


def to_value(obj: object) -> Value:
    """Convert plain Python data into the closed value model.

    Args:
        obj: str, int, float, bool, None, Mapping, list/tuple, Code, or Value

    Returns:
        Equivalent Value (Code becomes Raw)

    Raises:
        TypeError: For unsupported types
    """
    match obj:
        case Str() | Num() | Bool() | Null() | Array() | Object() | Raw():
            return obj
        case Code():
            return Raw(obj)
        case str():
            return Str(obj)
        case bool():
            return Bool(obj)
        case int() | float():
            return Num(obj)
        case None:
            return Null()
        case Mapping():
            return Object(tuple((str(k), to_value(v)) for k, v in obj.items()))
        case list() | tuple():
            return Array(tuple(to_value(item) for item in obj))
        case _:
            msg = f"Cannot convert {type(obj).__name__} to a code value"
            raise TypeError(msg)
