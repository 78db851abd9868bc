"""Lazy code-generation engine.

Composable, restartable text builders for emitting JavaScript and
TypeScript source: concatenation, indentation, joining, object/array
literals, generic value serialization and escaping template literals.

Python 3.13+.
"""

from .builder import (
    TEMPLATE_ESCAPES,
    call,
    concat,
    indent,
    indent_block,
    join,
    lines,
    obj,
    quote,
    render,
    stringify,
    template_literal,
)
from .code import Code, Fragment
from .values import Array, Bool, Null, Num, Object, Raw, Str, Value, to_value

__all__ = [
    "TEMPLATE_ESCAPES",
    "Array",
    "Bool",
    "Code",
    "Fragment",
    "Null",
    "Num",
    "Object",
    "Raw",
    "Str",
    "Value",
    "call",
    "concat",
    "indent",
    "indent_block",
    "join",
    "lines",
    "obj",
    "quote",
    "render",
    "stringify",
    "template_literal",
    "to_value",
]
