"""Lazy code-generation combinators.

Every function returns a restartable Code (or plain str) without rendering
eagerly: nested literals compose by reference, and the final text is only
produced when the outermost Code is iterated.

Object and array literals are laid out one entry per line with two-space
indentation, nested levels indented by re-emitting inner output through
indent(). Template literals escape the fixed table:

    newline        -> \\n
    carriage ret.  -> \\r
    tab            -> \\t
    backslash      -> \\\\
    backtick       -> \\`
    dollar         -> \\$

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence

from langkit.constants import INDENT_UNIT

from .code import Code, Fragment, fragments
from .values import Array, Bool, Null, Num, Object, Raw, Str, Value

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Composition
    "concat",
    "indent",
    "indent_block",
    "join",
    "lines",
    # Literals
    "quote",
    "obj",
    "stringify",
    "template_literal",
    "call",
    # Materialization
    "render",
    # Escape table
    "TEMPLATE_ESCAPES",
]

TEMPLATE_ESCAPES: Mapping[str, str] = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\\": "\\\\",
    "`": "\\`",
    "$": "\\$",
}

# Lone UTF-16 halves survive JSON decoding but cannot be encoded as UTF-8
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")

type Overrides = Mapping[str, Fragment]
"""Replacement key fragments, looked up by plain property name."""


# ============================================================================
# COMPOSITION
# ============================================================================


def concat(*parts: Fragment) -> Code:
    """Yield every fragment of each part in order."""

    def generate() -> Iterator[str]:
        for part in parts:
            yield from fragments(part)

    return Code(generate)


def indent(part: Fragment, level: int = 1) -> Code:
    """Insert `level` indentation units after every newline of part."""
    pad = INDENT_UNIT * level

    def generate() -> Iterator[str]:
        for fragment in fragments(part):
            yield fragment.replace("\n", "\n" + pad)

    return Code(generate)


def indent_block(part: Fragment, level: int = 1) -> Code:
    """Pad the start of every non-empty line of part, the first line included.

    Blank lines stay empty. Line breaks may fall anywhere across fragments.

    Example:
        >>> render(indent_block(concat("a\\n", "\\nb")))
        '  a\\n\\n  b'
    """
    pad = INDENT_UNIT * level

    def generate() -> Iterator[str]:
        at_line_start = True
        for fragment in fragments(part):
            for index, piece in enumerate(fragment.split("\n")):
                if index:
                    yield "\n"
                    at_line_start = True
                if piece:
                    yield pad + piece if at_line_start else piece
                    at_line_start = False

    return Code(generate)


def join(parts: Iterable[Fragment], separator: Fragment) -> Code:
    """Interleave separator between consecutive parts.

    Example:
        >>> render(join([], ", "))
        ''
        >>> render(join(["a"], ", "))
        'a'
        >>> render(join(["a", "b"], ", "))
        'a, b'
    """
    items = tuple(parts)

    def generate() -> Iterator[str]:
        for index, item in enumerate(items):
            if index:
                yield from fragments(separator)
            yield from fragments(item)

    return Code(generate)


def lines(parts: Iterable[Fragment]) -> Code:
    """Join parts with newlines."""
    return join(parts, "\n")


# ============================================================================
# LITERALS
# ============================================================================


def quote(text: str) -> str:
    """Render text as a double-quoted string literal (JSON rules).

    Lone surrogates are written as \\uXXXX escapes so the result stays
    encodable as UTF-8.
    """
    return _escape_surrogates(json.dumps(text, ensure_ascii=False))


def obj(pairs: Iterable[tuple[str | Raw, Fragment]], overrides: Overrides | None = None) -> Code:
    """Render an object literal, one property per line.

    Args:
        pairs: (key, value) pairs in emission order. A Raw key is emitted
            verbatim; a str key is replaced by overrides[key] when present,
            otherwise quoted.
        overrides: Replacement key fragments by plain name

    Example:
        >>> print(render(obj([("a", "1"), (Raw("[k]"), "2")])))
        {
          "a": 1,
          [k]: 2
        }
    """
    entries = tuple(pairs)
    replace = overrides or {}

    def key_of(name: str | Raw) -> Fragment:
        if isinstance(name, Raw):
            return name.code
        return replace.get(name, quote(name))

    def generate() -> Iterator[str]:
        if not entries:
            yield "{}"
            return
        yield "{\n" + INDENT_UNIT
        yield from join(
            (concat(key_of(name), ": ", indent(value)) for name, value in entries),
            ",\n" + INDENT_UNIT,
        )
        yield "\n}"

    return Code(generate)


def stringify(value: Value, overrides: Overrides | None = None) -> Code:
    """Serialize a Value into source text.

    Raw values are emitted verbatim; strings are quoted; arrays and objects
    recurse, passing overrides down to every nested object.
    """

    def generate() -> Iterator[str]:
        match value:
            case Raw(code=code):
                yield from fragments(code)
            case Str(value=text):
                yield quote(text)
            case Bool(value=flag):
                yield "true" if flag else "false"
            case Num(value=number):
                yield _number_literal(number)
            case Null():
                yield "null"
            case Array(items=items):
                if not items:
                    yield "[]"
                    return
                yield "[\n" + INDENT_UNIT
                yield from join(
                    (indent(stringify(item, overrides)) for item in items),
                    ",\n" + INDENT_UNIT,
                )
                yield "\n]"
            case Object(entries=entries):
                yield from obj(
                    ((name, stringify(item, overrides)) for name, item in entries),
                    overrides,
                )

    return Code(generate)


def template_literal(parts: Sequence[str], interpolations: Sequence[Fragment]) -> Code:
    """Render a backtick template literal.

    Literal parts are escaped through TEMPLATE_ESCAPES; interpolations are
    spliced verbatim as `${ expr }` between them.

    Args:
        parts: Literal text segments (one more than interpolations)
        interpolations: Expression fragments

    Raises:
        ValueError: If len(parts) != len(interpolations) + 1

    Example:
        >>> render(template_literal(["Hi ", "!"], ["params.name"]))
        '`Hi ${ params.name }!`'
    """
    if len(parts) != len(interpolations) + 1:
        msg = (
            f"Template literal needs exactly one more part than interpolations, "
            f"got {len(parts)} parts and {len(interpolations)} interpolations"
        )
        raise ValueError(msg)
    literal_parts = tuple(parts)
    expressions = tuple(interpolations)

    def generate() -> Iterator[str]:
        yield "`"
        for index, expression in enumerate(expressions):
            yield _escape_template(literal_parts[index])
            yield "${ "
            yield from fragments(expression)
            yield " }"
        yield _escape_template(literal_parts[-1])
        yield "`"

    return Code(generate)


def call(name: Fragment) -> Callable[..., Code]:
    """Return a renderer for calls to `name`.

    Example:
        >>> freeze = call("Object.freeze")
        >>> render(freeze("x", "y"))
        'Object.freeze(x, y)'
    """
    callee = render(name)

    def render_call(*args: Fragment) -> Code:
        return concat(callee, "(", join(args, ", "), ")")

    return render_call


# ============================================================================
# MATERIALIZATION
# ============================================================================


def render(part: Fragment) -> str:
    """Materialize a fragment sequence into one string."""
    if isinstance(part, str):
        return part
    return "".join(part)


def _escape_template(text: str) -> str:
    return _escape_surrogates("".join(TEMPLATE_ESCAPES.get(char, char) for char in text))


def _escape_surrogates(text: str) -> str:
    return _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)


def _number_literal(number: int | float) -> str:
    if isinstance(number, float) and not math.isfinite(number):
        if math.isnan(number):
            return "NaN"
        return "Infinity" if number > 0 else "-Infinity"
    return json.dumps(number)
