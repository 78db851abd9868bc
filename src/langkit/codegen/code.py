"""Restartable lazy fragment sequences.

A Code object wraps a generator factory. Every iteration calls the factory
again, so the same Code can be measured, embedded in several parents and
written without being consumed. Plain strings are also valid fragment
sequences and are accepted anywhere a Code is.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

__all__ = ["Code", "Fragment", "fragments"]


class Code:
    """Lazy, restartable sequence of text fragments.

    Example:
        >>> def gen():
        ...     yield "a"
        ...     yield "b"
        >>> code = Code(gen)
        >>> "".join(code), "".join(code)
        ('ab', 'ab')
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Iterator[str]]) -> None:
        self._factory = factory

    def __iter__(self) -> Iterator[str]:
        return self._factory()

    def __str__(self) -> str:
        return "".join(self._factory())

    def __repr__(self) -> str:
        text = str(self)
        if len(text) > 40:
            text = text[:37] + "..."
        return f"Code({text!r})"


type Fragment = str | Code
"""Anything the builder accepts as a piece of output."""


def fragments(part: Fragment) -> Iterator[str]:
    """Iterate a fragment without splitting plain strings into characters."""
    if isinstance(part, str):
        if part:
            yield part
        return
    yield from part
