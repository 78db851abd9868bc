"""Parameter signature of a compiled translation.

A signature names the parameters a translation demands and which of them are
callable formatters. Every locale must compile a key to the same signature,
otherwise callers could not use one typed API for all locales.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

__all__ = ["Signature", "signatures_match"]


@dataclass(frozen=True, slots=True)
class Signature:
    """Immutable parameter contract of one translation.

    Equality is set equality of both fields, so parameter order never
    matters while membership and cardinality always do. A zero-parameter
    signature is distinct from any signature with parameters.

    Example:
        >>> Signature.of(["name"]) == Signature.of(["name"])
        True
        >>> Signature.of(["name"]) == Signature.of(["name"], fns=["name"])
        False
        >>> Signature.empty() == Signature.of(["count"])
        False

    Attributes:
        params: Every parameter name (plain values and formatters)
        fns: Subset of params that are callable formatters
    """

    params: frozenset[str] = frozenset()
    fns: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        """Validate that formatters are declared parameters.

        Raises:
            ValueError: If fns is not a subset of params
        """
        object.__setattr__(self, "params", frozenset(self.params))
        object.__setattr__(self, "fns", frozenset(self.fns))
        stray = self.fns - self.params
        if stray:
            msg = f"Formatter names must be parameters, got undeclared: {sorted(stray)}"
            raise ValueError(msg)

    @classmethod
    def of(cls, params: Iterable[str], fns: Iterable[str] = ()) -> Signature:
        """Build a signature from any iterables of names."""
        return cls(frozenset(params), frozenset(fns))

    @classmethod
    def empty(cls) -> Signature:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.params

    @property
    def has_formatters(self) -> bool:
        return bool(self.fns)

    def is_formatter(self, name: str) -> bool:
        return name in self.fns

    def sorted_params(self) -> tuple[str, ...]:
        """Parameter names in a stable order for code generation."""
        return tuple(sorted(self.params))

    def describe(self) -> str:
        """Short human-readable form used in diagnostics.

        Example:
            >>> Signature.of(["link", "name"], fns=["link"]).describe()
            '{fn(link), name}'
        """
        names = (f"fn({p})" if p in self.fns else p for p in self.sorted_params())
        return "{" + ", ".join(names) + "}"


def signatures_match(a: Signature, b: Signature) -> bool:
    """Check whether two signatures are compatible across locales."""
    return a.params == b.params and a.fns == b.fns
