"""Path addressing over translation document trees.

A KeyPath is the ordered sequence of property names and list indices that
leads from a document root to one of its values. Its joined form is the
canonical key used to identify a translation across locales and rebuilds.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from langkit.constants import KEY_SEPARATOR

__all__ = ["KeyPath", "Segment"]

type Segment = str | int
"""One navigation step: a property name or a list index."""

_MISSING = object()


@dataclass(frozen=True, slots=True)
class KeyPath:
    """Immutable path into a document tree.

    Example:
        >>> path = KeyPath(("nav", "items", 0))
        >>> path.key
        'nav.items.0'
        >>> path.accessor
        '["nav"]["items"][0]'
        >>> path.child("label").key
        'nav.items.0.label'

    Attributes:
        segments: Property names (str) and list indices (int), root first
    """

    segments: tuple[Segment, ...] = ()

    def __str__(self) -> str:
        return self.key

    @property
    def key(self) -> str:
        """Canonical key: segments joined by the key separator."""
        return KEY_SEPARATOR.join(str(segment) for segment in self.segments)

    @property
    def accessor(self) -> str:
        """Property-access chain reaching this path from the root object.

        Strings and integers are rendered as JSON literals, which are valid
        JavaScript subscripts.
        """
        return "".join(f"[{json.dumps(segment, ensure_ascii=False)}]" for segment in self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def name(self) -> Segment:
        """Last segment.

        Raises:
            ValueError: If called on the root path
        """
        if not self.segments:
            msg = "Root path has no name"
            raise ValueError(msg)
        return self.segments[-1]

    @property
    def parent(self) -> KeyPath:
        """Path without its last segment (root stays root)."""
        return KeyPath(self.segments[:-1])

    def child(self, segment: Segment) -> KeyPath:
        """Return a new path extended by one segment."""
        return KeyPath((*self.segments, segment))

    def ancestors(self) -> Iterator[KeyPath]:
        """Yield proper, non-root prefixes from shortest to longest.

        Example:
            >>> [p.key for p in KeyPath(("a", "b", "c")).ancestors()]
            ['a', 'a.b']
        """
        for end in range(1, len(self.segments)):
            yield KeyPath(self.segments[:end])

    def lookup(self, tree: object, default: object = _MISSING) -> object:
        """Navigate a nested mapping/list structure along this path.

        Args:
            tree: Document tree (nested dicts and lists)
            default: Returned when the path cannot be followed

        Returns:
            The value at this path

        Raises:
            KeyError: If the path cannot be followed and no default was given
        """
        current = tree
        for segment in self.segments:
            if isinstance(current, Mapping) and isinstance(segment, str) and segment in current:
                current = current[segment]
            elif (
                isinstance(current, Sequence)
                and not isinstance(current, str)
                and isinstance(segment, int)
                and 0 <= segment < len(current)
            ):
                current = current[segment]
            elif default is _MISSING:
                raise KeyError(self.key)
            else:
                return default
        return current
