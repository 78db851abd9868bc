"""Immutable scan position over a string.

Both hand-written scanners in langkit, the commented-JSON comment stripper
and the brace template parser, step through their input with a Cursor.
Moving returns a new Cursor, so a parser can hold on to an earlier
position to slice from it or to report it in an error.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass

__all__ = ["Cursor"]

_LINE_BREAKS = ("\n", "\r")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Offset `pos` into `source`.

    Example:
        >>> start = Cursor("{name}").advance()
        >>> end = start.take_while("aemn")
        >>> start.slice_to(end.pos)
        'name'
        >>> end.current
        '}'
    """

    source: str
    pos: int = 0

    @property
    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character under the cursor.

        Raises:
            EOFError: Past the last character; test is_eof first
        """
        if self.pos < len(self.source):
            return self.source[self.pos]
        msg = f"No character at offset {self.pos} (input length {len(self.source)})"
        raise EOFError(msg)

    def peek(self, offset: int = 0) -> str | None:
        """Character `offset` places ahead, None once that runs off the end."""
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else None

    def advance(self, count: int = 1) -> Cursor:
        """Step forward by count, never past end of input."""
        return Cursor(self.source, min(len(self.source), self.pos + count))

    def take_while(self, chars: Container[str]) -> Cursor:
        """Step past the run of characters found in chars."""
        end = self.pos
        while end < len(self.source) and self.source[end] in chars:
            end += 1
        return Cursor(self.source, end)

    def slice_to(self, end: int) -> str:
        return self.source[self.pos : end]

    def startswith(self, prefix: str) -> bool:
        return self.source.startswith(prefix, self.pos)

    def skip_to_line_end(self) -> Cursor:
        """Move onto the next CR or LF without consuming it, or to end of input."""
        found = [i for i in (self.source.find(b, self.pos) for b in _LINE_BREAKS) if i >= 0]
        return Cursor(self.source, min(found, default=len(self.source)))

    def line_col(self) -> tuple[int, int]:
        """1-based (line, column), computed only when an error needs it.

        Example:
            >>> Cursor("ab\\ncd", 4).line_col()
            (2, 2)
        """
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        return self.source.count("\n", 0, self.pos) + 1, self.pos - line_start + 1
