"""Nesting limit for document traversal.

A locale document is user input; one nested a few thousand levels deep
would otherwise end the merge in a RecursionError with no useful location.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from langkit.constants import MAX_DEPTH
from langkit.diagnostics import DepthLimitExceededError
from langkit.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

_HEADROOM = 50


class DepthGuard:
    """Counts how many levels deep a walk currently is.

    Usage:
        guard = DepthGuard()
        with guard.at(path.key):
            visit(child)

    The limit is lowered to fit the interpreter stack (see depth_clamp).
    """

    __slots__ = ("_depth", "limit")

    def __init__(self, limit: int = MAX_DEPTH) -> None:
        self.limit = depth_clamp(limit)
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    @contextmanager
    def at(self, location: str) -> Iterator[None]:
        """Hold one extra level for the duration of the block.

        Raises:
            DepthLimitExceededError: Already `limit` levels deep; location
                ends up in the diagnostic
        """
        if self._depth >= self.limit:
            raise DepthLimitExceededError(ErrorTemplate.depth_exceeded(self.limit, location))
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1


def depth_clamp(requested: int, headroom: int = _HEADROOM) -> int:
    """Lower requested so that many frames, plus headroom, fit the stack."""
    ceiling = sys.getrecursionlimit() - headroom
    if requested <= ceiling:
        return requested
    logger.warning(
        "Depth limit %d lowered to %d to stay under the recursion limit of %d",
        requested,
        ceiling,
        sys.getrecursionlimit(),
    )
    return ceiling
