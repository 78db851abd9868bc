"""Core primitives shared by the compiler, code generator and loaders.

Exports:
    KeyPath: Path addressing over document trees
    Signature: Per-key parameter contract
    signatures_match: Cross-locale compatibility predicate
    Cursor: Immutable character scanner
    DepthGuard: Nesting counter that raises past its limit

Python 3.13+.
"""

from .cursor import Cursor
from .depth_guard import DepthGuard
from .path import KeyPath, Segment
from .signature import Signature, signatures_match

__all__ = ["Cursor", "DepthGuard", "KeyPath", "Segment", "Signature", "signatures_match"]
