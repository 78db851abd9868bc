"""Compiler backend: merge locale documents, validate, emit artifacts.

Separate from the build orchestrator so tooling (linters, editor plugins)
can merge and emit in memory without touching the filesystem.

Python 3.13+.
"""

from .emit import DeclarationWalker, GeneratedOutput, RuntimeWalker, emit
from .merge import (
    CanonicalTree,
    CompiledLeaf,
    InteriorNode,
    LeafNode,
    MergeResult,
    TreeMerger,
    merge,
)

__all__ = [
    "CanonicalTree",
    "CompiledLeaf",
    "DeclarationWalker",
    "GeneratedOutput",
    "InteriorNode",
    "LeafNode",
    "MergeResult",
    "RuntimeWalker",
    "TreeMerger",
    "emit",
    "merge",
]
