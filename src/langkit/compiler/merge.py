"""Merge locale documents into one canonical key schema.

Every document is folded into a CanonicalTree: an arena of nodes addressed
by path, each either a leaf (one translation) or an interior node (ordered
children). The first document to define a leaf compiles it and sets the
reference Signature; later documents must agree on both the structure and
the signature, otherwise the whole merge fails and nothing is emitted.

Traversal is deterministic (document order, then depth-first child order),
so node ids and property order are stable across rebuilds.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from langkit.constants import MAX_DEPTH
from langkit.core import DepthGuard, KeyPath, Segment, Signature, signatures_match
from langkit.diagnostics import (
    ErrorTemplate,
    KeyCollisionError,
    SignatureMismatchError,
    StructureMismatchError,
    TemplateSyntaxError,
)
from langkit.documents import LocaleDocument
from langkit.template import BraceTemplateCompiler, CompiledTemplate, TemplateCompiler

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Arena
    "LeafNode",
    "InteriorNode",
    "Node",
    "CanonicalTree",
    # Results
    "CompiledLeaf",
    "MergeResult",
    # Merging
    "TreeMerger",
    "merge",
]

logger = logging.getLogger(__name__)


# ============================================================================
# ARENA
# ============================================================================


@dataclass(frozen=True, slots=True)
class LeafNode:
    """Tree position holding one translation."""

    path: KeyPath

    @property
    def key(self) -> str:
        return self.path.key


@dataclass(frozen=True, slots=True)
class InteriorNode:
    """Tree position holding named/indexed children.

    children maps each segment to a node id, in first-seen order. The
    mapping only ever grows during a merge.
    """

    path: KeyPath
    children: dict[Segment, int] = field(default_factory=dict)


type Node = LeafNode | InteriorNode


class CanonicalTree:
    """Union of every leaf path across all locale documents.

    Nodes live in a flat list; node 0 is the root interior node.
    """

    ROOT: int = 0

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes: list[Node] = [InteriorNode(KeyPath())]

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> InteriorNode:
        root = self._nodes[self.ROOT]
        assert isinstance(root, InteriorNode)  # noqa: S101 - arena invariant
        return root

    def node(self, node_id: int) -> Node:
        return self._nodes[node_id]

    def children(self, node: InteriorNode) -> Iterator[tuple[Segment, Node]]:
        """Yield (segment, child) pairs in first-seen order."""
        for segment, child_id in node.children.items():
            yield segment, self._nodes[child_id]

    def find(self, path: KeyPath) -> Node | None:
        """Return the node at path, or None if the tree has no such node."""
        node: Node = self.root
        for segment in path.segments:
            if not isinstance(node, InteriorNode) or segment not in node.children:
                return None
            node = self._nodes[node.children[segment]]
        return node

    def add_child(self, parent_id: int, segment: Segment, child: Node) -> int:
        """Append child under parent_id and return its node id."""
        parent = self._nodes[parent_id]
        assert isinstance(parent, InteriorNode)  # noqa: S101 - arena invariant
        child_id = len(self._nodes)
        self._nodes.append(child)
        parent.children[segment] = child_id
        return child_id

    def leaves(self) -> Iterator[LeafNode]:
        """Yield every leaf in depth-first, first-seen order."""
        yield from self._leaves_under(self.root)

    def _leaves_under(self, node: InteriorNode) -> Iterator[LeafNode]:
        for _, child in self.children(node):
            if isinstance(child, LeafNode):
                yield child
            else:
                yield from self._leaves_under(child)

    def keys(self) -> list[str]:
        """Canonical keys of every leaf, in traversal order."""
        return [leaf.key for leaf in self.leaves()]


# ============================================================================
# RESULTS
# ============================================================================


@dataclass(slots=True)
class CompiledLeaf:
    """Per-key aggregate of every locale's compiled template.

    Attributes:
        path: Path of the leaf
        signature: Reference signature (set by the first defining locale)
        expressions: locale -> compiled expression, in document order
        fragments: locale -> UI fragment (only when signature has formatters)
    """

    path: KeyPath
    signature: Signature
    expressions: dict[str, str] = field(default_factory=dict)
    fragments: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return self.path.key

    def add(self, locale: str, compiled: CompiledTemplate) -> None:
        """Record one locale's output (signature already validated)."""
        self.expressions[locale] = compiled.expression
        if self.signature.has_formatters and compiled.fragment is not None:
            self.fragments[locale] = compiled.fragment


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Canonical tree plus compiled leaves for every key.

    Attributes:
        tree: Canonical key schema
        leaves: Canonical key -> CompiledLeaf
        locales: Locale tags in document order
    """

    tree: CanonicalTree
    leaves: Mapping[str, CompiledLeaf]
    locales: tuple[str, ...]

    def missing(self, locale: str) -> list[str]:
        """Keys the given locale does not translate, in traversal order."""
        return [key for key in self.tree.keys() if locale not in self.leaves[key].expressions]


# ============================================================================
# MERGING
# ============================================================================


class TreeMerger:
    """Folds locale documents into one canonical tree.

    Usage:
        merger = TreeMerger()
        for document in documents:
            merger.add(document)
        result = merger.result()

    Not reusable after an error: a failed add() leaves partial state, and
    callers discard the merger (the compile aborts).
    """

    def __init__(
        self,
        compiler: TemplateCompiler | None = None,
        *,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        self._compiler: TemplateCompiler = compiler or BraceTemplateCompiler()
        self._tree = CanonicalTree()
        self._leaves: dict[str, CompiledLeaf] = {}
        self._locales: list[str] = []
        self._guard = DepthGuard(max_depth)

    def add(self, document: LocaleDocument) -> None:
        """Fold one document into the canonical tree.

        Raises:
            StructureMismatchError: Leaf/object conflict with an earlier document
            KeyCollisionError: Two paths join to the same canonical key
            SignatureMismatchError: Parameters differ from the reference locale
            TemplateSyntaxError: Invalid translation string (key/locale attached)
            DepthLimitExceededError: Document nests deeper than max_depth
        """
        if not isinstance(document.tree, (Mapping, list)):
            raise StructureMismatchError(
                ErrorTemplate.structure_mismatch("<root>", document.locale),
                path="",
            )
        self._locales.append(document.locale)
        count = 0
        for path, value in self._travel(document.tree, KeyPath(), document.locale):
            self._add_leaf(path, value, document.locale)
            count += 1
        logger.debug("Merged %d translations from locale '%s'", count, document.locale)

    def result(self) -> MergeResult:
        """Return the merged schema.

        Logs how many keys each locale leaves untranslated.
        """
        result = MergeResult(
            tree=self._tree,
            leaves=dict(self._leaves),
            locales=tuple(self._locales),
        )
        for locale in result.locales:
            missing = result.missing(locale)
            if missing:
                logger.info(
                    "Locale '%s' is missing %d of %d keys (first: %s)",
                    locale,
                    len(missing),
                    len(result.leaves),
                    missing[0],
                )
        return result

    def _travel(self, value: object, path: KeyPath, locale: str) -> Iterator[tuple[KeyPath, str]]:
        """Yield (path, string) for every string leaf, depth-first."""
        match value:
            case str():
                yield path, value
            case Mapping():
                with self._guard.at(path.key):
                    for name, child in value.items():
                        yield from self._travel(child, path.child(str(name)), locale)
            case list():
                # Indices become string segments so ["x"] and {"0": "x"} align
                with self._guard.at(path.key):
                    for index, child in enumerate(value):
                        yield from self._travel(child, path.child(str(index)), locale)
            case None:
                pass
            case _:
                logger.warning(
                    "%s",
                    ErrorTemplate.non_string_value(path.key, locale, type(value).__name__).message,
                )

    def _add_leaf(self, path: KeyPath, value: str, locale: str) -> None:
        parent_id = self._descend(path, locale)
        parent = self._tree.node(parent_id)
        assert isinstance(parent, InteriorNode)  # noqa: S101 - _descend guarantees
        existing_id = parent.children.get(path.name)

        if existing_id is None:
            self._insert_leaf(parent_id, path, value, locale)
            return

        if isinstance(self._tree.node(existing_id), InteriorNode):
            raise StructureMismatchError(
                ErrorTemplate.structure_mismatch(path.key, locale),
                path=path.key,
            )

        leaf = self._leaves[path.key]
        compiled = self._compile(value, path.key, locale)
        if not signatures_match(leaf.signature, compiled.signature):
            expected = leaf.signature.describe()
            actual = compiled.signature.describe()
            raise SignatureMismatchError(
                ErrorTemplate.signature_mismatch(path.key, locale, expected, actual),
                key=path.key,
                locale=locale,
                expected=expected,
                actual=actual,
            )
        leaf.add(locale, compiled)

    def _descend(self, path: KeyPath, locale: str) -> int:
        """Walk (creating interior nodes) to the parent of path; return its id."""
        node_id = CanonicalTree.ROOT
        for ancestor in path.ancestors():
            node = self._tree.node(node_id)
            assert isinstance(node, InteriorNode)  # noqa: S101 - checked below
            child_id = node.children.get(ancestor.name)
            if child_id is None:
                child_id = self._tree.add_child(node_id, ancestor.name, InteriorNode(ancestor))
            elif isinstance(self._tree.node(child_id), LeafNode):
                raise StructureMismatchError(
                    ErrorTemplate.structure_mismatch(ancestor.key, locale),
                    path=ancestor.key,
                )
            node_id = child_id
        return node_id

    def _insert_leaf(self, parent_id: int, path: KeyPath, value: str, locale: str) -> None:
        key = path.key
        owner = self._leaves.get(key)
        if owner is not None:
            raise KeyCollisionError(ErrorTemplate.key_collision(key, locale), key=key)
        compiled = self._compile(value, key, locale)
        leaf = CompiledLeaf(path=path, signature=compiled.signature)
        leaf.add(locale, compiled)
        self._tree.add_child(parent_id, path.name, LeafNode(path))
        self._leaves[key] = leaf
        logger.debug("New key '%s' %s (from '%s')", key, compiled.signature.describe(), locale)

    def _compile(self, value: str, key: str, locale: str) -> CompiledTemplate:
        try:
            return self._compiler.compile(value)
        except TemplateSyntaxError as e:
            raise e.with_context(key, locale) from e


def merge(
    documents: Iterable[LocaleDocument],
    compiler: TemplateCompiler | None = None,
) -> MergeResult:
    """Merge documents into one canonical schema (all-or-nothing).

    Args:
        documents: Locale documents in discovery order
        compiler: Template compiler (default: BraceTemplateCompiler)

    Returns:
        MergeResult with the canonical tree and compiled leaves

    Raises:
        MergeError: First structural or signature conflict
        TemplateSyntaxError: First invalid translation string
    """
    merger = TreeMerger(compiler)
    for document in documents:
        merger.add(document)
    return merger.result()
