# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PathTree node class."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from .paths import format_path

if TYPE_CHECKING:
    from .tree import Tree


class TreeNode:
    """A node of a Tree, seen as a handle into the tree's arena.

    TreeNode instances are lightweight views: they hold the owning tree and
    an integer handle, while value and links live in the tree's arena.
    Two TreeNode objects are equal when they address the same record of the
    same tree. A node removed from the tree (directly or with an ancestor)
    raises StaleNodeError on any access.

    Each node exposes:
    - value: The stored payload
    - parent / children / siblings / root: Navigation
    - is_leaf / is_root: Structural predicates
    - index / depth / path: Position in the tree

    Example:
        >>> tree = Tree('root')
        >>> tree.add('leaf1')
        (0,)
        >>> node = tree.root.get_child(0)
        >>> node.value
        'leaf1'
        >>> node.parent.is_root
        True
    """

    __slots__ = ('_tree', '_handle')

    def __init__(self, tree: Tree, handle: int) -> None:
        self._tree = tree
        self._handle = handle

    @property
    def _record(self):
        return self._tree._arena.record(self._handle)

    def __repr__(self) -> str:
        if self._handle not in self._tree._arena:
            return "TreeNode(<removed>)"
        return f"TreeNode({format_path(self.path)!r}, value={self._record.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self._tree is other._tree and self._handle == other._handle

    def __hash__(self) -> int:
        return hash((id(self._tree), self._handle))

    # ==================== Value ====================

    @property
    def value(self) -> Any:
        """The value stored in this node."""
        return self._record.value

    def get_value(self) -> Any:
        """Return the value stored in this node."""
        return self._record.value

    # ==================== Mutation ====================

    def add_child(self, value: Any = None) -> TreeNode:
        """Append a new child holding value and return it."""
        node, _ = self._tree._insert(self._handle, value)
        return node

    def get_child(self, index: int) -> TreeNode:
        """Return the child at index.

        Raises:
            PathTooDeepOnLeafError: If this node has no children.
            InvalidPathError: If index is negative or out of range.
        """
        return TreeNode(self._tree, self._tree._child_handle(self._handle, index))

    def remove_child(self, index: int) -> Any:
        """Remove the child at index with its subtree and return its value.

        Later children shift down by one position.
        """
        return self._tree._remove(self._handle, index)

    # ==================== Navigation ====================

    @property
    def parent(self) -> TreeNode | None:
        """The parent node, or None for the root."""
        parent = self._record.parent
        if parent is None:
            return None
        return TreeNode(self._tree, parent)

    def get_parent(self) -> TreeNode | None:
        """Return the parent node, or None for the root."""
        return self.parent

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self._record.children

    @property
    def is_root(self) -> bool:
        """True if this node has no parent."""
        return self._record.parent is None

    @property
    def root(self) -> TreeNode:
        """The root of the tree, found by walking up the parents."""
        arena = self._tree._arena
        handle = self._handle
        parent = arena.record(handle).parent
        while parent is not None:
            handle = parent
            parent = arena.record(handle).parent
        return TreeNode(self._tree, handle)

    def get_root(self) -> TreeNode:
        """Return the root of the tree."""
        return self.root

    @property
    def children(self) -> list[TreeNode]:
        """The children in index order (empty list for a leaf)."""
        return [TreeNode(self._tree, handle) for handle in self._record.children]

    def get_children(self) -> list[TreeNode]:
        """Return the children in index order (empty list for a leaf)."""
        return self.children

    @property
    def siblings(self) -> list[TreeNode]:
        """All children of the parent, this node included.

        A root is its own sole sibling group.
        """
        parent = self.parent
        if parent is None:
            return [self]
        return parent.children

    def get_siblings(self) -> list[TreeNode]:
        """Return all children of the parent, this node included."""
        return self.siblings

    # ==================== Position ====================

    @property
    def child_count(self) -> int:
        """Number of direct children."""
        return len(self._record.children)

    @property
    def index(self) -> int:
        """Position among the siblings (0 for the root)."""
        return self._tree._arena.index_of(self._handle)

    @property
    def depth(self) -> int:
        """Number of hops from the root (root has depth 0)."""
        return len(self.path)

    @property
    def path(self) -> tuple[int, ...]:
        """The positional path addressing this node from the root."""
        arena = self._tree._arena
        indexes: list[int] = []
        handle = self._handle
        parent = arena.record(handle).parent
        while parent is not None:
            indexes.append(arena.record(parent).children.index(handle))
            handle = parent
            parent = arena.record(handle).parent
        return tuple(reversed(indexes))
