# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tree - A mutable ordered tree with positional path addressing.

This module provides the Tree class, the public entry point of
genro-pathtree. A Tree owns a root node and addresses every other node by
its path: the sequence of child indices walked from the root.

Key Features:
    - **Positional paths**: (0, 1), [0, 1], '0.1' or '#0.#1'
    - **Arena storage**: nodes live in a handle-addressed arena, so parent
      and child links never form object reference cycles
    - **Checked access**: every path is validated before any mutation and
      failures raise a PathTreeError subclass with the tree unchanged
    - **Reactive subscriptions**: insert/update/delete notifications

Path Semantics:
    - () addresses the root
    - add() appends, so a new child gets index == previous child count
    - remove() shifts the later siblings down by one

Example:
    Basic usage::

        tree = Tree('root')
        tree.add('leaf1')               # (0,)
        tree.add('leaf2')               # (1,)
        tree.add('leaf1-a', (0,))       # (0, 0)
        tree.add('leaf1-b', (0,))       # (0, 1)

        tree.get((0, 1))                # 'leaf1-b'
        tree.remove((0, 0))             # 'leaf1-a'
        tree.get((0, 0))                # 'leaf1-b'
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from .arena import NodeArena
from .exceptions import (
    InvalidMoveError,
    InvalidPathError,
    PathTooDeepOnLeafError,
    RemoveOnRootError,
    StaleNodeError,
)
from .node import TreeNode
from .paths import Path, PathLike, format_path, normalize_path
from .subscription import SubscriptionMixin

logger = logging.getLogger(__name__)


class Tree(SubscriptionMixin):
    """A generic ordered tree addressed by positional paths.

    Tree provides:
    - get(path): Read a value
    - add(value, path): Append a child to the addressed node
    - change_value(value, path): Overwrite a value in place
    - remove(path): Drop a node with its subtree
    - get_root() / get_node(path): Navigate via TreeNode

    Attributes:
        allow_negative: If True, negative indices count from the end of
            the child list ('#-1' is the last child). Defaults to False,
            where negative indices raise InvalidPathError.

    Example:
        >>> tree = Tree('root')
        >>> tree.add('child')
        (0,)
        >>> tree.get('#0')
        'child'
    """

    __slots__ = (
        '_arena', '_root', 'allow_negative',
        '_upd_subscribers', '_ins_subscribers', '_del_subscribers',
    )

    def __init__(self, value: Any = None, *, allow_negative: bool = False) -> None:
        """Initialize a Tree.

        Args:
            value: Value of the root node. An empty tree still has a root,
                holding None.
            allow_negative: Accept negative indices counting from the end.
        """
        self._arena = NodeArena()
        self._root = self._arena.new_root(value)
        self.allow_negative = allow_negative
        self._init_subscribers()

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"Tree({self.get()!r}, nodes={len(self)})"

    def __len__(self) -> int:
        """Return the number of nodes, root included."""
        return len(self._arena)

    def __contains__(self, path: PathLike) -> bool:
        return self.contains(path)

    # ==================== Path Resolution ====================

    def _child_handle(
        self,
        parent: int,
        index: Any,
        path: Any = None,
        depth: int | None = None,
    ) -> int:
        """Return the handle of the child at index, with bounds checking.

        Args:
            parent: Handle of the parent node.
            index: Child index (negative allowed only with allow_negative).
            path: Full path being resolved, reported in errors.
            depth: Depth of index within path, reported in errors.

        Raises:
            InvalidPathError: If index is not an int, negative or out of range.
            PathTooDeepOnLeafError: If the parent has no children.
        """
        where = f" at depth {depth} of {path!r}" if depth is not None else ''
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidPathError(f"Index {index!r}{where} is not an integer", path, depth)
        if index < 0 and not self.allow_negative:
            raise InvalidPathError(f"Negative index {index}{where}", path, depth)

        children = self._arena.record(parent).children
        if not children:
            raise PathTooDeepOnLeafError(
                f"Cannot descend to #{index}{where}: node is a leaf", path, depth
            )
        count = len(children)
        position = index + count if index < 0 else index
        if position < 0 or position >= count:
            raise InvalidPathError(
                f"Position #{index}{where} out of range (0-{count - 1})", path, depth
            )
        return children[position]

    def _find(self, path: PathLike) -> int:
        """Resolve path to a node handle, walking down from the root."""
        return self._walk(normalize_path(path, self.allow_negative), path)

    def _walk(self, indexes: Path, path: Any = None) -> int:
        handle = self._root
        for depth, index in enumerate(indexes):
            handle = self._child_handle(handle, index, path, depth)
        return handle

    def _node(self, handle: int) -> TreeNode:
        return TreeNode(self, handle)

    # ==================== Mutation Primitives ====================

    def _insert(self, parent: int, value: Any) -> tuple[TreeNode, Path]:
        """Append a new child to parent, log and notify.

        Returns:
            Tuple of (new_node, new_path).
        """
        handle, _ = self._arena.add_child(parent, value)
        node = self._node(handle)
        path = node.path
        logger.debug("Added node %s", format_path(path) or '<root>')
        self._on_node_inserted(node, path)
        return node, path

    def _remove(
        self,
        parent: int,
        index: Any,
        path: Any = None,
        depth: int | None = None,
    ) -> Any:
        """Remove the child at index of parent with its subtree.

        Returns:
            The value of the removed node.
        """
        handle = self._child_handle(parent, index, path, depth)
        removed_path = self._node(handle).path
        position = self._arena.index_of(handle)
        record = self._arena.remove_child(parent, position)
        logger.debug("Removed node %s", format_path(removed_path))
        self._on_node_deleted(removed_path, record.value)
        return record.value

    # ==================== Core API ====================

    @property
    def root(self) -> TreeNode:
        """The root node."""
        return self._node(self._root)

    def get_root(self) -> TreeNode:
        """Return the root node, for direct navigation."""
        return self.root

    def get_node(self, path: PathLike = ()) -> TreeNode:
        """Return the node addressed by path.

        Raises:
            InvalidPathError: If an index is malformed, negative or out of range.
            PathTooDeepOnLeafError: If the path descends below a leaf.
        """
        return self._node(self._find(path))

    def get(self, path: PathLike = ()) -> Any:
        """Return the value at path (the root value for an empty path).

        Example:
            >>> tree.get()          # root value
            >>> tree.get((0, 1))    # second child of first child
            >>> tree.get('#0.#1')   # same, TreeStore positional syntax
        """
        return self._arena.record(self._find(path)).value

    def add(self, value: Any, path: PathLike = ()) -> Path:
        """Append a child holding value to the node at path.

        Args:
            value: Value of the new node.
            path: Path of the parent node; the root by default.

        Returns:
            The path of the new node: path + (previous child count,).
        """
        _, new_path = self._insert(self._find(path), value)
        return new_path

    def change_value(self, value: Any, path: PathLike = ()) -> Any:
        """Overwrite the value at path, leaving the structure untouched.

        Returns:
            The previous value.
        """
        handle = self._find(path)
        record = self._arena.record(handle)
        oldvalue = record.value
        record.value = value
        node = self._node(handle)
        node_path = node.path
        logger.debug("Changed value of node %s", format_path(node_path) or '<root>')
        self._on_node_updated(node, node_path, oldvalue)
        return oldvalue

    def remove(self, path: PathLike) -> Any:
        """Remove the node at path together with its subtree.

        The node is removed from its parent at its own position, that is
        the last element of path. Later siblings shift down by one.

        Returns:
            The value of the removed node.

        Raises:
            RemoveOnRootError: If path addresses the root.
            InvalidPathError: If path does not address a node.
        """
        indexes = normalize_path(path, self.allow_negative)
        handle = self._walk(indexes, path)
        parent = self._arena.record(handle).parent
        if parent is None:
            raise RemoveOnRootError("Cannot remove the root node")
        position = self._arena.index_of(handle)
        return self._remove(parent, position, path, len(indexes) - 1)

    def pop(self, path: PathLike, default: Any = None) -> Any:
        """Remove the node at path and return its value, or default.

        Invalid paths return default; removing the root still raises
        RemoveOnRootError.
        """
        try:
            return self.remove(path)
        except InvalidPathError:
            return default

    def contains(self, path: PathLike) -> bool:
        """Check whether path addresses an existing node."""
        try:
            self._find(path)
        except InvalidPathError:
            return False
        return True

    def get_path(self, node: TreeNode) -> Path:
        """Return the current path of a node of this tree.

        Raises:
            StaleNodeError: If node belongs to another tree or was removed.
        """
        if not isinstance(node, TreeNode) or node._tree is not self:
            raise StaleNodeError(f"{node!r} is not a node of this tree")
        return node.path

    # ==================== Restructuring ====================

    def move(self, from_path: PathLike, to_path: PathLike) -> Path:
        """Move the subtree at from_path to be the last child of to_path.

        Subscribers see a 'del' event at the old path followed by an
        'ins' event at the new one.

        Returns:
            The new path of the moved node.

        Raises:
            RemoveOnRootError: If from_path addresses the root.
            InvalidMoveError: If to_path is inside the moved subtree.
        """
        source = self._find(from_path)
        target = self._find(to_path)
        arena = self._arena
        parent = arena.record(source).parent
        if parent is None:
            raise RemoveOnRootError("Cannot move the root node")

        ancestor: int | None = target
        while ancestor is not None:
            if ancestor == source:
                raise InvalidMoveError(
                    f"Cannot move {format_path(self._node(source).path)} "
                    f"into its own subtree"
                )
            ancestor = arena.record(ancestor).parent

        node = self._node(source)
        old_path = node.path
        arena.detach(parent, arena.index_of(source))
        arena.attach(target, source)
        new_path = node.path
        logger.debug("Moved node %s to %s", format_path(old_path), format_path(new_path))
        self._on_node_deleted(old_path, arena.record(source).value)
        self._on_node_inserted(node, new_path)
        return new_path

    def clone(self, path: PathLike = (), deep: bool = False) -> Tree:
        """Return a new Tree whose root is a copy of the subtree at path.

        Args:
            path: Root of the subtree to copy; the whole tree by default.
            deep: If True, values are copied with copy.deepcopy, otherwise
                the new tree shares the value objects.

        Subscribers are not copied.
        """
        copy_value = copy.deepcopy if deep else (lambda value: value)
        source = self._find(path)
        arena = self._arena
        result = Tree(copy_value(arena.record(source).value), allow_negative=self.allow_negative)

        stack = [(source, result._root)]
        while stack:
            src, dst = stack.pop()
            for child in arena.record(src).children:
                new_child, _ = result._arena.add_child(dst, copy_value(arena.record(child).value))
                stack.append((child, new_child))

        logger.debug(
            "Cloned subtree %s (%d nodes)",
            format_path(self._node(source).path) or '<root>',
            len(result),
        )
        return result
