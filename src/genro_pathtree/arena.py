# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Handle-addressed node storage.

The arena owns every node record of a tree. Records refer to each other
through integer handles instead of object references: a record stores the
handle of its parent and the ordered handles of its children. Removing a
child drops the records of its whole subtree from the arena.

Handles come from a counter and are never reused, so a handle whose record
was dropped stays invalid.
"""

from __future__ import annotations

from typing import Any

from .exceptions import StaleNodeError


class NodeRecord:
    """Storage for one node: value, parent handle, child handles."""

    __slots__ = ('value', 'parent', 'children')

    def __init__(self, value: Any = None, parent: int | None = None) -> None:
        self.value = value
        self.parent = parent
        self.children: list[int] = []

    def __repr__(self) -> str:
        return f"NodeRecord({self.value!r}, parent={self.parent}, children={self.children})"


class NodeArena:
    """Owner of all NodeRecord instances of one tree.

    Index arguments are plain list positions: bounds checking and the
    distinction between error kinds belong to the caller, which knows the
    path being resolved. Out-of-range indices surface as IndexError.
    """

    __slots__ = ('_records', '_next_handle')

    def __init__(self) -> None:
        self._records: dict[int, NodeRecord] = {}
        self._next_handle = 0

    def __len__(self) -> int:
        """Return the number of live records."""
        return len(self._records)

    def __contains__(self, handle: int) -> bool:
        return handle in self._records

    def _allocate(self, record: NodeRecord) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._records[handle] = record
        return handle

    def new_root(self, value: Any = None) -> int:
        """Create a parentless record and return its handle."""
        return self._allocate(NodeRecord(value))

    def record(self, handle: int) -> NodeRecord:
        """Return the record for handle.

        Raises:
            StaleNodeError: If the handle was removed or never existed.
        """
        try:
            return self._records[handle]
        except KeyError:
            raise StaleNodeError(f"Node handle {handle} is not part of this tree") from None

    def child(self, parent: int, index: int) -> int:
        """Return the handle of the child at index."""
        return self.record(parent).children[index]

    def add_child(self, parent: int, value: Any) -> tuple[int, int]:
        """Append a new record as last child of parent.

        Returns:
            Tuple of (child_handle, child_index).
        """
        siblings = self.record(parent).children
        handle = self._allocate(NodeRecord(value, parent))
        siblings.append(handle)
        return handle, len(siblings) - 1

    def index_of(self, handle: int) -> int:
        """Return the position of handle among its siblings (0 for a root)."""
        parent = self.record(handle).parent
        if parent is None:
            return 0
        return self._records[parent].children.index(handle)

    def subtree(self, handle: int) -> list[int]:
        """Return the handles of the subtree rooted at handle, pre-order."""
        result: list[int] = []
        stack = [handle]
        while stack:
            current = stack.pop()
            result.append(current)
            stack.extend(reversed(self._records[current].children))
        return result

    def detach(self, parent: int, index: int) -> int:
        """Unlink the child at index from parent, keeping its records.

        Later siblings shift down by one. The detached handle becomes a
        parentless subtree root until attached again.
        """
        handle = self.record(parent).children.pop(index)
        self._records[handle].parent = None
        return handle

    def attach(self, parent: int, handle: int) -> int:
        """Append a detached subtree root as last child of parent.

        Returns:
            The index of the attached child.
        """
        siblings = self.record(parent).children
        self.record(handle).parent = parent
        siblings.append(handle)
        return len(siblings) - 1

    def remove_child(self, parent: int, index: int) -> NodeRecord:
        """Remove the child at index together with its whole subtree.

        Returns:
            The record of the removed child.
        """
        handle = self.detach(parent, index)
        removed = self._records[handle]
        for dropped in self.subtree(handle):
            del self._records[dropped]
        return removed
