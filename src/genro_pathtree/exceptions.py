# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PathTree exceptions."""

from __future__ import annotations

from typing import Any


class PathTreeError(Exception):
    """Base exception for PathTree errors."""

    pass


class InvalidPathError(PathTreeError, IndexError):
    """Raised when a path element is negative, out of range or malformed.

    Attributes:
        path: The path being resolved, as given by the caller.
        depth: Depth of the offending element (None if the path itself
            could not be parsed).
    """

    def __init__(self, message: str, path: Any = None, depth: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.depth = depth


class PathTooDeepOnLeafError(InvalidPathError):
    """Raised when a path descends below a node with no children."""

    pass


class RemoveOnRootError(PathTreeError):
    """Raised when the root is removed or moved."""

    pass


class InvalidMoveError(PathTreeError):
    """Raised when a node is moved into its own subtree."""

    pass


class StaleNodeError(PathTreeError, LookupError):
    """Raised when a node handle no longer belongs to the tree."""

    pass
