# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-PathTree - Ordered trees addressed by positional paths.

A lightweight, zero-dependency library providing a generic mutable tree
whose nodes are addressed by sequences of child indices from the root.
"""

__version__ = "0.1.0"

from .exceptions import (
    InvalidMoveError,
    InvalidPathError,
    PathTooDeepOnLeafError,
    PathTreeError,
    RemoveOnRootError,
    StaleNodeError,
)
from .node import TreeNode
from .paths import format_path, normalize_path
from .tree import Tree

__all__ = [
    # Core classes
    "Tree",
    "TreeNode",
    # Paths
    "normalize_path",
    "format_path",
    # Exceptions
    "PathTreeError",
    "InvalidPathError",
    "PathTooDeepOnLeafError",
    "RemoveOnRootError",
    "InvalidMoveError",
    "StaleNodeError",
]
