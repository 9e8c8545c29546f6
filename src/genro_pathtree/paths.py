# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Positional path utilities.

A path is a sequence of child indices starting below the root: ``()``
addresses the root, ``(1,)`` its second child, ``(0, 1)`` the second child
of the first child.

Accepted spellings:
    - ``None`` or ``()``: the root
    - ``3``: a single index
    - ``[0, 1]`` / ``(0, 1)``: any sequence of ints
    - ``'0.1'`` or ``'#0.#1'``: dotted string, with optional TreeStore
      positional ``#`` prefix on each segment

Example:
    >>> normalize_path('#0.#1')
    (0, 1)
    >>> format_path((0, 1))
    '#0.#1'
"""

from __future__ import annotations

from typing import Any, Sequence, Union

from .exceptions import InvalidPathError

Path = tuple[int, ...]
PathLike = Union[None, int, str, Sequence[int]]


def _parse_path_segment(segment: str, path: Any) -> int:
    """Parse a single string segment ('3' or '#3') into an int."""
    rest = segment[1:] if segment.startswith('#') else segment
    digits = rest[1:] if rest.startswith('-') else rest
    if not digits.isdecimal():
        raise InvalidPathError(f"Invalid path segment {segment!r} in {path!r}", path)
    return int(rest)


def _check_index(item: Any, path: Any, depth: int) -> int:
    # bool is an int subclass but never a meaningful index
    if isinstance(item, bool) or not isinstance(item, int):
        raise InvalidPathError(
            f"Path element {item!r} at depth {depth} is not an integer", path, depth
        )
    return item


def normalize_path(path: PathLike, allow_negative: bool = False) -> Path:
    """Convert any accepted path spelling into a tuple of ints.

    Args:
        path: The path to normalize.
        allow_negative: If False (default), negative indices are rejected here.
            If True they are kept and resolved against the child count later.

    Returns:
        Tuple of child indices.

    Raises:
        InvalidPathError: If the path is malformed or holds a rejected
            negative index.
    """
    if path is None:
        return ()
    if isinstance(path, str):
        items: list[int] = (
            [_parse_path_segment(seg, path) for seg in path.split('.')] if path else []
        )
    elif isinstance(path, int) and not isinstance(path, bool):
        items = [path]
    elif isinstance(path, (list, tuple, range)):
        items = [_check_index(item, path, depth) for depth, item in enumerate(path)]
    else:
        raise InvalidPathError(
            f"path must be int, str or sequence of int, not {type(path).__name__}", path
        )

    if not allow_negative:
        for depth, index in enumerate(items):
            if index < 0:
                raise InvalidPathError(
                    f"Negative index {index} at depth {depth} in {format_path(items)}",
                    path,
                    depth,
                )
    return tuple(items)


def format_path(path: Sequence[int]) -> str:
    """Render a path in the dotted positional form ('#0.#1').

    The root path renders as an empty string.
    """
    return '.'.join(f'#{index}' for index in path)
