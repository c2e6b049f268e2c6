"""Flat key construction from table paths."""

from __future__ import annotations

from typing import Optional, Sequence

from .types import DEFAULT_DELIMITER, Path


def build_key(
    ancestors: Sequence[str],
    leaf_key: Optional[str] = None,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    """Join table keys into a single flat key.

    Keys are joined as-is: a key that itself contains the delimiter
    produces a flat key indistinguishable from a deeper nesting.

    Args:
        ancestors: Keys traversed from the document root, in order.
        leaf_key: Optional final key appended after the ancestors.
        delimiter: Separator placed between segments.

    Returns:
        Flattened key string.
    """
    segments = list(ancestors)
    if leaf_key is not None:
        segments.append(leaf_key)
    return delimiter.join(segments)


def split_key(key: str, delimiter: str = DEFAULT_DELIMITER) -> Path:
    """Split a flat key back into its path segments."""
    return tuple(key.split(delimiter))
