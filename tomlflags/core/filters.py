"""Subtree exclusion for flattening."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence, Tuple, Union

from .types import Path

# Marks the end of a skip entry inside the trie.
_TERMINAL = True


class SkipSet:
    """Set of skipped subtree roots stored as a segment trie.

    Each configured path is stored as nested dictionaries keyed by
    segment; the node for the last segment is replaced by ``True``.
    A path is skipped as soon as the walk reaches a terminal node, so
    everything below a configured root is excluded at any depth.
    """

    __slots__ = ("_root", "_paths")

    def __init__(self, paths: Iterable[Sequence[str]] = ()):
        root: Dict[str, Any] = {}
        stored = []
        for path in paths:
            segments = tuple(path)
            if not segments:
                raise ValueError("Skip path must contain at least one segment")
            stored.append(segments)
            node = root
            for part in segments[:-1]:
                child = node.get(part)
                if child is _TERMINAL:
                    # a shorter entry already covers this subtree
                    break
                if child is None:
                    child = node[part] = {}
                node = child
            else:
                node[segments[-1]] = _TERMINAL
        self._root = root
        self._paths = tuple(stored)

    @property
    def paths(self) -> Tuple[Path, ...]:
        return self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __bool__(self) -> bool:
        return bool(self._root)

    def __repr__(self) -> str:
        return f"SkipSet({list(self._paths)!r})"

    def matches(self, path: Sequence[str]) -> bool:
        """Check whether ``path`` lies at or below a skipped root.

        Args:
            path: Keys traversed from the document root.

        Returns:
            True if the node at ``path`` must be omitted.
        """
        node: Any = self._root
        for part in path:
            node = node.get(part)
            if node is None:
                return False
            if node is _TERMINAL:
                return True
        return False


def should_skip(
    current_path: Sequence[str],
    skip_set: Union[SkipSet, Iterable[Sequence[str]]],
) -> bool:
    """Decide whether the subtree at ``current_path`` is excluded.

    Matching is exact and case-sensitive per segment: a skip entry
    matches when it equals the leading segments of ``current_path``.

    Args:
        current_path: Keys traversed from the document root.
        skip_set: A SkipSet, or any iterable of paths to scan linearly.

    Returns:
        True if ``current_path`` begins with (or equals) a skip entry.
    """
    if isinstance(skip_set, SkipSet):
        return skip_set.matches(current_path)
    path: Path = tuple(current_path)
    for entry in skip_set:
        prefix = tuple(entry)
        if prefix and path[: len(prefix)] == prefix:
            return True
    return False
