"""Type definitions for the tomlflags flattening system."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

# Ordered table keys from the document root down to a node.
Path = Tuple[str, ...]

Scalar = Union[str, int, float, bool, datetime, date, time, timedelta]

DEFAULT_DELIMITER = "."


class FlatPair(NamedTuple):
    """A single flattened key/value pair.

    Attributes:
        key: Path segments joined by the configured delimiter.
        value: String encoding of the leaf value.
    """

    key: str
    value: str


def _normalize_skip(entries: Iterable[Sequence[str]]) -> Tuple[Path, ...]:
    normalized = []
    for entry in entries:
        if isinstance(entry, str):
            raise TypeError(
                f"Skip path must be a sequence of segments, not a string: {entry!r}"
            )
        segments = tuple(entry)
        if not segments:
            raise ValueError("Skip path must contain at least one segment")
        for segment in segments:
            if not isinstance(segment, str):
                raise TypeError(f"Skip path segment must be a string: {segment!r}")
        if segments not in normalized:
            normalized.append(segments)
    return tuple(normalized)


@dataclass(frozen=True)
class FlattenOptions:
    """Immutable flattening configuration.

    Attributes:
        delimiter: String used to join path segments into a flat key.
        skip: Subtree roots excluded from flattening, each an ordered
            sequence of table keys.
    """

    delimiter: str = DEFAULT_DELIMITER
    skip: Tuple[Path, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.delimiter, str) or not self.delimiter:
            raise ValueError("Delimiter must be a non-empty string")
        object.__setattr__(self, "skip", _normalize_skip(self.skip))

    @staticmethod
    def from_dict(d: Optional[Mapping[str, Any]]) -> "FlattenOptions":
        """Create options from a plain mapping.

        Skip entries may be lists of segments or delimiter-joined strings.
        A single string stands for one skip entry.

        Args:
            d: Mapping with optional ``delimiter`` and ``skip`` keys.

        Returns:
            FlattenOptions instance (defaults when d is None/empty).

        Raises:
            ValueError: If the delimiter or a skip entry is malformed.
        """
        if not d:
            return FlattenOptions()
        from .paths import split_key

        delimiter = d.get("delimiter", DEFAULT_DELIMITER)
        if not isinstance(delimiter, str) or not delimiter:
            raise ValueError(f"Invalid delimiter: {delimiter!r}")
        entries = d.get("skip") or []
        if isinstance(entries, str):
            entries = [entries]
        elif not isinstance(entries, (list, tuple)):
            raise ValueError(f"skip must be a list of paths, got {type(entries).__name__}")
        skip = []
        for entry in entries:
            if isinstance(entry, str):
                skip.append(split_key(entry, delimiter))
            elif isinstance(entry, (list, tuple)):
                skip.append(tuple(entry))
            else:
                raise ValueError(f"Invalid skip path: {entry!r}")
        return FlattenOptions(delimiter=delimiter, skip=tuple(skip))

    def with_delimiter(self, delimiter: str) -> "FlattenOptions":
        """Return a copy joining path segments with ``delimiter``."""
        return replace(self, delimiter=delimiter)

    def with_skip(self, *segments: str) -> "FlattenOptions":
        """Return a copy that also skips the subtree rooted at ``segments``."""
        return replace(self, skip=self.skip + (tuple(segments),))
