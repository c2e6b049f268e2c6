"""Flattening of nested documents into ordered key/value pairs."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, List, Mapping, Optional

from .encoding import encode
from .errors import EncodingError
from .filters import SkipSet
from .paths import build_key
from .types import FlatPair, FlattenOptions, Path

logger = logging.getLogger(__name__)


def _walk(
    table: Mapping[str, Any],
    ancestors: Path,
    skip: SkipSet,
    delimiter: str,
) -> Iterator[FlatPair]:
    for key, node in table.items():
        path = ancestors + (str(key),)
        if skip and skip.matches(path):
            logger.debug("Skipping subtree %s", build_key(path, delimiter=delimiter))
            continue
        if isinstance(node, Mapping):
            yield from _walk(node, path, skip, delimiter)
            continue
        flat_key = build_key(path, delimiter=delimiter)
        try:
            values = encode(node, path)
        except EncodingError as e:
            e.delimiter = delimiter
            raise
        for value in values:
            yield FlatPair(flat_key, value)


def iter_pairs(
    root: Mapping[str, Any],
    options: Optional[FlattenOptions] = None,
) -> Iterator[FlatPair]:
    """Lazily flatten a document, depth-first in table order.

    Nested tables are descended into before moving on to the next
    sibling. Arrays yield one pair per element, all with the same key.
    Consumers that must not observe partial output should use
    ``flatten`` instead.

    Args:
        root: Top-level document table.
        options: Delimiter and skip configuration (defaults when None).

    Yields:
        FlatPair for every encoded leaf value.

    Raises:
        EncodingError: If the root is not a table or a leaf cannot be encoded.
    """
    if not isinstance(root, Mapping):
        raise EncodingError(
            f"document root must be a table, got {type(root).__name__}"
        )
    opts = options or FlattenOptions()
    yield from _walk(root, (), SkipSet(opts.skip), opts.delimiter)


def flatten(
    root: Mapping[str, Any],
    options: Optional[FlattenOptions] = None,
) -> List[FlatPair]:
    """Flatten a document into an ordered list of pairs.

    The list is built completely before it is returned, so an encoding
    failure anywhere in the document yields no pairs at all.

    Args:
        root: Top-level document table.
        options: Delimiter and skip configuration (defaults when None).

    Returns:
        List of FlatPair in document traversal order.
    """
    pairs = list(iter_pairs(root, options))
    logger.debug("Flattened document into %d pairs", len(pairs))
    return pairs


def visit(
    root: Mapping[str, Any],
    fn: Callable[[str, str], Any],
    options: Optional[FlattenOptions] = None,
) -> int:
    """Flatten a document and hand each pair to ``fn(key, value)``.

    Exceptions raised by ``fn`` propagate unchanged and stop delivery
    of the remaining pairs.

    Returns:
        Number of pairs delivered.
    """
    pairs = flatten(root, options)
    for key, value in pairs:
        fn(key, value)
    return len(pairs)
