"""Config-file parser entry points for flag parsing libraries."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Callable, Dict, Optional, Union

from .flatten import visit
from .types import FlattenOptions

logger = logging.getLogger(__name__)

Stream = Union[str, bytes, IO[str], IO[bytes]]
SetFn = Callable[[str, str], Any]
Loader = Callable[..., Dict[str, Any]]


def _read(stream: Stream) -> Union[str, bytes]:
    if isinstance(stream, (str, bytes)):
        return stream
    return stream.read()


class Parser:
    """Decode a configuration document and feed it to a flag setter.

    The document is parsed and flattened completely before ``set_fn``
    is called for the first pair, so a malformed document or an
    unencodable value never leaves the caller with a partial set of
    flags.

    Example:
        >>> parser = Parser(FlattenOptions(delimiter="-"))
        >>> parser.parse('[db]\\nhost = "x"', lambda k, v: print(k, v))
        db-host x
    """

    def __init__(
        self,
        options: Optional[FlattenOptions] = None,
        loader: Optional[Loader] = None,
    ):
        """Initialize Parser.

        Args:
            options: Delimiter and skip configuration.
            loader: Document loader; defaults to the TOML loader.
        """
        if loader is None:
            from ..sources.toml_file import load_toml

            loader = load_toml
        self.options = options or FlattenOptions()
        self.loader = loader

    def parse(self, stream: Stream, set_fn: SetFn, source: Optional[str] = None) -> int:
        """Parse a document and call ``set_fn(key, value)`` for every pair.

        Args:
            stream: Document text, bytes, or a readable file object.
            set_fn: Callback receiving each flat key and string value.
            source: Optional document name used in error messages.

        Returns:
            Number of pairs passed to ``set_fn``.

        Raises:
            ParseError: If the document is malformed.
            EncodingError: If a value cannot be flattened.
        """
        document = self.loader(_read(stream), source=source)
        count = visit(document, set_fn, self.options)
        logger.debug("Applied %d config pairs from %s", count, source or "<stream>")
        return count

    def parse_file(self, path: Union[str, Path], set_fn: SetFn) -> int:
        """Open ``path`` and parse it as with ``parse``."""
        p = Path(path)
        with open(p, "rb") as f:
            return self.parse(f, set_fn, source=str(p))


def parse(stream: Stream, set_fn: SetFn) -> int:
    """Parse a TOML document with default options."""
    return Parser().parse(stream, set_fn)
