"""Exceptions raised while decoding configuration documents."""

from __future__ import annotations

from typing import Optional, Sequence


class TomlflagsError(Exception):
    """Base class for all tomlflags errors."""


class ParseError(TomlflagsError, ValueError):
    """The source document is malformed.

    Attributes:
        source: Optional name of the document (usually a file path).
        line: 1-based line of the failure when the parser reports one.
        col: 1-based column of the failure when the parser reports one.
    """

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        line: Optional[int] = None,
        col: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.source = source
        self.line = line
        self.col = col

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class EncodingError(TomlflagsError, TypeError):
    """A leaf value has a shape that cannot be passed to a flag.

    Attributes:
        path: Table keys leading to the offending value.
        delimiter: Separator used to join ``path`` in the message.
    """

    def __init__(
        self,
        message: str,
        path: Sequence[str] = (),
        delimiter: str = ".",
    ):
        self.path = tuple(path)
        self.message = message
        self.delimiter = delimiter
        super().__init__(message)

    def __str__(self) -> str:
        if self.path:
            return f"{self.delimiter.join(self.path)}: {self.message}"
        return self.message


class ConsumerError(TomlflagsError):
    """A flag consumer rejected a flattened pair.

    Attributes:
        key: Flat key that was rejected.
    """

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key
