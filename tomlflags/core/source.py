"""Document source protocol."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class DocumentSource(Protocol):
    """Protocol for anything that can produce a document tree.

    A document tree is a mapping of string keys to scalars, arrays of
    scalars, or nested mappings.
    """

    id: str
    name: str
    extension: Optional[str]

    def load(self) -> Dict[str, Any]:
        """Read and parse the source.

        Returns:
            The parsed document tree.

        Raises:
            ParseError: If the source content is malformed.
        """
        ...
