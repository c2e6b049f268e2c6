from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from ..core.errors import ParseError
from ..core.source import DocumentSource

logger = logging.getLogger(__name__)


def _decode(data: Union[str, bytes], source: Optional[str]) -> str:
    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"document is not valid UTF-8: {e}", source=source) from e


def load_toml(data: Union[str, bytes], source: Optional[str] = None) -> Dict[str, Any]:
    """Parse TOML text into plain Python containers.

    Args:
        data: TOML document as text or UTF-8 bytes.
        source: Optional document name used in error messages.

    Returns:
        Document tree of dicts, lists and scalars.

    Raises:
        ParseError: If the document is not valid TOML.
    """
    text = _decode(data, source)
    try:
        doc = tomlkit.parse(text)
    except TomlkitParseError as e:
        raise ParseError(
            str(e),
            source=source,
            line=getattr(e, "line", None),
            col=getattr(e, "col", None),
        ) from e
    return doc.unwrap()


class TomlFileSource(DocumentSource):
    def __init__(self, path: Path, name: Optional[str] = None):
        self.path = Path(path)
        self.name = name or f"toml:{self.path.name}"
        self.id = str(self.path.resolve())
        self.extension = ".toml"

    def load(self) -> Dict[str, Any]:
        logger.debug("Loading TOML document %s", self.path)
        return load_toml(self.path.read_bytes(), source=str(self.path))
