from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..core.errors import ParseError
from ..core.source import DocumentSource

logger = logging.getLogger(__name__)


def load_yaml(data: Union[str, bytes], source: Optional[str] = None) -> Dict[str, Any]:
    """Parse a YAML document into plain Python containers.

    An empty document yields an empty table.

    Raises:
        ParseError: If the document is not valid YAML or its root is
            not a mapping.
    """
    try:
        doc = yaml.safe_load(data)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        raise ParseError(
            str(e),
            source=source,
            line=mark.line + 1 if mark is not None else None,
            col=mark.column + 1 if mark is not None else None,
        ) from e
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ParseError(
            f"document root must be a mapping, got {type(doc).__name__}",
            source=source,
        )
    return doc


class YamlFileSource(DocumentSource):
    def __init__(self, path: Path, name: Optional[str] = None):
        self.path = Path(path)
        self.name = name or f"yaml:{self.path.name}"
        self.id = str(self.path.resolve())
        self.extension = ".yaml"

    def load(self) -> Dict[str, Any]:
        logger.debug("Loading YAML document %s", self.path)
        return load_yaml(self.path.read_bytes(), source=str(self.path))
