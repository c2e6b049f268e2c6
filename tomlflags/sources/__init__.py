"""Document sources.

This package contains the parsers that turn configuration files into
document trees: TOML (via tomlkit) and YAML (via PyYAML).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from ..core.source import DocumentSource
from .toml_file import TomlFileSource, load_toml
from .yaml_file import YamlFileSource, load_yaml

Loader = Callable[..., Dict[str, Any]]


def loader_for(path: Union[str, Path]) -> Loader:
    """Pick a document loader from a file suffix.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    suffix = Path(path).suffix.lower()
    if suffix == ".toml":
        return load_toml
    if suffix in {".yaml", ".yml"}:
        return load_yaml
    raise ValueError(f"Unsupported document type: {path}")


def open_source(path: Union[str, Path], name: Optional[str] = None) -> DocumentSource:
    """Create a document source for ``path`` based on its suffix.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".toml":
        return TomlFileSource(p, name=name)
    if suffix in {".yaml", ".yml"}:
        return YamlFileSource(p, name=name)
    raise ValueError(f"Unsupported document type: {path}")


__all__ = [
    "DocumentSource",
    "TomlFileSource",
    "YamlFileSource",
    "load_toml",
    "load_yaml",
    "loader_for",
    "open_source",
]
