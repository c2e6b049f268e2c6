"""Loader for tomlflags.yaml project configuration files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .types import FlattenOptions

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "tomlflags.yaml"


class ConfigLoader:
    """Handles loading of tomlflags.yaml files.

    The file holds default flattening options for the command line tool::

        delimiter: "-"
        skip:
          - [skipped, more]
          - deprecated
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize config loader.

        Args:
            config_path: Path to tomlflags.yaml. If None, looks in the
                current directory and its parents.
        """
        self.config_path = self._find_config_file(config_path)
        self._config: Optional[Dict[str, Any]] = None

    def _find_config_file(
        self, config_path: Optional[Union[str, Path]] = None
    ) -> Optional[Path]:
        if config_path is not None:
            path = Path(config_path)
            return path if path.exists() else None

        cwd = Path.cwd()
        candidates = (directory / CONFIG_FILENAME for directory in (cwd, *cwd.parents))
        return next((c for c in candidates if c.is_file()), None)

    def load(self) -> Dict[str, Any]:
        """Load the configuration file.

        Returns:
            Parsed configuration dictionary, or empty dict if no config file.

        Raises:
            ValueError: If the config file is invalid YAML or not a mapping.
        """
        if self.config_path is None:
            return {}

        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(
                f"Invalid {CONFIG_FILENAME} at {self.config_path}: {e}"
            ) from e
        except OSError as e:
            logger.warning("Could not read %s: %s", self.config_path, e)
            return {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid {CONFIG_FILENAME} at {self.config_path}: "
                "top level must be a mapping"
            )
        self._config = data
        logger.debug("Loaded project configuration from %s", self.config_path)
        return self._config

    def options(self) -> FlattenOptions:
        """Build flattening options from the loaded configuration.

        Returns:
            FlattenOptions, or the defaults when no config file exists.

        Raises:
            ValueError: If ``delimiter`` or ``skip`` are malformed.
        """
        config = self.load()
        try:
            return FlattenOptions.from_dict(config)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid {CONFIG_FILENAME} at {self.config_path}: {e}") from e
