# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/loader/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Configuration loader implementation.
This module loads the YAML file that declares which plugins run on which hooks.
"""

# Standard
import logging
from pathlib import Path

# Third-Party
import yaml

# First-Party
from asynccss.plugins.framework.models import Config

logger = logging.getLogger(__name__)


class ConfigLoader:
    """A configuration loader.

    Examples:
        >>> import tempfile, os
        >>> with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
        ...     _ = f.write("plugins:\\n  - name: demo\\n    kind: demo.Plugin\\n")
        >>> config = ConfigLoader.load_config(f.name)
        >>> config.plugins[0].name
        'demo'
        >>> os.unlink(f.name)
    """

    @staticmethod
    def load_config(config: str) -> Config:
        """Load the plugin configuration from a YAML file.

        Args:
            config: the configuration path.

        Returns:
            The plugin configuration object.

        Raises:
            FileNotFoundError: if the configuration file does not exist.
            ValueError: if the file does not hold a YAML mapping.
        """
        path = Path(config)
        with path.open("r", encoding="utf-8") as file:
            data = yaml.safe_load(file)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Plugin configuration {config} must be a mapping")
        logger.debug("Loaded plugin configuration from %s", path)
        return Config(**data)
