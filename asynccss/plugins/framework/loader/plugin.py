# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/loader/plugin.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin loader implementation.
This module imports plugin classes by their fully qualified ``kind`` and
instantiates them with their configuration.
"""

# Standard
import importlib
import logging
from typing import Optional

# First-Party
from asynccss.plugins.framework.base import Plugin
from asynccss.plugins.framework.models import PluginConfig

logger = logging.getLogger(__name__)


class PluginLoader:
    """A plugin loader object for loading and instantiating plugins."""

    def __init__(self) -> None:
        """Initialize the plugin loader."""
        self._plugin_types: dict[str, type[Plugin]] = {}

    def __get_plugin_type(self, kind: str) -> type[Plugin]:
        """Import a plugin type from its fully qualified name.

        Args:
            kind: fully qualified class name, e.g. ``plugins.async_css.async_css.AsyncCssPlugin``.

        Returns:
            The plugin class.

        Raises:
            ValueError: if the kind is malformed or does not name a Plugin subclass.
        """
        module_name, _, class_name = kind.rpartition(".")
        if not module_name or not class_name:
            raise ValueError(f"Invalid plugin kind: {kind}")
        module = importlib.import_module(module_name)
        plugin_type = getattr(module, class_name, None)
        if not isinstance(plugin_type, type) or not issubclass(plugin_type, Plugin):
            raise ValueError(f"Plugin kind {kind} is not a Plugin subclass")
        return plugin_type

    def load_and_instantiate_plugin(self, config: PluginConfig) -> Optional[Plugin]:
        """Load and instantiate a plugin, given a configuration.

        Args:
            config: A plugin configuration.

        Returns:
            A plugin instance.
        """
        if config.kind not in self._plugin_types:
            self._plugin_types[config.kind] = self.__get_plugin_type(config.kind)
        plugin = self._plugin_types[config.kind](config)
        plugin.initialize()
        logger.debug("Instantiated plugin %s from %s", config.name, config.kind)
        return plugin

    def shutdown(self) -> None:
        """Forget the cached plugin types."""
        self._plugin_types.clear()
