# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/registry.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin instance registry.
Keeps the loaded plugins and their hook references sorted by priority.
"""

# Standard
from collections import defaultdict
import logging
from typing import Optional

# First-Party
from asynccss.plugins.framework.base import HookRef, Plugin, PluginRef

logger = logging.getLogger(__name__)


class PluginInstanceRegistry:
    """Registry for managing loaded plugins.

    Examples:
        >>> from asynccss.plugins.framework.models import PluginConfig
        >>> class Demo(Plugin):
        ...     def style_loader_tag(self, payload, context):
        ...         return None
        >>> registry = PluginInstanceRegistry()
        >>> registry.register(Demo(PluginConfig(name="demo", kind="x.Demo", hooks=["style_loader_tag"])))
        >>> registry.plugin_count
        1
        >>> registry.has_hooks_for("style_loader_tag")
        True
        >>> registry.has_hooks_for("head_render")
        False
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._plugins: dict[str, PluginRef] = {}
        self._hooks: dict[str, list[HookRef]] = defaultdict(list)
        self._priority_cache: dict[str, list[HookRef]] = {}

    def register(self, plugin: Plugin) -> None:
        """Register a plugin instance.

        Args:
            plugin: plugin to be registered.

        Raises:
            ValueError: if a plugin with the same name is already registered.
        """
        if plugin.name in self._plugins:
            raise ValueError(f"Plugin {plugin.name} already registered")

        plugin_ref = PluginRef(plugin)
        hook_refs = [HookRef(hook_type, plugin_ref) for hook_type in plugin.hooks]
        self._plugins[plugin.name] = plugin_ref
        for hook_ref in hook_refs:
            self._hooks[hook_ref.name].append(hook_ref)
            self._priority_cache.pop(hook_ref.name, None)

        logger.info("Registered plugin: %s with hooks: %s", plugin.name, list(plugin.hooks))

    def get_plugin(self, name: str) -> Optional[PluginRef]:
        """Get a plugin by name.

        Args:
            name: the name of the plugin to return.

        Returns:
            The plugin reference or None.
        """
        return self._plugins.get(name)

    def has_hooks_for(self, hook_type: str) -> bool:
        """Check if any plugin listens on a hook type.

        Args:
            hook_type: The type of hook to check for.

        Returns:
            True if there are hooks registered for the hook type.
        """
        return bool(self._hooks.get(hook_type))

    def get_hook_refs_for_hook(self, hook_type: str) -> list[HookRef]:
        """Get the hook references for a hook type, sorted by plugin priority.

        Args:
            hook_type: the hook type.

        Returns:
            The hook references, lowest priority value first.
        """
        if hook_type not in self._priority_cache:
            self._priority_cache[hook_type] = sorted(self._hooks.get(hook_type, []), key=lambda ref: ref.plugin_ref.priority)
        return self._priority_cache[hook_type]

    @property
    def plugin_count(self) -> int:
        """Number of registered plugins.

        Returns:
            The number of plugins.
        """
        return len(self._plugins)

    def shutdown(self) -> None:
        """Shut down every registered plugin and clear the registry."""
        for plugin_ref in self._plugins.values():
            try:
                plugin_ref.plugin.shutdown()
            except Exception as e:
                logger.error("Error shutting down plugin %s: %s", plugin_ref.name, e)
        self._plugins.clear()
        self._hooks.clear()
        self._priority_cache.clear()
