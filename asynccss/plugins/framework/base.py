# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/base.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Base plugin implementation.
This module implements the base plugin object and the references the
registry keeps to plugin instances and their hook methods.

Examples:
    >>> from asynccss.plugins.framework.models import PluginConfig
    >>> config = PluginConfig(name="demo", kind="demo.Plugin", hooks=["style_loader_tag"], priority=5)
    >>> plugin = Plugin(config)
    >>> (plugin.name, plugin.priority, plugin.hooks)
    ('demo', 5, ['style_loader_tag'])
"""

# Standard
from typing import Callable
import uuid

# First-Party
from asynccss.plugins.framework.errors import PluginError
from asynccss.plugins.framework.models import PluginConfig, PluginContext, PluginErrorModel, PluginMode, PluginPayload, PluginResult


class Plugin:
    """Base plugin object for pre/post processing of page render hooks.

    Subclasses implement one method per hook point they listen on, named after
    the hook (for example ``style_loader_tag``), taking ``(payload, context)``
    and returning a :class:`PluginResult`.
    """

    def __init__(self, config: PluginConfig) -> None:
        """Initialize a plugin with a configuration.

        Args:
            config: The plugin configuration.
        """
        self._config = config

    @property
    def config(self) -> PluginConfig:
        """The plugin's configuration.

        Returns:
            Plugin's configuration.
        """
        return self._config

    @property
    def name(self) -> str:
        """The name of the plugin.

        Returns:
            The plugin's name.
        """
        return self._config.name

    @property
    def priority(self) -> int:
        """The priority of the plugin.

        Returns:
            The plugin's priority.
        """
        return self._config.priority

    @property
    def mode(self) -> PluginMode:
        """The mode of the plugin.

        Returns:
            The plugin's mode.
        """
        return self._config.mode

    @property
    def hooks(self) -> list[str]:
        """The hook points the plugin listens on.

        Returns:
            The plugin's hooks.
        """
        return self._config.hooks

    def initialize(self) -> None:
        """Initialize the plugin."""

    def shutdown(self) -> None:
        """Plugin cleanup code."""


class PluginRef:
    """Plugin reference which contains a uuid.

    Examples:
        >>> from asynccss.plugins.framework.models import PluginConfig
        >>> ref = PluginRef(Plugin(PluginConfig(name="demo", kind="demo.Plugin")))
        >>> (ref.name, ref.priority, len(ref.uuid))
        ('demo', 100, 32)
    """

    def __init__(self, plugin: Plugin):
        """Initialize a plugin reference.

        Args:
            plugin: The plugin to reference.
        """
        self._plugin = plugin
        self._uuid = uuid.uuid4().hex

    @property
    def plugin(self) -> Plugin:
        """The referenced plugin.

        Returns:
            The plugin.
        """
        return self._plugin

    @property
    def uuid(self) -> str:
        """Unique id of this reference.

        Returns:
            The uuid hex string.
        """
        return self._uuid

    @property
    def name(self) -> str:
        """The plugin name.

        Returns:
            The plugin name.
        """
        return self._plugin.name

    @property
    def priority(self) -> int:
        """The plugin priority.

        Returns:
            The plugin priority.
        """
        return self._plugin.priority

    @property
    def mode(self) -> PluginMode:
        """The plugin mode.

        Returns:
            The plugin mode.
        """
        return self._plugin.mode


class HookRef:
    """A reference to one hook method of a registered plugin."""

    def __init__(self, hook: str, plugin_ref: PluginRef):
        """Initialize a hook reference.

        Args:
            hook: the hook type.
            plugin_ref: the plugin reference implementing the hook.

        Raises:
            PluginError: if the plugin does not implement the hook.
        """
        self._name = hook
        self._plugin_ref = plugin_ref
        func = getattr(plugin_ref.plugin, hook, None)
        if not callable(func):
            raise PluginError(
                error=PluginErrorModel(
                    message=f"Plugin {plugin_ref.name} has no hook method {hook}.",
                    plugin_name=plugin_ref.name,
                )
            )
        self._func: Callable[[PluginPayload, PluginContext], PluginResult] = func

    @property
    def name(self) -> str:
        """The hook type.

        Returns:
            The hook name.
        """
        return self._name

    @property
    def plugin_ref(self) -> PluginRef:
        """The plugin reference the hook belongs to.

        Returns:
            The plugin reference.
        """
        return self._plugin_ref

    @property
    def hook(self) -> Callable[[PluginPayload, PluginContext], PluginResult]:
        """The bound hook method.

        Returns:
            The callable hook.
        """
        return self._func
