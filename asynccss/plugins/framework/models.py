# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/models.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pydantic models for plugins.
This module implements the pydantic models associated with
the base plugin layer including configurations, and contexts.
"""

# Standard
from enum import Enum
from typing import Any, Generic, Optional, TypeAlias, TypeVar

# Third-Party
from pydantic import BaseModel, Field

T = TypeVar("T")


class PluginMode(str, Enum):
    """Plugin modes of operation.

    Attributes:
       enforce: enforces the plugin result, and raises when there is an error.
       enforce_ignore_error: enforces the plugin result, but keeps rendering when there is an error.
       permissive: audits the result.
       disabled: plugin disabled.

    Examples:
        >>> PluginMode.ENFORCE
        <PluginMode.ENFORCE: 'enforce'>
        >>> PluginMode('disabled')
        <PluginMode.DISABLED: 'disabled'>
        >>> PluginMode.PERMISSIVE.value
        'permissive'
    """

    ENFORCE = "enforce"
    ENFORCE_IGNORE_ERROR = "enforce_ignore_error"
    PERMISSIVE = "permissive"
    DISABLED = "disabled"


class PluginConfig(BaseModel):
    """A plugin configuration.

    Attributes:
        name (str): The unique name of the plugin.
        description (str): A description of the plugin.
        author (str): The author of the plugin.
        kind (str): The fully qualified class of the plugin.
        version (str): version of the plugin.
        hooks (list[str]): the hook points where the plugin will be called. Default: [].
        tags (list[str]): a list of tags for making the plugin searchable.
        mode (PluginMode): how results and errors of the plugin are handled.
        priority (int): indicates the order in which the plugin is run. Lower = higher priority. Default: 100.
        config (dict[str, Any]): the plugin specific configurations.

    Examples:
        >>> cfg = PluginConfig(name="AsyncCss", kind="plugins.async_css.async_css.AsyncCssPlugin", hooks=["style_loader_tag"])
        >>> cfg.mode
        <PluginMode.ENFORCE: 'enforce'>
        >>> cfg.priority
        100
    """

    name: str
    description: Optional[str] = None
    author: Optional[str] = None
    kind: str
    version: Optional[str] = None
    hooks: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    mode: PluginMode = PluginMode.ENFORCE
    priority: int = 100  # Lower = higher priority
    config: Optional[dict[str, Any]] = None


class PluginErrorModel(BaseModel):
    """A plugin error, used to denote exceptions/errors inside plugins.

    Attributes:
        message (str): the reason for the error.
        code (str): an error code.
        details: (dict[str, Any]): additional error details.
        plugin_name (str): the plugin name.
    """

    message: str
    plugin_name: str
    code: Optional[str] = ""
    details: Optional[dict[str, Any]] = Field(default_factory=dict)


class PluginSettings(BaseModel):
    """Global plugin settings.

    Attributes:
        fail_on_plugin_error (bool): raise plugin errors regardless of plugin mode.
    """

    fail_on_plugin_error: bool = False


class Config(BaseModel):
    """Configurations for plugins.

    Attributes:
        plugins (Optional[list[PluginConfig]]): the list of plugins to enable.
        plugin_settings (PluginSettings): global settings for plugins.
    """

    plugins: Optional[list[PluginConfig]] = []
    plugin_settings: PluginSettings = Field(default_factory=PluginSettings)


class PluginResult(BaseModel, Generic[T]):
    """A result of the plugin hook processing. The actual type is dependent on the hook.

    Attributes:
            continue_processing (bool): Whether later plugins should still run.
            modified_payload (Optional[Any]): The modified payload if the plugin is a transformer.
            metadata (Optional[dict[str, Any]]): additional metadata.

    Examples:
        >>> result = PluginResult()
        >>> result.continue_processing
        True
        >>> result.modified_payload is None
        True
        >>> PluginResult(metadata={"rewritten": True}).metadata["rewritten"]
        True
    """

    continue_processing: bool = True
    modified_payload: Optional[T] = None
    metadata: Optional[dict[str, Any]] = Field(default_factory=dict)


class GlobalContext(BaseModel):
    """The global context, which is shared across all plugins for one request.

    Attributes:
            request_id (str): ID of the page request.
            is_admin (bool): whether the request renders the administrative surface.

    Examples:
        >>> ctx = GlobalContext(request_id="req-123")
        >>> ctx.request_id
        'req-123'
        >>> ctx.is_admin
        False
    """

    request_id: str
    is_admin: bool = False


class PluginContext(BaseModel):
    """The plugin's context, which lasts a request lifecycle.

    Attributes:
       state:  the in-memory state of the request for one plugin.
       global_context: the context that is shared across plugins.
       metadata: plugin meta data.

    Examples:
        >>> ctx = PluginContext(global_context=GlobalContext(request_id="req-1"))
        >>> ctx.set_state("whitelist", frozenset({"theme"}))
        >>> "theme" in ctx.get_state("whitelist")
        True
        >>> ctx.get_state("missing", ())
        ()
    """

    state: dict[str, Any] = Field(default_factory=dict)
    global_context: GlobalContext
    metadata: dict[str, Any] = Field(default_factory=dict)

    def get_state(self, key: str, default: Any = None) -> Any:
        """Get value from the request state.

        Args:
            key: The key to access the state.
            default: A default value if one doesn't exist.

        Returns:
            The state value.
        """
        return self.state.get(key, default)

    def set_state(self, key: str, value: Any) -> None:
        """Set value in the request state.

        Args:
            key: the key to add to the state.
            value: the value to add to the state.
        """
        self.state[key] = value

    def cleanup(self) -> None:
        """Cleanup context resources."""
        self.state.clear()
        self.metadata.clear()


PluginContextTable = dict[str, PluginContext]

PluginPayload: TypeAlias = BaseModel
