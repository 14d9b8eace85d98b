# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugins Framework.
Exposes the plugin base, models, hook payloads and the plugin manager.
"""

# Standard
from typing import Optional

# First-Party
from asynccss.plugins.framework.base import HookRef, Plugin, PluginRef
from asynccss.plugins.framework.errors import convert_exception_to_error, PluginError
from asynccss.plugins.framework.hooks.policies import apply_policy, DefaultHookPolicy, HookPayloadPolicy
from asynccss.plugins.framework.hooks.registry import get_hook_registry, HookRegistry
from asynccss.plugins.framework.hooks.styles import (
    HeadRenderPayload,
    HeadRenderResult,
    RequestInitPayload,
    RequestInitResult,
    StyleHookType,
    StylesQueuedPayload,
    StylesQueuedResult,
    StyleTagPayload,
    StyleTagResult,
)
from asynccss.plugins.framework.manager import PluginExecutor, PluginManager
from asynccss.plugins.framework.models import (
    Config,
    GlobalContext,
    PluginConfig,
    PluginContext,
    PluginContextTable,
    PluginErrorModel,
    PluginMode,
    PluginPayload,
    PluginResult,
    PluginSettings,
)
from asynccss.plugins.framework.settings import settings

_plugin_manager: Optional[PluginManager] = None


def get_plugin_manager() -> Optional[PluginManager]:
    """Get the process-wide plugin manager, loading it on first use.

    Returns:
        The initialized PluginManager, or None when the plugin framework is disabled.
    """
    global _plugin_manager  # pylint: disable=global-statement
    if not settings.enabled:
        return None
    if _plugin_manager is None:
        # Local import: the host policies live outside the framework package
        # First-Party
        from asynccss.plugins.policy import HOOK_PAYLOAD_POLICIES  # pylint: disable=import-outside-toplevel

        _plugin_manager = PluginManager(settings.config_file, hook_policies=HOOK_PAYLOAD_POLICIES)
        _plugin_manager.initialize()
    return _plugin_manager


__all__ = [
    "Config",
    "convert_exception_to_error",
    "DefaultHookPolicy",
    "GlobalContext",
    "HeadRenderPayload",
    "HeadRenderResult",
    "HookPayloadPolicy",
    "HookRef",
    "HookRegistry",
    "Plugin",
    "PluginConfig",
    "PluginContext",
    "PluginContextTable",
    "PluginError",
    "PluginErrorModel",
    "PluginExecutor",
    "PluginManager",
    "PluginMode",
    "PluginPayload",
    "PluginRef",
    "PluginResult",
    "PluginSettings",
    "RequestInitPayload",
    "RequestInitResult",
    "StyleHookType",
    "StylesQueuedPayload",
    "StylesQueuedResult",
    "StyleTagPayload",
    "StyleTagResult",
    "apply_policy",
    "get_hook_registry",
    "get_plugin_manager",
]
