# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/manager.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin manager.
Module that manages and calls plugins at the hook points of a page render.

This module provides the core plugin management functionality including:
- Plugin lifecycle management (initialization, execution, shutdown)
- Error isolation according to each plugin's mode
- Request-local context management across the hooks of one request
- Priority-based plugin ordering

Examples:
    >>> manager = PluginManager()
    >>> manager.initialize()
    >>> manager.plugin_count
    0
    >>> from asynccss.plugins.framework.hooks.styles import StyleHookType, StyleTagPayload
    >>> from asynccss.plugins.framework.models import GlobalContext
    >>> payload = StyleTagPayload(handle="theme", html="<link />", href="http://x/a.css")
    >>> result, contexts = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, payload, GlobalContext(request_id="1"))
    >>> (result.continue_processing, result.modified_payload, contexts)
    (True, None, None)
    >>> PluginManager.reset()
"""

# Standard
import logging
import threading
from typing import Any, Optional

# Third-Party
from pydantic import BaseModel

# First-Party
from asynccss.plugins.framework.base import HookRef, Plugin
from asynccss.plugins.framework.errors import convert_exception_to_error, PluginError
from asynccss.plugins.framework.hooks.policies import apply_policy, DefaultHookPolicy, HookPayloadPolicy
from asynccss.plugins.framework.hooks.registry import get_hook_registry
from asynccss.plugins.framework.loader.config import ConfigLoader
from asynccss.plugins.framework.loader.plugin import PluginLoader
from asynccss.plugins.framework.models import Config, GlobalContext, PluginContext, PluginContextTable, PluginMode, PluginPayload, PluginResult
from asynccss.plugins.framework.registry import PluginInstanceRegistry
from asynccss.plugins.framework.settings import settings

logger = logging.getLogger(__name__)


class PluginExecutor:
    """Executes a list of plugins in priority order with error isolation.

    This class manages the execution of plugins in priority order, handling:
    - Context management between plugins and between hooks of one request
    - Error isolation so a failing plugin never breaks a page render unless enforced
    - Payload modification policies
    - Metadata aggregation from multiple plugins
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        hook_policies: Optional[dict[str, HookPayloadPolicy]] = None,
    ):
        """Initialize the plugin executor.

        Args:
            config: the plugin manager configuration.
            hook_policies: Per-hook-type payload modification policies.
        """
        self.config = config
        self.hook_policies: dict[str, HookPayloadPolicy] = hook_policies or {}
        self.default_hook_policy = DefaultHookPolicy(settings.default_hook_policy)

    def execute(
        self,
        hook_refs: list[HookRef],
        payload: PluginPayload,
        global_context: GlobalContext,
        hook_type: str,
        local_contexts: Optional[PluginContextTable] = None,
    ) -> tuple[PluginResult, PluginContextTable | None]:
        """Execute plugins in priority order.

        Args:
            hook_refs: List of hook references to execute, sorted by priority.
            payload: The payload to be processed by plugins.
            global_context: Shared context for all plugins containing request metadata.
            hook_type: The hook type identifier (e.g., "style_loader_tag").
            local_contexts: Optional existing contexts from previous hook executions of the same request.

        Returns:
            A tuple containing:
            - PluginResult with processing status, modified payload, and metadata
            - PluginContextTable with updated local contexts for each plugin

        Raises:
            PluginError: If there is an error inside an enforcing plugin.
        """
        if not hook_refs:
            return (PluginResult(modified_payload=None), None)

        policy = self.hook_policies.get(hook_type)

        res_local_contexts: PluginContextTable = dict(local_contexts) if local_contexts else {}
        combined_metadata: dict[str, Any] = {}
        current_payload: PluginPayload | None = None

        for hook_ref in hook_refs:
            if hook_ref.plugin_ref.mode == PluginMode.DISABLED:
                continue

            # Local contexts are keyed per request and plugin so state survives across hooks
            local_context_key = global_context.request_id + hook_ref.plugin_ref.uuid
            local_context = res_local_contexts.get(local_context_key)
            if local_context is None:
                local_context = PluginContext(global_context=global_context)
            else:
                local_context.global_context = global_context
            res_local_contexts[local_context_key] = local_context

            effective_payload = current_payload if current_payload is not None else payload
            plugin_input = effective_payload.model_copy(deep=True) if (policy or self.default_hook_policy == DefaultHookPolicy.DENY) else effective_payload

            result = self.execute_plugin(hook_ref, plugin_input, local_context, combined_metadata)

            if result.modified_payload is not None:
                if policy:
                    if isinstance(result.modified_payload, BaseModel):
                        filtered = apply_policy(effective_payload, result.modified_payload, policy)
                        if filtered is not None:
                            current_payload = filtered
                    else:
                        logger.warning(
                            "Plugin %s returned unexpected type %s on hook %s; ignoring modification",
                            hook_ref.plugin_ref.name,
                            type(result.modified_payload).__name__,
                            hook_type,
                        )
                elif self.default_hook_policy == DefaultHookPolicy.ALLOW:
                    current_payload = result.modified_payload
                else:
                    logger.warning(
                        "Plugin %s attempted payload modification on hook %s but no policy is defined and default is deny",
                        hook_ref.plugin_ref.name,
                        hook_type,
                    )

            if not result.continue_processing and hook_ref.plugin_ref.mode in (PluginMode.ENFORCE, PluginMode.ENFORCE_IGNORE_ERROR):
                logger.debug("Plugin %s stopped processing of hook %s", hook_ref.plugin_ref.name, hook_type)
                return (
                    PluginResult(continue_processing=False, modified_payload=current_payload, metadata=combined_metadata),
                    res_local_contexts,
                )

        return (
            PluginResult(continue_processing=True, modified_payload=current_payload, metadata=combined_metadata),
            res_local_contexts,
        )

    def execute_plugin(
        self,
        hook_ref: HookRef,
        payload: PluginPayload,
        local_context: PluginContext,
        combined_metadata: Optional[dict[str, Any]] = None,
    ) -> PluginResult:
        """Execute a single plugin hook.

        Args:
            hook_ref: Hooking structure that contains the plugin and hook.
            payload: The payload to be processed by the plugin.
            local_context: the plugin's request-local context.
            combined_metadata: combination of the metadata of all plugins.

        Returns:
            The plugin result, or an empty result when a non-enforcing plugin failed.

        Raises:
            PluginError: If there is an error inside an enforcing plugin.
        """
        try:
            result = hook_ref.hook(payload, local_context)
            if result is None:
                return PluginResult(continue_processing=True)
            if result.metadata and combined_metadata is not None:
                combined_metadata.update(result.metadata)
            if not result.continue_processing and hook_ref.plugin_ref.mode == PluginMode.PERMISSIVE:
                logger.warning("Plugin %s would stop processing of %s (permissive mode)", hook_ref.plugin_ref.name, hook_ref.name)
                return result.model_copy(update={"continue_processing": True})
            return result
        except PluginError as pe:
            logger.error("Plugin %s failed with error: %s", hook_ref.plugin_ref.name, str(pe))
            if self._fail_on_error(hook_ref):
                raise
        except Exception as e:
            logger.error("Plugin %s failed with error: %s", hook_ref.plugin_ref.name, str(e))
            if self._fail_on_error(hook_ref):
                raise PluginError(error=convert_exception_to_error(e, hook_ref.plugin_ref.name)) from e
        # In permissive or enforce_ignore_error mode, continue with next plugin
        return PluginResult(continue_processing=True)

    def _fail_on_error(self, hook_ref: HookRef) -> bool:
        """Decide whether a plugin failure must propagate.

        Args:
            hook_ref: the failing hook.

        Returns:
            True when the error is raised to the caller.
        """
        return bool(self.config and self.config.plugin_settings.fail_on_plugin_error) or hook_ref.plugin_ref.mode == PluginMode.ENFORCE


class PluginManager:
    """Plugin manager for managing the plugin lifecycle.

    This class implements a thread-safe Borg singleton so every part of the
    host sees the same loaded plugins. It handles:
    - Plugin discovery and loading from configuration
    - Plugin lifecycle management (initialization, execution, shutdown)
    - Hook execution orchestration

    Attributes:
        config: The loaded plugin configuration.
        plugin_count: Number of currently loaded plugins.
        initialized: Whether the manager has been initialized.
    """

    __shared_state: dict[Any, Any] = {}
    __lock: threading.Lock = threading.Lock()
    _loader: PluginLoader = PluginLoader()
    _initialized: bool = False
    _registry: PluginInstanceRegistry = PluginInstanceRegistry()
    _config: Config | None = None
    _config_path: str | None = None
    _executor: PluginExecutor | None = None

    def __init__(self, config: str = "", hook_policies: Optional[dict[str, HookPayloadPolicy]] = None):
        """Initialize plugin manager.

        Shared state is initialized only once across all instances; later
        instantiations reuse it and skip the config reload.

        Args:
            config: Path to plugin configuration file (YAML).
            hook_policies: Per-hook-type payload modification policies (injected by the host).
        """
        self.__dict__ = self.__shared_state

        if not self.__shared_state:
            with self.__lock:
                if not self.__shared_state:
                    if config:
                        self._config = ConfigLoader.load_config(config)
                        self._config_path = config
                    self._executor = PluginExecutor(config=self._config, hook_policies=hook_policies)
        elif hook_policies:
            with self.__lock:
                executor = self._get_executor()
                if not executor.hook_policies:
                    executor.hook_policies = hook_policies
                elif executor.hook_policies != hook_policies:
                    logger.warning("PluginManager: hook_policies already set; ignoring new policies (call reset() first to replace them)")

    def _get_executor(self) -> PluginExecutor:
        """Get plugin executor, creating it lazily if necessary.

        Returns:
            PluginExecutor: The plugin executor instance.
        """
        if self._executor is None:
            self._executor = PluginExecutor(config=self._config)
        return self._executor

    @property
    def executor(self) -> PluginExecutor:
        """Expose executor for tests and internal callers.

        Returns:
            PluginExecutor: The plugin executor instance.
        """
        return self._get_executor()

    @classmethod
    def reset(cls) -> None:
        """Reset the Borg pattern shared state.

        Primarily used for testing.
        """
        with cls.__lock:
            cls.__shared_state.clear()
            cls._initialized = False
            cls._config = None
            cls._config_path = None
            cls._registry = PluginInstanceRegistry()
            cls._executor = None
            cls._loader = PluginLoader()

    @property
    def config(self) -> Config | None:
        """Plugin manager configuration.

        Returns:
            The plugin configuration object or None if not configured.
        """
        return self._config

    @property
    def plugin_count(self) -> int:
        """Number of plugins loaded.

        Returns:
            The number of currently loaded plugins.
        """
        return self._registry.plugin_count

    @property
    def initialized(self) -> bool:
        """Plugin manager initialization status.

        Returns:
            True if the plugin manager has been initialized.
        """
        return self._initialized

    def get_plugin(self, name: str) -> Optional[Plugin]:
        """Get a plugin by name.

        Args:
            name: the name of the plugin to return.

        Returns:
            A plugin.
        """
        plugin_ref = self._registry.get_plugin(name)
        return plugin_ref.plugin if plugin_ref else None

    def has_hooks_for(self, hook_type: str) -> bool:
        """Check if there are any hooks registered for a specific hook type.

        Args:
            hook_type: The type of hook to check for.

        Returns:
            True if there are hooks registered for the specified type, False otherwise.
        """
        return self._registry.has_hooks_for(hook_type)

    def register_plugin(self, plugin: Plugin) -> None:
        """Register an already instantiated plugin.

        Args:
            plugin: the plugin instance.
        """
        with self.__lock:
            self._registry.register(plugin)

    def initialize(self) -> None:
        """Initialize the plugin manager and load all configured plugins.

        Raises:
            RuntimeError: If plugin initialization fails with an exception.
        """
        with self.__lock:
            if self._initialized:
                logger.debug("Plugin manager already initialized")
                return

            plugins = self._config.plugins if self._config and self._config.plugins else []
            loaded_count = 0

            for plugin_config in plugins:
                if plugin_config.mode == PluginMode.DISABLED:
                    logger.info("Plugin: %s is disabled. Ignoring.", plugin_config.name)
                    continue
                try:
                    plugin = self._loader.load_and_instantiate_plugin(plugin_config)
                    if not plugin:
                        raise ValueError(f"Unable to instantiate plugin: {plugin_config.name}")
                    self._registry.register(plugin)
                    loaded_count += 1
                    logger.info("Loaded plugin: %s (mode: %s)", plugin_config.name, plugin_config.mode.value)
                except Exception as e:
                    logger.error("Failed to load plugin %s: {%s}", plugin_config.name, str(e))
                    raise RuntimeError(f"Plugin initialization failed: {plugin_config.name} - {str(e)}") from e

            self._initialized = True
            logger.info("Plugin manager initialized with %s plugins", loaded_count)

    def shutdown(self) -> None:
        """Shutdown all plugins and cleanup resources.

        The config is preserved to allow re-initializing.
        """
        with self.__lock:
            if not self._initialized:
                logger.debug("Plugin manager not initialized, nothing to shutdown")
                return

            logger.info("Shutting down plugin manager")
            self._registry.shutdown()
            self._loader.shutdown()
            self._initialized = False
            logger.info("Plugin manager shutdown complete")

    def invoke_hook(
        self,
        hook_type: str,
        payload: PluginPayload,
        global_context: GlobalContext,
        local_contexts: Optional[PluginContextTable] = None,
    ) -> tuple[PluginResult, PluginContextTable | None]:
        """Invoke the plugins configured for a hook point in priority order.

        Args:
            hook_type: The type of hook to execute.
            payload: The plugin payload for which the plugins will analyze and modify.
            global_context: Shared context for all plugins with request metadata.
            local_contexts: Optional existing contexts from previous hook executions.

        Returns:
            A tuple containing:
            - PluginResult with processing status and modified payload
            - PluginContextTable with plugin contexts for state management

        Raises:
            TypeError: if the payload is not the model registered for the hook type.
        """
        payload_type = get_hook_registry().get_payload_type(hook_type)
        if payload_type is not None and not isinstance(payload, payload_type):
            raise TypeError(f"Hook {hook_type} expects {payload_type.__name__}, got {type(payload).__name__}")
        hook_refs = self._registry.get_hook_refs_for_hook(hook_type=hook_type)
        return self._get_executor().execute(hook_refs, payload, global_context, hook_type, local_contexts)
