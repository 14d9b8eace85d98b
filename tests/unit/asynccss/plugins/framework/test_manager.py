# -*- coding: utf-8 -*-
"""Location: ./tests/unit/asynccss/plugins/framework/test_manager.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for plugin manager.
"""

# Third-Party
import pytest

# First-Party
import asynccss.plugins.framework as fw
from asynccss.plugins.framework import (
    GlobalContext,
    Plugin,
    PluginConfig,
    PluginError,
    PluginManager,
    PluginMode,
    RequestInitPayload,
    RequestInitResult,
    StyleHookType,
    StyleTagPayload,
    StyleTagResult,
)
from asynccss.plugins.policy import HOOK_PAYLOAD_POLICIES
from plugins.async_css.async_css import AsyncCssPlugin


class AppendPlugin(Plugin):
    """Appends its configured marker to the tag html."""

    def style_loader_tag(self, payload: StyleTagPayload, context) -> StyleTagResult:
        marker = self.config.config.get("marker", "")
        return StyleTagResult(modified_payload=payload.model_copy(update={"html": payload.html + marker}), metadata={self.name: True})


class HrefPlugin(Plugin):
    """Tries to rewrite both the href and the html."""

    def style_loader_tag(self, payload: StyleTagPayload, context) -> StyleTagResult:
        return StyleTagResult(modified_payload=payload.model_copy(update={"href": "http://evil/x.css", "html": "<script></script>"}))


class StopPlugin(Plugin):
    """Asks the executor to stop running later plugins."""

    def style_loader_tag(self, payload: StyleTagPayload, context) -> StyleTagResult:
        return StyleTagResult(continue_processing=False)


class FailingPlugin(Plugin):
    """Raises on every call."""

    def style_loader_tag(self, payload: StyleTagPayload, context) -> StyleTagResult:
        raise RuntimeError("boom")


class StatefulPlugin(Plugin):
    """Keeps request-local state from request init to the style tag hook."""

    def request_init(self, payload: RequestInitPayload, context) -> RequestInitResult:
        context.set_state("seen", payload.request_id)
        return RequestInitResult()

    def style_loader_tag(self, payload: StyleTagPayload, context) -> StyleTagResult:
        return StyleTagResult(metadata={"seen": context.get_state("seen")})


def make_plugin(cls, name, mode=PluginMode.ENFORCE, priority=100, hooks=("style_loader_tag",), config=None):
    return cls(
        PluginConfig(
            name=name,
            kind=f"{__name__}.{cls.__name__}",
            hooks=list(hooks),
            mode=mode,
            priority=priority,
            config=config or {},
        )
    )


def tag_payload() -> StyleTagPayload:
    return StyleTagPayload(handle="theme", html="<link />", href="http://x/theme.css", media="all")


def test_manager_loads_async_css_plugin(async_css_manager):
    assert async_css_manager.initialized
    assert async_css_manager.plugin_count == 1
    assert async_css_manager.config.plugins[0].name == "AsyncCssPlugin"
    assert async_css_manager.config.plugins[0].kind == "plugins.async_css.async_css.AsyncCssPlugin"
    assert async_css_manager.config.plugins[0].mode == PluginMode.ENFORCE_IGNORE_ERROR
    assert isinstance(async_css_manager.get_plugin("AsyncCssPlugin"), AsyncCssPlugin)
    for hook_type in StyleHookType:
        assert async_css_manager.has_hooks_for(hook_type)


def test_manager_no_plugins(config_path):
    manager = PluginManager(config_path("valid_no_plugin.yaml"))
    manager.initialize()
    assert manager.initialized
    result, contexts = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))
    assert result.continue_processing
    assert not result.modified_payload
    assert contexts is None
    manager.shutdown()


def test_manager_skips_disabled_plugins(config_path):
    manager = PluginManager(config_path("disabled_plugin.yaml"))
    manager.initialize()
    assert manager.plugin_count == 0
    assert not manager.has_hooks_for(StyleHookType.STYLE_LOADER_TAG)


def test_manager_invalid_kind_fails_initialization(config_path):
    manager = PluginManager(config_path("invalid_kind.yaml"))
    with pytest.raises(RuntimeError, match="MissingPlugin"):
        manager.initialize()
    assert not manager.initialized


def test_manager_initialize_is_idempotent(async_css_manager):
    async_css_manager.initialize()
    assert async_css_manager.plugin_count == 1


def test_manager_shares_state(async_css_manager):
    other = PluginManager()
    assert other.plugin_count == 1
    assert other.get_plugin("AsyncCssPlugin") is async_css_manager.get_plugin("AsyncCssPlugin")


def test_manager_shutdown_and_reinitialize(async_css_manager):
    async_css_manager.shutdown()
    assert not async_css_manager.initialized
    assert async_css_manager.plugin_count == 0
    async_css_manager.initialize()
    assert async_css_manager.plugin_count == 1


def test_manager_runs_plugins_in_priority_order():
    manager = PluginManager()
    manager.register_plugin(make_plugin(AppendPlugin, "second", priority=50, config={"marker": "-second"}))
    manager.register_plugin(make_plugin(AppendPlugin, "first", priority=10, config={"marker": "-first"}))
    result, _ = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))
    assert result.modified_payload.html == "<link />-first-second"
    assert result.metadata == {"first": True, "second": True}


def test_manager_policy_filters_non_writable_fields():
    manager = PluginManager(hook_policies=HOOK_PAYLOAD_POLICIES)
    manager.register_plugin(make_plugin(HrefPlugin, "href"))
    result, _ = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))
    assert result.modified_payload.html == "<script></script>"
    assert result.modified_payload.href == "http://x/theme.css"


def test_manager_without_policy_accepts_whole_payload():
    manager = PluginManager()
    manager.register_plugin(make_plugin(HrefPlugin, "href"))
    result, _ = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))
    assert result.modified_payload.href == "http://evil/x.css"


def test_manager_deny_default_policy_rejects_modifications(monkeypatch):
    monkeypatch.setenv("PLUGINS_DEFAULT_HOOK_POLICY", "deny")
    fw.settings.cache_clear()
    manager = PluginManager()
    manager.register_plugin(make_plugin(HrefPlugin, "href"))
    result, _ = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))
    assert result.modified_payload is None


def test_manager_stop_halts_later_plugins():
    manager = PluginManager()
    manager.register_plugin(make_plugin(StopPlugin, "stop", priority=10))
    manager.register_plugin(make_plugin(AppendPlugin, "append", priority=20, config={"marker": "-x"}))
    result, _ = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))
    assert not result.continue_processing
    assert result.modified_payload is None


def test_manager_permissive_stop_does_not_halt():
    manager = PluginManager()
    manager.register_plugin(make_plugin(StopPlugin, "stop", mode=PluginMode.PERMISSIVE, priority=10))
    manager.register_plugin(make_plugin(AppendPlugin, "append", priority=20, config={"marker": "-x"}))
    result, _ = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))
    assert result.continue_processing
    assert result.modified_payload.html == "<link />-x"


@pytest.mark.parametrize("mode", [PluginMode.ENFORCE_IGNORE_ERROR, PluginMode.PERMISSIVE])
def test_manager_isolates_errors_of_non_enforcing_plugins(mode):
    manager = PluginManager()
    manager.register_plugin(make_plugin(FailingPlugin, "failing", mode=mode, priority=10))
    manager.register_plugin(make_plugin(AppendPlugin, "append", priority=20, config={"marker": "-x"}))
    result, _ = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))
    assert result.continue_processing
    assert result.modified_payload.html == "<link />-x"


def test_manager_enforce_mode_raises_plugin_error():
    manager = PluginManager()
    manager.register_plugin(make_plugin(FailingPlugin, "failing"))
    with pytest.raises(PluginError) as excinfo:
        manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))
    assert excinfo.value.error.plugin_name == "failing"
    assert "boom" in excinfo.value.error.message


def test_manager_fail_on_plugin_error_overrides_mode(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("plugins: []\nplugin_settings:\n  fail_on_plugin_error: true\n", encoding="utf-8")
    manager = PluginManager(str(config_file))
    manager.initialize()
    manager.register_plugin(make_plugin(FailingPlugin, "failing", mode=PluginMode.PERMISSIVE))
    with pytest.raises(PluginError):
        manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="1"))


def test_manager_keeps_local_context_across_hooks():
    manager = PluginManager()
    manager.register_plugin(make_plugin(StatefulPlugin, "stateful", hooks=("request_init", "style_loader_tag")))
    global_context = GlobalContext(request_id="req-7")
    _, contexts = manager.invoke_hook(StyleHookType.REQUEST_INIT, RequestInitPayload(request_id="req-7"), global_context)
    result, _ = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), global_context, local_contexts=contexts)
    assert result.metadata == {"seen": "req-7"}


def test_manager_local_context_is_per_request():
    manager = PluginManager()
    manager.register_plugin(make_plugin(StatefulPlugin, "stateful", hooks=("request_init", "style_loader_tag")))
    _, contexts = manager.invoke_hook(StyleHookType.REQUEST_INIT, RequestInitPayload(request_id="a"), GlobalContext(request_id="a"))
    result, _ = manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, tag_payload(), GlobalContext(request_id="b"), local_contexts=contexts)
    assert result.metadata == {"seen": None}


def test_get_plugin_manager_disabled(monkeypatch):
    monkeypatch.setenv("PLUGINS_ENABLED", "false")
    assert fw.get_plugin_manager() is None


def test_get_plugin_manager_loads_configured_file(monkeypatch, config_path):
    monkeypatch.setenv("PLUGINS_CONFIG_FILE", config_path("valid_async_css.yaml"))
    fw.settings.cache_clear()
    manager = fw.get_plugin_manager()
    assert manager is not None
    assert manager.initialized
    assert manager.plugin_count == 1
    assert fw.get_plugin_manager() is manager
    assert manager.executor.hook_policies is HOOK_PAYLOAD_POLICIES


def test_manager_rejects_payload_of_another_hook():
    manager = PluginManager()
    manager.register_plugin(make_plugin(AppendPlugin, "append", config={"marker": "-x"}))
    with pytest.raises(TypeError, match="StyleTagPayload"):
        manager.invoke_hook(StyleHookType.STYLE_LOADER_TAG, RequestInitPayload(request_id="1"), GlobalContext(request_id="1"))
