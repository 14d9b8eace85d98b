# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/settings.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin framework configuration.

Self-contained settings for the plugin framework, read from ``PLUGINS_*``
environment variables (or a ``.env`` file).
"""

# Standard
from functools import lru_cache
import os
from typing import Any, Literal

# Third-Party
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PluginsSettings(BaseSettings):
    """Plugin framework configuration.

    All settings can be overridden via environment variables with the PLUGINS_ prefix.
    For example: PLUGINS_ENABLED=false, PLUGINS_CONFIG_FILE=plugins/config.yaml
    """

    enabled: bool = Field(default=True, description="Enable the plugin framework")
    default_hook_policy: Literal["allow", "deny"] = Field(
        default="allow",
        description="Default behavior for hooks without an explicit policy: 'allow' accepts all modifications, 'deny' rejects all.",
    )
    config_file: str = Field(default="plugins/config.yaml", description="Path to main plugins configuration file")
    log_level: str = Field(default="INFO", description="Logging level for plugin framework components")

    model_config = SettingsConfigDict(env_prefix="PLUGINS_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> PluginsSettings:
    """Get cached plugins settings instance.

    Returns:
        PluginsSettings: A cached instance of the PluginsSettings class.

    Examples:
        >>> settings = get_settings()
        >>> isinstance(settings, PluginsSettings)
        True
        >>> get_settings() is settings
        True
    """
    return PluginsSettings()


class LazySettingsWrapper:
    """Lazily initialize plugins settings singleton on getattr."""

    @staticmethod
    def _parse_bool(value: str) -> bool:
        """Parse common truthy string values.

        Args:
            value: The string value to parse.

        Returns:
            True if the value represents a truthy string.
        """
        return value.strip().lower() in {"1", "true", "yes", "on"}

    @property
    def enabled(self) -> bool:
        """Access plugin enabled flag with env override support.

        Returns:
            True if plugin framework is enabled.
        """
        env_flag = os.getenv("PLUGINS_ENABLED")
        if env_flag is not None:
            return self._parse_bool(env_flag)
        return get_settings().enabled

    @staticmethod
    def cache_clear() -> None:
        """Clear the cached settings instance so the next access re-reads from env."""
        get_settings.cache_clear()

    def __getattr__(self, key: str) -> Any:
        """Get the real settings object and forward to it

        Args:
            key: The key to fetch from settings

        Returns:
            Any: The value of the attribute on the settings
        """
        return getattr(get_settings(), key)


settings = LazySettingsWrapper()
