# -*- coding: utf-8 -*-
"""Location: ./asynccss/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Async CSS configuration.
Settings of the host integration, read from ``ASYNC_CSS_*`` environment
variables (or a ``.env`` file).

Examples:
    >>> s = Settings()
    >>> s.whitelist_option
    'async_css_frontend_whitelisted_stylesheet_handles'
    >>> s.observed_handles_option
    'async_css_frontend_stylesheet_handles'
"""

# Standard
from functools import lru_cache
from typing import Any

# Third-Party
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Host integration settings."""

    app_name: str = Field(default="WP Async CSS", description="Title shown on the options page")
    database_url: str = Field(default="sqlite:///./async_css.db", description="SQLAlchemy URL of the options store")
    whitelist_option: str = Field(default="async_css_frontend_whitelisted_stylesheet_handles", description="Option key holding the whitelisted handles")
    observed_handles_option: str = Field(default="async_css_frontend_stylesheet_handles", description="Option key holding the last observed handle queue")
    admin_path: str = Field(default="/admin/async-css", description="Mount path of the options page")
    log_level: str = Field(default="INFO", description="Root logging level")

    model_config = SettingsConfigDict(env_prefix="ASYNC_CSS_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: A cached instance of the Settings class.
    """
    return Settings()


class LazySettingsWrapper:
    """Lazily initialize the settings singleton on getattr."""

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
