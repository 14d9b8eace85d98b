# -*- coding: utf-8 -*-
"""Location: ./tests/unit/asynccss/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pytest fixtures for the async CSS unit tests.
"""

# Standard
from pathlib import Path

# Third-Party
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# First-Party
from asynccss.config import settings as app_settings
from asynccss.db import Base
import asynccss.plugins.framework as fw
from asynccss.plugins.framework import PluginManager
from asynccss.plugins.framework.settings import settings
from asynccss.plugins.policy import HOOK_PAYLOAD_POLICIES
from asynccss.services.option_service import MemoryOptionStore, OptionService, set_option_service

CONFIG_DIR = Path(__file__).parent / "plugins" / "fixtures" / "configs"


@pytest.fixture(autouse=True)
def reset_plugin_manager_state():
    """Reset PluginManager Borg state and the cached process-wide manager around each test."""
    PluginManager.reset()
    fw._plugin_manager = None
    yield
    PluginManager.reset()
    fw._plugin_manager = None


@pytest.fixture(autouse=True)
def clear_settings_cache(reset_plugin_manager_state):
    """Clear the settings LRU caches so env changes take effect per test."""
    settings.cache_clear()
    app_settings.cache_clear()
    yield
    settings.cache_clear()
    app_settings.cache_clear()


@pytest.fixture
def option_store():
    """An empty in-memory option store."""
    return MemoryOptionStore()


@pytest.fixture(autouse=True)
def option_service(option_store):
    """Install an option service backed by the in-memory store as the process-wide one."""
    service = OptionService(option_store)
    set_option_service(service)
    yield service
    set_option_service(None)


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def config_path():
    """Resolve a fixture plugin configuration by file name."""

    def _resolve(name: str) -> str:
        return str(CONFIG_DIR / name)

    return _resolve


@pytest.fixture
def async_css_manager(config_path):
    """A plugin manager running the async CSS plugin with the host payload policies."""
    manager = PluginManager(config_path("valid_async_css.yaml"), hook_policies=HOOK_PAYLOAD_POLICIES)
    manager.initialize()
    yield manager
    manager.shutdown()
