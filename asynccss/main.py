# -*- coding: utf-8 -*-
"""Location: ./asynccss/main.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Application factory.
Builds the FastAPI application serving the async CSS options page.

Examples:
    >>> app = create_app()
    >>> app.url_path_for("async_css_options_page")
    '/admin/async-css'
"""

# Standard
import logging

# Third-Party
from fastapi import FastAPI

# First-Party
from asynccss import __version__
from asynccss.config import settings
from asynccss.plugins.framework.settings import settings as plugins_settings
from asynccss.routers.admin import router as admin_router

logger = logging.getLogger(__name__)

# Loggers of the plugin framework and of the bundled plugins
PLUGIN_LOGGERS = ("asynccss.plugins", "plugins")


def configure_logging() -> None:
    """Configure the root logger from the host settings and the plugin loggers from the plugin settings."""
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    for name in PLUGIN_LOGGERS:
        logging.getLogger(name).setLevel(plugins_settings.log_level.upper())


def create_app() -> FastAPI:
    """Create the application.

    Returns:
        FastAPI: the configured application.
    """
    configure_logging()
    app = FastAPI(title=settings.app_name, version=__version__)
    app.include_router(admin_router, prefix=settings.admin_path)
    logger.info("Async CSS options page mounted at %s", settings.admin_path)
    return app
