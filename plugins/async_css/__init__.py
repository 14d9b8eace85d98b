# -*- coding: utf-8 -*-
"""Async CSS Plugin.

Loads the selected stylesheets asynchronously through the loadCSS runtime loader.
"""

from .async_css import AsyncCssPlugin

__all__ = ["AsyncCssPlugin"]
