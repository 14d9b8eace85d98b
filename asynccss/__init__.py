# -*- coding: utf-8 -*-
"""Location: ./asynccss/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Async CSS.
Loads selected stylesheets of a page asynchronously through a runtime loader.
"""

__version__ = "1.1.0"
__all__ = ["__version__"]
