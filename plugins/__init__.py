# -*- coding: utf-8 -*-
"""Location: ./plugins/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Bundled plugins.
"""
