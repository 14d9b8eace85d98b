# -*- coding: utf-8 -*-
"""Location: ./asynccss/routers/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

HTTP routers of the administrative surface.
"""
