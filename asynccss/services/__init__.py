# -*- coding: utf-8 -*-
"""Location: ./asynccss/services/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Host services: option storage and the stylesheet registry.
"""
