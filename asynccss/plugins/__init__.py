# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin framework and host policies.
"""
