# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/hooks/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Hook points, payloads and payload policies.
"""
