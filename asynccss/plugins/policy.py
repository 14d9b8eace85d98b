# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/policy.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Concrete hook payload policies for the page render.

This module defines which payload fields plugins are allowed to modify
for each hook type.  The policies are injected into the PluginManager
at initialization time.

Examples:
    >>> from asynccss.plugins.policy import HOOK_PAYLOAD_POLICIES
    >>> sorted(HOOK_PAYLOAD_POLICIES["style_loader_tag"].writable_fields)
    ['html']
    >>> HOOK_PAYLOAD_POLICIES["styles_queued"].writable_fields
    frozenset()
"""

# First-Party
from asynccss.plugins.framework.hooks.policies import HookPayloadPolicy

HOOK_PAYLOAD_POLICIES: dict[str, HookPayloadPolicy] = {
    "request_init": HookPayloadPolicy(writable_fields=frozenset()),
    "head_render": HookPayloadPolicy(writable_fields=frozenset({"fragments"})),
    "styles_queued": HookPayloadPolicy(writable_fields=frozenset()),
    "style_loader_tag": HookPayloadPolicy(writable_fields=frozenset({"html"})),
}
