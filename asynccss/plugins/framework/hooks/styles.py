# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/hooks/styles.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pydantic models for stylesheet hooks.
This module defines the lifecycle hook points a page render goes through
and the payloads handed to plugins at each of them.
"""

# Standard
from enum import Enum
from typing import Optional

# Third-Party
from pydantic import Field

# First-Party
from asynccss.plugins.framework.models import PluginPayload, PluginResult


class StyleHookType(str, Enum):
    """Page render hook points.

    Attributes:
        request_init: fired once when a request context is constructed, before any other hook.
        head_render: fired once while the document head is rendered, before any style tag.
        styles_queued: fired once after the host finished queuing styles for the page.
        style_loader_tag: fired for every queued style while its tag is emitted.

    Examples:
        >>> StyleHookType.STYLE_LOADER_TAG
        <StyleHookType.STYLE_LOADER_TAG: 'style_loader_tag'>
        >>> StyleHookType('styles_queued')
        <StyleHookType.STYLES_QUEUED: 'styles_queued'>
        >>> [h.value for h in StyleHookType]
        ['request_init', 'head_render', 'styles_queued', 'style_loader_tag']
    """

    REQUEST_INIT = "request_init"
    HEAD_RENDER = "head_render"
    STYLES_QUEUED = "styles_queued"
    STYLE_LOADER_TAG = "style_loader_tag"


class RequestInitPayload(PluginPayload):
    """Payload for the request init hook.

    Attributes:
        request_id (str): the request identifier.
        is_admin (bool): whether the administrative surface is being rendered.

    Examples:
        >>> RequestInitPayload(request_id="r1").is_admin
        False
    """

    request_id: str
    is_admin: bool = False


class HeadRenderPayload(PluginPayload):
    """Payload for the head render hook.

    Attributes:
        fragments (list[str]): markup fragments emitted into the document head, in order.

    Examples:
        >>> HeadRenderPayload().fragments
        []
    """

    fragments: list[str] = Field(default_factory=list)


class StylesQueuedPayload(PluginPayload):
    """Payload for the styles queued hook.

    Attributes:
        handles (list[str]): the full queue of style handles, in queue order, duplicates kept.

    Examples:
        >>> StylesQueuedPayload(handles=["a", "b", "b"]).handles
        ['a', 'b', 'b']
    """

    handles: list[str] = Field(default_factory=list)


class StyleTagPayload(PluginPayload):
    """Payload for the style loader tag hook.

    Attributes:
        handle (str): the style handle.
        html (str): the markup the host generated for the style.
        href (str): the stylesheet URL.
        media (Optional[str]): the media value the style was registered with.

    Examples:
        >>> p = StyleTagPayload(handle="theme", html="<link media='all' />", href="http://x/a.css")
        >>> (p.handle, p.media)
        ('theme', None)
    """

    handle: str
    html: str
    href: str
    media: Optional[str] = None


RequestInitResult = PluginResult[RequestInitPayload]
HeadRenderResult = PluginResult[HeadRenderPayload]
StylesQueuedResult = PluginResult[StylesQueuedPayload]
StyleTagResult = PluginResult[StyleTagPayload]


def _register_style_hooks() -> None:
    """Register style hooks in the global registry.

    This is called lazily to avoid circular import issues.
    """
    # First-Party
    from asynccss.plugins.framework.hooks.registry import get_hook_registry  # pylint: disable=import-outside-toplevel

    registry = get_hook_registry()

    if not registry.is_registered(StyleHookType.STYLE_LOADER_TAG):
        registry.register_hook(StyleHookType.REQUEST_INIT, RequestInitPayload)
        registry.register_hook(StyleHookType.HEAD_RENDER, HeadRenderPayload)
        registry.register_hook(StyleHookType.STYLES_QUEUED, StylesQueuedPayload)
        registry.register_hook(StyleHookType.STYLE_LOADER_TAG, StyleTagPayload)


_register_style_hooks()
