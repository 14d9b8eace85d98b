# -*- coding: utf-8 -*-
"""Location: ./asynccss/render.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Page render.
Drives one request through the stylesheet lifecycle hooks: request init when
the render is created, head render, styles queued, then one style loader tag
hook per emitted style.

Examples:
    >>> from asynccss.services.style_service import StyleRegistry
    >>> from asynccss.plugins.framework import PluginManager
    >>> registry = StyleRegistry()
    >>> registry.enqueue("theme", "http://x/theme.css")
    >>> PluginManager.reset()
    >>> page = PageRender(registry, manager=PluginManager())
    >>> page.render_head()
    "<link rel='stylesheet' id='theme-css' href='http://x/theme.css' type='text/css' media='all' />\\n"
    >>> PluginManager.reset()
"""

# Standard
from collections.abc import Iterable
import logging
from typing import Optional
import uuid

# First-Party
from asynccss.plugins.framework import (
    get_plugin_manager,
    GlobalContext,
    HeadRenderPayload,
    PluginContextTable,
    PluginManager,
    PluginPayload,
    RequestInitPayload,
    StyleHookType,
    StylesQueuedPayload,
    StyleTagPayload,
)
from asynccss.services.style_service import StyleRegistry

logger = logging.getLogger(__name__)


class PageRender:
    """Request-scoped render of the stylesheet part of a page.

    Attributes:
        registry: the request's style registry.
        global_context: the context shared by all plugins for this request.
    """

    def __init__(
        self,
        registry: StyleRegistry,
        manager: Optional[PluginManager] = None,
        request_id: Optional[str] = None,
        is_admin: bool = False,
    ):
        """Create the render and fire the request init hook.

        Args:
            registry: the request's style registry.
            manager: the plugin manager; defaults to the process-wide one.
            request_id: optional request identifier.
            is_admin: whether the administrative surface is rendered.
        """
        self.registry = registry
        self._manager = manager if manager is not None else get_plugin_manager()
        self.global_context = GlobalContext(request_id=request_id or uuid.uuid4().hex, is_admin=is_admin)
        self._local_contexts: Optional[PluginContextTable] = None
        self._head_rendered = False
        self._styles_observed = False
        self._done: set[str] = set()
        self._invoke(StyleHookType.REQUEST_INIT, RequestInitPayload(request_id=self.global_context.request_id, is_admin=is_admin))

    def __enter__(self) -> "PageRender":
        """Enter the render scope.

        Returns:
            The render itself.
        """
        return self

    def __exit__(self, *exc_info) -> None:
        """Leave the render scope and release the request-local plugin state."""
        self.close()

    def _invoke(self, hook_type: StyleHookType, payload: PluginPayload) -> PluginPayload:
        """Run the plugins of one hook and return the resulting payload.

        Args:
            hook_type: the hook point.
            payload: the payload handed to the plugins.

        Returns:
            The modified payload, or the original one when nothing changed.
        """
        if self._manager is None or not self._manager.has_hooks_for(hook_type):
            return payload
        result, contexts = self._manager.invoke_hook(hook_type, payload, self.global_context, self._local_contexts)
        if contexts:
            self._local_contexts = contexts
        return result.modified_payload if result.modified_payload is not None else payload

    def head_fragments(self, fragments: Iterable[str] = ()) -> list[str]:
        """Run the head render hook.

        The head render hook fires once per request; later calls return the
        host fragments unchanged.

        Args:
            fragments: markup the host already emits into the head.

        Returns:
            The head fragments after plugins appended theirs.
        """
        if self._head_rendered:
            return list(fragments)
        self._head_rendered = True
        head = self._invoke(StyleHookType.HEAD_RENDER, HeadRenderPayload(fragments=list(fragments)))
        return list(head.fragments)

    def print_styles(self) -> str:
        """Emit the tags of every queued style not emitted yet.

        The styles queued hook fires once, before the first tag of the request.

        Returns:
            The concatenated style markup.
        """
        queue = self.registry.queue
        if not self._styles_observed:
            self._styles_observed = True
            self._invoke(StyleHookType.STYLES_QUEUED, StylesQueuedPayload(handles=queue))
        output = []
        for handle in queue:
            if handle in self._done:
                continue
            self._done.add(handle)
            output.append(self.style_tag(handle))
        return "".join(output)

    def style_tag(self, handle: str) -> str:
        """Generate the markup of one registered style through the style loader tag hook.

        Args:
            handle: the style handle.

        Returns:
            The markup to emit.
        """
        style = self.registry.get(handle)
        payload = StyleTagPayload(handle=handle, html=self.registry.tag_for(handle), href=style.href, media=style.media)
        return self._invoke(StyleHookType.STYLE_LOADER_TAG, payload).html

    def render_head(self, fragments: Iterable[str] = ()) -> str:
        """Render the head: plugin fragments first, then the queued styles.

        Args:
            fragments: markup the host already emits into the head.

        Returns:
            The head markup.
        """
        return "".join(self.head_fragments(fragments)) + self.print_styles()

    def close(self) -> None:
        """Release the request-local plugin contexts."""
        if self._local_contexts:
            for context in self._local_contexts.values():
                context.cleanup()
            self._local_contexts = None
