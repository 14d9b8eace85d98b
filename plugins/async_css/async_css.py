# -*- coding: utf-8 -*-
"""Location: ./plugins/async_css/async_css.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Async CSS Plugin.
Loads the selected stylesheets asynchronously: whitelisted ``<link>`` tags are
replaced by a ``loadCSS`` call, the loader script is inlined into the page
head, and the handles queued on every front-end render are remembered so the
options page can offer them.
"""

# Standard
import logging
from pathlib import Path
import re
from typing import Optional

# Third-Party
from pydantic import BaseModel

# First-Party
from asynccss.plugins.framework import (
    HeadRenderPayload,
    HeadRenderResult,
    Plugin,
    PluginConfig,
    PluginContext,
    RequestInitPayload,
    RequestInitResult,
    StylesQueuedPayload,
    StylesQueuedResult,
    StyleTagPayload,
    StyleTagResult,
)
from asynccss.services.option_service import AsyncCssOptions, get_option_service

logger = logging.getLogger(__name__)

# Single-quoted attribute only; stops at the closing quote
_MEDIA_RE = re.compile(r"media='([^']*)'")
DEFAULT_MEDIA = "all"
DEFAULT_LOADER_PATH = Path(__file__).parent / "assets" / "scripts" / "loadCSS.js"
OPTIONS_STATE_KEY = "async_css_options"


def extract_media(html: str) -> str:
    """Extract the media value of a generated link tag.

    Args:
        html: the generated markup.

    Returns:
        The media value, or ``"all"`` when no single-quoted media attribute is found.

    Examples:
        >>> extract_media("<link rel='stylesheet' href='a.css' media='print' />")
        'print'
        >>> extract_media('<link rel="stylesheet" href="a.css" media="print" />')
        'all'
        >>> extract_media("")
        'all'
    """
    match = _MEDIA_RE.search(html)
    return match.group(1) if match else DEFAULT_MEDIA


def rewrite_style_tag(html: str, handle: str, href: str, whitelist: frozenset[str]) -> str:
    """Rewrite a stylesheet tag to its asynchronous form when the handle is whitelisted.

    Args:
        html: the markup the host generated for the style.
        handle: the style handle.
        href: the stylesheet URL.
        whitelist: handles to load asynchronously.

    Returns:
        ``html`` unchanged for other handles, otherwise a ``loadCSS`` script block.

    Examples:
        >>> tag = "<link rel='stylesheet' id='a-css' href='http://x/a.css' type='text/css' media='print' />\\n"
        >>> rewrite_style_tag(tag, "a", "http://x/a.css", frozenset({"a"}))
        '<script>loadCSS("http://x/a.css",0,"print");</script>\\n'
        >>> rewrite_style_tag(tag, "b", "http://x/a.css", frozenset({"a"})) == tag
        True
    """
    if handle not in whitelist:
        return html
    media = extract_media(html)
    return f'<script>loadCSS("{href}",0,"{media}");</script>\n'


class AsyncCssConfig(BaseModel):
    """Configuration for the async CSS plugin.

    Attributes:
        loader_path: path of the loader script; defaults to the bundled ``loadCSS.js``.
    """

    loader_path: Optional[str] = None


class AsyncCssPlugin(Plugin):
    """Load whitelisted stylesheets asynchronously."""

    def __init__(self, config: PluginConfig) -> None:
        """Initialize the plugin.

        Args:
            config: Plugin configuration.
        """
        super().__init__(config)
        self._cfg = AsyncCssConfig.model_validate(self._config.config or {})
        self._loader_path = Path(self._cfg.loader_path) if self._cfg.loader_path else DEFAULT_LOADER_PATH

    def _options(self, context: PluginContext) -> AsyncCssOptions:
        """Get the options snapshot of the current request.

        Args:
            context: the plugin's request-local context.

        Returns:
            The snapshot taken at request init, loading it now if init was skipped.
        """
        options = context.get_state(OPTIONS_STATE_KEY)
        if options is None:
            options = get_option_service().load_options()
            context.set_state(OPTIONS_STATE_KEY, options)
        return options

    def read_loader(self) -> str:
        """Read the loader script.

        Returns:
            The raw script, or an empty string when it cannot be read.
        """
        try:
            return self._loader_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Unable to read loader script %s: %s", self._loader_path, e)
            return ""

    def request_init(self, payload: RequestInitPayload, context: PluginContext) -> RequestInitResult:
        """Load the whitelist and observed handles for the request.

        Args:
            payload: the request init payload.
            context: the plugin's request-local context.

        Returns:
            An empty result.
        """
        options = get_option_service().load_options()
        context.set_state(OPTIONS_STATE_KEY, options)
        logger.debug("Request %s: %d whitelisted, %d observed handles", payload.request_id, len(options.whitelist), len(options.observed_handles))
        return RequestInitResult()

    def head_render(self, payload: HeadRenderPayload, context: PluginContext) -> HeadRenderResult:
        """Inline the loader script into the document head.

        Args:
            payload: the head fragments emitted so far.
            context: the plugin's request-local context.

        Returns:
            The payload with the loader script block appended.
        """
        if context.global_context.is_admin:
            return HeadRenderResult()
        fragments = [*payload.fragments, f"<script>{self.read_loader()}</script>"]
        return HeadRenderResult(modified_payload=payload.model_copy(update={"fragments": fragments}))

    def styles_queued(self, payload: StylesQueuedPayload, context: PluginContext) -> StylesQueuedResult:
        """Remember the handles queued for this front-end render.

        Args:
            payload: the full style queue.
            context: the plugin's request-local context.

        Returns:
            An empty result.
        """
        if not context.global_context.is_admin:
            get_option_service().save_observed_handles(payload.handles)
        return StylesQueuedResult()

    def style_loader_tag(self, payload: StyleTagPayload, context: PluginContext) -> StyleTagResult:
        """Replace the tag of a whitelisted style with a loadCSS call.

        Args:
            payload: the style tag about to be emitted.
            context: the plugin's request-local context.

        Returns:
            The rewritten payload for whitelisted handles, otherwise an empty result.
        """
        if context.global_context.is_admin:
            return StyleTagResult()
        html = rewrite_style_tag(payload.html, payload.handle, payload.href, self._options(context).whitelist)
        if html == payload.html:
            return StyleTagResult()
        logger.debug("Loading stylesheet %s asynchronously", payload.handle)
        return StyleTagResult(modified_payload=payload.model_copy(update={"html": html}), metadata={"async_handles": [payload.handle]})
