# -*- coding: utf-8 -*-
"""Location: ./asynccss/services/style_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Style Service.
The host's stylesheet registry for one request: styles are registered under a
handle, queued for the page, and emitted as ``<link>`` tags.

Examples:
    >>> registry = StyleRegistry()
    >>> registry.register("theme", "http://x/theme.css", media="print")
    >>> registry.enqueue("theme")
    >>> registry.queue
    ['theme']
    >>> registry.tag_for("theme")
    "<link rel='stylesheet' id='theme-css' href='http://x/theme.css' type='text/css' media='print' />\\n"
"""

# Standard
from dataclasses import dataclass
import html
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class StyleNotRegisteredError(KeyError):
    """Raised when a style handle is queued or emitted without being registered."""


@dataclass(frozen=True)
class RegisteredStyle:
    """A registered stylesheet.

    Attributes:
        handle: the unique handle of the style.
        href: the stylesheet URL.
        media: the media value of the link tag.
    """

    handle: str
    href: str
    media: str = "all"


class StyleRegistry:
    """Per-request registry of stylesheets and the queue of styles for the page."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._registered: dict[str, RegisteredStyle] = {}
        self._queue: list[str] = []

    def register(self, handle: str, href: str, media: str = "all") -> None:
        """Register a stylesheet under a handle, replacing an earlier registration.

        Args:
            handle: the style handle.
            href: the stylesheet URL.
            media: the media value of the link tag.
        """
        self._registered[handle] = RegisteredStyle(handle=handle, href=href, media=media)

    def enqueue(self, handle: str, href: Optional[str] = None, media: str = "all") -> None:
        """Queue a style for the page, registering it first when an href is given.

        Queuing the same handle twice keeps both entries.

        Args:
            handle: the style handle.
            href: optional URL to register the style with.
            media: media value used when registering.

        Raises:
            StyleNotRegisteredError: if the handle is unknown and no href is given.
        """
        if href is not None:
            self.register(handle, href, media)
        if handle not in self._registered:
            raise StyleNotRegisteredError(handle)
        self._queue.append(handle)

    def get(self, handle: str) -> RegisteredStyle:
        """Get a registered style.

        Args:
            handle: the style handle.

        Returns:
            The registered style.

        Raises:
            StyleNotRegisteredError: if the handle is unknown.
        """
        try:
            return self._registered[handle]
        except KeyError:
            raise StyleNotRegisteredError(handle) from None

    @property
    def queue(self) -> list[str]:
        """The queued handles in order.

        Returns:
            A copy of the queue.
        """
        return list(self._queue)

    def tag_for(self, handle: str) -> str:
        """Generate the standard link tag for a registered style.

        Args:
            handle: the style handle.

        Returns:
            The ``<link>`` markup terminated by a newline.
        """
        style = self.get(handle)
        return (
            f"<link rel='stylesheet' id='{html.escape(style.handle, quote=True)}-css' "
            f"href='{html.escape(style.href, quote=True)}' type='text/css' media='{html.escape(style.media, quote=True)}' />\n"
        )
