# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/hooks/registry.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Hook type registry.
Maps each hook point name to the payload model exchanged on it.
"""

# Standard
from typing import Optional

# Third-Party
from pydantic import BaseModel


class HookRegistry:
    """Registry of hook types and their payload models.

    Examples:
        >>> from pydantic import BaseModel
        >>> class Payload(BaseModel):
        ...     handle: str
        >>> registry = HookRegistry()
        >>> registry.register_hook("custom", Payload)
        >>> registry.is_registered("custom")
        True
        >>> registry.get_payload_type("custom") is Payload
        True
        >>> registry.get_payload_type("unknown") is None
        True
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._payloads: dict[str, type[BaseModel]] = {}

    def register_hook(self, hook_type: str, payload_type: type[BaseModel]) -> None:
        """Register the payload model for a hook type.

        Args:
            hook_type: the hook point name.
            payload_type: the payload model handed to plugins.
        """
        self._payloads[hook_type] = payload_type

    def is_registered(self, hook_type: str) -> bool:
        """Check whether a hook type is known.

        Args:
            hook_type: the hook point name.

        Returns:
            True if the hook type was registered.
        """
        return hook_type in self._payloads

    def get_payload_type(self, hook_type: str) -> Optional[type[BaseModel]]:
        """Get the payload model for a hook type.

        Args:
            hook_type: the hook point name.

        Returns:
            The payload model or None.
        """
        return self._payloads.get(hook_type)


_global_registry: Optional[HookRegistry] = None


def get_hook_registry() -> HookRegistry:
    """Get the process-wide hook registry.

    Returns:
        The shared HookRegistry instance.
    """
    global _global_registry  # pylint: disable=global-statement
    if _global_registry is None:
        _global_registry = HookRegistry()
    return _global_registry
