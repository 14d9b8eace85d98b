# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/hooks/policies.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Hook payload policy types and utilities.

The framework provides the types and utilities for controlled payload
modification; the host defines the actual concrete policies.

Examples:
    >>> from asynccss.plugins.framework.hooks.policies import HookPayloadPolicy
    >>> policy = HookPayloadPolicy(writable_fields=frozenset({"html"}))
    >>> sorted(policy.writable_fields)
    ['html']
"""

# Standard
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Optional

# Third-Party
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class DefaultHookPolicy(str, Enum):
    """Controls behavior for hooks without an explicit policy.

    Attributes:
        ALLOW: Accept all modifications.
        DENY: Reject all modifications (strict mode).

    Examples:
        >>> DefaultHookPolicy('allow')
        <DefaultHookPolicy.ALLOW: 'allow'>
        >>> DefaultHookPolicy.DENY.value
        'deny'
    """

    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class HookPayloadPolicy:
    """Defines which payload fields plugins are allowed to modify.

    Attributes:
        writable_fields: The set of field names that plugins may change.
    """

    writable_fields: frozenset[str]


_SENTINEL = object()


def apply_policy(
    original: BaseModel,
    modified: BaseModel,
    policy: HookPayloadPolicy,
) -> Optional[BaseModel]:
    """Apply policy-based controlled merge.

    Only fields listed in ``policy.writable_fields`` are accepted from
    *modified*; all other changes are discarded with a warning.

    Args:
        original: The original (or current) payload.
        modified: The payload returned by the plugin.
        policy: The policy defining which fields are writable.

    Returns:
        An updated payload with only the allowed changes applied, or
        ``None`` if the plugin made no effective (allowed) changes.

    Examples:
        >>> from pydantic import BaseModel
        >>> class P(BaseModel):
        ...     handle: str
        ...     html: str
        >>> orig = P(handle="theme", html="<link>")
        >>> mod = P(handle="other", html="<script>")
        >>> result = apply_policy(orig, mod, HookPayloadPolicy(writable_fields=frozenset({"html"})))
        >>> (result.handle, result.html)
        ('theme', '<script>')
        >>> apply_policy(orig, orig, HookPayloadPolicy(writable_fields=frozenset())) is None
        True
    """
    updates: dict[str, Any] = {}
    rejected: list[str] = []
    for field in type(modified).model_fields:
        old_val = getattr(original, field, _SENTINEL)
        new_val = getattr(modified, field, _SENTINEL)
        if new_val is _SENTINEL or new_val == old_val:
            continue
        if field in policy.writable_fields:
            updates[field] = new_val
        else:
            rejected.append(field)
    if rejected:
        logger.warning("Policy rejected modifications to non-writable fields: %s", rejected)
    return original.model_copy(update=updates) if updates else None
