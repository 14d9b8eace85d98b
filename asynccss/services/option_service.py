# -*- coding: utf-8 -*-
"""Location: ./asynccss/services/option_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Option Service.
Access to the persisted configuration of the async stylesheet filter: the
whitelist of handles to load asynchronously and the handle queue observed on
the last front-end render.

Stores are plain key-value back ends exposing ``get(key, default)`` and
``set(key, value)``; writes are last-write-wins and nothing is locked, so two
concurrent renders may race on the observed handles.

Examples:
    >>> service = OptionService(MemoryOptionStore())
    >>> options = service.load_options()
    >>> (options.whitelist, options.observed_handles)
    (frozenset(), ())
    >>> service.save_whitelist(["theme", "fonts"])
    >>> sorted(service.load_options().whitelist)
    ['fonts', 'theme']
"""

# Standard
from collections.abc import Iterable, Mapping
import logging
from typing import Any, Optional, Protocol, runtime_checkable

# Third-Party
import orjson
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session, sessionmaker

# First-Party
from asynccss.config import settings
from asynccss.db import get_session_factory, Option

logger = logging.getLogger(__name__)


@runtime_checkable
class OptionStore(Protocol):
    """Structural contract for a persisted key-value option store."""

    def get(self, key: str, default: Any = None) -> Any:
        """Read an option.

        Args:
            key: the option name.
            default: returned when the option is unset.
        """

    def set(self, key: str, value: Any) -> None:
        """Write an option, replacing any previous value.

        Args:
            key: the option name.
            value: a JSON-serializable value.
        """


class MemoryOptionStore:
    """Process-local option store.

    Examples:
        >>> store = MemoryOptionStore({"a": 1})
        >>> store.get("a"), store.get("b", [])
        (1, [])
        >>> store.set("b", ["x"])
        >>> store.get("b")
        ['x']
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        """Initialize the store.

        Args:
            initial: optional starting values.
        """
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        """Read an option.

        Args:
            key: the option name.
            default: returned when the option is unset.

        Returns:
            The stored value or the default.
        """
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Write an option.

        Args:
            key: the option name.
            value: the value to store.
        """
        self._values[key] = value


class SqlOptionStore:
    """Option store backed by the ``options`` table.

    Values are stored as orjson-encoded text.
    """

    def __init__(self, session_factory: Optional[sessionmaker[Session]] = None):
        """Initialize the store.

        Args:
            session_factory: the session factory; defaults to the configured database.
        """
        self._session_factory = session_factory or get_session_factory()

    def get(self, key: str, default: Any = None) -> Any:
        """Read an option.

        Args:
            key: the option name.
            default: returned when the option is unset or unreadable.

        Returns:
            The decoded value or the default.
        """
        with self._session_factory() as db:
            row = db.get(Option, key)
            if row is None or row.value is None:
                return default
            try:
                return orjson.loads(row.value)
            except orjson.JSONDecodeError:
                logger.warning("Option %s holds invalid JSON; using default", key)
                return default

    def set(self, key: str, value: Any) -> None:
        """Write an option, replacing any previous value.

        Args:
            key: the option name.
            value: a JSON-serializable value.
        """
        encoded = orjson.dumps(value).decode("utf-8")
        with self._session_factory() as db:
            row = db.get(Option, key)
            if row is None:
                db.add(Option(name=key, value=encoded))
            else:
                row.value = encoded
            db.commit()


class AsyncCssOptions(BaseModel):
    """Snapshot of the persisted options taken when a request starts.

    Attributes:
        whitelist: the handles whose tags are rewritten to async form.
        observed_handles: the queue observed on the last front-end render.

    Examples:
        >>> opts = AsyncCssOptions(whitelist=frozenset({"theme"}), observed_handles=("theme", "fonts"))
        >>> opts.is_whitelisted("theme"), opts.is_whitelisted("fonts")
        (True, False)
    """

    model_config = ConfigDict(frozen=True)

    whitelist: frozenset[str] = frozenset()
    observed_handles: tuple[str, ...] = ()

    def is_whitelisted(self, handle: str) -> bool:
        """Check whitelist membership.

        Args:
            handle: the style handle.

        Returns:
            True if the handle must be loaded asynchronously.
        """
        return handle in self.whitelist


def _coerce_whitelist(value: Any) -> frozenset[str]:
    """Normalize a stored whitelist.

    The legacy form is a mapping of checked handles (``{"theme": "1"}``);
    its keys are the whitelisted handles.

    Args:
        value: the stored value.

    Returns:
        The whitelist as a frozenset.

    Examples:
        >>> sorted(_coerce_whitelist({"theme": "1", "fonts": "1"}))
        ['fonts', 'theme']
        >>> sorted(_coerce_whitelist(["a", "b", "a"]))
        ['a', 'b']
        >>> _coerce_whitelist(None)
        frozenset()
    """
    if isinstance(value, Mapping):
        return frozenset(str(handle) for handle in value.keys())
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        return frozenset(str(handle) for handle in value)
    return frozenset()


def _coerce_handles(value: Any) -> tuple[str, ...]:
    """Normalize a stored handle queue, keeping order and duplicates.

    Args:
        value: the stored value.

    Returns:
        The handles as a tuple.

    Examples:
        >>> _coerce_handles(["a", "b", "b"])
        ('a', 'b', 'b')
        >>> _coerce_handles("oops")
        ()
    """
    if isinstance(value, (list, tuple)):
        return tuple(str(handle) for handle in value)
    return ()


class OptionService:
    """Service reading and writing the async stylesheet options."""

    def __init__(self, store: OptionStore, whitelist_key: Optional[str] = None, observed_key: Optional[str] = None):
        """Initialize the service.

        Args:
            store: the backing option store.
            whitelist_key: option key of the whitelist; defaults to settings.
            observed_key: option key of the observed handles; defaults to settings.
        """
        self.store = store
        self.whitelist_key = whitelist_key or settings.whitelist_option
        self.observed_key = observed_key or settings.observed_handles_option

    def get_whitelist(self) -> frozenset[str]:
        """Load the whitelist, empty when unset.

        Returns:
            The whitelisted handles.
        """
        return _coerce_whitelist(self.store.get(self.whitelist_key, []))

    def get_observed_handles(self) -> tuple[str, ...]:
        """Load the observed handles, empty when unset.

        Returns:
            The observed handles in queue order.
        """
        return _coerce_handles(self.store.get(self.observed_key, []))

    def load_options(self) -> AsyncCssOptions:
        """Load both options for a request.

        Returns:
            The request snapshot.
        """
        return AsyncCssOptions(whitelist=self.get_whitelist(), observed_handles=self.get_observed_handles())

    def save_whitelist(self, handles: Iterable[str]) -> None:
        """Replace the whitelist wholesale.

        Args:
            handles: the handles to whitelist.
        """
        whitelist = sorted(set(handles))
        self.store.set(self.whitelist_key, whitelist)
        logger.info("Saved async stylesheet whitelist: %s", whitelist)

    def save_observed_handles(self, handles: Iterable[str]) -> None:
        """Replace the observed handles verbatim.

        Args:
            handles: the queue observed during a front-end render.
        """
        observed = list(handles)
        self.store.set(self.observed_key, observed)
        logger.debug("Saved %d observed stylesheet handles", len(observed))


_option_service: Optional[OptionService] = None


def get_option_service() -> OptionService:
    """Get the process-wide option service backed by the configured database.

    Returns:
        The shared OptionService.
    """
    global _option_service  # pylint: disable=global-statement
    if _option_service is None:
        _option_service = OptionService(SqlOptionStore())
    return _option_service


def set_option_service(service: Optional[OptionService]) -> None:
    """Replace the process-wide option service.

    Args:
        service: the service to use, or None to rebuild from settings on next access.
    """
    global _option_service  # pylint: disable=global-statement
    _option_service = service
