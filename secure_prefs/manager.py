"""Lifecycle of the process-wide store.

The first call to `init` opens the store and every later call returns the same
handle, whatever arguments it is given:

    handle = manager.init(encrypted=True)
    handle.put_int("launches", handle.get_int("launches", 0) + 1)
"""

import logging
import threading
from collections.abc import Callable
from enum import StrEnum

from .config import StoreConfig, default_name
from .handle import StoreHandle
from .store import NativeStore, open_native_store

__all__ = [
    "LifecycleState",
    "StoreManager",
    "init",
    "get_instance",
]

_LOGGER = logging.getLogger(__name__)

StoreOpener = Callable[[str, bool, StoreConfig], NativeStore]


class LifecycleState(StrEnum):
    """State of the store slot owned by a StoreManager."""

    UNINITIALIZED = "Uninitialized"
    INITIALIZING = "Initializing"
    READY = "Ready"


class StoreManager:
    """Owns a single StoreHandle that is created on first request."""

    def __init__(
        self,
        config: StoreConfig | None = None,
        opener: StoreOpener = open_native_store,
    ) -> None:
        """Initialize StoreManager."""
        self._config = config
        self._opener = opener
        self._lock = threading.Lock()
        self._handle: StoreHandle | None = None
        self._state = LifecycleState.UNINITIALIZED

    @property
    def state(self) -> LifecycleState:
        """Return the current lifecycle state."""
        return self._state

    def initialize(self, name: str | None = None, encrypted: bool = False) -> StoreHandle:
        """Return the store handle, opening the store on the first call.

        The name and mode of the first successful call are permanent; arguments
        of later calls are ignored.

        Raises:
            StoreInitError: If the store cannot be opened. Nothing is retried.
        """
        if (handle := self._handle) is not None:
            return handle
        with self._lock:
            if self._handle is None:
                store_name = name or default_name(encrypted)
                _LOGGER.debug(
                    "Initializing store %s (encrypted=%s)", store_name, encrypted
                )
                self._state = LifecycleState.INITIALIZING
                try:
                    store = self._opener(
                        store_name, encrypted, self._config or StoreConfig()
                    )
                except Exception:
                    self._state = LifecycleState.UNINITIALIZED
                    raise
                self._handle = StoreHandle(store, store_name, encrypted)
                self._state = LifecycleState.READY
            return self._handle

    def current(self) -> StoreHandle | None:
        """Return the store handle, or None if the store was never initialized."""
        return self._handle


_manager = StoreManager()


def init(name: str | None = None, encrypted: bool = False) -> StoreHandle:
    """Return the process-wide store handle, opening the store on first use."""
    return _manager.initialize(name, encrypted)


def get_instance() -> StoreHandle | None:
    """Return the process-wide store handle, or None before `init` succeeds."""
    return _manager.current()
