"""Debug timing of store operations."""

import contextvars
from contextlib import contextmanager
import logging
from time import perf_counter
from typing import Generator


_LOGGER = logging.getLogger(__name__)

# No public API
__all__: list[str] = []


_operations: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "operations", default=()
)


@contextmanager
def trace_context(operation: str) -> Generator[None, None, None]:
    """Log when a store operation starts and how long it took.

    Nested operations are logged with the path of the enclosing operations.
    """
    operations = _operations.get() + (operation,)
    token = _operations.set(operations)
    path = " / ".join(operations)
    start = perf_counter()
    _LOGGER.debug("Starting %s", path)
    try:
        yield
    finally:
        _operations.reset(token)
        _LOGGER.debug("Finished %s in %.1fms", path, (perf_counter() - start) * 1000)
