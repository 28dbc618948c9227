"""Native store interface wrapped by the typed store handle."""

from abc import ABC, abstractmethod
from typing import Any, Self

from .entry import NativeKind


class Editor(ABC):
    """A batch of changes to a native store.

    Changes are only visible once `apply` or `commit` is called.
    """

    @abstractmethod
    def put(self, key: str, kind: NativeKind, value: Any) -> Self:
        """Set the value of a key."""

    @abstractmethod
    def remove(self, key: str) -> Self:
        """Remove a key."""

    @abstractmethod
    def apply(self) -> None:
        """Update the in memory view now and write to disk in the background."""

    @abstractmethod
    def commit(self) -> bool:
        """Update the in memory view and write to disk before returning.

        Returns:
            bool: True if the changes were written to disk.
        """

    def put_boolean(self, key: str, value: bool) -> Self:
        return self.put(key, NativeKind.BOOLEAN, value)

    def put_int(self, key: str, value: int) -> Self:
        return self.put(key, NativeKind.INT, value)

    def put_long(self, key: str, value: int) -> Self:
        return self.put(key, NativeKind.LONG, value)

    def put_float(self, key: str, value: float) -> Self:
        return self.put(key, NativeKind.FLOAT, value)

    def put_string(self, key: str, value: str) -> Self:
        return self.put(key, NativeKind.STRING, value)


class NativeStore(ABC):
    """Abstract base class for a durable map of string keys to native values."""

    @abstractmethod
    def get(self, key: str, kind: NativeKind, default: Any) -> Any:
        """Return the value of a key, or the default when it is not set.

        Raises:
            KindMismatchError: If the key holds a value of a different kind.
        """

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Return True if the key has a value."""

    @abstractmethod
    def edit(self) -> Editor:
        """Return an editor used to change values."""

    @abstractmethod
    def flush(self) -> None:
        """Wait for any background disk writes to finish."""

    def get_boolean(self, key: str, default: bool) -> bool:
        return self.get(key, NativeKind.BOOLEAN, default)

    def get_int(self, key: str, default: int) -> int:
        return self.get(key, NativeKind.INT, default)

    def get_long(self, key: str, default: int) -> int:
        return self.get(key, NativeKind.LONG, default)

    def get_float(self, key: str, default: float) -> float:
        return self.get(key, NativeKind.FLOAT, default)

    def get_string(self, key: str, default: str | None) -> str | None:
        return self.get(key, NativeKind.STRING, default)
