"""Typed accessors over a native store."""

import logging
from typing import Any, TypeVar

from . import codec
from .codec import DecodeResult, Kind
from .store import NativeKind, NativeStore

__all__ = ["StoreHandle"]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


class StoreHandle:
    """Typed view of a native store.

    Scalar reads propagate failures: reading a key with a different kind than
    it was written with raises `KindMismatchError`, and text encoded values
    that cannot be parsed raise `ValueError`. Structured reads (objects,
    arrays and maps) never raise; a value that cannot be read is logged and
    returned as None, the same as a value that was never written.
    """

    def __init__(self, store: NativeStore, name: str, encrypted: bool) -> None:
        """Initialize StoreHandle."""
        self._store = store
        self._name = name
        self._encrypted = encrypted

    @property
    def name(self) -> str:
        """Return the name of the store."""
        return self._name

    @property
    def encrypted(self) -> bool:
        """Return True if the store is encrypted at rest."""
        return self._encrypted

    def __repr__(self) -> str:
        return f"StoreHandle(name={self._name!r}, encrypted={self._encrypted})"

    def put(self, key: str, kind: Kind, value: Any) -> None:
        """Store a scalar value of the specified kind."""
        native_kind, native_value = codec.encode_scalar(kind, value)
        _LOGGER.debug("Putting %s %s in store %s", kind, key, self._name)
        self._store.edit().put(key, native_kind, native_value).apply()

    def get(self, key: str, kind: Kind, default: Any) -> Any:
        """Return a scalar value of the specified kind, or the default if not set."""
        native_kind = codec.SCALAR_CODECS[kind].native
        if (native_value := self._store.get(key, native_kind, None)) is None:
            return default
        return codec.decode_scalar(kind, native_value)

    def put_boolean(self, key: str, value: bool) -> None:
        self.put(key, Kind.BOOLEAN, value)

    def get_boolean(self, key: str, default: bool) -> bool:
        return self.get(key, Kind.BOOLEAN, default)

    def put_int(self, key: str, value: int) -> None:
        self.put(key, Kind.INT, value)

    def get_int(self, key: str, default: int) -> int:
        return self.get(key, Kind.INT, default)

    def put_string(self, key: str, value: str) -> None:
        self.put(key, Kind.STRING, value)

    def get_string(self, key: str, default: str | None) -> str | None:
        return self.get(key, Kind.STRING, default)

    def put_float(self, key: str, value: float) -> None:
        """Store a single precision float, rounding the value if needed."""
        self.put(key, Kind.FLOAT, value)

    def get_float(self, key: str, default: float) -> float:
        return self.get(key, Kind.FLOAT, default)

    def put_long(self, key: str, value: int) -> None:
        self.put(key, Kind.LONG, value)

    def get_long(self, key: str, default: int) -> int:
        return self.get(key, Kind.LONG, default)

    def put_double(self, key: str, value: float) -> None:
        self.put(key, Kind.DOUBLE, value)

    def get_double(self, key: str, default: float) -> float:
        return self.get(key, Kind.DOUBLE, default)

    def put_short(self, key: str, value: int) -> None:
        self.put(key, Kind.SHORT, value)

    def get_short(self, key: str, default: int) -> int:
        return self.get(key, Kind.SHORT, default)

    def put_byte(self, key: str, value: int) -> None:
        self.put(key, Kind.BYTE, value)

    def get_byte(self, key: str, default: int) -> int:
        return self.get(key, Kind.BYTE, default)

    def put_char(self, key: str, value: str) -> None:
        """Store a single character as its code point."""
        self.put(key, Kind.CHAR, value)

    def get_char(self, key: str, default: str) -> str:
        return self.get(key, Kind.CHAR, default)

    def put_object(self, key: str, value: Any, shape: Any = None) -> None:
        """Store an object as JSON text.

        The shape is inferred from the value when not specified.
        """
        text = codec.encode_structured(value, shape)
        self._store.edit().put(key, NativeKind.STRING, text).apply()

    def put_array(self, key: str, values: list[T], element_shape: Any = None) -> None:
        """Store a list as JSON text."""
        shape = list[element_shape] if element_shape is not None else None  # type: ignore[valid-type]
        self.put_object(key, values, shape)

    def put_map(
        self,
        key: str,
        mapping: dict[K, V],
        key_shape: Any = None,
        value_shape: Any = None,
    ) -> None:
        """Store a map as JSON text."""
        shape = None
        if key_shape is not None or value_shape is not None:
            shape = dict[key_shape or Any, value_shape or Any]  # type: ignore[misc]
        self.put_object(key, mapping, shape)

    def read_object(self, key: str, shape: type[T] | Any) -> DecodeResult[T]:
        """Read and decode structured text, capturing any failure in the result."""
        try:
            text = self._store.get(key, NativeKind.STRING, None)
        except Exception as err:  # pylint: disable=broad-except
            return DecodeResult(error=err)
        if text is None:
            return DecodeResult()
        return codec.decode_structured(text, shape)

    def _unwrap(self, key: str, result: DecodeResult[T]) -> T | None:
        if result.error is not None:
            _LOGGER.error(
                "Unable to read %s from store %s: %s",
                key,
                self._name,
                result.error,
                exc_info=result.error,
            )
            return None
        return result.value

    def get_object(self, key: str, shape: type[T] | Any) -> T | None:
        """Return the object stored under the key, or None if missing or unreadable."""
        return self._unwrap(key, self.read_object(key, shape))

    def get_array(self, key: str, element_shape: type[T] | Any) -> list[T] | None:
        """Return the list stored under the key, or None if missing or unreadable."""
        return self._unwrap(key, self.read_object(key, list[element_shape]))  # type: ignore[valid-type]

    def get_map(
        self, key: str, key_shape: type[K] | Any, value_shape: type[V] | Any
    ) -> dict[K, V] | None:
        """Return the map stored under the key, or None if missing or unreadable."""
        return self._unwrap(
            key, self.read_object(key, dict[key_shape, value_shape])  # type: ignore[valid-type]
        )

    def contains(self, key: str) -> bool:
        """Return True if the key has a value."""
        return self._store.contains(key)

    def remove(self, key: str) -> None:
        """Remove the key and its value."""
        _LOGGER.debug("Removing %s from store %s", key, self._name)
        self._store.edit().remove(key).apply()

    def flush(self) -> None:
        """Wait for queued disk writes to finish."""
        self._store.flush()
