"""Conversion between typed values and the values a native store can hold.

Scalars map onto the native kinds in `NativeKind`. Kinds the native store
cannot hold exactly are encoded:

| kind   | native  | encoding                                 |
|--------|---------|------------------------------------------|
| double | string  | shortest decimal text that round trips   |
| short  | string  | decimal text                             |
| byte   | string  | decimal text                             |
| char   | int     | code point                               |
| float  | float   | rounded to IEEE-754 single precision     |

Objects, lists and maps are stored as JSON text using mashumaro. Failing to
decode a scalar raises, while failing to decode structured text is captured in
a `DecodeResult`.
"""

import dataclasses
import logging
import re
import struct
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from mashumaro.codecs.basic import encode
from mashumaro.codecs.json import json_decode, json_encode

from .store.entry import NativeKind

__all__ = [
    "Kind",
    "ScalarCodec",
    "SCALAR_CODECS",
    "DecodeResult",
    "encode_scalar",
    "decode_scalar",
    "encode_structured",
    "decode_structured",
    "to_plain",
]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_MAX_CODE_POINT = 0x10FFFF


class Kind(StrEnum):
    """Scalar kinds supported by the typed accessors."""

    BOOLEAN = "boolean"
    INT = "int"
    STRING = "string"
    FLOAT = "float"
    LONG = "long"
    DOUBLE = "double"
    SHORT = "short"
    BYTE = "byte"
    CHAR = "char"


def _type_name(value: Any) -> str:
    return type(value).__name__


def _check_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"Expected a bool but got {_type_name(value)}")
    return value


def _check_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected a str but got {_type_name(value)}")
    return value


def _check_integer(bits: int) -> Callable[[Any], int]:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def check(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected an int but got {_type_name(value)}")
        if not low <= value <= high:
            raise ValueError(f"Value {value} is out of range for a {bits}-bit integer")
        return value

    return check


def _check_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a float but got {_type_name(value)}")
    return float(value)


def _to_float32(value: Any) -> float:
    return struct.unpack("<f", struct.pack("<f", _check_number(value)))[0]


def _encode_double(value: Any) -> str:
    return repr(_check_number(value))


def _decode_double(text: Any) -> float:
    return float(_check_str(text))


def _integer_text(bits: int) -> tuple[Callable[[Any], str], Callable[[Any], int]]:
    check = _check_integer(bits)

    def encode(value: Any) -> str:
        return str(check(value))

    def decode(text: Any) -> int:
        if not _INTEGER_TEXT.fullmatch(_check_str(text)):
            raise ValueError(f"Invalid {bits}-bit integer text: {text!r}")
        return check(int(text))

    return encode, decode


def _encode_char(value: Any) -> int:
    if len(_check_str(value)) != 1:
        raise ValueError(f"Expected a single character but got {value!r}")
    return ord(value)


def _decode_char(code_point: Any) -> str:
    # Code points that do not map to a character are rejected, never wrapped
    if not 0 <= code_point <= _MAX_CODE_POINT:
        raise ValueError(f"Value {code_point} is not a valid code point")
    return chr(code_point)


@dataclass(frozen=True)
class ScalarCodec:
    """Encoding of one scalar kind onto a native kind."""

    native: NativeKind
    encode: Callable[[Any], Any]
    decode: Callable[[Any], Any]


_encode_short, _decode_short = _integer_text(16)
_encode_byte, _decode_byte = _integer_text(8)

SCALAR_CODECS: dict[Kind, ScalarCodec] = {
    Kind.BOOLEAN: ScalarCodec(NativeKind.BOOLEAN, _check_bool, _check_bool),
    Kind.INT: ScalarCodec(NativeKind.INT, _check_integer(32), _check_integer(32)),
    Kind.STRING: ScalarCodec(NativeKind.STRING, _check_str, _check_str),
    Kind.FLOAT: ScalarCodec(NativeKind.FLOAT, _to_float32, _check_number),
    Kind.LONG: ScalarCodec(NativeKind.LONG, _check_integer(64), _check_integer(64)),
    Kind.DOUBLE: ScalarCodec(NativeKind.STRING, _encode_double, _decode_double),
    Kind.SHORT: ScalarCodec(NativeKind.STRING, _encode_short, _decode_short),
    Kind.BYTE: ScalarCodec(NativeKind.STRING, _encode_byte, _decode_byte),
    Kind.CHAR: ScalarCodec(NativeKind.INT, _encode_char, _decode_char),
}

if _missing := set(Kind) - set(SCALAR_CODECS):
    raise RuntimeError(f"No codec registered for kinds: {sorted(_missing)}")


def encode_scalar(kind: Kind, value: Any) -> tuple[NativeKind, Any]:
    """Return the native kind and value used to store a scalar.

    Raises:
        TypeError: If the value is not of the type the kind expects.
        ValueError: If the value is out of range for the kind.
    """
    codec = SCALAR_CODECS[kind]
    return codec.native, codec.encode(value)


def decode_scalar(kind: Kind, native_value: Any) -> Any:
    """Return the scalar value for a stored native value.

    Raises:
        ValueError: If text encoded values cannot be parsed.
    """
    return SCALAR_CODECS[kind].decode(native_value)


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Outcome of decoding structured text.

    Either `error` is set, or `value` holds the decoded value (which is None
    when there was nothing to decode).
    """

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Return True if decoding did not fail."""
        return self.error is None


def to_plain(value: Any) -> Any:
    """Return the value with every nested dataclass converted to a dict.

    Used to serialize a value when the caller gives no shape, so dataclasses
    may appear anywhere inside lists and maps.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return encode(value, type(value))
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    return value


def encode_structured(value: Any, shape: Any = None) -> str:
    """Serialize an object, list or map to JSON text."""
    if shape is None:
        return json_encode(to_plain(value), Any)
    return json_encode(value, shape)


def decode_structured(text: str, shape: type[T] | Any) -> DecodeResult[T]:
    """Deserialize JSON text into the requested shape.

    Any failure is returned in the result rather than raised.
    """
    try:
        return DecodeResult(value=json_decode(text, shape))
    except Exception as err:  # pylint: disable=broad-except
        _LOGGER.debug("Failed to decode %r as %s: %s", text, shape, err)
        return DecodeResult(error=err)
