"""Tests for the typed store handle."""

from dataclasses import dataclass
import logging
from typing import Any

import pytest

from secure_prefs.codec import Kind
from secure_prefs.config import StoreConfig
from secure_prefs.exceptions import KindMismatchError
from secure_prefs.handle import StoreHandle
from secure_prefs.store import open_native_store


@dataclass
class Profile:
    name: str
    age: int
    tags: list[str]


@pytest.fixture(params=[False, True], ids=["plaintext", "encrypted"])
def handle(request: pytest.FixtureRequest, config: StoreConfig) -> StoreHandle:
    encrypted = request.param
    return StoreHandle(
        open_native_store("handle-test", encrypted, config), "handle-test", encrypted
    )


@pytest.mark.parametrize(
    ("kind", "value"),
    [
        (Kind.BOOLEAN, False),
        (Kind.INT, -(2**31)),
        (Kind.STRING, "héllo wörld"),
        (Kind.FLOAT, 1.5),
        (Kind.LONG, 2**63 - 1),
        (Kind.DOUBLE, 3.14159),
        (Kind.SHORT, -32768),
        (Kind.BYTE, 42),
        (Kind.CHAR, "A"),
    ],
)
def test_scalar_round_trip(handle: StoreHandle, kind: Kind, value: Any) -> None:
    """Test every scalar kind reads back the value that was written."""
    handle.put("key", kind, value)
    assert handle.get("key", kind, None) == value


def test_typed_accessors(handle: StoreHandle) -> None:
    """Test the typed put and get pairs."""
    handle.put_boolean("bool", True)
    handle.put_int("int", 7)
    handle.put_string("string", "text")
    handle.put_float("float", 2.5)
    handle.put_long("long", 2**40)
    handle.put_double("double", 0.1)
    handle.put_short("short", 1000)
    handle.put_byte("byte", -1)
    handle.put_char("char", "é")

    assert handle.get_boolean("bool", False) is True
    assert handle.get_int("int", 0) == 7
    assert handle.get_string("string", None) == "text"
    assert handle.get_float("float", 0.0) == 2.5
    assert handle.get_long("long", 0) == 2**40
    assert handle.get_double("double", 0.0) == 0.1
    assert handle.get_short("short", 0) == 1000
    assert handle.get_byte("byte", 0) == -1
    assert handle.get_char("char", "?") == "é"


def test_defaults(handle: StoreHandle) -> None:
    """Test keys that were never written return the default exactly."""
    assert handle.get_float("missing", 0.1) == 0.1
    assert handle.get_double("missing", 0.2) == 0.2
    assert handle.get_short("missing", 5) == 5
    assert handle.get_char("missing", "z") == "z"
    assert handle.get_string("missing", None) is None
    assert not handle.contains("missing")


def test_remove(handle: StoreHandle) -> None:
    """Test removed keys read as defaults."""
    handle.put_int("count", 1)
    assert handle.contains("count")
    handle.remove("count")
    assert not handle.contains("count")
    assert handle.get_int("count", 99) == 99


def test_char_read_as_int(handle: StoreHandle) -> None:
    """Test a char is stored as its code point."""
    handle.put_char("letter", "A")
    assert handle.get_char("letter", "?") == "A"
    assert handle.get_int("letter", 0) == 65


def test_native_kind_mismatch(handle: StoreHandle) -> None:
    """Test reading a native backed key with another kind raises."""
    handle.put_boolean("flag", True)
    with pytest.raises(KindMismatchError):
        handle.get_int("flag", 0)


def test_text_parse_failure_propagates(handle: StoreHandle) -> None:
    """Test text encoded scalars that do not parse raise."""
    handle.put_string("value", "not a number")
    with pytest.raises(ValueError):
        handle.get_double("value", 0.0)
    with pytest.raises(ValueError):
        handle.get_short("value", 0)
    with pytest.raises(ValueError):
        handle.get_byte("value", 0)


def test_put_object(handle: StoreHandle) -> None:
    """Test objects, arrays and maps read back structurally equal."""
    handle.put_object("map", {"a": 1})
    assert handle.get_object("map", dict[str, int]) == {"a": 1}

    profile = Profile(name="ada", age=36, tags=["math"])
    handle.put_object("profile", profile)
    assert handle.get_object("profile", Profile) == profile

    handle.put_array("numbers", [1, 2, 3])
    assert handle.get_array("numbers", int) == [1, 2, 3]

    handle.put_array("profiles", [profile], element_shape=Profile)
    assert handle.get_array("profiles", Profile) == [profile]

    handle.put_map("by-name", {"ada": profile})
    assert handle.get_map("by-name", str, Profile) == {"ada": profile}

    handle.put_map("scores", {"ada": 1.5}, key_shape=str, value_shape=float)
    assert handle.get_map("scores", str, float) == {"ada": 1.5}


def test_put_nested_objects(handle: StoreHandle) -> None:
    """Test dataclasses nested inside lists and maps with no shape given."""
    ada = Profile(name="ada", age=36, tags=["math"])
    alan = Profile(name="alan", age=41, tags=[])

    handle.put_object("team", {"team": [ada, alan]})
    assert handle.get_object("team", dict[str, list[Profile]]) == {
        "team": [ada, alan]
    }

    handle.put_array("rows", [{"p": ada}])
    assert handle.get_array("rows", dict[str, Profile]) == [{"p": ada}]

    handle.put_map("mixed", {"p": ada, "n": 1})
    assert handle.get_map("mixed", str, Any) == {
        "p": {"name": "ada", "age": 36, "tags": ["math"]},
        "n": 1,
    }


def test_missing_object(handle: StoreHandle, caplog: pytest.LogCaptureFixture) -> None:
    """Test a missing key reads as None without logging an error."""
    with caplog.at_level(logging.ERROR):
        assert handle.get_object("missing", Profile) is None
        assert handle.get_array("missing", int) is None
        assert handle.get_map("missing", str, int) is None
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert handle.read_object("missing", Profile).ok


def test_corrupt_object(handle: StoreHandle, caplog: pytest.LogCaptureFixture) -> None:
    """Test corrupt structured values are logged and read as None."""
    handle.put_string("corrupt", "{not json")
    handle.put_object("other", {"unrelated": True})
    handle.put_int("number", 5)

    with caplog.at_level(logging.ERROR):
        assert handle.get_object("corrupt", dict[str, int]) is None
        assert handle.get_object("other", Profile) is None
        assert handle.get_array("corrupt", int) is None
        assert handle.get_map("number", str, int) is None
    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert len(errors) == 4
    assert all(record.exc_info for record in errors)

    result = handle.read_object("number", Profile)
    assert isinstance(result.error, KindMismatchError)


def test_persisted(config: StoreConfig) -> None:
    """Test values are readable from a newly opened store after a flush."""
    handle = StoreHandle(open_native_store("persist", True, config), "persist", True)
    handle.put_double("pi", 3.14159)
    handle.put_array("list", ["a", "b"])
    handle.flush()

    reopened = StoreHandle(open_native_store("persist", True, config), "persist", True)
    assert reopened.get_double("pi", 0.0) == 3.14159
    assert reopened.get_array("list", str) == ["a", "b"]
