"""Flags and helpers shared by the secure-prefs commands."""

import logging
import pathlib
from argparse import ArgumentParser, BooleanOptionalAction
from typing import Any

from mashumaro.codecs.json import json_decode

from secure_prefs.codec import Kind
from secure_prefs.config import StoreConfig
from secure_prefs.exceptions import InputException
from secure_prefs.handle import StoreHandle
from secure_prefs.manager import StoreManager

_LOGGER = logging.getLogger(__name__)

OBJECT_KIND = "object"
KIND_CHOICES = [kind.value for kind in Kind] + [OBJECT_KIND]

_BOOLEAN_TEXT = {"true": True, "false": False}


def add_store_flags(args: ArgumentParser) -> None:
    """Add flags that select the store to open."""
    args.add_argument(
        "--name",
        help="Name of the store (defaults to APP_SP_DB or APP_SP_DB_SECURED)",
        default=None,
    )
    args.add_argument(
        "--encrypted",
        action=BooleanOptionalAction,
        default=False,
        help="Open the store encrypted with the master key from the keyring",
    )
    args.add_argument(
        "--directory",
        help="Directory containing the store files",
        type=pathlib.Path,
        default=None,
    )


def add_kind_flag(args: ArgumentParser) -> None:
    """Add the flag for the kind of value to read or write."""
    args.add_argument(
        "--kind",
        "-k",
        choices=KIND_CHOICES,
        default=Kind.STRING.value,
        help="Kind the value is stored as",
    )


def open_handle(
    name: str | None,
    encrypted: bool,
    directory: pathlib.Path | None,
    **kwargs: Any,  # pylint: disable=unused-argument
) -> StoreHandle:
    """Open the store selected by the command line flags."""
    config = StoreConfig() if directory is None else StoreConfig(directory=directory)
    _LOGGER.debug("Opening store in %s", config.directory)
    return StoreManager(config).initialize(name, encrypted)


def parse_value(kind: str, text: str) -> Any:
    """Parse command line text as a value of the specified kind."""
    try:
        match kind:
            case Kind.BOOLEAN:
                if (value := _BOOLEAN_TEXT.get(text.lower())) is None:
                    raise ValueError("expected true or false")
                return value
            case Kind.INT | Kind.LONG | Kind.SHORT | Kind.BYTE:
                return int(text)
            case Kind.FLOAT | Kind.DOUBLE:
                return float(text)
            case Kind.STRING | Kind.CHAR:
                return text
            case _:
                return json_decode(text, Any)
    except ValueError as err:
        raise InputException(f"Invalid {kind} value '{text}': {err}") from err


def format_value(value: Any) -> str:
    """Return the text printed for a scalar value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
