"""Secure-prefs get action."""

import logging
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast, Any
import sys

from secure_prefs.codec import Kind
from secure_prefs.exceptions import InputException

from . import common
from .format import FORMATTERS


_LOGGER = logging.getLogger(__name__)


class GetAction:
    """Print the value of a key."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "get",
                help="Print the value of a key",
                description="Print the value stored under a key in the store.",
            ),
        )
        args.add_argument("key", help="Key to read")
        common.add_kind_flag(args)
        args.add_argument(
            "--default",
            help="Value printed when the key is not set",
            default=None,
        )
        args.add_argument(
            "--output",
            "-o",
            choices=list(FORMATTERS),
            default="yaml",
            help="Output format for object values",
        )
        common.add_store_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        key: str,
        kind: str,
        default: str | None,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        handle = common.open_handle(**kwargs)
        if kind == common.OBJECT_KIND:
            value: Any = handle.get_object(key, Any)
            if value is None:
                if default is None:
                    raise InputException(f"Key '{key}' has no readable object value")
                value = common.parse_value(kind, default)
            FORMATTERS[output]().print(value, file=sys.stdout)
            return

        if not handle.contains(key) and default is None:
            raise InputException(f"Key '{key}' is not set")
        fallback = None if default is None else common.parse_value(kind, default)
        try:
            value = handle.get(key, Kind(kind), fallback)
        except ValueError as err:
            raise InputException(
                f"Value for key '{key}' cannot be read as {kind}: {err}"
            ) from err
        print(common.format_value(value))
