"""Secure-prefs put action."""

import logging
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast

from secure_prefs.codec import Kind
from secure_prefs.exceptions import InputException

from . import common


_LOGGER = logging.getLogger(__name__)


class PutAction:
    """Set the value of a key."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "put",
                help="Set the value of a key",
                description=(
                    "Store a value under a key. Object values are given as JSON text."
                ),
            ),
        )
        args.add_argument("key", help="Key to write")
        args.add_argument("value", help="Value to write")
        common.add_kind_flag(args)
        common.add_store_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        key: str,
        value: str,
        kind: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        parsed = common.parse_value(kind, value)
        handle = common.open_handle(**kwargs)
        if kind == common.OBJECT_KIND:
            handle.put_object(key, parsed)
        else:
            try:
                handle.put(key, Kind(kind), parsed)
            except (TypeError, ValueError) as err:
                raise InputException(
                    f"Invalid {kind} value '{value}': {err}"
                ) from err
        handle.flush()
        _LOGGER.info("Stored %s in %s", key, handle.name)
