"""Secure-prefs remove and contains actions."""

import logging
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast

from . import common


_LOGGER = logging.getLogger(__name__)


class RemoveAction:
    """Remove a key."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "remove",
                aliases=["rm"],
                help="Remove a key",
                description="Remove a key and its value from the store.",
            ),
        )
        args.add_argument("key", help="Key to remove")
        common.add_store_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        key: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        handle = common.open_handle(**kwargs)
        handle.remove(key)
        handle.flush()


class ContainsAction:
    """Report whether a key is set."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "contains",
                help="Report whether a key is set",
                description="Print true if the key has a value, otherwise false.",
            ),
        )
        args.add_argument("key", help="Key to check")
        common.add_store_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        key: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        handle = common.open_handle(**kwargs)
        print(common.format_value(handle.contains(key)))
