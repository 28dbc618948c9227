"""Command line tool for reading and writing secure-prefs stores."""

import argparse
import logging
import sys
import traceback

from secure_prefs.exceptions import PrefsException
from . import get, put, remove

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command line utility for inspecting a local secure-prefs store.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    get.GetAction.register(subparsers)
    put.PutAction.register(subparsers)
    remove.RemoveAction.register(subparsers)
    remove.ContainsAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Secure-prefs command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        action.run(**vars(args))
    except PrefsException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("secure-prefs error: ", err, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
