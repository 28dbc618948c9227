"""Test helpers for secure-prefs tools."""

import contextlib
import io

from secure_prefs.tool import secure_prefs


def run_command(args: list[str]) -> str:
    """Run the command line tool and return what it printed."""
    output = io.StringIO()
    with contextlib.redirect_stdout(output):
        secure_prefs.main(args)
    return output.getvalue()
