"""
secure-prefs is a typed, optionally encrypted key-value store for a single
process.

Obtain the process-wide store with `secure_prefs.manager.init` and then use the
typed accessors on the returned `StoreHandle`.
"""

__all__ = [
    "codec",
    "config",
    "exceptions",
    "handle",
    "manager",
    "store",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
