"""Configuration objects for secure-prefs."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import InvalidNameError

__all__ = [
    "StoreConfig",
    "DEFAULT_NAME",
    "DEFAULT_SECURED_NAME",
]

DEFAULT_NAME = "APP_SP_DB"
DEFAULT_SECURED_NAME = "APP_SP_DB_SECURED"
DEFAULT_KEYRING_SERVICE = "secure-prefs"
DEFAULT_MASTER_KEY_ALIAS = "_secure_prefs_master_key_"
STORE_DIR_ENV = "SECURE_PREFS_DIR"
STORE_SUFFIX = ".yaml"


def _default_directory() -> Path:
    if env_dir := os.environ.get(STORE_DIR_ENV):
        return Path(env_dir)
    return Path.home() / ".secure_prefs"


def default_name(encrypted: bool) -> str:
    """Return the store name used when the caller does not supply one."""
    return DEFAULT_SECURED_NAME if encrypted else DEFAULT_NAME


@dataclass
class StoreConfig:
    """Configuration for where and how stores are opened."""

    directory: Path = field(default_factory=_default_directory)
    """Directory holding one file per store."""

    keyring_service: str = DEFAULT_KEYRING_SERVICE
    """Keyring service name the master key is saved under."""

    master_key_alias: str = DEFAULT_MASTER_KEY_ALIAS
    """Keyring user name (alias) of the master key."""

    def store_path(self, name: str) -> Path:
        """Return the file backing the store with the specified name."""
        if not name or name in (".", "..") or "/" in name or os.sep in name:
            raise InvalidNameError(f"Store name '{name}' is not a valid file name")
        return Path(self.directory) / f"{name}{STORE_SUFFIX}"
