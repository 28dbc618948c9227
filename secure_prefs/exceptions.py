"""Exceptions related to secure-prefs."""

__all__ = [
    "PrefsException",
    "StoreInitError",
    "MasterKeyError",
    "InvalidNameError",
    "KindMismatchError",
    "EncryptionError",
    "InputException",
]


class PrefsException(Exception):
    """Generic base exception used for this library."""


class StoreInitError(PrefsException):
    """Raised when a store cannot be opened and the failure is terminal."""


class MasterKeyError(StoreInitError):
    """Raised when the master key cannot be created or retrieved from the keyring."""


class InvalidNameError(PrefsException, ValueError):
    """Raised when a store name cannot be used as a file name."""


class KindMismatchError(PrefsException, TypeError):
    """Raised when a key is read with a different kind than it was written with."""

    def __init__(self, key: str, stored: str, requested: str) -> None:
        super().__init__(
            f"Value for key '{key}' was stored as {stored} and cannot be read as {requested}"
        )
        self.key = key
        self.stored = stored
        self.requested = requested


class EncryptionError(PrefsException):
    """Raised when an encrypted entry cannot be read or a reserved key is used."""


class InputException(PrefsException):
    """Raised when command line input is not formatted as expected."""
