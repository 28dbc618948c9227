"""Test fixtures for secure-prefs."""

from collections.abc import Generator
import pathlib

import keyring
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError
import pytest

from secure_prefs.config import StoreConfig


class MemoryKeyring(KeyringBackend):
    """Keyring backend that keeps passwords in memory."""

    priority = 1  # type: ignore[assignment]

    def __init__(self) -> None:
        super().__init__()
        self.passwords: dict[tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> str | None:
        return self.passwords.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.passwords[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        if self.passwords.pop((service, username), None) is None:
            raise PasswordDeleteError(username)


@pytest.fixture(autouse=True)
def memory_keyring() -> Generator[MemoryKeyring, None, None]:
    """Replace the platform keyring for the duration of a test."""
    previous = keyring.get_keyring()
    backend = MemoryKeyring()
    keyring.set_keyring(backend)
    yield backend
    keyring.set_keyring(previous)


@pytest.fixture
def config(tmp_path: pathlib.Path) -> StoreConfig:
    """Configuration that keeps store files in a temporary directory."""
    return StoreConfig(directory=tmp_path)
