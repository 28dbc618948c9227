"""Module for a store that encrypts keys and values before they reach disk.

Keys are encrypted deterministically with AES-SIV so the same key always maps
to the same stored entry. Values are encrypted with AES-GCM using a random
nonce and the encrypted key as associated data, so a value cannot be moved to
a different key without detection.

Both keysets are generated when the store is first opened, wrapped with the
master key, and saved in the store file under reserved entry names.
"""

import base64
import binascii
import logging
import os
from typing import Any, Self

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, AESSIV
from mashumaro.codecs.json import json_decode, json_encode

from secure_prefs.exceptions import (
    EncryptionError,
    KindMismatchError,
    StoreInitError,
)

from .entry import Entry, NativeKind
from .file_store import FileStore
from .master_key import MasterKey
from .store import Editor, NativeStore

_LOGGER = logging.getLogger(__name__)

KEY_KEYSET_ALIAS = "__secure_prefs_key_keyset__"
VALUE_KEYSET_ALIAS = "__secure_prefs_value_keyset__"
RESERVED_KEYS = frozenset({KEY_KEYSET_ALIAS, VALUE_KEYSET_ALIAS})

KEY_KEYSET_BITS = 512
VALUE_KEYSET_BITS = 256
NONCE_SIZE = 12


def _check_key(key: str) -> None:
    if key in RESERVED_KEYS:
        raise EncryptionError(f"{key} is a reserved key for the encryption keyset")


class EncryptedEditor(Editor):
    """Editor that encrypts changes before handing them to the inner store."""

    def __init__(self, store: "EncryptedStore", inner: Editor) -> None:
        """Initialize EncryptedEditor."""
        self._store = store
        self._inner = inner

    def put(self, key: str, kind: NativeKind, value: Any) -> Self:
        """Set the value of a key."""
        _check_key(key)
        encrypted_key = self._store._encrypt_key(key)
        self._inner.put_string(
            encrypted_key, self._store._encrypt_value(encrypted_key, kind, value)
        )
        return self

    def remove(self, key: str) -> Self:
        """Remove a key."""
        _check_key(key)
        self._inner.remove(self._store._encrypt_key(key))
        return self

    def apply(self) -> None:
        """Update the in memory view now and write to disk in the background."""
        self._inner.apply()

    def commit(self) -> bool:
        """Update the in memory view and write to disk before returning."""
        return self._inner.commit()


class EncryptedStore(NativeStore):
    """A store that keeps keys and values encrypted inside a FileStore."""

    def __init__(self, inner: FileStore, master_key: MasterKey, name: str) -> None:
        """Initialize EncryptedStore, creating the keysets on first use.

        Raises:
            StoreInitError: If the stored keysets cannot be unwrapped or saved.
        """
        self._inner = inner
        self._name = name
        self._key_cipher = AESSIV(self._load_keyset(master_key, KEY_KEYSET_ALIAS))
        self._value_cipher = AESGCM(self._load_keyset(master_key, VALUE_KEYSET_ALIAS))

    def _load_keyset(self, master_key: MasterKey, alias: str) -> bytes:
        try:
            wrapped = self._inner.get_string(alias, None)
        except KindMismatchError as err:
            raise StoreInitError(
                f"Invalid {alias} of store {self._name}: {err}"
            ) from err
        if wrapped is not None:
            try:
                return master_key.unwrap(base64.b64decode(wrapped), alias.encode())
            except (EncryptionError, binascii.Error) as err:
                raise StoreInitError(
                    f"Unable to unwrap {alias} of store {self._name}: {err}"
                ) from err

        _LOGGER.debug("Generating %s for store %s", alias, self._name)
        if alias == KEY_KEYSET_ALIAS:
            keyset = AESSIV.generate_key(bit_length=KEY_KEYSET_BITS)
        else:
            keyset = AESGCM.generate_key(bit_length=VALUE_KEYSET_BITS)
        wrapped_keyset = master_key.wrap(keyset, alias.encode())
        if not (
            self._inner.edit()
            .put_string(alias, base64.b64encode(wrapped_keyset).decode())
            .commit()
        ):
            raise StoreInitError(f"Unable to save {alias} of store {self._name}")
        return keyset

    def _encrypt_key(self, key: str) -> str:
        ciphertext = self._key_cipher.encrypt(key.encode(), [self._name.encode()])
        return base64.b64encode(ciphertext).decode()

    def _encrypt_value(self, encrypted_key: str, kind: NativeKind, value: Any) -> str:
        plaintext = json_encode(Entry(kind=kind, value=value), Entry).encode()
        nonce = os.urandom(NONCE_SIZE)
        ciphertext = self._value_cipher.encrypt(
            nonce, plaintext, encrypted_key.encode()
        )
        return base64.b64encode(nonce + ciphertext).decode()

    def _decrypt_value(self, encrypted_key: str, encrypted_value: str) -> Entry:
        try:
            blob = base64.b64decode(encrypted_value)
            plaintext = self._value_cipher.decrypt(
                blob[:NONCE_SIZE], blob[NONCE_SIZE:], encrypted_key.encode()
            )
        except (InvalidTag, ValueError) as err:
            raise EncryptionError(
                f"Unable to decrypt value in store {self._name}"
            ) from err
        return json_decode(plaintext.decode(), Entry)

    def get(self, key: str, kind: NativeKind, default: Any) -> Any:
        """Return the value of a key, or the default when it is not set."""
        _check_key(key)
        encrypted_key = self._encrypt_key(key)
        if (encrypted_value := self._inner.get_string(encrypted_key, None)) is None:
            return default
        entry = self._decrypt_value(encrypted_key, encrypted_value)
        if entry.kind != kind:
            raise KindMismatchError(key, entry.kind, kind)
        return entry.value

    def contains(self, key: str) -> bool:
        """Return True if the key has a value."""
        _check_key(key)
        return self._inner.contains(self._encrypt_key(key))

    def edit(self) -> EncryptedEditor:
        """Return an editor used to change values."""
        return EncryptedEditor(self, self._inner.edit())

    def flush(self) -> None:
        """Wait for any background disk writes to finish."""
        self._inner.flush()
