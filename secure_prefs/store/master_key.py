"""Master key used to protect the keysets of encrypted stores.

The master key is a 256-bit AES-GCM key kept in the platform keyring (e.g.
macOS Keychain, Windows Credential Locker, Secret Service) so that it never
touches the store file itself.
"""

import base64
import binascii
import logging
import os
from dataclasses import dataclass, field

import keyring
from keyring.errors import KeyringError
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from secure_prefs.config import DEFAULT_MASTER_KEY_ALIAS
from secure_prefs.exceptions import EncryptionError, MasterKeyError

_LOGGER = logging.getLogger(__name__)

KEY_BITS = 256
NONCE_SIZE = 12


@dataclass(frozen=True)
class MasterKey:
    """Handle to the master key stored in the keyring."""

    alias: str
    """The keyring user name the key is saved under."""

    key: bytes = field(repr=False)

    @classmethod
    def create_or_retrieve(
        cls, service: str, alias: str = DEFAULT_MASTER_KEY_ALIAS
    ) -> "MasterKey":
        """Return the master key from the keyring, creating it on first use.

        Raises:
            MasterKeyError: If the keyring is unavailable or holds an invalid key.
        """
        try:
            encoded = keyring.get_password(service, alias)
            if encoded is None:
                _LOGGER.debug("Creating master key %s in service %s", alias, service)
                key = AESGCM.generate_key(bit_length=KEY_BITS)
                keyring.set_password(service, alias, base64.b64encode(key).decode())
                return cls(alias=alias, key=key)
        except KeyringError as err:
            raise MasterKeyError(
                f"Unable to access master key {alias} in keyring service {service}: {err}"
            ) from err

        try:
            key = base64.b64decode(encoded, validate=True)
        except binascii.Error as err:
            raise MasterKeyError(f"Master key {alias} is not valid base64") from err
        if len(key) * 8 != KEY_BITS:
            raise MasterKeyError(
                f"Master key {alias} has {len(key) * 8} bits, expected {KEY_BITS}"
            )
        _LOGGER.debug("Retrieved master key %s from service %s", alias, service)
        return cls(alias=alias, key=key)

    def wrap(self, data: bytes, associated_data: bytes) -> bytes:
        """Encrypt data with the master key, prefixed with a random nonce."""
        nonce = os.urandom(NONCE_SIZE)
        return nonce + AESGCM(self.key).encrypt(nonce, data, associated_data)

    def unwrap(self, blob: bytes, associated_data: bytes) -> bytes:
        """Decrypt data produced by `wrap`.

        Raises:
            EncryptionError: If the data was not wrapped by this key.
        """
        nonce, ciphertext = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
        try:
            return AESGCM(self.key).decrypt(nonce, ciphertext, associated_data)
        except (InvalidTag, ValueError) as err:
            raise EncryptionError(
                f"Unable to unwrap data with master key {self.alias}"
            ) from err
