"""Opens the native store backing a store handle."""

import logging

from secure_prefs.config import StoreConfig
from secure_prefs.context import trace_context
from secure_prefs.exceptions import StoreInitError

from .encrypted import EncryptedStore
from .file_store import FileStore
from .master_key import MasterKey
from .store import NativeStore

_LOGGER = logging.getLogger(__name__)


def open_native_store(name: str, encrypted: bool, config: StoreConfig) -> NativeStore:
    """Open the plaintext or encrypted store with the specified name.

    Raises:
        StoreInitError: If the store file or the master key is unusable.
    """
    path = config.store_path(name)
    with trace_context(f"Open store {name}"):
        try:
            file_store = FileStore(path)
            if not encrypted:
                return file_store
            master_key = MasterKey.create_or_retrieve(
                config.keyring_service, config.master_key_alias
            )
            return EncryptedStore(file_store, master_key, name)
        except StoreInitError:
            raise
        except (OSError, ValueError) as err:
            raise StoreInitError(f"Unable to open store {name} at {path}: {err}") from err
