"""
The store module provides the durable maps that hold native values for a store
handle.

- `FileStore` keeps plaintext entries in a YAML file.
- `EncryptedStore` wraps a `FileStore` and encrypts every key and value with
  keysets protected by a `MasterKey` kept in the platform keyring.

Both implement the `NativeStore` interface, which only knows the native kinds
in `NativeKind`. Conversion of richer types happens in `secure_prefs.codec`.
"""

from .entry import Entry, NativeKind
from .store import Editor, NativeStore
from .file_store import FileStore
from .master_key import MasterKey
from .encrypted import EncryptedStore
from .backing import open_native_store

__all__ = [
    "Editor",
    "Entry",
    "EncryptedStore",
    "FileStore",
    "MasterKey",
    "NativeKind",
    "NativeStore",
    "open_native_store",
]
