"""Module for a plaintext store persisted as a YAML file."""

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Self

import yaml
from mashumaro.exceptions import MissingField, InvalidFieldValue

from secure_prefs.exceptions import KindMismatchError, StoreInitError

from .entry import Entry, NativeKind, StoreFile
from .store import Editor, NativeStore

_LOGGER = logging.getLogger(__name__)

TMP_SUFFIX = ".tmp"


class FileEditor(Editor):
    """Editor that collects changes for a FileStore."""

    def __init__(self, store: "FileStore") -> None:
        """Initialize FileEditor."""
        self._store = store
        self._changes: dict[str, Entry | None] = {}

    def put(self, key: str, kind: NativeKind, value: Any) -> Self:
        """Set the value of a key."""
        self._changes[key] = Entry(kind=kind, value=value)
        return self

    def remove(self, key: str) -> Self:
        """Remove a key."""
        self._changes[key] = None
        return self

    def apply(self) -> None:
        """Update the in memory view now and write to disk in the background."""
        self._store._apply_changes(self._changes)

    def commit(self) -> bool:
        """Update the in memory view and write to disk before returning.

        Returns True once a snapshot holding these changes is on disk.
        """
        return self._store._commit(self._changes)


class FileStore(NativeStore):
    """A plaintext store backed by a single YAML file.

    Values are served from memory. Changes update memory while holding a lock
    and are then written to disk by a single writer thread, replacing the whole
    file so a reader never observes a partial write.
    """

    def __init__(self, path: Path) -> None:
        """Initialize FileStore and load any existing contents."""
        self._path = path
        self._lock = threading.Lock()
        self._entries = self._load()
        self._generation = 0
        self._pending: set[Future[bool]] = set()
        self._written_cond = threading.Condition(self._lock)
        self._attempted = 0
        self._written = 0
        self._writer = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"secure-prefs-{path.stem}"
        )

    @property
    def path(self) -> Path:
        """Return the path of the file backing this store."""
        return self._path

    def _load(self) -> dict[str, Entry]:
        if not self._path.exists():
            _LOGGER.debug("Store file %s does not exist yet", self._path)
            return {}
        content = self._path.read_text()
        try:
            store_file = StoreFile.parse_yaml(content)
        except (
            yaml.YAMLError,
            MissingField,
            InvalidFieldValue,
            AttributeError,
            TypeError,
            ValueError,
        ) as err:
            raise StoreInitError(f"Store file {self._path} is corrupt: {err}") from err
        _LOGGER.debug(
            "Loaded %d entries from %s", len(store_file.entries), self._path
        )
        return store_file.entries

    def get(self, key: str, kind: NativeKind, default: Any) -> Any:
        """Return the value of a key, or the default when it is not set."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return default
        if entry.kind != kind:
            raise KindMismatchError(key, entry.kind, kind)
        return entry.value

    def contains(self, key: str) -> bool:
        """Return True if the key has a value."""
        with self._lock:
            return key in self._entries

    def edit(self) -> FileEditor:
        """Return an editor used to change values."""
        return FileEditor(self)

    def flush(self) -> None:
        """Wait for any background disk writes to finish."""
        with self._lock:
            pending = list(self._pending)
        wait(pending)

    def _apply_changes(self, changes: dict[str, Entry | None]) -> int:
        with self._lock:
            for key, entry in changes.items():
                if entry is None:
                    self._entries.pop(key, None)
                else:
                    self._entries[key] = entry
            self._generation += 1
            generation = self._generation
            snapshot = StoreFile(entries=dict(self._entries))
            future = self._writer.submit(self._write, snapshot, generation)
            self._pending.add(future)
        future.add_done_callback(self._write_done)
        return generation

    def _commit(self, changes: dict[str, Entry | None]) -> bool:
        generation = self._apply_changes(changes)
        with self._written_cond:
            # A skipped stale write defers to the newer snapshot that follows it
            self._written_cond.wait_for(lambda: self._attempted >= generation)
            return self._written >= generation

    def _write_done(self, future: Future[bool]) -> None:
        with self._lock:
            self._pending.discard(future)

    def _write(self, snapshot: StoreFile, generation: int) -> bool:
        with self._lock:
            latest = self._generation
        if generation < latest:
            _LOGGER.debug("Skipping stale write %d of %s", generation, self._path)
            return True
        tmp_path = self._path.with_name(self._path.name + TMP_SUFFIX)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(snapshot.yaml())
            os.replace(tmp_path, self._path)
        except OSError:
            _LOGGER.exception("Failed to write store file %s", self._path)
            self._record_attempt(generation, written=False)
            return False
        _LOGGER.debug("Wrote %d entries to %s", len(snapshot.entries), self._path)
        self._record_attempt(generation, written=True)
        return True

    def _record_attempt(self, generation: int, written: bool) -> None:
        with self._written_cond:
            self._attempted = generation
            if written:
                self._written = generation
            self._written_cond.notify_all()
