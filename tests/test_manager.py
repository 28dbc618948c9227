"""Tests for the store lifecycle."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from secure_prefs import manager
from secure_prefs.config import StoreConfig
from secure_prefs.exceptions import StoreInitError
from secure_prefs.manager import LifecycleState, StoreManager
from secure_prefs.store import NativeStore, open_native_store


class CountingOpener:
    """Store opener that records every store it opens."""

    def __init__(self, delay: threading.Event | None = None) -> None:
        self.calls: list[tuple[str, bool]] = []
        self._delay = delay

    def __call__(self, name: str, encrypted: bool, config: StoreConfig) -> NativeStore:
        self.calls.append((name, encrypted))
        if self._delay is not None:
            self._delay.wait(timeout=5)
        return open_native_store(name, encrypted, config)


def test_initialize_once(config: StoreConfig) -> None:
    """Test later calls return the first handle and ignore their arguments."""
    opener = CountingOpener()
    store_manager = StoreManager(config, opener)
    assert store_manager.state == LifecycleState.UNINITIALIZED
    assert store_manager.current() is None

    handle = store_manager.initialize("first", encrypted=False)
    assert store_manager.state == LifecycleState.READY
    assert handle.name == "first"
    assert not handle.encrypted

    assert store_manager.initialize("second", encrypted=True) is handle
    assert store_manager.current() is handle
    assert opener.calls == [("first", False)]


@pytest.mark.parametrize(
    ("encrypted", "expected_name"),
    [(False, "APP_SP_DB"), (True, "APP_SP_DB_SECURED")],
)
def test_default_names(
    config: StoreConfig, encrypted: bool, expected_name: str
) -> None:
    """Test the store name used when none is given."""
    handle = StoreManager(config).initialize(encrypted=encrypted)
    assert handle.name == expected_name
    assert handle.encrypted == encrypted
    handle.put_int("count", 1)
    handle.flush()
    assert (config.directory / f"{expected_name}.yaml").exists()


def test_concurrent_initialize(config: StoreConfig) -> None:
    """Test concurrent initializers construct exactly one store."""
    release = threading.Event()
    opener = CountingOpener(delay=release)
    store_manager = StoreManager(config, opener)

    with ThreadPoolExecutor(max_workers=8) as executor:
        futures = [
            executor.submit(store_manager.initialize, f"store-{i}", i % 2 == 0)
            for i in range(8)
        ]
        release.set()
        handles = [future.result() for future in futures]

    assert len(opener.calls) == 1
    assert all(handle is handles[0] for handle in handles)
    assert store_manager.state == LifecycleState.READY


def test_initialize_failure(config: StoreConfig) -> None:
    """Test a failed open is reported and leaves the manager uninitialized."""
    (config.directory / "broken.yaml").write_text("entries: [")
    store_manager = StoreManager(config)

    with pytest.raises(StoreInitError):
        store_manager.initialize("broken")
    assert store_manager.state == LifecycleState.UNINITIALIZED
    assert store_manager.current() is None


def test_process_wide_instance(
    config: StoreConfig, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test the module level functions share one handle."""
    monkeypatch.setattr(manager, "_manager", StoreManager(config))
    assert manager.get_instance() is None

    handle = manager.init("process", encrypted=True)
    assert manager.get_instance() is handle
    assert manager.init() is handle
    assert handle.encrypted
