"""Tests for the context module."""

import logging

import pytest

from secure_prefs.context import trace_context


def test_nested_operations(caplog: pytest.LogCaptureFixture) -> None:
    """Test nested operations are logged with their enclosing operations."""
    with caplog.at_level(logging.DEBUG, logger="secure_prefs.context"):
        with trace_context("Open store a"):
            with trace_context("Load keyset"):
                pass
    messages = [
        record.getMessage()
        for record in caplog.records
        if record.name == "secure_prefs.context"
    ]
    assert messages[0] == "Starting Open store a"
    assert messages[1] == "Starting Open store a / Load keyset"
    assert messages[2].startswith("Finished Open store a / Load keyset in ")
    assert messages[3].startswith("Finished Open store a in ")
