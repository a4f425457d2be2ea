"""Pytest configuration and shared fixtures for hook-dump tests."""

import queue

import pytest

import hook_dump.io.logging_setup
import hook_dump.server
from hook_dump.store import PayloadStore


# ---------------------------------------------------------------------------
# Isolation fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep every test away from the real config, data and log directories."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("HOOK_DUMP_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("HOOK_DUMP_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("HOOK_DUMP_LOG_FILE", raising=False)
    monkeypatch.delenv("HOOK_DUMP_LOG_LEVEL", raising=False)
    yield
    hook_dump.io.logging_setup.reset()


@pytest.fixture
def tmp_settings(tmp_path, monkeypatch):
    """Redirect settings file to a temp directory."""
    settings_file = tmp_path / "settings.json"
    monkeypatch.setattr(
        "hook_dump.settings.get_config_path",
        lambda: settings_file,
    )
    return settings_file


@pytest.fixture
def store(tmp_path):
    """Fresh PayloadStore in a temp directory."""
    return PayloadStore(tmp_path / "store")


# ---------------------------------------------------------------------------
# Live HTTP endpoint
# ---------------------------------------------------------------------------

@pytest.fixture
def live_server(store):
    """Start the webhook endpoint on an OS-assigned port.

    Yields (base_url, store, event_queue).
    """
    event_q = queue.Queue()
    handler = hook_dump.server.make_handler_class(store, event_q)
    srv, port, _ = hook_dump.server.start_server("127.0.0.1", 0, handler)
    try:
        yield f"http://127.0.0.1:{port}", store, event_q
    finally:
        hook_dump.server.stop_server(srv, timeout=2.0)
