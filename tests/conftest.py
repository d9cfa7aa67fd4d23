"""Root pytest configuration for all tests."""

import logging

import pytest

# requests/urllib3 log every retry and connection at DEBUG; keep test output readable.
logging.getLogger("urllib3").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real user config and environment."""
    monkeypatch.setenv("YTKB_CONFIG", str(tmp_path / "user-config" / "config.yaml"))
    for name in ("YOUTRACK_URL", "YOUTRACK_TOKEN", "KB_KEY"):
        monkeypatch.delenv(name, raising=False)
