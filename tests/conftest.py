"""Shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def clear_secret_env(monkeypatch):
    """Keep real credentials in the environment out of tests."""
    for name in ("NOTION_API_KEY", "CANVAS_API_KEY", "CANVAS_URL"):
        monkeypatch.delenv(name, raising=False)
