"""
Pytest configuration and shared fixtures for all tests.

This module provides shared fixtures and configuration for the test suite,
including:
- Isolation of the process-wide Netflex API client and cache
- A mocked API client for foundation and signing tests
- Sample pass assets on disk
"""
import base64
from unittest.mock import MagicMock

import pytest

from netflex import Cache, NetflexAPIClient, set_cache, set_client


# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


@pytest.fixture(autouse=True)
def isolate_process_state():
    """Give every test a fresh cache and no default API client.

    The cache and client are module-level singletons in the netflex
    package; without this, data cached by one test would leak into the next.
    """
    set_cache(Cache())
    set_client(None)

    yield

    set_cache(None)
    set_client(None)


@pytest.fixture
def api():
    """Install a mocked Netflex API client as the process-wide default.

    Yields:
        MagicMock with the NetflexAPIClient interface
    """
    client = MagicMock(spec=NetflexAPIClient)
    set_client(client)
    yield client


@pytest.fixture
def png_file(tmp_path):
    """Write a small PNG to disk and return its path as a string."""
    path = tmp_path / "logo.png"
    path.write_bytes(PNG_BYTES)
    return str(path)
