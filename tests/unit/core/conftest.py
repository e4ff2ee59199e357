"""Shared fixtures for core unit tests"""

import pytest


@pytest.fixture(name="sample_bytes")
def sample_bytes_fixture():
    """Three and a bit blocks of non-repeating bytes."""
    return bytes((i * 37 + 11) % 256 for i in range(200))
