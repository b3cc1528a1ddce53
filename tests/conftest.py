"""
Pytest configuration and shared fixtures for bsh tests.

Every test gets its own ``Bsh`` context bound to in-memory streams, so error
handlers and verbosity never leak between tests.
"""

from __future__ import annotations

import io

import pytest

from bsh import Bsh, ShellConfig
from tests.helpers import SpyHandler


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def sh(out):
    """Isolated context: empty stdin, stdout and stderr captured in ``out``."""
    return Bsh(
        stdin=io.BytesIO(b""),
        stdout=out,
        stderr=out,
        config=ShellConfig(disable_color=True),
    )


@pytest.fixture
def spy(sh):
    """Install a recording error handler on ``sh``."""
    handler = SpyHandler()
    sh.set_error_handler(handler)
    return handler
