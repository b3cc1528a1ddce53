"""Shared helpers for the bsh test suite."""

from __future__ import annotations

import shlex
import shutil
import sys

import pytest

# Interpreter used as a portable child process by the direct-exec tests.
PY = shlex.quote(sys.executable)

needs_bash = pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")
needs_posix_tools = pytest.mark.skipif(
    any(shutil.which(tool) is None for tool in ("bash", "echo", "wc")),
    reason="bash, echo and wc are required",
)
posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")


def py(code: str) -> str:
    """Command line that runs *code* with the current interpreter."""
    return f"{PY} -c {shlex.quote(code)}"


class SpyHandler:
    """Error handler that records every escalated error instead of raising."""

    def __init__(self):
        self.errors: list[BaseException] = []

    def __call__(self, err: BaseException) -> None:
        self.errors.append(err)
