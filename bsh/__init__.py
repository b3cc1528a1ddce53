"""bsh: run commands and file operations from Python scripts without the boilerplate."""

from bsh.command import Command, ExitStatus
from bsh.config import ShellConfig, DEFAULT_SHELL
from bsh.core import Bsh, exe_name
from bsh.errors import (
    BshError,
    CommandConsumedError,
    CommandSignaledError,
    CommandStartError,
    ExitStatusError,
    MalformedCommandError,
)
from bsh.shell import extract_exit_status

__all__ = [
    "Bsh",
    "Command",
    "ExitStatus",
    "ShellConfig",
    "DEFAULT_SHELL",
    "exe_name",
    "extract_exit_status",
    "BshError",
    "CommandConsumedError",
    "CommandSignaledError",
    "CommandStartError",
    "ExitStatusError",
    "MalformedCommandError",
]
