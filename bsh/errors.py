"""bsh error types.

Every failure that a command or file helper can report is a ``BshError``,
except raw ``OSError`` values escalated by the file helpers.
"""

from __future__ import annotations

__all__ = [
    "BshError",
    "MalformedCommandError",
    "CommandStartError",
    "CommandSignaledError",
    "ExitStatusError",
    "CommandConsumedError",
]


class BshError(Exception):
    """Base exception for all bsh errors."""
    pass


class MalformedCommandError(BshError, ValueError):
    """Raised when a command line cannot be split into arguments.

    No process is spawned when this is reported.
    """

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"malformed command {command!r}: {reason}")


class CommandStartError(BshError):
    """Raised when the process could not be started at all.

    Attributes:
        command: The raw command line
        cause: The underlying OSError/ValueError from the spawn attempt
    """

    def __init__(self, command: str, cause: BaseException):
        self.command = command
        self.cause = cause
        super().__init__(f"failed to start {command!r}: {cause}")


class CommandSignaledError(BshError):
    """Raised when the process was killed by a signal and left no exit code."""

    def __init__(self, command: str, signal: int):
        self.command = command
        self.signal = signal
        super().__init__(f"{command!r} was killed by signal {signal}")


class ExitStatusError(BshError):
    """
    Raised when a command ran to completion with a non-zero exit code.

    Attributes:
        command: The command that failed
        exit_code: The non-zero exit code
    """

    def __init__(self, command: str, exit_code: int):
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"{command!r} exited with status {exit_code}")


class CommandConsumedError(BshError, RuntimeError):
    """Raised when a terminal call is made on an already executed command."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"command {command!r} was already executed")
