"""Configuration for a bsh context."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SHELL = "bash"


@dataclass
class ShellConfig:
    """Settings shared by every command and helper of one ``Bsh`` context.

    Attributes:
        shell: Interpreter used by the shell-delegated strategy (run as ``<shell> -c <cmd>``).
        verbose: Emit the verbose trace (``Exec: ...``, ``Copy: ...``) to stdout.
        disable_color: Never color console output.
    """

    shell: str = DEFAULT_SHELL
    verbose: bool = False
    disable_color: bool = False

    def __post_init__(self) -> None:
        if not self.shell or not self.shell.strip():
            raise ValueError("shell must be a non-empty executable name")
