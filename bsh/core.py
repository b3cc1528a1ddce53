"""The ``Bsh`` context: ambient streams, console output and the error handler.

Every command and file helper created from a ``Bsh`` reports unhandled
failures through ``Bsh.panic``. By default that raises the error; a custom
handler installed with ``set_error_handler`` gets the error instead and the
helper returns normally afterwards.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any

from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style

from bsh.command import Command
from bsh.config import ShellConfig
from bsh.fs import FileOps

ErrorHandler = Callable[[BaseException], None]

_STYLE_ECHO = "bright_white"
_STYLE_VERBOSE = "bright_cyan"
_STYLE_ASK = "bright_blue"
_STYLE_WARN = "bright_yellow"

_COLOR_SYSTEMS = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.STANDARD,
}


def exe_name(path: str) -> str:
    """Add ``.exe`` to *path* on Windows."""
    if sys.platform == "win32":
        return path + ".exe"
    return path


class Bsh(FileOps):
    """Owning context for commands and helpers.

    Streams left as None resolve to the interpreter's current
    ``sys.stdin`` / ``sys.stdout`` / ``sys.stderr`` at use time.
    """

    def __init__(
        self,
        stdin: Any = None,
        stdout: Any = None,
        stderr: Any = None,
        *,
        config: ShellConfig | None = None,
        error_handler: ErrorHandler | None = None,
    ):
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.config = config if config is not None else ShellConfig()
        self._error_handler = error_handler
        self._console: Console | None = None
        self._console_key: tuple[int, bool] | None = None

    def ensure_stdin(self) -> Any:
        return sys.stdin if self.stdin is None else self.stdin

    def ensure_stdout(self) -> Any:
        return sys.stdout if self.stdout is None else self.stdout

    def ensure_stderr(self) -> Any:
        return sys.stderr if self.stderr is None else self.stderr

    # ------------------------------------------------------------------
    # Command starters
    # ------------------------------------------------------------------

    def cmd(self, command: str) -> Command:
        return Command(self, command)

    def cmdf(self, fmt: str, *args: Any) -> Command:
        return Command(self, fmt % args if args else fmt)

    # ------------------------------------------------------------------
    # Error handling
    # ------------------------------------------------------------------

    @property
    def error_handler(self) -> ErrorHandler | None:
        return self._error_handler

    def set_error_handler(self, handler: ErrorHandler | None) -> None:
        """Replace the handler used by ``panic``. None restores raising."""
        self.verbose_log("Error handler changed")
        self._error_handler = handler

    def panic(self, err: BaseException) -> None:
        """Hand an unhandled error to the error handler, or raise it if none is set."""
        if self._error_handler is not None:
            self._error_handler(err)
        else:
            raise err

    # ------------------------------------------------------------------
    # Verbosity
    # ------------------------------------------------------------------

    def set_verbose(self, verbose: bool) -> None:
        self.config.verbose = verbose

    def is_verbose(self) -> bool:
        return self.config.verbose

    # ------------------------------------------------------------------
    # Console output
    # ------------------------------------------------------------------

    @property
    def console(self) -> Console:
        out = self.ensure_stdout()
        key = (id(out), self.config.disable_color)
        if self._console is None or self._console_key != key:
            self._console = Console(
                file=out,
                no_color=self.config.disable_color or None,
                highlight=False,
                emoji=False,
                soft_wrap=True,
            )
            self._console_key = key
        return self._console

    def _echo(self, text: str, style: str, newline: bool = True) -> None:
        if newline and not text.endswith("\n"):
            text += "\n"
        console = self.console
        color_system = _COLOR_SYSTEMS.get(console.color_system or "")
        if text and color_system is not None and not console.no_color:
            # color only the line, so the newline stays outside the reset
            body = text.rstrip("\n")
            text = Style.parse(style).render(body, color_system=color_system) + text[len(body):]
        out = self.ensure_stdout()
        out.write(text)
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    def echo(self, text: str) -> None:
        """Write *text* to stdout, making sure it ends with a newline."""
        self._echo(text, _STYLE_ECHO)

    def echof(self, fmt: str, *args: Any) -> None:
        self._echo(fmt % args, _STYLE_ECHO)

    def verbose_log(self, text: str) -> None:
        if not self.config.verbose:
            return
        self._echo(text, _STYLE_VERBOSE)

    def verbosef(self, fmt: str, *args: Any) -> None:
        if not self.config.verbose:
            return
        self._echo(fmt % args, _STYLE_VERBOSE)

    def warn(self, text: str) -> None:
        self._echo(text, _STYLE_WARN)

    def warnf(self, fmt: str, *args: Any) -> None:
        self._echo(fmt % args, _STYLE_WARN)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def scan_line(self) -> str:
        """Read one line from stdin, without its trailing newline."""
        line, err = self.scan_line_err()
        if err is not None:
            self.panic(err)
        return line

    def scan_line_err(self) -> tuple[str, BaseException | None]:
        try:
            line = self.ensure_stdin().readline()
        except (OSError, ValueError) as e:
            return "", e
        if isinstance(line, bytes):
            line = line.decode(errors="replace")
        if not line.endswith("\n"):
            return "", EOFError("end of input before a newline")
        return line[:-1], None

    def ask(self, prompt: str) -> str:
        """Print *prompt* (no newline added) and read the answer line."""
        self._echo(prompt, _STYLE_ASK, newline=False)
        return self.scan_line()

    def askf(self, fmt: str, *args: Any) -> str:
        return self.ask(fmt % args)

    def exe_name(self, path: str) -> str:
        return exe_name(path)
