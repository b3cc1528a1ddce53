"""Command builder and runners.

A ``Command`` is obtained from a starter (``Bsh.cmd`` / ``Bsh.cmdf``),
tweaked with zero or more modifiers, then executed by exactly one runner:

    sh.cmd("go build ./...").dir("src").env("CGO_ENABLED=0").run()
    out = sh.cmd("git rev-parse HEAD").run_str()
    code = sh.cmd("ls | grep foo").bash_exit_status()

The ``run*`` runners split the command line themselves and exec the first
word. The ``bash*`` runners hand the line verbatim to ``<shell> -c`` so pipes,
redirection and globbing work.
"""

from __future__ import annotations

import io
import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from bsh.errors import CommandConsumedError, MalformedCommandError
from bsh.shell import extract_exit_status, run_process

if TYPE_CHECKING:
    from bsh.core import Bsh


@dataclass
class ExitStatus:
    """Mutable cell that receives a command's exit code after it runs."""

    value: int | None = None


class Command:
    """One not-yet-run external command bound to its owning ``Bsh``."""

    def __init__(self, sh: Bsh, raw: str):
        self.raw = raw
        self._sh = sh
        self._dir: str | Path | None = None
        self._env: list[str] = []
        self._in: Any = sh.ensure_stdin()
        self._out: Any = sh.ensure_stdout()
        self._err: Any = sh.ensure_stderr()
        self._exit_status: ExitStatus | None = None
        self._consumed = False

    def __repr__(self) -> str:
        return f"Command({self.raw!r})"

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def dir(self, path: str | Path | None) -> Command:
        """Set the working directory. Not validated until the command runs."""
        self._dir = path
        return self

    def env(self, *variables: str) -> Command:
        """Append ``KEY=VALUE`` entries to the inherited environment.

        These are not seen by ``expand_env``.
        """
        self._env.extend(variables)
        return self

    def expand_env(self) -> Command:
        """Expand ``$VAR`` and ``${VAR}`` in the command line from ``os.environ``."""
        self.raw = os.path.expandvars(self.raw)
        return self

    def stdin(self, reader: Any) -> Command:
        if reader is None:
            raise ValueError("stdin cannot be None")
        self._in = reader
        return self

    def stdout(self, writer: Any) -> Command:
        """Bind stdout. ``None`` discards the output."""
        self._out = writer
        return self

    def stderr(self, writer: Any) -> Command:
        """Bind stderr. ``None`` discards the output."""
        self._err = writer
        return self

    def out_err(self, writer: Any) -> Command:
        self._out = writer
        self._err = writer
        return self

    def exit_status(self, cell: ExitStatus) -> Command:
        """Have the exit code stored in *cell* after the command runs.

        The cell is only written when the process actually produced an
        exit code, whichever runner is used.
        """
        self._exit_status = cell
        return self

    def get_stdin(self) -> Any:
        return self._in

    def get_stdout(self) -> Any:
        return self._out

    def get_stderr(self) -> Any:
        return self._err

    # ------------------------------------------------------------------
    # Runners: direct exec
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Run the command; escalate any error or non-zero exit."""
        err = self._run()
        if err is not None:
            self._fail(self.raw, err)

    def run_err(self) -> BaseException | None:
        """Run the command and return its error (None on a zero exit)."""
        return self._run()

    def run_str(self) -> str:
        """Run the command and return its stdout and stderr combined.

        Overrides any stdout/stderr bound earlier.
        """
        self._check_unused()
        buf = io.StringIO()
        self.out_err(buf)
        err = self._run()
        if err is not None:
            self._fail(self.raw, err)
        return buf.getvalue()

    def run_exit_status(self) -> int:
        """Run the command and return its exit code.

        Only escalates when no exit code could be obtained; then returns -1.
        """
        code, err = extract_exit_status(self._run())
        if err is not None:
            self._fail(self.raw, err)
        return code

    # ------------------------------------------------------------------
    # Runners: delegated to the shell
    # ------------------------------------------------------------------

    def bash(self) -> None:
        err = self._bash()
        if err is not None:
            self._fail(self._bash_label(), err)

    def bash_err(self) -> BaseException | None:
        return self._bash()

    def bash_str(self) -> str:
        self._check_unused()
        buf = io.StringIO()
        self.out_err(buf)
        err = self._bash()
        if err is not None:
            self._fail(self._bash_label(), err)
        return buf.getvalue()

    def bash_exit_status(self) -> int:
        code, err = extract_exit_status(self._bash())
        if err is not None:
            self._fail(self._bash_label(), err)
        return code

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _bash_label(self) -> str:
        return f"{self._sh.config.shell} -c {self.raw}"

    def _fail(self, label: str, err: BaseException) -> None:
        self._sh.warnf("unexpected error in %s", label)
        self._sh.panic(err)

    def _check_unused(self) -> None:
        if self._consumed:
            raise CommandConsumedError(self.raw)

    def _consume(self) -> None:
        self._check_unused()
        self._consumed = True

    def _run(self) -> BaseException | None:
        self._consume()
        try:
            argv = shlex.split(self.raw)
        except ValueError as e:
            return MalformedCommandError(self.raw, str(e))
        if not argv:
            return MalformedCommandError(self.raw, "no executable given")
        self._sh.verbosef("Exec: %s", self.raw)
        return self._exec(argv)

    def _bash(self) -> BaseException | None:
        self._consume()
        self._sh.verbosef("Bash: %s", self.raw)
        return self._exec([self._sh.config.shell, "-c", self.raw])

    def _exec(self, argv: list[str]) -> BaseException | None:
        if self._env:
            self._sh.verbosef("+Env: %s", self._env)
        err = run_process(
            argv,
            self.raw,
            cwd=self._dir,
            env=self._env,
            stdin=self._in,
            stdout=self._out,
            stderr=self._err,
        )
        if self._exit_status is not None:
            code, e = extract_exit_status(err)
            if e is None:
                self._exit_status.value = code
        return err
