"""Process spawn/wait helper and exit status extraction. No external dependencies."""

from __future__ import annotations

import io
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from bsh.errors import CommandSignaledError, CommandStartError, ExitStatusError


def _fileno(stream: Any) -> int | None:
    """Return the OS file descriptor behind *stream*, or None if it has none."""
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
        return None


def _merged_env(command: str, extra: Sequence[str]) -> dict[str, str] | None:
    if not extra:
        return None
    env = dict(os.environ)
    for entry in extra:
        key, sep, value = entry.partition("=")
        if not sep:
            raise CommandStartError(
                command, ValueError(f"malformed environment entry {entry!r}")
            )
        env[key] = value
    return env


def _input_arg(command: str, stream: Any) -> tuple[Any, bytes | None]:
    if _fileno(stream) is not None:
        return stream, None
    try:
        data = stream.read()
    except (OSError, ValueError) as e:
        raise CommandStartError(command, e) from e
    if isinstance(data, str):
        data = data.encode()
    return subprocess.PIPE, data or b""


def _output_arg(command: str, stream: Any) -> Any:
    if stream is None:
        return subprocess.DEVNULL
    if _fileno(stream) is not None:
        # anything python buffered so far must land before the child writes
        flush = getattr(stream, "flush", None)
        if flush is not None:
            try:
                flush()
            except (OSError, ValueError) as e:
                raise CommandStartError(command, e) from e
        return stream
    return subprocess.PIPE


def _write(stream: Any, data: bytes) -> None:
    if isinstance(stream, io.TextIOBase):
        stream.write(data.decode(errors="replace"))
    elif isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        stream.write(data)
    else:
        try:
            stream.write(data)
        except TypeError:
            stream.write(data.decode(errors="replace"))
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()


def run_process(
    argv: Sequence[str],
    command: str,
    *,
    cwd: str | Path | None = None,
    env: Sequence[str] = (),
    stdin: Any = None,
    stdout: Any = None,
    stderr: Any = None,
) -> BaseException | None:
    """Spawn *argv*, block until it exits and return the outcome as an error value.

    Returns None on a zero exit, ``ExitStatusError`` on a non-zero exit,
    ``CommandSignaledError`` when the child was killed by a signal and
    ``CommandStartError`` when it could not be started. Output endpoints
    without a file descriptor are filled from pipes once the child exits;
    when stdout and stderr are the same such endpoint both child streams
    share one pipe so their relative order is preserved.
    """
    try:
        merged_env = _merged_env(command, env)
        stdin_arg, input_data = _input_arg(command, stdin)
        stdout_arg = _output_arg(command, stdout)
        if stderr is not None and stderr is stdout and stdout_arg is subprocess.PIPE:
            stderr_arg = subprocess.STDOUT
        else:
            stderr_arg = _output_arg(command, stderr)
    except CommandStartError as e:
        return e

    try:
        proc = subprocess.Popen(
            list(argv),
            cwd=cwd or None,
            env=merged_env,
            stdin=stdin_arg,
            stdout=stdout_arg,
            stderr=stderr_arg,
        )
    except (OSError, ValueError) as e:
        return CommandStartError(command, e)

    out, err = proc.communicate(input_data)
    try:
        if out:
            _write(stdout, out)
        if err:
            _write(stderr, err)
    except (OSError, ValueError) as e:
        return e

    if proc.returncode == 0:
        return None
    if proc.returncode < 0:
        return CommandSignaledError(command, -proc.returncode)
    return ExitStatusError(command, proc.returncode)


def extract_exit_status(err: BaseException | None) -> tuple[int, BaseException | None]:
    """Normalize a wait outcome into ``(exit_code, error)``.

    A non-zero exit is not a failure here: it yields ``(code, None)``.
    Anything that left no exit code yields ``(-1, err)``.
    """
    if err is None:
        return 0, None
    if isinstance(err, ExitStatusError):
        return err.exit_code, None
    return -1, err
