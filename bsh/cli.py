"""CLI entry point for bsh: run one command through a bsh context.

Usage:
    bsh run "go build ./..." --dir src --env CGO_ENABLED=0
    bsh run "git rev-parse HEAD" --capture
    bsh bash "ls | grep foo" --exit-status
    bsh bash "echo $0" --shell sh

Environment variables:
    BSH_SHELL  default interpreter for ``bsh bash`` (fallback: "bash")
"""

from __future__ import annotations

import sys

import typer
from rich.console import Console

from bsh.config import DEFAULT_SHELL, ShellConfig
from bsh.core import Bsh
from bsh.errors import BshError, MalformedCommandError

app = typer.Typer(help="Run external commands with bsh's error handling.")
console = Console(soft_wrap=True)


def _execute(
    command: str,
    delegate: bool,
    directory: str | None,
    env: list[str] | None,
    capture: bool,
    exit_status: bool,
    verbose: bool,
    shell: str = DEFAULT_SHELL,
) -> None:
    if capture and exit_status:
        raise typer.BadParameter("--capture and --exit-status are mutually exclusive")

    try:
        config = ShellConfig(shell=shell, verbose=verbose)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    sh = Bsh(config=config)
    cmd = sh.cmd(command).dir(directory).env(*(env or []))

    try:
        if capture:
            out = cmd.bash_str() if delegate else cmd.run_str()
            # captured output is passed through byte for byte, not rendered
            sys.stdout.write(out)
            sys.stdout.flush()
        elif exit_status:
            code = cmd.bash_exit_status() if delegate else cmd.run_exit_status()
            console.print(f"exit status: {code}", style="bold")
            raise typer.Exit(code=code)
        elif delegate:
            cmd.bash()
        else:
            cmd.run()
    except MalformedCommandError as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(code=2)
    except BshError as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(code=1)


@app.command("run")
def run_cmd(
    command: str = typer.Argument(help="Command line, split into words and executed directly."),
    directory: str | None = typer.Option(None, "--dir", "-C", help="Working directory."),
    env: list[str] | None = typer.Option(None, "--env", "-e", help="Extra KEY=VALUE environment entry (repeatable)."),
    capture: bool = typer.Option(False, help="Capture stdout+stderr and print them after the command exits."),
    exit_status: bool = typer.Option(False, help="Print the exit status and exit with it."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Trace what bsh executes."),
) -> None:
    """Run COMMAND without a shell. Pipes and redirections are passed as plain arguments."""
    _execute(command, False, directory, env, capture, exit_status, verbose)


@app.command("bash")
def bash_cmd(
    command: str = typer.Argument(help="Command line handed verbatim to '<shell> -c'."),
    directory: str | None = typer.Option(None, "--dir", "-C", help="Working directory."),
    env: list[str] | None = typer.Option(None, "--env", "-e", help="Extra KEY=VALUE environment entry (repeatable)."),
    capture: bool = typer.Option(False, help="Capture stdout+stderr and print them after the command exits."),
    exit_status: bool = typer.Option(False, help="Print the exit status and exit with it."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Trace what bsh executes."),
    shell: str = typer.Option(DEFAULT_SHELL, envvar="BSH_SHELL", help="Shell interpreter to delegate to."),
) -> None:
    """Run COMMAND through the shell so pipes, globs and redirections work."""
    _execute(command, True, directory, env, capture, exit_status, verbose, shell)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
