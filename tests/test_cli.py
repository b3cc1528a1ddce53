"""Tests for the bsh command-line front end."""

from __future__ import annotations

from typer.testing import CliRunner

from bsh.cli import app
from tests.helpers import needs_bash, py

runner = CliRunner()


def test_run_capture():
    result = runner.invoke(app, ["run", py("print('hello')"), "--capture"])
    assert result.exit_code == 0, result.output
    assert result.output == "hello\n"


def test_run_streams_output():
    result = runner.invoke(app, ["run", py("print('direct')")])
    assert result.exit_code == 0, result.output
    assert "direct" in result.output


def test_run_exit_status():
    result = runner.invoke(app, ["run", py("import sys; sys.exit(4)"), "--exit-status"])
    assert result.exit_code == 4
    assert "exit status: 4" in result.output


def test_run_failure_exits_one():
    result = runner.invoke(app, ["run", py("import sys; sys.exit(4)")])
    assert result.exit_code == 1
    assert "unexpected error in" in result.output


def test_missing_executable():
    result = runner.invoke(app, ["run", "bsh-no-such-binary-xyz"])
    assert result.exit_code == 1
    assert "failed to start" in result.output


def test_malformed_command_exits_two():
    result = runner.invoke(app, ["run", 'echo "unterminated'])
    assert result.exit_code == 2
    assert "malformed command" in result.output


def test_env_and_dir(tmp_path):
    code = "import os; print(os.environ['BSH_FOO'], os.path.basename(os.getcwd()))"
    result = runner.invoke(
        app, ["run", py(code), "--env", "BSH_FOO=bar", "--dir", str(tmp_path), "--capture"]
    )
    assert result.exit_code == 0, result.output
    assert result.output == f"bar {tmp_path.name}\n"


def test_verbose_trace():
    cmd = py("pass")
    result = runner.invoke(app, ["run", cmd, "--verbose"])
    assert result.exit_code == 0, result.output
    assert f"Exec: {cmd}" in result.output


def test_capture_and_exit_status_conflict():
    result = runner.invoke(app, ["run", py("pass"), "--capture", "--exit-status"])
    assert result.exit_code == 2


@needs_bash
def test_bash_pipe():
    result = runner.invoke(app, ["bash", "echo one two | tr ' ' '\\n' | wc -l", "--capture"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "2"


@needs_bash
def test_bash_exit_status():
    result = runner.invoke(app, ["bash", "exit 5", "--exit-status"])
    assert result.exit_code == 5


def test_missing_shell(monkeypatch):
    monkeypatch.setenv("BSH_SHELL", "bsh-no-such-shell")
    result = runner.invoke(app, ["bash", "true"])
    assert result.exit_code == 1
    assert "failed to start" in result.output


def test_capture_output_is_not_rendered():
    code = "import sys; sys.stdout.write('x :smile: [bold]y[/bold]\\rz\\n')"
    result = runner.invoke(app, ["run", py(code), "--capture"])
    assert result.exit_code == 0, result.output
    assert result.output == "x :smile: [bold]y[/bold]\rz\n"
