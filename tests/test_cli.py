"""Tests for cli.py — Click CLI commands."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from misocmd import process
from misocmd.cli import exit_status, main
from misocmd.result import MisoCommandResult

COMMAND_FILE_YAML = """\
path: sh
options:
  timeout: 10000
commands:
  say: [-c, 'echo "$@"', say]
  json: [-c, 'echo "{\\"a\\": [1, 2]}"']
  fail: [-c, 'echo oops >&2; exit 3']
  cat: [-c, cat]
"""


@pytest.fixture
def command_file(tmp_path):
    path = tmp_path / "misocmd.yaml"
    path.write_text(COMMAND_FILE_YAML)
    return str(path)


def _result(**kwargs):
    fields = {"args": ["x"], "returncode": 0, "stdout": b"", "stderr": b""}
    fields.update(kwargs)
    return MisoCommandResult(process.Outcome(**fields))


def test_run_text(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", command_file, "say", "hello", "world"])
    assert result.exit_code == 0
    assert result.output == "hello world\n"


def test_run_json(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", command_file, "--format", "json", "json"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"a": [1, 2]}


def test_run_json_invalid(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", command_file, "--format", "json", "say", "nope"])
    assert result.exit_code == 1


def test_run_lines(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", command_file, "--format", "lines", "say", "a"])
    assert result.exit_code == 0
    assert "   1  a" in result.output
    assert "   2  " in result.output


def test_run_input(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", command_file, "--input", "piped", "cat"])
    assert result.exit_code == 0
    assert result.output == "piped"


def test_run_passes_unknown_options_through(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", command_file, "say", "--flag", "-x"])
    assert result.exit_code == 0
    assert result.output == "--flag -x\n"


def test_run_propagates_exit_code(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", command_file, "fail"])
    assert result.exit_code == 3


def test_run_unknown_command(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", command_file, "sya"])
    assert result.exit_code == 1


def test_run_missing_file(tmp_path):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", str(tmp_path / "nope.yaml"), "say"])
    assert result.exit_code == 1


def test_run_file_is_directory(tmp_path):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", str(tmp_path), "say"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, IsADirectoryError)


def test_run_invalid_file(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("commands: {}\n")
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", str(path), "say"])
    assert result.exit_code == 1


def test_run_uses_env_file(command_file, monkeypatch):
    monkeypatch.setenv("MISOCMD_FILE", command_file)
    runner = CliRunner()
    result = runner.invoke(main, ["run", "say", "env"])
    assert result.exit_code == 0
    assert result.output == "env\n"


def test_run_timeout_override(command_file):
    with patch("misocmd.process.spawn") as mock_spawn:
        mock_spawn.return_value = process.Outcome(args=["sh"], returncode=0, stdout=b"", stderr=b"")
        runner = CliRunner()
        result = runner.invoke(main, ["run", "-f", command_file, "--timeout", "2", "say", "x"])
    assert result.exit_code == 0
    path, args, options = mock_spawn.call_args.args
    assert path == "sh"
    assert args == ["-c", 'echo "$@"', "say", "x"]
    assert options.timeout == 2


def test_run_missing_executable(tmp_path):
    path = tmp_path / "misocmd.yaml"
    path.write_text("path: /nonexistent/misocmd-test-binary\ncommands:\n  go:\n")
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", str(path), "go"])
    assert result.exit_code == 127


def test_list(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["list", "-f", command_file])
    assert result.exit_code == 0
    assert "sh:" in result.output
    assert "say" in result.output
    assert "fail" in result.output


def test_exit_status():
    assert exit_status(_result()) == 0
    assert exit_status(_result(returncode=2)) == 2
    assert exit_status(_result(returncode=None, signal=9)) == 137
    assert exit_status(_result(returncode=None, error=FileNotFoundError())) == 127
    assert exit_status(_result(returncode=None, error=PermissionError())) == 126
    assert exit_status(_result(returncode=None, error=NotADirectoryError())) == 1


def test_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "misocmd" in result.output
    assert "0.1.0" in result.output


def test_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "run" in result.output
    assert "list" in result.output


def test_run_options_after_name_belong_to_command(command_file):
    runner = CliRunner()
    result = runner.invoke(main, ["run", "-f", command_file, "say", "-v", "--format", "json"])
    assert result.exit_code == 0
    assert result.output == "-v --format json\n"
