"""Click entry point — run commands from a command file."""

import json
import shlex
import sys

import click
import yaml

from misocmd import __version__, config, log
from misocmd.command import UnknownCommandError
from misocmd.result import MisoCommandResult


def _load(file: str | None) -> config.CommandFile:
    filename = file or config.resolve_file()
    try:
        return config.load_command_file(filename)
    except FileNotFoundError:
        log.error(f"Command file not found: {filename}")
    except (ValueError, yaml.YAMLError) as e:
        log.error(f"Invalid command file {filename}: {e}")
    except OSError as e:
        log.error(f"Cannot read command file {filename}: {e}")
    sys.exit(1)


def exit_status(result: MisoCommandResult) -> int:
    """Map a result to a shell-style exit status."""
    if isinstance(result.error, FileNotFoundError):
        return 127
    if isinstance(result.error, PermissionError):
        return 126
    if result.signal is not None:
        return 128 + result.signal
    if result.exit_code is None:
        return 1
    return result.exit_code


@click.group()
@click.version_option(version=__version__, prog_name="misocmd")
def main():
    """Named, preset-argument commands for a single executable."""


@main.command(name="list")
@click.option("--file", "-f", "file", default=None, help="Command file (default: $MISOCMD_FILE or misocmd.yaml)")
def list_cmd(file):
    """List the commands defined in the command file."""
    cmd_file = _load(file)
    log.info(f"{cmd_file.path}:")
    for name, args in cmd_file.commands.items():
        log.info(f"  {name}  {shlex.join(args)}".rstrip())


@main.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.option("--file", "-f", "file", default=None, help="Command file (default: $MISOCMD_FILE or misocmd.yaml)")
@click.option(
    "--format", "fmt", type=click.Choice(["text", "json", "lines"]), default="text", help="How to print stdout"
)
@click.option("--timeout", type=float, default=None, help="Milliseconds before the command is killed (0: never)")
@click.option("--input", "stdin", default=None, help="Data written to the command's stdin")
@click.option("--verbose", "-v", is_flag=True, help="Show the command line and outcome")
@click.argument("name")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def run(file, fmt, timeout, stdin, verbose, name, args):
    """Run command NAME with extra ARGS appended to its preset args."""
    cmd_file = _load(file)
    commands = cmd_file.build()

    try:
        fn = commands[name]
    except UnknownCommandError as e:
        log.error(str(e))
        sys.exit(1)

    if verbose:
        log.step(f"$ {shlex.join([cmd_file.path, *cmd_file.commands[name], *args])}")

    result = fn(list(args), timeout=timeout, input=stdin)

    if result.error is not None and not result.spawn_result.timed_out:
        log.error(f"{name}: {result.error}")
        sys.exit(exit_status(result))

    stderr = result.stderr_text()
    if stderr:
        click.echo(stderr, err=True, nl=False)

    if fmt == "json":
        try:
            click.echo(json.dumps(result.as_object(), indent=2))
        except json.JSONDecodeError as e:
            log.error(f"{name}: output is not valid JSON: {e}")
            sys.exit(1)
    elif fmt == "lines":
        for i, line in enumerate(result.as_lines(), start=1):
            click.echo(f"{i:>4}  {line}")
    else:
        click.echo(result.as_text(), nl=False)

    if result.spawn_result.timed_out:
        log.failure(f"{name} timed out after {timeout or cmd_file.options.timeout}ms")
    elif verbose and result.ok:
        log.success(f"{name} exited 0")
    elif verbose and result.signal is not None:
        log.failure(f"{name} killed by signal {result.signal}")
    elif verbose:
        log.failure(f"{name} exited {result.exit_code}")

    sys.exit(exit_status(result))


if __name__ == "__main__":
    main()
