"""Parse a YAML command file into a builder."""

import os
from dataclasses import dataclass, field

import yaml

from misocmd.command import MisoCommand, MisoCommandBuilder, build_miso_command
from misocmd.options import SpawnOptions

DEFAULT_FILE = "misocmd.yaml"


@dataclass
class CommandFile:
    path: str
    options: SpawnOptions = field(default_factory=SpawnOptions)
    commands: dict[str, list[str]] = field(default_factory=dict)

    def builder(self) -> MisoCommandBuilder:
        builder = build_miso_command(self.path, self.options)
        for name, args in self.commands.items():
            builder = builder.command(name, args)
        return builder

    def build(self) -> MisoCommand:
        return self.builder().build()


def resolve_file() -> str:
    """Resolve the command file to use.

    Order: MISOCMD_FILE env → misocmd.yaml in the working directory.
    """
    return os.environ.get("MISOCMD_FILE") or DEFAULT_FILE


def _parse_options(raw) -> SpawnOptions:
    if raw is None:
        return SpawnOptions()
    if not isinstance(raw, dict):
        raise ValueError("'options' must be a mapping")
    raw = dict(raw)
    if isinstance(raw.get("env"), dict):
        # YAML scalars (ports, flags) arrive as int/bool
        raw["env"] = {str(k): str(v) for k, v in raw["env"].items()}
    try:
        return SpawnOptions.coerce(raw)
    except TypeError as e:
        raise ValueError(str(e)) from e


def _parse_args(name: str, raw) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"Command {name!r}: preset args must be a list")
    return [str(a) for a in raw]


def parse_command_file(data: dict) -> CommandFile:
    """Parse a loaded command file dict into a CommandFile.

    Command order follows the file. Raises ValueError on malformed input.
    """
    if not isinstance(data, dict):
        raise ValueError("Command file must be a mapping")

    path = data.get("path")
    if not path or not isinstance(path, str):
        raise ValueError("Command file is missing 'path'")

    commands_raw = data.get("commands") or {}
    if not isinstance(commands_raw, dict):
        raise ValueError("'commands' must be a mapping of name to args")

    commands = {}
    for name, raw_args in commands_raw.items():
        name = str(name)
        if not name:
            raise ValueError("Command names must be non-empty")
        commands[name] = _parse_args(name, raw_args)

    return CommandFile(path=path, options=_parse_options(data.get("options")), commands=commands)


def load_command_file(filename: str | None = None) -> CommandFile:
    """Read and parse a command file (default: resolve_file())."""
    filename = filename or resolve_file()
    with open(filename) as f:
        data = yaml.safe_load(f)
    return parse_command_file(data)
