from misocmd.command import (
    MisoCommand,
    MisoCommandBuilder,
    UnknownCommandError,
    build_miso_command,
)
from misocmd.options import SpawnOptions
from misocmd.result import Blob, MisoCommandResult

try:
    from importlib.metadata import version

    __version__ = version("misocmd")
except Exception:
    __version__ = "0.0.0"

__all__ = [
    "Blob",
    "MisoCommand",
    "MisoCommandBuilder",
    "MisoCommandResult",
    "SpawnOptions",
    "UnknownCommandError",
    "build_miso_command",
]
