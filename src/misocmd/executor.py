"""Runs one executable with merged options."""

from collections.abc import Mapping, Sequence

from misocmd import process
from misocmd.options import SpawnOptions, merge_options
from misocmd.result import MisoCommandResult


class MisoCommandExecutor:
    def __init__(self, path: str, options: SpawnOptions | Mapping | None = None):
        self.path = path
        self.options = SpawnOptions.coerce(options)

    def __repr__(self) -> str:
        return f"MisoCommandExecutor(path={self.path!r}, options={self.options!r})"

    def execute(
        self,
        args: Sequence[str],
        extra_args: Sequence[str],
        options: SpawnOptions | Mapping | None = None,
    ) -> MisoCommandResult:
        """Run path with args + extra_args. Call options override the base options."""
        merged = merge_options(self.options, options)
        outcome = process.spawn(self.path, [*args, *extra_args], merged)
        return MisoCommandResult(outcome, mime_type=merged.mime_type)
