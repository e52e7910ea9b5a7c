"""Named command registry + the fluent builder that fills it."""

from collections.abc import Callable, Iterator, Mapping, Sequence

from misocmd.executor import MisoCommandExecutor
from misocmd.options import SpawnOptions, merge_options
from misocmd.result import MisoCommandResult

# Seed key of every builder; never part of a built registry.
PLACEHOLDER = ""

MisoCommandFunc = Callable[..., MisoCommandResult]


class UnknownCommandError(KeyError):
    def __init__(self, name: str, known: Sequence[str] = ()):
        super().__init__(name)
        self.name = name
        self.known = tuple(known)

    def __str__(self) -> str:
        known = ", ".join(self.known) or "none"
        return f"Unknown command {self.name!r} (known: {known})"


class MisoCommand(Mapping[str, MisoCommandFunc]):
    """Read-only mapping of command name -> invocation function.

    Commands are reachable as items (``cmds["list"]``) or attributes
    (``cmds.list``). Names that collide with Mapping methods such as
    ``get`` or ``keys`` only work as items.
    """

    def __init__(self, entries: Mapping[str, MisoCommandFunc] | None = None):
        self._entries = dict(entries or {})

    def __getitem__(self, name: str) -> MisoCommandFunc:
        try:
            return self._entries[name]
        except KeyError:
            raise UnknownCommandError(name, [k for k in self._entries if k != PLACEHOLDER]) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getattr__(self, name: str) -> MisoCommandFunc:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except UnknownCommandError as e:
            raise AttributeError(str(e), name=name, obj=self) from None

    def __dir__(self):
        return sorted(set(super().__dir__()) | {k for k in self._entries if k.isidentifier()})

    def __repr__(self) -> str:
        return f"MisoCommand({list(self._entries)!r})"


def _as_arg_list(value: Sequence[str] | None, what: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        raise TypeError(f"{what} must be a sequence of strings, not {type(value).__name__}")
    return list(value)


def create_command(name: str, args: Sequence[str], executor: MisoCommandExecutor) -> MisoCommand:
    """Return a one-entry registry binding *name* to *args* on *executor*."""
    preset = _as_arg_list(args, "preset args")

    def invoke(
        extra_args: Sequence[str] | None = None,
        options: SpawnOptions | Mapping | None = None,
        **overrides,
    ) -> MisoCommandResult:
        if overrides:
            options = merge_options(options, overrides)
        return executor.execute(preset, _as_arg_list(extra_args, "extra args"), options)

    invoke.__name__ = invoke.__qualname__ = name or "placeholder"
    return MisoCommand({name: invoke})


def combine_commands(c1: Mapping[str, MisoCommandFunc], c2: Mapping[str, MisoCommandFunc]) -> MisoCommand:
    """Merge two registries into a new one. Entries of *c2* win."""
    return MisoCommand({**c1, **c2})


class MisoCommandBuilder:
    """Immutable builder: every ``command()`` returns a new builder."""

    def __init__(self, commands: MisoCommand, executor: MisoCommandExecutor):
        self._commands = commands
        self._executor = executor

    def __repr__(self) -> str:
        return f"MisoCommandBuilder(path={self._executor.path!r}, commands={self.names!r})"

    @property
    def executor(self) -> MisoCommandExecutor:
        return self._executor

    @property
    def names(self) -> list[str]:
        return [name for name in self._commands if name != PLACEHOLDER]

    def command(self, name: str, args: Sequence[str] | None = None) -> "MisoCommandBuilder":
        """Add command *name* with preset *args*. Re-adding a name replaces it."""
        if not isinstance(name, str):
            raise TypeError(f"Command name must be a str, got {type(name).__name__}")
        if not name:
            raise ValueError(f"Command name must be a non-empty string, got {name!r}")
        entry = create_command(name, args or [], self._executor)
        return MisoCommandBuilder(combine_commands(self._commands, entry), self._executor)

    def build(self) -> MisoCommand:
        """Return the registry built so far. The builder stays usable."""
        return MisoCommand({k: v for k, v in self._commands.items() if k != PLACEHOLDER})


def build_miso_command(
    path: str, options: SpawnOptions | Mapping | None = None, **overrides
) -> MisoCommandBuilder:
    """Start a builder for *path*.

    *options* (and keyword *overrides*, which win over it) are the base
    options for every command added to the builder.
    """
    if overrides:
        options = merge_options(options, overrides)
    executor = MisoCommandExecutor(path, options)
    return MisoCommandBuilder(create_command(PLACEHOLDER, [], executor), executor)
