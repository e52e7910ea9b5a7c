"""Spawn options + call > build > unset resolution."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class SpawnOptions:
    # milliseconds; 0 disables the timeout
    timeout: float | None = None
    input: str | bytes | None = None
    cwd: str | None = None
    env: Mapping[str, str] | None = None
    encoding: str | None = None
    mime_type: str | None = None

    def __post_init__(self):
        if self.timeout is not None and self.timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {self.timeout}")

    @classmethod
    def coerce(cls, value: "SpawnOptions | Mapping | None") -> "SpawnOptions":
        """Accept None, a SpawnOptions, or a mapping of field names."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(value) - known)
        if unknown:
            raise TypeError(f"Unknown spawn option(s): {', '.join(unknown)}")
        return cls(**value)


def merge_options(
    base: SpawnOptions | Mapping | None, override: SpawnOptions | Mapping | None
) -> SpawnOptions:
    """Resolve options field by field.

    A field set on *override* wins, otherwise the *base* field is kept.
    Fields set on neither stay None, which leaves the subprocess default.
    """
    base = SpawnOptions.coerce(base)
    override = SpawnOptions.coerce(override)
    changes = {
        f.name: getattr(override, f.name)
        for f in fields(override)
        if getattr(override, f.name) is not None
    }
    return replace(base, **changes)
