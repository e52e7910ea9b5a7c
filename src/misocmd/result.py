"""Command result — views over the captured stdout of one run."""

import json
import locale
from dataclasses import dataclass

from misocmd.process import Outcome


@dataclass(frozen=True)
class Blob:
    data: bytes
    type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)

    def text(self, encoding: str = "utf-8") -> str:
        return self.data.decode(encoding, errors="replace")

    def __bytes__(self) -> bytes:
        return self.data


class MisoCommandResult:
    """One finished (or failed) run of a command.

    Every view is derived from the same immutable Outcome on each call;
    nothing is cached.
    """

    def __init__(self, outcome: Outcome, mime_type: str | None = None):
        self.spawn_result = outcome
        self.mime_type = mime_type

    def __repr__(self) -> str:
        return f"MisoCommandResult(args={self.spawn_result.args!r}, exit_code={self.exit_code!r})"

    @property
    def exit_code(self) -> int | None:
        """Exit status, or None if the process was signalled, timed out or never started."""
        return self.spawn_result.returncode

    @property
    def signal(self) -> int | None:
        return self.spawn_result.signal

    @property
    def error(self) -> BaseException | None:
        return self.spawn_result.error

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and self.error is None

    def as_text(self) -> str:
        """Return stdout as text, decoded with the platform's preferred encoding."""
        return _to_text(self.spawn_result.stdout)

    def stderr_text(self) -> str:
        return _to_text(self.spawn_result.stderr)

    def as_object(self):
        """Return stdout parsed as JSON. Raises json.JSONDecodeError on invalid input."""
        return json.loads(self.as_text())

    def as_blob(self, mime_type: str | None = None) -> Blob:
        """Return the raw stdout bytes tagged with *mime_type*."""
        stdout = self.spawn_result.stdout
        if isinstance(stdout, str):
            stdout = stdout.encode(self.spawn_result.encoding or "utf-8")
        return Blob(data=stdout, type=mime_type or self.mime_type or "")

    def as_lines(self) -> list[str]:
        """Return stdout split on "\\n". A trailing newline yields a trailing ""."""
        return self.as_text().split("\n")


def _to_text(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    return data.decode(locale.getpreferredencoding(False), errors="replace")
