"""Subprocess wrapper — the single mock seam for all tests."""

import os
import signal
import subprocess
from dataclasses import dataclass

from misocmd.options import SpawnOptions


@dataclass(frozen=True)
class Outcome:
    args: list[str]
    returncode: int | None
    stdout: bytes | str
    stderr: bytes | str
    signal: int | None = None
    error: BaseException | None = None
    encoding: str | None = None

    @property
    def timed_out(self) -> bool:
        return isinstance(self.error, subprocess.TimeoutExpired)


def _decode(data: bytes | None, encoding: str | None) -> bytes | str:
    data = data or b""
    if encoding is None:
        return data
    return data.decode(encoding, errors="replace")


def spawn(path: str, args: list[str], options: SpawnOptions | None = None) -> Outcome:
    """Run *path* with *args* and capture output. Never raises on process failure.

    Start errors and timeouts are reported on the Outcome (returncode None,
    plus error and/or signal).
    """
    options = options or SpawnOptions()
    argv = [path, *args]

    env = None
    if options.env is not None:
        env = {**os.environ, **options.env}

    stdin_data = options.input
    if isinstance(stdin_data, str):
        stdin_data = stdin_data.encode(options.encoding or "utf-8")

    try:
        proc = subprocess.run(
            argv,
            capture_output=True,
            timeout=options.timeout / 1000 if options.timeout else None,
            cwd=options.cwd,
            env=env,
            input=stdin_data,
            # no input: the child reads EOF instead of inheriting our stdin
            stdin=subprocess.DEVNULL if stdin_data is None else None,
        )
    except subprocess.TimeoutExpired as e:
        # subprocess.run kills the child before re-raising
        return Outcome(
            args=argv,
            returncode=None,
            stdout=_decode(e.stdout, options.encoding),
            stderr=_decode(e.stderr, options.encoding),
            signal=int(signal.SIGKILL),
            error=e,
            encoding=options.encoding,
        )
    except OSError as e:
        return Outcome(
            args=argv,
            returncode=None,
            stdout=_decode(b"", options.encoding),
            stderr=_decode(b"", options.encoding),
            error=e,
            encoding=options.encoding,
        )

    returncode = proc.returncode
    sig = None
    if returncode < 0:
        returncode, sig = None, -proc.returncode

    return Outcome(
        args=argv,
        returncode=returncode,
        stdout=_decode(proc.stdout, options.encoding),
        stderr=_decode(proc.stderr, options.encoding),
        signal=sig,
        encoding=options.encoding,
    )
