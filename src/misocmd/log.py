"""Timestamped output.

info() prints listing output to stdout; the other helpers are diagnostics on stderr.
"""

import sys
from datetime import datetime


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def info(msg: str) -> None:
    print(f"[{_timestamp()}] {msg}", flush=True)


def step(msg: str) -> None:
    print(f"[{_timestamp()}]   {msg}", file=sys.stderr, flush=True)


def success(msg: str) -> None:
    step(f"✓ {msg}")


def failure(msg: str) -> None:
    step(f"✗ {msg}")


def error(msg: str) -> None:
    print(f"[{_timestamp()}] ERROR: {msg}", file=sys.stderr, flush=True)
