"""Shared test fixtures."""

import pytest


@pytest.fixture
def mock_process(monkeypatch):
    """Mock process.spawn for tests."""
    from misocmd import process

    calls = []
    responses = []

    def fake_spawn(path, args, options=None):
        calls.append(("spawn", path, args, options))
        if responses:
            return responses.pop(0)
        return process.Outcome(args=[path, *args], returncode=0, stdout=b"", stderr=b"")

    monkeypatch.setattr(process, "spawn", fake_spawn)

    return type("MockProcess", (), {"calls": calls, "responses": responses})()
