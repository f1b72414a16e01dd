"""Shared fixtures for tmux_status tests."""

import signal

import pytest

from tmux_status import paths


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """Point the status directory at a per-test data home."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    paths.reset()
    yield
    paths.reset()


@pytest.fixture
def status_dir(tmp_path):
    return tmp_path / "data" / "tmux-worktree" / "status"


@pytest.fixture
def restore_signals():
    """Put SIGINT/SIGTERM handlers back the way they were."""
    saved = {s: signal.getsignal(s) for s in (signal.SIGINT, signal.SIGTERM)}
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


@pytest.fixture
def clock():
    """Manually advanced monotonic clock."""
    return FakeClock()


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
