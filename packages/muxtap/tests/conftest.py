"""Shared fixtures for muxtap tests.

Orchestration tests never touch tmux: they run against RecordingExecutor and
compare the recorded command lines.
"""

import pytest

from muxtap.session import Muxtap
from muxtap.testing import RecordingExecutor
from muxtap.tmux import Tmux


@pytest.fixture
def fake_home(monkeypatch):
    """Relative HOME so expanded paths are easy to assert on."""
    monkeypatch.setenv("HOME", "muxtap")
    return "muxtap"


@pytest.fixture
def make_muxtap():
    """Build a Muxtap wired to a fresh RecordingExecutor.

    Returns a factory taking scripted outputs and fail_on prefixes, returning
    (muxtap, executor).
    """

    def factory(outputs=None, fail_on=None):
        executor = RecordingExecutor(outputs=list(outputs or []), fail_on=list(fail_on or []))
        return Muxtap(Tmux(executor), executor), executor

    return factory
