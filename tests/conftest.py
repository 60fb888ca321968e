"""Shared pytest fixtures for Locked and Flow tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from lockedflow.timer.clock import ManualClock
from lockedflow.timer.engine import TimerEngine


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def clock():
    """Hand-driven clock starting at an arbitrary non-zero reading."""
    return ManualClock(start=1000.0)


@pytest.fixture
def engine(clock):
    """Fresh TimerEngine reading the manual clock."""
    return TimerEngine(clock)


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    """Redirect settings persistence into a temp directory."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("lockedflow.settings.SETTINGS_PATH", path)
    monkeypatch.setattr("lockedflow.settings.APP_SUPPORT_DIR", tmp_path)
    return path
