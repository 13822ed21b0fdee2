"""Shared pytest fixtures for PomoTimer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pomotimer.settings import TimerConfig
from pomotimer.timer.engine import TimerEngine


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def settings_path(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("pomotimer.settings.SETTINGS_PATH", path)
    monkeypatch.setattr("pomotimer.settings.APP_SUPPORT_DIR", tmp_path)
    return path


@pytest.fixture
def engine():
    """Fresh TimerEngine with default config (25/5/15, long break every 4)."""
    eng = TimerEngine(TimerConfig())
    yield eng
    eng.shutdown()


@pytest.fixture
def engine_auto():
    """Fresh TimerEngine with both auto-start flags ON."""
    eng = TimerEngine(TimerConfig(auto_start_breaks=True, auto_start_pomodoros=True))
    yield eng
    eng.shutdown()
