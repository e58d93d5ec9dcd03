"""Test configuration for pytest."""

import os
import sys
from pathlib import Path

import pytest

# Render off-screen so the widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

# Ensure star_rating_view is importable
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for Qt tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
    # Don't quit - other tests might need it


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Point the style store (and log file) at a per-test directory."""
    path = tmp_path / "config"
    monkeypatch.setenv("STAR_RATING_CONFIG_DIR", str(path))
    return path
