"""Shared fixtures: one offscreen QApplication per session and a fresh editor per test."""
from __future__ import annotations

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from params_editor import ParamsEditor
from settings import EditorSettings


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def qapp():
    """Provide a single QApplication for the entire test session."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture()
def editor(qapp):
    """Create a ParamsEditor with default settings, independent of the user's config."""
    ed = ParamsEditor(settings=EditorSettings())
    yield ed
    ed.close()
    ed.deleteLater()
