from __future__ import annotations

import os

import pytest


@pytest.fixture(scope="session")
def qt_app():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    try:
        from PyQt6.QtWidgets import QApplication
    except Exception as exc:  # pragma: no cover - environment guard
        pytest.skip(f"PyQt6 unavailable: {exc}")
    app = QApplication.instance() or QApplication([])
    yield app
