"""Shared fixtures: an offscreen QApplication and an event-loop wait helper."""

from __future__ import annotations

import os
from typing import Callable

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QEventLoop, QTimer  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture()
def wait_ms(qapp: QApplication) -> Callable[[int], None]:
    """Run the Qt event loop for roughly *ms* milliseconds."""

    def _wait(ms: int) -> None:
        loop = QEventLoop()
        QTimer.singleShot(ms, loop.quit)
        loop.exec()

    return _wait
