"""Application entry point and setup for the Schulte table trainer."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from schulte.core.config import load_config
from schulte.core.game import GameController
from schulte.core.scores import HighScoreStore
from schulte.ui.main_window import MainWindow
from schulte.ui.ticker import QtTicker


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load settings and high scores, then show the game window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Schulte")
    app.setApplicationDisplayName("Schulte Table")

    config = load_config()
    logging.info(f"High scores file: {config.scores_path}")
    score_store = HighScoreStore(config.scores_path)

    ticker = QtTicker(app)
    controller = GameController(
        score_store,
        ticker,
        grid_size=config.default_grid_size,
        tick_interval_ms=config.tick_interval_ms,
    )

    window = MainWindow(controller=controller, config=config)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.move(geometry.center() - window.rect().center())
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
