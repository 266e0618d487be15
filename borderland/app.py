"""Application entry point and setup for the Borderland door game."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from borderland.core.config import load_config
from borderland.core.progress import JsonProgressStore
from borderland.core.puzzle import PuzzleGenerator
from borderland.core.session import SessionController
from borderland.ui.main_window import MainWindow
from borderland.ui.qt_scheduler import QtScheduler


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Initialize the application, load progress, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Borderland")
    app.setApplicationDisplayName("Alice in Borderland")

    config = load_config()
    store = JsonProgressStore(config.progress_file)
    controller = SessionController(
        store=store,
        scheduler=QtScheduler(app),
        generator=PuzzleGenerator(),
        config=config,
    )
    logging.info(
        "Loaded progress from %s: level %d unlocked, %d cleared",
        store.file_path,
        controller.progress.unlocked_level,
        controller.progress.cleared_count,
    )

    window = MainWindow(controller)
    window.resize(1100, 800)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
