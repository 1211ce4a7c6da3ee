"""QApplication bootstrap."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from canvascomposer.main_window import MainWindow


def main() -> None:
    """Launch the application."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())
