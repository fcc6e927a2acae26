# src/posetracker/launcher.py
import logging
import sys
import traceback

from PySide6 import QtWidgets

from .utils.log import setup_logging

logger = logging.getLogger(__name__)


def fatal(msg: str) -> None:
    """Log ``msg``, show it in a dialog when Qt is usable, then exit with status 1."""
    logger.critical(msg)
    try:
        app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
        QtWidgets.QMessageBox.critical(None, "Pose Tracker – Startup Error", msg)
    except Exception:  # no display available: the log line above is all we can give
        logger.exception("Could not show the startup error dialog")
    sys.exit(1)


def main() -> int:
    setup_logging()
    logger.info("Launcher start")

    try:
        from .ui.main_window import MainWindow
    except Exception:
        fatal("Failed to import MainWindow:\n\n" + traceback.format_exc())

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)

    try:
        w = MainWindow()
    except Exception:
        fatal("Exception inside MainWindow.__init__:\n\n" + traceback.format_exc())

    app.main_window_ref = w  # keep strong ref
    w.show()
    logger.debug("Entering event loop")
    rc = app.exec()
    logger.info("Event loop exited rc=%s", rc)
    return rc


if __name__ == "__main__":
    sys.exit(main())
