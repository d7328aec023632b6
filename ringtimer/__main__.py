"""Allow running RingTimer as a module: python -m ringtimer."""

import sys

from PyQt6.QtWidgets import QApplication

from .app import RingTimerApp, make_app_icon
from .database.db import init_db
from .logger import configure_logging, log


def main() -> None:
    configure_logging()
    init_db()
    log.info("RingTimer starting")

    app = QApplication(sys.argv)
    app.setApplicationName("RingTimer")
    app.setOrganizationName("RingTimer")
    app.setWindowIcon(make_app_icon())

    window = RingTimerApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
