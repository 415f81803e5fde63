"""Allow running SimplePomodoro as a module: python -m simplepomodoro."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import SimplePomodoroApp


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("SIMPLEPOMODORO_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    logging.getLogger("simplepomodoro").info("SimplePomodoro ready")

    app = QApplication(sys.argv)
    app.setApplicationName("SimplePomodoro")
    app.setOrganizationName("SimplePomodoro")

    window = SimplePomodoroApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
