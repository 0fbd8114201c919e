from __future__ import annotations

# Allow running this file directly (python invoicedesk/main.py) by ensuring the project root is on sys.path
import os
import sys
if __package__ in (None, ""):
    sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from invoicedesk.core.paths import data_dir, db_path, log_path
from invoicedesk.core.settings import Settings, load_settings
from invoicedesk.data import db

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Console plus rotating file handler in the data directory."""
    settings = settings or Settings()
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)
    fmt = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)
    try:
        data_dir().mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_path(), maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError:
        logger.warning("Could not open log file %s; logging to console only", log_path())
    else:
        fh.setFormatter(fmt)
        root.addHandler(fh)


def main() -> None:
    from PySide6.QtWidgets import QApplication
    from invoicedesk.shell import AppWindow

    app = QApplication(sys.argv)
    data_dir().mkdir(parents=True, exist_ok=True)
    settings = load_settings()
    configure_logging(settings)
    db.configure(db_path())
    db.create_db_and_tables()
    logger.info("Database ready at %s", db_path())

    win = AppWindow(settings)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
