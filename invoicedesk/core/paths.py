from __future__ import annotations

import os
import sys
from pathlib import Path

APP_DIR_NAME = ".invoicedesk"
HOME_ENV = "INVOICEDESK_HOME"


def is_frozen() -> bool:
    return bool(getattr(sys, "frozen", False))


def base_path() -> Path:
    """Return the base path for bundled resources (fonts, icons).

    - In PyInstaller onefile, resources are extracted to sys._MEIPASS.
    - In dev, use the project root.
    """
    if is_frozen():
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            return Path(meipass)
    return Path(__file__).resolve().parents[2]


def resource_path(rel: str | Path) -> Path:
    """Resolve a resource path (e.g., 'assets/fonts/NotoSans-Regular.ttf') for current runtime."""
    return base_path() / Path(rel)


def data_dir() -> Path:
    """Directory for user-writable files: database, settings.json and logs.

    INVOICEDESK_HOME wins when set; otherwise ~/.invoicedesk.
    """
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / APP_DIR_NAME


def settings_path() -> Path:
    return data_dir() / "settings.json"


def db_path() -> Path:
    return data_dir() / "invoicedesk.db"


def log_path() -> Path:
    return data_dir() / "invoicedesk.log"


def default_export_dir() -> Path:
    return Path.home() / "Documents" / "InvoiceDesk"
