from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

SUCCESS = "success"
INFO = "info"
ERROR = "error"

_LEVELS = {SUCCESS: logging.INFO, INFO: logging.INFO, ERROR: logging.WARNING}


class Notifier:
    """Non-blocking user notifications.

    The base class only logs; the main window subclasses it to show messages
    in the status bar.
    """

    def notify(self, level: str, message: str) -> None:
        logger.log(_LEVELS.get(level, logging.INFO), "[%s] %s", level, message)

    def success(self, message: str) -> None:
        self.notify(SUCCESS, message)

    def info(self, message: str) -> None:
        self.notify(INFO, message)

    def error(self, message: str) -> None:
        self.notify(ERROR, message)
