# routescope/utils/logger.py
"""
Centralized logger utility.

Features:
- Unified logging format across all modules (scanner, scheduler, routes)
- Optional rotating file handler under settings.LOG_DIR
- Colorized console logs for readability during local runs
"""

import logging
from logging.handlers import RotatingFileHandler
import sys

from colorama import Fore, Style, init as color_init

from routescope.config import settings

color_init()

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColorFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": Fore.BLUE,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA,
    }

    def format(self, record):
        base = super().format(record)
        color = self.COLORS.get(record.levelname, "")
        return f"{color}{base}{Style.RESET_ALL}"


def get_logger(name: str = "routescope", level: int = None) -> logging.Logger:
    """
    Returns a configured logger instance.
    - Logs to the console and, when LOG_TO_FILE is set, to a rotating file
    - Uses uniform format for timestamps and levels
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger  # prevent double handlers

    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL)
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColorFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.LOG_DIR / "routescope.log", maxBytes=5 * 1024 * 1024, backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
