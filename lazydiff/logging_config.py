"""Logging configuration for lazydiff.

The interactive UI owns the terminal, so in TUI mode records only go to a log
file; otherwise they go to stderr.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "lazydiff.log"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "[%(name)s] %(message)s"


def log_file_path() -> Path:
    """Return the per-user log file location."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def setup_logging(debug: bool = False, tui_mode: bool = False) -> Path | None:
    """Configure the ``lazydiff`` logger.

    Args:
        debug: log DEBUG records instead of WARNING and above.
        tui_mode: write to the log file instead of stderr.

    Returns the log file path when a file handler was installed.
    """
    level = logging.DEBUG if debug else logging.WARNING
    package_logger = logging.getLogger("lazydiff")
    package_logger.setLevel(level)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = False

    if tui_mode:
        path = log_file_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler: logging.Handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        except OSError:
            package_logger.addHandler(logging.NullHandler())
            return None
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        package_logger.addHandler(file_handler)
        return path

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT if debug else CONSOLE_FORMAT))
    package_logger.addHandler(console_handler)
    return None
