"""Logging utilities for findpeople.

Modules use the standard pattern:

    import logging
    logger = logging.getLogger(__name__)

and the entry points call ``setup_logging()`` once. Output goes to a rotating
file under the config directory because the TUI owns the terminal; a stream
handler would draw over the screen.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from ..config import constants

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_log_file() -> Path:
    """Path of the findpeople log file, creating its directory."""
    constants.FINDPEOPLE_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return constants.FINDPEOPLE_CONFIG_DIR / constants.LOG_FILE_NAME


def _file_handler(level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        get_log_file(),
        maxBytes=constants.LOG_MAX_BYTES,
        backupCount=constants.LOG_BACKUP_COUNT,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    return handler


def setup_logging(level: Optional[str] = None) -> None:
    """Route the ``findpeople`` logger tree to the log file.

    Args:
        level: Level name; defaults to FINDPEOPLE_LOG_LEVEL, then INFO.
    """
    from ..config.settings import get_env_var

    level_name = (level or get_env_var("FINDPEOPLE_LOG_LEVEL", validate=False) or "INFO").upper()
    numeric = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger("findpeople")
    for existing in list(root.handlers):
        if isinstance(existing, RotatingFileHandler):
            root.removeHandler(existing)
            existing.close()

    root.addHandler(_file_handler(numeric))
    root.setLevel(numeric)
