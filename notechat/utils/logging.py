"""Logging setup for notechat.

Everything goes to ``notechat.log`` in the configured logs directory,
rotated by size, and optionally to stderr. Modules only ever call
``logging.getLogger(__name__)``; this module wires the root logger once
at startup.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import List, Optional, Union

from ..config.settings import settings

__all__ = ["setup_logging", "get_log_path", "LOG_FILE_NAME", "LOG_DIR_ENV"]

LOG_FILE_NAME = "notechat.log"
LOG_DIR_ENV = "NOTECHAT_LOG_DIR"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty below WARNING; the event loop and HTTP stack log every request
THIRD_PARTY_LOGGERS = ("asyncio", "qasync", "httpx", "openai")

_log_path: Optional[Path] = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Union[Path, str, None] = None,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Route all application logging to a rotating file.

    Calling it again is a no-op unless ``force`` is set.

    Args:
        level: Root log level
        log_dir: Logs directory; falls back to $NOTECHAT_LOG_DIR, then
            ``settings.logs_dir``
        console: Also log to stderr
        max_bytes: Size at which the file is rotated
        backup_count: Rotated files to keep
        force: Replace an earlier configuration

    Returns:
        Path of the log file
    """
    global _log_path
    if _log_path is not None and not force:
        return _log_path

    directory = Path(log_dir or os.environ.get(LOG_DIR_ENV) or settings.logs_dir).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / LOG_FILE_NAME

    handlers: List[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.captureWarnings(True)

    third_party_level = max(level, logging.WARNING)
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    _log_path = log_path
    return log_path


def get_log_path() -> Optional[Path]:
    """Log file in use, or None before :func:`setup_logging` ran."""
    return _log_path
