"""Logging setup for CommentWall with URL masking."""

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOG_DIR = PROJECT_ROOT / "logs"

LOGGER_NAME = "commentwall"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


class SensitiveDataFilter(logging.Filter):
    """Mask backend URLs in log messages."""

    URL_PATTERN = re.compile(r'https?://[^\s]+')

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.URL_PATTERN.sub('[URL_MASKED]', record.msg)
        return True


def setup_logger(
    log_level: str = "INFO",
    mask_logs: bool = True,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Set up the application logger. Call once at startup.

    Console handler plus a rotating file handler under ``log_dir``
    (defaults to LOG_DIR). A logger that already has handlers is
    returned unchanged.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    target_dir = log_dir or LOG_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    logger.setLevel(log_level)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: list[logging.Handler] = [
        logging.StreamHandler(),
        logging.handlers.RotatingFileHandler(
            target_dir / "commentwall.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        ),
    ]
    sensitive_filter = SensitiveDataFilter() if mask_logs else None

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        if sensitive_filter is not None:
            handler.addFilter(sensitive_filter)
        logger.addHandler(handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(LOGGER_NAME)
