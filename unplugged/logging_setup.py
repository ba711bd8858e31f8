import os
import logging
from logging.handlers import RotatingFileHandler

from .config import LOGGER_NAME, LOG_FILE
from .utils import ensure_dir


def setup_logger(log_file: str = LOG_FILE, level: int = logging.INFO) -> logging.Logger:
    ensure_dir(os.path.dirname(log_file))
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
        handler.setFormatter(fmt)
        logger.addHandler(handler)

    return logger


def get_logger(logger: logging.Logger | None = None) -> logging.Logger:
    return logger or logging.getLogger(LOGGER_NAME)
