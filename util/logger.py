# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from config.settings import settings

# Optional: capture warnings.* into logging
logging.captureWarnings(True)

TEXT_FMT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FMT = "%Y-%m-%dT%H:%M:%S%z"


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Restore levelname afterwards; the file handler formats the same record
        original = record.levelname
        record.levelname = f"{self.COLORS.get(original, self.RESET)}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _console_handler(level: int) -> logging.Handler:
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(ColoredFormatter(TEXT_FMT, datefmt=DATE_FMT))
    return ch


def _file_handler(level: int) -> logging.Handler:
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    fh = RotatingFileHandler(
        os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(TEXT_FMT, datefmt=DATE_FMT))
    return fh


def init_logger() -> logging.Logger:
    """
    Idempotent logger init:
    - Always logs to stdout (the host captures this).
    - Writes to logs/app.log only when settings.LOG_TO_FILE is True, rotated by size.
    - Respects settings.LOG_LEVEL.
    """
    root = logging.getLogger()
    if getattr(root, "_videotick_inited", False):
        return logging.getLogger(settings.LOGGER_NAME)

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)

    # Clear any default handlers to avoid duplicates
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(_console_handler(level))
    if settings.LOG_TO_FILE:
        root.addHandler(_file_handler(level))

    # One line per outbound call is too chatty next to the tick.* events
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)

    root._videotick_inited = True  # type: ignore[attr-defined]
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.debug("Logger initialized", extra={"component": "bootstrap"})
    return logger
