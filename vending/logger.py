import logging
import sys
from logging.handlers import RotatingFileHandler
from . import settings


def setup_logger(
    name: str = None, log_level: int | str = None, console_level: int | str = None
) -> logging.Logger:
    """
    Sends vending diagnostics to the rotating log file and, above
    `console_level`, to stderr.

    The console front end prints to stdout, so only warnings and errors
    reach the terminal by default; sales and stock changes go to the file.
    """
    log_level = log_level if log_level is not None else settings.LOG_LEVEL
    console_level = (
        console_level if console_level is not None else settings.CONSOLE_LOG_LEVEL
    )

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Only this logger's own handlers count; pytest hangs its own on the root
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        settings.LOG_DIR / settings.LOG_FILENAME,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    # Thread name tells concurrent vends apart in the file
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"
        )
    )
    logger.addHandler(file_handler)

    return logger
