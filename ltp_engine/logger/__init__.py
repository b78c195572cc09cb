import logging
import os
import sys
import threading
from logging.handlers import RotatingFileHandler

# Thread-safe initialization flag
_lock = threading.Lock()
_is_configured = False

LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_FILE_NAME = "ltp_engine.log"
MAX_LOG_SIZE = 5 * 1024 * 1024
BACKUP_COUNT = 3


class ColorFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    CYAN = "\x1b[36m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    RED = "\x1b[31m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"

    BASE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    DATE_FORMAT = "%H:%M:%S"

    COLORS = {
        logging.DEBUG: CYAN,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record):
        color = self.COLORS.get(record.levelno, self.RESET)
        formatter = logging.Formatter(
            f"{color}{self.BASE_FORMAT}{self.RESET}", datefmt=self.DATE_FORMAT
        )
        return formatter.format(record)


def _create_file_handler() -> RotatingFileHandler | None:
    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        handler = RotatingFileHandler(
            filename=os.path.join(LOG_DIR, LOG_FILE_NAME),
            maxBytes=MAX_LOG_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as exc:
        sys.stderr.write(f"Warning: could not create log file in '{LOG_DIR}': {exc}\n")
        return None

    # Plain format for files (no ANSI codes)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def setup_global_logging() -> None:
    """Configures the root logger with a colored console and a rotating file."""
    global _is_configured

    with _lock:
        if _is_configured:
            return

        log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
        log_level = getattr(logging, log_level_str, logging.INFO)

        root = logging.getLogger()
        root.setLevel(log_level)

        # Drop handlers installed by earlier basicConfig calls
        for handler in root.handlers[:]:
            root.removeHandler(handler)

        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(ColorFormatter())
        root.addHandler(console)

        file_handler = _create_file_handler()
        if file_handler is not None:
            root.addHandler(file_handler)

        _is_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    The main entry point: Returns a logger instance for a given name.
    Ensures global logging is configured exactly once.
    """
    if not _is_configured:
        setup_global_logging()
    return logging.getLogger(name)


__all__ = ["get_logger", "setup_global_logging", "ColorFormatter"]
