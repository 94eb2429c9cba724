"""
Logging setup for PaperSnap.

Every record carries the id of the HTTP request it was emitted under
(``-`` outside a request), so a failed extraction or storage write can be
traced back to the upload or edit that caused it.
"""
import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Optional
import os

DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Opt-in so tests and one-off scripts do not write log files
ENABLE_FILE_LOGGING = os.getenv("ENABLE_FILE_LOGGING", "false").lower() == "true"

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

# Set by RequestIDMiddleware for the duration of each request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

# SDK transports log every HTTP call at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "google_genai")


class RequestIDFilter(logging.Filter):
    """Stamps records with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    enable_file_logging: bool = ENABLE_FILE_LOGGING
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path, defaults to logs/papersnap.log
        enable_file_logging: Also write DEBUG and above to the log file
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    request_filter = RequestIDFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.addFilter(request_filter)
    console_handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s - %(levelname)s - %(name)s [%(request_id)s] - %(message)s',
        datefmt='%H:%M:%S'
    ))
    root_logger.addHandler(console_handler)

    if enable_file_logging:
        path = Path(log_file) if log_file else LOG_DIR / "papersnap.log"
        path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(request_filter)
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d [%(request_id)s] - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; use with __name__."""
    return logging.getLogger(name)
