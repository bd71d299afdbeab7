"""
Logging setup shared by the API, the dev server and the tests.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s - %(name)s - [%(levelname)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_NOISY_LOGGERS = ("pymongo", "motor", "multipart", "python_multipart", "httpx")


def setup_logging(log_level: str = "INFO", log_file: str | None = None, log_to_console: bool = True) -> None:
    """
    Configure the root logger.

    Safe to call more than once: handlers installed by a previous call are replaced.
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_file_upload_api", False):
            root.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = []
    if log_to_console:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        handler._file_upload_api = True
        root.addHandler(handler)

    # Silence noisy libraries
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
