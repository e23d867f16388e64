"""
Centralized logging configuration for PreorderWeb.

Every log record carries the name of the thread that produced it. Request
handling runs on the server's worker threads while the MongoDB order watcher
polls on its own thread, so the thread name is the quickest way to tell a
slow request from a slow feed refresh.

Log Format:
    2026-10-19 10:15:30 [INFO    ] [MainThread] preorder_web.app - Starting PreorderWeb
    2026-10-19 10:15:31 [DEBUG   ] [OrderWatcher] preorder_web.core.mongo_store - Order feed changed: 12 orders
    2026-10-19 10:15:32 [WARNING ] [Thread-3] preorder_web.modules.image_resolver - [ProductImageMissing] ...

Usage:
    # At application startup (create_app does this)
    setup_logging(log_level=logging.INFO, enable_file_logging=False)

    # In modules
    logger = get_logger(__name__)
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional


APP_LOGGER_NAME = "preorder_web"

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotating log files: 10 MB each, five kept
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

# Third-party loggers capped below the application level.
# pymongo logs every server heartbeat and connection checkout at DEBUG.
DEFAULT_LIBRARY_LEVELS: Dict[str, int] = {
    "pymongo": logging.WARNING,
}


class ThreadContextFilter(logging.Filter):
    """Adds ``thread_name`` to each record for the format string."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        return True


def _build_handler(
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
    thread_filter: logging.Filter,
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(thread_filter)
    return handler


def _rotating_file(path: Path) -> RotatingFileHandler:
    return RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )


def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
    library_levels: Optional[Dict[str, int]] = None,
) -> logging.Logger:
    """
    Configure the application logger.

    Sets up a console handler, optionally a rotating application log and a
    separate ERROR-only log, and caps the level of noisy third-party
    loggers. Calling it again replaces the previous handlers, so
    create_app() can run more than once in one process (tests do).

    Args:
        app_name: Name of the application logger (default: "preorder_web")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs next to this file)
        enable_file_logging: Whether to write log files (production only)
        library_levels: Logger name -> level overrides (default: DEFAULT_LIBRARY_LEVELS)

    Returns:
        The configured application logger
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False  # Prevent duplicate logs to root logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    thread_filter = ThreadContextFilter()

    logger.addHandler(_build_handler(
        logging.StreamHandler(sys.stdout), log_level, formatter, thread_filter
    ))

    if enable_file_logging:
        log_dir = Path(log_dir) if log_dir is not None else Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        app_log_file = log_dir / f"{app_name}.log"
        logger.addHandler(_build_handler(
            _rotating_file(app_log_file), log_level, formatter, thread_filter
        ))
        logger.addHandler(_build_handler(
            _rotating_file(log_dir / f"{app_name}_error.log"), logging.ERROR, formatter, thread_filter
        ))
        logger.info(f"File logging enabled: {app_log_file}")

    levels = DEFAULT_LIBRARY_LEVELS if library_levels is None else library_levels
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)

    logger.debug(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger under the application namespace.

    Example:
        # In services/order_service.py
        logger = get_logger(__name__)
        # Logger name: "preorder_web.services.order_service"
    """
    if not name.startswith(APP_LOGGER_NAME):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_thread_name(name: str) -> None:
    """Rename the current thread; the name shows in the [thread_name] field."""
    threading.current_thread().name = name
