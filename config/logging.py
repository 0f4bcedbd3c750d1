"""
Logging setup for the Lambda functions and operator scripts.
Console output always; a rotating log file only when LOG_FILE is set.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from config.settings import get_settings, is_development, is_production

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Level override, defaults to LOG_LEVEL
        log_file: File path override, defaults to LOG_FILE
    """
    settings = get_settings()
    level = getattr(logging, (log_level or settings.log_level).upper())
    log_file = log_file or settings.log_file

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # The Lambda runtime installs its own handler; replace it so records
    # are not emitted twice.
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        ))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    _configure_module_loggers()

    get_logger("config.logging").info(
        f"Logging configured - Level: {logging.getLevelName(level)}, File: {log_file or 'Console only'}"
    )


def _configure_module_loggers() -> None:
    # supabase talks to PostgREST over httpx, which logs every request at INFO
    if is_production():
        for name in ("httpx", "httpcore", "hpack"):
            logging.getLogger(name).setLevel(logging.WARNING)

    if is_development():
        logging.getLogger("taskproxy").setLevel(logging.DEBUG)
        logging.getLogger("functions").setLevel(logging.DEBUG)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_performance(operation: str, duration_ms: float, **metadata) -> None:
    """Log how long a store call or health ping took."""
    meta_str = ", ".join(f"{k}={v}" for k, v in metadata.items())
    get_logger("performance").info(f"Performance: {operation} took {duration_ms:.2f}ms - {meta_str}")


def log_error_with_context(error: Exception, context: dict) -> None:
    """Log an exception together with the request context it happened in."""
    context_str = ", ".join(f"{k}={v}" for k, v in context.items())
    get_logger("errors").error(f"Error: {error.__class__.__name__}: {str(error)} - Context: {context_str}")


class LoggerMixin:
    """Gives a class a logger named after its module and class."""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(self.__class__.__module__ + "." + self.__class__.__name__)
