"""
Logging configuration for the prep kitchen service.

Usage:
    from prep_kitchen.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Every record carries the ID of the request that produced it (``-`` outside a
request), so the log lines of one import or prep list generation can be
grepped together:

    2026-10-19 06:02:11 - prep_kitchen.services.import_review - INFO - [9f1c...] Imported sales: ...

Environment variables:
    LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)
"""
import logging
import os
import sys
from contextvars import ContextVar
from typing import Optional

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

# Chatty below WARNING: HTTP clients used by openai, the AI SDKs, SQL echo
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "instructor", "sqlalchemy.engine")

# Set by RequestIDMiddleware for the duration of a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIDFilter(logging.Filter):
    """Stamp the current request ID onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def resolve_level(level: Optional[str] = None) -> str:
    """LOG_LEVEL (or the given level) upper-cased; anything unknown becomes INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.strip().upper()
    return level if level in VALID_LEVELS else "INFO"


def setup_logging(level: Optional[str] = None) -> str:
    """
    Configure logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, reads from LOG_LEVEL env var, defaults to INFO.

    Returns:
        The level name that was applied.
    """
    level = resolve_level(level)
    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIDFilter) for f in handler.filters):
            handler.addFilter(RequestIDFilter())

    logging.getLogger("prep_kitchen").setLevel(numeric_level)

    noisy_level = numeric_level if level == "DEBUG" else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    logging.getLogger(__name__).debug("Logging configured at %s level", level)
    return level
