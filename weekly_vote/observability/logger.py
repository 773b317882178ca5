"""
Logger configuration.

Provides configured logger with ISO timestamps and correlation ID injection.

Dependencies: logging (stdlib), weekly_vote.observability.correlation
System role: Centralized logging configuration
"""

import logging
import sys

from weekly_vote.observability.correlation import CorrelationIdFilter


def configure_logging(level: str = "INFO") -> None:
    """
    Configure Python logging with ISO timestamp and structured format.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(CorrelationIdFilter())

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get configured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)
