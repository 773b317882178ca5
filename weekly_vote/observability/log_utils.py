"""
Logging utilities for safe structured logging.

Helpers that turn vote sessions and arbitrary values into flat, printable
log context.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from datetime import date
from typing import Any


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Safely convert any value to a string for logging.

    Dates and timestamps render as ISO 8601; collections are summarized by
    size.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, date):
        val_str = value.isoformat()
    elif isinstance(value, str):
        val_str = value
    elif isinstance(value, (list, tuple)):
        val_str = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        val_str = f"dict({len(value)} keys)"
    else:
        val_str = str(value)

    if len(val_str) > max_length:
        return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
    return val_str


def session_log_context(session: Any) -> dict[str, Any]:
    """
    Flatten the identifying fields of a vote session for log extras.

    Args:
        session: VoteSessionModel (or any object with the same attributes)

    Returns:
        dict: session_id, week_start_date, is_active, is_completed
    """
    return {
        "session_id": getattr(session, "id", None),
        "week_start_date": getattr(session, "week_start_date", None),
        "is_active": getattr(session, "is_active", None),
        "is_completed": getattr(session, "is_completed", None),
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Context dict with arbitrary key-value pairs
    """
    safe_context = {
        key: safe_log_value(val) for key, val in context.items()
    }
    logger.log(level, message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log a failure at ERROR with the exception type and message as context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context dict
    """
    safe_context = {
        key: safe_log_value(val) for key, val in context.items()
    }
    safe_context.update({
        "error_type": type(exc).__name__,
        "error_msg": str(exc),
    })
    logger.error(message, extra=safe_context)
