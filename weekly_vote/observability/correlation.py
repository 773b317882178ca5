"""
Correlation ID context manager.

Manages correlation ID propagation across async boundaries using contextvars,
so every log line of one trigger (HTTP request or scheduler tick) can be
grouped.

Dependencies: contextvars, logging
System role: Request tracing across service boundaries
"""

from contextvars import ContextVar
import logging
import uuid

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None)

    Returns:
        str: The correlation ID that was set
    """
    value = correlation_id or uuid.uuid4().hex
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    """
    Get current correlation ID from context.

    Returns:
        str: Current correlation ID ("" outside a request)
    """
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    """Clear correlation ID from context."""
    correlation_id_ctx.set("")


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation ID to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True
