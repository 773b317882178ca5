"""
Observability module.

Provides logging configuration, correlation ID tracking, structured log
helpers and request logging middleware.
"""

from weekly_vote.observability.correlation import get_correlation_id, set_correlation_id
from weekly_vote.observability.logger import configure_logging, get_logger
from weekly_vote.observability.middleware import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
]
